__version__ = '0.1.0'

import logging
import posixpath

from etcd_rest.client import Client


class Context(object):
    def __init__(self, client_conn=None, cwd='/'):
        self.client = client_conn
        self.cwd = cwd

CTX = Context()


def enable_logging():
    """
    Enable logging for the requests library, useful for diagnosing
    protocol issues at the API level.
    """
    import http.client as http_client

    # Dumps the request line, headers and body, and the response status
    # and headers. The response body is not logged.
    http_client.HTTPConnection.debuglevel = 1

    # You must initialize logging, otherwise you'll not see debug output.
    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG)

    requests_log = logging.getLogger("urllib3")
    requests_log.setLevel(logging.DEBUG)
    requests_log.propagate = True


def translate_path(path):
    """
    Use the global context to fix relative paths within the current
    working directory
    """
    global CTX
    if path is None:
        return CTX.cwd
    if path.startswith('/'):
        return path
    return posixpath.join(CTX.cwd, path)


def connect(**kwargs):
    """
    Set the global context using arguments for a standard client connection.
    """
    global CTX
    CTX = Context(Client(**kwargs))


def use(client_conn=None, cwd='/'):
    """
    Set the global context using a pre-existing client and current working directory.
    """
    global CTX
    if client_conn is None:
        client_conn = Client()
    assert(isinstance(client_conn, Client))
    CTX = Context(client_conn, cwd)


def cwd():
    """
    Get the current working directory.
    """
    assert(CTX.client is not None)
    return CTX.cwd


def node():
    """
    Get a reference to the node of the current working directory.
    """
    assert(CTX.client is not None)
    return CTX.client.get(CTX.cwd)


def ls(path=None):
    """
    Get a summary listing of the current working directory or the specified path
    """
    assert(CTX.client is not None)

    d = CTX.client.directory.list(translate_path(path), sorted=True).node

    def dir_entry(n):
        if n.is_directory:
            return '{}/'.format(n.name)
        else:
            return '{}={}'.format(n.name, n.value)

    return [dir_entry(n) for n in d.children]


def cd(path):
    """
    Change the current working directory
    """
    global CTX
    assert(CTX.client is not None)

    n = CTX.client.get(translate_path(path))

    if n.is_directory:
        CTX.cwd = n.key
        return CTX.cwd
    else:
        raise ValueError('{} is not a directory'.format(n.key))


def mkdir(path):
    """
    Make a new directory at the specified path
    """
    global CTX
    assert(CTX.client is not None)

    n = CTX.client.make_dir(translate_path(path))
    return n.key


def get(path=None):
    """
    Get the value at the specified path
    """
    global CTX
    assert(CTX.client is not None)
    return CTX.client.get(translate_path(path)).value


def set(path, value):
    """
    Set a value at the specified path
    """
    global CTX
    assert(CTX.client is not None)
    n = CTX.client.node.set(translate_path(path), value).node
    return '{}={}'.format(n.key, n.value)


def rm(path):
    """
    Remove a node at the specified path
    """
    global CTX
    assert(CTX.client is not None)
    if path is None:
        raise ValueError('rm() requires a path argument')
    n = CTX.client.remove(translate_path(path))
    return '{} deleted'.format(n.key)
