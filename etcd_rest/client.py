import logging

import requests
import semver
import simplejson

from requests.exceptions import RequestException

from etcd_rest import config
from etcd_rest.directory_ops import DirectoryOps
from etcd_rest.exceptions import (EtcdConfigurationError, EtcdTransportError,
                                  EtcdUnsuccessfulError)
from etcd_rest.node_ops import NodeOps
from etcd_rest.request import (FORM_CONTENT_TYPE, O_KEYS, RequestBuilder,
                               form_body)
from etcd_rest.response import from_response
from etcd_rest.server_ops import ServerOps
from etcd_rest.stat_ops import StatOps

logging.getLogger('urllib3').setLevel(logging.WARN)

_logger = logging.getLogger(__name__)

_ACCEPT_JSON = 'application/json'


def _unsuccessful(response):
    """Build the error for a non-2xx response, attaching the fields of the
    store's error document when the body has one."""

    try:
        json = simplejson.loads(response.text)
    except simplejson.JSONDecodeError:
        _logger.debug("Error body of (%d) isn't JSON: [%s]",
                      response.status_code, response.text)
        json = None

    if not isinstance(json, dict):
        return EtcdUnsuccessfulError(response.status_code)

    return EtcdUnsuccessfulError(response.status_code,
                                 error_code=json.get('errorCode'),
                                 error_message=json.get('message'),
                                 cause=json.get('cause'),
                                 index=json.get('index'))


class Client(object):
    """The main channel of functionality for the client. Holds the server
    address and the HTTP session, and provides functions via properties and
    the flat operations below. Creating a client doesn't touch the network.

    :param host: Hostname or IP of server
    :type host: string

    :param port: Port of server
    :type port: int

    :param is_ssl: Whether to use 'http://' or 'https://'.
    :type is_ssl: bool

    :param ssl_do_verify: Whether to verify the certificate hostname.
    :type ssl_do_verify: bool or None

    :param ssl_ca_bundle_filepath: A bundle of rootCAs for verifications.
    :type ssl_ca_bundle_filepath: string or None

    :param ssl_client_cert_filepath: A client certificate, for authentication.
    :type ssl_client_cert_filepath: string or None

    :param ssl_client_key_filepath: A client key, for authentication.
    :type ssl_client_key_filepath: string or None

    :param timeout: Seconds before a request is abandoned; None waits forever.
    :type timeout: float or None

    :param session: Session to send requests through; a new one by default.
    :type session: :class:`requests.Session` or None

    :raises: :class:`etcd_rest.exceptions.EtcdConfigurationError`
    """

    def __init__(self,
                 host=config.HOST,
                 port=config.PORT,
                 is_ssl=config.IS_SSL, ssl_do_verify=config.SSL_DO_VERIFY,
                 ssl_ca_bundle_filepath=config.SSL_CA_BUNDLE_FILEPATH,
                 ssl_client_cert_filepath=config.SSL_CLIENT_CRT_FILEPATH,
                 ssl_client_key_filepath=config.SSL_CLIENT_KEY_FILEPATH,
                 timeout=config.TIMEOUT_S,
                 session=None):

        if not host:
            raise EtcdConfigurationError("A host is required.")

        if ssl_do_verify is not None:
            _logger.debug("SSL: Explicit verify setting given: [%s]", ssl_do_verify)
            self.__ssl_verify = ssl_do_verify

        elif ssl_ca_bundle_filepath is not None:
            _logger.debug("SSL: We'll be verifying against a CA bundle: [%s]",
                          ssl_ca_bundle_filepath)

            self.__ssl_verify = ssl_ca_bundle_filepath

        else:
            _logger.debug("SSL: We'll verify the CA certificate, by default.")

            self.__ssl_verify = True

        if ssl_client_cert_filepath is None:
            _logger.debug("SSL: No client key/certificate will be used.")
            self.__ssl_cert = None

        elif ssl_client_key_filepath is not None:
            _logger.debug("SSL: Client key and certificate will be used: "
                          "KEY=[%s] CERTIFICATE=[%s]",
                          ssl_client_key_filepath, ssl_client_cert_filepath)

            self.__ssl_cert = \
                (ssl_client_cert_filepath,
                 ssl_client_key_filepath)

        else:
            _logger.debug("SSL: Client certificate will be used (without a "
                          "key): [%s]", ssl_client_cert_filepath)

            self.__ssl_cert = ssl_client_cert_filepath

        scheme = 'http' if is_ssl is False else 'https'
        self.__prefix = ('%s://%s:%s' % (scheme, host, port))
        _logger.debug("PREFIX= [%s]", self.__prefix)

        self.__builder = RequestBuilder(self.__prefix)

        # Fail now, not on the first request, if the address is unusable.
        self.__builder.url(O_KEYS)

        self.__timeout = timeout
        self.__session = session if session is not None else requests.Session()

    def __str__(self):
        return ('<ETCD %s>' % (self.__prefix))

    def check_version(self):
        """Fetch the server version and make sure it serves the v2 API.

        :returns: Version
        :rtype: string

        :raises: :class:`etcd_rest.exceptions.EtcdConfigurationError`
        """

        version = self.server.get_version()
        _logger.debug("ETCD Version: %s", version)

        try:
            parsed = semver.Version.parse(version)
        except ValueError as e:
            raise EtcdConfigurationError(
                "Unrecognized server version: %s" % (version,)) from e

        if parsed.compare(config.MINIMUM_SERVER_VERSION) < 0:
            raise EtcdConfigurationError(
                "We don't support an etcd version older than %s: %s" %
                (config.MINIMUM_SERVER_VERSION, version))

        return version

    def send(self, verb, path, object_name=O_KEYS, parameters=None, data=None,
             timeout=None, return_raw=False):
        """Build and execute one request.

        :param verb: Verb of request ('get', 'put', 'post', 'delete')
        :type verb: string

        :param path: Key path
        :type path: string

        :param object_name: Base object: 'keys', 'stats' or 'version'
        :type object_name: string

        :param parameters: Values passed via the URL query, in order.
        :type parameters: sequence or None

        :param data: Values passed as a form-encoded body, in order.
        :type data: sequence or None

        :param timeout: Seconds for this request; defaults to the client's.
        :type timeout: float or None

        :param return_raw: Whether to return the Requests response instead of
                           a :class:`etcd_rest.response.Result`.
        :type return_raw: bool

        :raises: :class:`etcd_rest.exceptions.EtcdUnsuccessfulError`,
                 :class:`etcd_rest.exceptions.EtcdTransportError`,
                 :class:`etcd_rest.exceptions.EtcdDecodeError`,
                 :class:`etcd_rest.exceptions.EtcdMalformedResponseError`
        :rtype: :class:`etcd_rest.response.Result`
        """

        url = self.__builder.url(object_name, path, parameters)

        headers = {'Accept': _ACCEPT_JSON}
        body = None
        if data:
            body = form_body(data)
            headers['Content-Type'] = FORM_CONTENT_TYPE

        if timeout is None:
            timeout = self.__timeout

        _logger.debug("Request(%s)=[%s] data_keys=[%s]",
                      verb, url, [item[0] for item in data or ()])

        try:
            r = self.__session.request(verb.upper(), url,
                                       data=body,
                                       headers=headers,
                                       timeout=timeout,
                                       verify=self.__ssl_verify,
                                       cert=self.__ssl_cert)
        except RequestException as e:
            _logger.debug("Transport error with [%s] [%s]: %s",
                          self.__prefix, e.__class__.__name__, str(e))
            raise EtcdTransportError(
                "%s %s failed: %s" % (verb.upper(), url, e)) from e

        if not 200 <= r.status_code < 300:
            raise _unsuccessful(r)

        # Pass back the requests library response object
        if return_raw is True:
            return r

        return from_response(r)

    # Flat operations

    def get(self, key):
        """Return the node at `key`; for a directory, with its immediate
        children.

        :rtype: :class:`etcd_rest.response.Node`
        """

        return self.node.get(key).node

    def list(self, dir):
        """Alias of :meth:`get` for directories."""

        return self.get(dir)

    def set(self, key, value):
        """Unconditionally write a value.

        :returns: The node it replaced, or None if the key was new
        :rtype: :class:`etcd_rest.response.Node` or None
        """

        return self.node.set(key, value).previous_node

    def make_dir(self, name):
        """Create an empty directory.

        :rtype: :class:`etcd_rest.response.Node`
        """

        return self.directory.create(name).node

    def remove(self, key):
        """Delete a key.

        :returns: The node as it was before deletion
        :rtype: :class:`etcd_rest.response.Node`
        """

        return self.node.delete(key).previous_node

    def remove_dir(self, dir, recursive=False):
        """Delete a directory, and with `recursive` everything under it.

        :returns: The directory as it was before deletion
        :rtype: :class:`etcd_rest.response.Node`
        """

        return self.directory.delete(dir, recursive=recursive).previous_node

    def index_append(self, dir, value):
        """Add a value under `dir` with a store-assigned ordered key.

        :returns: The new child
        :rtype: :class:`etcd_rest.response.Node`
        """

        return self.directory.append(dir, value).node

    def index_list(self, dir):
        """Return `dir` with its children ordered by key.

        :rtype: :class:`etcd_rest.response.Node`
        """

        return self.directory.ordered(dir).node

    def watch(self, key, wait_index=None, recursive=False, timeout=None):
        """Block until `key` changes and return the full result.

        :rtype: :class:`etcd_rest.response.Result`
        """

        return self.node.wait(key, wait_index=wait_index, recursive=recursive,
                              timeout=timeout)

    @property
    def session(self):
        return self.__session

    @property
    def prefix(self):
        """Return the URL prefix for the server.

        :rtype: string
        """

        return self.__prefix

    @property
    def directory(self):
        """Return an instance of the class having the directory functionality.

        :rtype: :class:`etcd_rest.directory_ops.DirectoryOps`
        """

        try:
            return self.__directory
        except AttributeError:
            self.__directory = DirectoryOps(self)
            return self.__directory

    @property
    def node(self):
        """Return an instance of the class having the general node
        functionality.

        :rtype: :class:`etcd_rest.node_ops.NodeOps`
        """

        try:
            return self.__node
        except AttributeError:
            self.__node = NodeOps(self)
            return self.__node

    @property
    def server(self):
        """Return an instance of the class having the server functionality.

        :rtype: :class:`etcd_rest.server_ops.ServerOps`
        """

        try:
            return self.__server
        except AttributeError:
            self.__server = ServerOps(self)
            return self.__server

    @property
    def stat(self):
        """Return an instance of the class having the stat functionality.

        :rtype: :class:`etcd_rest.stat_ops.StatOps`
        """

        try:
            return self.__stat
        except AttributeError:
            self.__stat = StatOps(self)
            return self.__stat
