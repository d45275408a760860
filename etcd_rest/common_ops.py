from etcd_rest.response import decode_json


class CommonOps(object):
    """Base class for the groups of functionality hung off the client.

    :param client: Client instance
    :type client: :class:`etcd_rest.client.Client`
    """

    def __init__(self, client):
        self.__client = client

    @property
    def client(self):
        return self.__client

    def get_fq_node_path(self, path):
        """Return the path as an absolute key."""

        return '/' + (path or '').lstrip('/')

    def get_text(self, object_name, path=''):
        """Issue a GET and return the body as text, without decoding."""

        response = self.client.send('get', path, object_name=object_name,
                                    return_raw=True)
        return response.text

    def get_json(self, object_name, path=''):
        """Issue a GET and return the decoded JSON document."""

        response = self.client.send('get', path, object_name=object_name,
                                    return_raw=True)
        return decode_json(response)
