import unittest
import random

from urllib.parse import urlsplit

from etcd_rest.client import Client
from etcd_rest.exceptions import EtcdUnsuccessfulError

from fake_etcd import FakeEtcd


class TestCase(unittest.TestCase):
    def setUp(self):
        self.fake = FakeEtcd()
        self.client = Client(host='127.0.0.1', port=2379, session=self.fake)

        # Track nodes for cleanup
        self.nodes = []

    def tearDown(self):
        for n in self.nodes:
            try:
                if n.is_directory:
                    self.client.directory.delete_recursive(n.key)
                else:
                    self.client.node.delete(n.key)
            except EtcdUnsuccessfulError as e:
                # Already removed by the test itself
                if e.status_code != 404:
                    raise

        self.nodes = []
        self.client = None

    def random_key(self, basename='key'):
        return '{}{}'.format(basename, random.randint(1, 100000))

    def random_node(self, value=0, ttl=None):
        k = self.random_key('/testnode')
        args = {
            'path': k,
            'value': value
        }
        if ttl:
            args['ttl'] = ttl

        node = self.client.node.create_only(**args).node
        self.nodes.append(node)
        assert(not node.is_directory)
        return node

    def random_dir(self, base='/'):
        k = self.random_key('{}testdir_{}'.format(base, random.randint(1, 100000)))
        node = self.client.directory.create(k).node
        assert(node.is_directory)
        # Children are removed along with their parent.
        if base == '/':
            self.nodes.append(node)
        return node

    def last_query(self):
        """Return the (path, query) of the last request sent to the store."""
        parts = urlsplit(self.fake.last_request[1])
        return (parts.path, parts.query)
