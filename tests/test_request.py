import unittest

from etcd_rest.client import Client
from etcd_rest.exceptions import EtcdConfigurationError
from etcd_rest.request import (AtomicOp, Param, RequestBuilder, DIR,
                               PREV_EXIST, PREV_INDEX, PREV_VALUE, RECURSIVE,
                               SORTED, TTL, VALUE, WAIT, WAIT_INDEX,
                               form_body, to_pair)


class RequestBuilderTestCase(unittest.TestCase):
    def setUp(self):
        self.builder = RequestBuilder('http://127.0.0.1:2379')

    def test_param_pairs(self):
        self.assertEqual(to_pair(Param(DIR, True)), ('dir', 'true'))
        self.assertEqual(to_pair(Param(RECURSIVE, False)), ('recursive', 'false'))
        self.assertEqual(to_pair(Param(SORTED, True)), ('sorted', 'true'))
        self.assertEqual(to_pair(Param(VALUE, 'Job1')), ('value', 'Job1'))
        self.assertEqual(to_pair(Param(WAIT, True)), ('wait', 'true'))
        self.assertEqual(to_pair(Param(WAIT_INDEX, 12)), ('waitIndex', '12'))
        self.assertEqual(to_pair(Param(TTL, 5)), ('ttl', '5'))

    def test_atomic_pairs(self):
        self.assertEqual(to_pair(AtomicOp(PREV_VALUE, 'old')), ('prevValue', 'old'))
        self.assertEqual(to_pair(AtomicOp(PREV_INDEX, 7)), ('prevIndex', '7'))
        self.assertEqual(to_pair(AtomicOp(PREV_EXIST, False)), ('prevExists', 'false'))

    def test_raw_pairs(self):
        self.assertEqual(to_pair(('custom', 3)), ('custom', '3'))

    def test_unknown_kinds(self):
        with self.assertRaises(ValueError):
            Param(PREV_VALUE, 'x')
        with self.assertRaises(ValueError):
            AtomicOp(DIR, True)

    def test_url(self):
        self.assertEqual(self.builder.url('keys', '/queue'),
                         'http://127.0.0.1:2379/v2/keys/queue')
        self.assertEqual(self.builder.url('keys', 'queue/2'),
                         'http://127.0.0.1:2379/v2/keys/queue/2')
        self.assertEqual(self.builder.url('keys', '/'),
                         'http://127.0.0.1:2379/v2/keys/')
        self.assertEqual(self.builder.url('stats', '/leader'),
                         'http://127.0.0.1:2379/v2/stats/leader')
        self.assertEqual(self.builder.url('version'),
                         'http://127.0.0.1:2379/v2/version')

    def test_url_query_order(self):
        url = self.builder.url('keys', '/queue',
                               [Param(SORTED, True), Param(RECURSIVE, True),
                                AtomicOp(PREV_INDEX, 3)])
        self.assertEqual(
            url,
            'http://127.0.0.1:2379/v2/keys/queue?sorted=true&recursive=true&prevIndex=3')

    def test_url_quoting(self):
        url = self.builder.url('keys', '/my dir/a&b',
                               [AtomicOp(PREV_VALUE, 'x y&z')])
        self.assertEqual(
            url,
            'http://127.0.0.1:2379/v2/keys/my%20dir/a%26b?prevValue=x+y%26z')

    def test_unknown_object(self):
        with self.assertRaises(EtcdConfigurationError):
            self.builder.url('machines', '/')

    def test_invalid_prefix(self):
        with self.assertRaises(EtcdConfigurationError):
            RequestBuilder('http://:2379').url('keys', '/a')
        with self.assertRaises(EtcdConfigurationError):
            RequestBuilder('http://127.0.0.1:notaport').url('keys', '/a')

    def test_form_body(self):
        body = form_body([Param(VALUE, 'a b'), Param(TTL, 60)])
        self.assertEqual(body, 'value=a+b&ttl=60')
        self.assertEqual(form_body([Param(DIR, True)]), 'dir=true')
        self.assertEqual(form_body(None), '')


class ClientConfigurationTestCase(unittest.TestCase):
    def test_no_host(self):
        with self.assertRaises(EtcdConfigurationError):
            Client(host='', session=object())

    def test_bad_port(self):
        with self.assertRaises(EtcdConfigurationError):
            Client(host='127.0.0.1', port=99999, session=object())

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            Client(host='127.0.0.1', port='abc', session=object())

    def test_ssl_prefix(self):
        c = Client(host='etcd.example.com', port=2379, is_ssl=True,
                   session=object())
        self.assertEqual(c.prefix, 'https://etcd.example.com:2379')


def suite():
    loader = unittest.TestLoader()
    return unittest.TestSuite([
        loader.loadTestsFromTestCase(RequestBuilderTestCase),
        loader.loadTestsFromTestCase(ClientConfigurationTestCase),
    ])
