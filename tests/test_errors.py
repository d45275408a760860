import unittest

import requests

import etcd_rest.errors

from etcd_rest.exceptions import (EtcdDecodeError, EtcdEmptyResponseError,
                                  EtcdError, EtcdMalformedResponseError,
                                  EtcdTransportError, EtcdUnsuccessfulError)

import common
from fake_etcd import make_response


class ErrorTestCase(common.TestCase):
    def test_unsuccessful_without_body(self):
        self.fake.script(make_response(500, 'internal error'))

        with self.assertRaises(EtcdUnsuccessfulError) as cm:
            self.client.get('/any')
        self.assertEqual(cm.exception.status_code, 500)
        self.assertIsNone(cm.exception.error_code)
        self.assertIsNone(cm.exception.error_message)

    def test_unsuccessful_is_never_a_decode_error(self):
        for text in ('', '{not json', '[1, 2]'):
            self.fake.script(make_response(503, text))
            with self.assertRaises(EtcdUnsuccessfulError) as cm:
                self.client.set('/any', 'v')
            self.assertNotIsInstance(cm.exception, EtcdDecodeError)
            self.assertEqual(cm.exception.status_code, 503)

    def test_unsuccessful_with_error_document(self):
        self.fake.script(make_response(
            412,
            '{"errorCode":101,"message":"Compare failed",'
            '"cause":"[a != b]","index":8}'))

        with self.assertRaises(EtcdUnsuccessfulError) as cm:
            self.client.node.update_if_value('/any', 'c', 'a')
        e = cm.exception
        self.assertEqual(e.status_code, 412)
        self.assertEqual(e.error_code, etcd_rest.errors.TEST_FAILED)
        self.assertEqual(e.error_name, 'TEST_FAILED')
        self.assertEqual(e.error_message, 'Compare failed')
        self.assertEqual(e.cause, '[a != b]')
        self.assertEqual(e.index, 8)
        self.assertIn('Compare failed', str(e))

    def test_invalid_json(self):
        self.fake.script(make_response(200, '{"action": "get", '))

        with self.assertRaises(EtcdDecodeError) as cm:
            self.client.get('/any')
        self.assertIsNotNone(cm.exception.__cause__)

    def test_empty_body(self):
        self.fake.script(make_response(200, ''))

        with self.assertRaises(EtcdEmptyResponseError):
            self.client.watch('/any')

    def test_missing_action(self):
        self.fake.script(make_response(
            200, '{"node": {"key": "/any", "createdIndex": 1, "modifiedIndex": 1}}'))

        with self.assertRaises(EtcdMalformedResponseError) as cm:
            self.client.get('/any')
        self.assertEqual(cm.exception.field, 'action')

    def test_missing_node_field(self):
        self.fake.script(make_response(
            200, '{"action": "get", "node": {"key": "/any", "createdIndex": 1}}'))

        with self.assertRaises(EtcdMalformedResponseError) as cm:
            self.client.get('/any')
        self.assertEqual(cm.exception.field, 'modifiedIndex')

    def test_connection_error(self):
        cause = requests.exceptions.ConnectionError('Connection refused')
        self.fake.script(cause)

        with self.assertRaises(EtcdTransportError) as cm:
            self.client.get('/any')
        self.assertIs(cm.exception.__cause__, cause)

    def test_no_retry(self):
        self.fake.script(requests.exceptions.ConnectionError('refused'))

        with self.assertRaises(EtcdTransportError):
            self.client.set('/any', 'v')
        self.assertEqual(len(self.fake.requests), 1)

    def test_common_base(self):
        for cls in (EtcdUnsuccessfulError, EtcdTransportError,
                    EtcdDecodeError, EtcdMalformedResponseError):
            self.assertTrue(issubclass(cls, EtcdError))

    def test_headers_read_on_success(self):
        self.fake.script(make_response(
            200,
            '{"action": "get", "node": {"key": "/any", "createdIndex": 4, '
            '"modifiedIndex": 6, "value": "v"}}',
            headers={'X-Etcd-Index': '35', 'X-Raft-Index': '5398',
                     'X-Raft-Term': '1'}))

        r = self.client.node.get('/any')
        self.assertEqual((r.etcd_index, r.raft_index, r.raft_term),
                         (35, 5398, 1))
        self.assertEqual(r.node.value, 'v')


def suite():
    return unittest.TestLoader().loadTestsFromTestCase(ErrorTestCase)
