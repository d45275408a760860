import logging

import dateutil.parser
import simplejson

import etcd_rest.exceptions

from collections import namedtuple

from etcd_rest.exceptions import EtcdMalformedResponseError
from etcd_rest.headers import (EtcdIndexHeader, RaftIndexHeader,
                               RaftTermHeader, header_value)


_logger = logging.getLogger(__name__)


A_GET = 'get'
A_SET = 'set'
A_CREATE = 'create'
A_UPDATE = 'update'
A_DELETE = 'delete'
A_EXPIRE = 'expire'
A_CAS = 'compareAndSwap'
A_CAD = 'compareAndDelete'

_DELETE_ACTIONS = (A_DELETE, A_CAD, A_EXPIRE)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _required(json, field, check, type_name):
    try:
        value = json[field]
    except KeyError:
        raise EtcdMalformedResponseError(field, 'is missing')

    if not check(value):
        raise EtcdMalformedResponseError(
            field, 'should be {}, got {!r}'.format(type_name, value))

    return value


def _optional(json, field, check, type_name, default=None):
    value = json.get(field)
    if value is None:
        return default

    if not check(value):
        raise EtcdMalformedResponseError(
            field, 'should be {}, got {!r}'.format(type_name, value))

    return value


def _child_objects(json):
    """Return the raw `nodes` list of a node object, or None."""

    children = json.get('nodes')
    if children is None:
        return None

    if not isinstance(children, list):
        raise EtcdMalformedResponseError(
            'nodes', 'should be a list, got {!r}'.format(children))

    return children


_NODE_FIELDS = ['key', 'created_index', 'modified_index', 'value', 'ttl',
                'expiration', 'dir', 'nodes']


class Node(namedtuple('Node', _NODE_FIELDS)):
    """One key or directory of the store at a point in time.

    `nodes` holds the children of a directory when the response included
    them, in the order the store returned them.
    """

    __slots__ = ()

    @classmethod
    def from_json(cls, json):
        """Decode a node object, including any nested children.

        Works bottom-up with an explicit stack, so the depth of the tree is
        only bounded by memory.

        :param json: Decoded JSON object
        :type json: dict

        :raises: :class:`etcd_rest.exceptions.EtcdMalformedResponseError`
        :rtype: :class:`etcd_rest.response.Node`
        """

        pending = [(json, False)]
        built = []

        while pending:
            (obj, expanded) = pending.pop()

            if not isinstance(obj, dict):
                raise EtcdMalformedResponseError(
                    'node', 'should be an object, got {!r}'.format(obj))

            children = _child_objects(obj)

            if not expanded:
                pending.append((obj, True))
                for child in reversed(children or []):
                    pending.append((child, False))
                continue

            nodes = None
            if children is not None:
                split = len(built) - len(children)
                nodes = tuple(built[split:])
                del built[split:]

            built.append(cls._from_fields(obj, nodes))

        return built[0]

    @classmethod
    def _from_fields(cls, json, nodes):
        key = _required(json, 'key',
                        lambda v: isinstance(v, str) and v.startswith('/'),
                        'an absolute path')
        created_index = _required(json, 'createdIndex', _is_int, 'an integer')
        modified_index = _required(json, 'modifiedIndex', _is_int,
                                   'an integer')

        value = _optional(json, 'value', lambda v: isinstance(v, str),
                          'a string')
        ttl = _optional(json, 'ttl', _is_int, 'an integer')
        expiration = _optional(json, 'expiration', lambda v: isinstance(v, str),
                               'a string')
        is_dir = _optional(json, 'dir', lambda v: isinstance(v, bool),
                           'a boolean', default=False)

        if is_dir and value is not None:
            raise EtcdMalformedResponseError(
                'value', 'present on directory [{}]'.format(key))

        if not is_dir and nodes is not None:
            raise EtcdMalformedResponseError(
                'nodes', 'present on non-directory [{}]'.format(key))

        return cls(key, created_index, modified_index, value, ttl, expiration,
                   is_dir, nodes)

    @property
    def is_directory(self):
        return self.dir

    @property
    def children(self):
        """Children of a directory, or an empty tuple.

        :rtype: tuple
        """

        return self.nodes or ()

    @property
    def name(self):
        return self.key.rstrip('/').split('/')[-1]

    @property
    def is_hidden(self):
        return self.name.startswith('_')

    @property
    def expiration_time(self):
        """The expiration as an aware datetime, or None.

        :rtype: :class:`datetime.datetime` or None
        """

        if self.expiration is None:
            return None
        return dateutil.parser.isoparse(self.expiration)

    def to_document(self):
        """Render the subtree as plain nested dicts. Leaves map to their
        values and directories map to dicts of their children.

        :rtype: dict or string
        """

        if not self.dir:
            return self.value

        # Iterative for the same reason as from_json().
        root = {}
        pending = [(self, root)]
        while pending:
            (node, doc) = pending.pop()
            for child in node.children:
                if child.dir:
                    doc[child.name] = {}
                    pending.append((child, doc[child.name]))
                else:
                    doc[child.name] = child.value

        return root

    def __repr__(self):
        node_count_phrase = (len(self.nodes) if self.nodes is not None
                             else '<NA>')
        ttl_phrase = '{}: {}'.format(self.ttl, self.expiration)
        return '<NODE({}) IS_HID=[{}] IS_DIR=[{}] COUNT=[{}] TTL=[{}] ' \
               'CI=({}) MI=({})>'.format(
               self.key, self.is_hidden, self.dir, node_count_phrase,
               ttl_phrase, self.created_index, self.modified_index)


_RESULT_FIELDS = ['action', 'node', 'previous_node', 'etcd_index',
                  'raft_index', 'raft_term']


class Result(namedtuple('Result', _RESULT_FIELDS)):
    """The decoded envelope of one keys response."""

    __slots__ = ()

    @classmethod
    def from_json(cls, json, headers=None):
        """Decode a response document.

        :param json: Decoded JSON object
        :type json: dict

        :param headers: Response headers carrying the store indices
        :type headers: mapping or None

        :raises: :class:`etcd_rest.exceptions.EtcdMalformedResponseError`
        :rtype: :class:`etcd_rest.response.Result`
        """

        if not isinstance(json, dict):
            raise EtcdMalformedResponseError(
                'result', 'should be an object, got {!r}'.format(json))

        action = _required(json, 'action', lambda v: isinstance(v, str),
                           'a string')

        node = cls._node(json, 'node')
        previous_node = cls._node(json, 'prevNode')

        return cls(action, node, previous_node,
                   header_value(EtcdIndexHeader, headers),
                   header_value(RaftIndexHeader, headers),
                   header_value(RaftTermHeader, headers))

    @staticmethod
    def _node(json, field):
        node_json = json.get(field)
        if node_json is None:
            return None
        return Node.from_json(node_json)

    @property
    def is_deleted(self):
        return self.action in _DELETE_ACTIONS


def decode_json(response):
    """Parse the body of a transport response.

    :param response: Response from the transport
    :type response: :class:`requests.Response`

    :raises: :class:`etcd_rest.exceptions.EtcdDecodeError`
    """

    text = response.text

    # A wait that the server abandons comes back with a zero-length body.
    if text == '':
        raise etcd_rest.exceptions.EtcdEmptyResponseError(
            'Empty response body (status {})'.format(response.status_code))

    try:
        json = simplejson.loads(text)
    except simplejson.JSONDecodeError as e:
        raise etcd_rest.exceptions.EtcdDecodeError(
            'Response is not valid JSON: {}'.format(e)) from e

    _logger.debug("Response JSON: %s", json)
    return json


def from_response(response):
    """Decode a successful keys response into a Result, reading the store
    indices from its headers.

    :param response: Response from the transport
    :type response: :class:`requests.Response`

    :rtype: :class:`etcd_rest.response.Result`
    """

    return Result.from_json(decode_json(response), response.headers)
