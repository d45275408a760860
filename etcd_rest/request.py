"""Builds request URLs and form bodies for the v2 HTTP API."""

import logging

from collections import namedtuple

from requests.exceptions import RequestException
from requests.models import PreparedRequest
from urllib.parse import quote, urlencode

from etcd_rest.config import API_VERSION
from etcd_rest.exceptions import EtcdConfigurationError

_logger = logging.getLogger(__name__)

# Base objects served under /v2/
O_VERSION = 'version'
O_KEYS = 'keys'
O_STATS = 'stats'

_OBJECTS = (O_VERSION, O_KEYS, O_STATS)

# Param kinds
DIR = 'dir'
RECURSIVE = 'recursive'
SORTED = 'sorted'
VALUE = 'value'
WAIT = 'wait'
WAIT_INDEX = 'waitIndex'
TTL = 'ttl'

# AtomicOp kinds
PREV_VALUE = 'prevValue'
PREV_INDEX = 'prevIndex'
PREV_EXIST = 'prevExists'

_PARAM_KINDS = (DIR, RECURSIVE, SORTED, VALUE, WAIT, WAIT_INDEX, TTL)
_ATOMIC_KINDS = (PREV_VALUE, PREV_INDEX, PREV_EXIST)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


class Param(namedtuple('Param', ['kind', 'value'])):
    """One request parameter, e.g. `Param(RECURSIVE, True)`."""

    __slots__ = ()

    def __new__(cls, kind, value):
        if kind not in _PARAM_KINDS:
            raise ValueError('Unknown parameter kind: {}'.format(kind))
        return super(Param, cls).__new__(cls, kind, value)


class AtomicOp(namedtuple('AtomicOp', ['kind', 'value'])):
    """One conditional-write constraint, e.g. `AtomicOp(PREV_INDEX, 7)`.
    The store rejects the write when the constraint doesn't hold."""

    __slots__ = ()

    def __new__(cls, kind, value):
        if kind not in _ATOMIC_KINDS:
            raise ValueError('Unknown atomic operation: {}'.format(kind))
        return super(AtomicOp, cls).__new__(cls, kind, value)


def _format_value(value):
    # bool first: it's an int subclass
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    return '{}'.format(value)


def to_pair(item):
    """Convert a Param, an AtomicOp or an already-built pair into a single
    (name, text) query/form pair.

    :param item: The value to convert
    :type item: :class:`Param`, :class:`AtomicOp` or tuple

    :rtype: tuple
    """

    if isinstance(item, (Param, AtomicOp)):
        return (item.kind, _format_value(item.value))

    (name, value) = item
    return (name, _format_value(value))


def to_pairs(items):
    """Convert a sequence of parameters, preserving order.

    :rtype: list
    """

    if items is None:
        return []
    return [to_pair(item) for item in items]


def form_body(params):
    """Serialize write parameters as `application/x-www-form-urlencoded`
    text.

    :param params: Parameters in the order they should appear
    :type params: sequence or None

    :rtype: string
    """

    return urlencode(to_pairs(params))


class RequestBuilder(object):
    """Composes versioned URLs against one server.

    :param prefix: Scheme, host and port, e.g. 'http://127.0.0.1:2379'
    :type prefix: string
    """

    def __init__(self, prefix):
        self.__prefix = prefix.rstrip('/')

    @property
    def prefix(self):
        return self.__prefix

    def url(self, object_name, path='', params=None):
        """Build `{prefix}/v2/{object}/{path}?{query}`.

        :param object_name: One of 'version', 'keys' or 'stats'
        :type object_name: string

        :param path: Key path, with or without a leading slash
        :type path: string

        :param params: Query parameters, emitted in order
        :type params: sequence or None

        :raises: :class:`etcd_rest.exceptions.EtcdConfigurationError`
        :rtype: string
        """

        if object_name not in _OBJECTS:
            raise EtcdConfigurationError(
                "Unknown base object: {}".format(object_name))

        base = '{}/{}/{}'.format(self.__prefix, API_VERSION, object_name)

        # The keys root is "/v2/keys/"; other objects have no trailing slash.
        path = quote((path or '').lstrip('/'), safe='/')
        if path or object_name == O_KEYS:
            base = '{}/{}'.format(base, path)

        prepared = PreparedRequest()
        try:
            prepared.prepare_url(base, to_pairs(params))
        except RequestException as e:
            raise EtcdConfigurationError(
                "Can't form a URL from [{}]: {}".format(base, e)) from e

        _logger.debug("URL=[%s]", prepared.url)
        return prepared.url
