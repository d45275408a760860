"""Typed access to the index headers the store attaches to every keys
response."""

import logging
import re

_logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r'[0-9]+')


class Header(object):
    """A response header carrying a decimal integer."""

    _name = None

    @classmethod
    def name(cls):
        return cls._name

    @classmethod
    def parse(cls, raw):
        """Parse the raw header text.

        :param raw: Header value as received, or None if absent
        :type raw: string or None

        :returns: The value, or None if absent or not a base-10 integer
        :rtype: int or None
        """

        if raw is None:
            return None

        text = raw.strip() if isinstance(raw, str) else ''
        if _DECIMAL.fullmatch(text) is None:
            _logger.debug("Unparsable header [%s]: [%s]", cls._name, raw)
            return None

        return int(text, 10)


class EtcdIndexHeader(Header):
    """Current store-wide change index."""

    _name = 'X-Etcd-Index'


class RaftIndexHeader(Header):
    """Index of the underlying replication log."""

    _name = 'X-Raft-Index'


class RaftTermHeader(Header):
    """Election term; grows whenever the cluster elects a new leader."""

    _name = 'X-Raft-Term'


def header_value(header_cls, headers):
    """Look up and parse a header, degrading to zero.

    :param header_cls: Header type to read
    :type header_cls: subclass of :class:`etcd_rest.headers.Header`

    :param headers: Response headers (case-insensitive mapping) or None
    :type headers: mapping or None

    :rtype: int
    """

    if headers is None:
        return 0

    value = header_cls.parse(headers.get(header_cls.name()))
    return value if value is not None else 0
