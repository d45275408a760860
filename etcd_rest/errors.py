"""Numeric error codes carried in the store's error document (`errorCode`)."""

# Command related
KEY_NOT_FOUND = 100
TEST_FAILED = 101
NOT_FILE = 102
NOT_DIR = 104
NODE_EXIST = 105
ROOT_READ_ONLY = 107
DIR_NOT_EMPTY = 108
UNAUTHORIZED = 110

# Post form related
VALUE_REQUIRED = 200
PREV_VALUE_REQUIRED = 201
TTL_NAN = 202
INDEX_NAN = 203
INVALID_FIELD = 209
INVALID_FORM = 210
REFRESH_VALUE = 211
REFRESH_TTL_REQUIRED = 212

# Raft related
RAFT_INTERNAL = 300
LEADER_ELECT = 301

# Etcd related
WATCHER_CLEARED = 400
EVENT_INDEX_CLEARED = 401

_NAMES = dict((code, name) for (name, code) in globals().items()
              if name.isupper() and isinstance(code, int))


def error_name(code):
    """Return the symbolic name for an error code, or None if unknown.

    :param code: Value of `errorCode`
    :type code: int or None

    :rtype: string or None
    """

    return _NAMES.get(code)
