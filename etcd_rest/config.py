from os import environ


def _env_flag(name, default):
    return bool(int(environ.get(name, default)))


def _env_optional(name):
    return environ.get(name, '') or None


HOST = environ.get('ETCD_REST_HOST', '127.0.0.1')
PORT = int(environ.get('ETCD_REST_PORT', '2379'))
IS_SSL = _env_flag('ETCD_REST_IS_SSL', '0')

SSL_DO_VERIFY = _env_flag('ETCD_REST_SSL_DO_VERIFY', '1')
SSL_CA_BUNDLE_FILEPATH = _env_optional('ETCD_REST_SSL_CA_BUNDLE_FILEPATH')
SSL_CLIENT_CRT_FILEPATH = _env_optional('ETCD_REST_SSL_CLIENT_CRT_FILEPATH')
SSL_CLIENT_KEY_FILEPATH = _env_optional('ETCD_REST_SSL_CLIENT_KEY_FILEPATH')

# Seconds; None leaves requests (and so watches) without a deadline.
_timeout = _env_optional('ETCD_REST_TIMEOUT_S')
TIMEOUT_S = float(_timeout) if _timeout is not None else None

API_VERSION = 'v2'

# Oldest server release that serves the v2 keys API.
MINIMUM_SERVER_VERSION = '2.0.0'
