import etcd_rest.errors


class EtcdException(Exception):
    """The base exception for the client."""

    pass


class EtcdError(EtcdException):
    """The base error for failures of a single request."""

    pass


class EtcdConfigurationError(EtcdException, ValueError):
    """Raised when the host, port or path can't form a valid request URL, or
    when the server is too old to speak the v2 protocol."""

    pass


class EtcdUnsuccessfulError(EtcdError):
    """Raised when the store answered with a non-2xx status.

    When the body carried the store's error document, its fields are
    attached. They stay None otherwise.

    :param status_code: HTTP status of the response
    :type status_code: int
    """

    def __init__(self, status_code, error_code=None, error_message=None,
                 cause=None, index=None):
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        self.cause = cause
        self.index = index

        if error_message is not None:
            message = 'Unsuccessful ({}): {} ({}) [{}]'.format(
                      status_code, error_message, error_code, cause)
        else:
            message = 'Unsuccessful ({})'.format(status_code)

        super(EtcdUnsuccessfulError, self).__init__(message)

    @property
    def error_name(self):
        """Symbolic name of `error_code`, e.g. "TEST_FAILED"."""

        return etcd_rest.errors.error_name(self.error_code)


class EtcdTransportError(EtcdError):
    """Raised on connection, DNS, socket and timeout failures."""

    pass


class EtcdDecodeError(EtcdError):
    """Raised when the response body isn't valid JSON."""

    pass


class EtcdEmptyResponseError(EtcdDecodeError):
    """Raised when the response body is zero-length. A wait that the server
    gives up on ends this way."""

    pass


class EtcdMalformedResponseError(EtcdError):
    """Raised when the response is valid JSON but a required field is missing
    or has the wrong type.

    :param field: Name of the offending field
    :type field: string
    """

    def __init__(self, field, detail=None):
        self.field = field

        message = 'Malformed response: field [{}]'.format(field)
        if detail is not None:
            message = '{} {}'.format(message, detail)

        super(EtcdMalformedResponseError, self).__init__(message)
