from collections import namedtuple


FieldError = namedtuple('FieldError', ('field', 'code', 'detail'))


class DatoException(Exception):
    """
    The base class for all errors raised by this library.
    """


class ClientConfigurationError(DatoException):
    """
    Raised when a call can never succeed as written, e.g. an attribute name that is not declared by the resource,
    or a missing parent id for a nested resource. Always raised before any network call is made.

    :param str message: description of the problem
    :param list problems: optional list of individual problems found
    """

    def __init__(self, message, problems=None):
        super(ClientConfigurationError, self).__init__(message)
        self.message = message
        self.problems = list(problems or ())


class ApiError(DatoException):
    """
    Raised when the remote service answers with an unsuccessful status code.

    :param int status: HTTP status code, ``None`` for network-level failures
    :param body: the parsed JSON body when available, raw text otherwise
    """
    status_code = None

    def __init__(self, status=None, body=None, message=None):
        self.status = status if status is not None else self.status_code
        self.body = body
        super(ApiError, self).__init__(message or self._default_message())

    def _default_message(self):
        return '{} (status: {})'.format(self.__class__.__name__, self.status)

    def as_dict(self):
        return {
            'status': self.status,
            'body': self.body
        }


class NotFound(ApiError):
    status_code = 404


def _pointer_to_field(pointer):
    if not pointer:
        return None
    return pointer.rstrip('/').rsplit('/', 1)[-1]


def _format_errors(body):
    if not isinstance(body, dict):
        return

    # DatoCMS style: {"data": [{"type": "api_error", "attributes": {"code": ..., "details": {...}}}]}
    data = body.get('data')
    if isinstance(data, list):
        for error in data:
            attributes = error.get('attributes') or {}
            details = attributes.get('details') or {}
            yield FieldError(details.get('field'),
                             details.get('code') or attributes.get('code'),
                             details.get('message') or attributes.get('code'))

    # JSON:API style: {"errors": [{"source": {"pointer": "/data/attributes/name"}, "code": ..., "detail": ...}]}
    for error in body.get('errors') or ():
        source = error.get('source') or {}
        yield FieldError(_pointer_to_field(source.get('pointer')),
                         error.get('code'),
                         error.get('detail') or error.get('title'))


class ValidationError(ApiError):
    """
    Raised when the remote service rejects a payload.

    .. attribute:: errors

        A list of :class:`FieldError` tuples ``(field, code, detail)``; ``field`` is ``None`` for errors
        that do not concern a single field.
    """
    status_code = 422

    def __init__(self, status=None, body=None, message=None):
        self.errors = list(_format_errors(body))
        super(ValidationError, self).__init__(status, body, message)

    def _default_message(self):
        if not self.errors:
            return super(ValidationError, self)._default_message()
        return 'Invalid payload: {}'.format(', '.join(
            '{}: {}'.format(error.field or '<resource>', error.code) for error in self.errors))

    def as_dict(self):
        dct = super(ValidationError, self).as_dict()
        dct['errors'] = [error._asdict() for error in self.errors]
        return dct


class TransportError(ApiError):
    """
    Any other unsuccessful response, or a failure to reach the remote service at all.
    """


def error_for_status(status, body=None):
    """
    Returns the :class:`ApiError` subclass instance matching an HTTP status code.
    """
    for exception in (NotFound, ValidationError):
        if status == exception.status_code:
            return exception(status, body)
    return TransportError(status, body)
