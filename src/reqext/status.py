from http import HTTPStatus
from typing import Callable, Dict, Type, Union

_ERROR_TYPES: Dict[
    Type[Exception], Union[HTTPStatus, Callable[[Exception], HTTPStatus]]
] = {}


def status_for_error(error: BaseException) -> HTTPStatus:
    """Returns the HTTP status that a server should respond with when a
    transform failed with the specified error."""
    # See if the error matches one of the registered types.
    status_or_handler = _find_status_or_handler(error, _ERROR_TYPES)
    if status_or_handler is not None:
        if isinstance(status_or_handler, HTTPStatus):
            return status_or_handler
        return status_or_handler(error)
    # If not, resort to standard error categorization.
    #
    # See https://docs.python.org/3/library/exceptions.html
    if isinstance(error, TimeoutError):
        return HTTPStatus.REQUEST_TIMEOUT
    elif isinstance(error, TypeError) or isinstance(error, ValueError):
        return HTTPStatus.BAD_REQUEST
    elif isinstance(error, PermissionError):
        return HTTPStatus.FORBIDDEN
    elif isinstance(error, FileNotFoundError):
        return HTTPStatus.NOT_FOUND
    elif isinstance(error, ConnectionError):
        return HTTPStatus.BAD_GATEWAY
    return HTTPStatus.INTERNAL_SERVER_ERROR


def register_error_type(
    error_type: Type[Exception],
    status_or_handler: Union[HTTPStatus, Callable[[Exception], HTTPStatus]],
):
    """Register an error type to HTTP status mapping.

    The caller can either register a base exception and a handler, which
    derives a status from errors of this type. Or, if there's only one
    exception to status mapping to register, the caller can simply pass
    the exception class and the associated status.
    """
    _ERROR_TYPES[error_type] = status_or_handler


def _find_status_or_handler(obj, types):
    for cls in type(obj).__mro__:
        try:
            return types[cls]
        except KeyError:
            pass

    return None  # not found
