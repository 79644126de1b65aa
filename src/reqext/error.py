from http import HTTPStatus
from typing import Optional, cast

from reqext.status import register_error_type


class ReqextError(Exception):
    """Base class for reqext exceptions."""

    code = "internal"
    _status = HTTPStatus.INTERNAL_SERVER_ERROR


class StreamError(ReqextError):
    """Reading the request body failed at the transport level.

    The underlying exception, if any, is available as ``cause`` (and as
    ``__cause__`` when raised from it). Bytes received before the failure
    are discarded.
    """

    code = "stream_error"
    _status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class BodyParseError(ReqextError, ValueError):
    """The request body does not conform to its declared content type."""

    code = "invalid_argument"
    _status = HTTPStatus.BAD_REQUEST

    def __init__(self, content_type: str, reason: str):
        super().__init__(f"invalid {content_type} body: {reason}")
        self.content_type = content_type
        self.reason = reason


class FieldNotSetError(ReqextError, AttributeError):
    """A derived request field was read before its transform was applied."""

    def __init__(self, name: str):
        super().__init__(f"request field '{name}' has not been set")
        self.name = name


def reqext_error_status(error: Exception) -> HTTPStatus:
    return cast(ReqextError, error)._status


register_error_type(ReqextError, reqext_error_status)
