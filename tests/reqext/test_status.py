from http import HTTPStatus

from reqext import error
from reqext.status import register_error_type, status_for_error


def test_status_for_Exception():
    assert status_for_error(Exception()) is HTTPStatus.INTERNAL_SERVER_ERROR


def test_status_for_ValueError():
    assert status_for_error(ValueError()) is HTTPStatus.BAD_REQUEST


def test_status_for_TypeError():
    assert status_for_error(TypeError()) is HTTPStatus.BAD_REQUEST


def test_status_for_TimeoutError():
    assert status_for_error(TimeoutError()) is HTTPStatus.REQUEST_TIMEOUT


def test_status_for_ConnectionError():
    assert status_for_error(ConnectionError()) is HTTPStatus.BAD_GATEWAY


def test_status_for_PermissionError():
    assert status_for_error(PermissionError()) is HTTPStatus.FORBIDDEN


def test_status_for_FileNotFoundError():
    assert status_for_error(FileNotFoundError()) is HTTPStatus.NOT_FOUND


def test_status_for_StreamError():
    err = error.StreamError("reset", ConnectionResetError())
    assert status_for_error(err) is HTTPStatus.BAD_REQUEST
    assert err.code == "stream_error"


def test_status_for_BodyParseError():
    err = error.BodyParseError("json", "Expecting value")
    assert status_for_error(err) is HTTPStatus.BAD_REQUEST
    assert err.code == "invalid_argument"
    assert str(err) == "invalid json body: Expecting value"


def test_status_for_custom_error_type():
    class CustomError(Exception):
        pass

    class CustomSubError(CustomError):
        pass

    register_error_type(CustomError, HTTPStatus.UNPROCESSABLE_ENTITY)
    assert status_for_error(CustomError()) is HTTPStatus.UNPROCESSABLE_ENTITY
    assert status_for_error(CustomSubError()) is HTTPStatus.UNPROCESSABLE_ENTITY


def test_status_for_custom_error_handler():
    class CustomError(Exception):
        def __init__(self, status):
            self.status = status

    def handler(error: Exception) -> HTTPStatus:
        assert isinstance(error, CustomError)
        return HTTPStatus(error.status)

    register_error_type(CustomError, handler)
    assert status_for_error(CustomError(413)) is HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    assert status_for_error(CustomError(415)) is HTTPStatus.UNSUPPORTED_MEDIA_TYPE
