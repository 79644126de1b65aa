"""Integration of reqext with Flask.

Example:

    from flask import Flask
    import reqext.flask

    app = Flask(__name__)
    reqext.flask.init_app(app)

    @app.post("/")
    def create():
        req = reqext.flask.augment_request()
        return {"body": req.body, "xhr": req.xhr}
"""

import asyncio
import logging
from typing import Optional

import flask
from flask import Flask

from reqext.error import ReqextError
from reqext.http import augment, error_code
from reqext.request import Request
from reqext.status import status_for_error

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


async def _read_chunks(stream, chunk_size: int):
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


def from_request(
    request: Optional[flask.Request] = None, chunk_size: int = CHUNK_SIZE
) -> Request:
    """Wrap a Flask request, by default the one currently being handled.
    The body is read from request.stream in chunks of chunk_size bytes."""
    if request is None:
        request = flask.request
    url = request.path
    if request.query_string:
        url += "?" + request.query_string.decode("latin-1")
    return Request(
        url=url,
        headers=request.headers.items(),
        stream=_read_chunks(request.stream, chunk_size),
        method=request.method,
    )


def augment_request(
    request: Optional[flask.Request] = None, charset: Optional[str] = None
) -> Request:
    """Blocking variant of reqext.augment for Flask views.

    The transforms run on a new event loop, so this cannot be called from an
    `async def` view; those should await reqext.augment(from_request())
    instead.

    Raises:
        StreamError: The body stream failed.
        BodyParseError: The body does not match its declared content type.
        RuntimeError: Called while an event loop is running.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError(
            "augment_request() cannot be called from a running event loop,"
            " await reqext.augment(reqext.flask.from_request()) instead"
        )
    return asyncio.run(augment(from_request(request), charset=charset))


def _on_error(exc: ReqextError):
    logger.debug("rejecting %s %s: %s", flask.request.method, flask.request.path, exc)
    return {"code": error_code(exc), "message": str(exc)}, status_for_error(exc)


def init_app(app: Flask):
    """Render reqext errors raised by views as JSON error responses."""
    if not app:
        raise ValueError("missing Flask app as first argument of init_app")
    app.errorhandler(ReqextError)(_on_error)
