"""Composition of the reqext transforms, and helpers shared by the server
framework integrations."""

import json
import logging
from typing import Optional

from aiohttp import web

from reqext.body import add_body
from reqext.cookies import add_cookies
from reqext.error import ReqextError
from reqext.request import Request
from reqext.status import status_for_error
from reqext.url import add_url_fields
from reqext.xhr import add_xhr

logger = logging.getLogger(__name__)


async def augment(
    request: Request, body: bool = True, charset: Optional[str] = None
) -> Request:
    """Apply all transforms to the request.

    The synchronous transforms run first so that their fields are available
    even if reading the body fails.

    Args:
        request: The request to augment.

        body: Whether to read and decode the body. Pass False for handlers
            that consume the body stream themselves.

        charset: Text encoding of JSON and form bodies, see decode_body.

    Raises:
        StreamError: The body stream failed.
        BodyParseError: The body does not match its declared content type.
    """
    add_url_fields(request)
    add_cookies(request)
    add_xhr(request)
    if body:
        await add_body(request, charset)
    logger.debug("augmented %r", request)
    return request


def make_error_response_body(code: str, message: str) -> bytes:
    return json.dumps({"code": code, "message": message}).encode()


def error_code(error: Exception) -> str:
    if isinstance(error, ReqextError):
        return error.code
    return "internal"


def make_error_response(error: Exception) -> web.Response:
    status = status_for_error(error)
    body = make_error_response_body(error_code(error), str(error))
    return web.Response(status=status, content_type="application/json", body=body)


class Server:
    host: str
    port: int
    app: web.Application

    _runner: web.AppRunner
    _site: web.TCPSite

    def __init__(self, host: str, port: int, app: web.Application):
        self.host = host
        self.port = port
        self.app = app

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.stop()

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    async def start(self):
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()

        if self.port == 0:
            assert self._site._server is not None
            assert hasattr(self._site._server, "sockets")
            sockets = self._site._server.sockets
            self.port = sockets[0].getsockname()[1] if sockets else 0

    async def stop(self):
        await self._site.stop()
        await self._runner.cleanup()
