"""Integration of reqext with aiohttp.

Example:

    from aiohttp import web
    import reqext.aiohttp

    async def handle(request: web.Request) -> web.Response:
        req = reqext.aiohttp.get_request(request)
        return web.json_response({"body": req.body, "xhr": req.xhr})

    app = web.Application(middlewares=[reqext.aiohttp.middleware])
    app.router.add_post("/", handle)
"""

import logging
from typing import Awaitable, Callable

from aiohttp import web

from reqext.error import ReqextError
from reqext.http import augment, make_error_response
from reqext.request import Request

logger = logging.getLogger(__name__)

REQUEST_KEY = "reqext"

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def from_request(request: web.Request) -> Request:
    """Wrap an aiohttp request. The body is streamed from request.content as
    chunks arrive."""
    return Request(
        url=request.raw_path,
        headers=request.headers.items(),
        stream=request.content.iter_any(),
        method=request.method,
    )


def get_request(request: web.Request) -> Request:
    """Returns the augmented request stored by the middleware."""
    return request[REQUEST_KEY]


@web.middleware
async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Augment every request before it reaches its handler.

    Requests whose body cannot be read or decoded are answered with a JSON
    error response and never reach the handler.
    """
    req = from_request(request)
    try:
        await augment(req)
    except ReqextError as e:
        logger.debug("rejecting %s %s: %s", request.method, request.path, e)
        return make_error_response(e)

    request[REQUEST_KEY] = req
    return await handler(request)
