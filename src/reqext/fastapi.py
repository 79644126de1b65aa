"""Integration of reqext with FastAPI.

Example:

    import fastapi
    from reqext import Request
    from reqext.fastapi import augmented_request

    app = fastapi.FastAPI()

    @app.post("/")
    async def create(req: Request = fastapi.Depends(augmented_request)):
        return {"body": req.body, "xhr": req.xhr}
"""

import logging

import fastapi

from reqext.error import ReqextError
from reqext.http import augment
from reqext.request import Request
from reqext.status import status_for_error

logger = logging.getLogger(__name__)


def request_target(request: fastapi.Request) -> str:
    """Reconstruct the raw request target (path and query string) from the
    ASGI scope."""
    scope = request.scope
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope["path"]
    query_string = scope.get("query_string", b"")
    if query_string:
        path += "?" + query_string.decode("latin-1")
    return path


def from_request(request: fastapi.Request) -> Request:
    """Wrap a FastAPI (starlette) request. The body is streamed from
    request.stream(); a client disconnect surfaces as StreamError."""
    return Request(
        url=request_target(request),
        headers=request.headers.items(),
        stream=request.stream(),
        method=request.method,
    )


async def augmented_request(request: fastapi.Request) -> Request:
    """FastAPI dependency returning the augmented request.

    Raises:
        fastapi.HTTPException: The body could not be read or decoded.
    """
    req = from_request(request)
    try:
        return await augment(req)
    except ReqextError as e:
        logger.debug("rejecting %s %s: %s", request.method, request.url.path, e)
        raise fastapi.HTTPException(
            status_code=status_for_error(e),
            detail={"code": e.code, "message": str(e)},
        )
