"""Helpers to build requests in tests, without a server."""

import asyncio
from typing import Iterable, Mapping, Optional, Tuple, Union

from reqext.request import ByteStream, HeaderValue, Request

__all__ = ["stream", "make_request"]


async def stream(*chunks: bytes, error: Optional[BaseException] = None) -> ByteStream:
    """Yield chunks in order, then raise error if one was given.

    Control is returned to the event loop between chunks, the way a network
    stream would.
    """
    for chunk in chunks:
        await asyncio.sleep(0)
        yield chunk
    if error is not None:
        raise error


def make_request(
    url: str = "/",
    headers: Union[Mapping[str, HeaderValue], Iterable[Tuple[str, str]], None] = None,
    *chunks: bytes,
    error: Optional[BaseException] = None,
    method: str = "POST",
) -> Request:
    """Build a Request whose body stream yields the given chunks."""
    return Request(url, headers, stream(*chunks, error=error), method=method)
