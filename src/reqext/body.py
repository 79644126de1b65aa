"""Reading and decoding of request bodies.

The body of a request is consumed exactly once, buffered in memory, and then
decoded according to the Content-Type header:

    application/json                   parsed JSON value, or ABSENT if empty
    application/x-www-form-urlencoded  flat query-string mapping
    anything else                      the raw bytes
"""

import asyncio
import json
import logging
import re
from typing import Any, List, Optional, Union

from reqext.config import body_charset
from reqext.error import BodyParseError, StreamError
from reqext.querystring import parse_qs
from reqext.request import ABSENT, ByteStream, Request, header_value

logger = logging.getLogger(__name__)

_JSON = re.compile(r"application/json", re.IGNORECASE)
_FORM = re.compile(r"application/x-www-form-urlencoded", re.IGNORECASE)


class BodyCollector:
    """BodyCollector accumulates the chunks of a request body until the
    stream either ends or fails.

    The collector starts out collecting and settles on the first terminal
    event, feed_eof() or set_exception(). Terminal events received after
    that are ignored, as is any data. The outcome is observed by awaiting
    wait(), which returns the concatenated body or raises StreamError.

    Push-style producers (e.g. protocol callbacks) can drive a collector
    directly; read_body() drives one from an async iterable.
    """

    def __init__(self):
        self._chunks: List[bytes] = []
        self._size = 0
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def feed_data(self, chunk: Union[bytes, bytearray, memoryview]):
        if isinstance(chunk, str):
            raise TypeError("body chunks must be bytes, not str")
        if self.settled:
            logger.debug("ignoring %d byte chunk after body settled", len(chunk))
            return
        chunk = bytes(chunk)
        self._chunks.append(chunk)
        self._size += len(chunk)

    def feed_eof(self):
        if self.settled:
            logger.debug("ignoring end of stream after body settled")
            return
        data = b"".join(self._chunks)
        self._chunks = []
        logger.debug("collected %d byte body", len(data))
        self._future.set_result(data)

    def set_exception(self, cause: BaseException):
        if self.settled:
            logger.debug("ignoring stream error after body settled: %s", cause)
            return
        logger.debug("body stream failed after %d byte(s): %r", self._size, cause)
        self._chunks = []
        error = StreamError(str(cause) or "error reading request body", cause)
        error.__cause__ = cause
        self._future.set_exception(error)

    async def wait(self) -> bytes:
        return await self._future


async def read_body(stream: ByteStream) -> bytes:
    """Consume a body stream to completion and return its content.

    Raises:
        StreamError: The stream raised before it was exhausted. The bytes
            read so far are discarded.
    """
    collector = BodyCollector()
    chunks = stream.__aiter__()
    while not collector.settled:
        try:
            chunk = await chunks.__anext__()
        except StopAsyncIteration:
            collector.feed_eof()
        except Exception as e:
            collector.set_exception(e)
        else:
            collector.feed_data(chunk)
    return await collector.wait()


def _reject_constant(name: str):
    raise ValueError(f"invalid constant '{name}'")


def decode_body(data: bytes, content_type: str, charset: Optional[str] = None) -> Any:
    """Decode a request body according to its content type.

    Args:
        data: The complete body.
        content_type: Value of the Content-Type header, or an empty string.
        charset: Text encoding for JSON and form bodies. Defaults to the
            configured body charset (utf-8 unless REQEXT_BODY_CHARSET is set).

    Raises:
        BodyParseError: The content type is JSON but the body is not valid
            JSON text.
        ValueError: The charset is not a known text encoding.
    """
    charset = body_charset(charset)

    if _JSON.search(content_type):
        if len(data) == 0:
            logger.debug("decoding empty json body as absent")
            return ABSENT
        logger.debug("decoding %d byte body as json", len(data))
        try:
            return json.loads(data.decode(charset), parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            raise BodyParseError("json", str(e)) from e

    if _FORM.search(content_type):
        logger.debug("decoding %d byte body as form", len(data))
        return parse_qs(data.decode(charset, errors="replace"))

    return data


async def add_body(request: Request, charset: Optional[str] = None) -> Request:
    """Read the request body to the end, decode it based on the Content-Type
    header, and attach the result as request.body.

    The body stream can only be read once; calling add_body a second time on
    the same request raises StreamError.

    Raises:
        StreamError: The body stream failed, or was already consumed.
        BodyParseError: The body does not match its declared content type.
    """
    content_type = header_value(request.headers, "content-type")
    stream = request.claim_stream()
    if stream is None:
        raise StreamError("request body stream was already consumed")

    data = await read_body(stream)
    request.set_field("body", decode_body(data, content_type, charset))
    return request
