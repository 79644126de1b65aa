"""Framework-agnostic representation of an inbound HTTP request, and the
fields that the reqext transforms attach to it."""

from typing import (
    Any,
    AsyncIterable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from typing_extensions import TypeAlias

from reqext.error import FieldNotSetError

HeaderValue: TypeAlias = Union[str, List[str]]
Headers: TypeAlias = Dict[str, HeaderValue]
ByteStream: TypeAlias = AsyncIterable[bytes]


class _Absent:
    """Marker for a request that carried no body."""

    _instance: Optional["_Absent"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


async def _empty_stream():
    return
    yield


def normalize_headers(
    headers: Union[Mapping[str, HeaderValue], Iterable[Tuple[str, str]], None],
) -> Headers:
    """Lower-case header names and collect repeated headers into lists.

    Accepts either a mapping or an iterable of (name, value) pairs, which is
    what the multi-dicts of aiohttp, starlette and werkzeug yield from
    items().
    """
    if headers is None:
        return {}
    items: Iterable[Tuple[str, HeaderValue]]
    if isinstance(headers, Mapping):
        items = headers.items()
    else:
        items = headers

    normalized: Headers = {}
    for name, value in items:
        name = name.lower()
        values = list(value) if isinstance(value, list) else [value]
        if name in normalized:
            prev = normalized[name]
            normalized[name] = (prev if isinstance(prev, list) else [prev]) + values
        elif len(values) == 1:
            normalized[name] = values[0]
        else:
            normalized[name] = values
    return normalized


def header_value(headers: Mapping[str, HeaderValue], name: str, sep=", ") -> str:
    """Returns the value of a header as a single string, joining repeated
    headers with sep. Missing headers yield an empty string."""
    value = headers.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return sep.join(value)
    return value


class Request:
    """An inbound HTTP request, as seen by the reqext transforms.

    The request borrows a one-shot byte stream from the server framework.
    Transforms attach derived fields which are then available as the body,
    xhr, url_fields and cookies properties. Reading a field before its
    transform was applied raises FieldNotSetError.
    """

    def __init__(
        self,
        url: str,
        headers: Union[Mapping[str, HeaderValue], Iterable[Tuple[str, str]], None],
        stream: Optional[ByteStream] = None,
        method: str = "GET",
    ):
        self.url = url
        self.method = method
        self.headers = normalize_headers(headers)
        self.stream: ByteStream = stream if stream is not None else _empty_stream()
        self._stream_claimed = False
        self._fields: Dict[str, Any] = {}

    def __repr__(self):
        fields = ", ".join(sorted(self._fields))
        return f"Request({self.method} {self.url!r}, fields=[{fields}])"

    def has(self, name: str) -> bool:
        """Returns True if the named field has been attached."""
        return name in self._fields

    def set_field(self, name: str, value: Any):
        self._fields[name] = value

    def get_field(self, name: str) -> Any:
        try:
            return self._fields[name]
        except KeyError:
            raise FieldNotSetError(name) from None

    def claim_stream(self) -> Optional[ByteStream]:
        """Hand out the body stream. The stream can only be claimed once;
        returns None on subsequent calls."""
        if self._stream_claimed:
            return None
        self._stream_claimed = True
        return self.stream

    @property
    def stream_claimed(self) -> bool:
        return self._stream_claimed

    @property
    def body(self) -> Any:
        return self.get_field("body")

    @property
    def xhr(self) -> bool:
        return self.get_field("xhr")

    @property
    def url_fields(self):
        return self.get_field("url_fields")

    @property
    def cookies(self) -> Dict[str, str]:
        return self.get_field("cookies")
