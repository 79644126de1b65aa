"""Request augmentation transforms for Python HTTP servers.

Each transform derives one structured field from a raw request and attaches
it to the request:

    add_body        request.body        decoded body (async)
    add_url_fields  request.url_fields  protocol, host, path, query, ...
    add_cookies     request.cookies     cookie name to value mapping
    add_xhr         request.xhr         whether a JSON response is expected
"""

from reqext.body import BodyCollector, add_body, decode_body, read_body
from reqext.cookies import add_cookies, parse_cookies
from reqext.error import (
    BodyParseError,
    FieldNotSetError,
    ReqextError,
    StreamError,
)
from reqext.http import augment
from reqext.querystring import parse_qs
from reqext.request import ABSENT, Request, normalize_headers
from reqext.status import register_error_type, status_for_error
from reqext.url import UrlFields, add_url_fields, parse_url
from reqext.xhr import add_xhr, is_xhr

__all__ = [
    "ABSENT",
    "BodyCollector",
    "BodyParseError",
    "FieldNotSetError",
    "ReqextError",
    "Request",
    "StreamError",
    "UrlFields",
    "add_body",
    "add_cookies",
    "add_url_fields",
    "add_xhr",
    "augment",
    "decode_body",
    "is_xhr",
    "normalize_headers",
    "parse_cookies",
    "parse_qs",
    "parse_url",
    "read_body",
    "register_error_type",
    "status_for_error",
]
