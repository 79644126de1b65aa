from typing import Mapping

from reqext.request import HeaderValue, Request, header_value


def is_xhr(headers: Mapping[str, HeaderValue], url: str) -> bool:
    """Returns True if the request expects a JSON response, that is iff:

    1. the X-Requested-With header is "XMLHttpRequest", OR
    2. the URL ends with ".json", OR
    3. the Accept header does not contain "text/html".

    The URL check applies to the raw URL, query string included. A request
    without an Accept header is therefore classified as XHR.
    """
    return (
        header_value(headers, "x-requested-with") == "XMLHttpRequest"
        or url.endswith(".json")
        or "text/html" not in header_value(headers, "accept")
    )


def add_xhr(request: Request) -> Request:
    """Attach request.xhr, see is_xhr."""
    request.set_field("xhr", is_xhr(request.headers, request.url))
    return request
