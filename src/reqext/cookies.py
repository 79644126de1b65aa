import re
from typing import Dict, List, Optional, Union
from urllib.parse import unquote

from reqext.request import Request

_SEPARATOR = re.compile(r";\s*")


def parse_cookies(header: Optional[Union[str, List[str]]]) -> Dict[str, str]:
    """Parse the value of a Cookie header into a mapping of cookie names to
    percent-decoded values.

    Repeated Cookie headers are joined with ';' before splitting. When a name
    appears more than once the last value wins. A segment that has no '=' is
    kept as a cookie with an empty value; empty segments are skipped.
    """
    cookies: Dict[str, str] = {}
    if not header:
        return cookies
    if isinstance(header, list):
        header = ";".join(header)

    for segment in _SEPARATOR.split(header):
        if not segment:
            continue
        name, _, value = segment.partition("=")
        cookies[name] = unquote(value)
    return cookies


def add_cookies(request: Request) -> Request:
    """Parse the Cookie header of the request and attach the result as
    request.cookies."""
    request.set_field("cookies", parse_cookies(request.headers.get("cookie")))
    return request
