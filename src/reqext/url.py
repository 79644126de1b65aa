import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import unquote

from reqext.querystring import QueryValue, parse_qs
from reqext.request import Request

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9.+-]*):")
_PORT = re.compile(r":([0-9]*)$")


@dataclass(frozen=True)
class UrlFields:
    """Components of a request URL.

    Fields are None when the component does not appear in the URL, which
    is distinct from a component that is present but empty.
    """

    protocol: Optional[str] = None
    """The scheme, lower-cased, including the trailing colon."""

    auth: Optional[str] = None
    """The user information that precedes '@' in the authority."""

    hostname: Optional[str] = None
    """The lower-cased host, without port."""

    port: Optional[str] = None
    """The port number of the host. (Yes, it's a string.)"""

    pathname: Optional[str] = None
    """The path, including the initial slash if present. No decoding is
    performed."""

    query: Dict[str, QueryValue] = field(default_factory=dict)
    """The parsed query string."""

    hash: Optional[str] = None
    """The fragment, including the pound sign."""


def parse_url(raw: str) -> UrlFields:
    """Decompose a raw request URL into its fields.

    Both absolute URLs and origin-form request targets ("/path?query") are
    accepted. A malformed URL never raises; the fields that could not be
    recognized are left as None.
    """
    rest, sep, fragment = raw.strip().partition("#")
    hash = "#" + fragment if sep else None

    rest, sep, search = rest.partition("?")
    query = parse_qs(search) if sep else {}

    protocol = auth = hostname = port = None
    match = _SCHEME.match(rest)
    if match is not None:
        protocol = match.group(1).lower() + ":"
        rest = rest[match.end() :]
        if rest.startswith("//"):
            authority, slash, path = rest[2:].partition("/")
            rest = slash + path
            auth, hostname, port = _parse_authority(authority)
            if not rest and hostname is not None:
                rest = "/"

    pathname = rest or None
    if protocol is not None and not hostname:
        logger.debug("url %r has no host", raw)

    return UrlFields(
        protocol=protocol,
        auth=auth,
        hostname=hostname,
        port=port,
        pathname=pathname,
        query=query,
        hash=hash,
    )


def _parse_authority(authority: str):
    auth: Optional[str] = None
    if "@" in authority:
        userinfo, _, authority = authority.rpartition("@")
        auth = unquote(userinfo)

    port: Optional[str] = None
    match = _PORT.search(authority)
    if match is not None:
        if match.group(1):
            port = match.group(1)
        authority = authority[: match.start()]

    hostname = authority.lower()
    if hostname.startswith("[") and hostname.endswith("]"):
        hostname = hostname[1:-1]
    return auth, hostname, port


def add_url_fields(request: Request) -> Request:
    """Parse the request URL and attach the result as request.url_fields."""
    request.set_field("url_fields", parse_url(request.url))
    return request
