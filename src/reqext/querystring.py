from typing import Dict, List, Union
from urllib.parse import unquote_plus

QueryValue = Union[str, List[str]]


def parse_qs(text: str) -> Dict[str, QueryValue]:
    """Parse a flat application/x-www-form-urlencoded string.

    Keys and values are percent-decoded, with '+' standing for a space. A
    key without '=' maps to an empty string, and a key that appears more
    than once maps to the list of its values in order of appearance.
    Malformed input never raises.
    """
    result: Dict[str, QueryValue] = {}
    for pair in text.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        key = unquote_plus(key)
        value = unquote_plus(value)
        prev = result.get(key)
        if prev is None:
            result[key] = value
        elif isinstance(prev, list):
            prev.append(value)
        else:
            result[key] = [prev, value]
    return result
