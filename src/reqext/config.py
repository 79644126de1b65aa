import codecs
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BODY_CHARSET = "utf-8"


@dataclass
class NamedValueFromEnvironment:
    _envvar: str
    _name: str
    _value: str
    _from_envvar: bool

    def __init__(
        self,
        envvar: str,
        name: str,
        value: Optional[str] = None,
        default: str = "",
    ):
        self._envvar = envvar
        self._name = name
        self._from_envvar = value is None
        if value is None:
            self._value = os.environ.get(envvar) or default
        else:
            self._value = value

    def __str__(self):
        return self.value

    @property
    def name(self) -> str:
        return self._envvar if self._from_envvar else self._name

    @property
    def value(self) -> str:
        return self._value


def body_charset(charset: Optional[str] = None) -> str:
    """Returns the charset used to decode JSON and form bodies.

    The charset is the one passed as argument or, when omitted, the value of
    the REQEXT_BODY_CHARSET environment variable (read on each call), which
    defaults to utf-8.

    Raises:
        ValueError: The charset is not a known text encoding.
    """
    v = NamedValueFromEnvironment(
        "REQEXT_BODY_CHARSET", "charset", charset, default=DEFAULT_BODY_CHARSET
    )
    try:
        codecs.lookup(v.value)
    except LookupError:
        raise ValueError(f"{v.name}: unknown charset '{v.value}'") from None
    return v.value
