import os
from unittest import mock

import pytest

from reqext.config import NamedValueFromEnvironment, body_charset


def test_value_preset():
    v = NamedValueFromEnvironment("FOO", "foo", "bar")
    assert v.name == "foo"
    assert v.value == "bar"


@mock.patch.dict(os.environ, {"FOO": "bar"})
def test_value_from_envvar():
    v = NamedValueFromEnvironment("FOO", "foo")
    assert v.name == "FOO"
    assert v.value == "bar"


@mock.patch.dict(os.environ, {}, clear=True)
def test_value_default():
    v = NamedValueFromEnvironment("FOO", "foo", default="baz")
    assert v.name == "FOO"
    assert v.value == "baz"
    assert str(v) == "baz"


@mock.patch.dict(os.environ, {}, clear=True)
def test_body_charset_default():
    assert body_charset() == "utf-8"


@mock.patch.dict(os.environ, {"REQEXT_BODY_CHARSET": "utf-16"})
def test_body_charset_from_envvar():
    assert body_charset() == "utf-16"


@mock.patch.dict(os.environ, {"REQEXT_BODY_CHARSET": "utf-16"})
def test_body_charset_argument_takes_precedence():
    assert body_charset("latin-1") == "latin-1"


@mock.patch.dict(os.environ, {"REQEXT_BODY_CHARSET": "bogus"})
def test_body_charset_unknown_envvar():
    with pytest.raises(ValueError) as exc_info:
        body_charset()
    assert str(exc_info.value) == "REQEXT_BODY_CHARSET: unknown charset 'bogus'"


def test_body_charset_unknown_argument():
    with pytest.raises(ValueError) as exc_info:
        body_charset("bogus")
    assert str(exc_info.value) == "charset: unknown charset 'bogus'"
