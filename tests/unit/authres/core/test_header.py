"""Tests for whole header line helpers."""

import pytest

from authres import parse_header
from authres.core.exceptions import InvalidEncodingError, InvalidPTypeError
from authres.core.header import strip_field_name, unfold


def test_strip_field_name():
    assert strip_field_name("Authentication-Results: example.com; none") == " example.com; none"
    assert strip_field_name("authentication-results :x") == "x"
    assert strip_field_name("example.com; none") == "example.com; none"


def test_strip_field_name_only_at_start():
    value = "example.com; x=pass policy.note=Authentication-Results:"
    assert strip_field_name(value) == value


def test_unfold():
    assert unfold("example.com;\r\n\tspf=pass\r\n smtp.mailfrom=example.net\r\n") == (
        "example.com;\tspf=pass smtp.mailfrom=example.net"
    )
    assert unfold("a;\n b") == "a; b"


def test_parse_header_folded():
    field = (
        "Authentication-Results: mx.example.org;\r\n"
        "\tdkim=pass (good signature) header.d=example.com;\r\n"
        "\tspf=pass smtp.mailfrom=example.com\r\n"
    )
    parsed = parse_header(field)
    assert parsed.auth_serv_id == "mx.example.org"
    assert [r.method for r in parsed.results] == ["dkim", "spf"]


def test_parse_header_bytes():
    parsed = parse_header(b"Authentication-Results: example.com; none")
    assert parsed.results == ()


def test_parse_header_invalid_bytes():
    with pytest.raises(InvalidEncodingError):
        parse_header(b"Authentication-Results: example.com\xff; none")


def test_parse_header_error_position_is_in_unfolded_value():
    field = "Authentication-Results: example.com;\r\n spf=pass foo.bar=baz"
    with pytest.raises(InvalidPTypeError) as excinfo:
        parse_header(field)
    value = unfold(strip_field_name(field))
    assert excinfo.value.position == 23
    assert value[excinfo.value.position:].startswith("foo.bar")
