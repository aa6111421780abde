"""Property-based tests for the parser: termination, determinism, fidelity."""

from hypothesis import given, settings
from hypothesis import strategies as st

from authres import parse
from authres.core.config import PTYPES
from authres.core.exceptions import ParseError
from authres.core.models import AuthenticationResult, Property

# Characters that drive the grammar, plus a few ordinary ones
GRAMMAR_ALPHABET = list(';()=."@/\\ \t') + list("abcnoe19") + ["é", "\x00"]

labels = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=8)
domains = st.lists(labels, min_size=1, max_size=4).map(".".join)
comments = st.sampled_from(["", " (c)", " (a (nested) b)", " (semi; colon)", " ()"])


@settings(max_examples=300, deadline=None)
@given(st.text(alphabet=GRAMMAR_ALPHABET, max_size=80))
def test_arbitrary_text_terminates(value):
    """Any input either parses or raises a ParseError."""
    try:
        parse(value)
    except ParseError:
        pass


@settings(max_examples=100, deadline=None)
@given(st.binary(max_size=60))
def test_arbitrary_bytes_terminate(value):
    try:
        parse(value)
    except ParseError:
        pass


@settings(max_examples=50, deadline=None)
@given(st.integers(min_value=1, max_value=2000))
def test_pathological_repeats(n):
    for value in ("x" + ";" * n, "x " + "()" * n, "x; a=b" + " ." * n, "x" + "; none" * n):
        try:
            parse(value)
        except ParseError:
            pass


@st.composite
def properties(draw):
    return Property(
        type=draw(st.sampled_from(sorted(PTYPES))),
        name=draw(st.sampled_from(["d", "i", "mailfrom", "from", "iprev"])),
        value=draw(domains),
    )


@st.composite
def results(draw):
    return AuthenticationResult(
        method=draw(st.sampled_from(["spf", "dkim", "dmarc", "iprev", "auth"])),
        version=draw(st.sampled_from(["", "1"])),
        result=draw(st.sampled_from(["pass", "fail", "softfail", "neutral", "none"])),
        reason=draw(st.sampled_from(["", "ok", "key too short"])),
        properties=tuple(draw(st.lists(properties(), max_size=3))),
    )


def render(result, comment):
    method = result.method + (f"/{result.version}" if result.version else "")
    text = f"{method}={result.result}{comment}"
    if result.reason:
        text += f' reason="{result.reason}"'
    for prop in result.properties:
        text += f" {prop}{comment}"
    return text


@settings(max_examples=200, deadline=None)
@given(domains, st.sampled_from(["", "1"]), st.lists(results(), max_size=4), comments)
def test_generated_headers_parse_back(auth_serv_id, version, expected, comment):
    header = auth_serv_id + (f" {version}" if version else "") + comment
    header += "".join(f"; {render(r, comment)}" for r in expected)
    if not expected:
        header += "; none"

    parsed = parse(header)

    assert parsed.auth_serv_id == auth_serv_id
    assert parsed.version == version
    assert parsed.results == tuple(expected)
    assert parse(header) == parsed
