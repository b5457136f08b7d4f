import pytest

import json_parser as jp
from json_parser import ErrorKind


def parse_error(text):
    with pytest.raises(jp.ParseError) as ei:
        jp.parse(text)
    return ei.value


def test_simple_escapes_decode():
    assert jp.parse(r'"\" \\ \/ \b \f \n \r \t"') == '" \\ / \b \f \n \r \t'


def test_unicode_escape_either_case():
    assert jp.parse("\"\\u00e9\\u00C9\"") == "\u00e9\u00c9"


def test_surrogate_pair_combines_into_one_scalar():
    value = jp.parse("\"\\ud83d\\uDE00\"")
    assert value == "\U0001F600"
    assert len(value) == 1


def test_escaped_nul_is_allowed():
    assert jp.parse(r'"a\u0000b"') == "a\x00b"


def test_non_ascii_passes_through():
    assert jp.parse('"κόσμε 中文"') == "κόσμε 中文"


def test_invalid_hex_escape_reports_offset():
    err = parse_error('["\\u123g"]')
    assert err.kind is ErrorKind.INVALID_ESCAPE
    assert err.pos == 2
    assert "invalid unicode escape \\u123g" in str(err)


def test_short_unicode_escape():
    err = parse_error('["\\u12"]')
    assert err.kind is ErrorKind.INVALID_ESCAPE


def test_unicode_escape_cut_off_by_eof():
    err = parse_error('"\\u12')
    assert err.kind is ErrorKind.UNEXPECTED_EOF


def test_input_ends_right_after_high_surrogate():
    err = parse_error('"\\uD800')
    assert err.kind is ErrorKind.UNEXPECTED_EOF
    assert err.pos == 7


def test_input_ends_on_backslash_after_high_surrogate():
    err = parse_error('"\\uD800\\')
    assert err.kind is ErrorKind.UNEXPECTED_EOF
    assert err.pos == 8


def test_input_ends_inside_low_surrogate_escape():
    assert parse_error('"\\uD800\\u').kind is ErrorKind.UNEXPECTED_EOF
    assert parse_error('"\\uD800\\uDC').kind is ErrorKind.UNEXPECTED_EOF


def test_invalid_single_escape_reports_offset():
    err = parse_error('["\\q"]')
    assert err.kind is ErrorKind.INVALID_ESCAPE
    assert err.pos == 2
    assert "invalid escape \\q" in str(err)


def test_unpaired_high_surrogate_detected():
    err = parse_error('"\\uD800"')
    assert err.kind is ErrorKind.INVALID_ESCAPE
    assert err.pos == 1
    assert "unpaired high surrogate" in str(err)


def test_high_surrogate_followed_by_plain_text():
    assert parse_error('"\\uD800abc"').kind is ErrorKind.INVALID_ESCAPE


def test_high_surrogate_followed_by_non_low_escape():
    assert parse_error('"\\uD800\\u0041"').kind is ErrorKind.INVALID_ESCAPE
    assert parse_error('"\\uD800\\n"').kind is ErrorKind.INVALID_ESCAPE


def test_unpaired_low_surrogate_detected():
    err = parse_error('"\\uDC00"')
    assert err.kind is ErrorKind.INVALID_ESCAPE
    assert "unpaired low surrogate" in str(err)


def test_trailing_backslash_is_eof():
    assert parse_error('"abc\\').kind is ErrorKind.UNEXPECTED_EOF


def test_unterminated_string():
    err = parse_error('"abc')
    assert err.kind is ErrorKind.UNEXPECTED_EOF
    assert err.pos == 4


@pytest.mark.parametrize("ch", ["\x00", "\t", "\n", "\x1f"])
def test_raw_control_character_rejected(ch):
    err = parse_error('"a' + ch + 'b"')
    assert err.kind is ErrorKind.CONTROL_CHARACTER_IN_STRING
    assert err.pos == 2


def test_delete_character_is_not_a_control_character():
    assert jp.parse('"\x7f"') == "\x7f"
