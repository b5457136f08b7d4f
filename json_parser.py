# json_parser.py
# Hand-rolled JSON parser: recursive descent straight over a character
# cursor, producing plain Python values.
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A CHARACTER CURSOR
# =============================================================================
#
# Every grammar rule is one function taking the Scanner. The first character
# of a value is enough to pick the rule (JSON is LL(1)), so the parser never
# backtracks and never looks further ahead than json_scanner.Scanner.peek().
#
# Value mapping:
#   null -> None, true/false -> bool, number -> float, string -> str,
#   array -> list, object -> dict (insertion ordered).
#
# Numbers are always float, including integer-looking literals. Literals too
# large for a double saturate to +/-inf, tiny ones underflow to 0.0; that is
# what float() does and it is left that way on purpose.
#
# Duplicate object keys: the last value wins and the key keeps the position
# where it was first seen.
#
# Depth guard defaults to 256 containers, which keeps the recursion far away
# from the interpreter's default recursion limit.
# =============================================================================

import argparse
import pprint
import sys
from typing import Dict, List, Optional, Union

from json_scanner import (
    EOF,
    ErrorKind,
    ParseError,
    Scanner,
    describe_char,
)

__all__ = [
    "DEPTH_LIMIT_DEFAULT",
    "ErrorKind",
    "JsonValue",
    "ParseError",
    "Scanner",
    "parse",
]

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256   # max nested arrays/objects before NestingTooDeep

JsonValue = Union[None, bool, float, str, List["JsonValue"], Dict[str, "JsonValue"]]

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# first character -> (keyword, value)
_KEYWORDS = {
    "t": ("true", True),
    "f": ("false", False),
    "n": ("null", None),
}

# ---------------------------------------------------------------------------
# STRING LITERALS
# ---------------------------------------------------------------------------
def _parse_string(sc: Scanner) -> str:
    """
    Decode a string literal; the cursor sits on the opening quote.

    Runs of plain characters are copied as slices, escapes are decoded one
    at a time. Raw control characters are rejected, and an input that ends
    before the closing quote is UnexpectedEof.
    """
    opened_at = sc.pos
    sc.advance()
    text = sc.text
    chunks: List[str] = []
    while True:
        run_start = sc.pos
        while True:
            ch = sc.peek()
            if ch == EOF or ch == '"' or ch == "\\" or ch < " ":
                break
            sc.pos += 1
        if sc.pos > run_start:
            chunks.append(text[run_start:sc.pos])

        if ch == '"':
            sc.advance()
            return "".join(chunks)
        if ch == "\\":
            chunks.append(_parse_escape(sc))
        elif ch == EOF:
            raise sc.error(
                ErrorKind.UNEXPECTED_EOF,
                f"unterminated string (opened at offset {opened_at})",
            )
        else:
            raise sc.error(
                ErrorKind.CONTROL_CHARACTER_IN_STRING,
                f"unescaped control character {describe_char(ch)} in string",
            )


def _parse_escape(sc: Scanner) -> str:
    """Decode one escape sequence; the cursor sits on the backslash."""
    escape_at = sc.pos
    sc.advance()
    ch = sc.peek()
    if ch == EOF:
        raise sc.error(ErrorKind.UNEXPECTED_EOF, "unexpected end of input in escape sequence")
    if ch in _SIMPLE_ESCAPES:
        sc.advance()
        return _SIMPLE_ESCAPES[ch]
    if ch != "u":
        raise sc.error(
            ErrorKind.INVALID_ESCAPE,
            f"invalid escape \\{ch}",
            pos=escape_at,
        )

    code = _read_hex4(sc, escape_at)
    if 0xDC00 <= code <= 0xDFFF:
        raise sc.error(
            ErrorKind.INVALID_ESCAPE,
            f"unpaired low surrogate \\u{code:04X}",
            pos=escape_at,
        )
    if code < 0xD800 or code > 0xDBFF:
        return chr(code)

    # High surrogate: the very next thing must be a \u low surrogate.
    low_at = sc.pos
    if sc.text[low_at:low_at + 2] in (EOF, "\\"):
        raise sc.error(
            ErrorKind.UNEXPECTED_EOF,
            "unexpected end of input after high surrogate",
            pos=len(sc.text),
        )
    if sc.text.startswith("\\u", low_at):
        sc.advance()
        low = _read_hex4(sc, low_at)
        if 0xDC00 <= low <= 0xDFFF:
            return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
    raise sc.error(
        ErrorKind.INVALID_ESCAPE,
        f"unpaired high surrogate \\u{code:04X}",
        pos=escape_at,
    )


def _read_hex4(sc: Scanner, escape_at: int) -> int:
    """Consume 'u' plus four hex digits and return the UTF-16 code unit."""
    sc.advance()
    digits_at = sc.pos
    for _ in range(4):
        ch = sc.peek()
        if ch == EOF:
            raise sc.error(ErrorKind.UNEXPECTED_EOF, "unexpected end of input in unicode escape")
        if ch not in _HEX_DIGITS:
            seq = sc.text[escape_at:sc.pos + 1]
            raise sc.error(
                ErrorKind.INVALID_ESCAPE,
                f"invalid unicode escape {seq}",
                pos=escape_at,
            )
        sc.advance()
    return int(sc.text[digits_at:sc.pos], 16)

# ---------------------------------------------------------------------------
# NUMBER LITERALS
# ---------------------------------------------------------------------------
def _skip_digits(sc: Scanner) -> None:
    while sc.peek() in _DIGITS:
        sc.advance()


def _require_digit(sc: Scanner, after: str) -> None:
    if sc.peek() not in _DIGITS:
        raise sc.error(
            ErrorKind.INVALID_NUMBER,
            f"expected digit after {after}, got {describe_char(sc.peek())}",
        )


def _parse_number(sc: Scanner) -> float:
    """
    Validate -? (0 | [1-9][0-9]*) (.[0-9]+)? ([eE][+-]?[0-9]+)? and convert
    the matched slice with float().

    Every grammar violation is InvalidNumber, including input that ends in
    the middle of the literal.
    """
    start = sc.pos
    if sc.peek() == "-":
        sc.advance()
        _require_digit(sc, "'-'")

    if sc.peek() == "0":
        sc.advance()
        if sc.peek() in _DIGITS:
            raise sc.error(ErrorKind.INVALID_NUMBER, "leading zero in number")
    else:
        _skip_digits(sc)

    if sc.peek() == ".":
        sc.advance()
        _require_digit(sc, "decimal point")
        _skip_digits(sc)

    if sc.peek() in ("e", "E"):
        sc.advance()
        if sc.peek() in ("+", "-"):
            sc.advance()
        _require_digit(sc, "exponent marker")
        _skip_digits(sc)

    return float(sc.text[start:sc.pos])

# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(sc: Scanner, depth: int, max_depth: int) -> JsonValue:
    """
    Dispatch on the first character of a value. The cursor must already be
    past any leading whitespace.
    """
    ch = sc.peek()
    if ch == "{":
        return _parse_object(sc, depth, max_depth)
    if ch == "[":
        return _parse_array(sc, depth, max_depth)
    if ch == '"':
        return _parse_string(sc)
    if ch in _KEYWORDS:
        word, value = _KEYWORDS[ch]
        sc.match_literal(word)
        return value
    if ch == "-" or ch in _DIGITS:
        return _parse_number(sc)
    raise sc.unexpected("a JSON value")


def _enter_container(sc: Scanner, depth: int, max_depth: int) -> None:
    if depth >= max_depth:
        raise sc.error(
            ErrorKind.NESTING_TOO_DEEP,
            f"nesting deeper than {max_depth} levels",
        )
    sc.advance()
    sc.skip_whitespace()

# ---------------------------------------------------------------------------
# ARRAY PARSER
# ---------------------------------------------------------------------------
def _parse_array(sc: Scanner, depth: int, max_depth: int) -> List[JsonValue]:
    _enter_container(sc, depth, max_depth)
    items: List[JsonValue] = []
    if sc.peek() == "]":
        sc.advance()
        return items

    while True:
        sc.skip_whitespace()
        items.append(_parse_value(sc, depth + 1, max_depth))
        sc.skip_whitespace()
        ch = sc.peek()
        if ch == ",":
            sc.advance()
        elif ch == "]":
            sc.advance()
            return items
        else:
            raise sc.unexpected("',' or ']'")

# ---------------------------------------------------------------------------
# OBJECT PARSER
# ---------------------------------------------------------------------------
def _parse_object(sc: Scanner, depth: int, max_depth: int) -> Dict[str, JsonValue]:
    """
    Parse a JSON object. Keys must be string literals; on a repeated key the
    later value replaces the earlier one in place.
    """
    _enter_container(sc, depth, max_depth)
    obj: Dict[str, JsonValue] = {}
    if sc.peek() == "}":
        sc.advance()
        return obj

    while True:
        sc.skip_whitespace()
        if sc.peek() != '"':
            raise sc.unexpected("string key")
        key = _parse_string(sc)
        sc.skip_whitespace()
        sc.expect(":")
        sc.skip_whitespace()
        obj[key] = _parse_value(sc, depth + 1, max_depth)
        sc.skip_whitespace()
        ch = sc.peek()
        if ch == ",":
            sc.advance()
        elif ch == "}":
            sc.advance()
            return obj
        else:
            raise sc.unexpected("',' or '}'")

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> JsonValue:
    """
    Parse one complete JSON document into Python values.

    Any JSON value is accepted at the root. Leading and trailing whitespace
    is ignored; anything else after the value raises TrailingInput.

    Raises:
        ParseError: on the first malformed construct, with kind and position.
        TypeError: if text is not a str (decode bytes before calling).
        ValueError: if max_depth is smaller than 1.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse() expects str, got {type(text).__name__}")
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    sc = Scanner(text)
    sc.skip_whitespace()
    result = _parse_value(sc, 0, max_depth)
    sc.skip_whitespace()
    if not sc.at_end():
        raise sc.error(
            ErrorKind.TRAILING_INPUT,
            f"extra data after root value: {describe_char(sc.peek())}",
        )
    return result

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.buffer.read().decode("utf-8")
    with open(path, "r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _cli(argv: Optional[List[str]] = None) -> int:
    """
    Command-line validator.

    Exit codes: 0 on success, 1 on ParseError, 2 when the input cannot be
    read or the arguments are bad.
    """
    ap = argparse.ArgumentParser(
        prog="json-parser",
        description="Parse a JSON document and print its value tree",
    )
    ap.add_argument("file", nargs="?", default="-", help="JSON file to parse ('-' reads stdin)")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--check", action="store_true", help="print OK instead of the value tree")
    args = ap.parse_args(argv)
    if args.max_depth < 1:
        ap.error("--max-depth must be at least 1")

    try:
        data = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
        return 2

    try:
        value = parse(data, max_depth=args.max_depth)
    except ParseError as exc:
        print(f"ParseError: {exc.describe()}", file=sys.stderr)
        return 1

    print("OK" if args.check else pprint.pformat(value, sort_dicts=False))
    return 0


def main() -> int:
    return _cli(sys.argv[1:])

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
