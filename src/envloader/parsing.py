"""
Line-level parsing for the ``.env`` format.

Every line goes through the same three steps: it is classified (blank,
comment, malformed or assignment), the key of an assignment is validated
against the identifier grammar, and the raw value is normalized (inline
comment removal or quote unwrapping).

Quoted values close on the *first* unescaped matching quote, so
``"a"b"`` normalizes to ``a``. Backslashes are only counted to decide
whether a quote is escaped; they are never decoded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

QUOTE_CHARS = ("'", '"')
COMMENT_CHAR = "#"
KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class LineKind(Enum):
    BLANK = "blank"
    COMMENT = "comment"
    MALFORMED = "malformed"
    ASSIGNMENT = "assignment"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    key: str = ""
    raw_value: str = ""


def classify_line(raw_line: str) -> ClassifiedLine:
    """Split one raw line into key and raw value, or tell why it is skipped."""
    stripped = raw_line.strip()
    if not stripped:
        return ClassifiedLine(LineKind.BLANK)
    if stripped.startswith(COMMENT_CHAR):
        return ClassifiedLine(LineKind.COMMENT)
    split_at = raw_line.find("=")
    if split_at <= 0:
        return ClassifiedLine(LineKind.MALFORMED)
    return ClassifiedLine(
        LineKind.ASSIGNMENT,
        key=raw_line[:split_at].strip(),
        raw_value=raw_line[split_at + 1 :],
    )


def is_valid_key(key: str) -> bool:
    return KEY_PATTERN.fullmatch(key) is not None


def _opening_quote(value: str) -> Optional[str]:
    if len(value) > 1 and value[0] in QUOTE_CHARS:
        return value[0]
    return None


def _is_escaped(value: str, index: int) -> bool:
    backslashes = 0
    pos = index - 1
    while pos >= 0 and value[pos] == "\\":
        backslashes += 1
        pos -= 1
    return backslashes % 2 == 1


def _find_closing_quote(value: str, quote: str) -> Optional[int]:
    """Index of the first unescaped ``quote`` after position 0, if any."""
    for index in range(1, len(value)):
        if value[index] == quote and not _is_escaped(value, index):
            return index
    return None


def _comment_start(value: str) -> Optional[int]:
    for index in range(1, len(value)):
        if value[index] == COMMENT_CHAR and value[index - 1].isspace():
            return index
    return None


def normalize_value(raw_value: str) -> str:
    """
    Turn the text after ``=`` into the final value.

    Quoted values are unwrapped verbatim (``#`` inside quotes is literal).
    An unterminated quote drops the opening quote and trailing whitespace.
    Unquoted values lose an inline comment, i.e. a ``#`` preceded by
    whitespace, together with the whitespace before it.
    """
    value = raw_value.strip()
    if not value:
        return ""
    quote = _opening_quote(value)
    if quote is not None:
        closing = _find_closing_quote(value, quote)
        if closing is None:
            return value[1:].rstrip()
        return value[1:closing]
    start = _comment_start(value)
    if start is None:
        return value
    return value[:start].rstrip()


def remove_inline_comment(raw_value: str) -> str:
    """
    Drop an inline comment while leaving any quotes in place.

    A terminated quoted value is cut right after its closing quote; an
    unterminated one is returned whole.
    """
    value = raw_value.strip()
    quote = _opening_quote(value)
    if quote is not None:
        closing = _find_closing_quote(value, quote)
        if closing is None:
            return value
        return value[: closing + 1]
    start = _comment_start(value)
    if start is None:
        return value
    return value[:start].rstrip()


def strip_quotes(value: str) -> str:
    value = value.strip()
    quote = _opening_quote(value)
    if quote is None:
        return value
    closing = _find_closing_quote(value, quote)
    if closing is None:
        return value[1:].rstrip()
    return value[1:closing]
