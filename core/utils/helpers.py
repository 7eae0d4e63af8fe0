"""
Text scanning utilities used by the document codecs.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Optional, Tuple


class UnbalancedBlockError(ValueError):
    """An opening brace or tag has no matching close."""


# Object scanning

def find_object_span(text: str) -> Optional[Tuple[int, int]]:
    """
    Locate the first top-level balanced ``{...}`` block in free text.

    Braces inside JSON string literals are ignored, so prose around the object
    and braces within values do not confuse the match.

    Returns:
        ``(start, end)`` slice bounds, or None when the text has no ``{`` at all.

    Raises:
        UnbalancedBlockError: the first ``{`` is never closed.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return start, idx + 1

    raise UnbalancedBlockError(
        f"Unbalanced braces: object opened at position {start} is never closed"
    )


# Tag scanning

@dataclass(frozen=True)
class TagBlock:
    inner: str
    start: int  # index of the opening '<'
    end: int  # index just past the closing '>'


def _tag_patterns(tag: str, case_sensitive: bool) -> Tuple[re.Pattern, re.Pattern]:
    flags = 0 if case_sensitive else re.IGNORECASE
    name = re.escape(tag)
    return re.compile(rf"<{name}\s*>", flags), re.compile(rf"</{name}\s*>", flags)


def iter_tag_blocks(text: str, tag: str, case_sensitive: bool = True) -> Iterator[TagBlock]:
    """
    Yield successive ``<tag>...</tag>`` blocks in order of appearance.

    Raises:
        UnbalancedBlockError: an opening tag has no closing tag after it.
    """
    opening, closing = _tag_patterns(tag, case_sensitive)
    pos = 0
    while True:
        open_match = opening.search(text, pos)
        if open_match is None:
            return
        close_match = closing.search(text, open_match.end())
        if close_match is None:
            raise UnbalancedBlockError(
                f"Unbalanced tags: <{tag}> opened at position {open_match.start()} is never closed"
            )
        yield TagBlock(
            inner=text[open_match.end():close_match.start()],
            start=open_match.start(),
            end=close_match.end(),
        )
        pos = close_match.end()


def find_tag_block(text: str, tag: str, case_sensitive: bool = True) -> Optional[TagBlock]:
    """Return the first ``<tag>...</tag>`` block, or None if the tag never opens."""
    return next(iter_tag_blocks(text, tag, case_sensitive), None)


def tag_text(text: str, tag: str) -> Optional[str]:
    """Case-insensitive leaf lookup; None when the tag is absent or unclosed."""
    match = re.search(
        rf"<{re.escape(tag)}\s*>(.*?)</{re.escape(tag)}\s*>",
        text,
        re.IGNORECASE | re.DOTALL,
    )
    return match.group(1) if match else None


TAG_RE = re.compile(r"</?[A-Za-z_][\w.-]*\s*/?>")


def strip_tags(text: str) -> str:
    return TAG_RE.sub("", text)


def collapse_blank_lines(text: str) -> str:
    """Trim and squeeze three or more line breaks (with blank filler) down to two."""
    return re.sub(r"\n\s*\n\s*\n", "\n\n", text.strip()).strip()


# Numbers

def parse_number(raw: Optional[str]) -> float:
    """Lenient numeric read for tag text: blanks, garbage and non-finite values become 0."""
    if raw is None:
        return 0.0
    try:
        value = float(raw.strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
