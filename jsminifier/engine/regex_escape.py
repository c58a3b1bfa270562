"""Regex-ambiguity escaping.

A quote, apostrophe or backtick inside a regular-expression literal is
not a string delimiter. Such characters are swapped for reserved control
characters while whitespace is collapsed and swapped back afterwards.

A regex literal is approximated as ``/`` non-slash run ``/``; the pattern
cannot tell division from a regex delimiter.
"""

from __future__ import annotations

import re

from jsminifier.errors import ReservedCharacterError

QUOT_MARKER = "\x0e"
APOS_MARKER = "\x0f"
BACKTICK_MARKER = "\x10"

MARKERS: dict[str, str] = {
    '"': QUOT_MARKER,
    "'": APOS_MARKER,
    "`": BACKTICK_MARKER,
}

_SPAN_PATTERNS: dict[str, re.Pattern[str]] = {
    char: re.compile(r"(/[^/]*?)" + re.escape(char) + r"([^/]*?/)")
    for char in MARKERS
}
RESERVED_RE = re.compile("[" + "".join(MARKERS.values()) + "]")


def check_reserved(text: str) -> None:
    """Reject input that already contains a marker character.

    Raises:
        ReservedCharacterError: If a marker is present in ``text``.
    """
    match = RESERVED_RE.search(text)
    if match:
        raise ReservedCharacterError(
            f"input contains reserved control character {match.group(0)!r}",
            span=match.span(),
            source=text,
        )


def find_regex_quote(text: str) -> re.Match[str] | None:
    """Return the first slash-delimited span that holds a delimiter."""
    matches = [m for m in (p.search(text) for p in _SPAN_PATTERNS.values()) if m]
    return min(matches, key=lambda m: m.start(), default=None)


def _escape_char(text: str, char: str) -> str:
    pattern = _SPAN_PATTERNS[char]
    replacement = r"\g<1>" + MARKERS[char] + r"\g<2>"
    # One delimiter per span per pass; repeat until none is left.
    while True:
        escaped = pattern.sub(replacement, text)
        if escaped == text:
            return escaped
        text = escaped


def escape_regex_quotes(text: str) -> str:
    """Hide delimiters that sit between two slashes."""
    for char in MARKERS:
        text = _escape_char(text, char)
    return text


def restore_regex_quotes(text: str) -> str:
    """Undo :func:`escape_regex_quotes`."""
    for char, marker in MARKERS.items():
        text = text.replace(marker, char)
    return text
