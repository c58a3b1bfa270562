"""Whitespace collapsing.

Whitespace next to a structural symbol is dropped and any other run of
whitespace becomes a single space. Runs inside literals never reach this
stage; they are hidden behind placeholders.
"""

from __future__ import annotations

import re

STRUCTURAL_SYMBOLS = ("(", ")", "{", "}", "[", "]", "+", "-", "=", "<", ">", ":", ";", ",")

# Pairs that would lex as a different token once joined: "+ +" -> "++",
# "- -" -> "--", "< !" -> "<!" (opens an HTML comment).
MERGING_PAIRS = frozenset({("+", "+"), ("-", "-"), ("<", "!")})

_SYMBOL_ALTERNATION = "|".join(re.escape(symbol) for symbol in STRUCTURAL_SYMBOLS)
COLLAPSE_RE = re.compile(rf"(\s*)({_SYMBOL_ALTERNATION})(\s*)|\s+")


def _would_merge(left: str, right: str) -> bool:
    return (left, right) in MERGING_PAIRS


def _collapse(match: re.Match[str]) -> str:
    symbol = match.group(2)
    if symbol is None:
        return " "

    source = match.string
    before = source[match.start() - 1] if match.start() > 0 else ""
    after = source[match.end()] if match.end() < len(source) else ""

    lead = " " if match.group(1) and _would_merge(before, symbol) else ""
    trail = " " if match.group(3) and _would_merge(symbol, after) else ""
    return lead + symbol + trail


def collapse_whitespace(text: str) -> str:
    """Remove whitespace that does not separate tokens.

    Args:
        text: Placeholder-substituted, comment-free code.

    Returns:
        Code with no space next to a structural symbol (unless the two
        neighbours would merge into another operator) and single spaces
        everywhere else, trimmed at both ends.
    """
    return COLLAPSE_RE.sub(_collapse, text).strip()
