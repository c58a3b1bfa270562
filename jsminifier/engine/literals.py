"""Literal protection and restoration.

String and template literals are swapped for positional placeholders
before whitespace is touched, then put back verbatim. Placeholders are
resolved by index, so repeated identical literals and ``$``/``\\``
sequences in literal text need no special handling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from jsminifier.engine.regex_escape import find_regex_quote
from jsminifier.errors import (
    PlaceholderCollisionError,
    UnknownPlaceholderError,
    UnterminatedLiteralError,
)
from jsminifier.logging_setup import get_logger

logger = get_logger("engine.literals")

PLACEHOLDER_PREFIX = "escapeString_____"
PLACEHOLDER_WIDTH = 5
PLACEHOLDER_RE = re.compile(re.escape(PLACEHOLDER_PREFIX) + r"(\d{5,})")

# Backslash-escape aware: \` and \" do not close their literal.
TEMPLATE_RE = re.compile(r"`(?:[^`\\]|\\.)*`", re.DOTALL)
STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'', re.DOTALL)
DELIMITER_RE = re.compile(r"[\"'`]")

# Fills masked template spans; contains no delimiter.
MASK_CHAR = "\x00"

LiteralKind = Literal["template", "string"]


@dataclass(frozen=True)
class LiteralToken:
    """A string or template literal lifted out of the source."""

    index: int
    kind: LiteralKind
    text: str
    span: tuple[int, int]

    @property
    def placeholder(self) -> str:
        return make_placeholder(self.index)


@dataclass(frozen=True)
class ProtectedText:
    """Source text with every literal replaced by its placeholder."""

    text: str
    literals: tuple[LiteralToken, ...]


def make_placeholder(index: int) -> str:
    """Return the placeholder for the literal at ``index``."""
    return f"{PLACEHOLDER_PREFIX}{index:0{PLACEHOLDER_WIDTH}d}"


def find_literals(text: str) -> list[LiteralToken]:
    """Find template literals, then quoted literals.

    Quoted literals are searched with the template spans masked out, so a
    quote inside a template never starts a string. The returned list holds
    all templates first, then all strings, each group in source order.

    Args:
        text: Comment-stripped source.

    Returns:
        Literal tokens indexed in that order.
    """
    tokens: list[LiteralToken] = []

    for match in TEMPLATE_RE.finditer(text):
        tokens.append(
            LiteralToken(len(tokens), "template", match.group(0), match.span())
        )

    masked = TEMPLATE_RE.sub(lambda m: MASK_CHAR * len(m.group(0)), text)

    for match in STRING_RE.finditer(masked):
        tokens.append(
            LiteralToken(
                len(tokens), "string", text[match.start() : match.end()], match.span()
            )
        )

    return tokens


def protect_literals(text: str) -> ProtectedText:
    """Replace every literal in ``text`` by its placeholder.

    Raises:
        PlaceholderCollisionError: If ``text`` already contains the
            placeholder prefix.
    """
    collision = text.find(PLACEHOLDER_PREFIX)
    if collision != -1:
        raise PlaceholderCollisionError(
            f"source already contains the reserved name {PLACEHOLDER_PREFIX!r}",
            span=(collision, collision + len(PLACEHOLDER_PREFIX)),
            source=text,
        )

    tokens = find_literals(text)

    pieces: list[str] = []
    cursor = 0
    for token in sorted(tokens, key=lambda t: t.span[0]):
        start, end = token.span
        # Backticks inside a quoted string: the string already covers them.
        if start < cursor:
            continue
        pieces.append(text[cursor:start])
        pieces.append(token.placeholder)
        cursor = end
    pieces.append(text[cursor:])

    return ProtectedText("".join(pieces), tuple(tokens))


def check_unterminated(text: str, source: str | None = None) -> None:
    """Raise if a literal delimiter is left in protected text.

    Must run after regex escaping, which hides delimiters that belong to
    regular-expression literals. A quote inside a regex can still pair with
    a later string delimiter during protection, leaving that string's
    closing delimiter behind. When ``source`` (the text before protection)
    holds such a regex, stray delimiters are left in place: the mis-read
    span is restored verbatim and the output stays valid.

    Args:
        text: Protected, regex-escaped text.
        source: Text before literal protection.

    Raises:
        UnterminatedLiteralError: On the first stray quote or backtick that
            no regex span explains.
    """
    match = DELIMITER_RE.search(text)
    if match is None:
        return

    if source is not None:
        regex = find_regex_quote(source)
        if regex is not None:
            logger.debug(
                "stray %r at %d left in place; regex %r holds a delimiter",
                match.group(0),
                match.start(),
                regex.group(0),
            )
            return

    raise UnterminatedLiteralError(
        f"unterminated literal opened by {match.group(0)!r}",
        span=(match.start(), len(text)),
        source=text,
    )


def restore_literals(text: str, literals: tuple[LiteralToken, ...]) -> str:
    """Swap each placeholder back to its original literal text.

    Raises:
        UnknownPlaceholderError: If a placeholder has no recorded literal.
    """

    def _restore(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(literals):
            raise UnknownPlaceholderError(
                f"no literal recorded for placeholder {match.group(0)!r}",
                span=match.span(),
                source=text,
            )
        return literals[index].text

    return PLACEHOLDER_RE.sub(_restore, text)
