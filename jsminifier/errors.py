"""Typed errors raised by the minification engine.

Every error names the stage that failed and, where known, the offending
span so callers can decide whether to abort or keep the original input.
"""

from __future__ import annotations

Span = tuple[int, int]

SNIPPET_WIDTH = 40


class MinificationError(ValueError):
    """Base class for all minification failures."""

    stage = "minify"

    def __init__(
        self,
        message: str,
        span: Span | None = None,
        source: str | None = None,
        stage: str | None = None,
    ) -> None:
        if stage is not None:
            self.stage = stage
        self.span = span
        self.snippet = _snippet(source, span)
        self.reason = message
        super().__init__(self._render())

    def _render(self) -> str:
        parts = [f"[{self.stage}] {self.reason}"]
        if self.span is not None:
            parts.append(f"at {self.span[0]}-{self.span[1]}")
        if self.snippet:
            parts.append(f"near {self.snippet!r}")
        return " ".join(parts)


class UnterminatedLiteralError(MinificationError):
    """A string or template literal has no closing delimiter."""

    stage = "literals"


class PlaceholderCollisionError(MinificationError):
    """The input already contains the literal placeholder prefix."""

    stage = "literals"


class UnknownPlaceholderError(MinificationError):
    """A placeholder refers to a literal that was never recorded."""

    stage = "literals"


class UnterminatedCommentError(MinificationError):
    """A block comment opener has no matching ``*/``."""

    stage = "comments"


class ReservedCharacterError(MinificationError):
    """The input contains a control character reserved for regex escaping."""

    stage = "regex"


class ScriptTagError(MinificationError):
    """An opening ``<script>`` tag has no matching closing tag."""

    stage = "html"


def _snippet(source: str | None, span: Span | None) -> str:
    if source is None or span is None:
        return ""
    start = max(span[0], 0)
    return source[start : start + SNIPPET_WIDTH]
