"""Minification pipeline for JavaScript code.

Stage order:
    comments -> literal protection -> regex escaping -> whitespace
    -> literal restoration -> preserved comments
"""

from __future__ import annotations

from jsminifier.engine.comments import (
    check_block_comments,
    extract_preserved_comments,
    reattach_comments,
    strip_comments,
)
from jsminifier.engine.literals import (
    check_unterminated,
    protect_literals,
    restore_literals,
)
from jsminifier.engine.regex_escape import (
    check_reserved,
    escape_regex_quotes,
    restore_regex_quotes,
)
from jsminifier.engine.whitespace import collapse_whitespace
from jsminifier.logging_setup import get_logger

logger = get_logger("engine.pipeline")


def minify(code: str, embed: bool = False) -> str:
    """Minify JavaScript code.

    Args:
        code: JavaScript source. In embedded mode, a whole ``<script>``
            element including its tags.
        embed: Put preserved comments just inside the opening script tag
            instead of in front of the code.

    Returns:
        Minified code.

    Raises:
        MinificationError: If a stage meets malformed input (unterminated
            literal or comment, reserved characters).
    """
    check_reserved(code)
    preserved = extract_preserved_comments(code)

    stripped = strip_comments(code)
    logger.debug("comments stripped: %d -> %d chars", len(code), len(stripped))

    protected = protect_literals(stripped)
    check_block_comments(protected.text)
    logger.debug("protected %d literals", len(protected.literals))

    escaped = escape_regex_quotes(protected.text)
    check_unterminated(escaped, source=stripped)

    collapsed = collapse_whitespace(escaped)

    restored = restore_literals(collapsed, protected.literals)
    restored = restore_regex_quotes(restored)

    result = reattach_comments(restored, preserved, embed=embed)
    logger.debug(
        "minified %d -> %d chars (%d preserved comments)",
        len(code),
        len(result),
        len(preserved),
    )
    return result
