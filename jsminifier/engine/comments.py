"""Comment stripping and preserved-comment reattachment.

Comments are removed in a fixed order: HTML comments, single-line
comments, line-break normalization, then block comments. Block comments
opened with ``/*!`` are collected from the raw input beforehand and put
back once the code has been minified.
"""

from __future__ import annotations

import re

from jsminifier.engine.literals import STRING_RE, TEMPLATE_RE
from jsminifier.errors import UnterminatedCommentError

HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
# A "//" right after ":" is kept so URL schemes such as https:// survive.
LINE_COMMENT_RE = re.compile(r"(?<!:)//.*$", re.MULTILINE)
# Literal spans are matched first and left as they are.
LINE_BREAK_RE = re.compile(
    rf"({TEMPLATE_RE.pattern}|{STRING_RE.pattern})|\t|\r\n|\n", re.DOTALL
)
BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
PRESERVED_COMMENT_RE = re.compile(r"/\*!.*?\*/", re.DOTALL)
DANGLING_BLOCK_OPEN_RE = re.compile(r"(?<!\\)/\*")
SCRIPT_OPEN_RE = re.compile(r"^\s*(<\s*script\b[^>]*>)", re.IGNORECASE)


def remove_html_comments(text: str) -> str:
    return HTML_COMMENT_RE.sub("", text)


def remove_line_comments(text: str) -> str:
    return LINE_COMMENT_RE.sub("", text)


def normalize_line_breaks(text: str) -> str:
    """Turn tabs and CRLF/LF line breaks outside literals into single spaces."""
    return LINE_BREAK_RE.sub(lambda m: m.group(1) or " ", text)


def remove_block_comments(text: str) -> str:
    return BLOCK_COMMENT_RE.sub("", text)


def strip_comments(text: str) -> str:
    """Remove every comment from ``text``.

    Preserved comments are removed as well; collect them first with
    :func:`extract_preserved_comments` to put them back afterwards.

    Args:
        text: JavaScript source (or a whole ``<script>`` element).

    Returns:
        Single-line text with no comments.
    """
    text = remove_html_comments(text)
    text = remove_line_comments(text)
    text = normalize_line_breaks(text)
    return remove_block_comments(text)


def extract_preserved_comments(text: str) -> list[str]:
    """Return every ``/*! ... */`` comment in order of appearance."""
    return PRESERVED_COMMENT_RE.findall(text)


def check_block_comments(text: str) -> None:
    """Raise if a block comment opener survived stripping.

    Must run after literal protection so ``"/*"`` inside a string is not
    reported.

    Raises:
        UnterminatedCommentError: If ``/*`` is left without a closing ``*/``.
    """
    match = DANGLING_BLOCK_OPEN_RE.search(text)
    if match:
        raise UnterminatedCommentError(
            "block comment is never closed",
            span=(match.start(), len(text)),
            source=text,
        )


def concat_comments(code: str, comments: list[str]) -> str:
    """Prepend preserved comments, one per line, to minified code."""
    if not comments:
        return code
    return "\n".join(comments) + "\n" + code


def splice_comments(code: str, comments: list[str]) -> str:
    """Insert preserved comments right after the opening script tag.

    Falls back to :func:`concat_comments` when the fragment does not start
    with a ``<script>`` tag.
    """
    if not comments:
        return code

    match = SCRIPT_OPEN_RE.match(code)
    if match is None:
        return concat_comments(code, comments)

    block = "\n".join(comments) + "\n"
    return code[: match.end()] + block + code[match.end() :]


def reattach_comments(code: str, comments: list[str], embed: bool = False) -> str:
    """Put preserved comments back into minified code.

    Args:
        code: Minified code.
        comments: Comments returned by :func:`extract_preserved_comments`.
        embed: True when ``code`` is a whole ``<script>`` element.

    Returns:
        Code with the preserved comments attached.
    """
    if embed:
        return splice_comments(code, comments)
    return concat_comments(code, comments)
