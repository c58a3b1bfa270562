"""Minification of JavaScript embedded in HTML documents.

Each ``<script>...</script>`` element is minified on its own in embedded
mode and spliced back at its original position; every byte outside the
script elements is passed through unchanged.
"""

from __future__ import annotations

import re

from jsminifier.engine.pipeline import minify
from jsminifier.errors import ScriptTagError
from jsminifier.logging_setup import get_logger

logger = get_logger("html")

CLOSE_TAG = "</script>"
# Same length as CLOSE_TAG so offsets in masked and original text agree.
CLOSE_TAG_SENTINEL = "\x00/script\x00"

SCRIPT_OPEN_RE = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
SCRIPT_ELEMENT_RE = re.compile(r"<script\b[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)

TYPE_ATTR_RE = re.compile(
    r"""(?<![\w-])type\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))""", re.IGNORECASE
)
JAVASCRIPT_TYPES = frozenset(
    {
        "",
        "module",
        "text/javascript",
        "application/javascript",
        "application/x-javascript",
        "text/ecmascript",
        "application/ecmascript",
    }
)

# "Hide script from old browsers" lines; JS reads both as line comments.
HIDING_OPEN_RE = re.compile(r"^[ \t]*<!--(?!.*-->).*$", re.MULTILINE)
HIDING_CLOSE_RE = re.compile(r"^[ \t]*-->.*$", re.MULTILINE)
HIDING_TAIL_RE = re.compile(r"(?:^[ \t]*|//[ \t]*)-->\s*\Z", re.MULTILINE)

_NORMAL = "normal"
_SINGLE = "single"
_DOUBLE = "double"
_TEMPLATE = "template"
_LINE_COMMENT = "line_comment"
_BLOCK_COMMENT = "block_comment"

_QUOTE_STATES = {"'": _SINGLE, '"': _DOUBLE, "`": _TEMPLATE}


def _is_close_tag(html: str, pos: int) -> bool:
    return html[pos : pos + len(CLOSE_TAG)].lower() == CLOSE_TAG


def _scan_script_body(html: str, pos: int) -> tuple[int, list[int]]:
    """Walk a script body looking for its real closing tag.

    Returns:
        Offset of the closing tag (``len(html)`` if there is none) and the
        offsets of ``</script>`` occurrences that sit inside a template
        literal.
    """
    state = _NORMAL
    masked: list[int] = []
    length = len(html)

    while pos < length:
        ch = html[pos]

        if state == _TEMPLATE:
            if ch == "\\":
                pos += 2
                continue
            if ch == "`":
                state = _NORMAL
            elif _is_close_tag(html, pos):
                masked.append(pos)
                pos += len(CLOSE_TAG)
                continue
        elif _is_close_tag(html, pos):
            # Browsers end the element here even inside a string or comment.
            return pos, masked
        elif state in (_SINGLE, _DOUBLE):
            if ch == "\\":
                pos += 2
                continue
            if ch == "\n" or ch == ("'" if state == _SINGLE else '"'):
                state = _NORMAL
        elif state == _LINE_COMMENT:
            if ch == "\n":
                state = _NORMAL
        elif state == _BLOCK_COMMENT:
            if html.startswith("*/", pos):
                state = _NORMAL
                pos += 2
                continue
        elif ch in _QUOTE_STATES:
            state = _QUOTE_STATES[ch]
        elif html.startswith("//", pos):
            state = _LINE_COMMENT
            pos += 2
            continue
        elif html.startswith("/*", pos):
            state = _BLOCK_COMMENT
            pos += 2
            continue

        pos += 1

    return length, masked


def mask_template_close_tags(html: str) -> str:
    """Replace ``</script>`` inside template literals with a sentinel.

    The sentinel has the same length as the tag, so spans found in the
    masked text index the original document directly.
    """
    positions: list[int] = []
    cursor = 0
    while True:
        opening = SCRIPT_OPEN_RE.search(html, cursor)
        if opening is None:
            break
        close_pos, masked = _scan_script_body(html, opening.end())
        positions.extend(masked)
        cursor = close_pos + len(CLOSE_TAG)

    if not positions:
        return html

    pieces: list[str] = []
    cursor = 0
    for pos in positions:
        pieces.append(html[cursor:pos])
        pieces.append(CLOSE_TAG_SENTINEL)
        cursor = pos + len(CLOSE_TAG)
    pieces.append(html[cursor:])
    return "".join(pieces)


def find_script_elements(html: str) -> list[tuple[int, int]]:
    """Return the ``(start, end)`` span of every script element.

    Raises:
        ScriptTagError: If an opening tag outside any element is never
            closed.
    """
    masked = mask_template_close_tags(html)
    spans = [match.span() for match in SCRIPT_ELEMENT_RE.finditer(masked)]

    for opening in SCRIPT_OPEN_RE.finditer(masked):
        start = opening.start()
        if not any(begin <= start < end for begin, end in spans):
            raise ScriptTagError(
                "<script> tag has no matching </script>",
                span=(start, len(html)),
                source=html,
            )

    return spans


def is_javascript_element(element: str) -> bool:
    """Tell whether a script element holds JavaScript.

    Elements typed as JSON, templates and the like are left alone.
    """
    opening = SCRIPT_OPEN_RE.match(element)
    if opening is None:
        return False
    type_attr = TYPE_ATTR_RE.search(opening.group(0)[len("<script") :])
    if type_attr is None:
        return True
    value = next(group for group in type_attr.groups() if group is not None)
    return value.strip().lower() in JAVASCRIPT_TYPES


def strip_hiding_comments(body: str) -> str:
    """Drop the ``<!--`` / ``-->`` markers wrapped around a script body.

    The opening marker is dropped with the rest of its line, which may sit
    right after the opening tag. A trailing ``-->`` or ``//-->`` is dropped
    wherever it sits on the last line.
    """
    body = HIDING_OPEN_RE.sub("", body)
    body = HIDING_CLOSE_RE.sub("", body)
    return HIDING_TAIL_RE.sub("", body)


def split_script_element(element: str) -> tuple[str, str, str]:
    """Split an element into its opening tag, body and closing tag."""
    opening = SCRIPT_OPEN_RE.match(element)
    body_start = opening.end() if opening else 0
    body_end = len(element) - len(CLOSE_TAG)
    return element[:body_start], element[body_start:body_end], element[body_end:]


def has_code(element: str) -> bool:
    """Tell whether a script element has a non-blank body."""
    return bool(split_script_element(element)[1].strip())


def minify_script_element(element: str) -> str:
    """Minify the body of one ``<script>...</script>`` element.

    Both tags are kept as written. Preserved comments end up right after
    the opening tag, followed by a newline.
    """
    opening, body, closing = split_script_element(element)
    return opening + minify(strip_hiding_comments(body)) + closing


def minify_embedded(html: str) -> str:
    """Minify the JavaScript inside every script element of ``html``.

    Args:
        html: HTML document with zero or more script elements.

    Returns:
        The document with each script element minified in place.

    Raises:
        MinificationError: If a script element cannot be minified or a
            script tag is unbalanced.
    """
    spans = find_script_elements(html)
    if not spans:
        logger.debug("no script elements found")
        return html

    pieces: list[str] = []
    cursor = 0
    minified = 0
    for start, end in spans:
        element = html[start:end]
        pieces.append(html[cursor:start])
        if is_javascript_element(element) and has_code(element):
            pieces.append(minify_script_element(element))
            minified += 1
        else:
            pieces.append(element)
        cursor = end
    pieces.append(html[cursor:])

    logger.debug("minified %d of %d script elements", minified, len(spans))
    return "".join(pieces)
