"""Run records and caller-owned minification history.

A record keeps the original and minified text of one run together with
their encoded sizes; Data URLs are derived on demand. The history wrapper
is the only stateful piece of the package and belongs to whoever creates
it.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

from jsminifier.config import get_config
from jsminifier.engine.pipeline import minify
from jsminifier.html import minify_embedded
from jsminifier.logging_setup import get_logger

logger = get_logger("records")


def encoded_size(text: str) -> int:
    """Size of ``text`` in bytes once UTF-8 encoded."""
    return len(text.encode("utf-8"))


def to_data_url(text: str, mime_type: str) -> str:
    """Encode ``text`` as a base64 ``data:`` URL.

    Args:
        text: Content to embed.
        mime_type: MIME type, e.g. ``text/javascript``.

    Returns:
        A ``data:<mime>;charset=utf-8;base64,...`` URL.
    """
    payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return f"data:{mime_type};charset=utf-8;base64,{payload}"


@dataclass(frozen=True)
class MinificationRecord:
    """Original and minified text of a single run."""

    original_text: str
    original_size: int
    minified_text: str
    minified_size: int
    mime_type: str

    @classmethod
    def build(cls, original: str, minified: str, mime_type: str) -> MinificationRecord:
        """Create a record, computing both sizes."""
        return cls(
            original_text=original,
            original_size=encoded_size(original),
            minified_text=minified,
            minified_size=encoded_size(minified),
            mime_type=mime_type,
        )

    @property
    def original_data_url(self) -> str:
        return to_data_url(self.original_text, self.mime_type)

    @property
    def minified_data_url(self) -> str:
        return to_data_url(self.minified_text, self.mime_type)

    @property
    def saved_bytes(self) -> int:
        return self.original_size - self.minified_size

    @property
    def ratio(self) -> float:
        """Minified size as a fraction of the original (1.0 for empty input)."""
        if self.original_size == 0:
            return 1.0
        return self.minified_size / self.original_size

    def to_dict(self, include_data_urls: bool = False) -> dict[str, Any]:
        """Serialize the record for JSON output."""
        data: dict[str, Any] = {
            "mime_type": self.mime_type,
            "original_text": self.original_text,
            "original_size": self.original_size,
            "minified_text": self.minified_text,
            "minified_size": self.minified_size,
            "saved_bytes": self.saved_bytes,
            "ratio": round(self.ratio, 4),
        }
        if include_data_urls:
            data["original_data_url"] = self.original_data_url
            data["minified_data_url"] = self.minified_data_url
        return data


@dataclass
class MinificationHistory:
    """Accumulates a record for every run made through it.

    With ``enabled`` False the wrapper still minifies but keeps nothing.
    """

    enabled: bool = field(default_factory=lambda: get_config().minifier.history_enabled)
    records: list[MinificationRecord] = field(default_factory=list)

    @property
    def latest(self) -> MinificationRecord | None:
        return self.records[-1] if self.records else None

    @property
    def original_texts(self) -> list[str]:
        return [record.original_text for record in self.records]

    @property
    def minified_texts(self) -> list[str]:
        return [record.minified_text for record in self.records]

    @property
    def original_data_urls(self) -> list[str]:
        return [record.original_data_url for record in self.records]

    @property
    def minified_data_urls(self) -> list[str]:
        return [record.minified_data_url for record in self.records]

    def clear(self) -> None:
        self.records = []

    def _record(self, original: str, minified: str, mime_type: str) -> None:
        if not self.enabled:
            return
        record = MinificationRecord.build(original, minified, mime_type)
        self.records.append(record)
        logger.debug(
            "recorded %s run: %d -> %d bytes",
            mime_type,
            record.original_size,
            record.minified_size,
        )

    def minify_file(self, text: str) -> str:
        """Minify JavaScript source and record the run."""
        minified = minify(text)
        self._record(text, minified, get_config().minifier.js_mime_type)
        return minified

    def minify_html(self, text: str) -> str:
        """Minify scripts embedded in an HTML document and record the run."""
        minified = minify_embedded(text)
        self._record(text, minified, get_config().minifier.html_mime_type)
        return minified
