"""Minification engine: comment, literal, regex and whitespace stages."""

from jsminifier.engine.pipeline import minify

__all__ = ["minify"]
