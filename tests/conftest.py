"""Pytest configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path

import pytest

from jsminifier.config import reset_config
from jsminifier.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset global state before each test."""
    reset_config()
    reset_logging()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def sample_js() -> str:
    """A small script with every kind of comment and literal."""
    return (
        "/*! app v1 | MIT */\n"
        "// helpers\n"
        "function greet(name) {\n"
        "    /* build the message */\n"
        "    var msg = 'Hello, ' + name + '!';\n"
        "    var url = \"https://example.com/a\";\n"
        "    var tpl = `total: ${1 + 2}`;\n"
        "    return msg.replace(/'/g, \"\");\n"
        "}\n"
    )


@pytest.fixture
def sample_html() -> str:
    """An HTML page with two script elements."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        "  <title>Demo  page</title>\n"
        "</head>\n"
        "<body>\n"
        "  <p>a   b</p>\n"
        "<script>\n"
        "  var x = 1 + 2; // sum\n"
        "</script>\n"
        "  <div> keep   this </div>\n"
        '<script type="text/javascript">\n'
        "  function g( a ) {\n"
        "    return a;\n"
        "  }\n"
        "</script>\n"
        "</body>\n"
        "</html>\n"
    )


@pytest.fixture
def js_file(tmp_path: Path, sample_js: str) -> Path:
    """Write the sample script to disk."""
    path = tmp_path / "app.js"
    path.write_text(sample_js, encoding="utf-8")
    return path


@pytest.fixture
def html_file(tmp_path: Path, sample_html: str) -> Path:
    """Write the sample page to disk."""
    path = tmp_path / "index.html"
    path.write_text(sample_html, encoding="utf-8")
    return path
