"""jsminifier - JavaScript minification for standalone files and HTML.

Strips comments and collapses insignificant whitespace while keeping
string, template and regular-expression literal content intact.
"""

__version__ = "1.0.0"

from jsminifier.engine.pipeline import minify
from jsminifier.errors import MinificationError
from jsminifier.html import minify_embedded
from jsminifier.records import MinificationHistory, MinificationRecord

__all__ = [
    "MinificationError",
    "MinificationHistory",
    "MinificationRecord",
    "__version__",
    "minify",
    "minify_embedded",
]
