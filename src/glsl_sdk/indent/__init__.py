"""
GLSL Indentation
================

- document: lines plus incrementally re-lexed tokens
- engine: indentation column of a single line
- formatter: re-indentation of a line range or a whole buffer

Usage
-----
>>> from glsl_sdk.indent import reindent_text
>>> print(reindent_text("void main() {\\ngl_FragColor = vec4(1.0);\\n}\\n"), end="")
void main() {
    gl_FragColor = vec4(1.0);
}
"""

from glsl_sdk.indent.document import Document, leading_columns
from glsl_sdk.indent.engine import (
    BlockScanner,
    IndentContext,
    Opener,
    context_for,
    indent_for,
    indent_in_context,
)
from glsl_sdk.indent.formatter import reindent_line, reindent_region, reindent_text

__all__ = [
    "Document",
    "leading_columns",
    "BlockScanner",
    "IndentContext",
    "Opener",
    "context_for",
    "indent_for",
    "indent_in_context",
    "reindent_line",
    "reindent_region",
    "reindent_text",
]
