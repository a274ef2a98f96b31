"""
GLSL Region Formatter
=====================

Re-indents a range of lines by applying the indentation engine to each
line top to bottom. Each line is computed against the lines above it as
already re-indented, so the result is stable: formatting the output
again changes nothing.

Re-indenting only rewrites leading whitespace, which never changes how
a line lexes. A region is therefore formatted in a single pass over the
tokens of the input document, with a BlockScanner carrying the bracket
state forward and the new line texts supplying the indentation of the
lines above.
"""

from typing import Optional
import logging

from glsl_sdk.config import IndentConfig
from glsl_sdk.indent.document import Document, leading_columns
from glsl_sdk.indent.engine import BlockScanner, indent_for, indent_in_context

logger = logging.getLogger(__name__)


def _reindented(text: str, column: int, config: IndentConfig) -> str:
    body = text.lstrip(" \t")
    if not body:
        return ""
    return config.render(column) + body


def reindent_line(document: Document, line_number: int, config: Optional[IndentConfig] = None) -> bool:
    """
    Re-indent one line of a document in place.

    Whitespace-only lines are emptied.

    Returns:
        True if the line text changed
    """
    if config is None:
        config = IndentConfig()

    text = document.line(line_number)
    if text.strip(" \t"):
        new_text = _reindented(text, indent_for(document, line_number, config), config)
    else:
        new_text = ""

    if new_text == text:
        return False
    document.replace_line(line_number, new_text)
    return True


def reindent_region(
    document: Document,
    start_line: int,
    end_line: int,
    config: Optional[IndentConfig] = None,
) -> Document:
    """
    Re-indent lines start_line..end_line (inclusive).

    The input document is left untouched; the range is clamped to the
    document.

    Args:
        document: The source document
        start_line: First line to re-indent (1-indexed)
        end_line: Last line to re-indent (inclusive)
        config: Indentation settings (default: IndentConfig())

    Returns:
        A new Document with the region re-indented

    Raises:
        ValueError: If start_line > end_line
    """
    if start_line > end_line:
        raise ValueError(f"start line {start_line} is after end line {end_line}")
    if config is None:
        config = IndentConfig()

    first = max(start_line, 1)
    last = min(end_line, len(document))
    lines = list(document.lines)
    if first <= last:
        # One lexer pass for every line the scan will visit
        document.tokens(last)

    def indentation(number: int) -> int:
        return leading_columns(lines[number - 1], config.tab_width)

    changed = 0
    scanner = BlockScanner()
    for line_number in range(1, last + 1):
        tokens = document.tokens(line_number)
        if line_number >= first:
            text = lines[line_number - 1]
            if text.strip(" \t"):
                context = scanner.context(document.enclosing_token(line_number))
                column = indent_in_context(document, line_number, context, config, indentation)
                new_text = _reindented(text, column, config)
            else:
                new_text = ""
            if new_text != text:
                lines[line_number - 1] = new_text
                changed += 1
        scanner.feed(tokens, line_number)

    logger.debug(f"Re-indented {document.filename} lines {first}-{last}: {changed} changed")
    return Document(
        lines,
        filename=document.filename,
        newline=document.newline,
        trailing_newline=document.trailing_newline,
    )


def reindent_text(text: str, config: Optional[IndentConfig] = None, filename: str = "<input>") -> str:
    """
    Re-indent a whole buffer.

    Line terminators and a final newline are preserved.
    """
    document = Document.from_text(text, filename=filename)
    if len(document) == 0:
        return text
    return reindent_region(document, 1, len(document), config).render()
