"""
GLSL Document Model
===================

A Document is an ordered list of lines with lazily computed tokens.

Tokens are cached per line: each token belongs to the line on which it
starts, so a block comment or a continued directive that spans several
lines is stored with its first line, and the lines it covers record it
as their enclosing token.

Incremental Re-lexing
---------------------
Editing a line throws away the cached tokens from the nearest preceding
line that starts outside any multi-line token; everything above stays.
Tokens are only re-lexed when asked for, and only as far as needed, so
re-indenting one line after an edit re-lexes a line or two.

Line numbers are 1-indexed throughout.
"""

from typing import Iterable, Optional
import logging
import re

from glsl_sdk.lang.lexer import GLSLLexer, Token
from glsl_sdk.errors import LexError

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def leading_columns(text: str, tab_width: int = 8) -> int:
    """
    Return the visual column at which the first non-blank character of
    `text` sits, expanding tabs to multiples of tab_width.
    """
    column = 0
    for char in text:
        if char == " ":
            column += 1
        elif char == "\t":
            column += tab_width - column % tab_width
        else:
            break
    return column


class Document:
    """
    Lines of GLSL source plus their tokens.

    Attributes:
        filename: Name used in lexical error locations
        newline: Line terminator to use when rendering the text
        trailing_newline: Whether the rendered text ends with a terminator
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        filename: str = "<input>",
        newline: str = "\n",
        trailing_newline: bool = False,
    ):
        self._lines: list[str] = []
        for text in lines:
            self._check_line(text)
            self._lines.append(text)

        self.filename = filename
        self.newline = newline
        self.trailing_newline = trailing_newline

        # Token cache, valid for the first self._valid lines
        self._valid = 0
        self._line_tokens: list[tuple[Token, ...]] = []
        self._owners: list[Optional[Token]] = []
        self._errors: list[LexError] = []

        self._text: Optional[str] = None

    @classmethod
    def from_text(cls, text: str, filename: str = "<input>") -> "Document":
        """
        Split text into a Document.

        A final line terminator does not start an extra empty line; it is
        remembered in trailing_newline instead.
        """
        match = _LINE_BREAK.search(text)
        newline = match.group() if match else "\n"
        lines = _LINE_BREAK.split(text) if text else []
        trailing = bool(lines) and lines[-1] == "" and len(lines) > 1
        if trailing:
            lines.pop()
        return cls(lines, filename=filename, newline=newline, trailing_newline=trailing)

    @staticmethod
    def _check_line(text: str) -> None:
        if _LINE_BREAK.search(text):
            raise ValueError("a document line cannot contain a line break")

    # =========================================================================
    # Line Access
    # =========================================================================

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._lines == other._lines

    def __repr__(self) -> str:
        return f"Document({self.filename!r}, {len(self._lines)} lines)"

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        """The lines joined with '\\n' (what the lexer sees)."""
        if self._text is None:
            self._text = "\n".join(self._lines)
        return self._text

    def render(self) -> str:
        """The lines joined with the document's own terminator."""
        text = self.newline.join(self._lines)
        if self.trailing_newline and self._lines:
            text += self.newline
        return text

    def line(self, line_number: int) -> str:
        """Return the text of a line."""
        return self._lines[self._index(line_number)]

    def indentation(self, line_number: int, tab_width: int = 8) -> int:
        """Return the leading whitespace width of a line, in columns."""
        return leading_columns(self.line(line_number), tab_width)

    def copy(self) -> "Document":
        """Return an independent Document with the same lines."""
        return Document(
            self._lines,
            filename=self.filename,
            newline=self.newline,
            trailing_newline=self.trailing_newline,
        )

    def _index(self, line_number: int) -> int:
        if not 1 <= line_number <= len(self._lines):
            raise IndexError(f"line {line_number} out of range 1..{len(self._lines)}")
        return line_number - 1

    def _line_offset(self, index: int) -> int:
        """Offset in self.text of the line at `index` (0-based)."""
        return sum(map(len, self._lines[:index])) + index

    # =========================================================================
    # Editing
    # =========================================================================

    def replace_line(self, line_number: int, text: str) -> None:
        """Replace the text of a line."""
        index = self._index(line_number)
        self._check_line(text)
        self._invalidate(index)
        self._lines[index] = text

    def insert_line(self, line_number: int, text: str) -> None:
        """Insert a line so that it becomes line `line_number`."""
        if not 1 <= line_number <= len(self._lines) + 1:
            raise IndexError(f"cannot insert at line {line_number}")
        self._check_line(text)
        # The line above gains or keeps its terminator
        self._invalidate(max(line_number - 2, 0))
        self._lines.insert(line_number - 1, text)

    def delete_line(self, line_number: int) -> None:
        """Delete a line."""
        index = self._index(line_number)
        self._invalidate(max(index - 1, 0))
        del self._lines[index]

    def _invalidate(self, index: int) -> None:
        """Drop cached tokens from the neutral line at or before `index`."""
        self._text = None

        if index >= self._valid:
            return

        while index > 0 and self._owners[index] is not None:
            index -= 1

        del self._line_tokens[index:]
        del self._owners[index:]
        self._errors = [e for e in self._errors if e.location.line <= index]
        self._valid = index

    # =========================================================================
    # Tokens
    # =========================================================================

    def tokens(self, line_number: int) -> tuple[Token, ...]:
        """Return the tokens that start on a line."""
        index = self._index(line_number)
        self._ensure_lexed(line_number)
        return self._line_tokens[index]

    def enclosing_token(self, line_number: int) -> Optional[Token]:
        """
        Return the multi-line token the line starts inside of, if any
        (a block comment, a continued directive, or the ERROR token of
        an unterminated comment).
        """
        index = self._index(line_number)
        self._ensure_lexed(line_number)
        return self._owners[index]

    @property
    def errors(self) -> list[LexError]:
        """Lexical errors of the whole document."""
        if self._lines:
            self._ensure_lexed(len(self._lines))
        return list(self._errors)

    def _ensure_lexed(self, line_number: int) -> None:
        """Lex forward until lines 1..line_number have final tokens."""
        if line_number <= self._valid:
            return

        first = self._valid
        count = len(self._lines)
        logger.debug(f"Re-lexing {self.filename} from line {first + 1}")

        lexer = GLSLLexer(
            self.text,
            self.filename,
            offset=self._line_offset(first),
            line=first + 1,
        )

        # Keyed by line number; sized by what is lexed, not by the document
        tokens: dict[int, list[Token]] = {}
        owners: dict[int, Token] = {}
        target = line_number

        for token in lexer.tokenize():
            if token.line > target:
                break
            tokens.setdefault(token.line, []).append(token)
            end_line = min(token.end_line, count)
            if end_line > token.line:
                for covered in range(token.line + 1, end_line + 1):
                    owners[covered] = token
                target = max(target, end_line)

        target = min(target, count)
        lexed = range(first + 1, target + 1)
        self._line_tokens.extend(tuple(tokens.get(number, ())) for number in lexed)
        self._owners.extend(owners.get(number) for number in lexed)
        self._errors.extend(e for e in lexer.errors if e.location.line <= target)
        self._valid = target
