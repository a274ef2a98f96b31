"""
GLSL Lexer (Tokenizer)
======================

This module implements a lossless lexer for the OpenGL Shading Language.
Every character of the input ends up in exactly one token, so the token
texts concatenate back to the source. Whitespace, newlines and comments
are tokens too: the indentation engine needs to see them.

Token Kinds
-----------
- IDENTIFIER: names, keywords and types alike (the classifier sorts them)
- NUMBER: integer and floating-point literals
- OPERATOR: +, -, *, /, ==, &&, ^^, <<=, ?, etc.
- PUNCTUATION: ( ) { } [ ] ; , . : and a '#' outside a directive
- LINE_COMMENT / BLOCK_COMMENT: // ... and /* ... */
- PREPROCESSOR: a whole directive line, following backslash continuations
- PREPROCESSOR_OPERATOR: '##' and 'defined' inside a directive (sub-tokens)
- WHITESPACE / NEWLINE: layout
- ERROR: text that could not be lexed (see below)

Number Formats
--------------
| Format      | Example        | Literal type |
|-------------|----------------|--------------|
| Decimal     | 42, 42u        | INT, UINT    |
| Octal       | 017, 017u      | INT, UINT    |
| Hexadecimal | 0xFF, 0xFFu    | INT, UINT    |
| Float       | 1.0, .5, 1e-3f | FLOAT        |
| Double      | 1.0lf, 2e8LF   | DOUBLE       |

Errors
------
The lexer never stops early. A malformed number, a stray character or an
unterminated block comment becomes an ERROR token and the matching
LexError is appended to `errors`. An unterminated block comment swallows
the rest of the input. Pass strict=True to raise the first error instead.

Example Usage
-------------
>>> from glsl_sdk.lang.lexer import tokenize
>>> for token in tokenize("float x;"):
...     print(token)
Token(IDENTIFIER, 'float', 1:1)
Token(WHITESPACE, ' ', 1:6)
Token(IDENTIFIER, 'x', 1:7)
Token(PUNCTUATION, ';', 1:8)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import logging
import string

from glsl_sdk.errors import (
    SourceLocation,
    LexError,
    UnterminatedCommentError,
    InvalidNumberError,
    InvalidCharacterError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kinds
# =============================================================================

class TokenKind(Enum):
    """Lexical categories produced by the GLSL lexer."""

    IDENTIFIER = auto()
    NUMBER = auto()
    OPERATOR = auto()
    PUNCTUATION = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()
    PREPROCESSOR = auto()
    PREPROCESSOR_OPERATOR = auto()  # only ever found in Token.parts
    WHITESPACE = auto()
    NEWLINE = auto()
    ERROR = auto()


class LiteralType(Enum):
    """Type of a numeric literal, as selected by its form and suffix."""

    INT = auto()
    UINT = auto()
    FLOAT = auto()
    DOUBLE = auto()


# Kinds that carry no code
TRIVIA_KINDS = frozenset({
    TokenKind.WHITESPACE,
    TokenKind.NEWLINE,
    TokenKind.LINE_COMMENT,
    TokenKind.BLOCK_COMMENT,
})


# =============================================================================
# Operator Tables
# =============================================================================

# Longest first, so the first match is the maximal munch
OPERATORS: tuple[str, ...] = (
    "<<=", ">>=",
    "++", "--", "<<", ">>", "<=", ">=", "==", "!=",
    "&&", "||", "^^",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=",
    "+", "-", "*", "/", "%", "<", ">", "=", "!", "~", "&", "|", "^", "?",
)

PUNCTUATION = frozenset("(){}[];,.:#")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of GLSL source.

    Attributes:
        kind: The TokenKind classification
        text: The exact source text of the token
        start: Absolute offset of the first character
        end: Absolute offset one past the last character
        line: Line number of the first character (1-indexed)
        column: Column number of the first character (1-indexed)
        literal: LiteralType for NUMBER tokens, None otherwise
        parts: PREPROCESSOR_OPERATOR sub-tokens of a directive
    """
    kind: TokenKind
    text: str
    start: int
    end: int
    line: int
    column: int
    literal: Optional[LiteralType] = None
    parts: tuple["Token", ...] = ()

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def end_line(self) -> int:
        """Line number on which the token's last line break leaves it."""
        breaks = self.text.count("\n") + self.text.count("\r") - self.text.count("\r\n")
        if self.kind is TokenKind.NEWLINE:
            return self.line
        return self.line + breaks

    @property
    def is_trivia(self) -> bool:
        """Return True for whitespace, newlines and comments."""
        return self.kind in TRIVIA_KINDS

    @property
    def directive(self) -> Optional[str]:
        """Name of a preprocessor directive ('define', 'version', ...)."""
        if self.kind is not TokenKind.PREPROCESSOR:
            return None
        body = self.text[1:].lstrip(" \t")
        end = 0
        while end < len(body) and body[end] in GLSLLexer.IDENT_CHARS:
            end += 1
        return body[:end] or None


# =============================================================================
# Lexer Implementation
# =============================================================================

class GLSLLexer:
    """
    Tokenizes GLSL source code.

    The lexer can start at any line boundary of the source: pass the
    absolute offset of the line start and its line number, and the
    produced tokens carry absolute offsets and line numbers. This is
    what lets a Document re-lex only the lines after an edit.

    Usage:
        lexer = GLSLLexer(source_text, filename)
        tokens = list(lexer.tokenize())
        for error in lexer.errors:
            print(error)

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        strict: Raise the first LexError instead of recording it
        errors: LexErrors recorded so far
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    WHITESPACE = " \t\f\v"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        offset: int = 0,
        line: int = 1,
        strict: bool = False,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The GLSL source code to tokenize
            filename: Name of the source file (for error messages)
            offset: Absolute offset to start lexing at (a line start)
            line: Line number of that offset
            strict: Raise on the first lexical error
        """
        self.source = source
        self.filename = filename
        self.strict = strict
        self.errors: list[LexError] = []

        self._pos = offset
        self._line = line
        self._line_start_pos = self._find_line_start(offset)
        self._column = offset - self._line_start_pos + 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects covering the source from the start offset on

        Raises:
            LexError: Only in strict mode
        """
        while not self._at_end():
            yield self._scan_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at the character at current position + offset, '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """
        Consume and return the current character, advancing position.

        '\\n', '\\r\\n' and a lone '\\r' each end a line.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n" or (char == "\r" and self._peek() != "\n"):
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _advance_while(self, chars: str) -> None:
        while self._peek() and self._peek() in chars:
            self._advance()

    def _find_line_start(self, offset: int) -> int:
        newline = max(
            self.source.rfind("\n", 0, offset),
            self.source.rfind("\r", 0, offset),
        )
        return newline + 1

    def _at_line_start(self) -> bool:
        """True if only whitespace precedes the current position on its line."""
        prefix = self.source[self._line_start_pos:self._pos]
        return prefix.strip(self.WHITESPACE) == ""

    # =========================================================================
    # Token Creation and Errors
    # =========================================================================

    def _make_token(
        self,
        kind: TokenKind,
        start: int,
        start_line: int,
        start_column: int,
        literal: Optional[LiteralType] = None,
        parts: tuple[Token, ...] = (),
    ) -> Token:
        return Token(
            kind=kind,
            text=self.source[start:self._pos],
            start=start,
            end=self._pos,
            line=start_line,
            column=start_column,
            literal=literal,
            parts=parts,
        )

    def _report(self, error: LexError) -> None:
        """Record a lexical error, or raise it in strict mode."""
        if self.strict:
            raise error
        logger.debug(f"Lexical error recorded: {error.message} at {error.location}")
        self.errors.append(error)

    def _get_line_text(self, line_start: int) -> str:
        """Get the source line starting at line_start, for error context."""
        end = len(self.source)
        for terminator in "\r\n":
            found = self.source.find(terminator, line_start)
            if found != -1:
                end = min(end, found)
        return self.source[line_start:end]

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start = self._pos
        start_line = self._line
        start_column = self._column
        line_start = self._line_start_pos

        char = self._peek()

        if char in self.WHITESPACE:
            self._advance_while(self.WHITESPACE)
            return self._make_token(TokenKind.WHITESPACE, start, start_line, start_column)

        if char in "\r\n":
            if char == "\r" and self._peek(1) == "\n":
                self._advance()
            self._advance()
            return self._make_token(TokenKind.NEWLINE, start, start_line, start_column)

        if char == "/" and self._peek(1) == "/":
            self._skip_to_line_end()
            return self._make_token(TokenKind.LINE_COMMENT, start, start_line, start_column)

        if char == "/" and self._peek(1) == "*":
            if self._skip_block_comment():
                return self._make_token(TokenKind.BLOCK_COMMENT, start, start_line, start_column)
            self._report(UnterminatedCommentError(
                SourceLocation(self.filename, start_line, start_column),
                self._get_line_text(line_start),
            ))
            return self._make_token(TokenKind.ERROR, start, start_line, start_column)

        if char == "#" and self._at_line_start():
            return self._scan_directive(start, start_line, start_column)

        if char in self.IDENT_START:
            self._advance_while(self.IDENT_CHARS)
            return self._make_token(TokenKind.IDENTIFIER, start, start_line, start_column)

        if char.isdigit() or (char == "." and self._peek(1).isdigit()):
            return self._scan_number(start, start_line, start_column, line_start)

        return self._scan_operator(start, start_line, start_column, line_start)

    def _skip_to_line_end(self) -> None:
        while not self._at_end() and self._peek() not in "\r\n":
            self._advance()

    def _skip_block_comment(self) -> bool:
        """
        Skip a block comment (/* ... */).

        Returns:
            False if the input ended before the closing */
        """
        self._advance()  # consume /
        self._advance()  # consume *

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return True
            self._advance()

        return False

    def _scan_directive(
        self,
        start: int,
        start_line: int,
        start_column: int,
    ) -> Token:
        """
        Scan a preprocessor directive up to the end of its logical line.

        A backslash right before the line break continues the directive
        on the next line. Comments inside the directive belong to it,
        except an unterminated block comment, which ends the directive.
        '##' and the word 'defined' are collected as sub-tokens.
        """
        parts = []
        self._advance()  # consume #

        while not self._at_end():
            char = self._peek()

            if char == "\\" and self._peek(1) in ("\r", "\n"):
                self._advance()
                if self._peek() == "\r" and self._peek(1) == "\n":
                    self._advance()
                self._advance()
                continue

            if char in "\r\n":
                break

            if char == "/" and self._peek(1) == "/":
                self._skip_to_line_end()
                continue

            if char == "/" and self._peek(1) == "*":
                saved = (self._pos, self._line, self._column, self._line_start_pos)
                if not self._skip_block_comment():
                    # End the directive before the comment; the next scan
                    # reports the comment as unterminated on its own
                    self._pos, self._line, self._column, self._line_start_pos = saved
                    break
                continue

            part_start = self._pos
            part_line = self._line
            part_column = self._column

            if char == "#" and self._peek(1) == "#":
                self._advance()
                self._advance()
                parts.append(self._make_token(
                    TokenKind.PREPROCESSOR_OPERATOR, part_start, part_line, part_column,
                ))
                continue

            if char in self.IDENT_START:
                self._advance_while(self.IDENT_CHARS)
                if self.source[part_start:self._pos] == "defined":
                    parts.append(self._make_token(
                        TokenKind.PREPROCESSOR_OPERATOR, part_start, part_line, part_column,
                    ))
                continue

            self._advance()

        return self._make_token(
            TokenKind.PREPROCESSOR, start, start_line, start_column, parts=tuple(parts),
        )

    def _scan_number(
        self,
        start: int,
        start_line: int,
        start_column: int,
        line_start: int,
    ) -> Token:
        """
        Scan a numeric literal.

        Handles decimal, octal and hexadecimal integers with an optional
        u/U suffix, and floating-point literals with an optional f/F or
        lf/LF suffix.
        """
        hint = None

        if self._peek() == "0" and self._peek(1) in ("x", "X"):
            self._advance()
            self._advance()
            digits_start = self._pos
            self._advance_while(string.hexdigits)
            literal = LiteralType.INT
            if self._pos == digits_start:
                hint = "hexadecimal literals need at least one digit"
            elif self._peek() in ("u", "U"):
                self._advance()
                literal = LiteralType.UINT
        else:
            literal, hint = self._scan_decimal_or_float(start)

        # Identifier characters or a dot glued to the literal
        if self._peek() and self._peek() in self.IDENT_CHARS + ".":
            if hint is None:
                if literal in (LiteralType.FLOAT, LiteralType.DOUBLE) and self._peek() in "uU":
                    hint = "unsigned suffix 'u' only applies to integer literals"
                else:
                    hint = "separate the number from the following name"
            self._advance_while(self.IDENT_CHARS + ".")

        if hint is not None:
            text = self.source[start:self._pos]
            self._report(InvalidNumberError(
                text,
                SourceLocation(self.filename, start_line, start_column),
                hint=hint,
                source_line=self._get_line_text(line_start),
            ))
            return self._make_token(TokenKind.ERROR, start, start_line, start_column)

        return self._make_token(TokenKind.NUMBER, start, start_line, start_column, literal=literal)

    def _scan_decimal_or_float(self, start: int) -> tuple[LiteralType, Optional[str]]:
        """Scan a decimal/octal integer or a float; return (type, error hint)."""
        self._advance_while(string.digits)
        is_float = False

        if self._peek() == ".":
            self._advance()
            self._advance_while(string.digits)
            is_float = True

        if self._peek() in ("e", "E"):
            is_float = True
            self._advance()
            if self._peek() in ("+", "-"):
                self._advance()
            if not self._peek().isdigit():
                return LiteralType.FLOAT, "exponent needs at least one digit"
            self._advance_while(string.digits)

        if is_float:
            if self._peek() in ("f", "F"):
                self._advance()
                return LiteralType.FLOAT, None
            if self.source[self._pos:self._pos + 2] in ("lf", "LF"):
                self._advance()
                self._advance()
                return LiteralType.DOUBLE, None
            return LiteralType.FLOAT, None

        digits = self.source[start:self._pos]
        if len(digits) > 1 and digits.startswith("0") and any(d in "89" for d in digits):
            return LiteralType.INT, "octal literals only use digits 0-7"

        if self._peek() in ("u", "U"):
            self._advance()
            return LiteralType.UINT, None
        return LiteralType.INT, None

    def _scan_operator(
        self,
        start: int,
        start_line: int,
        start_column: int,
        line_start: int,
    ) -> Token:
        """Scan an operator or punctuation character (maximal munch)."""
        for operator in OPERATORS:
            if self.source.startswith(operator, self._pos):
                for _ in operator:
                    self._advance()
                return self._make_token(TokenKind.OPERATOR, start, start_line, start_column)

        char = self._advance()
        if char in PUNCTUATION:
            return self._make_token(TokenKind.PUNCTUATION, start, start_line, start_column)

        self._report(InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_line_text(line_start),
        ))
        return self._make_token(TokenKind.ERROR, start, start_line, start_column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    text: str,
    *,
    offset: int = 0,
    line: int = 1,
    filename: str = "<input>",
    strict: bool = False,
) -> Iterator[Token]:
    """
    Lazily tokenize GLSL text.

    Args:
        text: The source text
        offset: Absolute offset of a line start to begin at
        line: Line number of that offset
        filename: Name used in error locations
        strict: Raise the first LexError instead of recording it

    Returns:
        An iterator of Tokens
    """
    return GLSLLexer(text, filename, offset=offset, line=line, strict=strict).tokenize()


def line_offset(text: str, line: int) -> int:
    """
    Return the absolute offset at which 1-indexed `line` starts.

    Raises:
        ValueError: If the text has fewer lines
    """
    if line < 1:
        raise ValueError(f"line numbers start at 1, got {line}")
    offset = 0
    current = 1
    while current < line:
        newline = text.find("\n", offset)
        carriage = text.find("\r", offset)
        if carriage != -1 and (newline == -1 or carriage < newline):
            offset = carriage + 2 if text.startswith("\r\n", carriage) else carriage + 1
        elif newline != -1:
            offset = newline + 1
        else:
            raise ValueError(f"text has fewer than {line} lines")
        current += 1
    return offset
