"""
GLSL Indentation Engine
=======================

Computes the indentation column of a line from the block structure of
the lines above it.

Rules
-----
1. Preprocessor directives go to column 0. Continuation lines of a
   directive (after a trailing backslash) keep their own indentation.
2. Inside a block comment:
   - a line starting with '*' takes the indentation of the comment's
     first line plus comment_offset;
   - any other line takes the indentation of the comment's first line;
   - if the comment is never closed, the line keeps the indentation of
     the line above it.
3. Otherwise the base is the indentation of the line holding the
   innermost unmatched '{', '(' or '[', plus one unit (0 at top level).
4. A line starting with a closing bracket lines up with the line of its
   matching opener.
5. 'case' and 'default' labels sit one unit left of the switch body.
6. A statement continued from the previous code line (one not ending in
   ';', '{', '}' or a label's ':') gets one extra unit, unless the
   innermost opener is '(' or '[' or the line starts with '{'.

Unbalanced brackets never raise: a closer without a matching opener is
ignored, so the nesting depth cannot go negative.

A BlockScanner carries the structural state forward one line at a time,
so a pass over many lines (the region formatter) scans each line once.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from glsl_sdk.config import IndentConfig
from glsl_sdk.indent.document import Document
from glsl_sdk.lang.lexer import Token, TokenKind


OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")": "(", "]": "[", "}": "{"}

STATEMENT_TERMINATORS = frozenset({";", "{", "}"})
LABEL_KEYWORDS = frozenset({"case", "default"})

_CODE_KINDS = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.NUMBER,
    TokenKind.OPERATOR,
    TokenKind.PUNCTUATION,
})


@dataclass(frozen=True)
class Opener:
    """An unmatched opening bracket and the line it is on."""
    char: str
    line: int


@dataclass(frozen=True)
class IndentContext:
    """
    Structural state at the start of a line.

    Attributes:
        stack: Unmatched openers from the lines above, innermost last
        continued: The previous code line did not end a statement
        in_preprocessor: The line continues a directive
        in_comment: The line starts inside a block comment
        enclosing: The multi-line token the line starts inside of
    """
    stack: tuple[Opener, ...] = ()
    continued: bool = False
    in_preprocessor: bool = False
    in_comment: bool = False
    enclosing: Optional[Token] = None

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def innermost(self) -> Optional[Opener]:
        return self.stack[-1] if self.stack else None


def _is_code(token: Token) -> bool:
    if token.kind in _CODE_KINDS:
        return True
    # Bad numbers and stray characters still take part in statements;
    # an unterminated comment does not
    return token.kind is TokenKind.ERROR and not token.text.startswith("/*")


def _is_unterminated_comment(token: Token) -> bool:
    return token.kind is TokenKind.ERROR and token.text.startswith("/*")


def _code_tokens(tokens: Sequence[Token]) -> list[Token]:
    return [token for token in tokens if _is_code(token)]


def _is_label(code: Sequence[Token]) -> bool:
    """True for a 'case ...:' or 'default:' line."""
    return (
        bool(code)
        and code[0].kind is TokenKind.IDENTIFIER
        and code[0].text in LABEL_KEYWORDS
    )


def _ends_statement(code: Sequence[Token]) -> bool:
    last = code[-1].text
    if last in STATEMENT_TERMINATORS:
        return True
    return last == ":" and _is_label(code)


def _apply_brackets(stack: list[Opener], code: Sequence[Token], line_number: int) -> None:
    for token in code:
        if token.kind is not TokenKind.PUNCTUATION:
            continue
        if token.text in OPENERS:
            stack.append(Opener(token.text, line_number))
        elif token.text in CLOSERS:
            opener = CLOSERS[token.text]
            for position in range(len(stack) - 1, -1, -1):
                if stack[position].char == opener:
                    del stack[position:]
                    break
            # No matching opener: ignore the closer


class BlockScanner:
    """
    Opener stack and continuation state, fed one line at a time.

    Feeding lines 1..n-1 in order and then calling context() gives the
    same IndentContext as context_for(document, n).
    """

    def __init__(self):
        self._stack: list[Opener] = []
        self._previous_code: list[Token] = []

    def feed(self, tokens: Sequence[Token], line_number: int) -> None:
        """Account for the tokens that start on a line."""
        code = _code_tokens(tokens)
        if not code:
            return
        _apply_brackets(self._stack, code, line_number)
        self._previous_code = code

    def context(self, enclosing: Optional[Token] = None) -> IndentContext:
        """State at the start of the next line, given its enclosing token."""
        in_comment = enclosing is not None and (
            enclosing.kind is TokenKind.BLOCK_COMMENT or _is_unterminated_comment(enclosing)
        )
        in_preprocessor = enclosing is not None and enclosing.kind is TokenKind.PREPROCESSOR
        previous = self._previous_code
        return IndentContext(
            stack=tuple(self._stack),
            continued=bool(previous) and not _ends_statement(previous),
            in_preprocessor=in_preprocessor,
            in_comment=in_comment,
            enclosing=enclosing,
        )


def context_for(document: Document, line_number: int) -> IndentContext:
    """
    Derive the structural state at the start of a line.

    Raises:
        IndexError: If line_number is outside the document
    """
    enclosing = document.enclosing_token(line_number)
    scanner = BlockScanner()
    for number in range(1, line_number):
        scanner.feed(document.tokens(number), number)
    return scanner.context(enclosing)


def _comment_indent(
    document: Document,
    line_number: int,
    comment: Token,
    config: IndentConfig,
    indentation: Callable[[int], int],
) -> int:
    if _is_unterminated_comment(comment):
        return indentation(line_number - 1)
    if document.line(line_number).lstrip(" \t").startswith("*"):
        return indentation(comment.line) + config.comment_offset
    return indentation(comment.line)


def indent_in_context(
    document: Document,
    line_number: int,
    context: IndentContext,
    config: IndentConfig,
    indentation: Optional[Callable[[int], int]] = None,
) -> int:
    """
    Compute the indentation column for a line whose context is known.

    Args:
        document: The document holding the line
        line_number: The line to indent (1-indexed)
        context: Structural state at the start of the line
        config: Indentation settings
        indentation: Maps a line number to its current indentation in
            columns (default: measure the document's lines). The region
            formatter passes the lines it has already re-indented.
    """
    if indentation is None:
        def indentation(number: int) -> int:
            return document.indentation(number, config.tab_width)

    if context.in_comment:
        return _comment_indent(document, line_number, context.enclosing, config, indentation)
    if context.in_preprocessor:
        return indentation(line_number)

    tokens = document.tokens(line_number)
    first = next((token for token in tokens if token.kind is not TokenKind.WHITESPACE), None)
    if first is not None and first.kind is TokenKind.PREPROCESSOR:
        return 0

    code = _code_tokens(tokens)
    leading = code[0] if code else None

    # Closing bracket: line up with the matching opener
    if leading is not None and leading.kind is TokenKind.PUNCTUATION and leading.text in CLOSERS:
        wanted = CLOSERS[leading.text]
        for opener in reversed(context.stack):
            if opener.char == wanted:
                return indentation(opener.line)

    innermost = context.innermost
    if innermost is None:
        base = 0
    else:
        base = indentation(innermost.line) + config.unit

    if _is_label(code) and innermost is not None and innermost.char == "{":
        return max(base - config.unit, 0)

    starts_block = leading is not None and leading.text in ("{",) + tuple(CLOSERS)
    in_statement_context = innermost is None or innermost.char == "{"
    if context.continued and in_statement_context and not starts_block and not _is_label(code):
        return base + config.unit

    return base


def indent_for(
    document: Document,
    line_number: int,
    config: Optional[IndentConfig] = None,
) -> int:
    """
    Compute the indentation column for a line.

    Args:
        document: The document holding the line
        line_number: The line to indent (1-indexed)
        config: Indentation settings (default: IndentConfig())

    Returns:
        A non-negative column

    Raises:
        IndexError: If line_number is outside a non-empty document
    """
    if config is None:
        config = IndentConfig()
    if len(document) == 0:
        return 0

    context = context_for(document, line_number)
    return indent_in_context(document, line_number, context, config)
