"""
GLSL SDK Error Hierarchy
========================

This module defines the exception hierarchy for the GLSL SDK.
All exceptions inherit from GLSLError, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
GLSLError (base)
├── LexError (lexical errors)
│   ├── UnterminatedCommentError - /* without a closing */
│   ├── InvalidNumberError - malformed numeric literal
│   └── InvalidCharacterError - character outside the GLSL alphabet
└── ConfigError - malformed or duplicate vocabulary/indent settings

Lexical errors are normally not raised: the lexer records them and keeps
going, turning the offending text into an ERROR token. They are raised only
when the lexer runs in strict mode.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class GLSLError(Exception):
    """
    Base exception for all GLSL SDK errors.

    Carries an optional source location, hint and source line so that
    every error prints in the same compiler-style format:

        try:
            config = VocabularyConfig.from_file("glsl.json")
        except GLSLError as e:
            print(f"Error: {e}")
    """

    def __init__(
        self,
        message: str,
        location: Optional["SourceLocation"] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            blur.frag:12:17: error: invalid numeric literal '0x'
                float w = 0x;
                          ^
            hint: hexadecimal literals need at least one digit
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(GLSLError):
    """
    Lexical error in GLSL source.

    Raised (in strict mode) or recorded (by default) when the lexer
    meets text it cannot turn into a valid token. The text is still
    emitted as an ERROR token so the rest of the pass can continue.
    """
    pass


class UnterminatedCommentError(LexError):
    """
    Block comment without a closing */.

    Example:
        /* fade factor
        float fade = 0.5;     // everything from /* on is the comment
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated block comment",
            location=location,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )


class InvalidNumberError(LexError):
    """
    Malformed numeric literal.

    Examples:
        - 0x (no hexadecimal digits)
        - 09 (digit 9 in an octal literal)
        - 1.0e (exponent without digits)
        - 1.5u (unsigned suffix on a floating-point literal)
        - 12px (identifier characters glued to a number)
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"invalid numeric literal '{text}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidCharacterError(LexError):
    """
    Character that cannot start any GLSL token (e.g. '@', '$', '"').
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigError(GLSLError):
    """
    Invalid configuration.

    Raised when a vocabulary or indentation configuration is loaded with
    a malformed entry (not an identifier, wrong value type, unknown key),
    a name listed twice, or from a file that cannot be read or decoded.
    The configuration that was active before the failed load stays active.

    Attributes:
        key: The configuration key that was rejected (if known)
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.key = key
        super().__init__(message, hint=hint)
