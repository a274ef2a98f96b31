"""
GLSL SDK - Editing Core for the OpenGL Shading Language
=======================================================

This package provides the language-aware parts of a GLSL editing mode,
independent of any host editor: tokenizing, identifier classification
for highlighting, and C-style indentation.

Main Components
---------------
- **lang**: lexer, vocabulary tables and classifier
    Turns shader source into tokens and tells types, qualifiers,
    builtins and deprecated names apart

- **indent**: document model, indentation engine and region formatter
    Computes the indentation of a line and re-indents ranges (glslfmt)

- **config**: vocabulary additions and indentation settings

Quick Start
-----------
Classify a name:
    >>> from glsl_sdk import classify
    >>> classify("texture2D").value
    'deprecated-builtin'

Re-indent a shader:
    >>> from glsl_sdk import reindent_text
    >>> reindent_text("void main() {\\nreturn;\\n}\\n")
    'void main() {\\n    return;\\n}\\n'

Or use the command-line tools:
    $ glslfmt -w blur.frag
    $ glsltok --categories blur.frag

Reference Documentation
-----------------------
- GLSL 4.60 Specification: https://registry.khronos.org/OpenGL/specs/gl/GLSLangSpec.4.60.html
- OpenGL 4 Reference Pages: https://registry.khronos.org/OpenGL-Refpages/gl4/
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from glsl_sdk.errors import (
    GLSLError,
    SourceLocation,
    LexError,
    UnterminatedCommentError,
    InvalidNumberError,
    InvalidCharacterError,
    ConfigError,
)
from glsl_sdk.config import VocabularyConfig, IndentConfig, ConfigStore
from glsl_sdk.lang import (
    GLSLLexer,
    Token,
    TokenKind,
    LiteralType,
    tokenize,
    Classifier,
    SymbolCategory,
    classify,
    man_page_url,
)
from glsl_sdk.indent import (
    Document,
    IndentContext,
    context_for,
    indent_for,
    reindent_region,
    reindent_text,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "GLSLError",
    "SourceLocation",
    "LexError",
    "UnterminatedCommentError",
    "InvalidNumberError",
    "InvalidCharacterError",
    "ConfigError",
    # Configuration
    "VocabularyConfig",
    "IndentConfig",
    "ConfigStore",
    # Language
    "GLSLLexer",
    "Token",
    "TokenKind",
    "LiteralType",
    "tokenize",
    "Classifier",
    "SymbolCategory",
    "classify",
    "man_page_url",
    # Indentation
    "Document",
    "IndentContext",
    "context_for",
    "indent_for",
    "reindent_region",
    "reindent_text",
]
