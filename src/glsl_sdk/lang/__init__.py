"""
GLSL Language Support
=====================

Lexing and identifier classification for the OpenGL Shading Language:

- lexer: lossless tokenizer (restartable at any line start)
- vocabulary: fixed word tables (types, qualifiers, builtins, ...)
- classifier: identifier -> SymbolCategory lookup
- docs: reference page URLs for builtins

Usage
-----
>>> from glsl_sdk.lang import tokenize, Classifier
>>> classifier = Classifier()
>>> for token, category in classifier.categorize(tokenize("vec4 c;")):
...     print(token.text, category.value)
vec4 type
c plain-identifier
"""

from glsl_sdk.lang.lexer import (
    GLSLLexer,
    Token,
    TokenKind,
    LiteralType,
    tokenize,
    line_offset,
)
from glsl_sdk.lang.classifier import Classifier, SymbolCategory, classify
from glsl_sdk.lang.docs import man_page_url, symbol_at

__all__ = [
    # Lexer
    "GLSLLexer",
    "Token",
    "TokenKind",
    "LiteralType",
    "tokenize",
    "line_offset",
    # Classifier
    "Classifier",
    "SymbolCategory",
    "classify",
    # Reference pages
    "man_page_url",
    "symbol_at",
]
