"""
GLSL Reference Page Lookup
==========================

Finds the OpenGL 4 reference page documenting a builtin function or
variable. Only the URL is produced; opening it is up to the caller.

>>> man_page_url("smoothstep")
'https://registry.khronos.org/OpenGL-Refpages/gl4/html/smoothstep.xhtml'
>>> man_page_url("texture2D") is None   # deprecated, no gl4 page
True
"""

from typing import Optional

from glsl_sdk.lang.lexer import GLSLLexer
from glsl_sdk.lang.vocabulary import BUILTIN_FUNCTIONS, BUILTIN_VARIABLES

MAN_PAGE_BASE_URL = "https://registry.khronos.org/OpenGL-Refpages/gl4/html/"

# Builtins documented on a page named after a sibling
MAN_PAGE_ALIASES = {
    "dFdxFine": "dFdx",
    "dFdxCoarse": "dFdx",
    "dFdyFine": "dFdx",
    "dFdyCoarse": "dFdx",
    "dFdy": "dFdx",
    "fwidthFine": "fwidth",
    "fwidthCoarse": "fwidth",
    "packSnorm2x16": "packUnorm",
    "packSnorm4x8": "packUnorm",
    "packUnorm2x16": "packUnorm",
    "packUnorm4x8": "packUnorm",
    "unpackSnorm2x16": "unpackUnorm",
    "unpackSnorm4x8": "unpackUnorm",
    "unpackUnorm2x16": "unpackUnorm",
    "unpackUnorm4x8": "unpackUnorm",
    "floatBitsToUint": "floatBitsToInt",
    "uintBitsToFloat": "intBitsToFloat",
    "imulExtended": "umulExtended",
}


def man_page_url(symbol: str, base_url: str = MAN_PAGE_BASE_URL) -> Optional[str]:
    """
    Return the reference page URL for a builtin, or None.

    Deprecated builtins, keywords, types and user names have no page.
    """
    if symbol not in BUILTIN_FUNCTIONS and symbol not in BUILTIN_VARIABLES:
        return None
    page = MAN_PAGE_ALIASES.get(symbol, symbol)
    return f"{base_url}{page}.xhtml"


def symbol_at(text: str, offset: int) -> Optional[str]:
    """
    Return the identifier touching `offset` in text, or None.

    An offset right after the last character of a name still selects it,
    matching how a cursor sitting at the end of a word behaves.
    """
    if not 0 <= offset <= len(text):
        return None

    start = offset
    while start > 0 and text[start - 1] in GLSLLexer.IDENT_CHARS:
        start -= 1
    end = offset
    while end < len(text) and text[end] in GLSLLexer.IDENT_CHARS:
        end += 1

    word = text[start:end]
    if not word or word[0] not in GLSLLexer.IDENT_START:
        return None
    return word
