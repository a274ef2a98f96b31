"""
GLSL Identifier Classifier
==========================

Maps identifiers to semantic categories by looking them up in the
vocabulary tables, merged with the user additions of a VocabularyConfig.
The result is what a highlighter maps to a visual style; this module
never deals with styles itself.

Lookup Order
------------
The fixed tables are disjoint, but user additions may collide with
them. The first matching set wins:

    deprecated builtin > deprecated qualifier > deprecated variable
    > reserved > keyword > qualifier > type > builtin
    > preprocessor builtin > plain identifier

Deprecation comes first so that a deprecated name is always flagged,
whatever else it was added as.
"""

from enum import Enum
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from glsl_sdk.config import VocabularyConfig
from glsl_sdk.lang.lexer import Token, TokenKind
from glsl_sdk.lang import vocabulary


class SymbolCategory(Enum):
    """Semantic category of an identifier."""

    TYPE = "type"
    QUALIFIER = "qualifier"
    KEYWORD = "keyword"
    RESERVED = "reserved"
    BUILTIN = "builtin"
    DEPRECATED_BUILTIN = "deprecated-builtin"
    DEPRECATED_QUALIFIER = "deprecated-qualifier"
    DEPRECATED_VARIABLE = "deprecated-variable"
    PREPROCESSOR_DIRECTIVE = "preprocessor-directive"
    PREPROCESSOR_BUILTIN = "preprocessor-builtin"
    PLAIN_IDENTIFIER = "plain-identifier"

    @property
    def is_deprecated(self) -> bool:
        return self in (
            SymbolCategory.DEPRECATED_BUILTIN,
            SymbolCategory.DEPRECATED_QUALIFIER,
            SymbolCategory.DEPRECATED_VARIABLE,
        )


class Classifier:
    """
    Classifies identifiers against a fixed vocabulary plus user additions.

    A Classifier is immutable: its sets are merged once at construction.
    To change the vocabulary, build a new Classifier (ConfigStore does
    this on load and reset).

    Usage:
        classifier = Classifier(VocabularyConfig.create(types=["Light"]))
        classifier.classify("Light")      # SymbolCategory.TYPE
        classifier.classify("texture2D")  # SymbolCategory.DEPRECATED_BUILTIN
    """

    def __init__(self, config: Optional[VocabularyConfig] = None):
        self.config = config if config is not None else VocabularyConfig()

        self._lookup: tuple[tuple[frozenset[str], SymbolCategory], ...] = (
            (vocabulary.DEPRECATED_BUILTINS, SymbolCategory.DEPRECATED_BUILTIN),
            (vocabulary.DEPRECATED_QUALIFIERS, SymbolCategory.DEPRECATED_QUALIFIER),
            (vocabulary.DEPRECATED_VARIABLES, SymbolCategory.DEPRECATED_VARIABLE),
            (vocabulary.RESERVED, SymbolCategory.RESERVED),
            (vocabulary.KEYWORDS | self.config.extra_keywords, SymbolCategory.KEYWORD),
            (vocabulary.QUALIFIERS | self.config.extra_qualifiers, SymbolCategory.QUALIFIER),
            (vocabulary.TYPES | self.config.extra_types, SymbolCategory.TYPE),
            (vocabulary.BUILTINS | self.config.extra_builtins, SymbolCategory.BUILTIN),
            (vocabulary.PREPROCESSOR_BUILTINS, SymbolCategory.PREPROCESSOR_BUILTIN),
        )
        self._directive_words = (
            vocabulary.PREPROCESSOR_DIRECTIVES | vocabulary.PREPROCESSOR_EXPRESSIONS
        )

    def classify(self, identifier: str, *, in_directive: bool = False) -> SymbolCategory:
        """
        Return the category of an identifier.

        Args:
            identifier: The name to look up (case-sensitive)
            in_directive: The name follows '#' or appears as a directive
                operator, so directive names take precedence

        Returns:
            The first matching SymbolCategory, PLAIN_IDENTIFIER if none
        """
        if in_directive and identifier in self._directive_words:
            return SymbolCategory.PREPROCESSOR_DIRECTIVE

        for words, category in self._lookup:
            if identifier in words:
                return category

        return SymbolCategory.PLAIN_IDENTIFIER

    def categorize(self, tokens: Iterable[Token]) -> Iterator[tuple[Token, SymbolCategory]]:
        """
        Pair tokens with their categories, for a highlighting collaborator.

        Identifiers are classified by name. A directive is classified by
        its directive name and is followed by its '##'/'defined' parts.
        Other tokens are skipped.
        """
        for token in tokens:
            if token.kind is TokenKind.IDENTIFIER:
                yield token, self.classify(token.text)
            elif token.kind is TokenKind.PREPROCESSOR:
                name = token.directive
                if name is None:
                    yield token, SymbolCategory.PLAIN_IDENTIFIER
                else:
                    yield token, self.classify(name, in_directive=True)
                for part in token.parts:
                    yield part, SymbolCategory.PREPROCESSOR_DIRECTIVE


@lru_cache(maxsize=16)
def _classifier_for(config: VocabularyConfig) -> Classifier:
    return Classifier(config)


def classify(identifier: str, config: Optional[VocabularyConfig] = None) -> SymbolCategory:
    """Classify one identifier without managing a Classifier instance."""
    return _classifier_for(config if config is not None else VocabularyConfig()).classify(identifier)
