"""
GLSL SDK - Configuration
========================

Vocabulary and indentation settings. Configuration can come from:
- Default values (defined here)
- Python mappings or a JSON file
- Environment variables

Both config classes are frozen dataclasses: a loaded configuration is a
value, never mutated in place. ConfigStore holds the active vocabulary
and swaps it only when a new one loads cleanly.

JSON File Format
----------------
    {
        "types": ["Light", "Material"],
        "qualifiers": [],
        "keywords": [],
        "builtins": ["saturate"],
        "indent": {"unit": 2, "use_tabs": false, "tab_width": 8}
    }

Environment Variables
---------------------
    GLSL_EXTRA_TYPES, GLSL_EXTRA_QUALIFIERS,
    GLSL_EXTRA_KEYWORDS, GLSL_EXTRA_BUILTINS   comma-separated names
    GLSL_INDENT_UNIT, GLSL_TAB_WIDTH           integers
    GLSL_INDENT_TABS                           1/true/yes to indent with tabs
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union
import json
import logging
import os
import re

from glsl_sdk.errors import ConfigError

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

VOCABULARY_KEYS = ("types", "qualifiers", "keywords", "builtins")

_ENV_VOCABULARY = {
    "types": "GLSL_EXTRA_TYPES",
    "qualifiers": "GLSL_EXTRA_QUALIFIERS",
    "keywords": "GLSL_EXTRA_KEYWORDS",
    "builtins": "GLSL_EXTRA_BUILTINS",
}


def _validate_names(key: str, values: Any) -> frozenset[str]:
    """
    Validate one list of user-supplied names.

    Raises:
        ConfigError: If the value is not a list of identifiers, or a
            name appears twice
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ConfigError(
            f"'{key}' must be a list of names, got {type(values).__name__}",
            key=key,
        )

    seen: set[str] = set()
    for value in values:
        if not isinstance(value, str):
            raise ConfigError(
                f"'{key}' entry {value!r} is not a string",
                key=key,
            )
        if not _NAME_PATTERN.match(value):
            raise ConfigError(
                f"'{key}' entry {value!r} is not a valid identifier",
                key=key,
                hint="names start with a letter or '_' and contain only letters, digits and '_'",
            )
        if value in seen:
            raise ConfigError(f"'{key}' lists {value!r} more than once", key=key)
        seen.add(value)

    return frozenset(seen)


def _read_json(path: Union[str, Path]) -> dict:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"{path}: cannot read: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: not valid UTF-8: {e.reason}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object at top level")
    return data


# ═══════════════════════════════════════════════════════════════════════════════
# VOCABULARY CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VocabularyConfig:
    """
    User additions to the fixed GLSL vocabulary.

    Each set is unioned with the matching fixed table when a Classifier
    is built. Additions can only add names; nothing can be removed from
    the fixed tables.

    Attributes:
        extra_types: Names to classify as types
        extra_qualifiers: Names to classify as qualifiers
        extra_keywords: Names to classify as keywords
        extra_builtins: Names to classify as builtins
    """

    extra_types: frozenset[str] = frozenset()
    extra_qualifiers: frozenset[str] = frozenset()
    extra_keywords: frozenset[str] = frozenset()
    extra_builtins: frozenset[str] = frozenset()

    @classmethod
    def create(
        cls,
        types: Iterable[str] = (),
        qualifiers: Iterable[str] = (),
        keywords: Iterable[str] = (),
        builtins: Iterable[str] = (),
    ) -> "VocabularyConfig":
        """
        Build a validated configuration from lists of names.

        Raises:
            ConfigError: On a malformed or duplicate entry
        """
        return cls(
            extra_types=_validate_names("types", types),
            extra_qualifiers=_validate_names("qualifiers", qualifiers),
            extra_keywords=_validate_names("keywords", keywords),
            extra_builtins=_validate_names("builtins", builtins),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VocabularyConfig":
        """
        Build a configuration from a mapping with the keys 'types',
        'qualifiers', 'keywords' and 'builtins' (all optional).

        Raises:
            ConfigError: On unknown keys or invalid entries
        """
        unknown = sorted(set(data) - set(VOCABULARY_KEYS))
        if unknown:
            raise ConfigError(
                f"unknown vocabulary key(s): {', '.join(unknown)}",
                key=unknown[0],
                hint=f"valid keys are {', '.join(VOCABULARY_KEYS)}",
            )
        return cls.create(**{key: data.get(key, ()) for key in VOCABULARY_KEYS})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "VocabularyConfig":
        """
        Load the vocabulary part of a JSON configuration file.

        The 'indent' section, if present, is left to IndentConfig.
        """
        data = _read_json(path)
        data.pop("indent", None)
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls) -> "VocabularyConfig":
        """
        Create a configuration from GLSL_EXTRA_* environment variables.

        Raises:
            ConfigError: If a variable holds an invalid name
        """
        values = {}
        for key, variable in _ENV_VOCABULARY.items():
            if raw := os.environ.get(variable):
                values[key] = [name.strip() for name in raw.split(",") if name.strip()]
        return cls.create(**values)

    @property
    def is_default(self) -> bool:
        """True if no names were added."""
        return not (
            self.extra_types or self.extra_qualifiers
            or self.extra_keywords or self.extra_builtins
        )


# ═══════════════════════════════════════════════════════════════════════════════
# INDENTATION CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class IndentConfig:
    """
    Indentation settings.

    Attributes:
        unit: Columns per indentation level (default: 4)
        use_tabs: Render leading whitespace with tabs where possible
        tab_width: Columns a tab advances to (default: 8)
        comment_offset: Extra columns for a '*' continuing a block
            comment, relative to its opening '/*' (default: 1)
    """

    unit: int = 4
    use_tabs: bool = False
    tab_width: int = 8
    comment_offset: int = 1

    def __post_init__(self) -> None:
        for name in ("unit", "tab_width", "comment_offset"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"indent '{name}' must be an integer, got {value!r}", key=name)
        if not isinstance(self.use_tabs, bool):
            raise ConfigError(f"indent 'use_tabs' must be true or false, got {self.use_tabs!r}", key="use_tabs")
        if self.unit < 1:
            raise ConfigError(f"indent 'unit' must be at least 1, got {self.unit}", key="unit")
        if self.tab_width < 1:
            raise ConfigError(f"indent 'tab_width' must be at least 1, got {self.tab_width}", key="tab_width")
        if self.comment_offset < 0:
            raise ConfigError(
                f"indent 'comment_offset' must not be negative, got {self.comment_offset}",
                key="comment_offset",
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "IndentConfig":
        """
        Build indentation settings from a mapping of field names.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        valid = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - valid)
        if unknown:
            raise ConfigError(
                f"unknown indent key(s): {', '.join(unknown)}",
                key=unknown[0],
                hint=f"valid keys are {', '.join(sorted(valid))}",
            )
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "IndentConfig":
        """Load the 'indent' section of a JSON configuration file."""
        section = _read_json(path).get("indent", {})
        if not isinstance(section, dict):
            raise ConfigError(f"{path}: 'indent' must be an object", key="indent")
        return cls.from_mapping(section)

    @classmethod
    def from_env(cls) -> "IndentConfig":
        """
        Create indentation settings from environment variables.

        Invalid values are ignored and the default is kept.
        """
        values: dict[str, Any] = {}

        for key, variable in (("unit", "GLSL_INDENT_UNIT"), ("tab_width", "GLSL_TAB_WIDTH")):
            if raw := os.environ.get(variable):
                try:
                    number = int(raw)
                except ValueError:
                    continue  # Ignore invalid values
                if number >= 1:
                    values[key] = number

        if raw := os.environ.get("GLSL_INDENT_TABS"):
            values["use_tabs"] = raw.strip().lower() in ("1", "true", "yes", "on")

        return cls(**values)

    def render(self, columns: int) -> str:
        """Return leading whitespace that advances to `columns`."""
        if self.use_tabs:
            tabs, spaces = divmod(columns, self.tab_width)
            return "\t" * tabs + " " * spaces
        return " " * columns


# ═══════════════════════════════════════════════════════════════════════════════
# ACTIVE CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

class ConfigStore:
    """
    Holds the active vocabulary and the Classifier built from it.

    load() validates the new configuration completely before swapping
    it in; if validation fails, the ConfigError propagates and the
    previous configuration stays active. reset() goes back to the
    configuration the store was created with.

    Usage:
        store = ConfigStore()
        store.load({"types": ["Light"]})
        store.classify("Light")     # SymbolCategory.TYPE
        store.reset()
        store.classify("Light")     # SymbolCategory.PLAIN_IDENTIFIER
    """

    def __init__(
        self,
        vocabulary: Optional[VocabularyConfig] = None,
        indent: Optional[IndentConfig] = None,
    ):
        self._initial = vocabulary if vocabulary is not None else VocabularyConfig()
        self.indent = indent if indent is not None else IndentConfig()
        self._install(self._initial)

    def _install(self, vocabulary: VocabularyConfig) -> None:
        from glsl_sdk.lang.classifier import Classifier

        classifier = Classifier(vocabulary)
        self._vocabulary = vocabulary
        self._classifier = classifier

    @property
    def vocabulary(self) -> VocabularyConfig:
        return self._vocabulary

    @property
    def classifier(self):
        """The Classifier for the active vocabulary."""
        return self._classifier

    def load(self, source: Union[VocabularyConfig, Mapping[str, Any], str, Path]) -> VocabularyConfig:
        """
        Replace the active vocabulary.

        Args:
            source: A VocabularyConfig, a mapping of name lists, or the
                path of a JSON configuration file

        Returns:
            The newly active VocabularyConfig

        Raises:
            ConfigError: If the new configuration is invalid (the
                previous one stays active)
        """
        try:
            if isinstance(source, VocabularyConfig):
                vocabulary = source
            elif isinstance(source, Mapping):
                vocabulary = VocabularyConfig.from_mapping(source)
            else:
                vocabulary = VocabularyConfig.from_file(source)
        except ConfigError as e:
            logger.warning(f"Rejected vocabulary configuration, keeping previous one: {e.message}")
            raise

        self._install(vocabulary)
        logger.info(
            f"Loaded vocabulary: {len(vocabulary.extra_types)} types, "
            f"{len(vocabulary.extra_qualifiers)} qualifiers, "
            f"{len(vocabulary.extra_keywords)} keywords, "
            f"{len(vocabulary.extra_builtins)} builtins"
        )
        return vocabulary

    def reset(self) -> None:
        """Restore the vocabulary the store was created with."""
        self._install(self._initial)
        logger.info("Vocabulary reset to initial configuration")

    def classify(self, identifier: str, *, in_directive: bool = False):
        """Classify an identifier against the active vocabulary."""
        return self._classifier.classify(identifier, in_directive=in_directive)
