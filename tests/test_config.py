"""
Tests for the configuration layer.

Tests cover:
- Validation of user vocabulary lists
- Loading from mappings, JSON files and environment variables
- Indentation settings and whitespace rendering
- ConfigStore load, failed load and reset
"""

import dataclasses
import json

import pytest

from glsl_sdk.config import ConfigStore, IndentConfig, VocabularyConfig
from glsl_sdk.errors import ConfigError
from glsl_sdk.lang.classifier import SymbolCategory


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def config_file(tmp_path):
    """Write a JSON configuration file and return its path."""
    def write(data) -> str:
        path = tmp_path / "glsl.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)
    return write


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every GLSL_* variable the configuration reads."""
    for name in (
        "GLSL_EXTRA_TYPES", "GLSL_EXTRA_QUALIFIERS", "GLSL_EXTRA_KEYWORDS",
        "GLSL_EXTRA_BUILTINS", "GLSL_INDENT_UNIT", "GLSL_INDENT_TABS", "GLSL_TAB_WIDTH",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Vocabulary Validation Tests
# =============================================================================

class TestVocabularyValidation:
    """Rejecting malformed user vocabulary."""

    def test_valid_lists(self):
        config = VocabularyConfig.create(types=["Light", "_Material2"], builtins=["saturate"])
        assert config.extra_types == frozenset({"Light", "_Material2"})
        assert config.extra_builtins == frozenset({"saturate"})
        assert not config.is_default

    def test_default_is_empty(self):
        assert VocabularyConfig().is_default

    @pytest.mark.parametrize("name", ["1abc", "foo bar", "", "a-b", "vec4\n"])
    def test_malformed_name(self, name):
        with pytest.raises(ConfigError) as exc_info:
            VocabularyConfig.create(types=[name])
        assert exc_info.value.key == "types"

    def test_non_string_entry(self):
        with pytest.raises(ConfigError):
            VocabularyConfig.create(keywords=[5])

    def test_bare_string_is_not_a_list(self):
        with pytest.raises(ConfigError) as exc_info:
            VocabularyConfig.create(types="Light")
        assert "must be a list" in exc_info.value.message

    def test_duplicate_in_one_list(self):
        with pytest.raises(ConfigError) as exc_info:
            VocabularyConfig.create(qualifiers=["perprimitive", "perprimitive"])
        assert "more than once" in exc_info.value.message

    def test_same_name_in_two_lists_is_allowed(self):
        config = VocabularyConfig.create(types=["Foo"], keywords=["Foo"])
        assert "Foo" in config.extra_types
        assert "Foo" in config.extra_keywords

    def test_frozen(self):
        config = VocabularyConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.extra_types = frozenset({"Light"})


# =============================================================================
# Vocabulary Source Tests
# =============================================================================

class TestVocabularySources:
    """Mappings, files and environment variables."""

    def test_from_mapping(self):
        config = VocabularyConfig.from_mapping({"types": ["Light"]})
        assert config.extra_types == frozenset({"Light"})
        assert config.extra_keywords == frozenset()

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ConfigError) as exc_info:
            VocabularyConfig.from_mapping({"typez": ["Light"]})
        assert exc_info.value.key == "typez"

    def test_from_file(self, config_file):
        path = config_file({"types": ["Light"], "indent": {"unit": 2}})
        config = VocabularyConfig.from_file(path)
        assert config.extra_types == frozenset({"Light"})

    def test_from_file_invalid_json(self, config_file):
        with pytest.raises(ConfigError) as exc_info:
            VocabularyConfig.from_file(config_file("{not json"))
        assert "invalid JSON" in exc_info.value.message

    def test_from_file_not_an_object(self, config_file):
        with pytest.raises(ConfigError):
            VocabularyConfig.from_file(config_file(["Light"]))

    def test_from_env(self, clean_env):
        clean_env.setenv("GLSL_EXTRA_TYPES", "Light, Material")
        clean_env.setenv("GLSL_EXTRA_BUILTINS", "saturate,")
        config = VocabularyConfig.from_env()
        assert config.extra_types == frozenset({"Light", "Material"})
        assert config.extra_builtins == frozenset({"saturate"})

    def test_from_env_unset(self, clean_env):
        assert VocabularyConfig.from_env().is_default

    def test_from_env_invalid_name(self, clean_env):
        clean_env.setenv("GLSL_EXTRA_KEYWORDS", "ok, not ok")
        with pytest.raises(ConfigError):
            VocabularyConfig.from_env()


# =============================================================================
# Indentation Settings Tests
# =============================================================================

class TestIndentConfig:
    """Indentation settings."""

    def test_defaults(self):
        config = IndentConfig()
        assert (config.unit, config.use_tabs, config.tab_width, config.comment_offset) == (4, False, 8, 1)

    @pytest.mark.parametrize("kwargs", [
        {"unit": 0},
        {"unit": -2},
        {"tab_width": 0},
        {"comment_offset": -1},
        {"unit": "4"},
        {"unit": True},
        {"use_tabs": "yes"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            IndentConfig(**kwargs)

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ConfigError) as exc_info:
            IndentConfig.from_mapping({"width": 2})
        assert exc_info.value.key == "width"

    def test_from_file(self, config_file):
        path = config_file({"types": [], "indent": {"unit": 2, "use_tabs": True}})
        config = IndentConfig.from_file(path)
        assert config.unit == 2
        assert config.use_tabs is True

    def test_from_file_without_section(self, config_file):
        assert IndentConfig.from_file(config_file({"types": []})) == IndentConfig()

    def test_from_env(self, clean_env):
        clean_env.setenv("GLSL_INDENT_UNIT", "2")
        clean_env.setenv("GLSL_INDENT_TABS", "true")
        clean_env.setenv("GLSL_TAB_WIDTH", "4")
        config = IndentConfig.from_env()
        assert (config.unit, config.use_tabs, config.tab_width) == (2, True, 4)

    def test_from_env_ignores_invalid_values(self, clean_env):
        clean_env.setenv("GLSL_INDENT_UNIT", "abc")
        clean_env.setenv("GLSL_TAB_WIDTH", "0")
        assert IndentConfig.from_env() == IndentConfig()

    def test_render_spaces(self):
        assert IndentConfig().render(6) == "      "
        assert IndentConfig().render(0) == ""

    def test_render_tabs(self):
        config = IndentConfig(use_tabs=True, tab_width=4)
        assert config.render(10) == "\t\t  "
        assert config.render(8) == "\t\t"


# =============================================================================
# ConfigStore Tests
# =============================================================================

class TestConfigStore:
    """Active configuration with atomic replacement."""

    def test_default_store(self):
        store = ConfigStore()
        assert store.vocabulary.is_default
        assert store.classify("vec3") is SymbolCategory.TYPE

    def test_load_mapping(self):
        store = ConfigStore()
        store.load({"types": ["Light"]})
        assert store.classify("Light") is SymbolCategory.TYPE

    def test_load_file(self, config_file):
        store = ConfigStore()
        store.load(config_file({"builtins": ["saturate"]}))
        assert store.classify("saturate") is SymbolCategory.BUILTIN

    def test_load_config_object(self):
        store = ConfigStore()
        config = VocabularyConfig.create(keywords=["demote"])
        assert store.load(config) is config
        assert store.vocabulary is config

    def test_reset(self):
        store = ConfigStore()
        store.load({"types": ["Light"]})
        store.reset()
        assert store.classify("Light") is SymbolCategory.PLAIN_IDENTIFIER

    def test_reset_restores_initial_vocabulary(self):
        initial = VocabularyConfig.create(types=["Material"])
        store = ConfigStore(initial)
        store.load({"types": ["Light"]})
        assert store.classify("Material") is SymbolCategory.PLAIN_IDENTIFIER
        store.reset()
        assert store.classify("Material") is SymbolCategory.TYPE

    def test_failed_load_keeps_previous(self):
        store = ConfigStore()
        store.load({"types": ["Light"]})
        previous = store.vocabulary
        with pytest.raises(ConfigError):
            store.load({"types": ["Material", "bad name"]})
        assert store.vocabulary is previous
        assert store.classify("Light") is SymbolCategory.TYPE
        assert store.classify("Material") is SymbolCategory.PLAIN_IDENTIFIER

    def test_failed_load_is_logged(self, caplog):
        store = ConfigStore()
        with pytest.raises(ConfigError):
            store.load({"types": ["Light", "Light"]})
        assert "keeping previous" in caplog.text

    def test_load_missing_file(self, tmp_path):
        store = ConfigStore()
        with pytest.raises(ConfigError, match="cannot read"):
            store.load(tmp_path / "missing.json")

    def test_load_directory(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            ConfigStore().load(tmp_path)

    def test_load_undecodable_file(self, tmp_path):
        path = tmp_path / "glsl.json"
        path.write_bytes(b'{"types": ["\xff\xfe"]}')
        store = ConfigStore(VocabularyConfig.create(types=["Light"]))
        with pytest.raises(ConfigError, match="not valid UTF-8"):
            store.load(path)
        assert store.classify("Light") is SymbolCategory.TYPE

    def test_directive_context(self):
        assert ConfigStore().classify("define", in_directive=True) is SymbolCategory.PREPROCESSOR_DIRECTIVE
