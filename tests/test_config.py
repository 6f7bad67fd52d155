"""Tests for configuration layers and settings."""

import pytest

from glossterm.core.config import (
    DEFAULT_OPTIONS, GlossaryOptions, GlosstermSettings, ResolvedConfig, merge, parse_bool,
)
from glossterm.core.exceptions import ConfigurationError


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("value", [True, "true", "TRUE", "yes", "1"])
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [False, "false", "False", "no", "0"])
    def test_false(self, value):
        assert parse_bool(value) is False

    def test_invalid(self):
        with pytest.raises(ConfigurationError):
            parse_bool("maybe")


class TestGlossaryOptions:
    """Tests for GlossaryOptions.from_mapping."""

    def test_from_mapping_coerces_values(self):
        layer = GlossaryOptions.from_mapping({"popup": "None", "add_to_table": "false", "show": True})

        assert layer == GlossaryOptions(popup="none", add_to_table=False, show=True)

    def test_resolver_and_unknown_keys_are_skipped(self):
        layer = GlossaryOptions.from_mapping({"def": "x", "display": "y", "table": True, "colour": "red"})

        assert layer == GlossaryOptions()

    def test_invalid_bool_names_the_option(self):
        with pytest.raises(ConfigurationError, match="add_to_table"):
            GlossaryOptions.from_mapping({"add_to_table": "sometimes"})

    def test_non_mapping_is_ignored(self):
        assert GlossaryOptions.from_mapping(["popup"]) == GlossaryOptions()


class TestMerge:
    """Tests for merge."""

    def test_defaults_only(self):
        assert merge(DEFAULT_OPTIONS) == ResolvedConfig(
            path="glossary.yml", popup="click", show=True, add_to_table=True,
        )

    def test_call_level_beats_document_level(self):
        doc = GlossaryOptions(popup="none", path="doc.yml")
        call = GlossaryOptions(popup="click")

        resolved = merge(DEFAULT_OPTIONS, doc, call)

        assert resolved.popup == "click"
        assert resolved.path == "doc.yml"
        assert resolved.add_to_table is True

    def test_false_is_a_value_not_unset(self):
        resolved = merge(DEFAULT_OPTIONS, GlossaryOptions(add_to_table=False), GlossaryOptions())

        assert resolved.add_to_table is False


class TestGlosstermSettings:
    """Tests for GlosstermSettings."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GLOSSTERM_PATH", "terms.yml")
        monkeypatch.setenv("GLOSSTERM_BACKEND", "latex")
        monkeypatch.setenv("GLOSSTERM_DEBUG", "true")

        settings = GlosstermSettings()

        assert settings.definitions_path == "terms.yml"
        assert settings.backend == "latex"
        assert settings.log_level == "DEBUG"

    def test_defaults_use_definitions_path(self):
        assert GlosstermSettings(definitions_path="terms.yml").defaults().path == "terms.yml"

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "glossterm.yml"
        GlosstermSettings(definitions_path="terms.yml", backend="latex").save_to_file(str(path))

        loaded = GlosstermSettings.load_from_file(str(path))

        assert loaded.definitions_path == "terms.yml"
        assert loaded.backend == "latex"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            GlosstermSettings.load_from_file(str(tmp_path / "missing.yml"))
