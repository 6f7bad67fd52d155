"""Tests for the definitions file reader."""

import pytest

from glossterm.core.exceptions import DefinitionsFileError
from glossterm.core.source import lookup_definition, read_definitions, split_front_matter


class TestReadDefinitions:
    """Tests for read_definitions."""

    def test_keys_are_added_in_lower_case(self, glossary_file):
        definitions = read_definitions(glossary_file)

        assert definitions["Cli"] == "Command-line interface."
        assert definitions["cli"] == "Command-line interface."
        assert definitions["api"] == "Application Programming Interface."
        assert definitions["big data"] == "Data sets too large for *one* machine."

    def test_comments_are_ignored(self, glossary_file):
        definitions = read_definitions(glossary_file)

        assert not any(key.startswith("#") for key in definitions)

    def test_missing_file_raises(self, tmp_path):
        missing = tmp_path / "nope.yml"

        with pytest.raises(DefinitionsFileError) as excinfo:
            read_definitions(missing)

        assert excinfo.value.path == str(missing)
        assert isinstance(excinfo.value, OSError)

    def test_malformed_yaml_is_empty(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("cli: [unclosed\n", encoding="utf-8")

        assert read_definitions(path) == {}

    def test_non_mapping_is_empty(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- cli\n- api\n", encoding="utf-8")

        assert read_definitions(path) == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")

        assert read_definitions(path) == {}

    def test_yaml_keywords_stay_terms(self, tmp_path):
        path = tmp_path / "glossary.yml"
        path.write_text(
            "On: Switched on.\nNo: Negative.\nNULL: Nothing.\n~: Tilde.\n404: Not found.\n",
            encoding="utf-8",
        )

        definitions = read_definitions(path)

        assert definitions["on"] == "Switched on."
        assert definitions["no"] == "Negative."
        assert definitions["null"] == "Nothing."
        assert definitions["~"] == "Tilde."
        assert definitions["404"] == "Not found."
        assert "true" not in definitions
        assert "" not in definitions

    def test_values_are_still_typed(self, tmp_path):
        path = tmp_path / "glossary.yml"
        path.write_text("flag: yes\n", encoding="utf-8")

        assert read_definitions(path)["flag"] is True

    def test_edits_are_seen_without_reloading(self, glossary_file):
        assert lookup_definition(glossary_file, "cli") == "Command-line interface."

        glossary_file.write_text("cli: Changed.\n", encoding="utf-8")

        assert lookup_definition(glossary_file, "cli") == "Changed."


class TestLookupDefinition:
    """Tests for lookup_definition."""

    def test_not_found_is_none(self, glossary_file):
        assert lookup_definition(glossary_file, "missingterm") is None

    def test_scalar_values_are_stringified(self, tmp_path):
        path = tmp_path / "glossary.yml"
        path.write_text("answer: 42\nflag: true\n", encoding="utf-8")

        assert lookup_definition(path, "answer") == "42"
        assert lookup_definition(path, "flag") == "true"

    def test_markdown_formatting_is_dropped(self, glossary_file):
        assert lookup_definition(glossary_file, "big data") == "Data sets too large for one machine."

    def test_multi_paragraph_definition(self, tmp_path):
        path = tmp_path / "glossary.yml"
        path.write_text("cli: |\n  A **shell** tool.\n\n  See [docs](https://example.com).\n", encoding="utf-8")

        assert lookup_definition(path, "cli") == "A shell tool.\n\nSee docs."


class TestSplitFrontMatter:
    """Tests for split_front_matter."""

    def test_splits_metadata_and_body(self):
        metadata, body = split_front_matter("---\ntitle: Intro\n---\nHello\n")

        assert metadata == {"title": "Intro"}
        assert body == "Hello\n"

    def test_no_front_matter(self):
        metadata, body = split_front_matter("Hello\n")

        assert metadata == {}
        assert body == "Hello\n"

    def test_unclosed_block_is_body(self):
        text = "---\ntitle: Intro\nHello\n"

        assert split_front_matter(text) == ({}, text)
