"""Tests for Dart code emission."""

import pytest

from localization_codegen.generator.code_emitter import (
    BANNER,
    CSV_INDENT,
    NEWLINE_SENTINEL,
    dart_map_literal,
    dart_string_literal,
    render_key_constants,
    render_locale_map,
    replace_newlines,
)
from localization_codegen.utils.errors import IdentifierCollisionError, InvalidIdentifierError
from localization_codegen.utils.json_tree import JsonLocaleSet
from localization_codegen.utils.key_flattener import KeyEntry, flatten_keys
from localization_codegen.utils.locale_table import LocaleTable
from tests.fixtures import extract_map_literal, load_fixture_json, parse_map_literal


def _csv_table(text):
    return LocaleTable.from_text(text)


class TestKeyConstants:

    def test_document_layout(self):
        text = render_key_constants([KeyEntry("a.b", "a_b"), KeyEntry("a", "a")])
        assert text == (
            BANNER
            + "\n"
            + "abstract class LocaleKeys {\n"
            + "  static const String a_b = 'a.b';\n"
            + "  static const String a = 'a';\n"
            + "}\n"
        )

    def test_empty_key_list(self):
        assert render_key_constants([]).endswith("abstract class LocaleKeys {\n}\n")

    @pytest.mark.parametrize("raw,expected", [
        ("plain", "'plain'"),
        ("it's", "'it\\'s'"),
        ("cost$", "'cost\\$'"),
        ("back\\slash", "'back\\\\slash'"),
    ])
    def test_dart_string_literal_escaping(self, raw, expected):
        assert dart_string_literal(raw) == expected


class TestLocaleMap:

    def test_csv_scenario_two_locales(self):
        text = render_locale_map(_csv_table("key,en,fr\ngreeting,Hello,Bonjour\n"), indent=CSV_INDENT)
        assert parse_map_literal(text, "en") == {"greeting": "Hello"}
        assert parse_map_literal(text, "fr") == {"greeting": "Bonjour"}
        assert '  static const Map<String, Map<String, dynamic>> mapLocales = {"en": en, "fr": fr};\n' in text
        assert text.endswith("};\n}\n")

    def test_document_starts_with_banner_and_loader(self):
        text = render_locale_map(JsonLocaleSet([("en", {"a": "x"})]))
        assert text.startswith(BANNER)
        assert "class CodegenLoader extends AssetLoader{" in text
        assert "return Future.value(mapLocales[locale.toString()]);" in text

    def test_json_literal_round_trips(self):
        tree = load_fixture_json("en.json")
        text = render_locale_map(JsonLocaleSet([("en", tree)]))
        assert parse_map_literal(text, "en") == tree

    def test_json_literal_uses_two_space_indent(self):
        text = render_locale_map(JsonLocaleSet([("en", {"a": {"b": "x"}})]))
        assert extract_map_literal(text, "en") == '{\n  "a": {\n    "b": "x"\n  }\n}'

    def test_csv_literal_uses_four_space_indent(self):
        text = render_locale_map(_csv_table("key,en\ngreeting,Hello\n"), indent=CSV_INDENT)
        assert extract_map_literal(text, "en") == '{\n    "greeting": "Hello"\n}'

    def test_non_ascii_text_is_emitted_verbatim(self):
        text = render_locale_map(JsonLocaleSet([("fr", {"a": "Paramètres"})]))
        assert '"a": "Paramètres"' in text

    def test_dollar_sign_is_escaped(self):
        text = render_locale_map(JsonLocaleSet([("en", {"price": "Costs $5"})]))
        assert '"price": "Costs \\$5"' in text
        assert parse_map_literal(text, "en") == {"price": "Costs $5"}

    def test_newlines_become_sentinel_in_csv_mode(self):
        table = _csv_table('key,en\nlines,"a\nb, ""c"""\n')
        text = render_locale_map(table, indent=CSV_INDENT, newline_sentinel=True)
        assert parse_map_literal(text, "en") == {"lines": "a" + NEWLINE_SENTINEL + 'b, "c"'}
        assert "\\n" not in extract_map_literal(text, "en")

    def test_typed_backslash_n_is_not_a_newline(self):
        table = _csv_table("key,en\npath,C:\\new\n")
        text = render_locale_map(table, indent=CSV_INDENT, newline_sentinel=True)
        assert parse_map_literal(text, "en") == {"path": "C:\\new"}
        assert NEWLINE_SENTINEL not in text

    def test_newlines_kept_without_sentinel(self):
        text = render_locale_map(JsonLocaleSet([("en", {"lines": "a\nb"})]))
        assert parse_map_literal(text, "en") == {"lines": "a\nb"}

    def test_hyphenated_locale_becomes_identifier(self):
        text = render_locale_map(_csv_table("key,en-US\na,x\n"), indent=CSV_INDENT)
        assert "static const Map<String, dynamic> en_US = " in text
        assert '{"en_US": en_US}' in text

    def test_locale_identifier_collision(self):
        locale_set = JsonLocaleSet([("en-US", {}), ("en_US", {})])
        with pytest.raises(IdentifierCollisionError):
            render_locale_map(locale_set)

    def test_locale_must_be_dart_identifier(self):
        with pytest.raises(InvalidIdentifierError, match="'1en'"):
            render_locale_map(_csv_table("key,1en\na,x\n"), indent=CSV_INDENT)

    def test_empty_locale_map(self):
        text = render_locale_map(JsonLocaleSet([("en", {})]))
        assert "static const Map<String, dynamic> en = {};\n" in text

    def test_rendering_is_deterministic(self):
        tree = load_fixture_json("en.json")
        first = render_locale_map(JsonLocaleSet([("en", tree)])) + render_key_constants(flatten_keys(tree))
        second = render_locale_map(JsonLocaleSet([("en", tree)])) + render_key_constants(flatten_keys(tree))
        assert first == second


def test_replace_newlines_only_touches_string_values():
    mapping = {"a": "x\r\ny\nz", "b": 3, "c": None}
    assert replace_newlines(mapping) == {"a": "x" + NEWLINE_SENTINEL + "y" + NEWLINE_SENTINEL + "z", "b": 3, "c": None}


def test_dart_map_literal_default_indent():
    assert dart_map_literal({"a": 1}) == '{\n  "a": 1\n}'
