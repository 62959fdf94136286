"""Tests for translation key flattening."""

import pytest

from localization_codegen.utils.errors import IdentifierCollisionError, InvalidIdentifierError
from localization_codegen.utils.key_flattener import (
    PRESERVED_KEYWORDS,
    KeyEntry,
    flatten_keys,
    flatten_table_keys,
)
from tests.fixtures import EN_KEY_PATHS, load_fixture_json


def test_branch_keys_follow_their_descendants():
    entries = flatten_keys({"a": {"b": "x"}, "other": "y"})
    assert entries == [
        KeyEntry("a.b", "a_b"),
        KeyEntry("a", "a"),
        KeyEntry("other", "other"),
    ]


def test_deep_nesting_builds_dotted_paths():
    entries = flatten_keys({"a": {"b": {"c": "x"}}})
    assert [e.path for e in entries] == ["a.b.c", "a.b", "a"]
    assert entries[0].identifier == "a_b_c"


@pytest.mark.parametrize("keyword", sorted(PRESERVED_KEYWORDS))
def test_preserved_keyword_with_map_value_is_terminal(keyword):
    entries = flatten_keys({"items": {keyword: {"nested": "x", "deeper": {"y": "z"}}}})
    assert [e.path for e in entries] == [f"items.{keyword}", "items"]


def test_plural_forms_each_get_an_entry():
    entries = flatten_keys({"clicked": {"zero": "0", "one": "1", "other": "n"}})
    assert [e.identifier for e in entries] == ["clicked_zero", "clicked_one", "clicked_other", "clicked"]


def test_fixture_keys_in_document_order():
    entries = flatten_keys(load_fixture_json("en.json"))
    assert [e.path for e in entries] == EN_KEY_PATHS
    assert all(e.identifier == e.path.replace(".", "_") for e in entries)


def test_flattening_is_repeatable():
    tree = load_fixture_json("en.json")
    assert flatten_keys(tree) == flatten_keys(tree)


def test_input_tree_is_not_modified():
    tree = {"a": {"b": "x"}}
    flatten_keys(tree)
    assert tree == {"a": {"b": "x"}}


def test_empty_tree():
    assert flatten_keys({}) == []


def test_dotted_key_colliding_with_nested_path():
    with pytest.raises(IdentifierCollisionError) as exc_info:
        flatten_keys({"a.b": "x", "a": {"b": "y"}})
    assert exc_info.value.identifier == "a_b"


def test_underscore_key_colliding_with_nested_path():
    with pytest.raises(IdentifierCollisionError, match="'a.b' and 'a_b'"):
        flatten_keys({"a": {"b": "y"}, "a_b": "x"})


def test_table_keys_keep_row_order():
    entries = flatten_table_keys(["greeting", "settings.title"])
    assert entries == [
        KeyEntry("greeting", "greeting"),
        KeyEntry("settings.title", "settings_title"),
    ]


def test_table_key_collision_is_reported():
    with pytest.raises(IdentifierCollisionError) as exc_info:
        flatten_table_keys(["a.b", "a_b"])
    assert (exc_info.value.first, exc_info.value.second) == ("a.b", "a_b")


@pytest.mark.parametrize("key", ["", "1st", "sign-in", "two words", "class", "trailing\n"])
def test_table_keys_must_be_dart_identifiers(key):
    with pytest.raises(InvalidIdentifierError) as exc_info:
        flatten_table_keys(["greeting", key])
    assert exc_info.value.key == key


def test_nested_key_must_be_dart_identifier():
    with pytest.raises(InvalidIdentifierError, match="'menu.log-out'"):
        flatten_keys({"menu": {"log-out": "x"}})


def test_reserved_word_is_accepted_inside_a_path():
    entries = flatten_keys({"settings": {"class": "x"}})
    assert entries[0] == KeyEntry("settings.class", "settings_class")
