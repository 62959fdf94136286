"""
Translation Key Flattening

Turns a nested translation tree into the flat list of keys that becomes the
LocaleKeys class of the generated Dart code.

Rules:
    - Children are visited in document order
    - A map-valued key is descended into first; its own entry follows its
      descendants
    - Plural and gender keywords (zero, one, two, few, many, other, male,
      female) always get an entry of their own but are never descended into,
      even when their value is a map
    - The identifier of an entry is its dotted path with '.' replaced by '_'
    - Every identifier must be a valid Dart identifier and not a reserved word
    - Two entries with the same identifier raise IdentifierCollisionError

Plural and gender keywords:
    The keyword rule applies at every depth, not only at the top level. An
    easy_localization plural group such as {"items": {"one": ..., "other": ...}}
    therefore yields the constants items_one and items_other next to items.
    A keyword whose value is itself a map ({"other": {"x": ...}}) yields only
    the keyword's own entry; nothing below it becomes a constant.

Example:
    tree = {
        "a": {"b": "x"},
        "items": {"one": "1 item", "other": "{} items"},
        "other": "y"
    }

    flatten_keys(tree)
    # [KeyEntry(path='a.b', identifier='a_b'),
    #  KeyEntry(path='a', identifier='a'),
    #  KeyEntry(path='items.one', identifier='items_one'),
    #  KeyEntry(path='items.other', identifier='items_other'),
    #  KeyEntry(path='items', identifier='items'),
    #  KeyEntry(path='other', identifier='other')]

    flatten_table_keys(["sign-in"])   # InvalidIdentifierError

CSV sources are already flat: flatten_table_keys() only derives identifiers
and checks them.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from .errors import IdentifierCollisionError, InvalidIdentifierError

PRESERVED_KEYWORDS = frozenset([
    'few',
    'many',
    'one',
    'other',
    'two',
    'zero',
    'male',
    'female',
])

DART_IDENTIFIER = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

# Reserved words cannot name a static const member
DART_RESERVED_WORDS = frozenset([
    'assert', 'break', 'case', 'catch', 'class', 'const', 'continue',
    'default', 'do', 'else', 'enum', 'extends', 'false', 'final', 'finally',
    'for', 'if', 'in', 'is', 'new', 'null', 'rethrow', 'return', 'super',
    'switch', 'this', 'throw', 'true', 'try', 'var', 'void', 'while', 'with',
])


@dataclass(frozen=True)
class KeyEntry:
    path: str
    identifier: str


def identifier_for(path: str) -> str:
    return path.replace('.', '_')


def check_dart_identifier(identifier: str, key: str) -> None:
    """
    Raise InvalidIdentifierError unless identifier can name a Dart constant.

    Args:
        identifier: Generated identifier
        key: Source key or locale it was derived from, for the message
    """
    if not DART_IDENTIFIER.fullmatch(identifier) or identifier in DART_RESERVED_WORDS:
        raise InvalidIdentifierError(identifier, key)


def _walk(node: Dict[str, Any], prefix: str) -> List[KeyEntry]:
    entries = []
    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict) and key not in PRESERVED_KEYWORDS:
            entries.extend(_walk(value, path))
        entries.append(KeyEntry(path, identifier_for(path)))
    return entries


def check_identifiers(entries: Iterable[KeyEntry]) -> None:
    """
    Validate every identifier, then reject the first one generated twice.

    Args:
        entries: Flattened entries in emission order

    Raises:
        InvalidIdentifierError: e.g. for "", "1st", "sign-in" or "class"
        IdentifierCollisionError: If two paths map to the same identifier
    """
    owners: Dict[str, str] = {}
    for entry in entries:
        check_dart_identifier(entry.identifier, entry.path)
        if entry.identifier in owners:
            raise IdentifierCollisionError(entry.identifier, owners[entry.identifier], entry.path)
        owners[entry.identifier] = entry.path


def flatten_keys(tree: Dict[str, Any]) -> List[KeyEntry]:
    """
    Flatten a nested translation tree into ordered key entries.

    The function is pure: the same tree always yields the same list.

    Args:
        tree: Translation tree as returned by parse_json_tree()

    Returns:
        List[KeyEntry]: Entries in document order, descendants before parents

    Raises:
        InvalidIdentifierError: If a path is not a valid Dart identifier
        IdentifierCollisionError: If two paths map to the same identifier
    """
    entries = _walk(tree, '')
    check_identifiers(entries)
    return entries


def flatten_table_keys(keys: Iterable[str]) -> List[KeyEntry]:
    """
    Build key entries for already-flat CSV keys, in row order.

    Raises:
        InvalidIdentifierError: e.g. for the key "sign-in"
        IdentifierCollisionError: e.g. for the keys "a.b" and "a_b"
    """
    entries = [KeyEntry(key, identifier_for(key)) for key in keys]
    check_identifiers(entries)
    return entries
