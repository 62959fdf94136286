"""
JSON Translation Trees

Parses one easy_localization JSON resource per locale into a nested dict and
groups several of them into a locale provider for the code emitter.

Accepted Document Shape:
    {
        "title": "Hello",
        "counter": {"zero": "No items", "one": "1 item", "other": "{} items"},
        "settings": {"theme": {"dark": "Dark mode"}},
        "enabled": true,
        "version": 2,
        "unset": null
    }

    - The top level must be an object
    - Values are nested objects or scalars (string, number, boolean, null)
    - Arrays are rejected
    - Key order of the document is preserved (dicts keep insertion order)

Locale Identifiers:
    The locale of a file comes from its name: the '.json' extension is
    stripped and '-' becomes '_'.
        en.json     -> en
        en-US.json  -> en_US
        zh-Hant-TW.json -> zh_Hant_TW
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .errors import LocaleNotFoundError, ParseError

SCALAR_TYPES = (str, int, float, bool, type(None))


def locale_name_from_path(file_path: Union[str, Path]) -> str:
    """
    Derive the locale identifier of a JSON resource from its file name.

    Example:
        locale_name_from_path('resources/langs/en-US.json')   # 'en_US'
    """
    name = Path(file_path).name
    if name.lower().endswith('.json'):
        name = name[:-len('.json')]
    return name.replace('-', '_')


def _validate_node(node: Dict[str, Any], path: str, source: Optional[str]) -> None:
    for key, value in node.items():
        dotted = f"{path}.{key}" if path else key
        if isinstance(value, dict):
            _validate_node(value, dotted, source)
        elif not isinstance(value, SCALAR_TYPES):
            raise ParseError(
                f"unsupported {type(value).__name__} value at '{dotted}' "
                f"(expected object, string, number, boolean or null)",
                source
            )


def parse_json_tree(text: str, source: Optional[str] = None) -> Dict[str, Any]:
    """
    Parse one JSON translation document into a nested dict.

    Args:
        text: JSON document
        source: Optional file name used in error messages

    Returns:
        Dict[str, Any]: Translation tree in document order

    Raises:
        ParseError: On malformed JSON (including NaN and Infinity), a non-object
                    top level or array values
    """
    def reject_constant(name: str) -> None:
        raise ParseError(f"malformed JSON: non-standard constant {name}", source)

    try:
        tree = json.loads(text, parse_constant=reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"malformed JSON: {e}", source) from e

    if not isinstance(tree, dict):
        raise ParseError("top-level JSON value must be an object", source)

    _validate_node(tree, '', source)
    return tree


class JsonLocaleSet:
    """
    Locale-to-translations provider backed by per-locale JSON trees.

    Locales keep the order in which the files were given.

    Example:
        locale_set = JsonLocaleSet([('en', {'a': 'x'}), ('fr', {'a': 'y'})])
        locale_set.locales()              # ['en', 'fr']
        locale_set.translations_for('fr') # {'a': 'y'}
    """

    def __init__(self, trees: Iterable[Tuple[str, Dict[str, Any]]]):
        self._trees: Dict[str, Dict[str, Any]] = {}
        for locale, tree in trees:
            if locale in self._trees:
                raise ParseError(f"locale '{locale}' is defined by more than one file")
            self._trees[locale] = tree

    @classmethod
    def from_files(cls, files: Iterable[Tuple[Union[str, Path], str]]) -> 'JsonLocaleSet':
        """
        Build the set from (file_path, file_text) pairs.

        Args:
            files: Pairs in resolution order; that order becomes locale order
        """
        return cls(
            (locale_name_from_path(path), parse_json_tree(text, source=Path(path).name))
            for path, text in files
        )

    def locales(self) -> List[str]:
        return list(self._trees)

    def translations_for(self, locale: str) -> Dict[str, Any]:
        if locale not in self._trees:
            raise LocaleNotFoundError(locale)
        return self._trees[locale]
