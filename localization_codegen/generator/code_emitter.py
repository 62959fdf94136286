"""
Dart Code Emitter

Renders translation data as Dart source for the easy_localization package.
Every function here is pure: it returns the complete document as a string and
never touches the filesystem.

Documents:
    Locale map (formats 'json' and 'csv'):
        // DO NOT EDIT. This is code generated via package:easy_localization/generate.dart

        // ignore_for_file: prefer_single_quotes

        import 'dart:ui';

        import 'package:easy_localization/easy_localization.dart' show AssetLoader;

        class CodegenLoader extends AssetLoader{
          const CodegenLoader();

          @override
          Future<Map<String, dynamic>> load(String fullPath, Locale locale ) {
            return Future.value(mapLocales[locale.toString()]);
          }

          static const Map<String, dynamic> en = {
            "greeting": "Hello"
          };
          static const Map<String, Map<String, dynamic>> mapLocales = {"en": en};
        }

    Key constants (formats 'keys' and 'csv_keys'):
        // DO NOT EDIT. This is code generated via package:easy_localization/generate.dart

        abstract class LocaleKeys {
          static const String greeting = 'greeting';
          static const String settings_theme = 'settings.theme';
        }

Locale maps are rendered from any provider exposing locales() and
translations_for(locale): LocaleTable for CSV sources, JsonLocaleSet for JSON
sources.

Escaping:
    - Map literals are JSON with non-ASCII text kept verbatim
    - '$' is escaped as '\\$' so Dart does not interpolate it
    - In CSV locale maps, newlines inside values become the sentinel U+1F601,
      which easy_localization turns back into newlines at runtime
"""

import json
from typing import Any, Dict, Iterable, List

from ..utils.errors import IdentifierCollisionError
from ..utils.key_flattener import KeyEntry, check_dart_identifier

BANNER = "// DO NOT EDIT. This is code generated via package:easy_localization/generate.dart\n"

LOADER_HEADER = BANNER + """
// ignore_for_file: prefer_single_quotes

import 'dart:ui';

import 'package:easy_localization/easy_localization.dart' show AssetLoader;

class CodegenLoader extends AssetLoader{
  const CodegenLoader();

  @override
  Future<Map<String, dynamic>> load(String fullPath, Locale locale ) {
    return Future.value(mapLocales[locale.toString()]);
  }

"""

KEYS_HEADER = BANNER + """
abstract class LocaleKeys {
"""

NEWLINE_SENTINEL = '\U0001F601'

JSON_INDENT = 2
CSV_INDENT = 4


def locale_identifier(locale: str) -> str:
    return locale.replace('-', '_')


def dart_map_literal(mapping: Dict[str, Any], indent: int = JSON_INDENT) -> str:
    """
    Serialize a mapping as an indented Dart map literal.

    Args:
        mapping: Nested or flat translation mapping
        indent: Spaces per nesting level

    Returns:
        str: JSON text that is also a valid Dart const map literal
    """
    # '$' only ever appears inside string tokens of JSON output
    return json.dumps(mapping, indent=indent, ensure_ascii=False).replace('$', '\\$')


def dart_string_literal(text: str) -> str:
    escaped = (
        text.replace('\\', '\\\\')
        .replace("'", "\\'")
        .replace('$', '\\$')
        .replace('\n', '\\n')
    )
    return f"'{escaped}'"


def replace_newlines(mapping: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace newline sequences in string values with NEWLINE_SENTINEL.

    Example:
        replace_newlines({"a": "line1\\nline2"})   # {"a": "line1😁line2"}
    """
    return {
        key: value.replace('\r\n', NEWLINE_SENTINEL).replace('\n', NEWLINE_SENTINEL)
        if isinstance(value, str) else value
        for key, value in mapping.items()
    }


def _locale_identifiers(locales: Iterable[str]) -> List[str]:
    owners: Dict[str, str] = {}
    identifiers = []
    for locale in locales:
        identifier = locale_identifier(locale)
        check_dart_identifier(identifier, locale)
        if identifier in owners:
            raise IdentifierCollisionError(identifier, owners[identifier], locale)
        owners[identifier] = locale
        identifiers.append(identifier)
    return identifiers


def render_locale_map(provider, indent: int = JSON_INDENT, newline_sentinel: bool = False) -> str:
    """
    Render the CodegenLoader document for every locale of a provider.

    Args:
        provider: Object with locales() and translations_for(locale)
        indent: Spaces per nesting level in the map literals
        newline_sentinel: Replace newlines in values with NEWLINE_SENTINEL

    Returns:
        str: Complete Dart document

    Raises:
        InvalidIdentifierError: If a locale is not a valid Dart identifier
        IdentifierCollisionError: If two locales normalize to one identifier
    """
    locales = provider.locales()
    identifiers = _locale_identifiers(locales)

    parts = [LOADER_HEADER]
    for locale, identifier in zip(locales, identifiers):
        mapping = provider.translations_for(locale)
        if newline_sentinel:
            mapping = replace_newlines(mapping)
        parts.append(
            f"  static const Map<String, dynamic> {identifier} = {dart_map_literal(mapping, indent)};\n"
        )

    entries = ', '.join(f'"{identifier}": {identifier}' for identifier in identifiers)
    parts.append(f"  static const Map<String, Map<String, dynamic>> mapLocales = {{{entries}}};\n")
    parts.append("}\n")
    return ''.join(parts)


def render_key_constants(entries: Iterable[KeyEntry]) -> str:
    """
    Render the LocaleKeys document.

    Args:
        entries: Flattened keys, already checked for identifier collisions

    Returns:
        str: Complete Dart document with one constant per entry
    """
    parts = [KEYS_HEADER]
    for entry in entries:
        parts.append(f"  static const String {entry.identifier} = {dart_string_literal(entry.path)};\n")
    parts.append("}\n")
    return ''.join(parts)
