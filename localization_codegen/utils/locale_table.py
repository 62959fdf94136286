"""
Locale Table

Read-only view over a parsed CSV grid where column 0 holds the translation
keys and every other column holds one locale.

Example Grid:
    key,       en,     fr
    greeting,  Hello,  Bonjour
    farewell,  Bye,    Au revoir

    table = LocaleTable(grid)
    table.locales()                # ['en', 'fr']
    table.keys()                   # ['greeting', 'farewell']
    table.translations_for('fr')   # {'greeting': 'Bonjour', 'farewell': 'Au revoir'}
"""

from typing import Dict, List, Optional

from .csv_utils import parse_csv_grid
from .errors import LocaleNotFoundError, ParseError


class LocaleTable:
    """
    Locale-to-translations provider backed by a CSV grid.

    The grid must be rectangular with the header in row 0, as produced by
    parse_csv_grid(). Keys in column 0 must be unique.

    Attributes:
        source (Optional[str]): File name used in error messages
    """

    def __init__(self, grid: List[List[str]], source: Optional[str] = None):
        if not grid or len(grid[0]) < 2:
            raise ParseError("CSV header needs a key column and at least one locale column", source)

        self.source = source
        self._header = list(grid[0])
        self._rows = [list(row) for row in grid[1:]]

        seen = set()
        for row in self._rows:
            key = row[0]
            if key in seen:
                raise ParseError(f"duplicate translation key '{key}'", source)
            seen.add(key)

    @classmethod
    def from_text(cls, text: str, delimiter: str = ',', source: Optional[str] = None) -> 'LocaleTable':
        return cls(parse_csv_grid(text, delimiter=delimiter, source=source), source=source)

    def locales(self) -> List[str]:
        """Locale identifiers in header order (header minus the key column)."""
        return self._header[1:]

    def keys(self) -> List[str]:
        """Translation keys in row order, header excluded."""
        return [row[0] for row in self._rows]

    def translations_for(self, locale: str) -> Dict[str, str]:
        """
        Build the flat key -> value mapping of one locale.

        Args:
            locale: A locale identifier from the header row

        Returns:
            Dict[str, str]: One entry per data row, in row order

        Raises:
            LocaleNotFoundError: If the locale is not a header column
        """
        if locale not in self.locales():
            raise LocaleNotFoundError(locale)

        index = self._header.index(locale, 1)
        return {row[0]: row[index] for row in self._rows}
