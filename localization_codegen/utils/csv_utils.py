"""
CSV Utilities for Localization Codegen

This module turns the raw text of a translation spreadsheet export into a
rectangular grid of string cells, and detects which delimiter the export uses.

PROBLEM SOLVED:
---------------
Translation spreadsheets are exported with different delimiters depending on
the tool and the region:
- Google Sheets / English locales: comma (',')
- Excel in many European locales: semicolon (';')
- TSV exports: tab ('\\t')
- Some custom tooling: pipe ('|')

The generator should not force a single one on its users, so the delimiter is
detected from the header row unless the user passes one explicitly.

DETECTION STRATEGY:
-------------------
Stage 0: File extension
    - A '.tsv' file is always tab-delimited

Stage 1: csv.Sniffer, restricted to the supported delimiters
    - Only the header line is analyzed; it holds the key column name and
      locale identifiers only

Stage 2: Manual fallback (count-based detection)
    - Counts occurrences of each supported delimiter in the header line

Stage 3: Final fallback
    - Returns comma (',')

GRID RULES:
-----------
- Standard CSV quoting: fields may contain delimiters, newlines and doubled quotes
- Blank lines (and rows made only of empty cells) are skipped
- Every row must have exactly as many cells as the header row
- Cells are always strings; numbers are not converted
- A leading UTF-8 byte order mark is dropped

USAGE PATTERNS:
---------------
    text = Path('resources/langs/langs.csv').read_text(encoding='utf-8')
    delimiter = detect_csv_delimiter(text, 'langs.csv')
    grid = parse_csv_grid(text, delimiter=delimiter, source='langs.csv')
    header, rows = grid[0], grid[1:]
"""

import csv
import io
from typing import List, Optional

from .errors import ParseError

SUPPORTED_DELIMITERS = [',', ';', '\t', '|']
BYTE_ORDER_MARK = '\ufeff'


def _header_line(text: str) -> str:
    for line in text.lstrip(BYTE_ORDER_MARK).splitlines():
        if line.strip():
            return line
    return ''


def detect_csv_delimiter(text: str, file_name: Optional[str] = None) -> str:
    """
    Detect the delimiter of a CSV document from its header line.

    Args:
        text: Full CSV document
        file_name: Optional file name; a '.tsv' extension forces a tab

    Returns:
        str: One of ',', ';', '\\t', '|'. Returns ',' when nothing is detected.

    Example:
        detect_csv_delimiter("key;en;fr\\nhello;Hello;Bonjour")   # ';'
        detect_csv_delimiter("key\\thello", "langs.tsv")          # '\\t'
    """
    if file_name and file_name.lower().endswith('.tsv'):
        return '\t'

    header = _header_line(text)
    if not header:
        return ','

    try:
        # Stage 1: Sniffer limited to the delimiters we support
        return csv.Sniffer().sniff(header, delimiters=''.join(SUPPORTED_DELIMITERS)).delimiter
    except csv.Error:
        # Stage 2: most frequent supported delimiter in the header
        counts = {d: header.count(d) for d in SUPPORTED_DELIMITERS}
        detected = max(counts, key=counts.get)
        return detected if counts[detected] > 0 else ','


def parse_csv_grid(
    text: str,
    delimiter: str = ',',
    source: Optional[str] = None
) -> List[List[str]]:
    """
    Parse a delimited-text blob into a rectangular grid of string cells.

    Row 0 of the returned grid is the header row.

    Args:
        text: Raw CSV/TSV text
        delimiter: Field delimiter (default: comma)
        source: Optional file name used in error messages

    Returns:
        List[List[str]]: Rows of cells, every row as wide as the header

    Raises:
        ParseError: If the text is empty, a quoted field is never closed, or a
                    row's column count differs from the header's

    Example:
        parse_csv_grid('key,en\\ngreeting,"Hello, world"')
        # [['key', 'en'], ['greeting', 'Hello, world']]
    """
    if not text or not text.strip():
        raise ParseError("CSV document is empty", source)

    # newline='' keeps embedded newlines inside quoted fields untouched
    buffer = io.StringIO(text.lstrip(BYTE_ORDER_MARK), newline='')
    reader = csv.reader(buffer, delimiter=delimiter, strict=True)

    grid = []
    try:
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            grid.append(row)
    except csv.Error as e:
        raise ParseError(f"malformed CSV near line {reader.line_num}: {e}", source) from e

    if not grid:
        raise ParseError("CSV document is empty", source)

    width = len(grid[0])
    for index, row in enumerate(grid[1:], start=1):
        if len(row) != width:
            raise ParseError(
                f"row {index} has {len(row)} columns, expected {width} like the header",
                source
            )

    return grid
