"""
Test Fixtures

This module provides reusable test data:
- langs/: one JSON file per locale (en, fr, pt-BR)
- csv/langs.csv: the same kind of data as a single CSV grid

plus helpers that read values back out of generated Dart documents.
"""

import json
import re
import shutil
from pathlib import Path

FIXTURES_DIR = Path(__file__).resolve().parent
JSON_LANGS_DIR = FIXTURES_DIR / "langs"
CSV_LANGS_DIR = FIXTURES_DIR / "csv"

EN_KEY_PATHS = [
    "title",
    "msg",
    "price",
    "clicked.zero",
    "clicked.one",
    "clicked.other",
    "clicked",
    "gender.male",
    "gender.female",
    "gender.other",
    "gender",
    "profile.reset_password.label",
    "profile.reset_password.username",
    "profile.reset_password",
    "profile",
    "enabled",
    "version",
]


def copy_fixture_dir(source: Path, destination: Path) -> Path:
    shutil.copytree(source, destination)
    return destination


def load_fixture_json(name: str) -> dict:
    with (JSON_LANGS_DIR / name).open(encoding='utf-8') as f:
        return json.load(f)


def extract_map_literal(document: str, name: str) -> str:
    """Return the map literal assigned to `static const Map<String, dynamic> <name>`."""
    marker = f"  static const Map<String, dynamic> {name} = "
    start = document.index(marker) + len(marker)
    end = document.index("};\n", start) + 1
    return document[start:end]


def parse_map_literal(document: str, name: str) -> dict:
    """Decode a generated Dart map literal the way Dart would read it."""
    literal = extract_map_literal(document, name)
    return json.loads(re.sub(r'\\\$', '$', literal))
