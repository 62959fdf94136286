"""
Localization Codegen - Main Entry Point

Runs the generator from a source checkout without installing the package.
Installed copies expose the same entry point as the `localization-codegen`
console script.

Usage:
    python3 run.py                         # csv_and_keys from resources/langs
    python3 run.py -f json                 # one Dart map per JSON file
    python3 run.py -f keys -t en           # LocaleKeys from en.json
    python3 run.py -s langs.csv -f csv     # Dart maps from a single CSV file

Exit Codes:
    0 - Generated file(s) written
    1 - Run aborted, nothing written (the reason is printed in red)
"""

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT_DIR))

from localization_codegen.core import main

if __name__ == "__main__":
    sys.exit(main())
