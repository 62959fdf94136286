"""
Generator Configuration Module

This module resolves the options of one generation run from three layers,
later layers winning:

    1. Built-in defaults (DEFAULT_OPTIONS)
    2. The project configuration file, codegen_config.json
    3. Command-line flags

Configuration File:
    Location: ./codegen_config.json (or the path passed with --config)
    Format:
        {
            "source_dir": "resources/langs",
            "source_file": "langs.csv",
            "output_dir": "lib/generated",
            "output_file": "codegen_loader.g.dart",
            "format": "csv_and_keys",
            "template_locale": null,
            "delimiter": "auto"
        }

    Every entry is optional. Unknown entries are reported and ignored. A
    malformed file is reported and the built-in defaults are used instead.

Formats:
    json          one Dart map per JSON file (CodegenLoader)
    keys          LocaleKeys constants flattened from one JSON file
    csv           one Dart map per CSV locale column (CodegenLoader)
    csv_keys      LocaleKeys constants from the CSV key column
    csv_and_keys  csv + csv_keys, written to two files

Delimiters:
    auto (detect), ',' / comma, ';' / semicolon, '\\t' / tab, '|' / pipe

Usage:
    from localization_codegen.utils.generator_config import load_config_file, resolve_options

    file_config = load_config_file()
    options = resolve_options({"format": "keys"}, file_config)
    print(options.format)   # keys
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional, Union

from colorama import Fore

from .console import print_colored
from .errors import ConfigurationError, InputError

DEFAULT_CONFIG_FILE = "codegen_config.json"

# Output name of the key-constants pass in csv_and_keys mode
KEYS_OUTPUT_FILE = "codegen_loader_keys.g.dart"

FORMATS = ['json', 'keys', 'csv', 'csv_keys', 'csv_and_keys']
JSON_FORMATS = ['json', 'keys']
CSV_FORMATS = ['csv', 'csv_keys', 'csv_and_keys']

DELIMITER_ALIASES = {
    'auto': 'auto',
    ',': ',',
    'comma': ',',
    ';': ';',
    'semicolon': ';',
    '\t': '\t',
    '\\t': '\t',
    'tab': '\t',
    '|': '|',
    'pipe': '|',
}

DEFAULT_OPTIONS = {
    "source_dir": "resources/langs",
    "source_file": None,
    "output_dir": "lib/generated",
    "output_file": "codegen_loader.g.dart",
    "format": "csv_and_keys",
    "template_locale": None,
    "delimiter": "auto",
}


@dataclass(frozen=True)
class GenerationOptions:
    """
    Resolved, immutable configuration of a single generation run.

    Attributes:
        source_dir: Folder containing localization files
        source_file: Single file inside source_dir, overrides directory listing
        output_dir: Folder receiving the generated file
        output_file: Generated file name
        format: One of FORMATS
        template_locale: Locale whose JSON file feeds the 'keys' format
        delimiter: 'auto' or a literal delimiter character
    """
    source_dir: str = DEFAULT_OPTIONS["source_dir"]
    source_file: Optional[str] = None
    output_dir: str = DEFAULT_OPTIONS["output_dir"]
    output_file: str = DEFAULT_OPTIONS["output_file"]
    format: str = DEFAULT_OPTIONS["format"]
    template_locale: Optional[str] = None
    delimiter: str = "auto"

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / self.output_file

    def __str__(self) -> str:
        return (f"format: {self.format} sourceDir: {self.source_dir} "
                f"sourceFile: {self.source_file} outputDir: {self.output_dir} "
                f"outputFile: {self.output_file}")


OPTION_NAMES = [f.name for f in fields(GenerationOptions)]


def load_config_file(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Optional[str]]:
    """
    Load option overrides from the project configuration file.

    Args:
        config_path: Explicit path (from --config). When None, ./codegen_config.json
                     is used if it exists.

    Returns:
        Dict[str, Optional[str]]: Known option entries found in the file.
                                  Empty if there is no file or it is malformed.

    Raises:
        InputError: If an explicit config_path does not exist
        ConfigurationError: If an entry is not a string or null
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path.cwd() / DEFAULT_CONFIG_FILE

    if not path.exists():
        if explicit:
            raise InputError(f"Config file does not exist ({path})")
        return {}

    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print_colored(f"Error loading generator config {path}: {e}. Using defaults.", Fore.RED)
        return {}

    if not isinstance(data, dict):
        print_colored(f"Generator config {path} is not a JSON object. Using defaults.", Fore.RED)
        return {}

    config = {}
    for key, value in data.items():
        if key not in OPTION_NAMES:
            print_colored(f"Ignoring unknown option '{key}' in {path}", Fore.YELLOW)
            continue
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"Option '{key}' in {path} must be a string")
        config[key] = value
    return config


def normalize_delimiter(value: str) -> str:
    """
    Map a delimiter option to the literal delimiter (or 'auto').

    Raises:
        ConfigurationError: For anything not in DELIMITER_ALIASES
    """
    try:
        return DELIMITER_ALIASES[value.lower() if len(value) > 1 else value]
    except KeyError:
        raise ConfigurationError(f"Unsupported delimiter '{value}'") from None


def resolve_options(
    overrides: Dict[str, Optional[str]],
    file_config: Optional[Dict[str, Optional[str]]] = None
) -> GenerationOptions:
    """
    Merge defaults, file configuration and command-line overrides.

    None values mean "not set" and never replace a lower layer.

    Raises:
        ConfigurationError: Unknown format or delimiter
    """
    merged = dict(DEFAULT_OPTIONS)
    for layer in (file_config or {}, overrides):
        merged.update({key: value for key, value in layer.items() if value is not None})

    if merged["format"] not in FORMATS:
        raise ConfigurationError(
            f"Format not supported: '{merged['format']}' (choose from {', '.join(FORMATS)})"
        )
    merged["delimiter"] = normalize_delimiter(merged["delimiter"] or "auto")

    return GenerationOptions(**{name: merged[name] for name in OPTION_NAMES})
