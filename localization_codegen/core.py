"""
Core Orchestration Module for Localization Codegen

This module is the entry point of the generator. It resolves the run options,
finds and reads the translation sources, renders the Dart document(s) and only
then writes them to disk.

Workflow Steps:
    1. Parse command-line flags and merge them with codegen_config.json
    2. Resolve the source files (one explicit file, or every matching file
       directly inside the source directory, sorted by name)
    3. Read and parse every source file
    4. Render one document per pass ('csv_and_keys' runs two passes)
    5. Write all documents, then print a summary table

Nothing is written unless every pass rendered successfully.

Command Line:
    localization-codegen [-S SOURCE_DIR] [-s SOURCE_FILE] [-O OUTPUT_DIR]
                         [-o OUTPUT_FILE] [-f FORMAT] [-t TEMPLATE_LOCALE]
                         [-d DELIMITER] [-c CONFIG]

Example:
    $ localization-codegen -f json -S resources/langs
    easy localization: All done! File generated in lib/generated/codegen_loader.g.dart

    $ localization-codegen -f keys -S missing/dir
    [ERROR] easy localization: Source path does not exist

Usage:
    from localization_codegen.core import generate, write_results
    from localization_codegen.utils.generator_config import resolve_options

    results = generate(resolve_options({"format": "csv", "source_file": "langs.csv"}))
    write_results(results)
"""

import argparse
import os
import sys
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from localization_codegen.generator.code_emitter import (
    CSV_INDENT,
    JSON_INDENT,
    locale_identifier,
    render_key_constants,
    render_locale_map,
)
from localization_codegen.utils.console import print_error, print_info, print_summary, print_warning
from localization_codegen.utils.csv_utils import detect_csv_delimiter
from localization_codegen.utils.errors import CodegenError, ConfigurationError, InputError, ParseError
from localization_codegen.utils.generator_config import (
    CSV_FORMATS,
    DEFAULT_OPTIONS,
    FORMATS,
    JSON_FORMATS,
    KEYS_OUTPUT_FILE,
    GenerationOptions,
    load_config_file,
    resolve_options,
)
from localization_codegen.utils.json_tree import JsonLocaleSet, locale_name_from_path, parse_json_tree
from localization_codegen.utils.key_flattener import flatten_keys, flatten_table_keys
from localization_codegen.utils.locale_table import LocaleTable

SOURCE_SUFFIXES = {
    'json': ('.json',),
    'csv': ('.csv', '.tsv'),
}

SourceFile = Tuple[Path, str]


@dataclass(frozen=True)
class GenerationResult:
    """
    One rendered document, ready to be written verbatim.

    Attributes:
        output_path: Destination file
        text: Complete Dart source
        format: Format of the pass that produced it
        locale_count: Locales in the document (0 for key constants)
        constant_count: Generated Dart constants
    """
    output_path: Path
    text: str
    format: str
    locale_count: int
    constant_count: int


def plan_passes(options: GenerationOptions) -> List[GenerationOptions]:
    """
    Split the run into emission passes.

    'csv_and_keys' becomes a 'csv' pass writing the requested output file and
    a 'csv_keys' pass writing KEYS_OUTPUT_FILE. Every other format is one pass.
    """
    if options.format == 'csv_and_keys':
        return [
            replace(options, format='csv'),
            replace(options, format='csv_keys', output_file=KEYS_OUTPUT_FILE),
        ]
    return [options]


def resolve_source_files(options: GenerationOptions) -> List[Path]:
    """
    Resolve the list of translation files for a run.

    Args:
        options: Resolved run options

    Returns:
        List[Path]: The explicit source file, or every '.json' file (JSON
                    formats) / '.csv' and '.tsv' file (CSV formats) directly
                    inside the source directory, sorted by file name

    Raises:
        InputError: Missing source directory or file, or nothing matched
    """
    source_dir = Path(options.source_dir)
    if not source_dir.is_dir():
        raise InputError("Source path does not exist")

    if options.source_file:
        source_file = source_dir / options.source_file
        if not source_file.is_file():
            raise InputError(f"Source file does not exist ({source_file})")
        return [source_file]

    suffixes = SOURCE_SUFFIXES['json' if options.format in JSON_FORMATS else 'csv']
    files = sorted(
        (path for path in source_dir.iterdir() if path.is_file() and path.suffix.lower() in suffixes),
        key=lambda path: path.name
    )
    if not files:
        raise InputError("Source path empty")
    return files


def read_sources(files: Sequence[Path]) -> List[SourceFile]:
    """Read every file as UTF-8 text, keeping resolution order."""
    sources = []
    for path in files:
        try:
            sources.append((path, path.read_text(encoding='utf-8')))
        except UnicodeDecodeError as e:
            raise ParseError(f"file is not valid UTF-8: {e}", path.name) from e
    return sources


def load_locale_table(source: SourceFile, delimiter: str) -> LocaleTable:
    path, text = source
    if delimiter == 'auto':
        delimiter = detect_csv_delimiter(text, path.name)
    return LocaleTable.from_text(text, delimiter=delimiter, source=path.name)


def select_template(sources: Sequence[SourceFile], template_locale: Optional[str]) -> SourceFile:
    """
    Pick the JSON file whose keys become LocaleKeys.

    Raises:
        InputError: If template_locale matches none of the files
    """
    if not template_locale:
        return sources[0]

    wanted = locale_identifier(template_locale)
    for source in sources:
        if locale_name_from_path(source[0]) == wanted:
            return source
    raise InputError(f"No source file for template locale '{template_locale}'")


def render_pass(options: GenerationOptions, sources: Sequence[SourceFile]) -> GenerationResult:
    """
    Render the document of a single-format pass.

    Raises:
        ConfigurationError: For 'csv_and_keys' or any unknown format
        ParseError, InvalidIdentifierError, IdentifierCollisionError: From the
            parsers, the flattener and the emitter
    """
    fmt = options.format

    if fmt == 'json':
        locale_set = JsonLocaleSet.from_files(sources)
        text = render_locale_map(locale_set, indent=JSON_INDENT)
        locale_count = len(locale_set.locales())
        constant_count = locale_count + 1
    elif fmt == 'keys':
        path, content = select_template(sources, options.template_locale)
        entries = flatten_keys(parse_json_tree(content, source=path.name))
        text = render_key_constants(entries)
        locale_count, constant_count = 0, len(entries)
    elif fmt == 'csv':
        table = load_locale_table(sources[0], options.delimiter)
        text = render_locale_map(table, indent=CSV_INDENT, newline_sentinel=True)
        locale_count = len(table.locales())
        constant_count = locale_count + 1
    elif fmt == 'csv_keys':
        table = load_locale_table(sources[0], options.delimiter)
        entries = flatten_table_keys(table.keys())
        text = render_key_constants(entries)
        locale_count, constant_count = 0, len(entries)
    else:
        raise ConfigurationError(f"Format not supported: '{fmt}'")

    return GenerationResult(options.output_path, text, fmt, locale_count, constant_count)


def generate(options: GenerationOptions) -> List[GenerationResult]:
    """
    Run every pass of a generation in memory.

    Args:
        options: Resolved run options

    Returns:
        List[GenerationResult]: One result, or two for 'csv_and_keys'

    Raises:
        CodegenError: Any input, parse, configuration or collision error
        OSError: If a source file cannot be read
    """
    if options.format not in FORMATS:
        raise ConfigurationError(f"Format not supported: '{options.format}'")

    files = resolve_source_files(options)
    if options.format in CSV_FORMATS and len(files) > 1:
        print_warning(f"Found {len(files)} CSV files, using {files[0].name}")
        files = files[:1]

    sources = read_sources(files)
    return [render_pass(pass_options, sources) for pass_options in plan_passes(options)]


def _check_destination(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.is_dir():
        raise InputError(f"Output path is a directory ({path})")


def _write_temp(path: Path, text: str) -> Path:
    """Write text to a hidden temp file next to path and return the temp path."""
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
            f.write(text)
    except BaseException:
        temp_path.unlink()
        raise
    return temp_path


def write_results(results: Sequence[GenerationResult]) -> None:
    """
    Write every rendered document, or none of them.

    All destinations are checked first, then every document is staged in a
    temp file beside its destination. Temp files are moved into place only
    once all of them were written; on failure they are removed.

    Raises:
        InputError: If a destination is an existing directory
        OSError: If a folder cannot be created or a file cannot be written
    """
    for result in results:
        _check_destination(result.output_path)

    staged = []
    try:
        for result in results:
            staged.append((_write_temp(result.output_path, result.text), result.output_path))
    except BaseException:
        for temp_path, _ in staged:
            temp_path.unlink()
        raise

    for temp_path, output_path in staged:
        os.replace(temp_path, output_path)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localization-codegen",
        description="Generate easy_localization Dart sources from JSON or CSV translations"
    )
    parser.add_argument(
        "-S", "--source-dir",
        help=f"Folder containing localization files (default: {DEFAULT_OPTIONS['source_dir']})"
    )
    parser.add_argument(
        "-s", "--source-file",
        help="File to use for localization, relative to the source folder"
    )
    parser.add_argument(
        "-O", "--output-dir",
        help=f"Output folder stores for the generated file (default: {DEFAULT_OPTIONS['output_dir']})"
    )
    parser.add_argument(
        "-o", "--output-file",
        help=f"Output file name (default: {DEFAULT_OPTIONS['output_file']})"
    )
    parser.add_argument(
        "-f", "--format",
        help=f"One of {', '.join(FORMATS)} (default: {DEFAULT_OPTIONS['format']})"
    )
    parser.add_argument(
        "-t", "--template-locale",
        help="Locale whose JSON file provides the keys for the 'keys' format"
    )
    parser.add_argument(
        "-d", "--delimiter",
        help="CSV delimiter: auto, comma, semicolon, tab or pipe (default: auto)"
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to a JSON config file (default: ./codegen_config.json if present)"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        int: 0 on success, 1 if the run was aborted (nothing is written)
    """
    args = build_arg_parser().parse_args(argv)
    overrides = {
        "source_dir": args.source_dir,
        "source_file": args.source_file,
        "output_dir": args.output_dir,
        "output_file": args.output_file,
        "format": args.format,
        "template_locale": args.template_locale,
        "delimiter": args.delimiter,
    }

    try:
        options = resolve_options(overrides, load_config_file(args.config))
        results = generate(options)
        write_results(results)
    except (CodegenError, OSError) as e:
        print_error(str(e))
        return 1

    for result in results:
        print_info(f"All done! File generated in {result.output_path}")
    print_summary(
        (str(r.output_path), r.format, r.locale_count, r.constant_count) for r in results
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
