"""
Console Output Helpers

Colored console messages and the end-of-run summary table.

Message Types:
    - info:    green,  "easy localization: <message>"
    - warning: yellow, "[WARNING] easy localization: <message>"
    - error:   red,    "[ERROR] easy localization: <message>"

Usage:
    from localization_codegen.utils.console import print_info, print_error

    print_info("All done! File generated in lib/generated/codegen_loader.g.dart")
    print_error("Source path empty")
"""

from typing import Iterable

from colorama import Fore, init
from prettytable import PrettyTable

init(autoreset=True)

PREFIX = "easy localization"


def print_colored(text: str, color: str) -> None:
    """
    Print text to the console with a colorama color prefix.

    Args:
        text: The message to print
        color: The color from colorama.Fore (e.g., Fore.CYAN, Fore.GREEN)
    """
    print(color + text)


def print_info(message: str) -> None:
    print_colored(f"{PREFIX}: {message}", Fore.GREEN)


def print_warning(message: str) -> None:
    print_colored(f"[WARNING] {PREFIX}: {message}", Fore.YELLOW)


def print_error(message: str) -> None:
    print_colored(f"[ERROR] {PREFIX}: {message}", Fore.RED)


def build_summary_table(rows: Iterable) -> PrettyTable:
    """
    Build the summary table shown after a successful run.

    Args:
        rows: Iterable of (output_path, format, locale_count, constant_count)

    Returns:
        PrettyTable: Table with one row per generated file

    Example Output:
        +-------------------------------------+--------+---------+-----------+
        | Generated file                      | Format | Locales | Constants |
        +-------------------------------------+--------+---------+-----------+
        | lib/generated/codegen_loader.g.dart | csv    | 2       | 2         |
        +-------------------------------------+--------+---------+-----------+
    """
    table = PrettyTable()
    table.field_names = ["Generated file", "Format", "Locales", "Constants"]
    for row in rows:
        table.add_row(list(row))
    return table


def print_summary(rows: Iterable) -> None:
    print_colored(build_summary_table(rows).get_string(), Fore.CYAN)
