"""
Error Types for Localization Codegen

Every failure the generator can report derives from CodegenError, so the
command-line entry point can catch a single type and print one diagnostic
line. All of them are terminal for the run: nothing is retried and no output
file is written.

Hierarchy:
    CodegenError
    ├── InputError                 missing source path / file, empty file set
    ├── ParseError                 malformed CSV or JSON
    ├── ConfigurationError         unknown format or delimiter
    ├── LocaleNotFoundError        locale absent from the CSV header (also a LookupError)
    ├── IdentifierCollisionError   two keys generate the same Dart identifier
    └── InvalidIdentifierError     a key or locale is not a valid Dart identifier
"""

from typing import Optional


class CodegenError(Exception):
    """Base class for all generator errors."""


class InputError(CodegenError):
    """Source directory or file is missing, or the resolved file list is empty."""


class ParseError(CodegenError):
    """
    A source document could not be parsed.

    Args:
        message: What went wrong
        source: Optional file name the error refers to
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ConfigurationError(CodegenError):
    """Unsupported format or invalid option value."""


class LocaleNotFoundError(CodegenError, LookupError):
    """Requested locale is not a CSV header column or a loaded JSON file."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"Locale '{locale}' is not defined by the translation source")


class IdentifierCollisionError(CodegenError):
    """
    Two different source keys map to the same generated identifier.

    Example:
        The CSV keys "a.b" and "a_b" both become the Dart constant a_b.
    """

    def __init__(self, identifier: str, first: str, second: str):
        self.identifier = identifier
        self.first = first
        self.second = second
        super().__init__(
            f"Keys '{first}' and '{second}' both generate the identifier '{identifier}'"
        )


class InvalidIdentifierError(CodegenError):
    """
    A key or locale cannot become a Dart identifier.

    Example:
        The CSV key "sign-in" would generate `static const String sign-in`.
    """

    def __init__(self, identifier: str, key: str):
        self.identifier = identifier
        self.key = key
        super().__init__(f"'{key}' does not make a valid Dart identifier ('{identifier}')")
