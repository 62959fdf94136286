"""
Test Suite for Localization Codegen

This package contains the tests for every stage of the generator:
- Unit tests: CSV parsing, locale tables, JSON trees, key flattening,
  Dart code emission and configuration resolution
- Integration tests: complete command-line runs against temporary folders
- Fixtures: sample JSON and CSV translation resources

Test Organization:
- tests/unit/: Unit tests for individual modules
- tests/integration/: End-to-end generator runs
- tests/fixtures/: Translation files and helpers for reading generated Dart

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test suite
    pytest tests/unit/
    pytest tests/integration/

    # Run with coverage
    pytest --cov=localization_codegen tests/
"""

__version__ = "1.0.0"
