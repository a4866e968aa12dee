"""Gocheck output parsing: line classification and streaming reporting."""

from gocheck_subunit.parsing.classifier import (
    LineMatch,
    PatternConfigurationError,
    classify_line,
    match_string,
)
from gocheck_subunit.parsing.parser_reporter import ParserReporter, PendingSkip

__all__ = [
    "LineMatch",
    "ParserReporter",
    "PatternConfigurationError",
    "PendingSkip",
    "classify_line",
    "match_string",
]
