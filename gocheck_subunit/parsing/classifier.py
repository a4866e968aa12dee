"""Line classifier for gocheck test runner output.

Maps a single line of gocheck output to a ``LineMatch`` describing the
test it refers to, or ``None`` when the line is not one of the recognized
shapes.  Shapes are tried in a fixed priority order and the first match
wins:

1. ``****** Running Suite.Test``                      -> ``exists``
2. ``PASS: file.go:12: Suite.Test      0.005s``       -> ``success``
3. ``FAIL: file.go:12: Suite.Test`` (or ``PANIC:``)   -> ``fail``
4. ``SKIP: file.go:12: Suite.Test (reason)``          -> ``skip`` with reason
5. ``SKIP: file.go:12: text``                         -> ``skip`` without reason

For shape 5 the classifier cannot tell a test identifier from a reason
continuation line; ``LineMatch.test_id`` carries the raw text and the
parser decides which one it is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


class PatternConfigurationError(ValueError):
    """A fixed classifier pattern failed to compile.

    This is a programming error in the classifier's own rules and is
    raised at setup time, never in response to test output.
    """

    def __init__(self, pattern: str, error: re.error) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {error}")
        self.pattern = pattern
        self.error = error


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile *pattern*, raising ``PatternConfigurationError`` if invalid."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternConfigurationError(pattern, e) from e


def match_string(pattern: str, text: str) -> list[str]:
    """Return the groups of the first match of *pattern* in *text*.

    The full match comes first, followed by each group, mirroring the
    usual submatch convention.  An empty list means no match.
    """
    match = compile_pattern(pattern).search(text)
    if match is None:
        return []
    return [match.group(0), *match.groups()]


# Dotted Suite.Method identifier
TEST_ID_PATTERN = r"[\w$]+(?:\.[\w$]+)+"
_LOCATION = r"(?P<location>.+?:\d+)"

_RUNNING_RE = compile_pattern(
    rf"^\*{{6}} Running (?P<test_id>{TEST_ID_PATTERN})\s*$"
)
_PASS_RE = compile_pattern(
    rf"^PASS: {_LOCATION}: (?P<test_id>{TEST_ID_PATTERN})\s+"
    r"(?P<duration>\d+(?:\.\d+)?)s\s*$"
)
_FAIL_RE = compile_pattern(
    rf"^(?:FAIL|PANIC): {_LOCATION}: (?P<test_id>{TEST_ID_PATTERN})"
    r"(?:\s+(?P<duration>\d+(?:\.\d+)?)s)?\s*$"
)
_SKIP_REASON_RE = compile_pattern(
    rf"^SKIP: {_LOCATION}: (?P<test_id>{TEST_ID_PATTERN})\s+\((?P<reason>.*)\)\s*$"
)
_SKIP_RE = compile_pattern(rf"^SKIP: {_LOCATION}: (?P<text>.*\S)\s*$")
_TEST_ID_RE = compile_pattern(rf"^{TEST_ID_PATTERN}$")


@dataclass(frozen=True)
class LineMatch:
    """A recognized line of gocheck output."""

    kind: str  # exists, success, fail, skip
    test_id: str
    location: str = ""
    reason: str | None = None
    duration: float | None = None


def _duration(match: re.Match[str]) -> float | None:
    value = match.group("duration")
    return float(value) if value is not None else None


def _running(match: re.Match[str]) -> LineMatch:
    return LineMatch(kind="exists", test_id=match.group("test_id"))


def _passed(match: re.Match[str]) -> LineMatch:
    return LineMatch(
        kind="success",
        test_id=match.group("test_id"),
        location=match.group("location"),
        duration=_duration(match),
    )


def _failed(match: re.Match[str]) -> LineMatch:
    return LineMatch(
        kind="fail",
        test_id=match.group("test_id"),
        location=match.group("location"),
        duration=_duration(match),
    )


def _skipped_with_reason(match: re.Match[str]) -> LineMatch:
    return LineMatch(
        kind="skip",
        test_id=match.group("test_id"),
        location=match.group("location"),
        reason=match.group("reason"),
    )


def _skipped(match: re.Match[str]) -> LineMatch:
    return LineMatch(
        kind="skip",
        test_id=match.group("text"),
        location=match.group("location"),
    )


# Priority order matters: the inline-reason SKIP must win over the bare one.
LINE_SHAPES: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], LineMatch]], ...] = (
    (_RUNNING_RE, _running),
    (_PASS_RE, _passed),
    (_FAIL_RE, _failed),
    (_SKIP_REASON_RE, _skipped_with_reason),
    (_SKIP_RE, _skipped),
)


def classify_line(line: str) -> LineMatch | None:
    """Classify one line of gocheck output.

    Args:
        line: A single line, with or without its trailing newline.

    Returns:
        The ``LineMatch`` for the first matching shape, or None if the
        line is not recognized.
    """
    line = line.rstrip("\r\n")
    for pattern, handler in LINE_SHAPES:
        match = pattern.match(line)
        if match is not None:
            return handler(match)
    return None


def is_test_id(text: str) -> bool:
    """True if *text* has the dotted ``Suite.Method`` form."""
    return _TEST_ID_RE.match(text) is not None


def method_name(test_id: str) -> str:
    """Return the method part of a ``Suite.Method`` identifier."""
    return test_id.rsplit(".", 1)[-1]


def is_setup(test_id: str) -> bool:
    """True for ``SetUpTest``/``SetUpSuite`` style fixture methods."""
    return method_name(test_id).startswith("SetUp")


def is_fixture(test_id: str) -> bool:
    """True for SetUp* and TearDown* fixture methods."""
    name = method_name(test_id)
    return name.startswith("SetUp") or name.startswith("TearDown")
