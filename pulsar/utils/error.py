"""Diagnostics: error codes, rendered error messages and an error manager."""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any, List, Optional, TextIO, TypeVar

from pulsar.utils.span import Span

T = TypeVar("T")

_BOLD = "1"
_DIM = "2"
_ITALIC = "3"
_UNDERLINE = "4"


def _paint(text: str, *codes: str, enabled: bool) -> str:
    if not enabled or not codes or not text:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


_DESCRIPTIONS = (
    "Quite unfortunate indeed.",
    "The lexer encountered a character that isn't a valid part of any language "
    "construct. Currently, UTF-8 and certain symbols are not handled.",
    "The end of file was encountered in the middle of parsing a language construct. "
    "For example, missing the ending brace to a function causes this error.",
    "A different token was encountered than expected.",
    "The only valid top-level construct is a function.",
    "Functions should be placed at the top level.",
    "The parser encountered an incorrect token when expecting the start of a "
    "statement. Valid statements begin with `let`, `for`, or an lvalue expression.",
    "An operator was misued.",
    "A type was syntactically incorrect. For example, an array type was declared "
    "with negative size.",
    "The oarser encountered an identifier not bound to any variable or function "
    "in scope.",
    "Types were not fully resolved at compile time.",
    "Hindley-Milner constraints were not satisfiable.",
    "An affine resource was used twice",
)


class ErrorCode(IntEnum):
    """Numbered kinds of diagnostics; shown as their number."""

    WOMP_WOMP = 0
    UNRECOGNIZED_CHARACTER = 1
    UNEXPECTED_EOF = 2
    UNEXPECTED_TOKEN = 3
    INVALID_TOP_LEVEL_CONSTRUCT = 4
    CONSTRUCT_SHOULD_BE_TOP_LEVEL = 5
    INVALID_TOKEN_TO_START_STATEMENT = 6
    INVALID_OPERATOR_SYNTAX = 7
    MALFORMED_TYPE = 8
    UNBOUND_NAME = 9
    AMBIGUOUS_TYPE = 10
    UNIFICATION_FAILURE = 11
    AFFINE_RESOURCE = 12

    def description(self) -> str:
        """A longer explanation of what this code means."""
        return _DESCRIPTIONS[self.value]

    @classmethod
    def from_value(cls, value: int) -> Optional["ErrorCode"]:
        """The code numbered ``value``, or None if there is none."""
        try:
            return cls(value)
        except ValueError:
            return None

    def __str__(self) -> str:
        return str(self.value)


class Level(Enum):
    INFO = "info"
    NOTE = "note"
    WARNING = "warning"
    ERROR = "error"

    @property
    def _foreground(self) -> str:
        return {"info": "97", "note": "93", "warning": "33", "error": "91"}[self.value]

    @property
    def _background(self) -> str:
        return {"info": "107", "note": "103", "warning": "43", "error": "101"}[self.value]

    def form_header(self, code: ErrorCode, color: bool = False) -> str:
        """The header such as ``error[E0003]`` that opens a primary message."""
        name = str(self)
        header = f"{name}[{name[0].upper()}{int(code):04d}]"
        return _paint(header, self._foreground, enabled=color)

    def __str__(self) -> str:
        return self.value


class Style(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


def _error_pointer(length: int) -> str:
    return "" if length == 0 else "└" + "─" * (length - 1)


@dataclass
class Error:
    """A diagnostic, optionally located at a span of source text."""

    style: Style = Style.PRIMARY
    level: Level = Level.ERROR
    code: ErrorCode = ErrorCode.WOMP_WOMP
    span: Optional[Span] = None
    message: str = ""
    explain: Optional[str] = None
    fix: Optional[str] = None

    def render(self, color: bool = False) -> str:
        """The printable form of this error, with ANSI styling if ``color``."""
        fg = self.level._foreground
        bg = self.level._background
        parts: List[str] = []

        # Only primary messages carry a header; secondary ones add information.
        if self.style is Style.PRIMARY:
            header = self.level.form_header(self.code, False)
            parts.append(_paint(header, fg, _BOLD, enabled=color) + ": ")
            if self.span is not None:
                parts.append(_paint(str(self.span.start), _UNDERLINE, enabled=color) + ": ")
        parts.append(_paint(self.message, _BOLD, enabled=color) + "\n")

        span = self.span
        if span is None:
            return "".join(parts)

        extra_lines = span.end.line - span.start.line
        before, after = 1, 1
        already_explained = False
        parts.append(_paint("     │  ", _DIM, enabled=color) + "\n")
        lines, current = span.start.lines(before, extra_lines + after)
        sections = span.find_intersection(lines, span.start_line() - before)
        for i, line in enumerate(lines):
            if i > 0:
                parts.append("\n")
            number = i + span.start.line - current
            parts.append(_paint(f"{number:>4} │  ", _DIM, enabled=color))
            if current <= i <= current + extra_lines:
                section = sections[i - current]
                split_first = section.start
                part1, rest = line[:split_first], line[split_first:]
                if line:
                    split_second = split_first + section.length() - 1
                    if split_second == len(line):
                        part2, part3 = rest, ""
                    else:
                        cut = split_second - split_first + 1
                        part2, part3 = rest[:cut], rest[cut:]
                    tail = part3 if part3 else _paint(" ", bg, enabled=color)
                    parts.append(part1 + _paint(part2, fg, enabled=color) + tail)
                else:
                    parts.append(part1 + _paint(" ", bg, enabled=color))
                if self.explain is not None and not already_explained:
                    already_explained = True
                    parts.append("\n")
                    parts.append(
                        _paint("     │", _DIM, enabled=color)
                        + "  "
                        + " " * len(part1)
                        + _paint(_error_pointer(section.length()), fg, enabled=color)
                        + " "
                        + _paint(self.explain, _BOLD, _ITALIC, enabled=color)
                    )
            else:
                parts.append(line)
        parts.append("\n" + _paint("     │  ", _DIM, enabled=color))
        if self.fix is not None:
            parts.append("\nSuggestion: " + _paint(self.fix, _BOLD, enabled=color))
        return "".join(parts)

    def __str__(self) -> str:
        return self.render(False)


class ErrorBuilder:
    """Fluently constructs an :class:`Error`."""

    def __init__(self) -> None:
        self._error = Error()

    def of_style(self, style: Style) -> "ErrorBuilder":
        self._error.style = style
        return self

    def at_level(self, level: Level) -> "ErrorBuilder":
        self._error.level = level
        return self

    def with_code(self, code: ErrorCode) -> "ErrorBuilder":
        self._error.code = code
        return self

    def span(self, span: Any) -> "ErrorBuilder":
        """Locates the error at ``span``, or at the span an object provides."""
        self._error.span = span if isinstance(span, Span) else span.span()
        return self

    def without_loc(self) -> "ErrorBuilder":
        self._error.span = None
        return self

    def message(self, message: str) -> "ErrorBuilder":
        self._error.message = str(message)
        return self

    def continues(self) -> "ErrorBuilder":
        """Marks a secondary error as continuing the previous one."""
        if self._error.style is not Style.SECONDARY:
            raise ValueError("only a secondary-style error can continue another")
        return self.message("   ...")

    def explain(self, explain: str) -> "ErrorBuilder":
        self._error.explain = str(explain)
        return self

    def fix(self, fix: str) -> "ErrorBuilder":
        self._error.fix = str(fix)
        return self

    def maybe_fix(self, fix: Optional[str]) -> "ErrorBuilder":
        self._error.fix = None if fix is None else str(fix)
        return self

    def build(self) -> Error:
        return replace(self._error)


class ErrorManager:
    """Collects errors, accepting at most ``max_count`` primary errors."""

    def __init__(self, max_count: int) -> None:
        self.max_count = max_count
        self._primary_count = 0
        self._errors: List[Error] = []

    def has_items(self) -> bool:
        """Whether anything at all has been recorded."""
        return bool(self._errors)

    def has_errors(self) -> bool:
        """Whether a primary error has been recorded."""
        return self._primary_count > 0

    def is_full(self) -> bool:
        return self._primary_count == self.max_count

    def record(self, error: Error) -> bool:
        """Records ``error``; returns False, dropping it, when full."""
        if self.is_full():
            return False
        if error.style is Style.PRIMARY and error.level is Level.ERROR:
            self._primary_count += 1
        self._errors.append(error)
        return True

    def consume_and_write(self, output: TextIO, color: bool = False) -> None:
        """Writes every recorded error to ``output`` and forgets them."""
        primary_level = Level.ERROR
        primary_code = ErrorCode.WOMP_WOMP
        count = len(self._errors)
        for i, error in enumerate(self._errors):
            if error.style is Style.PRIMARY:
                primary_level = error.level
                primary_code = error.code
                if i > 0:
                    output.write("\n")
            output.write(error.render(color) + "\n")
            ends_group = i + 1 == count or self._errors[i + 1].style is Style.PRIMARY
            if (
                primary_level is Level.ERROR
                and ends_group
                and primary_code is not ErrorCode.WOMP_WOMP
            ):
                output.write(f"For more information, pass `--explain {primary_code}`\n")
        self._errors.clear()
        self._primary_count = 0


class CompilationFailed(Exception):
    """A compilation stage failed and reported its errors."""

    def __init__(self, message: str = "Exiting due to errors") -> None:
        super().__init__(message)


def check_errors(
    value: Optional[T], error_manager: ErrorManager, output: Optional[TextIO] = None
) -> T:
    """Returns ``value`` unless it is None, in which case CompilationFailed is raised.

    Any recorded primary errors are first written to ``output`` (standard
    output by default).
    """
    if error_manager.has_errors():
        stream = sys.stdout if output is None else output
        isatty = getattr(stream, "isatty", None)
        color = bool(isatty()) if callable(isatty) else False
        error_manager.consume_and_write(stream, color)
    if value is None:
        raise CompilationFailed()
    return value