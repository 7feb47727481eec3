"""Source text, locations within it and spans between locations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

INDENT_WIDTH = 4


def _text_lines(text: str) -> List[str]:
    """Splits on newlines, dropping a trailing empty line and stripping carriage returns."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


@dataclass(frozen=True, eq=False)
class Source:
    """A named text file, or an unknown source when ``name`` is None.

    Two file sources with the same name are taken to be the same file.
    """

    name: Optional[str]
    contents: str = ""

    @classmethod
    def file(cls, name: str, contents: str) -> "Source":
        return cls(name, contents)

    @classmethod
    def unknown(cls) -> "Source":
        return cls(None, "")

    @classmethod
    def load_file(cls, path: Union[str, Path]) -> "Source":
        """Reads a UTF-8 file, naming the source after the file's base name."""
        path = Path(path)
        contents = path.read_bytes().decode("utf-8")
        return cls.file(path.name, contents)

    @property
    def is_unknown(self) -> bool:
        return self.name is None

    def lines(self, pos: int, before: int, after: int) -> Tuple[List[str], int]:
        """The line holding ``pos`` with up to ``before``/``after`` neighbours, and its index."""
        if self.is_unknown:
            return [], 0
        contents = self.contents
        if not 0 <= pos < len(contents):
            raise ValueError(f"position {pos} is outside the source")
        start = contents.rfind("\n", 0, pos) + 1
        end = contents.find("\n", start)
        if end == -1:
            end = len(contents)
        line = contents[start:end]

        before_lines = _text_lines(contents[:start])[-before:] if before else []
        after_lines = (
            _text_lines(contents[end + 1 :])[:after] if end + 1 < len(contents) else []
        )
        return [*before_lines, line, *after_lines], len(before_lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Source):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return "<unknown>" if self.name is None else self.name


@dataclass(frozen=True)
class Loc:
    """A line, column and direct offset into a source, formatted ``source:line:col``."""

    line: int = 1
    col: int = 1
    pos: int = 0
    source: Source = field(default_factory=Source.unknown)

    def lines(self, before: int, after: int) -> Tuple[List[str], int]:
        """See :meth:`Source.lines`."""
        return self.source.lines(self.pos, before, after)

    @classmethod
    def make_invalid(cls) -> "Loc":
        return cls(0, 0, 0, Source.unknown())

    def is_invalid(self) -> bool:
        return self.line == 0 and self.col == 0 and self.pos == 0

    def __str__(self) -> str:
        return f"{self.source}:{self.line}:{self.col}"

    # Locations in different sources are unordered: every comparison is False.
    def __lt__(self, other: "Loc") -> bool:
        return self.source == other.source and self.pos < other.pos

    def __le__(self, other: "Loc") -> bool:
        return self.source == other.source and self.pos <= other.pos

    def __gt__(self, other: "Loc") -> bool:
        return self.source == other.source and self.pos > other.pos

    def __ge__(self, other: "Loc") -> bool:
        return self.source == other.source and self.pos >= other.pos


@dataclass(frozen=True)
class LineSpan:
    """Character positions from ``start`` up to but excluding ``end`` on one line."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("line span must not end before it starts")

    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Span:
    """The text from ``start`` up to but excluding ``end`` within one source."""

    start: Loc
    end: Loc

    def __post_init__(self) -> None:
        if not self.start <= self.end:
            raise ValueError(
                "span start and end must share a source and end must not precede start"
            )

    @classmethod
    def unit(cls, start: Loc) -> "Span":
        """A span of length one at ``start``."""
        return cls(start, replace(start, pos=start.pos + 1, col=start.col + 1))

    def source(self) -> Source:
        return self.start.source

    def start_line(self) -> int:
        return self.start.line

    def end_line(self) -> int:
        return self.end.line

    def extend(self, other: "Span") -> "Span":
        """This span stretched to the end of ``other``, which must not start earlier."""
        if not self.start <= other.start:
            raise ValueError("cannot extend a span to one that starts before it")
        return Span(self.start, other.end)

    def find_intersection(self, lines: Sequence[str], start_line: int) -> List[LineSpan]:
        """The parts of ``lines`` (numbered from ``start_line``) that this span covers."""
        result = []
        for offset, line in enumerate(lines):
            actual_line = start_line + offset
            if not self.start_line() <= actual_line <= self.end_line():
                continue
            start_pos = self.start.col - 1 if actual_line == self.start_line() else 0
            end_pos = self.end.col - 1 if actual_line == self.end_line() else len(line)
            result.append(LineSpan(start_pos, end_pos))
        return result

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"