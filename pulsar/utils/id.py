"""Unique identifier generation."""

from __future__ import annotations

Id = int


class Gen:
    """Produces consecutive unique integer identifiers, starting from zero."""

    def __init__(self, start: Id = 0) -> None:
        self._next = start

    @classmethod
    def new_skipping(cls, skip: Id) -> "Gen":
        """A generator guaranteed never to produce ``skip``."""
        return cls(skip + 1)

    def next(self) -> Id:
        """Returns a fresh identifier."""
        result = self._next
        self._next += 1
        return result

    def __repr__(self) -> str:
        return f"Gen(next={self._next})"