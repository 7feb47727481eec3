"""IR variables."""

from __future__ import annotations

from dataclasses import dataclass

from pulsar.utils.id import Id


@dataclass(frozen=True, order=True)
class Variable:
    """A numbered IR variable, displayed as ``i<id>`` and ordered by id."""

    id: Id

    def __str__(self) -> str:
        return f"i{self.id}"