"""Component names, name mangling and demangling."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

MAIN_SYMBOL_PREFIX = "pulsar_SF4main"
"""If one exists, the start symbol of a program begins with this prefix."""


class TypeKind(Enum):
    UNIT = "unit"
    INT64 = "int64"
    NAME = "name"
    ARRAY = "array"
    FUNCTION = "function"


@dataclass(frozen=True)
class MangledType:
    """The part of a type that mangled names encode."""

    kind: TypeKind
    name: str = ""
    length: int = 0
    element: Optional["MangledType"] = None
    inputs: Tuple["MangledType", ...] = ()
    outputs: Tuple["MangledType", ...] = ()

    @classmethod
    def unit(cls) -> "MangledType":
        return cls(TypeKind.UNIT)

    @classmethod
    def int64(cls) -> "MangledType":
        return cls(TypeKind.INT64)

    @classmethod
    def named(cls, name: str) -> "MangledType":
        return cls(TypeKind.NAME, name=name)

    @classmethod
    def array(cls, element: "MangledType", length: int) -> "MangledType":
        return cls(TypeKind.ARRAY, length=length, element=element)

    @classmethod
    def function(
        cls, inputs: Sequence["MangledType"], outputs: Sequence["MangledType"]
    ) -> "MangledType":
        return cls(TypeKind.FUNCTION, inputs=tuple(inputs), outputs=tuple(outputs))

    def mangle(self) -> str:
        """The encoding of this type within a mangled symbol."""
        if self.kind is TypeKind.UNIT:
            return "u"
        if self.kind is TypeKind.INT64:
            return "q"
        if self.kind is TypeKind.NAME:
            return f"{len(self.name)}{self.name}"
        if self.kind is TypeKind.ARRAY:
            assert self.element is not None
            return f"A{self.length}E{self.element.mangle()}"
        raise ValueError("function types cannot appear inside a mangled symbol")


@dataclass(frozen=True)
class Name:
    """A symbol name, kept both as written and as mangled."""

    unmangled: str
    mangled: str
    is_native: bool

    @classmethod
    def from_native(
        cls, value: str, inputs: Sequence[MangledType], outputs: Sequence[MangledType]
    ) -> "Name":
        """A program function's name, mangled with its signature."""
        mangled = "".join(
            [
                f"pulsar_SF{len(value)}{value}",
                str(len(inputs)),
                *(ty.mangle() for ty in inputs),
                str(len(outputs)),
                *(ty.mangle() for ty in outputs),
            ]
        )
        return cls(value, mangled, True)

    @classmethod
    def plain(cls, value: str) -> "Name":
        """A name that is used as-is without mangling."""
        return cls(value, value, False)

    def __str__(self) -> str:
        return f"native {self.unmangled}" if self.is_native else self.mangled


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    EXTERNAL = "external"

    def __str__(self) -> str:
        return self.value


@dataclass
class Label:
    name: Name
    visibility: Visibility

    def __str__(self) -> str:
        return f"{self.visibility} {self.name}"


class _Demangler:
    def __init__(self, label: str) -> None:
        self._text = label
        self._pos = 0

    def _take(self) -> Optional[str]:
        if self._pos >= len(self._text):
            return None
        char = self._text[self._pos]
        self._pos += 1
        return char

    def _take_n(self, n: int, failure: str) -> str:
        if self._pos + n > len(self._text):
            raise ValueError(failure)
        result = self._text[self._pos : self._pos + n]
        self._pos += n
        return result

    def _take_number(self) -> int:
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos] in string.digits:
            self._pos += 1
        if start == self._pos:
            raise ValueError("No number found at the start of the string")
        return int(self._text[start : self._pos])

    def _take_prefix(self, prefix: str) -> None:
        for expected in prefix:
            char = self._take()
            if char is None:
                raise ValueError("EOF")
            if char != expected:
                raise ValueError("Mismatch")

    def _named_type(self) -> MangledType:
        length = self._take_number()
        return MangledType.named(self._take_n(length, "Failed to get name"))

    def _array_type(self) -> MangledType:
        length = self._take_number()
        if self._take() != "E":
            raise ValueError("Missing element type")
        return MangledType.array(self._type(), length)

    def _type(self) -> MangledType:
        char = self._take()
        if char == "u":
            return MangledType.unit()
        if char == "q":
            return MangledType.int64()
        if char == "A":
            return self._array_type()
        if char is not None:
            self._pos -= 1
        return self._named_type()

    def _types(self) -> Tuple[MangledType, ...]:
        count = self._take_number()
        return tuple(self._type() for _ in range(count))

    def _function(self) -> MangledType:
        length = self._take_number()
        self._take_n(length, "Failed to get function name")
        inputs = self._types()
        outputs = self._types()
        return MangledType.function(inputs, outputs)

    def _symbol(self) -> MangledType:
        char = self._take()
        if char == "F":
            return self._function()
        raise ValueError(f"Unknown symbol {char!r}")

    def demangle(self) -> MangledType:
        self._take_prefix("pulsar_")
        if self._take() == "S":
            return self._symbol()
        raise ValueError("Unknown mangled value")


def demangle(label: str) -> MangledType:
    """The function type encoded by the mangled symbol ``label``."""
    return _Demangler(label).demangle()