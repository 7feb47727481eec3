"""Ports: constants and lvalues read or written by IR operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pulsar.ir.variable import Variable
from pulsar.utils.pool import Handle


class Port:
    """A constant or an lvalue."""

    __slots__ = ()

    def root_var(self) -> Optional[Variable]:
        """The variable this port ultimately names, if any."""
        return None

    def vars(self) -> List[Variable]:
        """Every variable this port references."""
        return []


@dataclass(frozen=True)
class Constant(Port):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VariablePort(Port):
    var: Variable

    def root_var(self) -> Optional[Variable]:
        return self.var

    def vars(self) -> List[Variable]:
        return [self.var]

    def __str__(self) -> str:
        return str(self.var)


@dataclass(frozen=True)
class PartialAccess(Port):
    """One level of indexing; canonicalization folds chains into :class:`Access`."""

    array: Handle[Port]
    index: Handle[Port]

    def root_var(self) -> Optional[Variable]:
        return self.array.value.root_var()

    def vars(self) -> List[Variable]:
        return [*self.array.value.vars(), *self.index.value.vars()]

    def __str__(self) -> str:
        return f"{self.array}[{self.index}]"


@dataclass(frozen=True)
class Access(Port):
    var: Variable
    indices: Tuple[Handle[Port], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "indices", tuple(self.indices))

    def root_var(self) -> Optional[Variable]:
        return self.var

    def vars(self) -> List[Variable]:
        result = [self.var]
        for index in self.indices:
            result.extend(index.value.vars())
        return result

    def __str__(self) -> str:
        return f"{self.var}" + "".join(f"[{index}]" for index in self.indices)


@dataclass(frozen=True)
class LoweredAccess(Port):
    var: Variable

    def root_var(self) -> Optional[Variable]:
        return self.var

    def vars(self) -> List[Variable]:
        return [self.var]

    def __str__(self) -> str:
        return f"{self.var}[<generated>]"


def ports_used(handle: Handle[Port]) -> List[Handle[Port]]:
    """``handle`` followed by the index ports it reads."""
    result = [handle]
    port = handle.value
    if isinstance(port, PartialAccess):
        result.append(port.index)
    elif isinstance(port, Access):
        result.extend(port.indices)
    return result