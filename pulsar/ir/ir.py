"""IR operations enabled by control."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, List, Optional, Sequence, Tuple

from pulsar.ir.port import Port, ports_used
from pulsar.ir.variable import Variable
from pulsar.utils.pool import Handle


@dataclass(frozen=True)
class Ir:
    """An operation writing to the port ``result`` from its source ports."""

    result: Handle[Port]

    _SOURCES: ClassVar[Tuple[str, ...]] = ()

    def kill(self) -> Handle[Port]:
        """The port this operation writes."""
        return self.result

    def kill_var(self) -> Optional[Variable]:
        """The variable this operation writes, if its target names one."""
        return self.result.value.root_var()

    def gen(self) -> List[Handle[Port]]:
        """The top-level ports this operation reads."""
        return [getattr(self, name) for name in self._SOURCES]

    def gen_used(self) -> List[Handle[Port]]:
        """Every port read by this operation, including index ports."""
        return [used for port in self.gen() for used in ports_used(port)]

    def with_gen(self, sources: Sequence[Handle[Port]]) -> "Ir":
        """A copy of this operation reading from ``sources`` instead."""
        sources = list(sources)
        if len(sources) != len(self._SOURCES):
            raise ValueError(
                f"{type(self).__name__} reads {len(self._SOURCES)} ports, "
                f"not {len(sources)}"
            )
        return replace(self, **dict(zip(self._SOURCES, sources)))

    def with_kill(self, new_kill: Handle[Port]) -> "Ir":
        """A copy of this operation writing to ``new_kill`` instead."""
        return replace(self, result=new_kill)

    def ports(self) -> List[Handle[Port]]:
        """The top-level ports of this operation, target first."""
        return [self.result, *self.gen()]

    def with_ports(self, ports: Sequence[Handle[Port]]) -> "Ir":
        """A copy of this operation with its top-level ports replaced in order."""
        ports = list(ports)
        if not ports:
            raise ValueError("an operation needs at least a target port")
        return self.with_kill(ports[0]).with_gen(ports[1:])

    def ports_used(self) -> List[Handle[Port]]:
        """Every port referenced by this operation."""
        return [used for port in self.ports() for used in ports_used(port)]


@dataclass(frozen=True)
class _Binary(Ir):
    lhs: Handle[Port]
    rhs: Handle[Port]

    _SOURCES: ClassVar[Tuple[str, ...]] = ("lhs", "rhs")
    _OPERATOR: ClassVar[str] = "?"

    def __str__(self) -> str:
        return f"{self.result} = {self.lhs} {self._OPERATOR} {self.rhs}"


@dataclass(frozen=True)
class Add(_Binary):
    """A combinational addition."""

    _OPERATOR: ClassVar[str] = "+"


@dataclass(frozen=True)
class Mul(_Binary):
    """A pipelined multiply with an initiation interval of 1 and latency of 4."""

    _OPERATOR: ClassVar[str] = "*"


@dataclass(frozen=True)
class Assign(Ir):
    src: Handle[Port]

    _SOURCES: ClassVar[Tuple[str, ...]] = ("src",)

    def __str__(self) -> str:
        return f"{self.result} = {self.src}"