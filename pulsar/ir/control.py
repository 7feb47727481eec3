"""Control flow trees that schedule IR operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Union

from pulsar.ir.ir import Add, Assign, Ir, Mul
from pulsar.ir.port import Constant, Port, VariablePort
from pulsar.ir.variable import Variable
from pulsar.utils.pool import Handle, Pool
from pulsar.utils.span import INDENT_WIDTH

PortLike = Union[Port, Variable]


class IndentWriter:
    """Accumulates text, indenting every non-empty line by the current level."""

    def __init__(self, level: int = 0, width: int = INDENT_WIDTH) -> None:
        self.level = level
        self.width = width
        self._parts: List[str] = []
        self._line_start = True

    def write(self, text: str) -> None:
        for number, chunk in enumerate(text.split("\n")):
            if number > 0:
                self._parts.append("\n")
                self._line_start = True
            if chunk:
                if self._line_start:
                    self._parts.append(" " * (self.width * self.level))
                    self._line_start = False
                self._parts.append(chunk)

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    @contextmanager
    def indented(self) -> Iterator["IndentWriter"]:
        self.level += 1
        try:
            yield self
        finally:
            self.level -= 1

    def getvalue(self) -> str:
        return "".join(self._parts)


class Control(ABC):
    """A node of a control tree. Only :class:`Seq` and :class:`Par` hold operations."""

    @abstractmethod
    def write_to(self, writer: IndentWriter) -> None:
        """Writes this control's pretty form to ``writer``."""

    def pretty(self, indent: int = 0) -> str:
        """This control's pretty form, starting ``indent`` levels deep."""
        writer = IndentWriter(indent)
        self.write_to(writer)
        return writer.getvalue()

    def __str__(self) -> str:
        return self.pretty()


@dataclass
class Empty(Control):
    def write_to(self, writer: IndentWriter) -> None:
        pass


@dataclass
class Delay(Control):
    delay: int

    def write_to(self, writer: IndentWriter) -> None:
        writer.write(f"delay {self.delay}")


@dataclass
class For(Control):
    """A loop over ``lower`` up to but excluding ``exclusive_upper``.

    The loop owns its bound ports outright.
    """

    variant: Variable
    lower: Port
    exclusive_upper: Port
    body: Handle[Control]

    def init_latency(self) -> int:
        """Cycles needed to initialize the loop variant to the lower bound."""
        return 1

    def write_to(self, writer: IndentWriter) -> None:
        writer.writeln(f"for {self.variant} in {self.lower} ..< {self.exclusive_upper} {{")
        with writer.indented():
            self.body.value.write_to(writer)
        writer.write("\n}")


def _write_block(keyword: str, children: List[Handle[Control]], writer: IndentWriter) -> None:
    writer.writeln(f"{keyword} {{")
    with writer.indented():
        for child in children:
            child.value.write_to(writer)
            writer.writeln()
    writer.write("}")


@dataclass
class Seq(Control):
    children: List[Handle[Control]] = field(default_factory=list)

    def push(self, child: Handle[Control]) -> None:
        self.children.append(child)

    def write_to(self, writer: IndentWriter) -> None:
        _write_block("seq", self.children, writer)


@dataclass
class Par(Control):
    children: List[Handle[Control]] = field(default_factory=list)

    @classmethod
    def singleton(cls, child: Handle[Control]) -> "Par":
        return cls([child])

    def push(self, child: Handle[Control]) -> None:
        self.children.append(child)

    def write_to(self, writer: IndentWriter) -> None:
        _write_block("par", self.children, writer)


@dataclass
class IfElse(Control):
    cond: Port
    true_branch: Handle[Control]
    false_branch: Handle[Control]

    def write_to(self, writer: IndentWriter) -> None:
        writer.writeln(f"if {self.cond} {{")
        with writer.indented():
            self.true_branch.value.write_to(writer)
        writer.writeln("\n} else {")
        with writer.indented():
            self.false_branch.value.write_to(writer)
        writer.write("\n}")


@dataclass
class Enable(Control):
    ir: Ir

    def write_to(self, writer: IndentWriter) -> None:
        writer.write(str(self.ir))


def _as_port(value: PortLike) -> Port:
    if isinstance(value, Variable):
        return VariablePort(value)
    if isinstance(value, Port):
        return value
    raise TypeError(f"cannot use {value!r} as a port")


class ControlBuilder:
    """Builds control as a sequence of logical time steps, each a :class:`Par`.

    ``pool`` holds the ports and control that the builder creates.
    """

    def __init__(self, pool: Pool) -> None:
        self.pool = pool
        self._pars: List[Par] = [Par()]

    def push(self, control: Union[Control, Ir]) -> None:
        """Enables ``control`` in the current time step."""
        if isinstance(control, Ir):
            control = Enable(control)
        self._pars[-1].push(self.pool.add(control))

    def split(self) -> None:
        """Places all later pushes in a subsequent time step."""
        self._pars.append(Par())

    def push_add(self, result: PortLike, port: Port, port2: Port) -> None:
        self.push(Add(self.add_port(result), self.add_port(port), self.add_port(port2)))

    def push_mul(self, result: PortLike, port: Port, port2: Port) -> None:
        self.push(Mul(self.add_port(result), self.add_port(port), self.add_port(port2)))

    def push_assign(self, result: PortLike, port: Port) -> None:
        self.push(Assign(self.add_port(result), self.add_port(port)))

    def add_port(self, port: PortLike) -> Handle[Port]:
        return self.pool.add(_as_port(port))

    def new_const(self, value: int) -> Handle[Port]:
        return self.pool.add(Constant(value))

    def build(self) -> Control:
        """The built control: a single par, or a seq of one par per time step."""
        if len(self._pars) == 1:
            return self._pars[0]
        return Seq([self.pool.add(par) for par in self._pars])