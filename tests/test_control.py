import pytest

from pulsar.ir.control import (
    ControlBuilder,
    Delay,
    Empty,
    Enable,
    For,
    IfElse,
    IndentWriter,
    Par,
    Seq,
)
from pulsar.ir.ir import Add, Assign, Mul
from pulsar.ir.port import Constant, VariablePort
from pulsar.ir.variable import Variable
from pulsar.utils.pool import Pool
from pulsar.utils.span import INDENT_WIDTH

PAD = " " * INDENT_WIDTH


@pytest.fixture
def pool():
    return Pool()


def _assign(pool, var, value):
    return pool.add(
        Enable(Assign(pool.add(VariablePort(Variable(var))), pool.add(Constant(value))))
    )


def test_empty_prints_nothing():
    assert Empty().pretty() == ""


def test_delay_pretty():
    assert Delay(3).pretty() == "delay 3"


def test_seq_pretty(pool):
    seq = Seq([_assign(pool, 0, 1)])
    assert seq.pretty() == "seq {\n" + PAD + "i0 = 1\n}"


def test_par_pretty_has_one_line_per_child(pool):
    par = Par([_assign(pool, 0, 1), _assign(pool, 1, 2)])
    lines = par.pretty().split("\n")
    assert lines[0] == "par {"
    assert lines[-1] == "}"
    assert len(lines) == 4
    assert all(line.startswith(PAD) for line in lines[1:-1])


def test_for_pretty(pool):
    loop = For(Variable(0), Constant(0), Constant(4), _assign(pool, 1, 2))
    lines = loop.pretty().split("\n")
    assert lines[0] == "for i0 in 0 ..< 4 {"
    assert lines[1] == PAD + str(pool.from_id(loop.body.id()))
    assert lines[2] == "}"


def test_if_else_pretty(pool):
    if_else = IfElse(Constant(1), _assign(pool, 0, 1), _assign(pool, 0, 2))
    lines = if_else.pretty().split("\n")
    assert lines[0].startswith("if 1")
    assert "} else {" in lines
    assert lines[-1] == "}"
    assert lines[1].strip() == str(if_else.true_branch)
    assert lines[-2].strip() == str(if_else.false_branch)


def test_str_matches_pretty(pool):
    seq = Seq([_assign(pool, 0, 1)])
    assert str(seq) == seq.pretty()


def test_pretty_with_indent_prefixes_every_line(pool):
    seq = Seq([_assign(pool, 0, 1)])
    base = seq.pretty().split("\n")
    indented = seq.pretty(1).split("\n")
    assert indented == [PAD + line for line in base]


def test_for_init_latency(pool):
    loop = For(Variable(0), Constant(0), Constant(4), pool.add(Empty()))
    assert loop.init_latency() == 1


def test_seq_push(pool):
    seq = Seq()
    child = _assign(pool, 0, 1)
    seq.push(child)
    assert [c.id() for c in seq.children] == [child.id()]


def test_par_singleton(pool):
    child = _assign(pool, 0, 1)
    par = Par.singleton(child)
    assert [c.id() for c in par.children] == [child.id()]


def test_separate_instances_do_not_share_children(pool):
    first = Seq()
    first.push(_assign(pool, 0, 1))
    assert Seq().children == []


def test_builder_without_split_gives_par(pool):
    builder = ControlBuilder(pool)
    builder.push_assign(Variable(0), Constant(1))
    builder.push_assign(Variable(1), Constant(2))
    control = builder.build()
    assert isinstance(control, Par)
    assert len(control.children) == 2


def test_builder_with_split_gives_seq_of_pars(pool):
    builder = ControlBuilder(pool)
    builder.push_assign(Variable(0), Constant(1))
    builder.split()
    builder.push_assign(Variable(1), Constant(2))
    control = builder.build()
    assert isinstance(control, Seq)
    assert len(control.children) == 2
    assert all(isinstance(child.value, Par) for child in control.children)
    assert all(len(child.value.children) == 1 for child in control.children)


def test_builder_converts_variable_result(pool):
    builder = ControlBuilder(pool)
    builder.push_assign(Variable(3), Constant(1))
    enable = builder.build().children[0].value
    assert isinstance(enable, Enable)
    assert enable.ir.kill().value == VariablePort(Variable(3))


def test_builder_push_add_and_mul(pool):
    builder = ControlBuilder(pool)
    builder.push_add(Variable(0), VariablePort(Variable(1)), Constant(2))
    builder.push_mul(Variable(3), VariablePort(Variable(0)), Constant(2))
    irs = [child.value.ir for child in builder.build().children]
    assert isinstance(irs[0], Add)
    assert isinstance(irs[1], Mul)
    assert irs[1].kill_var() == Variable(3)


def test_builder_push_wraps_ir(pool):
    builder = ControlBuilder(pool)
    ir = Assign(builder.add_port(Variable(0)), builder.new_const(5))
    builder.push(ir)
    child = builder.build().children[0].value
    assert child == Enable(ir)


def test_builder_new_const(pool):
    builder = ControlBuilder(pool)
    assert builder.new_const(9).value == Constant(9)


def test_builder_rejects_non_port(pool):
    builder = ControlBuilder(pool)
    with pytest.raises(TypeError):
        builder.add_port("x")


def test_indent_writer_skips_indent_on_blank_lines():
    writer = IndentWriter(1)
    writer.write("a\n\nb")
    assert writer.getvalue().split("\n") == [PAD + "a", "", PAD + "b"]