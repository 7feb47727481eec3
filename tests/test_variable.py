from hypothesis import given
from hypothesis import strategies as st

from pulsar.ir.variable import Variable
from pulsar.utils.id import Gen


def test_display_prefixes_id():
    assert str(Variable(7)) == "i7"


@given(st.integers(min_value=0))
def test_display_round_trip(n):
    assert int(str(Variable(n))[1:]) == n


@given(st.integers(min_value=0), st.integers(min_value=0))
def test_order_follows_id(a, b):
    assert (Variable(a) < Variable(b)) == (a < b)
    assert (Variable(a) == Variable(b)) == (a == b)


def test_variables_from_gen_are_distinct_and_sorted():
    gen = Gen()
    variables = [Variable(gen.next()) for _ in range(5)]
    assert len(set(variables)) == 5
    assert sorted(reversed(variables)) == variables


def test_hashable_by_id():
    mapping = {Variable(3): "x"}
    assert mapping[Variable(3)] == "x"