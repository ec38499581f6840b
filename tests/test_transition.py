import numpy as np
import pytest

from beaver.transition import (
    Action,
    Direction,
    PartialTransition,
    State,
    Transition,
)


def test_action_packing():
    action = Action(1, Direction.Right, State.B)
    assert action.representation == (2 << 2) | (1 << 1) | 1
    assert action.unpack() == (1, Direction.Right, State.B)


def test_action_rejects_bad_symbol():
    with pytest.raises(ValueError):
        Action(2, Direction.Left, State.A)


def test_action_from_representation():
    for code in range(32):
        assert Action.from_representation(code).representation == code
    with pytest.raises(ValueError):
        Action.from_representation(32)


def test_action_str():
    assert str(Action(1, Direction.Right, State.B)) == "1RB"
    assert str(Action(0, Direction.Left, State.Halt)) == "0LH"
    assert str(Action(1, Direction.Left, State.G)) == "1LG"


def test_action_parse():
    assert Action.parse("0LC") == Action(0, Direction.Left, State.C)
    for bad in ["", "2LA", "1XA", "1LZ", "1LAB"]:
        with pytest.raises(ValueError):
            Action.parse(bad)


def test_state_from_code():
    assert State.from_code(0) is State.Halt
    assert State.from_code(7) is State.G
    with pytest.raises(ValueError):
        State.from_code(8)
    with pytest.raises(ValueError):
        State.from_code(-1)


def test_state_index():
    assert State.start() is State.A
    assert State.A.index == 0
    assert State.G.index == 6
    with pytest.raises(ValueError):
        State.Halt.index


def test_direction_from_code():
    assert Direction.from_code(0) is Direction.Left
    assert Direction.from_code(1) is Direction.Right
    with pytest.raises(ValueError):
        Direction.from_code(2)


def test_random_choices_are_reproducible():
    a = [State.random(State.A, State.C, np.random.default_rng(7)) for _ in range(5)]
    b = [State.random(State.A, State.C, np.random.default_rng(7)) for _ in range(5)]
    assert a == b
    rng = np.random.default_rng(3)
    states = {State.random(State.A, State.C, rng) for _ in range(200)}
    assert states == {State.A, State.B, State.C}
    directions = {Direction.random(rng) for _ in range(200)}
    assert directions == {Direction.Left, Direction.Right}


def test_transition_get_action():
    t = Transition(Action(1, Direction.Right, State.B), Action(0, Direction.Left, State.A))
    assert t.get_action_of(0) == (1, Direction.Right, State.B)
    assert t.get_action_of(1) == (0, Direction.Left, State.A)
    assert str(t) == "1RB 0LA"


def test_partial_transition():
    t = PartialTransition()
    assert t.count_specified_actions() == 0
    assert str(t) == "--- ---"
    assert t.get_action_of(0) is None

    t.set_action_of(1, Action(1, Direction.Left, State.A))
    assert t.count_specified_actions() == 1
    assert str(t) == "--- 1LA"

    t.set_action_of(0, Action(0, Direction.Right, State.Halt))
    assert t.count_specified_actions() == 2
    assert str(t) == "0RH 1LA"


def test_partial_to_full_uses_halting_defaults():
    full = Transition.from_partial(PartialTransition())
    assert str(full) == "0RH 1RH"

    partial = PartialTransition(Action(1, Direction.Left, State.B))
    assert str(Transition.from_partial(partial)) == "1LB 1RH"
