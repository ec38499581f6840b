import pytest

from beaver.transition import (
    Action,
    Direction,
    PartialTransition,
    State,
    Transition,
    UndefinedTransition,
)
from beaver.turing_machine import (
    PartialTuringMachine,
    TuringMachine,
    parse_machine,
    parse_partial_machine,
)

L, R = Direction.Left, Direction.Right


def two_state_beaver():
    return TuringMachine([
        Transition(Action(1, R, State.B), Action(1, L, State.B)),
        Transition(Action(1, L, State.A), Action(1, R, State.Halt)),
    ])


def test_two_state_beaver_halts():
    machine = two_state_beaver()
    result = machine.execute(1000)
    assert result.halted
    assert result.steps == 6
    assert result.productivity == 4
    assert machine.run(1000) == 4


def test_budget_too_small():
    machine = two_state_beaver()
    assert machine.run(5) is None
    assert machine.run(6) == 4
    assert machine.run(0) is None


def test_never_halts():
    machine = TuringMachine([
        Transition(Action(1, L, State.A), Action(0, L, State.A)),
        Transition(Action(1, L, State.A), Action(1, L, State.A)),
    ])
    assert machine.run(1000) is None
    result = machine.execute(1000)
    assert not result.halted
    assert result.steps == 1000


def test_run_is_deterministic():
    machine = parse_machine("1RB 1LC 1RC 1RB 1RD 0LE 1LA 1LD 1RH 0LA")
    assert machine.execute(10000) == machine.execute(10000)


def test_size_checks():
    single = [Transition(Action(1, L, State.A), Action(0, L, State.A))]
    with pytest.raises(ValueError):
        TuringMachine(single)
    with pytest.raises(ValueError):
        PartialTuringMachine.empty(1)
    with pytest.raises(ValueError):
        PartialTuringMachine.empty(8)


def test_target_outside_machine():
    with pytest.raises(ValueError):
        parse_machine("1RC 1LB 1LA 1RH")
    pm = PartialTuringMachine.empty(2)
    with pytest.raises(ValueError):
        pm.add_action(State.A, 0, Action(1, R, State.D))


def test_bad_max_steps():
    with pytest.raises(ValueError):
        two_state_beaver().run(-1)
    with pytest.raises(ValueError):
        two_state_beaver().run(1.5)


def test_display():
    assert str(two_state_beaver()) == "1RB 1LB 1LA 1RH"
    pm = PartialTuringMachine.empty(3)
    pm.add_action(State.B, 1, Action(0, L, State.C))
    assert str(pm) == "--- --- --- 0LC --- ---"


def test_parse_round_trip():
    text = "1RB 1LB 1LA 1RH"
    assert str(parse_machine(text)) == text
    assert parse_machine(text) == two_state_beaver()
    partial_text = "1RB --- --- 0LA"
    assert str(parse_partial_machine(partial_text)) == partial_text
    with pytest.raises(ValueError):
        parse_machine("1RB 1LB 1LA")
    with pytest.raises(ValueError):
        parse_machine("1RB 1LB --- 1RH")


def test_empty_partial_machine_is_undefined_at_start():
    pm = PartialTuringMachine.empty(3)
    assert pm.run(1000) == UndefinedTransition(State.A, 0)
    assert pm.execute(1000).steps == 0


def test_adding_missing_action_makes_progress():
    pm = PartialTuringMachine.empty(2)
    pm.add_action(State.A, 0, Action(1, R, State.B))
    first = pm.execute(100)
    assert first.undefined == UndefinedTransition(State.B, 0)

    state, symbol = first.undefined
    pm.add_action(state, symbol, Action(1, L, State.A))
    second = pm.execute(100)
    assert second.steps > first.steps
    assert second.undefined == UndefinedTransition(State.A, 1)


def test_partial_run_outcomes():
    pm = parse_partial_machine("1RB 1LB 1LA ---")
    assert pm.run(1000) == UndefinedTransition(State.B, 1)
    assert pm.to_machine().run(1000) == 4

    looping = parse_partial_machine("1LA 0LA --- ---")
    assert looping.run(1000) is None


def test_conversion_fills_every_slot():
    pm = PartialTuringMachine.empty(2)
    pm.add_action(State.A, 0, Action(1, R, State.B))
    machine = TuringMachine.from_partial(pm)
    assert str(machine) == "1RB 1RH 0RH 1RH"
    assert machine.run(10) == 1


def test_halt_is_not_an_index():
    pm = PartialTuringMachine.empty(2)
    with pytest.raises(ValueError):
        pm.add_action(State.Halt, 0, Action(1, R, State.A))


def test_n_state_full():
    pm = PartialTuringMachine.empty(2)
    assert not pm.is_n_state_full()
    pm.add_action(State.A, 0, Action(1, R, State.B))
    assert not pm.is_n_state_full()
    pm.add_action(State.B, 1, Action(1, L, State.A))
    assert pm.is_n_state_full()
    assert pm.count_specified_actions() == 2
    assert pm.count_unset_actions() == 2


def test_state_choice_limit():
    pm = PartialTuringMachine.empty(3)
    assert pm.state_choice_limit() is State.B
    pm.add_action(State.A, 0, Action(1, R, State.B))
    assert pm.state_choice_limit() is State.C
    pm.add_action(State.B, 0, Action(1, R, State.C))
    assert pm.state_choice_limit() is State.C


def test_zero_dextrous():
    pm = PartialTuringMachine.empty(2)
    pm.add_action(State.A, 0, Action(1, R, State.B))
    right = Action(1, R, State.A)
    left = Action(1, L, State.A)
    assert pm.is_zero_dextrous_with(State.B, 0, right)
    assert not pm.is_zero_dextrous_with(State.B, 0, left)
    assert not pm.is_zero_dextrous_with(State.B, 1, right)


def test_copy_is_independent():
    pm = PartialTuringMachine.empty(2)
    clone = pm.copy()
    clone.add_action(State.A, 0, Action(1, R, State.B))
    assert pm.count_specified_actions() == 0
    assert clone != pm
