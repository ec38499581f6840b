from collections import namedtuple

from beaver.tape import Tape
from beaver.transition import (
    UNSET,
    Action,
    PartialTransition,
    State,
    Transition,
    UndefinedTransition,
    check_symbol,
)

MIN_STATES = 2
MAX_STATES = 7

# halted: reached the Halt state within the budget
# productivity: ones on the tape when the run stopped
# undefined: UndefinedTransition where a partial run got stuck, else None
Execution = namedtuple("Execution", ["halted", "steps", "productivity", "undefined"])


def check_size(num_states):
    if not MIN_STATES <= num_states <= MAX_STATES:
        raise ValueError(
            f"Machines need between {MIN_STATES} and {MAX_STATES} states, got {num_states}."
        )


def check_target(action, num_states):
    if action is not None and action.next_state > num_states:
        raise ValueError(
            f"Action {action} jumps to state {action.next_state.letter} "
            f"outside a {num_states}-state machine."
        )


def check_max_steps(max_steps):
    if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
        raise ValueError(f"max_steps must be a non-negative integer, got {max_steps!r}.")


def execute(transitions, max_steps):
    """
    Run a table from a blank tape starting in state A.

    Stops on Halt, after max_steps actions, or on the first slot whose action
    is None (only possible for partial tables).
    """
    check_max_steps(max_steps)
    tape = Tape()
    state = State.start()
    steps = 0

    while not state.is_halting and steps < max_steps:
        symbol = tape.read()
        action = transitions[state.index].get_action(symbol)
        if action is None:
            return Execution(False, steps, tape.count_ones(), UndefinedTransition(state, symbol))

        tape.write(action.symbol)
        tape.move_head(action.direction)
        state = action.next_state
        steps += 1

    return Execution(state.is_halting, steps, tape.count_ones(), None)


class TuringMachine:
    """A binary-alphabet Turing machine with a complete transition table."""

    def __init__(self, transitions):
        transitions = tuple(transitions)
        check_size(len(transitions))
        for transition in transitions:
            if not isinstance(transition, Transition):
                raise TypeError(f"Expected Transition, got {type(transition).__name__}.")
            for action in transition.actions:
                check_target(action, len(transitions))
        self.transitions = transitions

    @classmethod
    def from_partial(cls, partial):
        return cls(Transition.from_partial(t) for t in partial.transitions)

    @property
    def num_states(self):
        return len(self.transitions)

    def get_action(self, state, symbol):
        return self.transitions[State(state).index].get_action(symbol)

    def execute(self, max_steps):
        return execute(self.transitions, max_steps)

    def run(self, max_steps):
        """Productivity if the machine halts within max_steps, else None."""
        result = self.execute(max_steps)
        return result.productivity if result.halted else None

    def __eq__(self, other):
        if not isinstance(other, TuringMachine):
            return NotImplemented
        return self.transitions == other.transitions

    def __repr__(self):
        return f"TuringMachine({str(self)!r})"

    def __str__(self):
        return " ".join(str(t) for t in self.transitions)


class PartialTuringMachine:
    """A binary-alphabet Turing machine whose table may still have gaps."""

    def __init__(self, transitions):
        transitions = list(transitions)
        check_size(len(transitions))
        for transition in transitions:
            if not isinstance(transition, PartialTransition):
                raise TypeError(f"Expected PartialTransition, got {type(transition).__name__}.")
            for action in transition.actions:
                check_target(action, len(transitions))
        self.transitions = transitions

    @classmethod
    def empty(cls, num_states):
        return cls(PartialTransition() for _ in range(num_states))

    @property
    def num_states(self):
        return len(self.transitions)

    def copy(self):
        return PartialTuringMachine(t.copy() for t in self.transitions)

    def add_action(self, state, symbol, action):
        check_target(action, self.num_states)
        self.transitions[State(state).index].set_action_of(symbol, action)

    # Alias kept for callers that think of a slot as a transition.
    add_transition = add_action

    def get_action(self, state, symbol):
        return self.transitions[State(state).index].get_action(symbol)

    def count_specified_actions(self):
        return sum(t.count_specified_actions() for t in self.transitions)

    def count_unset_actions(self):
        return 2 * self.num_states - self.count_specified_actions()

    def is_n_state_full(self):
        """True when every state has at least one action."""
        return all(t.count_specified_actions() > 0 for t in self.transitions)

    def state_choice_limit(self):
        """
        Highest state a new action may jump to: one past the highest state
        used so far (as a row with actions or as a target), capped at N.
        """
        highest = State.start()
        for state, transition in self._rows():
            if transition.count_specified_actions():
                highest = max(highest, state)
            for action in transition.actions:
                if action is not None:
                    highest = max(highest, action.next_state)
        return State(min(highest + 1, self.num_states))

    def is_zero_dextrous_with(self, state, symbol, action):
        """
        True if, once `action` is placed at (state, symbol), every state's
        action on 0 is defined and moves right.
        """
        state = State(state)
        symbol = check_symbol(symbol)
        for row, transition in self._rows():
            if row == state and symbol == 0:
                candidate = action
            else:
                candidate = transition.actions[0]
            if candidate is None or candidate.direction != 1:
                return False
        return True

    def execute(self, max_steps):
        return execute(self.transitions, max_steps)

    def run(self, max_steps):
        """
        Productivity if the machine halts, None if the budget runs out, or an
        UndefinedTransition for the first missing slot the run reached.
        """
        result = self.execute(max_steps)
        if result.undefined is not None:
            return result.undefined
        return result.productivity if result.halted else None

    def to_machine(self):
        return TuringMachine.from_partial(self)

    def _rows(self):
        return ((State(i + 1), t) for i, t in enumerate(self.transitions))

    def __eq__(self, other):
        if not isinstance(other, PartialTuringMachine):
            return NotImplemented
        return self.transitions == other.transitions

    def __repr__(self):
        return f"PartialTuringMachine({str(self)!r})"

    def __str__(self):
        return " ".join(str(t) for t in self.transitions)


def _split_actions(text):
    tokens = text.split()
    if not tokens or len(tokens) % 2:
        raise ValueError(f"Expected an even, non-zero number of actions in {text!r}.")
    return [tokens[i:i + 2] for i in range(0, len(tokens), 2)]


def parse_machine(text):
    """Inverse of str(TuringMachine), e.g. '1RB 1LB 1LA 1RH'."""
    return TuringMachine(
        Transition(Action.parse(a0), Action.parse(a1)) for a0, a1 in _split_actions(text)
    )


def parse_partial_machine(text):
    """Inverse of str(PartialTuringMachine); '---' marks an unset slot."""
    return PartialTuringMachine(
        PartialTransition(*(None if a == UNSET else Action.parse(a) for a in pair))
        for pair in _split_actions(text)
    )
