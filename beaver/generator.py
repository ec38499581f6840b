from datetime import datetime, timezone

import numpy as np

from beaver.transition import Action, Direction, State, UndefinedTransition
from beaver.turing_machine import PartialTuringMachine, check_max_steps, check_size

# Every action the generator adds writes a 1.
WRITE_SYMBOL = 1


class CandidateGenerator:
    """
    Grows a busy beaver candidate one action at a time.

    The partial machine is re-run from a blank tape after every extension.
    Whenever a run gets stuck on an unset (state, symbol) slot, a new action
    is chosen for that slot. The search stops once a run halts, exhausts its
    budget, or reaches the last unset slot of an N-state-full table, which is
    left unset so that it becomes the halting transition.
    """

    def __init__(self, num_states, max_steps, rng=None, logger=None):
        check_size(num_states)
        check_max_steps(max_steps)
        self.num_states = num_states
        self.max_steps = max_steps
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.logger = logger
        self.machine = PartialTuringMachine.empty(num_states)
        self.runs = 0

    def choose_action(self, state, symbol):
        limit = self.machine.state_choice_limit()
        next_state = State.random(State.start(), limit, self.rng)

        direction = Direction.random(self.rng)
        if direction is Direction.Right:
            candidate = Action(WRITE_SYMBOL, direction, next_state)
            if self.machine.is_zero_dextrous_with(state, symbol, candidate):
                direction = Direction.Left

        return Action(WRITE_SYMBOL, direction, next_state)

    def is_halting_slot(self):
        """The last unset slot of an N-state-full table stays the halt."""
        return self.machine.is_n_state_full() and self.machine.count_unset_actions() == 1

    def step(self):
        """
        Run the partial machine once and extend it if the run got stuck.
        Returns False once the search is over.
        """
        outcome = self.machine.run(self.max_steps)
        self.runs += 1
        if not isinstance(outcome, UndefinedTransition):
            return False
        if self.is_halting_slot():
            return False

        state, symbol = outcome
        action = self.choose_action(state, symbol)
        self.machine.add_action(state, symbol, action)

        if self.logger is not None:
            self.logger.log({
                "event": "extend",
                "run": self.runs,
                "state": state.letter,
                "symbol": symbol,
                "action": str(action),
                "machine": str(self.machine),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            })
        return True

    def generate(self):
        while self.step():
            pass
        return self.machine.to_machine()


def generate_busy_beaver(num_states, max_steps, rng=None, logger=None):
    """
    Build one busy beaver candidate with num_states states.

    rng is a numpy Generator or a seed for numpy.random.default_rng; the same
    seed always yields the same machine.
    """
    return CandidateGenerator(num_states, max_steps, rng=rng, logger=logger).generate()
