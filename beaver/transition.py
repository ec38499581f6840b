from collections import namedtuple
from enum import IntEnum

# Unset slots of a partial transition render as this placeholder.
UNSET = "---"


def check_symbol(symbol):
    if symbol not in (0, 1):
        raise ValueError(f"Symbol must be 0 or 1, got {symbol!r}.")
    return int(symbol)


class Direction(IntEnum):
    Left = 0
    Right = 1

    @classmethod
    def from_code(cls, code):
        if code not in (0, 1):
            raise ValueError(f"Invalid direction code: {code!r}")
        return cls(code)

    @classmethod
    def random(cls, rng):
        """Uniformly random direction drawn from a numpy Generator."""
        return cls(int(rng.integers(0, 1, endpoint=True)))

    @property
    def step(self):
        return 1 if self is Direction.Right else -1


class State(IntEnum):
    """Machine states. Halt is code 0, ordinary states A..G are 1..7."""
    Halt = 0
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7

    @classmethod
    def from_code(cls, code):
        if not isinstance(code, int) or not 0 <= code <= 7:
            raise ValueError(f"Invalid state code: {code!r}")
        return cls(code)

    @classmethod
    def start(cls):
        # State labels carry no order, so every run begins in A by convention.
        return cls.A

    @classmethod
    def random(cls, low, high, rng):
        """Uniformly random state in the inclusive range low..high."""
        return cls.from_code(int(rng.integers(int(low), int(high), endpoint=True)))

    @property
    def is_halting(self):
        return self is State.Halt

    @property
    def index(self):
        """Zero-based row of this state in a transition table."""
        if self is State.Halt:
            raise ValueError("The halting state has no transition.")
        return self.value - 1

    @property
    def letter(self):
        return self.name[0]


_LETTER_TO_STATE = {state.letter: state for state in State}
_LETTER_TO_DIRECTION = {direction.name[0]: direction for direction in Direction}


class Action:
    """
    Packed (symbol, direction, next state) triple.

    Bit 0 holds the symbol to write, bit 1 the direction (0 = Left,
    1 = Right) and bits 2-4 the code of the next state.
    """
    __slots__ = ("representation",)

    def __init__(self, symbol, direction, next_state):
        symbol = check_symbol(symbol)
        direction = Direction.from_code(int(direction))
        next_state = State.from_code(int(next_state))
        self.representation = (next_state << 2) | (direction << 1) | symbol

    @classmethod
    def from_representation(cls, representation):
        representation = int(representation)
        if not 0 <= representation < 32:
            raise ValueError(f"Invalid packed action: {representation}")
        return cls(representation & 1, representation >> 1 & 1, representation >> 2)

    @classmethod
    def parse(cls, text):
        """Parse the 3-character form produced by str(), e.g. '1RB'."""
        if len(text) != 3 or text[0] not in "01" \
                or text[1] not in _LETTER_TO_DIRECTION or text[2] not in _LETTER_TO_STATE:
            raise ValueError(f"Not an action: {text!r}")
        return cls(int(text[0]), _LETTER_TO_DIRECTION[text[1]], _LETTER_TO_STATE[text[2]])

    @property
    def symbol(self):
        return self.representation & 1

    @property
    def direction(self):
        return Direction(self.representation >> 1 & 1)

    @property
    def next_state(self):
        return State(self.representation >> 2)

    def unpack(self):
        return self.symbol, self.direction, self.next_state

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.representation == other.representation

    def __hash__(self):
        return hash(self.representation)

    def __repr__(self):
        return f"Action({self})"

    def __str__(self):
        symbol, direction, state = self.unpack()
        return f"{symbol}{direction.name[0]}{state.letter}"


# Canonical halting actions substituted for unset slots, indexed by read symbol.
DEFAULT_HALT_ACTIONS = (
    Action(0, Direction.Right, State.Halt),
    Action(1, Direction.Right, State.Halt),
)


class Transition:
    """Actions of one state, indexed by the symbol read."""
    __slots__ = ("actions",)

    def __init__(self, action_on_0, action_on_1):
        self.actions = (action_on_0, action_on_1)

    @classmethod
    def from_partial(cls, partial):
        return cls(*(
            action if action is not None else DEFAULT_HALT_ACTIONS[symbol]
            for symbol, action in enumerate(partial.actions)
        ))

    def get_action(self, symbol):
        return self.actions[check_symbol(symbol)]

    def get_action_of(self, symbol):
        return self.get_action(symbol).unpack()

    def __eq__(self, other):
        if not isinstance(other, Transition):
            return NotImplemented
        return self.actions == other.actions

    def __repr__(self):
        return f"Transition({self})"

    def __str__(self):
        return f"{self.actions[0]} {self.actions[1]}"


class PartialTransition:
    """Two optional actions; None marks a slot that has not been decided yet."""
    __slots__ = ("actions",)

    def __init__(self, action_on_0=None, action_on_1=None):
        self.actions = [action_on_0, action_on_1]

    def copy(self):
        return PartialTransition(*self.actions)

    def get_action(self, symbol):
        return self.actions[check_symbol(symbol)]

    def get_action_of(self, symbol):
        action = self.get_action(symbol)
        return None if action is None else action.unpack()

    def set_action_of(self, symbol, action):
        self.actions[check_symbol(symbol)] = action

    def count_specified_actions(self):
        return sum(1 for action in self.actions if action is not None)

    def __eq__(self, other):
        if not isinstance(other, PartialTransition):
            return NotImplemented
        return self.actions == other.actions

    def __repr__(self):
        return f"PartialTransition({self})"

    def __str__(self):
        return " ".join(UNSET if action is None else str(action) for action in self.actions)


UndefinedTransition = namedtuple("UndefinedTransition", ["state", "symbol"])
