from collections import deque

from beaver.transition import Direction, check_symbol

CELL_BITS = 64
_BIT_MASK = CELL_BITS - 1
_CELL_SHIFT = 6
_FULL_CELL = (1 << CELL_BITS) - 1


class Tape:
    """
    Binary tape stored as a deque of 64-bit cells.

    Only the positions in `range` (inclusive) are materialized. A blank tape
    holds two cells covering -64..63 with the head at 0, and grows by one cell
    on a side whenever the head is about to step past that side.
    """

    def __init__(self):
        self.cells = deque([0, 0])
        self.head = 0
        self.range = (-CELL_BITS, CELL_BITS - 1)

    def read(self):
        cell_index, bit_index = self._cell_bit_index(self.head)
        return (self.cells[cell_index] >> bit_index) & 1

    def write(self, symbol):
        symbol = check_symbol(symbol)
        cell_index, bit_index = self._cell_bit_index(self.head)
        if symbol == 1:
            self.cells[cell_index] |= 1 << bit_index
        else:
            self.cells[cell_index] &= _FULL_CELL ^ (1 << bit_index)

    def move_head(self, direction):
        low, high = self.range
        if self.head == low:
            self.cells.appendleft(0)
            low -= CELL_BITS
        if self.head == high:
            self.cells.append(0)
            high += CELL_BITS
        self.range = (low, high)
        self.head += Direction.from_code(int(direction)).step

    def count_ones(self):
        return sum(bin(cell).count("1") for cell in self.cells)

    def symbol_at(self, position):
        """Symbol at any position; unmaterialized positions are blank."""
        low, high = self.range
        if not low <= position <= high:
            return 0
        cell_index, bit_index = self._cell_bit_index(position)
        return (self.cells[cell_index] >> bit_index) & 1

    def window(self, radius=10):
        """Two lines: symbols around the head and a caret under the head."""
        positions = range(self.head - radius, self.head + radius + 1)
        tape_str = " ".join(str(self.symbol_at(pos)) for pos in positions)
        head_str = " ".join("^" if pos == self.head else " " for pos in positions)
        return f"{tape_str}\n{head_str.rstrip()}"

    def _cell_bit_index(self, position):
        low, high = self.range
        if not low <= position <= high:
            raise IndexError(f"Position {position} is outside the tape range {self.range}.")
        offset = position - low
        return offset >> _CELL_SHIFT, offset & _BIT_MASK

    def __repr__(self):
        return f"Tape(head={self.head}, range={self.range}, ones={self.count_ones()})"
