import numpy as np
from numba import njit

from beaver.turing_machine import check_max_steps


@njit
def simulate_batch(actions, max_steps, steps_taken, ones, halted):
    """
    Simulate a batch of machines one after the other on a dense tape.
    actions[m, s, r] is the packed action of machine m in state s+1 reading r.
    """
    tape_size = 2 * max_steps + 3
    tape = np.zeros(tape_size, dtype=np.uint8)

    for idx in range(actions.shape[0]):
        tape[:] = 0
        head = tape_size // 2
        state = 1
        steps = 0

        while state != 0 and steps < max_steps:
            packed = np.int64(actions[idx, state - 1, tape[head]])
            tape[head] = packed & 1
            if (packed >> 1) & 1:
                head += 1
            else:
                head -= 1
            state = packed >> 2
            steps += 1

        count = 0
        for i in range(tape_size):
            count += tape[i]
        steps_taken[idx] = steps
        ones[idx] = count
        halted[idx] = state == 0


def encode_machines(machines):
    """Pack complete machines into a uint8 array of shape (M, N, 2)."""
    machines = list(machines)
    if not machines:
        raise ValueError("Cannot encode an empty batch of machines.")
    num_states = machines[0].num_states
    if any(m.num_states != num_states for m in machines):
        raise ValueError("All machines in a batch must have the same number of states.")

    encoded = np.zeros((len(machines), num_states, 2), dtype=np.uint8)
    for m, machine in enumerate(machines):
        for s, transition in enumerate(machine.transitions):
            for r, action in enumerate(transition.actions):
                encoded[m, s, r] = action.representation
    return encoded


def evaluate_batch(machines, max_steps=10000):
    """
    Host-side entry point for the compiled simulator.
    Returns (halted, steps, productivity) arrays, one entry per machine.
    The tape is a uint8 array of 2 * max_steps + 3 cells, so memory grows
    linearly with the budget (about 2 MB per million steps).
    """
    check_max_steps(max_steps)
    encoded = encode_machines(machines)
    num_machines = encoded.shape[0]

    steps_taken = np.zeros(num_machines, dtype=np.int64)
    ones = np.zeros(num_machines, dtype=np.int64)
    halted = np.zeros(num_machines, dtype=np.bool_)

    simulate_batch(encoded, max_steps, steps_taken, ones, halted)
    return halted, steps_taken, ones
