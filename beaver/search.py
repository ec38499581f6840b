from collections import namedtuple
from datetime import datetime, timezone

import numpy as np

from beaver.evaluator import evaluate_batch
from beaver.generator import generate_busy_beaver

SearchResult = namedtuple("SearchResult", ["machine", "productivity", "steps", "halted"])


def pick_best(halted, steps, productivity):
    """
    Index of the best halting candidate: most ones, then fewest steps, then
    earliest. Returns None if nothing halted.
    """
    best = None
    for idx in np.nonzero(halted)[0]:
        key = (-int(productivity[idx]), int(steps[idx]))
        if best is None or key < best[0]:
            best = (key, int(idx))
    return None if best is None else best[1]


def search_busy_beaver(num_states, max_steps, attempts=32, seed=None, logger=None):
    """Generate `attempts` candidates and keep the most productive halting one."""
    if attempts < 1:
        raise ValueError(f"attempts must be positive, got {attempts}.")
    rng = np.random.default_rng(seed)
    machines = [generate_busy_beaver(num_states, max_steps, rng=rng) for _ in range(attempts)]

    halted, steps, productivity = evaluate_batch(machines, max_steps=max_steps)

    if logger is not None:
        now = datetime.now(timezone.utc).isoformat()
        entries = [
            {
                "machine": str(machine),
                "states": num_states,
                "steps_taken": int(steps[idx]),
                "productivity": int(productivity[idx]),
                "halted": bool(halted[idx]),
                "timestamp": now,
            }
            for idx, machine in enumerate(machines)
        ]
        logger.log_halting([e for e in entries if e["halted"]])
        logger.log_non_halting([e for e in entries if not e["halted"]])

    idx = pick_best(halted, steps, productivity)
    if idx is None:
        return SearchResult(machines[0], None, int(steps[0]), False)
    return SearchResult(machines[idx], int(productivity[idx]), int(steps[idx]), True)
