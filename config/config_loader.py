import json
import os

from beaver.turing_machine import MAX_STATES, MIN_STATES

# The batch evaluator allocates 2 * max_steps + 3 tape cells (one byte each).
MAX_STEPS_LIMIT = 10_000_000

DEFAULT_CONFIG = {
    "max_steps": 1000,
    "state_size": 4,
    "attempts": 32,
    "seed": None,
    "save_results": True,
    "output_directory": "logs/",
    "log_file_prefix": "busybeaver_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "state_size": int,
    "attempts": int,
    "seed": (int, type(None)),
    "save_results": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass; only accept it where bool is expected
        if isinstance(value, bool) and expected_type is not bool:
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")
        if not isinstance(value, expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    if not MIN_STATES <= config["state_size"] <= MAX_STATES:
        raise ValueError(f"state_size must be between {MIN_STATES} and {MAX_STATES}.")
    if not 1 <= config["max_steps"] <= MAX_STEPS_LIMIT:
        raise ValueError(f"max_steps must be between 1 and {MAX_STEPS_LIMIT:,}.")
    if config["attempts"] < 1:
        raise ValueError("attempts must be positive.")

def load_config(path="config/runtime_config.json"):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    if config["save_results"]:
        os.makedirs(config["output_directory"], exist_ok=True)

    return config
