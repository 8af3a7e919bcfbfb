# Configuration: colors, code length, turn rules, commitment settings, etc.
import copy
import os

DEFAULT_RULES = {
    "name": "classic",  # Identifier for this ruleset
    "code_length": 4,  # Number of pegs in the code
    "num_colors": 6,  # Available colors (see color set below)
    "colors": [1, 2, 3, 4, 5, 6],  # Peg symbols, 1..6
    "consumed": 0,  # Sentinel for pegs removed during matching (not a color)
    "enforce_turn_parity": True,  # Guesser on even turns, code-generator on odd
    "commitment": {
        "domain": "mastermind/solution-commitment/v1",  # Hash domain separation tag
        "blind_bytes": 32,  # Size of freshly generated blinds
        "min_blind_bytes": 16,  # Shortest blind accepted when committing
    },
    "display": {
        "emoji_map": {  # Optional, for text rendering of a board
            0: "⚪",
            1: "🔴",
            2: "🟢",
            3: "🔵",
            4: "🟡",
            5: "🟠",
            6: "🟣",
            "BK": "⚫",
            "W": "⚪",
        }
    },
}

# Values the game is built around; overrides may not change them.
FIXED_KEYS = ("code_length", "num_colors", "colors", "consumed")


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_rules(overrides=None):
    """
    Return a copy of the default ruleset merged with overrides.

    Args:
        overrides (dict, optional): Keys to replace. Nested dicts are merged.
    Returns:
        dict: The effective ruleset.
    """
    rules = copy.deepcopy(DEFAULT_RULES)
    rules["enforce_turn_parity"] = _env_flag(
        "MASTERMIND_ENFORCE_TURN_PARITY", rules["enforce_turn_parity"]
    )

    for key, value in (overrides or {}).items():
        if key in FIXED_KEYS and value != rules[key]:
            raise ValueError(f"Rule '{key}' is fixed at {rules[key]!r}.")
        if isinstance(value, dict) and isinstance(rules.get(key), dict):
            rules[key] = {**rules[key], **value}
        else:
            rules[key] = value

    return rules
