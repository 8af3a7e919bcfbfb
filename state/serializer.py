# Convert game states to readable formats (for logging, export or hashing)
import json

from .game_state import GameState


def to_json(data_dict: dict, canonical: bool = False) -> str:
    """
    Convert a dictionary to a JSON string.
    Args:
        data_dict (dict): The dictionary to convert.
        canonical (bool): If True, produce the compact, key-sorted form used
            for hashing.
    Returns:
        str: The JSON string representation of the dictionary.
    """
    if canonical:
        return json.dumps(data_dict, sort_keys=True, separators=(",", ":"))
    return json.dumps(data_dict, indent=2)


def from_json(json_string: str) -> dict:
    """
    Convert a JSON string back to a dictionary.
    Args:
        json_string (str): The JSON string to convert.
    Returns:
        dict: The resulting dictionary.
    """
    return json.loads(json_string)


def state_to_json(game_state: GameState, canonical: bool = False) -> str:
    return to_json(game_state.to_dict(), canonical=canonical)


def state_from_json(json_string: str) -> GameState:
    return GameState.from_dict(from_json(json_string))
