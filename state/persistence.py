# state/persistence.py
from pathlib import Path

from .game_state import GameState
from .serializer import state_from_json, state_to_json


def save_state(game_state: GameState, path: str):
    """
    Save the game state to disk as JSON.
    Args:
        game_state (GameState): The game state to save.
        path (str): The file path to save the game state to.
    """
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(state_to_json(game_state))
    tmp.replace(path)


def load_state(path: str) -> GameState:
    """
    Load the game state from disk.
    Args:
        path (str): The file path to load the game state from.
    Returns:
        GameState: The loaded game state."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return state_from_json(f.read())
