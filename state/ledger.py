# state/ledger.py
import re
from pathlib import Path
from typing import Dict, Optional

from .game_state import GameState
from .persistence import load_state, save_state

_GAME_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class Ledger:
    """
    Storage for game states, one per game id.

    Transitions are assumed to arrive in a total order; the ledger is
    single-writer and the last write wins.
    """

    def read_state(self, game_id: str) -> Optional[GameState]:
        """Return the current state, or None if the game does not exist."""
        raise NotImplementedError

    def write_state(self, game_id: str, game_state: GameState) -> None:
        raise NotImplementedError


class InMemoryLedger(Ledger):
    """Ledger kept in a dict."""

    def __init__(self):
        self.states: Dict[str, GameState] = {}

    def read_state(self, game_id: str) -> Optional[GameState]:
        return self.states.get(game_id)

    def write_state(self, game_id: str, game_state: GameState) -> None:
        self.states[game_id] = game_state


class JsonFileLedger(Ledger):
    """Ledger keeping one JSON file per game in a directory."""

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, game_id: str) -> Path:
        if not _GAME_ID.match(game_id):
            raise ValueError(f"Invalid game id {game_id!r}.")
        return self.directory / f"{game_id}.json"

    def read_state(self, game_id: str) -> Optional[GameState]:
        path = self._path(game_id)
        if not path.exists():
            return None
        return load_state(path)

    def write_state(self, game_id: str, game_state: GameState) -> None:
        save_state(game_state, self._path(game_id))
