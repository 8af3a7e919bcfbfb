"""
Game Logger

Logging for accepted and rejected game steps. Secrets (solutions, blinds)
never reach the log; commitments are shortened.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional


class GameLogger:
    """
    Thin wrapper around the ``mastermind`` logger.

    Accepted transitions are logged at INFO, rejected ones at WARNING.
    A file handler is attached only when a log directory is given.
    """

    def __init__(self, log_dir: Optional[str] = None, level: Optional[str] = None):
        self.log_dir = Path(log_dir) if log_dir else None
        self.level = (level or os.getenv("MASTERMIND_LOG_LEVEL", "INFO")).upper()
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the game logger with a console handler and optional file."""
        logger = logging.getLogger("mastermind")
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(self.level)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            logger.addHandler(file_handler)

        return logger

    @staticmethod
    def short(commitment: Optional[str]) -> str:
        return f"{commitment[:12]}…" if commitment else "-"

    def log_transition(self, game_id: str, method: str, state) -> None:
        self.logger.info(
            "game=%s method=%s turn=%d feedback=(%d, %d) commitment=%s",
            game_id,
            method,
            state.turn_number,
            state.black_pegs,
            state.white_pegs,
            self.short(state.solution_commitment),
        )

    def log_rejection(self, game_id: str, method: str, error: Exception) -> None:
        self.logger.warning(
            "game=%s method=%s rejected: %s: %s",
            game_id,
            method,
            type(error).__name__,
            error,
        )

    def log_event(self, message: str, *args) -> None:
        self.logger.info(message, *args)


# Global game logger instance
game_logger = GameLogger()
