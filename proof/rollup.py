from typing import Optional

from game.errors import IllegalTransition
from game.game_logger import game_logger

from .attestation import Attestation
from .prover import Prover


class Rollup:
    """
    Settles a whole game from its final attestation.

    A single verified attestation with four black pegs shows that some
    sequence of legal steps, starting from a committed solution, won the game.
    """

    def __init__(self, prover: Prover, logger=None):
        self.prover = prover
        self.logger = logger or game_logger
        self.someone_won = False
        self.winning_commitment: Optional[str] = None

    def publish_completed_game(self, attestation: Attestation):
        self.prover.verify(attestation)
        if not attestation.state.is_won:
            raise IllegalTransition(
                f"Game is not won: {attestation.state.black_pegs} black pegs."
            )

        self.someone_won = True
        self.winning_commitment = attestation.state.solution_commitment
        self.logger.log_event(
            "rollup: game won after %d turns", attestation.state.turn_number
        )
        return attestation.state
