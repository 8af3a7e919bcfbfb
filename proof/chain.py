from typing import Optional

from game.errors import IllegalTransition
from game.game_logger import game_logger

from .attestation import Attestation
from .prover import HashChainProver, Prover


class ProofChain:
    """
    Turn-state machine anchored on attestations instead of a ledger.

    Every step hands the previous attestation and the step's inputs to the
    prover. The prover verifies the previous attestation, reads the current
    state from it, runs the same transition as game.transitions and returns
    an attestation owning the new state.
    """

    def __init__(self, prover: Optional[Prover] = None, enforce_turn_parity: bool = True, logger=None):
        self.prover = prover or HashChainProver()
        self.enforce_turn_parity = enforce_turn_parity
        self.logger = logger or game_logger

    def _issue(self, method, previous, **inputs):
        attestation = self.prover.prove(
            method, previous, enforce_turn_parity=self.enforce_turn_parity, **inputs
        )
        if attestation is not previous:
            self.logger.log_transition("chain", method, attestation.state)
        return attestation

    def init(self, solution, blind: bytes) -> Attestation:
        return self._issue("init", None, solution=solution, blind=blind)

    def publish_guess(self, guess, previous: Attestation) -> Attestation:
        if previous is None:
            raise IllegalTransition("A previous attestation is required.")
        return self._issue("publish_guess", previous, guess=guess)

    def publish_hint(self, solution, blind: bytes, previous: Attestation) -> Attestation:
        """
        Publish a hint on top of previous.

        Once the game is won, previous is returned unchanged.
        """
        if previous is None:
            raise IllegalTransition("A previous attestation is required.")
        return self._issue("publish_hint", previous, solution=solution, blind=blind)
