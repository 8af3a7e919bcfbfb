from dataclasses import dataclass
from typing import Optional

from game.errors import MastermindError
from state.game_state import GameState

METHODS = ("init", "publish_guess", "publish_hint")


class InvalidAttestation(MastermindError):
    """An attestation, or one of its predecessors, does not verify."""


@dataclass(frozen=True)
class Attestation:
    """
    Proof that a GameState was reached by a legal transition.

    Each attestation owns one state snapshot and refers to the attestation
    it was derived from. The digest covers the predecessor's digest, so the
    history is a single line back to "init".

    Attributes:
        method: Transition that produced the state.
        state: Public output of the transition.
        predecessor: Attestation of the previous state, None for "init".
        digest: Prover-issued digest binding the three fields above.
    """

    method: str
    state: GameState
    predecessor: Optional["Attestation"]
    digest: str

    @property
    def depth(self) -> int:
        return self.state.turn_number

    def lineage(self) -> "list[Attestation]":
        """Return the chain from "init" up to and including this attestation."""
        chain = []
        node = self
        while node is not None:
            chain.append(node)
            node = node.predecessor
        chain.reverse()
        return chain

    def states(self) -> list[GameState]:
        return [node.state for node in self.lineage()]
