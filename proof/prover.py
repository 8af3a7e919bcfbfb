"""
Attestation issuers.

Prover is the interface a proving engine plugs into. A prover is handed the
private inputs of a method and the attestation it builds on, runs the
transition itself, and only then attests the resulting state. There is no way
to ask it to sign a state it did not compute.

HashChainProver is the reference implementation used by the tests: it is not
zero-knowledge, it only binds every state to its predecessor under a key held
by the prover.
"""

import hashlib
import hmac
import secrets
from typing import Optional

from game import transitions
from game.secret_code import Code
from state.game_state import GameState
from state.serializer import state_to_json, to_json

from .attestation import METHODS, Attestation, InvalidAttestation

# Private inputs each method takes
INPUTS = {
    "init": ("solution", "blind"),
    "publish_guess": ("guess",),
    "publish_hint": ("solution", "blind"),
}


class Prover:
    def prove(
        self,
        method: str,
        predecessor: Optional[Attestation],
        enforce_turn_parity: bool = True,
        **inputs,
    ) -> Attestation:
        """Run method on the predecessor's state with inputs and attest the result."""
        raise NotImplementedError

    def verify(self, attestation: Attestation) -> None:
        """Raise InvalidAttestation unless the whole chain verifies."""
        raise NotImplementedError


def run_method(method: str, state: Optional[GameState], inputs: dict, enforce_turn_parity: bool = True) -> GameState:
    """
    Compute the state method produces from state.

    Raises:
        InvalidAttestation: for an unknown method.
        TypeError: if inputs are not exactly the method's inputs.
        MastermindError: whatever the transition itself rejects.
    """
    if method not in METHODS:
        raise InvalidAttestation(f"Unknown method {method!r}.")
    expected = INPUTS[method]
    if sorted(inputs) != sorted(expected):
        raise TypeError(
            f"{method} takes inputs {', '.join(expected)}; got {', '.join(sorted(inputs)) or 'none'}."
        )

    if method == "init":
        return transitions.initialize(inputs["solution"], inputs["blind"])
    if method == "publish_guess":
        return transitions.publish_guess(state, inputs["guess"], enforce_turn_parity)
    return transitions.publish_hint(
        state, inputs["solution"], inputs["blind"], enforce_turn_parity
    )


def check_link(method: str, state: GameState, predecessor: Optional[Attestation]) -> None:
    """
    Check the public fields a transition may change.

    This is all a verifier can see. The hint counts themselves are only
    covered by the prover having run publish_hint.

    Raises:
        InvalidAttestation: if state cannot follow predecessor via method.
    """
    if method not in METHODS:
        raise InvalidAttestation(f"Unknown method {method!r}.")

    if method == "init":
        if predecessor is not None:
            raise InvalidAttestation("init must start a chain.")
        if (
            state.turn_number != 0
            or state.last_guess != Code.zero()
            or (state.black_pegs, state.white_pegs) != (0, 0)
        ):
            raise InvalidAttestation("init must produce the initial state.")
        return

    if predecessor is None:
        raise InvalidAttestation(f"{method} needs a predecessor.")
    previous = predecessor.state
    if state.solution_commitment != previous.solution_commitment:
        raise InvalidAttestation("Solution commitment changed.")
    if state.turn_number != previous.turn_number + 1:
        raise InvalidAttestation(
            f"Turn must advance by one: {previous.turn_number} -> {state.turn_number}."
        )
    if method == "publish_guess" and (state.black_pegs, state.white_pegs) != (
        previous.black_pegs,
        previous.white_pegs,
    ):
        raise InvalidAttestation("A guess cannot change the feedback.")
    if method == "publish_hint" and state.last_guess != previous.last_guess:
        raise InvalidAttestation("A hint cannot change the last guess.")


class HashChainProver(Prover):
    """Keyed hash chain over (method, state, predecessor digest)."""

    def __init__(self, key: Optional[bytes] = None):
        self._key = key or secrets.token_bytes(32)

    def _digest(self, method: str, state: GameState, predecessor: Optional[Attestation]) -> str:
        message = to_json(
            {
                "method": method,
                "state": state_to_json(state, canonical=True),
                "predecessor": predecessor.digest if predecessor else None,
            },
            canonical=True,
        )
        return hmac.new(self._key, message.encode("utf-8"), hashlib.sha256).hexdigest()

    def prove(self, method, predecessor, enforce_turn_parity=True, **inputs):
        """
        Attest the state method computes on top of predecessor.

        Once the game is won a hint changes nothing, and predecessor itself
        is returned.
        """
        current = None
        if predecessor is not None:
            self.verify(predecessor)
            current = predecessor.state

        state = run_method(method, current, inputs, enforce_turn_parity)
        if method == "publish_hint" and state == current:
            return predecessor

        check_link(method, state.check(), predecessor)
        return Attestation(
            method=method,
            state=state,
            predecessor=predecessor,
            digest=self._digest(method, state, predecessor),
        )

    def verify(self, attestation):
        for node in attestation.lineage():
            expected = self._digest(node.method, node.state, node.predecessor)
            if not hmac.compare_digest(expected, node.digest):
                raise InvalidAttestation(
                    f"Bad digest at turn {node.state.turn_number} ({node.method})."
                )
            check_link(node.method, node.state, node.predecessor)
