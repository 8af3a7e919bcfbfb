"""
Turn-state machine.

    AWAITING_SOLUTION -> AWAITING_GUESS <-> AWAITING_HINT -> ... -> WON

Each transition takes the current GameState explicitly and returns the next
one. All guards run before the new state is built, so a rejected step never
produces a partial update. Phases are derived from the state, never stored:
the guesser moves on even turns, the code-generator on odd turns.
"""

from enum import Enum
from typing import Optional

from state.game_state import GameState

from .commitment import commit, open_commitment
from .errors import IllegalTransition
from .matcher import match
from .secret_code import Code
from .validator import validate


class Phase(Enum):
    AWAITING_SOLUTION = "awaiting_solution"
    AWAITING_GUESS = "awaiting_guess"
    AWAITING_HINT = "awaiting_hint"
    WON = "won"


def phase_of(state: Optional[GameState]) -> Phase:
    """Return the phase a game is in."""
    if state is None:
        return Phase.AWAITING_SOLUTION
    if state.is_won:
        return Phase.WON
    if state.turn_number % 2 == 1:
        return Phase.AWAITING_HINT
    return Phase.AWAITING_GUESS


def expect_state(state: Optional[GameState], expected: Optional[GameState]) -> None:
    """
    Precondition: the caller's view of the game equals the current state.

    Raises:
        IllegalTransition: if the states differ.
    """
    if state != expected:
        raise IllegalTransition("Game state changed since it was read.")


def _require_game(state: Optional[GameState]) -> GameState:
    if state is None:
        raise IllegalTransition("Game has not been initialized.")
    return state.check()


def initialize(solution, blind: bytes, state: Optional[GameState] = None) -> GameState:
    """
    Commit to a solution and create the game.

    Args:
        solution (Code | Sequence[int]): The secret code.
        blind (bytes): The code-generator's secret blind.
        state (GameState, optional): Existing state; must be None.
    Returns:
        GameState: Fresh state at turn 0.
    """
    if state is not None:
        raise IllegalTransition("A solution has already been committed.")
    solution = Code(solution)
    validate(solution, "solution")

    return GameState(
        solution_commitment=commit(solution, blind),
        last_guess=Code.zero(),
        black_pegs=0,
        white_pegs=0,
        turn_number=0,
    ).check()


def publish_guess(state: Optional[GameState], guess, enforce_turn_parity: bool = True) -> GameState:
    """
    Publish the guesser's next guess.

    Raises:
        IllegalTransition: if there is no game, it is won, or (with turn
            parity enforced) it is the code-generator's turn.
        OutOfRangeSymbol: if the guess has a peg outside 1..6.
    """
    state = _require_game(state)
    phase = phase_of(state)
    if phase is Phase.WON:
        raise IllegalTransition("Game is already won.")
    if enforce_turn_parity and phase is not Phase.AWAITING_GUESS:
        raise IllegalTransition(
            f"Turn {state.turn_number} belongs to the code-generator."
        )
    guess = Code(guess)
    validate(guess, "guess")

    return state.evolve(last_guess=guess, turn_number=state.turn_number + 1)


def publish_hint(state: Optional[GameState], solution, blind: bytes, enforce_turn_parity: bool = True) -> GameState:
    """
    Open the committed solution and publish feedback for the last guess.

    The solution is not range-checked again: it was checked when committed
    and the opening binds it to that commitment. Once the game is won,
    further hints return the state unchanged.

    Raises:
        IllegalTransition: if there is no game or (with turn parity
            enforced) it is the guesser's turn.
        CommitmentMismatch: if (solution, blind) does not open the commitment.
    """
    state = _require_game(state)
    solution = Code(solution)
    open_commitment(solution, blind, state.solution_commitment)

    phase = phase_of(state)
    if phase is Phase.WON:
        return state
    if enforce_turn_parity and phase is not Phase.AWAITING_HINT:
        raise IllegalTransition(f"Turn {state.turn_number} belongs to the guesser.")

    black, white = match(state.last_guess, solution)
    return state.evolve(
        black_pegs=black,
        white_pegs=white,
        turn_number=state.turn_number + 1,
    ).check()
