# state/game_state.py
from dataclasses import dataclass, replace

from game.errors import IllegalTransition
from game.ruleset import DEFAULT_RULES
from game.secret_code import Code
from game.validator import validate


@dataclass(frozen=True)
class GameState:
    """Public record of one Mastermind game.

    Holds nothing secret: the solution is only present as its commitment.
    """

    solution_commitment: str
    last_guess: Code
    black_pegs: int = 0
    white_pegs: int = 0
    turn_number: int = 0

    def check(self):
        """Raise IllegalTransition if the record breaks a state invariant."""
        length = DEFAULT_RULES["code_length"]
        if not self.solution_commitment:
            raise IllegalTransition("Game state has no solution commitment.")
        for name in ("black_pegs", "white_pegs", "turn_number"):
            if type(getattr(self, name)) is not int:
                raise IllegalTransition(f"{name} must be an integer, got {getattr(self, name)!r}.")
        if not 0 <= self.black_pegs <= length or not 0 <= self.white_pegs <= length:
            raise IllegalTransition(
                f"Peg counts out of range: ({self.black_pegs}, {self.white_pegs})."
            )
        if self.black_pegs + self.white_pegs > length:
            raise IllegalTransition(
                f"Peg counts exceed {length}: ({self.black_pegs}, {self.white_pegs})."
            )
        if self.turn_number < 0:
            raise IllegalTransition(f"Negative turn number {self.turn_number}.")
        if not isinstance(self.last_guess, Code):
            raise IllegalTransition("Last guess must be a Code.")
        # Before the first guess the record holds the all-sentinel code
        if self.last_guess != Code.zero():
            validate(self.last_guess, "last guess")
        return self

    @property
    def is_won(self):
        return self.black_pegs == DEFAULT_RULES["code_length"]

    def evolve(self, **changes):
        return replace(self, **changes)

    def to_dict(self):
        # Return the gamestate as dictionary for i.e. json
        return {
            "solution_commitment": self.solution_commitment,
            "last_guess": self.last_guess.to_list(),
            "black_pegs": self.black_pegs,
            "white_pegs": self.white_pegs,
            "turn_number": self.turn_number,
        }

    @classmethod
    def from_dict(cls, data):
        # Load the gamestate from a dictionary
        return cls(
            solution_commitment=data["solution_commitment"],
            last_guess=Code(data["last_guess"]),
            black_pegs=data["black_pegs"],
            white_pegs=data["white_pegs"],
            turn_number=data["turn_number"],
        ).check()
