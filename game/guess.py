from .secret_code import Code


class Guess:
    """
        A published guess together with the hint it received.
    Attributes:
        code (Code): The guessed pegs.
        turn_number (int): Turn at which the guess was published.
        black_pegs (int | None): Pegs with correct color and position.
        white_pegs (int | None): Pegs with correct color, wrong position.
    """

    def __init__(self, code, turn_number: int):
        """
        Initialize a Guess instance.
        Args:
            code (Code | Sequence[int]): The guessed pegs.
            turn_number (int): Turn at which the guess was published.
        """
        self.code = Code(code)
        self.turn_number = turn_number
        self.black_pegs = None
        self.white_pegs = None

    def apply_feedback(self, feedback: tuple[int, int]):
        """
        Store feedback values from a published hint.
        Args:
            feedback (tuple[int, int]): (black_pegs, white_pegs)
        """
        self.black_pegs = feedback[0]
        self.white_pegs = feedback[1]

    @property
    def answered(self) -> bool:
        return self.black_pegs is not None

    def get_feedback(self):
        """
        Return the stored feedback as a tuple (black_pegs, white_pegs).
        """
        return (self.black_pegs, self.white_pegs)

    def get_guess(self):
        """
        Return the guessed pegs as a list.
        """
        return self.code.to_list()

    def as_string(self):
        return self.code.as_string()

    def __str__(self):
        return self.as_string()
