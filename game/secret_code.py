import secrets

from . import validator
from .ruleset import DEFAULT_RULES


class Code:
    """
        Represents a peg sequence: a secret solution or a guess.
    Codes are immutable. Only the length is checked here; the color range is
    checked by game.validator wherever a code enters the game.

    Attributes:
        sequence (tuple[int, ...]): The peg symbols, 1..6 for real pegs.
    """

    __slots__ = ("_sequence",)

    def __init__(self, sequence):
        """
        Initialize a Code instance.

        Args:
            sequence (Iterable[int] | Code): The peg symbols.
        """

        if isinstance(sequence, Code):
            values = sequence.sequence
        else:
            values = tuple(sequence)

        if len(values) != DEFAULT_RULES["code_length"]:
            raise ValueError(
                f"Code length must be {DEFAULT_RULES['code_length']}, "
                f"but got {len(values)}."
            )

        object.__setattr__(self, "_sequence", values)

    def __setattr__(self, name, value):
        raise AttributeError("Code is immutable.")

    @property
    def sequence(self):
        return self._sequence

    @classmethod
    def zero(cls):
        """Return the all-sentinel code used before the first guess."""
        return cls([DEFAULT_RULES["consumed"]] * DEFAULT_RULES["code_length"])

    @classmethod
    def generate_random(cls):
        """
        Generate a random valid code.

        Uses the secrets module, since the result is typically a solution
        that has to stay hidden.
        """
        colors = DEFAULT_RULES["colors"]
        return cls(
            secrets.choice(colors) for _ in range(DEFAULT_RULES["code_length"])
        )

    @classmethod
    def from_string(cls, text: str):
        """
        Parse the compact form, e.g. '1236' or '1 2 3 6'.
        """
        digits = text.replace(" ", "").replace(",", "")
        if not digits.isdigit():
            raise ValueError(f"Code must consist of digits, got {text!r}.")
        return cls(int(c) for c in digits)

    def validate(self, what: str = "code", strict: bool = True) -> bool:
        """
        Check the code against the color alphabet.

        Args:
            what (str): Name used in the error message.
            strict (bool): If True, raise OutOfRangeSymbol on failure.
        Returns:
            bool: True if valid; False if invalid and strict is False.
        """
        if strict:
            validator.validate(self, what)
            return True
        return validator.is_valid(self)

    @property
    def is_valid(self) -> bool:
        return self.validate(strict=False)

    def as_string(self):
        """
        Return a string representation of the code (e.g. '1236').
        """
        return "".join(str(c) for c in self._sequence)

    def to_list(self):
        return list(self._sequence)

    def __iter__(self):
        return iter(self._sequence)

    def __len__(self):
        return len(self._sequence)

    def __getitem__(self, index):
        return self._sequence[index]

    def __eq__(self, other):
        """
        Check equality between this Code and another object.

        Args:
            other (Code, list or tuple): Value to compare against.

        Returns:
            bool: True if the sequences are equal, False otherwise.
        """

        if isinstance(other, Code):
            return self._sequence == other._sequence
        if isinstance(other, (list, tuple)):
            return self._sequence == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._sequence)

    def __repr__(self):
        return f"Code({list(self._sequence)!r})"

    def __str__(self):
        return self.as_string()
