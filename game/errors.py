# Errors raised by rejected game steps. Every one of them rejects the whole
# step; nothing is retried or coerced.


class MastermindError(ValueError):
    """Base class for all rejected game steps."""


class OutOfRangeSymbol(MastermindError):
    """A peg symbol lies outside the color alphabet."""

    def __init__(self, what, position, value):
        self.what = what
        self.position = position
        self.value = value
        super().__init__(
            f"Invalid peg {value!r} at position {position} of {what}. "
            f"Allowed: 1..6."
        )


class CommitmentMismatch(MastermindError):
    """The opened solution does not hash to the stored commitment."""


class IllegalTransition(MastermindError):
    """The step is not allowed from the current game state."""


class CountMismatch(MastermindError):
    """Claimed peg counts differ from the computed ones."""

    def __init__(self, claimed, computed):
        self.claimed = claimed
        self.computed = computed
        super().__init__(
            f"Claimed feedback {claimed} does not match computed {computed}."
        )
