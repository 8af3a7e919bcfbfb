"""
Branch-free selection primitives.

Every decision that depends on a peg value goes through these helpers, so the
sequence of operations executed by the matcher is the same for every input.
Conditions are the integers 0 and 1.
"""


def equals(a: int, b: int) -> int:
    """Return 1 if a == b else 0."""
    return int(a == b)


def is_nonzero(x: int) -> int:
    """Return 1 if x != 0 else 0."""
    return int(x != 0)


def both(x: int, y: int) -> int:
    """Logical and of two 0/1 conditions."""
    return x * y


def select(condition: int, a: int, b: int) -> int:
    """
    Return a when condition is 1, b when it is 0.

    Computed arithmetically, without a conditional on the condition.
    """
    return b + condition * (a - b)
