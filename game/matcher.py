from collections import Counter

from .errors import CountMismatch
from .oblivious import both, equals, is_nonzero, select
from .ruleset import DEFAULT_RULES
from .secret_code import Code
from .validator import validate

CODE_LENGTH = DEFAULT_RULES["code_length"]
CONSUMED = DEFAULT_RULES["consumed"]


def match(guess, solution) -> tuple[int, int]:
    """
    Compute Mastermind feedback without branching on peg values.

    Args:
        guess (Code | Sequence[int]): The guessed pegs.
        solution (Code | Sequence[int]): The secret pegs.

    Returns:
        tuple[int, int]: (black, white)
        black: pegs with the correct color in the correct position,
        white: remaining pegs with a correct color in a wrong position,
        counted with multiplicity.

    Notes:
        Matched pegs are overwritten with the consumed sentinel in working
        copies, so a peg takes part in at most one match. The white pass
        visits all 16 (i, j) pairs, i outer and j inner, whatever the input;
        a guess peg always consumes the lowest-index matching solution peg.
    """

    # Code() rejects any length other than CODE_LENGTH
    g = list(Code(guess))
    s = list(Code(solution))
    black = 0
    white = 0

    # Exact matches. Consume both pegs so they cannot score white.
    for i in range(CODE_LENGTH):
        hit = equals(g[i], s[i])
        black = black + hit
        g[i] = select(hit, CONSUMED, g[i])
        s[i] = select(hit, CONSUMED, s[i])

    # Color matches among the remaining pegs.
    for i in range(CODE_LENGTH):
        for j in range(CODE_LENGTH):
            hit = both(is_nonzero(g[i]), equals(g[i], s[j]))
            white = white + hit
            g[i] = select(hit, CONSUMED, g[i])
            s[j] = select(hit, CONSUMED, s[j])

    return (black, white)


def validate_hint(guess, solution, claimed_black: int, claimed_white: int) -> tuple[int, int]:
    """
    Accept a claimed hint iff it equals the feedback of guess against solution.

    Both codes are length- and range-checked before any matching.

    Returns:
        tuple[int, int]: The verified (black, white).
    Raises:
        ValueError: if either code does not have exactly four pegs.
        OutOfRangeSymbol: if either code has a peg outside 1..6.
        CountMismatch: if the claimed counts are wrong.
    """
    guess, solution = Code(guess), Code(solution)
    validate(guess, "guess")
    validate(solution, "solution")

    computed = match(guess, solution)
    if computed != (claimed_black, claimed_white):
        raise CountMismatch((claimed_black, claimed_white), computed)
    return computed


def score(guess, solution) -> tuple[int, int]:
    """
    Classical scoring by multiset intersection. Reference for match().
    """
    black = sum(1 for g, s in zip(guess, solution) if g == s)
    rest_guess = Counter(g for g, s in zip(guess, solution) if g != s)
    rest_solution = Counter(s for g, s in zip(guess, solution) if g != s)
    white = sum((rest_guess & rest_solution).values())
    return (black, white)
