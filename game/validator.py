"""
Domain validation for peg codes.

A symbol x is in range iff (x-1)(x-2)...(x-6) == 0. The product is evaluated
for every position before anything is raised.
"""

from .errors import OutOfRangeSymbol
from .ruleset import DEFAULT_RULES


def _range_residue(x: int) -> int:
    # Zero exactly for the colors 1..6
    residue = 1
    for color in DEFAULT_RULES["colors"]:
        residue *= x - color
    return residue


def _first_bad_position(code):
    residues = []
    for x in code:
        if not isinstance(x, int) or isinstance(x, bool):
            residues.append(None)
        else:
            residues.append(_range_residue(x))

    for position, residue in enumerate(residues):
        if residue != 0:
            return position
    return None


def validate(code, what: str = "code") -> None:
    """
    Assert that every peg of the code is a color in 1..6.

    Args:
        code (Code | Sequence[int]): The pegs to check.
        what (str): Name used in the error message ("solution", "guess", ...).
    Raises:
        OutOfRangeSymbol: if any peg is outside the alphabet.
    """
    position = _first_bad_position(code)
    if position is not None:
        raise OutOfRangeSymbol(what, position, code[position])


def is_valid(code) -> bool:
    """Non-raising variant of validate."""
    return _first_bad_position(code) is None
