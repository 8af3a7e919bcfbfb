"""
Hash commitments to a solution.

commit(code, blind) = SHA-256(domain || pegs || blind), hex encoded. The blind
is chosen by the code-generator and never leaves their hands; without it the
6**4 possible codes cannot be tried against the commitment.
"""

import hashlib
import hmac
import secrets
from typing import Union

from .errors import CommitmentMismatch
from .ruleset import DEFAULT_RULES

Commitment = str


def _check_blind(blind) -> bytes:
    if not isinstance(blind, (bytes, bytearray)):
        raise ValueError("Blind must be bytes.")
    minimum = DEFAULT_RULES["commitment"]["min_blind_bytes"]
    if len(blind) < minimum:
        raise ValueError(f"Blind must be at least {minimum} bytes, got {len(blind)}.")
    return bytes(blind)


def _is_int(x) -> bool:
    return type(x) is int


def _encode(code, blind: bytes) -> bytes:
    domain = DEFAULT_RULES["commitment"]["domain"].encode("utf-8")
    # Pegs are hashed as given; no conversion, so only identical values open
    pegs = ",".join(str(x) for x in code).encode("utf-8")
    # Length-prefixed fields, so distinct (code, blind) pairs never share an encoding
    return b"".join(
        len(field).to_bytes(4, "big") + field for field in (domain, pegs, blind)
    )


def commit(code, blind: bytes) -> Commitment:
    """
    Commit to a code under a secret blind.

    Args:
        code (Code | Sequence[int]): A validated code.
        blind (bytes): The code-generator's secret.
    Returns:
        str: Hex digest of the commitment.
    """
    if not all(_is_int(x) for x in code):
        raise ValueError("Only integer pegs can be committed.")
    return hashlib.sha256(_encode(code, _check_blind(blind))).hexdigest()


def open_commitment(code, blind: bytes, commitment: Commitment) -> None:
    """
    Check that (code, blind) opens the commitment.

    Raises:
        CommitmentMismatch: if the recomputed commitment differs, or the
            opening holds anything but integer pegs.
    """
    if not all(_is_int(x) for x in code):
        raise CommitmentMismatch("Opened solution must consist of integer pegs.")
    if not hmac.compare_digest(commit(code, blind), commitment):
        raise CommitmentMismatch("Solution does not match the committed solution.")


def generate_blind(nbytes: int = None) -> bytes:
    """Draw a fresh random blind."""
    return secrets.token_bytes(nbytes or DEFAULT_RULES["commitment"]["blind_bytes"])


def derive_blind(credential: Union[bytes, str], game_id: str) -> bytes:
    """
    Derive a per-game blind from a private credential.

    The holder of the credential can reproduce the blind for every hint; the
    game never checks how the blind relates to any identity.
    """
    if isinstance(credential, str):
        credential = credential.encode("utf-8")
    if not credential:
        raise ValueError("Credential must not be empty.")
    return hmac.new(credential, f"blind:{game_id}".encode("utf-8"), hashlib.sha256).digest()
