from dataclasses import replace

import pytest

from game.errors import CommitmentMismatch, IllegalTransition, OutOfRangeSymbol
from proof.attestation import Attestation, InvalidAttestation
from proof.chain import ProofChain
from proof.prover import HashChainProver
from proof.rollup import Rollup

SOLUTION = [1, 2, 3, 6]
BLIND = b"\x2a" * 32


@pytest.fixture
def prover():
    return HashChainProver(key=b"k" * 32)


@pytest.fixture
def chain(prover):
    return ProofChain(prover)


def play(chain):
    proof = chain.init(SOLUTION, BLIND)
    proof = chain.publish_guess([6, 2, 1, 3], proof)
    proof = chain.publish_hint(SOLUTION, BLIND, proof)
    first_hint = proof
    proof = chain.publish_guess([1, 2, 3, 6], proof)
    proof = chain.publish_hint(SOLUTION, BLIND, proof)
    return first_hint, proof


def test_recursive_game(chain, prover):
    first_hint, final = play(chain)
    assert (first_hint.state.black_pegs, first_hint.state.white_pegs) == (1, 3)
    assert (final.state.black_pegs, final.state.white_pegs) == (4, 0)

    lineage = final.lineage()
    assert [a.method for a in lineage] == [
        "init",
        "publish_guess",
        "publish_hint",
        "publish_guess",
        "publish_hint",
    ]
    assert [s.turn_number for s in final.states()] == [0, 1, 2, 3, 4]
    assert final.depth == 4
    prover.verify(final)


def test_rollup_accepts_winning_chain(chain, prover):
    _, final = play(chain)
    rollup = Rollup(prover)
    assert rollup.publish_completed_game(final) == final.state
    assert rollup.someone_won
    assert rollup.winning_commitment == final.state.solution_commitment


def test_rollup_rejects_unfinished_game(chain, prover):
    first_hint, _ = play(chain)
    rollup = Rollup(prover)
    with pytest.raises(IllegalTransition):
        rollup.publish_completed_game(first_hint)
    assert not rollup.someone_won


def test_hint_after_win_returns_same_attestation(chain):
    _, final = play(chain)
    assert chain.publish_hint(SOLUTION, BLIND, final) is final


def test_steps_need_a_predecessor(chain):
    with pytest.raises(IllegalTransition):
        chain.publish_guess([1, 1, 1, 1], None)


def test_guards_apply_on_the_chain(chain):
    proof = chain.init(SOLUTION, BLIND)
    with pytest.raises(IllegalTransition):
        chain.publish_hint(SOLUTION, BLIND, proof)
    with pytest.raises(OutOfRangeSymbol):
        chain.publish_guess([0, 1, 2, 3], proof)

    proof = chain.publish_guess([1, 1, 1, 1], proof)
    with pytest.raises(CommitmentMismatch):
        chain.publish_hint([1, 1, 1, 1], BLIND, proof)


def test_tampered_state_is_rejected(chain, prover):
    first_hint, _ = play(chain)
    forged = replace(first_hint, state=first_hint.state.evolve(black_pegs=4, white_pegs=0))
    with pytest.raises(InvalidAttestation):
        prover.verify(forged)
    with pytest.raises(InvalidAttestation):
        chain.publish_guess([1, 1, 1, 1], forged)
    with pytest.raises(InvalidAttestation):
        Rollup(prover).publish_completed_game(forged)


def test_tampered_ancestor_is_rejected(chain, prover):
    _, final = play(chain)
    # A genuine root for another solution, with the old tail grafted on it
    other_root = prover.prove("init", None, solution=[6, 6, 6, 6], blind=BLIND)
    grafted = replace(final.lineage()[1], predecessor=other_root)
    with pytest.raises(InvalidAttestation):
        prover.verify(grafted)


def test_other_prover_key_is_rejected(chain):
    _, final = play(chain)
    with pytest.raises(InvalidAttestation):
        HashChainProver(key=b"x" * 32).verify(final)


def test_prover_refuses_illegal_steps(chain, prover):
    proof = chain.init(SOLUTION, BLIND)
    with pytest.raises(IllegalTransition):
        prover.prove("publish_hint", proof, solution=SOLUTION, blind=BLIND)
    with pytest.raises(OutOfRangeSymbol):
        prover.prove("publish_guess", proof, guess=[7, 1, 1, 1])
    with pytest.raises(IllegalTransition):
        prover.prove("publish_guess", None, guess=[1, 1, 1, 1])
    with pytest.raises(InvalidAttestation):
        prover.prove("init", proof, solution=SOLUTION, blind=BLIND)
    with pytest.raises(InvalidAttestation):
        prover.prove("reveal", proof, solution=SOLUTION, blind=BLIND)


def test_prover_only_takes_the_inputs_of_a_method(chain, prover):
    proof = chain.publish_guess([5, 5, 5, 5], chain.init(SOLUTION, BLIND))
    winning = proof.state.evolve(black_pegs=4, turn_number=2)
    with pytest.raises(TypeError):
        prover.prove("publish_hint", proof, solution=SOLUTION, blind=BLIND, state=winning)
    with pytest.raises(TypeError):
        prover.prove("publish_guess", proof, solution=SOLUTION)


def test_hint_counts_come_from_the_prover(chain, prover):
    guessed = chain.publish_guess([5, 5, 5, 5], chain.init(SOLUTION, BLIND))

    hinted = prover.prove("publish_hint", guessed, solution=SOLUTION, blind=BLIND)
    assert (hinted.state.black_pegs, hinted.state.white_pegs) == (0, 0)
    assert hinted.state.turn_number == 2

    with pytest.raises(CommitmentMismatch):
        prover.prove("publish_hint", guessed, solution=[5, 5, 5, 5], blind=BLIND)

    # A winning state built by hand has no valid digest
    forged = Attestation(
        method="publish_hint",
        state=guessed.state.evolve(black_pegs=4, turn_number=2),
        predecessor=guessed,
        digest=hinted.digest,
    )
    with pytest.raises(InvalidAttestation):
        prover.verify(forged)
    rollup = Rollup(prover)
    with pytest.raises(InvalidAttestation):
        rollup.publish_completed_game(forged)
    assert not rollup.someone_won


def test_forged_attestation_object(chain, prover):
    proof = chain.init(SOLUTION, BLIND)
    fake = Attestation(
        method="publish_guess",
        state=proof.state.evolve(last_guess=proof.state.last_guess, turn_number=1),
        predecessor=proof,
        digest="00" * 32,
    )
    with pytest.raises(InvalidAttestation):
        prover.verify(fake)


def test_parity_can_be_disabled(prover):
    chain = ProofChain(prover, enforce_turn_parity=False)
    proof = chain.init(SOLUTION, BLIND)
    proof = chain.publish_guess([1, 1, 1, 1], proof)
    proof = chain.publish_guess([1, 2, 1, 2], proof)
    assert proof.state.turn_number == 2
    prover.verify(proof)
