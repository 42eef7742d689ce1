"""
Multi-point (batch) KZG opening tests.

Covers:
- Soundness for k < deg p
- TooManyOpeningPoints for k >= deg p, InterpolationDegeneracy for duplicates
- SetupTooSmall when s_g2 cannot hold the zero polynomial
- Tampered proofs are rejected
- MultiProver / MultiVerifier state machines
"""

import random

import pytest
from zkp.kzg.errors import (
    InterpolationDegeneracy, KZGError, ProtocolStateError, SetupTooSmall,
    TooManyOpeningPoints,
)
from zkp.kzg.field import FR, G1, CURVE_ORDER, ec_add
from zkp.kzg.polynomial import Polynomial
from zkp.kzg.srs import generate_trusted_setup
from zkp.kzg.commitment import commit, commit_g2
from zkp.kzg.multiproof import (
    MultiProof, MultiProver, MultiVerifier, commit_and_prove_multi, verify_multi,
)


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def trusted_setup():
    return generate_trusted_setup(max_degree=7, max_opening_count=4, seed=31337)


@pytest.fixture(scope="module")
def poly():
    return Polynomial.random(7, random.Random(5))


@pytest.fixture(scope="module")
def points():
    rng = random.Random(6)
    return [FR(rng.randrange(CURVE_ORDER)) for _ in range(4)]


@pytest.fixture(scope="module")
def multi_proof(poly, points, trusted_setup):
    return commit_and_prove_multi(poly, points, trusted_setup)


# ─────────────────────────────────────────────────────────────────────
# Soundness
# ─────────────────────────────────────────────────────────────────────

class TestMultiPointSoundness:
    def test_valid_proof_verifies(self, multi_proof, trusted_setup):
        assert verify_multi(multi_proof, trusted_setup)

    def test_proof_commitments(self, multi_proof, poly, trusted_setup):
        assert multi_proof.polynomial_commitment == commit(poly, trusted_setup)

    def test_single_opening_point(self, poly, trusted_setup):
        proof = commit_and_prove_multi(poly, [FR(3)], trusted_setup)
        assert verify_multi(proof, trusted_setup)

    def test_quotient_relation(self, poly, points, trusted_setup):
        """Q(x)·Z(x) + I(x) == p(x), I(zᵢ) == p(zᵢ)."""
        prover = MultiProver(poly, trusted_setup)
        prover.commit_polynomial()
        prover.receive_challenge(points)
        Q = prover.compute_quotient()
        Z = prover.zero_polynomial
        I = prover.interpolation
        assert Z.degree == len(points)
        assert I.degree < len(points)
        assert Q * Z + I == poly
        for z in points:
            assert I.evaluate(z) == poly.evaluate(z)

    def test_emitted_commitments(self, poly, points, trusted_setup):
        prover = MultiProver(poly, trusted_setup)
        prover.commit_polynomial()
        prover.receive_challenge(points)
        prover.compute_quotient()
        proof = prover.emit_proof()
        assert proof.quotient_commitment == commit(prover.quotient, trusted_setup)
        assert proof.interpolation_commitment == commit(prover.interpolation, trusted_setup)
        assert proof.zero_polynomial_commitment == commit_g2(prover.zero_polynomial, trusted_setup)


# ─────────────────────────────────────────────────────────────────────
# Tamper rejection
# ─────────────────────────────────────────────────────────────────────

class TestMultiPointRejection:
    def test_wrong_interpolation_commitment(self, multi_proof, trusted_setup):
        fake = MultiProof(
            multi_proof.polynomial_commitment,
            multi_proof.quotient_commitment,
            ec_add(multi_proof.interpolation_commitment, G1),
            multi_proof.zero_polynomial_commitment,
        )
        assert verify_multi(fake, trusted_setup) is False

    def test_zero_polynomial_for_other_points(self, multi_proof, trusted_setup):
        other = Polynomial.zero_polynomial([FR(1), FR(2), FR(3), FR(4)])
        fake = MultiProof(
            multi_proof.polynomial_commitment,
            multi_proof.quotient_commitment,
            multi_proof.interpolation_commitment,
            commit_g2(other, trusted_setup),
        )
        assert not verify_multi(fake, trusted_setup)


# ─────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────

class TestMultiPointErrors:
    def test_k_equal_to_degree(self, poly):
        """k ≥ deg p 이면 TooManyOpeningPoints."""
        trusted_setup = generate_trusted_setup(max_degree=7, max_opening_count=8, seed=1)
        with pytest.raises(TooManyOpeningPoints):
            commit_and_prove_multi(poly, [FR(i) for i in range(1, 8)], trusted_setup)
        with pytest.raises(TooManyOpeningPoints):
            commit_and_prove_multi(poly, [FR(i) for i in range(1, 9)], trusted_setup)

    def test_k_just_below_degree(self):
        poly = Polynomial.random(3, random.Random(8))
        trusted_setup = generate_trusted_setup(max_degree=3, max_opening_count=2, seed=3)
        proof = commit_and_prove_multi(poly, [FR(10), FR(20)], trusted_setup)
        assert verify_multi(proof, trusted_setup)

    def test_no_points(self, poly, trusted_setup):
        with pytest.raises(KZGError):
            commit_and_prove_multi(poly, [], trusted_setup)

    def test_duplicate_points(self, poly, trusted_setup):
        with pytest.raises(InterpolationDegeneracy):
            commit_and_prove_multi(poly, [FR(1), FR(2), FR(1)], trusted_setup)

    def test_setup_g2_too_small(self, poly):
        """k = 2 점에는 s_g2가 3개 필요하다."""
        trusted_setup = generate_trusted_setup(max_degree=7, max_opening_count=1, seed=1)
        with pytest.raises(SetupTooSmall):
            commit_and_prove_multi(poly, [FR(1), FR(2)], trusted_setup)

    def test_setup_g1_too_small(self, poly):
        trusted_setup = generate_trusted_setup(max_degree=6, max_opening_count=4, seed=1)
        with pytest.raises(SetupTooSmall):
            commit_and_prove_multi(poly, [FR(1), FR(2)], trusted_setup)


class TestMultiPointStateMachine:
    def test_quotient_before_challenge(self, poly, trusted_setup):
        prover = MultiProver(poly, trusted_setup)
        prover.commit_polynomial()
        with pytest.raises(ProtocolStateError):
            prover.compute_quotient()

    def test_verifier_states(self, multi_proof, trusted_setup):
        verifier = MultiVerifier(trusted_setup)
        with pytest.raises(ProtocolStateError):
            verifier.check_pairing()
        verifier.receive_proof(multi_proof)
        assert verifier.check_pairing()
        assert verifier.accepted
