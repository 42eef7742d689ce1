"""
KZG 다중 점 열기 (Multi-Point / Batch Opening)
================================================

여러 점 z₀, ..., z_{k-1}에서의 평가를 여전히 G1 원소 하나의 증명으로 보인다.

**원리**:
  1. yᵢ = p(zᵢ)를 계산하고, 점 (zᵢ, yᵢ)를 지나는 보간 다항식 I(x)를 구한다
     (deg I < k).
  2. p(x) - I(x)는 모든 zᵢ에서 0이므로 영 다항식 Z(x) = ∏(x - zᵢ)로
     나누어 떨어진다: Q(x) = (p(x) - I(x)) / Z(x).
  3. 증명 {C = [p(s)]₁, π = [Q(s)]₁, Ĉ = [I(s)]₁, Ẑ = [Z(s)]₂}.

**검증 방정식**:
      e(π, Ẑ) == e(C - Ĉ, H)

**제약**:
  - 열기 점은 서로 달라야 한다 (보간과 영 다항식 모두 이를 가정).
  - k < deg p 여야 한다. 그렇지 않으면 I(x)가 p(x) 자체가 될 수 있어
    몫이 의미를 잃는다.
  - Ẑ를 만들려면 s_g2에 k+1개의 거듭제곱이 필요하다.

사용 예시:
    >>> setup = generate_trusted_setup(max_degree=8, max_opening_count=4, seed=42)
    >>> proof = commit_and_prove_multi(poly, [FR(1), FR(2), FR(3)], setup)
    >>> verify_multi(proof, setup)  # True
"""

import logging

from zkp.kzg.commitment import commit, commit_g2
from zkp.kzg.errors import KZGError, ProtocolStateError, TooManyOpeningPoints
from zkp.kzg.field import FR, ec_pairing, ec_sub
from zkp.kzg.interpolation import lagrange_interpolate
from zkp.kzg.polynomial import Polynomial, exact_div
from zkp.kzg.single import (
    COMMIT_POLYNOMIAL, RECEIVE_CHALLENGE, COMPUTE_QUOTIENT, EMIT_PROOF, DONE,
    RECEIVE_PROOF, CHECK_PAIRING, ACCEPTED, REJECTED,
)


logger = logging.getLogger(__name__)


class MultiProof:
    """다중 점 KZG 증명.

    속성:
        polynomial_commitment: C = [p(s)]₁
        quotient_commitment: π = [Q(s)]₁
        interpolation_commitment: Ĉ = [I(s)]₁
        zero_polynomial_commitment: Ẑ = [Z(s)]₂
    """

    def __init__(self, polynomial_commitment, quotient_commitment,
                 interpolation_commitment, zero_polynomial_commitment):
        self.polynomial_commitment = polynomial_commitment
        self.quotient_commitment = quotient_commitment
        self.interpolation_commitment = interpolation_commitment
        self.zero_polynomial_commitment = zero_polynomial_commitment


class MultiProver:
    """다중 점 열기 Prover.

    단계: commit_polynomial → receive_challenge(points) → compute_quotient → emit_proof
    """

    def __init__(self, polynomial, setup):
        self.polynomial = polynomial
        self.setup = setup
        self.stage = COMMIT_POLYNOMIAL
        self.commitment = None
        self.points = None
        self.values = None
        self.interpolation = None
        self.zero_polynomial = None
        self.quotient = None

    def _expect(self, stage):
        if self.stage != stage:
            raise ProtocolStateError(
                f"현재 단계는 {self.stage}입니다 ({stage} 단계를 호출함)"
            )

    def commit_polynomial(self):
        self._expect(COMMIT_POLYNOMIAL)
        self.commitment = commit(self.polynomial, self.setup)
        self.stage = RECEIVE_CHALLENGE
        return self.commitment

    def receive_challenge(self, points):
        """열기 점 z₀, ..., z_{k-1}을 받는다.

        Raises:
            KZGError: 열기 점이 없을 때
            TooManyOpeningPoints: k ≥ deg p 일 때
            SetupTooSmall: s_g2가 k+1개보다 짧을 때
        """
        self._expect(RECEIVE_CHALLENGE)
        points = [z if isinstance(z, FR) else FR(z) for z in points]
        k = len(points)
        degree = self.polynomial.degree
        if k == 0:
            raise KZGError("열기 점이 최소 1개 필요합니다")
        if k >= degree:
            raise TooManyOpeningPoints(
                f"열기 점 개수 {k}는 다항식 차수 {degree}보다 작아야 합니다"
            )
        self.setup.require(opening_count=k)

        self.points = points
        self.values = [self.polynomial.evaluate(z) for z in points]
        self.stage = COMPUTE_QUOTIENT

    def compute_quotient(self):
        """I(x), Z(x), Q(x) = (p(x) - I(x)) / Z(x)를 계산한다.

        Raises:
            InterpolationDegeneracy: 열기 점이 중복될 때
            InvalidWitness: p(x) - I(x)가 Z(x)로 나누어 떨어지지 않을 때
        """
        self._expect(COMPUTE_QUOTIENT)
        self.interpolation = lagrange_interpolate(self.points, self.values)
        self.zero_polynomial = Polynomial.zero_polynomial(self.points)
        self.quotient = exact_div(self.polynomial - self.interpolation,
                                  self.zero_polynomial)
        self.stage = EMIT_PROOF
        return self.quotient

    def emit_proof(self):
        self._expect(EMIT_PROOF)
        proof = MultiProof(
            polynomial_commitment=self.commitment,
            quotient_commitment=commit(self.quotient, self.setup),
            interpolation_commitment=commit(self.interpolation, self.setup),
            zero_polynomial_commitment=commit_g2(self.zero_polynomial, self.setup),
        )
        self.stage = DONE
        logger.debug("multi-point proof emitted for %d points", len(self.points))
        return proof


def commit_and_prove_multi(polynomial, points, setup):
    """다항식에 커밋하고 k개 점에서의 평가를 하나의 증명으로 보인다.

    Args:
        polynomial: 커밋할 다항식 p(x)
        points: 서로 다른 열기 점 리스트 [z₀, ..., z_{k-1}], 1 ≤ k < deg p
        setup: TrustedSetup (s_g1 ≥ deg p + 1, s_g2 ≥ k + 1)

    Returns:
        MultiProof

    Raises:
        TooManyOpeningPoints, InterpolationDegeneracy, SetupTooSmall, InvalidWitness
    """
    prover = MultiProver(polynomial, setup)
    prover.commit_polynomial()
    prover.receive_challenge(points)
    prover.compute_quotient()
    return prover.emit_proof()


class MultiVerifier:
    """다중 점 열기 Verifier.

    단계: receive_proof → check_pairing → accepted | rejected
    """

    def __init__(self, setup):
        self.setup = setup
        self.stage = RECEIVE_PROOF
        self.proof = None

    def receive_proof(self, proof):
        if self.stage != RECEIVE_PROOF:
            raise ProtocolStateError(f"이미 증명을 받았습니다 (현재 단계: {self.stage})")
        self.proof = proof
        self.stage = CHECK_PAIRING

    def check_pairing(self):
        """e(π, Ẑ) == e(C - Ĉ, H)를 확인한다. H는 setup.s_g2[0] = G2이다."""
        if self.stage != CHECK_PAIRING:
            raise ProtocolStateError(f"검증할 증명이 없습니다 (현재 단계: {self.stage})")
        proof = self.proof
        c_minus_i = ec_sub(proof.polynomial_commitment,
                           proof.interpolation_commitment)

        lhs = ec_pairing(proof.zero_polynomial_commitment, proof.quotient_commitment)
        rhs = ec_pairing(self.setup.s_g2[0], c_minus_i)

        accepted = lhs == rhs
        self.stage = ACCEPTED if accepted else REJECTED
        if not accepted:
            logger.warning("multi-point proof rejected")
        return accepted

    @property
    def accepted(self):
        return self.stage == ACCEPTED


def verify_multi(proof, setup):
    """다중 점 증명을 검증한다: e(π, Ẑ) == e(C - Ĉ, H).

    Returns:
        bool: 검증 성공 여부. 증명이 거부되어도 예외는 발생하지 않는다.
    """
    verifier = MultiVerifier(setup)
    verifier.receive_proof(proof)
    return verifier.check_pairing()
