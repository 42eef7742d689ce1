"""
KZG 단일 점 열기 (Single-Point Opening)
=========================================

Prover가 다항식 p(x)에 커밋한 뒤, Verifier가 고른 점 z에서
"p(z) = y" 임을 그룹 원소 하나로 증명한다.

**Prover 상태 기계**:
  CommitPolynomial → ReceiveChallenge(z) → ComputeQuotient → EmitProof

  1. C = [p(s)]₁ 커밋
  2. Verifier로부터 z를 받는다
  3. y = p(z), q(x) = (p(x) - y) / (x - z)
     (p(z) = y이면 인수정리에 의해 (x - z)가 p(x) - y를 나눈다)
  4. π = [q(s)]₁, 증명 {C, π, y}를 내보낸다

**Verifier 상태 기계**:
  ReceiveProof → CheckPairing → Accept | Reject

  검증 방정식:
      e(π, [s]₂ - [z]₂) == e(C - [y]₁, H)      (H = G2 생성자)

  q(s)·(s - z) = p(s) - y 가 지수에서 성립하는지 페어링으로 확인한다.

사용 예시:
    >>> setup = generate_trusted_setup(max_degree=8, seed=42)
    >>> proof = commit_and_prove_single(poly, FR(7), setup)
    >>> verify_single(proof, FR(7), setup)  # True
"""

import logging

from zkp.kzg.commitment import commit
from zkp.kzg.errors import ProtocolStateError
from zkp.kzg.field import FR, G1, G2, ec_mul, ec_pairing, ec_sub
from zkp.kzg.polynomial import Polynomial, exact_div


logger = logging.getLogger(__name__)


# Prover 단계
COMMIT_POLYNOMIAL = "commit_polynomial"
RECEIVE_CHALLENGE = "receive_challenge"
COMPUTE_QUOTIENT = "compute_quotient"
EMIT_PROOF = "emit_proof"
DONE = "done"

# Verifier 단계
RECEIVE_PROOF = "receive_proof"
CHECK_PAIRING = "check_pairing"
ACCEPTED = "accepted"
REJECTED = "rejected"


class Proof:
    """단일 점 KZG 증명.

    속성:
        polynomial_commitment: C = [p(s)]₁ (G1 점)
        quotient_commitment: π = [q(s)]₁ (G1 점)
        y: 주장하는 평가값 p(z) (FR 원소)
    """

    def __init__(self, polynomial_commitment, quotient_commitment, y):
        self.polynomial_commitment = polynomial_commitment
        self.quotient_commitment = quotient_commitment
        self.y = y

    def __repr__(self):
        return f"Proof(y={int(self.y)})"


def quotient_polynomial(poly, z, y):
    """q(x) = (p(x) - y) / (x - z)를 계산한다.

    Raises:
        InvalidWitness: p(z) ≠ y 여서 나머지가 남을 때
    """
    return exact_div(poly.sub_constant(y), Polynomial.linear_factor(z))


class Prover:
    """단일 점 열기 Prover.

    단계를 순서대로 호출해야 하며, 순서를 어기면 ProtocolStateError가 발생한다.

    예시:
        >>> prover = Prover(poly, setup)
        >>> C = prover.commit_polynomial()
        >>> prover.receive_challenge(z)
        >>> prover.compute_quotient()
        >>> proof = prover.emit_proof()
    """

    def __init__(self, polynomial, setup):
        self.polynomial = polynomial
        self.setup = setup
        self.stage = COMMIT_POLYNOMIAL
        self.commitment = None
        self.z = None
        self.y = None
        self.quotient = None

    def _expect(self, stage):
        if self.stage != stage:
            raise ProtocolStateError(
                f"현재 단계는 {self.stage}입니다 ({stage} 단계를 호출함)"
            )

    def commit_polynomial(self):
        """C = [p(s)]₁를 계산한다."""
        self._expect(COMMIT_POLYNOMIAL)
        self.commitment = commit(self.polynomial, self.setup)
        self.stage = RECEIVE_CHALLENGE
        return self.commitment

    def receive_challenge(self, z, y=None):
        """Verifier의 챌린지 z를 받는다.

        Args:
            z: 평가 점
            y: 외부에서 주장하는 평가값 (None이면 p(z)를 계산)
        """
        self._expect(RECEIVE_CHALLENGE)
        self.z = z if isinstance(z, FR) else FR(z)
        if y is None:
            self.y = self.polynomial.evaluate(self.z)
        else:
            self.y = y if isinstance(y, FR) else FR(y)
        self.stage = COMPUTE_QUOTIENT

    def compute_quotient(self):
        """q(x) = (p(x) - y) / (x - z).

        Raises:
            InvalidWitness: 주장한 y가 p(z)가 아닐 때
        """
        self._expect(COMPUTE_QUOTIENT)
        self.quotient = quotient_polynomial(self.polynomial, self.z, self.y)
        self.stage = EMIT_PROOF
        return self.quotient

    def emit_proof(self):
        """π = [q(s)]₁를 계산하고 증명을 내보낸다."""
        self._expect(EMIT_PROOF)
        pi = commit(self.quotient, self.setup)
        self.stage = DONE
        logger.debug("single-point proof emitted (quotient degree %d)",
                     self.quotient.degree)
        return Proof(self.commitment, pi, self.y)


class Verifier:
    """단일 점 열기 Verifier. 한 증명을 한 번 검증한다."""

    def __init__(self, setup):
        self.setup = setup
        self.stage = RECEIVE_PROOF
        self.proof = None
        self.z = None

    def receive_proof(self, proof, z):
        if self.stage != RECEIVE_PROOF:
            raise ProtocolStateError(f"이미 증명을 받았습니다 (현재 단계: {self.stage})")
        self.proof = proof
        self.z = z if isinstance(z, FR) else FR(z)
        self.stage = CHECK_PAIRING

    def check_pairing(self):
        """e(π, [s]₂ - [z]₂) == e(C - [y]₁, H)를 확인한다.

        Returns:
            bool: 검증 성공 여부
        """
        if self.stage != CHECK_PAIRING:
            raise ProtocolStateError(f"검증할 증명이 없습니다 (현재 단계: {self.stage})")
        proof = self.proof

        # [s - z]₂
        s_minus_z = ec_sub(self.setup.s_g2[1], ec_mul(G2, self.z))
        # C - [y]₁
        c_minus_y = ec_sub(proof.polynomial_commitment, ec_mul(G1, proof.y))

        lhs = ec_pairing(s_minus_z, proof.quotient_commitment)
        rhs = ec_pairing(G2, c_minus_y)

        accepted = lhs == rhs
        self.stage = ACCEPTED if accepted else REJECTED
        if not accepted:
            logger.warning("single-point proof rejected")
        return accepted

    @property
    def accepted(self):
        return self.stage == ACCEPTED


def commit_and_prove_single(polynomial, z, setup):
    """다항식에 커밋하고 점 z에서의 평가를 증명한다.

    Args:
        polynomial: 커밋할 다항식 p(x)
        z: 평가 점 (FR 원소)
        setup: TrustedSetup

    Returns:
        Proof: {C, π, y}

    Raises:
        SetupTooSmall: s_g1이 다항식 계수 개수보다 짧을 때
    """
    return prove_single(polynomial, z, None, setup)


def prove_single(polynomial, z, y, setup):
    """주장한 평가값 y로 단일 점 증명을 만든다.

    Raises:
        InvalidWitness: p(z) ≠ y
        SetupTooSmall: s_g1이 다항식 계수 개수보다 짧을 때
    """
    prover = Prover(polynomial, setup)
    prover.commit_polynomial()
    prover.receive_challenge(z, y)
    prover.compute_quotient()
    return prover.emit_proof()


def verify_single(proof, z, setup):
    """단일 점 증명을 검증한다.

    Returns:
        bool: 검증 성공 여부. 증명이 거부되어도 예외는 발생하지 않는다.
    """
    verifier = Verifier(setup)
    verifier.receive_proof(proof, z)
    return verifier.check_pairing()
