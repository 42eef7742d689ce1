"""
KZG 신뢰 설정 (Trusted Setup / Structured Reference String)
=============================================================

KZG 커밋먼트와 열기 증명에 필요한 공개 파라미터를 생성한다.

**SRS란?**
  비밀 값 s ("toxic waste")의 거듭제곱을 두 그룹에 심어 공개한 것이다.

  TrustedSetup = {
      s_g1: [G1, s·G1, s²·G1, ..., s^d·G1]     (d ≥ 커밋할 다항식의 최대 차수)
      s_g2: [G2, s·G2, ..., s^m·G2]             (m ≥ 동시에 여는 점의 최대 개수)
  }

  단일 점 열기에는 [G2, s·G2]만 필요하다 (m = 1).
  k점 다중 열기에는 영 다항식 Z(x)의 차수가 k이므로 m ≥ k여야 한다.

**보안 주의**:
  s를 아는 사람은 임의의 거짓 증명을 만들 수 있다.
  실제 시스템에서는 다자간 계산(MPC) 세리머니로 s를 생성하여
  참여자 중 한 명이라도 정직하면 아무도 s를 알 수 없게 해야 한다.
  InsecureLocalCeremony는 한 프로세스가 s를 뽑고 곧바로 버리는
  교육용 대체물이며, 실제 운영 환경에는 적합하지 않다.

  Prover/Verifier는 TrustedSetup만 받으므로, SetupCeremony를 구현한
  다른 세리머니로 교체해도 프로토콜 코드는 바뀌지 않는다.

사용 예시:
    >>> setup = generate_trusted_setup(max_degree=8, max_opening_count=4, seed=42)
    >>> len(setup.s_g1)  # 9 (0차부터 8차까지)
    >>> len(setup.s_g2)  # 5
"""

import hashlib
import logging
import secrets
from concurrent.futures import ThreadPoolExecutor

from zkp.kzg.errors import SetupTooSmall
from zkp.kzg.field import FR, G1, G2, ec_mul, CURVE_ORDER


logger = logging.getLogger(__name__)


class TrustedSetup:
    """KZG 공개 파라미터. 비밀 값 s는 담지 않는다.

    속성:
        s_g1: [G1, s·G1, s²·G1, ..., s^d·G1]
        s_g2: [G2, s·G2, ..., s^m·G2]
        max_degree: 커밋할 수 있는 최대 다항식 차수 d
        max_opening_count: 한 번에 열 수 있는 최대 점 개수 m
    """

    def __init__(self, s_g1, s_g2):
        if not s_g1 or len(s_g2) < 2:
            raise SetupTooSmall("s_g1은 1개 이상, s_g2는 [G2, s·G2] 이상이어야 합니다")
        self.s_g1 = list(s_g1)
        self.s_g2 = list(s_g2)

    @property
    def max_degree(self):
        return len(self.s_g1) - 1

    @property
    def max_opening_count(self):
        return len(self.s_g2) - 1

    def require(self, coeff_count=0, opening_count=0):
        """파라미터가 충분한지 확인한다.

        Args:
            coeff_count: 커밋할 다항식의 계수 개수 (차수 + 1)
            opening_count: 동시에 열 점의 개수 k (s_g2에 k+1개 필요)

        Raises:
            SetupTooSmall: s_g1 또는 s_g2가 짧을 때
        """
        if coeff_count > len(self.s_g1):
            raise SetupTooSmall(
                f"다항식 계수 {coeff_count}개에 비해 s_g1이 {len(self.s_g1)}개뿐입니다"
            )
        if opening_count + 1 > len(self.s_g2):
            raise SetupTooSmall(
                f"열기 점 {opening_count}개에 비해 s_g2가 {len(self.s_g2)}개뿐입니다"
            )

    @classmethod
    def generate(cls, max_degree, max_opening_count=1, seed=None, workers=None):
        """InsecureLocalCeremony로 TrustedSetup을 생성한다."""
        ceremony = InsecureLocalCeremony(workers=workers)
        return ceremony.run(max_degree, max_opening_count, seed=seed)

    def __repr__(self):
        return (f"TrustedSetup(max_degree={self.max_degree}, "
                f"max_opening_count={self.max_opening_count})")


class SetupCeremony:
    """신뢰 설정 세리머니 인터페이스.

    run()은 비밀 값을 외부에 노출하지 않고 TrustedSetup만 반환해야 한다.
    """

    def run(self, max_degree, max_opening_count):
        raise NotImplementedError


class InsecureLocalCeremony(SetupCeremony):
    """단일 참여자가 s를 뽑고 곧바로 버리는 교육용 세리머니.

    실제 운영 환경에서 사용하면 안 된다. s를 뽑은 프로세스는 거짓 증명을
    만들 수 있다.

    시드는 인스턴스에 저장하지 않고 run()에서 s를 유도하는 데만 쓴다.

    Args:
        workers: 스칼라 곱셈에 쓸 스레드 수 (None이면 순차 실행)
    """

    def __init__(self, workers=None):
        self.workers = workers

    @staticmethod
    def _sample_secret(seed):
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            value = int.from_bytes(h, "big") % CURVE_ORDER
            if value != 0:
                return FR(value)
        return FR(secrets.randbelow(CURVE_ORDER - 1) + 1)

    def run(self, max_degree, max_opening_count=1, seed=None):
        """s_g1[i] = [s^i]₁ (i = 0..d), s_g2[i] = [s^i]₂ (i = 0..m)를 계산한다.

        Args:
            max_degree: 지원할 최대 다항식 차수 d
            max_opening_count: 지원할 최대 동시 열기 점 개수 m (≥ 1)
            seed: 결정론적 생성을 위한 시드 (테스트용). None이면 secrets 사용.

        Returns:
            TrustedSetup
        """
        if max_degree < 0:
            raise ValueError(f"max_degree는 0 이상이어야 합니다: {max_degree}")
        if max_opening_count < 1:
            raise ValueError(
                f"max_opening_count는 1 이상이어야 합니다: {max_opening_count}"
            )

        powers = _powers_of_secret(self._sample_secret(seed),
                                   max(max_degree, max_opening_count) + 1)

        g1_scalars = powers[:max_degree + 1]
        g2_scalars = powers[:max_opening_count + 1]
        if self.workers:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                s_g1 = list(executor.map(lambda p: ec_mul(G1, p), g1_scalars))
                s_g2 = list(executor.map(lambda p: ec_mul(G2, p), g2_scalars))
        else:
            s_g1 = [ec_mul(G1, p) for p in g1_scalars]
            s_g2 = [ec_mul(G2, p) for p in g2_scalars]

        logger.debug("trusted setup generated: %d G1 powers, %d G2 powers",
                     len(s_g1), len(s_g2))
        return TrustedSetup(s_g1, s_g2)


def _powers_of_secret(secret, count):
    powers = []
    current = FR(1)
    for _ in range(count):
        powers.append(current)
        current = current * secret
    return powers


def generate_trusted_setup(max_degree, max_opening_count=1, seed=None, workers=None):
    """교육용 신뢰 설정을 생성한다. 비밀 값은 반환 직후 범위를 벗어난다.

    Args:
        max_degree: 커밋할 다항식의 최대 차수 d
        max_opening_count: 한 증명에서 열 최대 점 개수 m (단일 점이면 1)
        seed: 재현 가능한 테스트용 시드
        workers: 스칼라 곱셈을 병렬로 수행할 스레드 수

    Returns:
        TrustedSetup
    """
    return TrustedSetup.generate(max_degree, max_opening_count,
                                 seed=seed, workers=workers)
