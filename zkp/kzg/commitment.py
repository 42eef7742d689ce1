"""
KZG 다항식 커밋먼트
====================

다항식 p(x)에 대한 간결한 "지문"(커밋먼트)을 타원곡선 점 하나로 만든다.

    C = Σᵢ cᵢ · [sⁱ]₁ = p(s) · G1

s를 모르는 상태에서 SRS의 거듭제곱 점들을 계수로 선형결합하여 p(s)·G1을 얻는다.
  - 바인딩(binding): 한 번 커밋하면 다른 다항식으로 바꿀 수 없음
  - 하이딩(hiding): 커밋먼트에서 원래 다항식을 복원할 수 없음 (이산로그 가정)

누적은 리덕션(reduction)이므로 인덱스 구간별 부분합을 병렬로 계산한 뒤
그룹 덧셈으로 합칠 수 있다 (workers 인자).
"""

from concurrent.futures import ThreadPoolExecutor

from zkp.kzg.field import FR, ec_add, ec_mul


def _linear_combination(points, coeffs):
    result = None  # 무한원점 (항등원)
    for point, coeff in zip(points, coeffs):
        if coeff == FR(0):
            continue
        result = ec_add(result, ec_mul(point, coeff))
    return result


def _msm(points, coeffs, workers=None):
    if not workers or len(coeffs) < 2:
        return _linear_combination(points, coeffs)

    chunk = -(-len(coeffs) // workers)
    ranges = [(i, min(i + chunk, len(coeffs))) for i in range(0, len(coeffs), chunk)]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        partials = list(executor.map(
            lambda r: _linear_combination(points[r[0]:r[1]], coeffs[r[0]:r[1]]),
            ranges,
        ))

    result = None
    for partial in partials:
        result = ec_add(result, partial)
    return result


def commit(poly, setup, workers=None):
    """다항식을 G1에 KZG 커밋한다.

    Args:
        poly: 커밋할 다항식 (Polynomial)
        setup: TrustedSetup
        workers: 부분합을 병렬로 계산할 스레드 수 (None이면 순차 실행)

    Returns:
        G1 점: 커밋먼트 C (영 다항식이면 무한원점 None)

    Raises:
        SetupTooSmall: len(s_g1) < 다항식 계수 개수

    예시:
        >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
        >>> C = commit(p, setup)  # (1 + 2s + 3s²)·G1
    """
    setup.require(coeff_count=len(poly.coeffs))
    return _msm(setup.s_g1, poly.coeffs, workers)


def commit_g2(poly, setup):
    """다항식을 G2에 커밋한다: Σᵢ cᵢ · [sⁱ]₂.

    다중 점 증명에서 영 다항식 Z(x)의 커밋먼트 [Z(s)]₂를 만들 때 사용한다.

    Raises:
        SetupTooSmall: len(s_g2) < 다항식 계수 개수
    """
    setup.require(opening_count=len(poly.coeffs) - 1)
    return _linear_combination(setup.s_g2, poly.coeffs)
