"""
Lagrange 보간 (Interpolation)
==============================

k개의 임의의 점 (z₀, y₀), ..., (z_{k-1}, y_{k-1})을 지나는
차수 k-1 이하의 유일한 다항식 I(x)를 계수 형태로 복원한다.

    I(x) = Σᵢ yᵢ · ∏_{j≠i} (x - z_j) / (zᵢ - z_j)

다중 점 열기 증명에서 보간 다항식 I(x)를 만드는 데 사용된다.
비용은 O(k²)번의 다항식 곱셈이므로 작은 k(일괄 열기)에 적합하다.
"""

from zkp.kzg.errors import InterpolationDegeneracy
from zkp.kzg.field import FR
from zkp.kzg.polynomial import Polynomial, poly_div


def _as_fr(values):
    return [v if isinstance(v, FR) else FR(v) for v in values]


def _check_distinct(points):
    seen = set()
    for z in points:
        key = int(z)
        if key in seen:
            raise InterpolationDegeneracy(f"중복된 평가 점: {key}")
        seen.add(key)


def lagrange_basis(domain, i):
    """i번째 Lagrange 기저 다항식 L_i(x)를 계수 형태로 반환한다.

    L_i(x) = ∏_{j≠i} (x - d_j) / (d_i - d_j)

    성질: L_i(d_j) = δ_{ij} (크로네커 델타)

    Args:
        domain: FR 원소 리스트 [d₀, d₁, ..., d_{n-1}] (서로 달라야 함)
        i: 기저 인덱스

    Returns:
        Polynomial: L_i(x)

    Raises:
        InterpolationDegeneracy: domain에 중복된 점이 있을 때
    """
    domain = _as_fr(domain)
    _check_distinct(domain)

    numerator = Polynomial.one()
    denominator = FR(1)
    for j, d_j in enumerate(domain):
        if j == i:
            continue
        numerator = numerator * Polynomial.linear_factor(d_j)
        denominator = denominator * (domain[i] - d_j)

    quotient, _ = poly_div(numerator, Polynomial.constant(denominator))
    return quotient


def lagrange_interpolate(points, values):
    """점 (zᵢ, yᵢ)들을 지나는 최소 차수 다항식 I(x)를 구한다.

    I(x) = Σᵢ yᵢ · L_i(x). 각 L_i는 lagrange_basis가 분자 다항식을
    분모 상수 다항식으로 나누어 만든다.

    Args:
        points: 평가 점 리스트 [z₀, ..., z_{k-1}] (서로 달라야 함)
        values: 평가값 리스트 [y₀, ..., y_{k-1}]

    Returns:
        Polynomial: I(x), deg I < k

    Raises:
        ValueError: points와 values의 길이가 다를 때
        InterpolationDegeneracy: 중복된 평가 점이 있을 때

    예시:
        >>> I = lagrange_interpolate([FR(1), FR(2)], [FR(3), FR(5)])
        >>> I  # Poly(1 + 2*x)
    """
    if len(points) != len(values):
        raise ValueError(
            f"점 개수 {len(points)}와 값 개수 {len(values)}가 다릅니다"
        )
    points = _as_fr(points)
    values = _as_fr(values)
    _check_distinct(points)

    result = Polynomial.zero()
    for i, y_i in enumerate(values):
        result = result + lagrange_basis(points, i) * y_i

    return result
