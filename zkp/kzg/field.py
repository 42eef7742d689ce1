"""
KZG 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
======================================================

이 모듈은 KZG 커밋먼트 스킴이 소비하는 외부 능력(capability)의 경계이다.
큰 정수 산술, 곡선 공식, 페어링은 모두 py_ecc에 위임하고,
여기서는 얇은 래퍼와 단위근(root of unity) 계산만 제공한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 다항식 계수와 평가 점이 모두 FR 원소이다.
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - p - 1 = 2^28 × m (m은 홀수) → 최대 2^28차 단위근을 지원

**타원곡선 연산**:
  G1, G2 그룹의 스칼라 곱셈/덧셈/뺄셈과 쌍선형 페어링 e: G1 × G2 → GT.

**단위근(Roots of Unity)**:
  표준 원시근 g = 5로부터 2^28차 원시 단위근을 한 번 계산해 두고,
  필요한 차수 n = 2^k 까지 제곱을 반복하여 ω를 얻는다.

사용 예시:
    >>> from zkp.kzg.field import FR, G1, ec_mul
    >>> a = FR(3)
    >>> b = FR(7)
    >>> c = a * b        # FR(21)
    >>> P = ec_mul(G1, 5)  # 5·G1
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from zkp.kzg.errors import DivisionByZero


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.
    불변 값 타입으로 취급한다 (연산은 항상 새 원소를 반환).

    주의:
        py_ecc의 나눗셈은 0의 역원을 0으로 돌려준다.
        0으로 나누는 상황을 감지해야 하는 곳에서는 fr_inverse()를 사용한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> fr_inverse(x)  # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# p - 1 = 2^TWO_ADICITY · m
TWO_ADICITY = 28

# FR*의 생성자 (multiplicative generator)
PRIMITIVE_ROOT = FR(5)


def fr_inverse(value):
    """FR 원소의 곱셈 역원을 반환한다.

    Raises:
        DivisionByZero: value가 0일 때
    """
    if not isinstance(value, FR):
        value = FR(value)
    if value == FR(0):
        raise DivisionByZero("0의 역원은 존재하지 않습니다")
    return FR(1) / value


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

# G1 그룹 생성자 (generator)
G1 = bn128.G1

# G2 그룹 생성자 (generator), 검증 방정식의 H
G2 = bn128.G2

# 영점 (point at infinity) - 항등원
Z1 = None  # bn128에서 항등원은 None으로 표현
Z2 = None


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point (같은 그룹의 점)
    """
    if isinstance(scalar, FQ):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원 (negation): -point."""
    return bn128.neg(point)


def ec_sub(p1, p2):
    """타원곡선 점 뺄셈: p1 - p2."""
    return bn128.add(p1, bn128.neg(p2))


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    bn128의 optimal Ate 페어링을 수행한다.
    어느 한쪽이 무한원점이면 GT의 항등원을 반환한다 (e(O, Q) = 1).

    Args:
        g2_point: G2 위의 점
        g1_point: G1 위의 점

    Returns:
        GT 원소 (FQ12)

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    if g1_point is None or g2_point is None:
        return bn128.FQ12.one()
    return bn128.pairing(g2_point, g1_point)


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

# 2^28차 원시 단위근: g^((p-1)/2^28)
MAX_ROOT_OF_UNITY = PRIMITIVE_ROOT ** ((CURVE_ORDER - 1) >> TWO_ADICITY)


def get_root_of_unity(n):
    """n차 원시 단위근(primitive n-th root of unity) ω를 반환한다.

    표준 2^28차 원시 단위근에서 출발해 제곱을 반복한다.
    2^28차 원시근을 2^(28-k)번 제곱하면 2^k차 원시근이 된다.

    Args:
        n: 단위근의 차수 (2의 거듭제곱이어야 하며, ≤ 2^28)

    Returns:
        FR: n차 원시 단위근

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때

    예시:
        >>> omega = get_root_of_unity(4)
        >>> omega ** 4 == FR(1)  # True
        >>> omega ** 2 != FR(1)  # True (원시 단위근)
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << TWO_ADICITY):
        raise ValueError(f"n은 2^{TWO_ADICITY} 이하여야 합니다: {n}")

    omega = MAX_ROOT_OF_UNITY
    order = 1 << TWO_ADICITY
    while order > n:
        omega = omega * omega
        order >>= 1
    return omega


def get_roots_of_unity(n, omega=None):
    """n개의 단위근 리스트 [1, ω, ω², ..., ω^(n-1)]을 반환한다.

    omega를 주지 않으면 get_root_of_unity(n)을 사용한다.
    """
    if omega is None:
        omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots


def root_of_unity_order(omega):
    """ω의 곱셈 위수 n = 2^k를 구한다 (ω^n == 1이 될 때까지 제곱).

    Raises:
        ValueError: ω가 2^28 이하 차수의 2의 거듭제곱 단위근이 아닐 때
    """
    if not isinstance(omega, FR):
        omega = FR(omega)
    current = omega
    order = 1
    while current != FR(1):
        if order >= (1 << TWO_ADICITY) or current == FR(0):
            raise ValueError(f"2의 거듭제곱 차수 단위근이 아닙니다: {int(omega)}")
        current = current * current
        order <<= 1
    return order
