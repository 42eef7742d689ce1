"""
KZG 기반 모듈: 다항식(Polynomial) 클래스 및 나눗셈
===================================================

이 모듈은 KZG 프로토콜에서 사용되는 모든 다항식 연산을 제공한다.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 밀집(dense) 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  산술 연산자(+, -, *, 스칼라곱)와 평가(evaluation)를 지원한다.
  연산은 항상 새 객체를 반환하므로 값 타입처럼 자유롭게 복제해 쓸 수 있다.

**다항식 나눗셈**:
  - poly_div: 몫과 나머지를 모두 돌려주는 일반 긴 나눗셈
  - exact_div: 프로토콜용. 나머지가 0이 아니면 InvalidWitness를 발생시킨다.
    (p(x) - y) / (x - z), (p(x) - I(x)) / Z(x) 계산에 사용된다.

사용 예시:
    >>> from zkp.kzg.polynomial import Polynomial, poly_div
    >>> p = Polynomial([FR(3), FR(2), FR(1)])  # 3 + 2x + x²
    >>> q, r = poly_div(p, Polynomial([FR(2), FR(1)]))
    >>> q  # Poly(1*x)
    >>> r  # Poly(3)
"""

import secrets

from py_ecc.fields import bn128_FQ as FQ

from zkp.kzg.errors import DegreeMismatch, DivisionByZero, InvalidWitness
from zkp.kzg.fft import ifft
from zkp.kzg.field import FR, CURVE_ORDER, fr_inverse


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """유한체 FR 위의 다항식.

    계수 리스트로 표현: coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...

    KZG 프로토콜에서의 역할:
    - 커밋 대상 다항식 p(x)
    - 몫 다항식 q(x) = (p(x) - y) / (x - z)
    - 보간 다항식 I(x)와 영 다항식 Z(x) = ∏(x - zᵢ)

    예시:
        >>> p = Polynomial([FR(1), FR(2)])  # 1 + 2x
        >>> q = Polynomial([FR(3), FR(4)])  # 3 + 4x
        >>> r = p + q                        # 4 + 6x
        >>> r = p * q                        # 3 + 10x + 8x²
    """

    def __init__(self, coeffs=None):
        """다항식 생성.

        Args:
            coeffs: FR 원소(또는 정수)의 리스트 [c₀, c₁, ...].
                    None이거나 비어 있으면 영 다항식(0)을 생성한다.
        """
        if not coeffs:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [c if isinstance(c, FR) else FR(c) for c in coeffs]
        self._trim()

    def _trim(self):
        """최고차 계수가 0인 항을 제거하여 정규화한다.

        예: [1, 2, 0, 0] → [1, 2]  (1 + 2x)
        """
        while len(self.coeffs) > 1 and self.coeffs[-1] == FR(0):
            self.coeffs.pop()

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    @property
    def leading_coefficient(self):
        return self.coeffs[-1]

    def is_zero(self):
        """영 다항식인지 확인."""
        return len(self.coeffs) == 1 and self.coeffs[0] == FR(0)

    def copy(self):
        return Polynomial(list(self.coeffs))

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        Horner's method: p(x) = c₀ + x(c₁ + x(c₂ + ...))

        Args:
            point: 평가할 FR 원소

        Returns:
            FR: p(point) 값

        예시:
            >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
            >>> p.evaluate(FR(2))  # 1 + 4 + 12 = FR(17)
        """
        if not isinstance(point, FR):
            point = FR(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def add(self, other):
        """다항식 덧셈: p(x) + q(x). 짧은 쪽은 0으로 채운다."""
        if isinstance(other, (int, FQ)):
            other = Polynomial([other])
        max_len = max(len(self.coeffs), len(other.coeffs))
        result = []
        for i in range(max_len):
            a = self.coeffs[i] if i < len(self.coeffs) else FR(0)
            b = other.coeffs[i] if i < len(other.coeffs) else FR(0)
            result.append(a + b)
        return Polynomial(result)

    def sub(self, other):
        """다항식 뺄셈: p(x) - q(x). 짧은 쪽은 0으로 채운다."""
        if isinstance(other, (int, FQ)):
            other = Polynomial([other])
        max_len = max(len(self.coeffs), len(other.coeffs))
        result = []
        for i in range(max_len):
            a = self.coeffs[i] if i < len(self.coeffs) else FR(0)
            b = other.coeffs[i] if i < len(other.coeffs) else FR(0)
            result.append(a - b)
        return Polynomial(result)

    def mul(self, other):
        """다항식 곱셈: p(x) · q(x) 또는 스칼라곱.

        다항식 × 다항식: 이산 합성곱(convolution), 결과 길이 len(a) + len(b) - 1
        다항식 × 스칼라: 각 계수에 스칼라를 곱함
        """
        if isinstance(other, (int, FQ)):
            other = other if isinstance(other, FR) else FR(other)
            return Polynomial([c * other for c in self.coeffs])
        result = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == FR(0):
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result)

    def sub_constant(self, value):
        """상수항에서만 value를 뺀다: p(x) - y.

        단일 점 열기 증명의 분자 p(x) - y를 만들 때 사용한다.
        """
        if not isinstance(value, FR):
            value = FR(value)
        coeffs = list(self.coeffs)
        coeffs[0] = coeffs[0] - value
        return Polynomial(coeffs)

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        if isinstance(other, (int, FQ)):
            other = Polynomial([other])
        return other.sub(self)

    def __neg__(self):
        """다항식 부호 반전: -p(x)."""
        return Polynomial([FR(0) - c for c in self.coeffs])

    def __mul__(self, other):
        return self.mul(other)

    def __rmul__(self, other):
        return self.mul(other)

    def __eq__(self, other):
        """다항식 동등 비교 (계수별)."""
        if isinstance(other, (int, FQ)):
            other = Polynomial([other])
        if not isinstance(other, Polynomial):
            return False
        return self.coeffs == other.coeffs

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == FR(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def __len__(self):
        """계수 개수 반환 (차수 + 1)."""
        return len(self.coeffs)

    @classmethod
    def zero(cls):
        """영 다항식 p(x) = 0."""
        return cls([FR(0)])

    @classmethod
    def one(cls):
        """상수 다항식 p(x) = 1."""
        return cls([FR(1)])

    @classmethod
    def constant(cls, value):
        return cls([value])

    @classmethod
    def linear_factor(cls, point):
        """일차 인수 (x - z)."""
        if not isinstance(point, FR):
            point = FR(point)
        return cls([FR(0) - point, FR(1)])

    @classmethod
    def zero_polynomial(cls, points):
        """영 다항식 Z(x) = ∏ᵢ (x - zᵢ).

        다중 점 열기에서 모든 열기 점 zᵢ에서 0이 되는 다항식이다.
        (x - zᵢ) 인수를 하나씩 곱해 나간다.

        Args:
            points: FR 원소 리스트 [z₀, z₁, ..., z_{k-1}]

        Returns:
            Polynomial: 차수 k인 모닉(monic) 다항식
        """
        result = cls.one()
        for z in points:
            result = result * cls.linear_factor(z)
        return result

    @classmethod
    def random(cls, degree, rng=None):
        """정확히 degree차인 임의의 다항식을 생성한다.

        최고차 계수는 0이 아닌 값에서 뽑는다.

        Args:
            degree: 다항식 차수
            rng: randrange(stop)을 가진 난수 생성기 (예: random.Random(seed)).
                 None이면 secrets 모듈을 사용한다.
        """
        if degree < 0:
            raise ValueError(f"차수는 음수일 수 없습니다: {degree}")
        draw = rng.randrange if rng is not None else secrets.randbelow
        coeffs = [FR(draw(CURVE_ORDER)) for _ in range(degree)]
        coeffs.append(FR(draw(CURVE_ORDER - 1) + 1))
        return cls(coeffs)

    @classmethod
    def from_evaluations(cls, evals, omega):
        """단위근 도메인 {1, ω, ..., ω^(n-1)}에서의 평가값으로 다항식을 복원한다 (IFFT).

        예시:
            >>> omega = get_root_of_unity(4)
            >>> evals = [p.evaluate(omega**i) for i in range(4)]
            >>> Polynomial.from_evaluations(evals, omega) == p  # True
        """
        return cls(ifft(evals, omega))


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Polynomial Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """다항식 나눗셈: a(x) = b(x) · q(x) + r(x).

    최고차 계수부터 내려가는 긴 나눗셈(schoolbook long division)으로
    몫 q(x)와 나머지 r(x)를 계산한다. 나머지는 실제 차수가 드러나도록 정규화된다.

    제수의 차수가 피제수보다 크면 몫은 0, 나머지는 피제수 그대로이다.

    Args:
        a: 피제수 다항식 (Polynomial)
        b: 제수 다항식 (Polynomial)

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        DivisionByZero: 제수의 최고차 계수가 0인 경우 (영 다항식)

    예시:
        >>> a = Polynomial([FR(3), FR(2), FR(1)])  # x² + 2x + 3
        >>> b = Polynomial([FR(2), FR(1)])          # x + 2
        >>> q, r = poly_div(a, b)
        >>> q  # x
        >>> r  # 3
    """
    if b.leading_coefficient == FR(0):
        raise DivisionByZero("영 다항식으로 나눌 수 없습니다")

    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1

    if deg_a < deg_b:
        return Polynomial.zero(), Polynomial(remainder)

    quotient = [FR(0)] * (deg_a - deg_b + 1)
    lead_inv = fr_inverse(divisor[-1])

    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        if coeff == FR(0):
            continue
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient), Polynomial(remainder[:deg_b] or [FR(0)])


def exact_div(a, b):
    """나머지 없이 나누어 떨어져야 하는 나눗셈.

    KZG 몫 다항식 계산에 사용한다. 나머지가 남으면 평가 주장이 거짓이라는
    뜻이므로, 몫을 0으로 취급하지 않고 오류를 발생시킨다.

    Args:
        a: 피제수 다항식
        b: 제수 다항식

    Returns:
        Polynomial: 몫 a(x) / b(x)

    Raises:
        DivisionByZero: b가 영 다항식일 때
        DegreeMismatch: a가 0이 아니고 deg b > deg a 일 때
        InvalidWitness: 나머지가 0이 아닐 때
    """
    if b.is_zero():
        raise DivisionByZero("영 다항식으로 나눌 수 없습니다")
    if a.is_zero():
        return Polynomial.zero()
    if b.degree > a.degree:
        raise DegreeMismatch(
            f"제수 차수 {b.degree}가 피제수 차수 {a.degree}보다 큽니다"
        )
    quotient, remainder = poly_div(a, b)
    if not remainder.is_zero():
        raise InvalidWitness("나누어 떨어지지 않습니다: 나머지가 0이 아닙니다")
    return quotient
