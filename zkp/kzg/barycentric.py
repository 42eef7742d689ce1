"""
무게중심(Barycentric) 평가
===========================

단위근 도메인 위의 평가값만으로 임의의 점 x에서 다항식 값을 계산한다.
계수를 다시 복원(IFFT)하지 않아도 된다.

공식 (도메인 크기 n, yᵢ = p(ωⁱ)):

    p(x) = (xⁿ - 1) / n · Σᵢ yᵢ · ωⁱ / (x - ωⁱ)

x가 도메인 점 ωⁱ와 정확히 같으면 (x - ωⁱ) = 0이 되어 공식이 0으로 나누게
되므로, 그 경우에는 yᵢ를 그대로 반환한다.
"""

from zkp.kzg.fft import fft
from zkp.kzg.field import FR, fr_inverse, get_roots_of_unity, root_of_unity_order
from zkp.kzg.polynomial import Polynomial


def barycentric_eval(poly, omega, x):
    """다항식을 도메인 밖의 점 x에서 무게중심 공식으로 평가한다.

    도메인 크기 n은 ω의 위수로 정해진다. 계수는 n개까지 0으로 채운 뒤
    FFT로 도메인 평가값을 구하고 공식을 적용한다.

    Args:
        poly: Polynomial 또는 계수 리스트 (계수 개수 ≤ n)
        omega: n차 원시 단위근
        x: 평가 점 (FR 원소)

    Returns:
        FR: p(x)

    Raises:
        ValueError: 계수 개수가 ω의 위수보다 많을 때

    예시:
        >>> omega = get_root_of_unity(8)
        >>> p = Polynomial([FR(1), FR(2), FR(3), FR(4)])
        >>> barycentric_eval(p, omega, FR(10)) == p.evaluate(FR(10))  # True
    """
    coeffs = poly.coeffs if isinstance(poly, Polynomial) else list(poly)
    n = root_of_unity_order(omega)
    if len(coeffs) > n:
        raise ValueError(
            f"계수 {len(coeffs)}개는 크기 {n}인 도메인에 들어가지 않습니다"
        )
    padded = list(coeffs) + [FR(0)] * (n - len(coeffs))
    evals = fft(padded, omega)
    return barycentric_eval_from_evaluations(evals, omega, x)


def barycentric_eval_from_evaluations(evals, omega, x):
    """도메인 평가값 [p(1), p(ω), ..., p(ω^(n-1))]에서 p(x)를 계산한다."""
    if not isinstance(x, FR):
        x = FR(x)
    n = len(evals)

    total = FR(0)
    for y_i, omega_i in zip(evals, get_roots_of_unity(n, omega)):
        diff = x - omega_i
        if diff == FR(0):
            return y_i
        total = total + y_i * omega_i * fr_inverse(diff)

    return (x ** n - FR(1)) * fr_inverse(FR(n)) * total
