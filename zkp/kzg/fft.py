"""
KZG 기반 모듈: FFT (Number Theoretic Transform)
=================================================

유한체 위의 다항식을 n개의 단위근 {1, ω, ω², ..., ω^(n-1)}에서
O(n log n)에 평가한다.

  - FFT: 계수 → 평가값
  - IFFT: 평가값 → 계수 (보간)

재귀적 Cooley-Tukey radix-2 알고리즘을 사용한다.

**전제 조건**:
  입력 길이는 정확히 2의 거듭제곱이고 ω는 그 차수의 원시 단위근이어야 한다.
  조건을 어기면 예외 없이 잘못된 결과가 나온다.
  짧은 다항식은 호출 전에 pad_to_power_of_2로 0 계수를 채운다.

**병렬화**:
  짝수/홀수 부분 FFT는 서로 독립이므로 workers를 지정하면 최상위 분할을
  스레드 풀에서 동시에 계산한다. 버터플라이 결합은 두 결과를 모두 기다린다.

사용 예시:
    >>> from zkp.kzg.fft import fft, ifft
    >>> omega = get_root_of_unity(4)
    >>> evals = fft([FR(1), FR(2), FR(3), FR(0)], omega)
"""

from concurrent.futures import ThreadPoolExecutor

from zkp.kzg.field import FR, fr_inverse, get_root_of_unity


def fft(coeffs, omega, workers=None):
    """Fast Fourier Transform (NTT): 계수 → 평가값.

    알고리즘:
        1. n=1이면 입력을 그대로 반환
        2. 짝수/홀수 인덱스로 분리: even = [c₀, c₂, ...], odd = [c₁, c₃, ...]
        3. 재귀 호출: FFT(even, ω²), FFT(odd, ω²)
        4. 버터플라이 결합: y[k] = even[k] + ω^k · odd[k]
                           y[k+n/2] = even[k] - ω^k · odd[k]

    출력의 i번째 값은 p(ω^i)이다.

    Args:
        coeffs: [c₀, c₁, ..., c_{n-1}] FR 원소 리스트 (길이는 2의 거듭제곱)
        omega: n차 원시 단위근
        workers: 최상위 분할에 쓸 스레드 수 (None이면 순차 실행)

    Returns:
        list[FR]: [p(1), p(ω), p(ω²), ..., p(ω^{n-1})]
    """
    n = len(coeffs)
    if n == 1:
        return [coeffs[0] if isinstance(coeffs[0], FR) else FR(coeffs[0])]

    even = [coeffs[i] for i in range(0, n, 2)]
    odd = [coeffs[i] for i in range(1, n, 2)]

    # ω²는 n/2차 단위근
    omega_sq = omega * omega

    if workers:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            even_future = executor.submit(fft, even, omega_sq)
            odd_future = executor.submit(fft, odd, omega_sq)
            even_vals = even_future.result()
            odd_vals = odd_future.result()
    else:
        even_vals = fft(even, omega_sq)
        odd_vals = fft(odd, omega_sq)

    result = [FR(0)] * n
    omega_k = FR(1)  # ω^k
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega

    return result


def ifft(evals, omega):
    """Inverse FFT (INTT): 평가값 → 계수.

    역 단위근 ω^{-1}로 FFT를 수행한 후 n으로 나눈다.

    Args:
        evals: [p(1), p(ω), ..., p(ω^{n-1})] FR 원소 리스트
        omega: n차 원시 단위근

    Returns:
        list[FR]: [c₀, c₁, ..., c_{n-1}] 계수 리스트
    """
    n = len(evals)
    coeffs = fft(evals, fr_inverse(omega))
    n_inv = fr_inverse(FR(n))
    return [c * n_inv for c in coeffs]


def next_power_of_2(n):
    """n 이상의 가장 작은 2의 거듭제곱을 반환한다.

    예시:
        >>> next_power_of_2(3)  # 4
        >>> next_power_of_2(4)  # 4
        >>> next_power_of_2(5)  # 8
    """
    if n <= 1:
        return 1
    p = 1
    while p < n:
        p <<= 1
    return p


def pad_to_power_of_2(lst, fill=None):
    """리스트를 2의 거듭제곱 길이로 0(또는 fill)을 채워 패딩한다."""
    if fill is None:
        fill = FR(0)
    n = len(lst)
    target = next_power_of_2(n)
    return list(lst) + [fill] * (target - n)


def evaluation_domain(length):
    """length개의 계수를 담을 수 있는 평가 도메인 (n, ω)를 반환한다.

    n은 length 이상의 가장 작은 2의 거듭제곱, ω는 n차 원시 단위근이다.
    """
    n = next_power_of_2(length)
    return n, get_root_of_unity(n)
