"""
KZG 오류 타입
==============

KZG 커밋먼트 스킴에서 발생하는 모든 실패를 타입으로 구분한다.

**원칙**:
  - 호출자가 잘못된 요청(중복된 평가 점, 너무 작은 SRS 등)을 보냈을 때는
    예외를 발생시킨다. 잘못된 나눗셈을 "몫 = 0"으로 조용히 처리하지 않는다.
  - 검증 실패(페어링 불일치)는 오류가 아니다. verify 함수는 False를 반환한다.

예외 계층:
    KZGError (ValueError)
    ├── DivisionByZero (+ ZeroDivisionError)
    ├── DegreeMismatch
    ├── InvalidWitness
    ├── InterpolationDegeneracy
    ├── SetupTooSmall
    ├── TooManyOpeningPoints
    └── ProtocolStateError
"""


class KZGError(ValueError):
    """KZG 모듈의 모든 오류의 기반 클래스."""


class DivisionByZero(KZGError, ZeroDivisionError):
    """0의 역원 계산 또는 영 다항식(최고차 계수 0)으로 나누기를 시도했다."""


class DegreeMismatch(KZGError):
    """정확한 나눗셈이 필요한 곳에서 제수의 차수가 피제수의 차수보다 크다."""


class InvalidWitness(KZGError):
    """주장한 평가값이 다항식을 만족하지 않는다 (몫 나눗셈의 나머지가 0이 아님).

    검증에 실패할 증명을 내보내는 대신 증명 생성을 중단한다.
    """


class InterpolationDegeneracy(KZGError):
    """Lagrange 보간에 중복된 평가 점이 주어졌다 (분모가 0)."""


class SetupTooSmall(KZGError):
    """SRS의 거듭제곱 벡터가 다항식 차수 또는 열기 점 개수에 비해 짧다."""


class TooManyOpeningPoints(KZGError):
    """다중 점 증명에서 열기 점 개수 k가 다항식 차수 이상이다."""


class ProtocolStateError(KZGError):
    """Prover/Verifier 상태 기계의 단계를 순서에 맞지 않게 호출했다."""
