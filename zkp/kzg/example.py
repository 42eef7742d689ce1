"""
KZG E2E 데모: 단일 점 열기와 다중 점 열기
==========================================

이 스크립트는 KZG 커밋먼트 스킴의 전체 흐름을 시연한다.

실행:
    python -m zkp.kzg.example

흐름:
    1. 7차 임의 다항식 생성
    2. 신뢰 설정 (교육용 단일 참여자 세리머니)
    3. 단일 점 증명 생성 및 검증
    4. 조작된 y로 검증 (실패해야 함)
    5. 4개 점 다중 증명 생성 및 검증
    6. 무게중심 공식으로 p(z)를 다시 계산해 y와 비교
"""

import random
from copy import copy

from zkp.kzg.field import FR
from zkp.kzg.polynomial import Polynomial
from zkp.kzg.fft import evaluation_domain, fft, pad_to_power_of_2
from zkp.kzg.barycentric import barycentric_eval_from_evaluations
from zkp.kzg.srs import generate_trusted_setup
from zkp.kzg.single import commit_and_prove_single, verify_single
from zkp.kzg.multiproof import commit_and_prove_multi, verify_multi


def main():
    print("=" * 60)
    print("  KZG Polynomial Commitment Demo")
    print("  다항식 차수 7, 단일 점 + 4점 일괄 열기")
    print("=" * 60)

    rng = random.Random(7)

    # ── 1. 다항식 ──
    print("\n[1] 다항식 생성...")
    degree = 7
    poly = Polynomial.random(degree, rng)
    print(f"    차수: {poly.degree}")

    # ── 2. 신뢰 설정 ──
    print("\n[2] 신뢰 설정 생성 (교육용, 실제 운영 환경에서는 MPC 필요)...")
    setup = generate_trusted_setup(max_degree=degree, max_opening_count=4, seed=2024)
    print(f"    G1 powers 수: {len(setup.s_g1)}")
    print(f"    G2 powers 수: {len(setup.s_g2)}")

    # ── 3. 단일 점 증명 ──
    print("\n[3] 단일 점 증명...")
    z = FR(rng.randrange(FR.field_modulus))
    proof = commit_and_prove_single(poly, z, setup)
    print(f"    z = {int(z)}")
    print(f"    y = p(z) = {int(proof.y)}")
    result = verify_single(proof, z, setup)
    print(f"    검증 결과: {'성공 ✓' if result else '실패 ✗'}")

    # ── 4. 조작된 증명 ──
    print("\n[4] 조작된 증명으로 검증 (y 변조)...")
    fake_proof = copy(proof)
    fake_proof.y = proof.y + FR(1)
    wrong_result = verify_single(fake_proof, z, setup)
    print(f"    검증 결과: {'성공 ✓' if wrong_result else '실패 ✗ (예상대로 실패)'}")

    # ── 5. 다중 점 증명 ──
    print("\n[5] 4점 다중 증명...")
    points = [FR(rng.randrange(FR.field_modulus)) for _ in range(4)]
    multi_proof = commit_and_prove_multi(poly, points, setup)
    multi_result = verify_multi(multi_proof, setup)
    print(f"    검증 결과: {'성공 ✓' if multi_result else '실패 ✗'}")

    # ── 6. 무게중심 평가 ──
    print("\n[6] 단위근 도메인 평가값에서 p(z) 재계산...")
    n, omega = evaluation_domain(len(poly))
    evals = fft(pad_to_power_of_2(poly.coeffs), omega)
    bary_y = barycentric_eval_from_evaluations(evals, omega, z)
    bary_result = bary_y == proof.y
    print(f"    도메인 크기: {n}")
    print(f"    y 일치: {'성공 ✓' if bary_result else '실패 ✗'}")

    ok = result and not wrong_result and multi_result and bary_result
    print("\n" + "=" * 60)
    if ok:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return ok


if __name__ == "__main__":
    main()
