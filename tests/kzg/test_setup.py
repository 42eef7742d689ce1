"""
Tests for trusted setup generation and KZG commitments.

Covers:
- TrustedSetup generation (lengths, generators, determinism, no retained secret)
- SetupCeremony interface
- commit / commit_g2 (known polynomials, linearity, SetupTooSmall)
- Parallel setup and commitment paths agree with the sequential ones
"""

import pytest
from zkp.kzg.errors import SetupTooSmall
from zkp.kzg.field import FR, G1, G2, Z1, ec_mul, ec_add, ec_pairing
from zkp.kzg.polynomial import Polynomial
from zkp.kzg.srs import (
    TrustedSetup, SetupCeremony, InsecureLocalCeremony, generate_trusted_setup,
)
from zkp.kzg.commitment import commit, commit_g2


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def setup_small():
    """Small setup for fast tests (max_degree=8, max_opening_count=3)."""
    return generate_trusted_setup(max_degree=8, max_opening_count=3, seed=42)


# ─────────────────────────────────────────────────────────────────────
# Trusted setup
# ─────────────────────────────────────────────────────────────────────

class TestTrustedSetup:
    """generate_trusted_setup 테스트."""

    def test_g1_powers_length(self, setup_small):
        """s_g1 length == max_degree + 1."""
        assert len(setup_small.s_g1) == 9
        assert setup_small.max_degree == 8

    def test_g2_powers_length(self, setup_small):
        """s_g2 length == max_opening_count + 1."""
        assert len(setup_small.s_g2) == 4
        assert setup_small.max_opening_count == 3

    def test_single_point_default(self):
        """기본값은 단일 점 열기용 [G2, s·G2]."""
        setup = generate_trusted_setup(max_degree=2, seed=1)
        assert len(setup.s_g2) == 2

    def test_first_elements_are_generators(self, setup_small):
        assert setup_small.s_g1[0] == G1
        assert setup_small.s_g2[0] == G2

    def test_deterministic_with_same_seed(self):
        a = generate_trusted_setup(max_degree=3, seed=99)
        b = generate_trusted_setup(max_degree=3, seed=99)
        assert a.s_g1 == b.s_g1
        assert a.s_g2 == b.s_g2

    def test_different_seeds(self):
        a = generate_trusted_setup(max_degree=2, seed=1)
        b = generate_trusted_setup(max_degree=2, seed=2)
        assert a.s_g1 != b.s_g1

    def test_random_secret_without_seed(self):
        setup = generate_trusted_setup(max_degree=2)
        assert len(setup.s_g1) == 3
        assert setup.s_g1[1] != G1

    def test_consecutive_powers_distinct(self, setup_small):
        for i in range(len(setup_small.s_g1) - 1):
            assert setup_small.s_g1[i] != setup_small.s_g1[i + 1]

    def test_g1_g2_powers_consistent(self, setup_small):
        """e([s]₁, G2) == e(G1, [s]₂): 두 그룹의 거듭제곱은 같은 s에서 나온다."""
        lhs = ec_pairing(G2, setup_small.s_g1[1])
        rhs = ec_pairing(setup_small.s_g2[1], G1)
        assert lhs == rhs

    def test_secret_not_retained(self, setup_small):
        """TrustedSetup은 스칼라 원소를 하나도 담지 않는다."""
        for value in vars(setup_small).values():
            assert not isinstance(value, FR)

    def test_parallel_matches_sequential(self):
        a = generate_trusted_setup(max_degree=4, max_opening_count=2, seed=7)
        b = generate_trusted_setup(max_degree=4, max_opening_count=2, seed=7, workers=3)
        assert a.s_g1 == b.s_g1
        assert a.s_g2 == b.s_g2

    def test_opening_count_larger_than_degree(self):
        setup = generate_trusted_setup(max_degree=1, max_opening_count=3, seed=5)
        assert len(setup.s_g1) == 2
        assert len(setup.s_g2) == 4

    def test_max_degree_zero(self):
        setup = generate_trusted_setup(max_degree=0, seed=42)
        assert setup.s_g1 == [G1]

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            generate_trusted_setup(max_degree=-1)
        with pytest.raises(ValueError):
            generate_trusted_setup(max_degree=2, max_opening_count=0)

    def test_generate_classmethod(self):
        setup = TrustedSetup.generate(3, seed=42)
        assert setup.s_g1 == generate_trusted_setup(3, seed=42).s_g1

    def test_require(self, setup_small):
        setup_small.require(coeff_count=9, opening_count=3)
        with pytest.raises(SetupTooSmall):
            setup_small.require(coeff_count=10)
        with pytest.raises(SetupTooSmall):
            setup_small.require(opening_count=4)

    def test_rejects_truncated_vectors(self):
        with pytest.raises(SetupTooSmall):
            TrustedSetup([G1], [G2])

    def test_repr(self, setup_small):
        assert repr(setup_small) == "TrustedSetup(max_degree=8, max_opening_count=3)"


class TestCeremony:
    """SetupCeremony 인터페이스 테스트."""

    def test_interface_is_abstract(self):
        with pytest.raises(NotImplementedError):
            SetupCeremony().run(2, 1)

    def test_local_ceremony(self):
        setup = InsecureLocalCeremony().run(3, 2, seed=42)
        assert isinstance(setup, TrustedSetup)
        assert setup.s_g1 == generate_trusted_setup(3, 2, seed=42).s_g1

    def test_ceremony_keeps_no_seed(self):
        """시드는 run() 안에서만 쓰이고 세리머니 객체에 남지 않는다."""
        ceremony = InsecureLocalCeremony(workers=2)
        setup = ceremony.run(2, 1, seed=42)
        assert setup.s_g2 == generate_trusted_setup(2, 1, seed=42).s_g2
        assert vars(ceremony) == {"workers": 2}

    def test_custom_ceremony_plugs_in(self):
        """다른 세리머니 구현도 같은 TrustedSetup을 돌려주면 된다."""

        class FixedCeremony(SetupCeremony):
            def run(self, max_degree, max_opening_count=1):
                s = FR(11)
                s_g1 = [ec_mul(G1, s ** i) for i in range(max_degree + 1)]
                s_g2 = [ec_mul(G2, s ** i) for i in range(max_opening_count + 1)]
                return TrustedSetup(s_g1, s_g2)

        setup = FixedCeremony().run(2)
        poly = Polynomial([1, 1, 1])
        assert commit(poly, setup) == ec_mul(G1, 1 + 11 + 121)


# ─────────────────────────────────────────────────────────────────────
# Commitments
# ─────────────────────────────────────────────────────────────────────

class TestCommit:
    """commit 함수 테스트."""

    def test_commit_constant(self, setup_small):
        assert commit(Polynomial([FR(7)]), setup_small) == ec_mul(G1, 7)

    def test_commit_linear(self, setup_small):
        """commit(a + bx) == a·G1 + b·[s]₁."""
        poly = Polynomial([FR(3), FR(5)])
        expected = ec_add(ec_mul(setup_small.s_g1[0], 3),
                          ec_mul(setup_small.s_g1[1], 5))
        assert commit(poly, setup_small) == expected

    def test_commit_zero_polynomial(self, setup_small):
        assert commit(Polynomial.zero(), setup_small) is Z1

    def test_commit_at_max_degree(self, setup_small):
        poly = Polynomial([0] * 8 + [1])
        assert commit(poly, setup_small) == setup_small.s_g1[8]

    def test_commit_degree_exceeds_setup(self, setup_small):
        """deg 9 다항식은 9개 G1 거듭제곱으로 커밋할 수 없다."""
        poly = Polynomial([1] * 10)
        with pytest.raises(SetupTooSmall):
            commit(poly, setup_small)

    def test_linearity(self, setup_small):
        p = Polynomial([1, 2, 3])
        q = Polynomial([4, 0, 0, 5])
        assert commit(p + q, setup_small) == ec_add(commit(p, setup_small),
                                                    commit(q, setup_small))

    def test_scalar_multiplication(self, setup_small):
        p = Polynomial([2, 3])
        assert commit(p * FR(5), setup_small) == ec_mul(commit(p, setup_small), 5)

    def test_parallel_matches_sequential(self, setup_small):
        p = Polynomial(list(range(1, 10)))
        assert commit(p, setup_small, workers=3) == commit(p, setup_small)


class TestCommitG2:
    """commit_g2 함수 테스트."""

    def test_commit_g2_constant(self, setup_small):
        assert commit_g2(Polynomial([3]), setup_small) == ec_mul(G2, 3)

    def test_commit_g2_matches_g1(self, setup_small):
        """e(commit(p), G2) == e(G1, commit_g2(p))."""
        p = Polynomial([2, 0, 1])
        lhs = ec_pairing(G2, commit(p, setup_small))
        rhs = ec_pairing(commit_g2(p, setup_small), G1)
        assert lhs == rhs

    def test_commit_g2_too_small(self, setup_small):
        with pytest.raises(SetupTooSmall):
            commit_g2(Polynomial([1, 1, 1, 1, 1]), setup_small)
