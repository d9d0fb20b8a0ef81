# tests/test_common.py
"""
Extractable-WE Common Components Test Suite

Tests for: PairingGroup, HKDF, package status
Categories:
  C1. Scalars
  C2. Group membership and encoding
  C3. Key derivation
"""

import pytest

import extractable_we
from extractable_we.cryptography.common import (
    CURVES,
    HKDF,
    PairingGroup,
    _derive_key,
    get_group,
)

GROUP = get_group("bn128")


# =============================================================================
# C1. Scalars
# =============================================================================

def test_c1_1_scalar_reduction():
    """C1.1: ints reduce mod r; non-ints and bools are rejected"""
    assert GROUP.scalar(5) == 5
    assert GROUP.scalar(-1) == GROUP.order - 1
    assert GROUP.scalar(GROUP.order + 3) == 3

    for bad in [True, 1.0, "1", b"\x01", None]:
        with pytest.raises(TypeError):
            GROUP.scalar(bad)


def test_c1_2_random_scalar_range():
    """C1.2: Random scalars are non-zero and below r, even for degenerate rng output"""
    for _ in range(20):
        r = GROUP.random_scalar()
        assert 1 <= r < GROUP.order

    assert GROUP.random_scalar(lambda n: b"\x00" * n) == 1
    assert 1 <= GROUP.random_scalar(lambda n: b"\xff" * n) < GROUP.order


# =============================================================================
# C2. Membership and encoding
# =============================================================================

def test_c2_1_membership():
    """C2.1: is_g1 / is_g2 accept curve points and reject everything else"""
    assert GROUP.is_g1(GROUP.g1)
    assert GROUP.is_g1(GROUP.z1)
    assert GROUP.is_g1(GROUP.mul(GROUP.g1, 12345))
    assert GROUP.is_g2(GROUP.g2)
    assert GROUP.is_g2(GROUP.mul(GROUP.g2, 12345))

    assert not GROUP.is_g1(GROUP.g2)
    assert not GROUP.is_g2(GROUP.g1)
    assert not GROUP.is_g1((1, 2, 1))
    assert not GROUP.is_g1(GROUP.g1[:2])
    assert not GROUP.is_g1(None)

    fq = type(GROUP.g1[0])
    assert not GROUP.is_g1((fq(1), fq(1), fq(1)))


def test_c2_2_encoding():
    """C2.2: Encodings are representation-independent and fixed width"""
    p = GROUP.mul(GROUP.g1, 7)
    q = GROUP.add(GROUP.mul(GROUP.g1, 3), GROUP.mul(GROUP.g1, 4))

    assert GROUP.g1_to_bytes(p) == GROUP.g1_to_bytes(q)
    assert len(GROUP.g1_to_bytes(p)) == 1 + 2 * GROUP.field_bytes
    assert GROUP.g1_to_bytes(GROUP.z1) == b"\x00"

    assert len(GROUP.g2_to_bytes(GROUP.g2)) == 1 + 4 * GROUP.field_bytes
    assert GROUP.g2_to_bytes(GROUP.z2) == b"\x00"


def test_c2_3_pairing_bilinear():
    """C2.3: e(aP, bQ) == e(abP, Q)"""
    a, b = 6, 11
    lhs = GROUP.pairing(GROUP.mul(GROUP.g1, a), GROUP.mul(GROUP.g2, b))
    rhs = GROUP.pairing(GROUP.mul(GROUP.g1, a * b), GROUP.g2)
    assert GROUP.gt_to_bytes(lhs) == GROUP.gt_to_bytes(rhs)
    assert len(GROUP.gt_to_bytes(lhs)) == 12 * GROUP.field_bytes


def test_c2_4_curve_registry():
    """C2.4: Known curves load, unknown curves raise, groups are shared"""
    assert set(CURVES) == {"bls12_381", "bn128"}
    assert get_group("bn128") is GROUP
    assert repr(GROUP) == "PairingGroup('bn128')"
    with pytest.raises(ValueError):
        PairingGroup("ed25519")


# =============================================================================
# C3. Key derivation
# =============================================================================

def test_c3_1_hkdf_rfc5869_case1():
    """C3.1: RFC 5869 test case 1"""
    ikm = bytes.fromhex("0b" * 22)
    salt = bytes.fromhex("000102030405060708090a0b0c")
    info = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9")
    okm = HKDF(salt=salt).derive(ikm, info, 42)
    assert okm.hex() == (
        "3cb25f25faacd57a90434f64d0362f2a"
        "2d2d0a90cf1a5a4c5db02d56ecc4c5bf"
        "34007208d5b887185865"
    )


def test_c3_2_domain_separation():
    """C3.2: Deterministic per info label, distinct across labels"""
    k1 = _derive_key(b"ikm", b"label-a")
    assert k1 == _derive_key(b"ikm", b"label-a")
    assert k1 != _derive_key(b"ikm", b"label-b")
    assert len(_derive_key(b"ikm", b"label-a", 64)) == 64

    with pytest.raises(ValueError):
        HKDF().expand(b"prk", b"", 255 * 32 + 1)


def test_c3_3_status():
    """C3.3: Package status summary"""
    s = extractable_we.status()
    assert s["version"] == extractable_we.__version__
    assert s["default_curve"] == "bls12_381"
    assert s["curves"] == ["bls12_381", "bn128"]


# =============================================================================
# Runner
# =============================================================================

def run_all_tests() -> bool:
    tests = [
        test_c1_1_scalar_reduction,
        test_c1_2_random_scalar_range,
        test_c2_1_membership,
        test_c2_2_encoding,
        test_c2_3_pairing_bilinear,
        test_c2_4_curve_registry,
        test_c3_1_hkdf_rfc5869_case1,
        test_c3_2_domain_separation,
        test_c3_3_status,
    ]
    failed = 0
    for t in tests:
        try:
            t()
        except AssertionError as e:
            failed += 1
            print(f"  {t.__name__}: FAIL ✗ {e}")
    print(f"\nResult: {len(tests) - failed}/{len(tests)} passed")
    return failed == 0


if __name__ == "__main__":
    run_all_tests()
