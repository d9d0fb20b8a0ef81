# extractable_we/cryptography/common.py
"""
Extractable-WE Common Components

Shared utilities, constants, and the pairing-group abstraction used by the
KZG commitment scheme, the witness KEM, and the WE orchestrator.

Encoding Specification:
  - Scalars: big-endian, fixed width (byte length of the group order)
  - Group elements: normalized affine coordinates, big-endian, fixed width
  - Point at infinity: single zero byte
  - Encodings are only used as KDF input, never as a wire format
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Any, Callable, Dict, Optional

from py_ecc import optimized_bls12_381, optimized_bn128


# =============================================================================
# Constants
# =============================================================================

CURVES: Dict[str, Any] = {
    "bls12_381": optimized_bls12_381,
    "bn128": optimized_bn128,
}

DEFAULT_CURVE: str = "bls12_381"
DEFAULT_MAX_DEGREE: int = 10

KEYSTREAM_KEY_BYTES: int = 32
SCALAR_SAMPLE_BYTES: int = 64  # wide reduction, negligible bias

KEYSTREAM_INFO: bytes = b"extractable-we-keystream"


# =============================================================================
# Utility Functions
# =============================================================================

def _sha256(*chunks: bytes) -> bytes:
    """Compute SHA-256 hash of concatenated inputs."""
    h = hashlib.sha256()
    for c in chunks:
        h.update(c)
    return h.digest()


def _int_from_bytes(b: bytes) -> int:
    """Convert bytes to integer (big-endian, unsigned)."""
    return int.from_bytes(b, "big", signed=False)


def _int_to_bytes(x: int, width: int) -> bytes:
    """Convert integer to fixed-width big-endian bytes."""
    return int(x).to_bytes(width, "big", signed=False)


# =============================================================================
# HKDF (RFC 5869)
# =============================================================================

class HKDF:
    """HMAC-based Key Derivation Function (RFC 5869)."""

    HASH_LEN: int = 32

    def __init__(self, salt: Optional[bytes] = None):
        self.salt = salt if salt is not None else b"\x00" * self.HASH_LEN

    def extract(self, ikm: bytes) -> bytes:
        """HKDF-Extract: PRK = HMAC(salt, IKM)"""
        return hmac.new(self.salt, ikm, hashlib.sha256).digest()

    def expand(self, prk: bytes, info: bytes = b"", length: int = 32) -> bytes:
        """HKDF-Expand: OKM = T(1) || T(2) || ... truncated to length"""
        if length > 255 * self.HASH_LEN:
            raise ValueError(f"HKDF output too long: {length} > {255 * self.HASH_LEN}")
        n_blocks = (length + self.HASH_LEN - 1) // self.HASH_LEN
        okm = b""
        t_prev = b""
        for i in range(1, n_blocks + 1):
            t_prev = hmac.new(prk, t_prev + info + bytes([i]), hashlib.sha256).digest()
            okm += t_prev
        return okm[:length]

    def derive(self, ikm: bytes, info: bytes = b"", length: int = 32) -> bytes:
        """One-shot derivation: Extract then Expand."""
        return self.expand(self.extract(ikm), info, length)


_HKDF_INSTANCE = HKDF(salt=_sha256(b"extractable-we-v1-hkdf-salt"))


def _derive_key(ikm: bytes, info: bytes, length: int = 32) -> bytes:
    """
    HKDF-based key derivation with domain separation.

    Used for:
      - Keystream key: K = HKDF(gt || key_ct, "extractable-we-keystream")
    """
    return _HKDF_INSTANCE.derive(ikm, info, length)


# =============================================================================
# Pairing Group
# =============================================================================

class PairingGroup:
    """
    Asymmetric pairing group (G1, G2, GT) over a py_ecc optimized curve.

    All points use py_ecc's projective (x, y, z) representation. Scalars are
    plain ints reduced modulo the prime group order.

    Supported curves:
        - bls12_381 (default, ~128-bit security)
        - bn128     (faster, ~100-bit security)
    """

    def __init__(self, curve: str = DEFAULT_CURVE):
        if curve not in CURVES:
            raise ValueError(f"Unsupported curve: {curve}")

        self.name = curve
        self._ec = CURVES[curve]

        self.order: int = int(self._ec.curve_order)
        self.field_modulus: int = int(self._ec.field_modulus)
        self.scalar_bytes = (self.order.bit_length() + 7) // 8
        self.field_bytes = (self.field_modulus.bit_length() + 7) // 8

        self.g1 = self._ec.G1
        self.g2 = self._ec.G2
        self.z1 = self._ec.Z1
        self.z2 = self._ec.Z2

        # Coordinate field types (FQ for G1, FQ2 for G2)
        self._fq = type(self.g1[0])
        self._fq2 = type(self.g2[0])

    def __repr__(self) -> str:
        return f"PairingGroup({self.name!r})"

    # -----------------------------------------
    # Scalars
    # -----------------------------------------

    def scalar(self, x: Any) -> int:
        """Reduce an integer into the scalar field."""
        if isinstance(x, bool) or not isinstance(x, int):
            raise TypeError(f"Scalar must be int, got {type(x).__name__}")
        return x % self.order

    def random_scalar(self, rng: Optional[Callable[[int], bytes]] = None) -> int:
        """Sample a uniformly random non-zero scalar."""
        rng = rng or secrets.token_bytes
        r = _int_from_bytes(rng(SCALAR_SAMPLE_BYTES))
        return r % (self.order - 1) + 1

    # -----------------------------------------
    # Group operations
    # -----------------------------------------

    def add(self, p: Any, q: Any) -> Any:
        return self._ec.add(p, q)

    def neg(self, p: Any) -> Any:
        return self._ec.neg(p)

    def sub(self, p: Any, q: Any) -> Any:
        return self._ec.add(p, self.neg(q))

    def mul(self, p: Any, k: int) -> Any:
        """Scalar multiplication; k is reduced mod the group order."""
        return self._ec.multiply(p, self.scalar(k))

    def eq(self, p: Any, q: Any) -> bool:
        return bool(self._ec.eq(p, q))

    def pairing(self, p1: Any, q2: Any) -> Any:
        """Bilinear map e: G1 x G2 -> GT."""
        return self._ec.pairing(q2, p1)

    # -----------------------------------------
    # Membership checks
    # -----------------------------------------

    def _is_point(self, pt: Any, coord_type: type, b: Any) -> bool:
        if not isinstance(pt, tuple) or len(pt) != 3:
            return False
        if not all(isinstance(c, coord_type) for c in pt):
            return False
        try:
            return bool(self._ec.is_on_curve(pt, b))
        except (TypeError, ValueError, ZeroDivisionError):
            return False

    def is_g1(self, pt: Any) -> bool:
        """True if pt is a well-formed G1 point on the curve."""
        return self._is_point(pt, self._fq, self._ec.b)

    def is_g2(self, pt: Any) -> bool:
        """True if pt is a well-formed G2 point on the twisted curve."""
        return self._is_point(pt, self._fq2, self._ec.b2)

    # -----------------------------------------
    # Encoding (KDF input)
    # -----------------------------------------

    def _fq_to_bytes(self, c: Any) -> bytes:
        return _int_to_bytes(int(c) % self.field_modulus, self.field_bytes)

    def _fqp_to_bytes(self, e: Any) -> bytes:
        return b"".join(self._fq_to_bytes(c) for c in e.coeffs)

    def g1_to_bytes(self, pt: Any) -> bytes:
        if self._ec.is_inf(pt):
            return b"\x00"
        x, y = self._ec.normalize(pt)
        return b"\x04" + self._fq_to_bytes(x) + self._fq_to_bytes(y)

    def g2_to_bytes(self, pt: Any) -> bytes:
        if self._ec.is_inf(pt):
            return b"\x00"
        x, y = self._ec.normalize(pt)
        return b"\x04" + self._fqp_to_bytes(x) + self._fqp_to_bytes(y)

    def gt_to_bytes(self, e: Any) -> bytes:
        return self._fqp_to_bytes(e)


_GROUPS: Dict[str, PairingGroup] = {}


def get_group(curve: str = DEFAULT_CURVE) -> PairingGroup:
    """Shared PairingGroup instance per curve name."""
    if curve not in _GROUPS:
        _GROUPS[curve] = PairingGroup(curve)
    return _GROUPS[curve]
