# extractable_we/cryptography/__init__.py
"""
Extractable-WE Cryptography Module

Layers:
  - PairingGroup: G1 x G2 -> GT over py_ecc optimized curves
  - KZG: polynomial commitments (statement producer)
  - KEM: extractable witness KEM for KZG statements
  - WE: witness encryption (KEM + keystream XOR)
"""

# Common utilities and group abstraction
from .common import (
    # Constants
    CURVES,
    DEFAULT_CURVE,
    DEFAULT_MAX_DEGREE,
    KEYSTREAM_KEY_BYTES,
    KEYSTREAM_INFO,
    # Utilities
    _sha256,
    _derive_key,
    # HKDF
    HKDF,
    # Group
    PairingGroup,
    get_group,
)

# Polynomials
from .polynomial import degree, evaluate_polynomial, divide_by_linear

# Commitments
from .kzg import (
    CommitmentScheme,
    KZG,
    KZGError,
    PolynomialDegreeError,
    InvalidPointError,
)

# Keystream
from .stream import Keystream

# KEM
from .kem import (
    WitnessKEM,
    KEM,
    KEMError,
    KEMEncapsulationError,
    KEMDecapsulationError,
)

# Witness encryption
from .we import WE, WitnessEncryptionError

__all__ = [
    # CORE
    "WE",
    "WitnessEncryptionError",
    # KEM
    "WitnessKEM",
    "KEM",
    "KEMError",
    "KEMEncapsulationError",
    "KEMDecapsulationError",
    "Keystream",
    # Commitments
    "CommitmentScheme",
    "KZG",
    "KZGError",
    "PolynomialDegreeError",
    "InvalidPointError",
    # Polynomials
    "degree",
    "evaluate_polynomial",
    "divide_by_linear",
    # Common
    "HKDF",
    "PairingGroup",
    "get_group",
    "CURVES",
    "DEFAULT_CURVE",
    "DEFAULT_MAX_DEGREE",
    "KEYSTREAM_KEY_BYTES",
    "KEYSTREAM_INFO",
]
