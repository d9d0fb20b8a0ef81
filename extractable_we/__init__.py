# extractable_we/__init__.py
"""
Extractable-WE: Extractable Witness Encryption for KZG Statements

Encrypt a message to a statement "the committed polynomial evaluates to y
at z"; anyone holding an opening proof for the statement can decrypt.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │  extractable_we                                         │
    │  └── cryptography/                                      │
    │      ├── common.py      # PairingGroup, HKDF, constants │
    │      ├── polynomial.py  # Field polynomial helpers      │
    │      ├── kzg.py         # KZG commitments               │
    │      ├── stream.py      # ChaCha20 keystream            │
    │      ├── kem.py         # Extractable witness KEM       │
    │      └── we.py          # Witness encryption            │
    └─────────────────────────────────────────────────────────┘

Security notes:
    - No authentication: a wrong witness decrypts to garbage, not an error
    - Extractability comes from the KEM, not from this layer
"""

__version__ = "0.1.0"

import logging

# =============================================================================
# Core Cryptography
# =============================================================================

from .cryptography.common import (
    HKDF,
    CURVES,
    DEFAULT_CURVE,
    DEFAULT_MAX_DEGREE,
    PairingGroup,
    get_group,
)

from .cryptography.polynomial import (
    degree,
    evaluate_polynomial,
    divide_by_linear,
)

from .cryptography.kzg import (
    CommitmentScheme,
    KZG,
    KZGError,
    PolynomialDegreeError,
    InvalidPointError,
)

from .cryptography.stream import Keystream

from .cryptography.kem import (
    WitnessKEM,
    KEM,
    KEMError,
    KEMEncapsulationError,
    KEMDecapsulationError,
)

from .cryptography.we import WE, WitnessEncryptionError

logging.getLogger("extractable-we").addHandler(logging.NullHandler())

# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Version
    "__version__",

    # -------------------------------------------------------------------------
    # Witness Encryption
    # -------------------------------------------------------------------------
    "WE",
    "WitnessEncryptionError",

    # -------------------------------------------------------------------------
    # KEM
    # -------------------------------------------------------------------------
    "WitnessKEM",
    "KEM",
    "KEMError",
    "KEMEncapsulationError",
    "KEMDecapsulationError",
    "Keystream",

    # -------------------------------------------------------------------------
    # Commitments
    # -------------------------------------------------------------------------
    "CommitmentScheme",
    "KZG",
    "KZGError",
    "PolynomialDegreeError",
    "InvalidPointError",

    # -------------------------------------------------------------------------
    # Polynomials / Group
    # -------------------------------------------------------------------------
    "degree",
    "evaluate_polynomial",
    "divide_by_linear",
    "HKDF",
    "PairingGroup",
    "get_group",

    # -------------------------------------------------------------------------
    # Constants
    # -------------------------------------------------------------------------
    "CURVES",
    "DEFAULT_CURVE",
    "DEFAULT_MAX_DEGREE",
]


# =============================================================================
# Quick Status Check
# =============================================================================

def status() -> dict:
    """
    Get configuration summary.

    Example:
        >>> import extractable_we
        >>> extractable_we.status()
        {'version': '0.1.0', 'curves': ['bls12_381', 'bn128'], 'default_curve': 'bls12_381', ...}
    """
    return {
        'version': __version__,
        'curves': sorted(CURVES),
        'default_curve': DEFAULT_CURVE,
        'default_max_degree': DEFAULT_MAX_DEGREE,
    }
