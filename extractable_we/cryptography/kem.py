# extractable_we/cryptography/kem.py
"""
Extractable Witness KEM for KZG statements

Statement: (C, z, y), "the polynomial committed in C evaluates to y at z".
Witness:   KZG opening proof pi for that statement.

    Encap(C, z, y):
        r <- Zr*
        key_ct = r * (tau*G2 - z*G2)
        s      = e(C - y*G1, r*G2)

    Decap(pi, key_ct):
        s      = e(pi, key_ct)

For a valid opening, e(pi, r(tau - z)G2) = e(G1, G2)^{r(p(tau) - y)}, which
is exactly the encapsulated secret. The keystream key is
HKDF(gt || key_ct, "extractable-we-keystream").
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

from .common import KEYSTREAM_INFO, KEYSTREAM_KEY_BYTES, _derive_key
from .kzg import KZG
from .stream import Keystream


logger = logging.getLogger("extractable-we.kem")


# =============================================================================
# Exceptions
# =============================================================================

class KEMError(Exception):
    """Base exception for witness KEM failures."""
    pass


class KEMEncapsulationError(KEMError):
    """Encapsulation rejected the statement (malformed commitment, point or value)."""
    pass


class KEMDecapsulationError(KEMError):
    """Decapsulation rejected its inputs (malformed witness or key ciphertext)."""
    pass


# =============================================================================
# Witness KEM Interface
# =============================================================================

class WitnessKEM(ABC):
    """
    Key encapsulation keyed by a statement instead of a public key.

    Implementations must return keystreams that agree byte for byte between
    an encapsulation and the matching decapsulation.
    """

    @abstractmethod
    def encapsulate(self, commitment: Any, point: Any, value: Any) -> Tuple[Any, Keystream]:
        """Return (key_ct, keystream) for the statement (commitment, point, value)."""

    @abstractmethod
    def decapsulate(self, witness: Any, key_ct: Any) -> Keystream:
        """Regenerate the keystream from a witness and a key ciphertext."""


# =============================================================================
# KZG Witness KEM
# =============================================================================

class KEM(WitnessKEM):
    """
    Extractable witness KEM over a KZG setup.

    Encapsulation is randomized: two calls on the same statement give
    unrelated (key_ct, keystream) pairs. A witness for a different statement
    decapsulates without error to an unrelated keystream.
    """

    def __init__(self, kzg: KZG):
        self._kzg = kzg
        self._group = kzg.group

    @property
    def kzg(self) -> KZG:
        return self._kzg

    def _keystream(self, shared: Any, key_ct: Any) -> Keystream:
        group = self._group
        ikm = group.gt_to_bytes(shared) + group.g2_to_bytes(key_ct)
        return Keystream(_derive_key(ikm, KEYSTREAM_INFO, KEYSTREAM_KEY_BYTES))

    def encapsulate(
        self,
        commitment: Any,
        point: Any,
        value: Any,
        rng: Optional[Callable[[int], bytes]] = None,
    ) -> Tuple[Any, Keystream]:
        """
        KEM encapsulation.

        Args:
            commitment: G1 commitment C
            point: Evaluation point z (int, reduced mod r)
            value: Claimed evaluation y (int, reduced mod r)
            rng: Optional random bytes generator (default: secrets.token_bytes)

        Returns:
            key_ct: G2 key ciphertext
            keystream: Keystream for the message layer

        Raises:
            KEMEncapsulationError: malformed statement
        """
        group = self._group

        if not group.is_g1(commitment):
            raise KEMEncapsulationError(f"commitment is not a {group.name} G1 point")
        try:
            z = group.scalar(point)
            y = group.scalar(value)
        except TypeError as e:
            raise KEMEncapsulationError(str(e)) from e

        r = group.random_scalar(rng)
        kzg = self._kzg

        # key_ct = r * (tau - z) * G2
        tau_minus_z = group.sub(kzg.g2_tau, group.mul(kzg.g2_gen, z))
        key_ct = group.mul(tau_minus_z, r)

        # s = e(C - y*G1, r*G2)
        c_minus_y = group.sub(commitment, group.mul(kzg.g1_gen, y))
        shared = group.pairing(c_minus_y, group.mul(kzg.g2_gen, r))

        logger.debug(f"KEM encapsulate: curve={group.name}")
        return key_ct, self._keystream(shared, key_ct)

    def decapsulate(self, witness: Any, key_ct: Any) -> Keystream:
        """
        KEM decapsulation.

        Never checks the witness against a statement: a wrong witness
        yields a wrong keystream, not an error.

        Raises:
            KEMDecapsulationError: malformed witness or key ciphertext
        """
        group = self._group

        if not group.is_g1(witness):
            raise KEMDecapsulationError(f"witness is not a {group.name} G1 point")
        if not group.is_g2(key_ct):
            raise KEMDecapsulationError(f"key ciphertext is not a {group.name} G2 point")

        # s = e(pi, key_ct)
        shared = group.pairing(witness, key_ct)

        logger.debug(f"KEM decapsulate: curve={group.name}")
        return self._keystream(shared, key_ct)
