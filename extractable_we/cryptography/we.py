# extractable_we/cryptography/we.py
"""
Extractable Witness Encryption

Witness encryption built from an extractable witness KEM and a keystream
XOR cipher:

    Enc(x, m):  (ct_1, k) <- Encap(x);  ct_2 = m XOR k[:len(m)]
    Dec(w, ct): k = Decap(w, ct_1);     m = ct_2 XOR k[:len(ct_2)]

There is no authentication layer. Decrypting with a witness for another
statement returns pseudorandom bytes of the right length instead of raising.
Callers that need to detect this should add their own integrity check to
the plaintext.
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

import numpy as np

from .kem import KEMError, WitnessKEM


logger = logging.getLogger("extractable-we.we")


# =============================================================================
# Exceptions
# =============================================================================

class WitnessEncryptionError(Exception):
    """The witness KEM rejected its inputs; the KEM error is kept in kem_error."""

    def __init__(self, kem_error: KEMError):
        self.kem_error = kem_error
        super().__init__(f"Key Encapsulation Error {kem_error}")


# =============================================================================
# Helpers
# =============================================================================

def _xor(data: bytes, keystream: bytes) -> bytes:
    """Byte-wise XOR of two equal-length buffers."""
    if not data:
        return b""
    a = np.frombuffer(data, dtype=np.uint8)
    b = np.frombuffer(keystream, dtype=np.uint8)
    return np.bitwise_xor(a, b).tobytes()


# =============================================================================
# Witness Encryption
# =============================================================================

class WE:
    """
    Extractable Witness Encryption over a witness KEM.

    Stateless apart from the held KEM; safe to share across threads.

    Example:
        >>> kzg = KZG.setup(max_degree=10)
        >>> we = WE(KEM(kzg))
        >>> C = kzg.commit(p)
        >>> key_ct, msg_ct = we.encrypt_single(C, z, y, b"helloworld")
        >>> we.decrypt_single(kzg.open(p, z), key_ct, msg_ct)
        b'helloworld'
    """

    def __init__(self, kem: WitnessKEM):
        self._kem = kem

    @property
    def kem(self) -> WitnessKEM:
        return self._kem

    def encrypt(
        self,
        commitment: Any,
        points: Sequence[Any],
        values: Sequence[Any],
        msg: bytes,
    ) -> List[Tuple[Any, bytes]]:
        """
        Encrypt one message under every statement (commitment, points[i], values[i]).

        The full message is encrypted independently per statement, each with
        its own encapsulation. Output order follows the input order.

        Raises:
            ValueError: points and values differ in length
            WitnessEncryptionError: an encapsulation failed (no partial results)
        """
        if len(points) != len(values):
            raise ValueError(
                f"points and values must have equal length: {len(points)} != {len(values)}"
            )

        cts = []
        for i in range(len(points)):
            cts.append(self.encrypt_single(commitment, points[i], values[i], msg))

        logger.debug(f"WE encrypt: {len(cts)} statements, {len(msg)} bytes each")
        return cts

    def encrypt_single(
        self,
        commitment: Any,
        point: Any,
        value: Any,
        msg: bytes,
    ) -> Tuple[Any, bytes]:
        """
        Encrypt a message for the statement (commitment, point, value).

        Returns:
            key_ct: KEM ciphertext, needed (unchanged) for decryption
            msg_ct: encrypted message, len(msg_ct) == len(msg)
        """
        msg = bytes(msg)

        # (ct_1, k) <- Encap(x)
        try:
            key_ct, key_stream = self._kem.encapsulate(commitment, point, value)
        except KEMError as e:
            raise WitnessEncryptionError(e) from e

        # ct_2 <- Enc(k, m)
        msg_ct = _xor(msg, key_stream.take(len(msg)))

        return key_ct, msg_ct

    def decrypt_single(self, proof: Any, key_ct: Any, msg_ct: bytes) -> bytes:
        """
        Decrypt a ciphertext with a witness (opening proof).

        A proof for a different statement returns garbage, not an error.

        Raises:
            WitnessEncryptionError: decapsulation rejected proof or key_ct
        """
        msg_ct = bytes(msg_ct)

        # k = Decap(w, ct_1)
        try:
            key_stream = self._kem.decapsulate(proof, key_ct)
        except KEMError as e:
            raise WitnessEncryptionError(e) from e

        # m = Dec(k, ct_2)
        return _xor(msg_ct, key_stream.take(len(msg_ct)))


# =============================================================================
# Demo
# =============================================================================

def run_tests() -> bool:
    """Execute a WE round trip on BLS12-381."""
    import secrets

    from .kem import KEM
    from .kzg import KZG
    from .polynomial import evaluate_polynomial

    print("=" * 70)
    print("Extractable-WE Demo")
    print("=" * 70)

    kzg = KZG.setup(max_degree=10)
    we = WE(KEM(kzg))
    order = kzg.group.order

    # p(x) = 7 x^4 + 9 x^3 - 5 x^2 - 25 x - 24
    p = [-24, -25, -5, 9, 7]
    point = secrets.randbelow(order)
    value = evaluate_polynomial(p, point, order)
    commitment = kzg.commit(p)

    msg = b"helloworld"
    key_ct, msg_ct = we.encrypt_single(commitment, point, value, msg)

    recovered = we.decrypt_single(kzg.open(p, point), key_ct, msg_ct)
    ok = recovered == msg
    print(f"  Valid witness:   {'PASS' if ok else 'FAIL'}")

    wrong = we.decrypt_single(kzg.open(p, secrets.randbelow(order)), key_ct, msg_ct)
    mismatch_ok = wrong != msg
    print(f"  Invalid witness: {'PASS' if mismatch_ok else 'FAIL'}")

    all_pass = ok and mismatch_ok
    print(f"Result: {'ALL TESTS PASSED' if all_pass else 'SOME TESTS FAILED'}")
    return all_pass


if __name__ == "__main__":
    run_tests()
