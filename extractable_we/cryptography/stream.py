# extractable_we/cryptography/stream.py
"""
Extractable-WE Keystream

ChaCha20 keystream keyed by the KEM shared secret.

A Keystream is the first-N-bytes view of an effectively infinite
pseudorandom sequence: every read starts at byte 0, so the encrypting and
decrypting sides can request any length and get identical prefixes.
"""

from __future__ import annotations

from typing import Iterator, Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

from .common import KEYSTREAM_KEY_BYTES, _sha256


class Keystream:
    """
    Deterministic lazy byte sequence.

    Uses ChaCha20 with:
    - 256-bit domain-separated sub-key
    - fixed zero nonce (each key is used for exactly one sequence)
    - 64-byte blocks generated on demand
    """

    NONCE_BYTES = 16      # 4-byte counter || 12-byte nonce
    BLOCK_BYTES = 64
    KEY_BYTES = KEYSTREAM_KEY_BYTES

    def __init__(self, key: bytes):
        if len(key) != self.KEY_BYTES:
            raise ValueError(f"Keystream key must be {self.KEY_BYTES} bytes")

        # Derive sub-key (domain separated)
        self._enc_key = _sha256(b"keystream-enc", bytes(key))

    def __repr__(self) -> str:
        return "Keystream(<redacted>)"

    def _encryptor(self):
        algorithm = algorithms.ChaCha20(self._enc_key, b"\x00" * self.NONCE_BYTES)
        return Cipher(algorithm, mode=None).encryptor()

    # -----------------------------------------
    # Reads
    # -----------------------------------------

    def take(self, n: int) -> bytes:
        """Return the first n bytes of the sequence."""
        if n < 0:
            raise ValueError(f"Keystream length must be non-negative, got {n}")
        if n == 0:
            return b""
        return self._encryptor().update(b"\x00" * n)

    def fill(self, buf: Union[bytearray, memoryview]) -> None:
        """Overwrite buf with the first len(buf) bytes of the sequence."""
        view = memoryview(buf).cast("B")
        view[:] = self.take(len(view))

    def __iter__(self) -> Iterator[int]:
        encryptor = self._encryptor()
        zeros = b"\x00" * self.BLOCK_BYTES
        while True:
            yield from encryptor.update(zeros)
