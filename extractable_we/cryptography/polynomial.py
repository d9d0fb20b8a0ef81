# extractable_we/cryptography/polynomial.py
"""
Polynomial helpers over a prime scalar field.

Polynomials are coefficient sequences, lowest degree first:
    [-24, -25, -5, 9, 7]  ->  7x^4 + 9x^3 - 5x^2 - 25x - 24
"""

from __future__ import annotations

from typing import List, Sequence, Tuple


def degree(coeffs: Sequence[int], modulus: int) -> int:
    """Index of the highest non-zero coefficient (-1 for the zero polynomial)."""
    for i in range(len(coeffs) - 1, -1, -1):
        if coeffs[i] % modulus != 0:
            return i
    return -1


def evaluate_polynomial(coeffs: Sequence[int], x: int, modulus: int) -> int:
    """Evaluate p(x) mod modulus with Horner's rule."""
    acc = 0
    for c in reversed(coeffs):
        acc = (acc * x + c) % modulus
    return acc


def divide_by_linear(
    coeffs: Sequence[int],
    z: int,
    modulus: int,
) -> Tuple[List[int], int]:
    """
    Synthetic division of p(X) by (X - z).

    Returns:
        quotient: coefficients of q(X), lowest degree first
        remainder: p(z)
    """
    if not coeffs:
        return [], 0

    n = len(coeffs)
    quotient = [0] * (n - 1)
    carry = 0
    for i in range(n - 1, 0, -1):
        carry = (carry * z + coeffs[i]) % modulus
        quotient[i - 1] = carry
    remainder = (carry * z + coeffs[0]) % modulus
    return quotient, remainder
