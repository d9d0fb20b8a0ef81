# extractable_we/cryptography/kzg.py
"""
KZG Polynomial Commitment Scheme

Kate-Zaverucha-Goldberg commitments over a pairing group:
  - Commitment: C = p(tau) * G1
  - Opening proof at z: pi = q(tau) * G1, q(X) = (p(X) - p(z)) / (X - z)
  - Verification: e(C - y*G1, G2) == e(pi, tau*G2 - z*G2)

The trapdoor tau is only used during setup; afterwards the scheme keeps the
powers [tau^i]G1 and [tau]G2.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from .common import DEFAULT_CURVE, DEFAULT_MAX_DEGREE, PairingGroup, get_group
from .polynomial import degree, divide_by_linear


logger = logging.getLogger("extractable-we.kzg")


# =============================================================================
# Exceptions
# =============================================================================

class KZGError(Exception):
    """Base exception for commitment scheme failures."""
    pass


class PolynomialDegreeError(KZGError):
    """Polynomial degree exceeds the setup's maximum degree."""

    def __init__(self, poly_degree: int, max_degree: int):
        self.poly_degree = poly_degree
        self.max_degree = max_degree
        super().__init__(
            f"Polynomial degree {poly_degree} exceeds max degree {max_degree}"
        )


class InvalidPointError(KZGError):
    """A group element is malformed or not on the expected curve."""
    pass


# =============================================================================
# Commitment Scheme Interface
# =============================================================================

class CommitmentScheme(ABC):
    """Polynomial commitment capability: commit to a polynomial, open it at a point."""

    @abstractmethod
    def commit(self, poly: Sequence[int]) -> Any:
        """Commit to a polynomial (coefficients, lowest degree first)."""

    @abstractmethod
    def open(self, poly: Sequence[int], point: int) -> Any:
        """Produce a witness that the committed polynomial evaluates to p(point) at point."""


# =============================================================================
# KZG
# =============================================================================

class KZG(CommitmentScheme):
    """
    KZG commitment scheme.

    Build with KZG.setup(); the constructor takes already computed powers.

    Example:
        >>> kzg = KZG.setup(max_degree=10)
        >>> C = kzg.commit([-24, -25, -5, 9, 7])
        >>> pi = kzg.open([-24, -25, -5, 9, 7], 3)
        >>> kzg.verify(C, 3, 666, pi)
        True
    """

    def __init__(
        self,
        group: PairingGroup,
        g1_powers: List[Any],
        g2_gen: Any,
        g2_tau: Any,
    ):
        if not g1_powers:
            raise ValueError("SRS must contain at least one G1 power")

        self._group = group
        self._g1_powers = list(g1_powers)
        self._g2_gen = g2_gen
        self._g2_tau = g2_tau

    @classmethod
    def setup(
        cls,
        g1_gen: Optional[Any] = None,
        g2_gen: Optional[Any] = None,
        max_degree: int = DEFAULT_MAX_DEGREE,
        secret: Optional[int] = None,
        curve: str = DEFAULT_CURVE,
    ) -> "KZG":
        """
        Trusted setup.

        Args:
            g1_gen: G1 generator (default: curve generator)
            g2_gen: G2 generator (default: curve generator)
            max_degree: Highest supported polynomial degree
            secret: Trapdoor tau (default: random non-zero scalar)
            curve: Curve name from CURVES
        """
        group = get_group(curve)

        if max_degree < 0:
            raise ValueError(f"max_degree must be non-negative, got {max_degree}")

        g1_gen = group.g1 if g1_gen is None else g1_gen
        g2_gen = group.g2 if g2_gen is None else g2_gen
        if not group.is_g1(g1_gen) or group.eq(g1_gen, group.z1):
            raise ValueError("g1_gen must be a non-identity G1 point")
        if not group.is_g2(g2_gen) or group.eq(g2_gen, group.z2):
            raise ValueError("g2_gen must be a non-identity G2 point")

        tau = group.random_scalar() if secret is None else group.scalar(secret)
        if tau == 0:
            raise ValueError("KZG secret must be non-zero")

        g1_powers = []
        power = 1
        for _ in range(max_degree + 1):
            g1_powers.append(group.mul(g1_gen, power))
            power = (power * tau) % group.order

        logger.debug(f"KZG setup: curve={group.name}, max_degree={max_degree}")

        return cls(
            group=group,
            g1_powers=g1_powers,
            g2_gen=g2_gen,
            g2_tau=group.mul(g2_gen, tau),
        )

    # -----------------------------------------
    # Accessors
    # -----------------------------------------

    @property
    def group(self) -> PairingGroup:
        return self._group

    @property
    def max_degree(self) -> int:
        return len(self._g1_powers) - 1

    @property
    def g1_gen(self) -> Any:
        return self._g1_powers[0]

    @property
    def g2_gen(self) -> Any:
        return self._g2_gen

    @property
    def g2_tau(self) -> Any:
        return self._g2_tau

    # -----------------------------------------
    # Commit / Open / Verify
    # -----------------------------------------

    def _check_degree(self, poly: Sequence[int]) -> List[int]:
        coeffs = [self._group.scalar(c) for c in poly]
        d = degree(coeffs, self._group.order)
        if d > self.max_degree:
            raise PolynomialDegreeError(d, self.max_degree)
        return coeffs[:d + 1]

    def commit(self, poly: Sequence[int]) -> Any:
        """C = sum(c_i * [tau^i]G1)"""
        coeffs = self._check_degree(poly)
        group = self._group

        result = group.z1
        for c, base in zip(coeffs, self._g1_powers):
            if c == 0:
                continue
            result = group.add(result, group.mul(base, c))

        logger.debug(f"KZG commit: degree={len(coeffs) - 1}")
        return result

    def open(self, poly: Sequence[int], point: int) -> Any:
        """pi = commit((p(X) - p(z)) / (X - z))"""
        coeffs = self._check_degree(poly)
        z = self._group.scalar(point)

        quotient, _ = divide_by_linear(coeffs, z, self._group.order)
        return self.commit(quotient)

    def verify(self, commitment: Any, point: int, value: int, proof: Any) -> bool:
        """Check e(C - y*G1, G2) == e(pi, tau*G2 - z*G2)."""
        group = self._group
        if not group.is_g1(commitment):
            raise InvalidPointError("commitment is not a G1 point")
        if not group.is_g1(proof):
            raise InvalidPointError("proof is not a G1 point")

        z = group.scalar(point)
        y = group.scalar(value)

        lhs = group.pairing(
            group.sub(commitment, group.mul(self.g1_gen, y)),
            self._g2_gen,
        )
        rhs = group.pairing(
            proof,
            group.sub(self._g2_tau, group.mul(self._g2_gen, z)),
        )
        return group.gt_to_bytes(lhs) == group.gt_to_bytes(rhs)
