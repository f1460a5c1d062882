"""Interface definitions for the Schnorr proof components."""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

Point = TypeVar("Point")


class GroupOps(Protocol[Point]):
    """Prime-order elliptic-curve group, written additively.

    `order` is the subgroup order n and `point_size` the byte length of the
    fixed-width point encoding.
    """

    order: int
    point_size: int

    def generator(self) -> Point:
        ...

    def identity(self) -> Point:
        ...

    def add(self, left: Point, right: Point) -> Point:
        ...

    def scalar_mul(self, point: Point, scalar: int) -> Point:
        ...

    def is_valid_member(self, point: object) -> bool:
        """True iff `point` is a non-identity element of the prime-order subgroup."""
        ...

    def equals(self, left: Point, right: Point) -> bool:
        ...

    def encode(self, point: Point) -> bytes:
        """Fixed-width encoding; raises InvalidPoint for the identity."""
        ...

    def decode(self, data: bytes) -> Optional[Point]:
        """Inverse of `encode`. Returns None on malformed or invalid input."""
        ...


class RandomSource(Protocol):
    """Injectable randomness capability."""

    def randbelow(self, upper: int) -> int:
        """Uniform integer in [0, upper)."""
        ...
