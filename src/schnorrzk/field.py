from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalarField:
    """Z_q as used for keys, nonces, challenges and responses.

    Python integers are not constant time; reductions here always run the
    full `%` rather than branching on operand size, which is as far as the
    pure-Python prototype goes.
    """

    q: int

    @property
    def byte_length(self) -> int:
        return (self.q.bit_length() + 7) // 8

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.q

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.q

    def reduce(self, x: int) -> int:
        """Reduce an arbitrary-width integer (e.g. a digest) mod q."""
        return x % self.q

    def contains(self, x: int) -> bool:
        return isinstance(x, int) and 0 <= x < self.q

    def is_secret(self, x: int) -> bool:
        """Secret keys and nonces live in [1, q-1]."""
        return isinstance(x, int) and 0 < x < self.q

    def to_bytes(self, x: int) -> bytes:
        return x.to_bytes(self.byte_length, "big")

    def from_bytes(self, b: bytes) -> int:
        return int.from_bytes(b, "big")
