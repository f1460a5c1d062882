# src/instantiations/secp256k1_pyecc/inst.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from schnorrzk.core import SchnorrParams
from schnorrzk.errors import InvalidPoint
from schnorrzk.field import ScalarField
from schnorrzk.interfaces import RandomSource
from schnorrzk.ro import ro_sha256
from schnorrzk.rng import make_nonce_sampler

# py_ecc for secp256k1 affine arithmetic.
# Install: pip install py-ecc
try:
    from py_ecc.secp256k1.secp256k1 import A, B, G, N, P, add, multiply
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "py-ecc secp256k1 instantiation requires 'py-ecc'. Install via: pip install py-ecc"
    ) from e


# ----------------------------
# Point representation note
# - py_ecc works on plain affine (x, y) int tuples and has no dedicated
#   point at infinity on this curve; it comes back as (0, 0).
# - We use None for the identity and keep it away from py_ecc entirely.
# ----------------------------

AffinePoint = Optional[Tuple[int, int]]


@dataclass(frozen=True)
class PyEccSecp256k1Ops:
    order = N
    p = P
    a = A
    b = B
    point_size = 33

    def generator(self) -> AffinePoint:
        return (G[0], G[1])

    def identity(self) -> AffinePoint:
        return None

    def add(self, left: AffinePoint, right: AffinePoint) -> AffinePoint:
        if left is None:
            return right
        if right is None:
            return left
        if left[0] == right[0] and (left[1] + right[1]) % self.p == 0:
            return None
        x, y = add(left, right)
        return (int(x), int(y))

    def scalar_mul(self, point: AffinePoint, k: int) -> AffinePoint:
        k = int(k) % self.order
        if point is None or k == 0:
            return None
        x, y = multiply(point, k)
        return (int(x), int(y))

    def _on_curve(self, x: int, y: int) -> bool:
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0

    def is_valid_member(self, point: object) -> bool:
        if not isinstance(point, tuple) or len(point) != 2:
            return False
        x, y = point
        if not isinstance(x, int) or not isinstance(y, int):
            return False
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        return self._on_curve(x, y)

    def equals(self, left: AffinePoint, right: AffinePoint) -> bool:
        if left is None or right is None:
            return left is None and right is None
        return (left[0] % self.p, left[1] % self.p) == (right[0] % self.p, right[1] % self.p)

    def encode(self, point: AffinePoint) -> bytes:
        if point is None:
            raise InvalidPoint("cannot encode point at infinity")
        x, y = point
        prefix = 0x03 if (y & 1) else 0x02
        return bytes([prefix]) + x.to_bytes(32, "big")

    def decode(self, data: bytes) -> AffinePoint:
        if not isinstance(data, (bytes, bytearray)) or len(data) != 33:
            return None
        prefix = data[0]
        if prefix not in (0x02, 0x03):
            return None
        x = int.from_bytes(bytes(data[1:]), "big")
        if x >= self.p:
            return None
        rhs = (pow(x, 3, self.p) + self.a * x + self.b) % self.p
        # p = 3 mod 4, so a square root (if any) is rhs^((p+1)/4)
        y = pow(rhs, (self.p + 1) // 4, self.p)
        if (y * y) % self.p != rhs:
            return None
        if (y & 1) != (prefix & 1):
            y = (-y) % self.p
        return (x, y)


def make_pyecc_secp256k1_params(
    bind_public_key: bool = True,
    source: Optional[RandomSource] = None,
) -> Tuple[SchnorrParams[AffinePoint], Callable[[], int]]:
    q = PyEccSecp256k1Ops.order
    field = ScalarField(q=q)
    params = SchnorrParams(
        group=PyEccSecp256k1Ops(),
        field=field,
        RO=lambda transcript: ro_sha256(transcript, field),
        bind_public_key=bind_public_key,
    )
    sample = make_nonce_sampler(q, source)
    return params, sample
