# src/instantiations/secp256k1/inst.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from schnorrzk.core import SchnorrParams
from schnorrzk.errors import InvalidPoint
from schnorrzk.field import ScalarField
from schnorrzk.interfaces import RandomSource
from schnorrzk.ro import ro_sha256
from schnorrzk.rng import make_nonce_sampler

# Pure-Python secp256k1 ops via `ecdsa`
try:
    from ecdsa.curves import SECP256k1
    from ecdsa.ellipticcurve import INFINITY, Point, PointJacobi
    from ecdsa.numbertheory import SquareRootError, square_root_mod_prime
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "secp256k1 instantiation requires the 'ecdsa' package. Install via: pip install ecdsa"
    ) from e


def _affine(A):
    """Normalize to an affine `Point` (or INFINITY)."""
    if A == INFINITY:
        return INFINITY
    if isinstance(A, PointJacobi):
        return A.to_affine()
    return A


# ----------------------------
# E: secp256k1 as an additive group of prime order n (cofactor 1)
# ----------------------------

@dataclass(frozen=True)
class Secp256k1Ops:
    curve = SECP256k1.curve
    gen = SECP256k1.generator  # PointJacobi with precomputation
    order = SECP256k1.order
    p = SECP256k1.curve.p()
    a = SECP256k1.curve.a()
    b = SECP256k1.curve.b()
    point_size = 33

    def generator(self) -> Point:
        return self.gen.to_affine()

    def identity(self):
        return INFINITY

    def add(self, A, B):
        return _affine(_affine(A) + _affine(B))

    def scalar_mul(self, A, k: int):
        k = int(k) % self.order
        A = _affine(A)
        if A == INFINITY or k == 0:
            return INFINITY
        if self.equals(A, self.generator()):
            base = self.gen
        else:
            base = PointJacobi.from_affine(A)
        return _affine(base * k)

    def is_valid_member(self, A) -> bool:
        if not isinstance(A, (Point, PointJacobi)):
            return False
        A = _affine(A)
        if A == INFINITY or A.curve() != self.curve:
            return False
        x, y = int(A.x()), int(A.y())
        if not (0 <= x < self.p and 0 <= y < self.p):
            return False
        # cofactor 1: every on-curve point other than INFINITY is in <G>
        return self.curve.contains_point(x, y)

    def equals(self, A, B) -> bool:
        A, B = _affine(A), _affine(B)
        if A == INFINITY or B == INFINITY:
            return A == INFINITY and B == INFINITY
        return int(A.x()) == int(B.x()) and int(A.y()) == int(B.y()) and A.curve() == B.curve()

    def encode(self, A) -> bytes:
        return _point_to_bytes_compressed(A)

    def decode(self, data: bytes) -> Optional[Point]:
        return _point_from_bytes_compressed(data)


# ----------------------------
# SEC1 compressed encoding for secp256k1 points (33 bytes)
# ----------------------------

def _int_to_fixed_bytes(x: int, length: int) -> bytes:
    return x.to_bytes(length, "big")


def _int_from_fixed_bytes(b: bytes) -> int:
    return int.from_bytes(b, "big")


def _point_to_bytes_compressed(A) -> bytes:
    A = _affine(A)
    if A == INFINITY:
        raise InvalidPoint("cannot encode point at infinity")
    x = int(A.x())
    y = int(A.y())
    prefix = 0x03 if (y & 1) else 0x02
    return bytes([prefix]) + _int_to_fixed_bytes(x, 32)


def _point_from_bytes_compressed(buf: bytes) -> Optional[Point]:
    if not isinstance(buf, (bytes, bytearray)) or len(buf) != 33:
        return None
    prefix = buf[0]
    if prefix not in (0x02, 0x03):
        return None
    x = _int_from_fixed_bytes(bytes(buf[1:]))
    p = Secp256k1Ops.p
    a = Secp256k1Ops.a
    b = Secp256k1Ops.b
    if x >= p:
        return None

    rhs = (pow(x, 3, p) + (a * x) % p + b) % p
    try:
        y = square_root_mod_prime(rhs, p)
    except SquareRootError:
        return None

    if (y & 1) != (prefix & 1):
        y = (-y) % p

    if not Secp256k1Ops.curve.contains_point(x, y):
        return None
    return Point(Secp256k1Ops.curve, x, y, Secp256k1Ops.order)


# ----------------------------
# Params factory
# ----------------------------

def make_secp256k1_params(
    bind_public_key: bool = True,
    source: Optional[RandomSource] = None,
) -> Tuple[SchnorrParams[Point], Callable[[], int]]:
    q = Secp256k1Ops.order
    field = ScalarField(q=q)
    params = SchnorrParams(
        group=Secp256k1Ops(),
        field=field,
        RO=lambda transcript: ro_sha256(transcript, field),
        bind_public_key=bind_public_key,
    )
    sample = make_nonce_sampler(q, source)
    return params, sample
