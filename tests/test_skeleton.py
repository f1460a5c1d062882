from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from schnorrzk.core import SchnorrParams, challenge, prove, verify, verify_bytes
from schnorrzk.field import ScalarField
from schnorrzk.ro import ro_sha256
from schnorrzk.rng import SeededRandomSource, make_nonce_sampler
from schnorrzk.transcript import proof_from_bytes, proof_to_bytes

Q = 65537


@dataclass(frozen=True)
class ToyOps:
    # Here we realize the group as (Z_Q, +) with generator 3 (still prime order).
    order = Q
    point_size = 3

    def generator(self) -> int:
        return 3

    def identity(self) -> int:
        return 0

    def add(self, left: int, right: int) -> int:
        return (left + right) % Q

    def scalar_mul(self, point: int, scalar: int) -> int:
        return (point * scalar) % Q

    def is_valid_member(self, point: object) -> bool:
        return isinstance(point, int) and 0 < point < Q

    def equals(self, left: int, right: int) -> bool:
        return left % Q == right % Q

    def encode(self, point: int) -> bytes:
        return point.to_bytes(self.point_size, "big")

    def decode(self, data: bytes) -> Optional[int]:
        if len(data) != self.point_size:
            return None
        value = int.from_bytes(data, "big")
        return value if 0 < value < Q else None


def _toy_params(bind_public_key: bool = True) -> SchnorrParams[int]:
    field = ScalarField(q=Q)
    return SchnorrParams(
        group=ToyOps(),
        field=field,
        RO=lambda transcript: ro_sha256(transcript, field),
        bind_public_key=bind_public_key,
    )


def test_completeness_definition_toy_group():
    params = _toy_params()
    sample = make_nonce_sampler(Q, SeededRandomSource(7))

    X, proof = prove(params, 1234, b"alice", sample=sample)

    assert X == (3 * 1234) % Q
    assert verify(params, X, proof, b"alice")
    assert not verify(params, X, proof, b"bob")


def test_response_satisfies_schnorr_relation():
    params = _toy_params(bind_public_key=False)
    sample = make_nonce_sampler(Q, SeededRandomSource(11))

    X, proof = prove(params, 99, b"m", sample=sample)
    e = challenge(params, proof.R, X, b"m")

    assert (3 * proof.s) % Q == (proof.R + e * X) % Q


def test_wire_decode_rejects_malformed():
    params = _toy_params()
    sample = make_nonce_sampler(Q, SeededRandomSource(3))
    X, proof = prove(params, 5, b"", sample=sample)

    raw = proof_to_bytes(params, proof)
    assert len(raw) == 3 + 3
    assert proof_from_bytes(params, raw) == proof
    assert proof_from_bytes(params, b"not-a-proof") is None
    assert verify_bytes(params, ToyOps().encode(X), raw, b"")
    assert not verify_bytes(params, b"\x00\x00\x00", raw, b"")
