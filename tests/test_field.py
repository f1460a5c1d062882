from __future__ import annotations

from hashlib import sha256

from instantiations.secp256k1 import make_secp256k1_params
from schnorrzk.core import challenge, derive_public_key, prove, verify
from schnorrzk.field import ScalarField
from schnorrzk.ro import ro_sha256

N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def test_scalar_arithmetic_wraps_mod_n():
    field = ScalarField(q=N)

    assert field.add(N - 1, 2) == 1
    assert field.mul(N - 1, N - 1) == 1
    assert field.byte_length == 32
    assert field.contains(0) and not field.contains(N)
    assert field.is_secret(1) and not field.is_secret(0)


def test_reduce_handles_digest_sized_integers():
    field = ScalarField(q=N)
    top = 2**256 - 1

    assert top >= N
    assert field.reduce(top) == top - N
    assert field.reduce(N) == 0
    assert field.reduce(N + 5) == 5
    assert field.reduce(2**512 + 3) == (2**512 + 3) % N


def test_random_oracle_reduces_digest_through_field():
    field = ScalarField(q=N)
    digest = int.from_bytes(sha256(b"transcript").digest(), "big")

    assert ro_sha256(b"transcript", field) == field.reduce(digest)
    assert 0 <= ro_sha256(b"", field) < N


def test_challenge_goes_through_field_reduce(monkeypatch):
    params, sample = make_secp256k1_params()
    X = derive_public_key(params, 12345)
    calls = []
    original = ScalarField.reduce

    def counting_reduce(self, x):
        calls.append(x)
        return original(self, x)

    monkeypatch.setattr(ScalarField, "reduce", counting_reduce)

    e = challenge(params, X, X, b"")
    _, proof = prove(params, 12345, b"", sample=sample, public_key=X)

    assert calls and calls[0].bit_length() <= 256
    assert e == original(params.field, calls[0])
    assert verify(params, X, proof, b"")
    assert len(calls) == 3
