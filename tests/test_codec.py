from __future__ import annotations

import pytest
from ecdsa.ellipticcurve import INFINITY

from instantiations.secp256k1 import Secp256k1Ops, make_secp256k1_params
from schnorrzk.codec import decode_point_strict, encode_point_for_transcript
from schnorrzk.core import derive_public_key, prove
from schnorrzk.errors import InvalidPoint, InvalidScalarRange, SerializationMismatch
from schnorrzk.transcript import (
    Proof,
    proof_from_bytes,
    proof_from_bytes_strict,
    proof_from_dict,
    proof_size,
    proof_to_bytes,
    proof_to_dict,
)


def _non_residue_x(ops: Secp256k1Ops) -> int:
    p = ops.p
    x = 1
    while True:
        rhs = (pow(x, 3, p) + ops.b) % p
        if pow(rhs, (p - 1) // 2, p) == p - 1:
            return x
        x += 1


def test_point_encoding_is_sec1_compressed():
    params, _ = make_secp256k1_params()
    G = params.group.generator()

    encoded = params.group.encode(G)

    assert encoded.hex() == "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    assert params.group.equals(params.group.decode(encoded), G)


def test_decode_rejects_malformed_points():
    ops = Secp256k1Ops()
    valid = ops.encode(ops.generator())

    assert ops.decode(valid[:-1]) is None
    assert ops.decode(b"\x04" + valid[1:]) is None
    assert ops.decode(b"\x00" * 33) is None
    assert ops.decode(b"\x02" + ops.p.to_bytes(32, "big")) is None
    assert ops.decode(b"\x02" + _non_residue_x(ops).to_bytes(32, "big")) is None


def test_decode_point_strict_raises_invalid_point():
    ops = Secp256k1Ops()
    with pytest.raises(InvalidPoint):
        decode_point_strict(ops, b"\x05" * 33)


def test_identity_has_no_wire_encoding_but_hashes_as_zero_block():
    ops = Secp256k1Ops()
    with pytest.raises(InvalidPoint):
        ops.encode(INFINITY)
    assert encode_point_for_transcript(ops, INFINITY) == b"\x00" * 33


def test_proof_wire_format():
    params, sample = make_secp256k1_params()
    X, proof = prove(params, 424242, b"wire", sample=sample)

    raw = proof_to_bytes(params, proof)
    decoded = proof_from_bytes(params, raw)

    assert proof_size(params) == 65
    assert len(raw) == 65
    assert raw[:33] == params.group.encode(proof.R)
    assert int.from_bytes(raw[33:], "big") == proof.s
    assert decoded is not None
    assert params.group.equals(decoded.R, proof.R)
    assert decoded.s == proof.s


def test_proof_decoding_rejects_bad_layouts():
    params, sample = make_secp256k1_params()
    _, proof = prove(params, 9, b"", sample=sample)
    raw = proof_to_bytes(params, proof)
    too_big_s = raw[:33] + params.field.q.to_bytes(32, "big")

    assert proof_from_bytes(params, raw[:-1]) is None
    assert proof_from_bytes(params, raw + b"\x00") is None
    assert proof_from_bytes(params, too_big_s) is None
    with pytest.raises(SerializationMismatch):
        proof_from_bytes_strict(params, raw[:64])
    with pytest.raises(InvalidScalarRange):
        proof_from_bytes_strict(params, too_big_s)
    with pytest.raises(InvalidPoint):
        proof_from_bytes_strict(params, b"\x07" + raw[1:])


def test_proof_dict_form():
    params, _ = make_secp256k1_params()
    R = derive_public_key(params, 11)
    proof = Proof(R=R, s=0x1234)

    payload = proof_to_dict(params, proof)
    restored = proof_from_dict(params, payload)

    assert payload["R"] == params.group.encode(R).hex()
    assert len(payload["s"]) == 64
    assert restored.s == 0x1234
    assert params.group.equals(restored.R, R)
    with pytest.raises(SerializationMismatch):
        proof_from_dict(params, {"R": payload["R"]})
    with pytest.raises(InvalidScalarRange):
        proof_to_bytes(params, Proof(R=R, s=params.field.q))
