"""Proof transcript (R, s) and its fixed-width wire encoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Generic, Optional, TypeVar

from .codec import decode_point_strict
from .errors import InvalidScalarRange, SerializationMismatch

if TYPE_CHECKING:
    from .core import SchnorrParams

P = TypeVar("P")


@dataclass(frozen=True)
class Proof(Generic[P]):
    """Non-interactive Schnorr proof: commitment R and response s.

    Also serves as the signature in the message-bound variant. The public key
    and the bound context travel separately.
    """

    R: P
    s: int


def proof_size(params: "SchnorrParams[P]") -> int:
    return params.group.point_size + params.field.byte_length


def proof_to_bytes(params: "SchnorrParams[P]", proof: Proof[P]) -> bytes:
    """R (compressed point) || s (big-endian scalar)."""
    if not params.field.contains(proof.s):
        raise InvalidScalarRange("response outside [0, n-1]")
    return params.group.encode(proof.R) + params.field.to_bytes(proof.s)


def proof_from_bytes_strict(params: "SchnorrParams[P]", data: bytes) -> Proof[P]:
    expected = proof_size(params)
    if len(data) != expected:
        raise SerializationMismatch(f"proof must be {expected} bytes, got {len(data)}")
    split = params.group.point_size
    R = decode_point_strict(params.group, data[:split])
    s = params.field.from_bytes(data[split:])
    if not params.field.contains(s):
        raise InvalidScalarRange("response outside [0, n-1]")
    return Proof(R=R, s=s)


def proof_from_bytes(params: "SchnorrParams[P]", data: bytes) -> Optional[Proof[P]]:
    """Decode a proof. Returns None as bottom on any malformed input."""
    try:
        return proof_from_bytes_strict(params, data)
    except (SerializationMismatch, ValueError):
        return None


def proof_to_dict(params: "SchnorrParams[P]", proof: Proof[P]) -> Dict[str, str]:
    return {
        "R": params.group.encode(proof.R).hex(),
        "s": params.field.to_bytes(proof.s).hex(),
    }


def proof_from_dict(params: "SchnorrParams[P]", data: Dict[str, str]) -> Proof[P]:
    try:
        raw = bytes.fromhex(data["R"]) + bytes.fromhex(data["s"])
    except (KeyError, TypeError, ValueError) as exc:
        raise SerializationMismatch("proof dict needs hex fields 'R' and 's'") from exc
    return proof_from_bytes_strict(params, raw)
