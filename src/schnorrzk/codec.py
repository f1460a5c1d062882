from __future__ import annotations

from typing import Optional, TypeVar

from .errors import InvalidPoint
from .interfaces import GroupOps

P = TypeVar("P")

LENGTH_PREFIX_BYTES = 8


def encode_point_for_transcript(group: GroupOps[P], point: P) -> bytes:
    """Fixed-width point encoding used inside the challenge hash.

    The identity has no wire form, so it hashes as an all-zero block of the
    same width. No valid compressed point starts with 0x00.
    """
    if group.equals(point, group.identity()):
        return b"\x00" * group.point_size
    return group.encode(point)


def encode_challenge_transcript(
    group: GroupOps[P],
    tag: bytes,
    R: P,
    X: Optional[P],
    message: bytes,
) -> bytes:
    """Unambiguous byte layout hashed into the Fiat-Shamir challenge.

    len(tag) (1 byte) || tag || R || [X] || len(m) (8 bytes BE) || m

    Every point field is fixed width, and the variable-length fields carry a
    length prefix, so no two distinct inputs share an encoding.
    """
    if len(tag) > 255:
        raise ValueError("domain tag longer than 255 bytes")
    out = bytearray()
    out += bytes([len(tag)])
    out += tag
    out += encode_point_for_transcript(group, R)
    if X is not None:
        out += encode_point_for_transcript(group, X)
    out += len(message).to_bytes(LENGTH_PREFIX_BYTES, "big")
    out += message
    return bytes(out)


def decode_point_strict(group: GroupOps[P], data: bytes) -> P:
    point = group.decode(data)
    if point is None:
        raise InvalidPoint("point encoding is malformed or not in the subgroup")
    return point
