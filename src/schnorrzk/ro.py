from __future__ import annotations

from hashlib import sha256

from .field import ScalarField


def ro_sha256(transcript: bytes, field: ScalarField) -> int:
    """Hash a challenge transcript to a scalar in [0, q-1]."""
    h = int.from_bytes(sha256(transcript).digest(), "big")
    return field.reduce(h)
