"""Typed failures raised by the Schnorr proof core."""

from __future__ import annotations


class SchnorrError(Exception):
    """Base class for every error raised by the proof core."""


class RandomnessUnavailable(SchnorrError):
    """The randomness source could not supply an ephemeral secret.

    Fatal to the current proof attempt only; the caller may retry.
    """


class InvalidPoint(SchnorrError, ValueError):
    """A point is off the curve, outside the prime-order subgroup, or the identity."""


class InvalidScalarRange(SchnorrError, ValueError):
    """A secret key or response lies outside its permitted range."""


class SerializationMismatch(SchnorrError, ValueError):
    """An encoded proof, point or scalar does not match the fixed wire layout."""


__all__ = [
    "SchnorrError",
    "RandomnessUnavailable",
    "InvalidPoint",
    "InvalidScalarRange",
    "SerializationMismatch",
]
