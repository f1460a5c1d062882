"""Non-interactive Schnorr proofs of knowledge and signatures (Fiat-Shamir)."""

from .core import (
    DEFAULT_TAG,
    SchnorrParams,
    challenge,
    derive_public_key,
    generate_keypair,
    prove,
    sign,
    verify,
    verify_bytes,
    verify_many,
)
from .errors import (
    InvalidPoint,
    InvalidScalarRange,
    RandomnessUnavailable,
    SchnorrError,
    SerializationMismatch,
)
from .field import ScalarField
from .interfaces import GroupOps, RandomSource
from .rng import SeededRandomSource, SystemRandomSource, make_nonce_sampler
from .transcript import (
    Proof,
    proof_from_bytes,
    proof_from_dict,
    proof_to_bytes,
    proof_to_dict,
)

__all__ = [
    "DEFAULT_TAG",
    "GroupOps",
    "InvalidPoint",
    "InvalidScalarRange",
    "Proof",
    "RandomSource",
    "RandomnessUnavailable",
    "ScalarField",
    "SchnorrError",
    "SchnorrParams",
    "SeededRandomSource",
    "SerializationMismatch",
    "SystemRandomSource",
    "challenge",
    "derive_public_key",
    "generate_keypair",
    "make_nonce_sampler",
    "proof_from_bytes",
    "proof_from_dict",
    "proof_to_bytes",
    "proof_to_dict",
    "prove",
    "sign",
    "verify",
    "verify_bytes",
    "verify_many",
]
