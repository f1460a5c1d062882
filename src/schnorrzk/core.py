from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar, Union

from .codec import encode_challenge_transcript
from .errors import InvalidPoint, InvalidScalarRange, RandomnessUnavailable
from .field import ScalarField
from .interfaces import GroupOps
from .transcript import Proof, proof_from_bytes

P = TypeVar("P")

logger = logging.getLogger(__name__)

DEFAULT_TAG = b"schnorrzk/challenge/v1"

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class SchnorrParams(Generic[P]):
    """Read-only protocol configuration shared by prover and verifier.

    bind_public_key: hash X into the challenge (ZKP-style transcript). When
    False the challenge covers only (R, m), matching plain message-bound
    signatures. Binding is strictly safer and is the default.
    """

    group: GroupOps[P]
    field: ScalarField
    RO: Callable[[bytes], int]  # H(transcript) -> e in [0, n-1]
    bind_public_key: bool = True
    tag: bytes = DEFAULT_TAG


def _as_bytes(context: BytesLike) -> bytes:
    if isinstance(context, (bytes, bytearray, memoryview)):
        return bytes(context)
    raise TypeError(f"context must be bytes, not {type(context).__name__}")


def challenge(params: SchnorrParams[P], R: P, X: P, context: BytesLike = b"") -> int:
    """Fiat-Shamir challenge e = H(R, X, m) mod n."""
    transcript = encode_challenge_transcript(
        params.group,
        params.tag,
        R,
        X if params.bind_public_key else None,
        _as_bytes(context),
    )
    return params.RO(transcript)


def derive_public_key(params: SchnorrParams[P], secret_key: int) -> P:
    """X := x * G for x in [1, n-1]."""
    if not params.field.is_secret(secret_key):
        raise InvalidScalarRange("secret key must lie in [1, n-1]")
    return params.group.scalar_mul(params.group.generator(), secret_key)


def generate_keypair(params: SchnorrParams[P], sample: Callable[[], int]) -> Tuple[int, P]:
    secret_key = sample()
    return secret_key, derive_public_key(params, secret_key)


def prove(
    params: SchnorrParams[P],
    secret_key: int,
    context: BytesLike = b"",
    *,
    sample: Callable[[], int],
    public_key: Optional[P] = None,
) -> Tuple[P, Proof[P]]:
    """Produce (X, (R, s)) proving knowledge of x with X = x * G.

      r <-$ [1, n-1]; R := r * G
      e := H(R, X, m)
      s := r + e * x mod n

    `public_key` may be passed to skip recomputing X on repeated use. It is
    only checked for subgroup membership, not against x * G; the caller must
    pass the key that belongs to `secret_key`, otherwise the proof will not
    verify under either key.
    """
    group = params.group
    field = params.field
    m = _as_bytes(context)

    if public_key is None:
        X = derive_public_key(params, secret_key)
    else:
        if not field.is_secret(secret_key):
            raise InvalidScalarRange("secret key must lie in [1, n-1]")
        if not group.is_valid_member(public_key):
            raise InvalidPoint("public key is not a valid subgroup member")
        X = public_key

    nonce = sample()
    if not field.is_secret(nonce):
        raise RandomnessUnavailable("ephemeral secret must lie in [1, n-1]")
    R = group.scalar_mul(group.generator(), nonce)
    e = challenge(params, R, X, m)
    s = field.add(nonce, field.mul(e, secret_key))
    del nonce

    return X, Proof(R=R, s=s)


def sign(
    params: SchnorrParams[P],
    secret_key: int,
    message: BytesLike,
    *,
    sample: Callable[[], int],
    public_key: Optional[P] = None,
) -> Tuple[P, Proof[P]]:
    """Schnorr signature: the same proof bound to `message`."""
    return prove(params, secret_key, message, sample=sample, public_key=public_key)


def verify(
    params: SchnorrParams[P],
    public_key: P,
    proof: Proof[P],
    context: BytesLike = b"",
) -> bool:
    """Accept iff s * G == R + e * X with e recomputed from (R, X, m).

    Adversarial input (bad points, out-of-range s) yields False. Only
    programmer errors such as a missing proof or non-bytes context raise.
    """
    if proof is None or public_key is None:
        raise TypeError("public key and proof are required")
    m = _as_bytes(context)
    group = params.group

    if not group.is_valid_member(public_key):
        logger.debug("rejecting proof: public key is not a subgroup member")
        return False
    if not group.is_valid_member(proof.R):
        logger.debug("rejecting proof: commitment is not a subgroup member")
        return False
    if not params.field.contains(proof.s):
        logger.debug("rejecting proof: response outside scalar range")
        return False

    e = challenge(params, proof.R, public_key, m)
    left = group.scalar_mul(group.generator(), proof.s)
    right = group.add(proof.R, group.scalar_mul(public_key, e))
    ok = group.equals(left, right)
    if not ok:
        logger.debug("rejecting proof: verification equation does not hold")
    return ok


def verify_bytes(
    params: SchnorrParams[P],
    public_key: bytes,
    proof: bytes,
    context: BytesLike = b"",
) -> bool:
    """Decode-and-verify for wire input. Malformed encodings yield False."""
    X = params.group.decode(public_key)
    if X is None:
        logger.debug("rejecting proof: public key encoding is invalid")
        return False
    decoded = proof_from_bytes(params, proof)
    if decoded is None:
        logger.debug("rejecting proof: proof encoding is invalid")
        return False
    return verify(params, X, decoded, context)


def verify_many(
    params: SchnorrParams[P],
    items: Iterable[Tuple[P, Proof[P], BytesLike]],
    *,
    max_workers: Optional[int] = None,
) -> List[bool]:
    """Verify independent (X, proof, context) triples, in input order.

    With `max_workers` set, the checks run on a thread pool; they share no
    mutable state.
    """
    batch = list(items)
    if not max_workers or max_workers <= 1:
        return [verify(params, X, proof, m) for X, proof, m in batch]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda item: verify(params, *item), batch))
