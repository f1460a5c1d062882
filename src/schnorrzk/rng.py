"""Randomness sources for ephemeral secrets."""

from __future__ import annotations

import random
import secrets
import threading
from typing import Callable, Optional

from .errors import RandomnessUnavailable
from .interfaces import RandomSource


class SystemRandomSource:
    """OS CSPRNG via `secrets`; safe to share between threads."""

    def randbelow(self, upper: int) -> int:
        return secrets.randbelow(upper)


class SeededRandomSource:
    """Deterministic source for tests and reproducible benchmarks.

    Not cryptographically secure. Never use it to produce real proofs.
    """

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def randbelow(self, upper: int) -> int:
        with self._lock:
            return self._rng.randrange(upper)


def make_nonce_sampler(q: int, source: Optional[RandomSource] = None) -> Callable[[], int]:
    """Return a sampler drawing uniformly from [1, q-1]."""
    src = source if source is not None else SystemRandomSource()

    def sample() -> int:
        try:
            value = src.randbelow(q - 1) + 1
        except (OSError, NotImplementedError) as exc:
            raise RandomnessUnavailable("randomness source failed") from exc
        if not 0 < value < q:
            raise RandomnessUnavailable("randomness source returned an out-of-range value")
        return value

    return sample
