from __future__ import annotations

import pytest

from instantiations.secp256k1 import make_secp256k1_params
from schnorrzk.core import prove
from schnorrzk.errors import RandomnessUnavailable
from schnorrzk.rng import SeededRandomSource, SystemRandomSource, make_nonce_sampler


class _FixedSource:
    def __init__(self, value: int) -> None:
        self.value = value

    def randbelow(self, upper: int) -> int:
        return self.value


class _BrokenSource:
    def randbelow(self, upper: int) -> int:
        raise OSError("entropy pool unavailable")


def test_sampler_never_returns_zero():
    assert make_nonce_sampler(101, _FixedSource(0))() == 1
    assert make_nonce_sampler(101, _FixedSource(99))() == 100


def test_sampler_rejects_out_of_range_draws():
    with pytest.raises(RandomnessUnavailable):
        make_nonce_sampler(101, _FixedSource(100))()


def test_broken_source_raises_randomness_unavailable():
    params, sample = make_secp256k1_params(source=_BrokenSource())
    with pytest.raises(RandomnessUnavailable):
        sample()
    with pytest.raises(RandomnessUnavailable):
        prove(params, 12345, b"", sample=sample)


def test_prove_rejects_zero_nonce_from_custom_sampler():
    params, _ = make_secp256k1_params()
    with pytest.raises(RandomnessUnavailable):
        prove(params, 12345, b"", sample=lambda: 0)


def test_seeded_source_is_deterministic():
    a = SeededRandomSource(5)
    b = SeededRandomSource(5)
    assert [a.randbelow(1000) for _ in range(5)] == [b.randbelow(1000) for _ in range(5)]


def test_system_source_stays_below_bound():
    source = SystemRandomSource()
    assert all(0 <= source.randbelow(7) < 7 for _ in range(50))
