"""Seeded Mulberry32 pseudorandom stream."""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_SCALE = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class Mulberry32:
    """Deterministic float stream in [0, 1) from a 32-bit integer seed.

    Two instances built from the same seed emit identical sequences. Seeds are
    reduced modulo 2**32, so zero and negative seeds are valid.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._state = self.seed & _MASK

    @property
    def state(self) -> int:
        return self._state

    def __call__(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK
        state = self._state
        t = _imul(state ^ (state >> 15), state | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK) ^ t
        return (t ^ (t >> 14)) / _SCALE


def create_prng(seed: int) -> Mulberry32:
    return Mulberry32(seed)
