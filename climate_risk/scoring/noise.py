"""
Measurement-noise source for the factor scorer.

Each draw is uniform on [-amplitude/2, +amplitude/2] (±6 with the default
amplitude of 12). The underlying generator is injected so tests and portfolio
runs can seed it per assessment instead of sharing process-global state.
"""
from __future__ import annotations

import random
from typing import Optional, Protocol


class UniformSource(Protocol):
    def random(self) -> float: ...


DEFAULT_AMPLITUDE = 12.0


class NoiseSource:
    def __init__(self, rng: Optional[UniformSource] = None, amplitude: float = DEFAULT_AMPLITUDE):
        self.rng = rng if rng is not None else random.Random()
        self.amplitude = amplitude

    @classmethod
    def seeded(cls, seed: int, amplitude: float = DEFAULT_AMPLITUDE) -> "NoiseSource":
        return cls(random.Random(seed), amplitude)

    def __call__(self) -> float:
        return (self.rng.random() - 0.5) * self.amplitude


class ZeroNoise:
    """Noise-free source — scores equal base + modifier exactly."""

    def __call__(self) -> float:
        return 0.0
