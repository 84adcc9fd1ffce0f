"""
Seeded coherent noise.

Thin wrapper over Perlin noise from the ``noise`` package, folded into
[0, 1] so it can drive radius wobble directly.
"""

import noise

# pnoise1 permutation bases wrap at 256
_BASE_PERIOD = 256


class CoherentNoise:
    """
    Smooth 1-D noise with a reseedable permutation base.

    Nearby inputs give nearby outputs, so advancing the input by a small
    step per frame produces breathing motion rather than jitter.
    """

    def __init__(self, seed: int = 0, octaves: int = 4, persistence: float = 0.5):
        self.octaves = octaves
        self.persistence = persistence
        self.reseed(seed)

    def reseed(self, seed: int):
        self.seed = int(seed)
        self.base = self.seed % _BASE_PERIOD

    def __call__(self, x: float) -> float:
        value = noise.pnoise1(
            x,
            octaves=self.octaves,
            persistence=self.persistence,
            base=self.base,
        )
        return min(1.0, max(0.0, value * 0.5 + 0.5))
