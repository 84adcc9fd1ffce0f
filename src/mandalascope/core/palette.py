"""
Analogous colour palettes.

The library is built once at startup and never changes; regeneration
only picks a different member.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Palette:
    """Ordered analogous hues in degrees."""

    hues: tuple[float, ...]

    def __post_init__(self):
        if not self.hues:
            raise ValueError("Palette needs at least one hue")

    def hue(self, index: int) -> float:
        """Hue for a layer index, cycling through the palette."""
        return self.hues[index % len(self.hues)]

    def __len__(self) -> int:
        return len(self.hues)


PaletteLibrary = tuple[Palette, ...]


def make_palette(rng: np.random.Generator) -> Palette:
    """Step 3-6 hues away from a random base by one 15-35 degree increment."""
    base = rng.uniform(0, 360)
    n_hues = int(rng.integers(3, 7))
    step = rng.uniform(15, 35)
    return Palette(tuple(float((base + j * step) % 360) for j in range(n_hues)))


def build_library(rng: np.random.Generator, count: int = 1000) -> PaletteLibrary:
    """
    Precompute a fixed set of palettes.

    Args:
        rng: Seeded numpy generator.
        count: Number of palettes.

    Returns:
        Tuple of exactly ``count`` palettes.
    """
    return tuple(make_palette(rng) for _ in range(count))


def select_random(library: PaletteLibrary, rng: np.random.Generator) -> Palette:
    """Uniformly pick one palette from the library."""
    return library[int(rng.integers(0, len(library)))]
