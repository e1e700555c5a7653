from __future__ import annotations

from typing import List

import numpy as np


class RandomSource:
    """Single generator shared by every sampling call of one field.

    Seeded once from OS entropy; there is no reseeding. Pass a
    ``numpy.random.Generator`` to pin the stream (tests do this).
    """

    def __init__(self, generator: np.random.Generator | None = None):
        if generator is None:
            self.seed_seq = np.random.SeedSequence()
            generator = np.random.default_rng(self.seed_seq)
        else:
            self.seed_seq = None
        self.gen = generator

    def bernoulli(self, p: float) -> bool:
        return bool(self.gen.random() < p)

    def gaussian(self, mean: float, stddev: float) -> float:
        return float(self.gen.normal(mean, stddev))

    def uniform(self, low: float, high: float) -> float:
        return float(self.gen.uniform(low, high))

    def spawn(self, n: int) -> List["RandomSource"]:
        """Independent children, one per worker thread."""
        return [RandomSource(np.random.Generator(bg)) for bg in self.gen.bit_generator.spawn(n)]
