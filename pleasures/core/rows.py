from __future__ import annotations

from collections import deque
from typing import Deque

import numpy as np

from .params import ConfigError


class WaveRow:
    """One trace across the width axis at a fixed depth ``z``.

    ``stormy`` holds raw heights, ``calm`` the damped heights shown on
    screen, ``queue`` the pending big-wave offsets waiting at column 0.
    """

    def __init__(self, xs: np.ndarray, z: float, stormy: np.ndarray | None = None):
        self.xs = np.asarray(xs, dtype=np.float64)
        self.z = float(z)
        n = self.xs.shape[0]
        if stormy is None:
            stormy = np.zeros(n, dtype=np.float64)
        self.stormy = np.array(stormy, dtype=np.float64)
        self.calm = np.zeros(n, dtype=np.float64)
        if self.stormy.shape != self.calm.shape:
            raise ConfigError(f"row at z={self.z}: {self.stormy.shape[0]} heights for {n} columns")
        self.queue: Deque[float] = deque()

    def __len__(self) -> int:
        return self.xs.shape[0]

    def __repr__(self) -> str:
        return f"WaveRow(z={self.z}, n={len(self)}, queued={len(self.queue)})"

    def vertices(self) -> np.ndarray:
        """(N, 3) array of (x, calm, z) for line-strip rendering."""
        return np.column_stack((self.xs, self.calm, np.full_like(self.xs, self.z)))
