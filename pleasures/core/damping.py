from __future__ import annotations

import numpy as np

from .rows import WaveRow


def calm_envelope(xs: np.ndarray, half_width: float, level: float) -> np.ndarray:
    """1.0 at x=0, falling to 0 at x=+-half_width, sharpened by ``level``."""
    base = (np.cos(np.asarray(xs, dtype=np.float64) * np.pi / half_width) + 1.0) * 0.5
    return np.power(base, level)


def calm_down(row: WaveRow, envelope: np.ndarray) -> None:
    row.calm = row.stormy * envelope
