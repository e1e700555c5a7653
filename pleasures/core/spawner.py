from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .params import WaveParams
from .rng import RandomSource
from .rows import WaveRow

logger = logging.getLogger(__name__)


def sample_nonnegative(rng: RandomSource, mean: float, std: float) -> float:
    """Truncated normal by rejection: redraw until the value is >= 0."""
    value = rng.gaussian(mean, std)
    while value < 0:
        value = rng.gaussian(mean, std)
    return value


def triangle_profile(width: int, height: float) -> np.ndarray:
    """Ramp up over ``width`` steps, peak at ``height``, ramp back down.

    Length is ``2 * width + 1``; width 3, height 6 gives [0, 2, 4, 6, 4, 2, 0].
    """
    width = max(1, int(width))
    ramp = height / width * np.arange(width, dtype=np.float64)
    return np.concatenate((ramp, [float(height)], ramp[::-1]))


def interfere(prev: Sequence[float], new: np.ndarray) -> np.ndarray:
    """Add the old queue onto the head of the new profile.

    Old values past the end of the new profile are dropped.
    """
    out = np.array(new, dtype=np.float64)
    k = min(len(prev), out.shape[0])
    if k:
        out[:k] += np.asarray(prev, dtype=np.float64)[:k]
    return out


def maybe_spawn(row: WaveRow, rng: RandomSource, params: WaveParams) -> bool:
    if not rng.bernoulli(params.wave_occur_prob):
        return False
    width = sample_nonnegative(rng, params.big_wave_width_mean, params.big_wave_width_std)
    height = sample_nonnegative(rng, params.big_wave_height_mean, params.big_wave_height_std)
    prev = list(row.queue)
    row.queue.clear()
    row.queue.extend(interfere(prev, triangle_profile(int(width), height)).tolist())
    logger.debug("wave at z=%.1f width=%d height=%.2f (queued %d)", row.z, max(1, int(width)), height, len(row.queue))
    return True
