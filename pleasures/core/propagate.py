from __future__ import annotations

from typing import Callable

import numpy as np

from .noise import signed_noise
from .params import WaveParams
from .rng import RandomSource
from .rows import WaveRow

NoiseFn = Callable[[np.ndarray, float, float], np.ndarray]


def inject_edge(row: WaveRow, rng: RandomSource, params: WaveParams) -> float:
    # second bound is the "std" knob used as the uniform upper bound
    value = rng.uniform(params.small_wave_height_mean, params.small_wave_height_std)
    if row.queue:
        value += row.queue.popleft()
    return value


def propagate(row: WaveRow, rng: RandomSource, params: WaveParams, t: float,
              noise: NoiseFn = signed_noise) -> None:
    """Advance ``row.stormy`` one tick.

    Column j > 0 blends its own height with column j-1 of the previous
    tick, so a disturbance at column 0 travels one column per tick
    towards the far edge. The previous tick is read from a snapshot,
    never from values written this tick.
    """
    old = row.stormy
    m = params.wave_momentum
    new = np.empty_like(old)
    new[1:] = old[1:] * m + old[:-1] * (1.0 - m)
    if params.perlin_noise_magnitude:
        new[1:] += noise(row.xs[1:], row.z, t) * params.perlin_noise_magnitude
    new[0] = inject_edge(row, rng, params)
    row.stormy = new
