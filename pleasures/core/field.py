from __future__ import annotations

import logging
from typing import Iterator, List

import numpy as np

from .damping import calm_down, calm_envelope
from .noise import signed_noise
from .params import ConfigError, WaveParams
from .propagate import NoiseFn, propagate
from .rng import RandomSource
from .rows import WaveRow
from .spawner import maybe_spawn

logger = logging.getLogger(__name__)


class WaveField:
    """Stack of wave rows spanning the depth axis.

    Rows sit at z = -depth//2, -depth//2 + dy, ... below depth//2; columns at
    x = -width//2, -width//2 + dx, ... below width//2. The layout is fixed
    for the lifetime of the field.
    """

    def __init__(
        self,
        width: int,
        depth: int,
        params: WaveParams | None = None,
        rng: RandomSource | None = None,
        noise: NoiseFn = signed_noise,
    ):
        if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width <= 0:
            raise ConfigError(f"width must be a positive integer, got {width!r}")
        if isinstance(depth, bool) or not isinstance(depth, (int, np.integer)) or depth <= 0:
            raise ConfigError(f"depth must be a positive integer, got {depth!r}")
        self.width = int(width)
        self.depth = int(depth)
        self.params = params or WaveParams()
        self.rng = rng or RandomSource()
        self.noise = noise
        self.half_width = self.width >> 1
        half_depth = self.depth >> 1
        if self.half_width == 0 or half_depth == 0:
            raise ConfigError(f"field {self.width}x{self.depth} is too small to hold any rows")

        xs = np.arange(-self.half_width, self.half_width, self.params.dx, dtype=np.float64)
        zs = np.arange(-half_depth, half_depth, self.params.dy, dtype=np.float64)
        if xs.shape[0] < 2:
            raise ConfigError(f"dx={self.params.dx} leaves fewer than two columns across width {self.width}")
        self.rows: List[WaveRow] = [WaveRow(xs, z) for z in zs]
        self.envelope = calm_envelope(xs, self.half_width, self.params.calm_wave_level)
        self.ticks = 0
        self.last_t = 0.0
        logger.info("Wave field %dx%d: %d rows x %d columns", self.width, self.depth, len(self.rows), xs.shape[0])

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[WaveRow]:
        return iter(self.rows)

    @property
    def columns(self) -> int:
        return len(self.rows[0])

    def tick(self, t: float) -> int:
        """Advance every row one step at elapsed time ``t``; returns new spawns."""
        spawned = 0
        for row in self.rows:
            if maybe_spawn(row, self.rng, self.params):
                spawned += 1
            propagate(row, self.rng, self.params, t, self.noise)
            calm_down(row, self.envelope)
        self.ticks += 1
        self.last_t = t
        return spawned

    def polylines(self) -> List[np.ndarray]:
        return [row.vertices() for row in self.rows]

    def heights(self) -> np.ndarray:
        """(rows, columns) matrix of calm heights."""
        return np.vstack([row.calm for row in self.rows])

    def stats(self) -> dict:
        calm = self.heights()
        return {
            "ticks": self.ticks,
            "t": self.last_t,
            "rows": len(self.rows),
            "columns": self.columns,
            "queued": sum(len(row.queue) for row in self.rows),
            "peak": float(calm.max()),
        }
