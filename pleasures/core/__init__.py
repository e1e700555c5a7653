"""Wave engine for Unknown Pleasures.

Modules:
- params: engine and scene parameters, parameter files
- rng: shared random source
- noise: coherent gradient noise
- rows: per-row wave state
- spawner: big-wave spawning and interference
- propagate: per-tick shift/smoothing along a row
- damping: edge damping envelope
- field: the stack of rows and one simulation tick
"""

from .field import WaveField
from .params import ConfigError, SceneParams, WaveParams, load_params, save_params
from .rng import RandomSource

__all__ = ["WaveField", "WaveParams", "SceneParams", "ConfigError", "RandomSource", "load_params", "save_params"]
