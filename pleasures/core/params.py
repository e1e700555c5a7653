from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Tuple

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when parameters or field geometry are unusable."""


def _knob(default: float, description: str, minimum: float | None = None,
          maximum: float | None = None, key: str = "", units: str = ""):
    return field(
        default=default,
        metadata={
            "key": key,
            "min": minimum,
            "max": maximum,
            "units": units,
            "description": description,
        },
    )


@dataclass(frozen=True)
class WaveParams:
    """Tunable knobs of the wave engine.

    Field names are snake_case; the camelCase ``key`` in each field's
    metadata is the name used in parameter files.
    """

    dy: float = _knob(2.0, "Row spacing along the depth axis", 1e-6, None, "dy", "world units")
    dx: float = _knob(0.5, "Column spacing along the width axis", 1e-6, None, "dx", "world units")
    wave_occur_prob: float = _knob(
        0.02, "Chance per row per tick that a big wave is spawned", 0.0, 1.0, "waveOccurProb"
    )
    big_wave_width_mean: float = _knob(
        10.0, "Mean half-width of a big wave", None, None, "bigWaveWidthMean", "ticks"
    )
    big_wave_width_std: float = _knob(
        10.0, "Std deviation of big wave half-width", 0.0, None, "bigWaveWidthStd", "ticks"
    )
    big_wave_height_mean: float = _knob(
        10.0, "Mean peak height of a big wave", None, None, "bigWaveHeightMean", "world units"
    )
    big_wave_height_std: float = _knob(
        10.0, "Std deviation of big wave height", 0.0, None, "bigWaveHeightStd", "world units"
    )
    small_wave_height_mean: float = _knob(
        0.0, "Lower bound of the ripple injected every tick", None, None, "smallWaveHeightMean", "world units"
    )
    small_wave_height_std: float = _knob(
        5.0, "Upper bound of the ripple injected every tick", None, None, "smallWaveHeightStd", "world units"
    )
    wave_momentum: float = _knob(
        0.01, "Weight a column keeps of its own height (0 = pure shift)", 0.0, 1.0, "waveMomentum"
    )
    perlin_noise_magnitude: float = _knob(
        0.1, "Scale of the coherent noise added to every column", 0.0, None, "perlinNoiseMagnitude", "world units"
    )
    calm_wave_level: float = _knob(
        3.0, "Exponent of the edge damping envelope", 0.0, None, "calmWaveLevel"
    )

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{f.metadata['key']} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"{f.metadata['key']} must be finite, got {value!r}")
            lo, hi = f.metadata["min"], f.metadata["max"]
            if lo is not None and value < lo:
                raise ConfigError(f"{f.metadata['key']}={value} is below the minimum {lo}")
            if hi is not None and value > hi:
                raise ConfigError(f"{f.metadata['key']}={value} is above the maximum {hi}")
        # a degenerate distribution with negative mean never passes rejection
        for name, mean, std in (
            ("bigWaveWidth", self.big_wave_width_mean, self.big_wave_width_std),
            ("bigWaveHeight", self.big_wave_height_mean, self.big_wave_height_std),
        ):
            if std == 0 and mean < 0:
                raise ConfigError(f"{name}Mean={mean} with zero std can never be sampled non-negative")
        # the edge ripple is drawn uniformly between these two knobs
        if self.small_wave_height_mean > self.small_wave_height_std:
            raise ConfigError(
                f"smallWaveHeightMean={self.small_wave_height_mean} exceeds "
                f"smallWaveHeightStd={self.small_wave_height_std}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "WaveParams":
        """Build from camelCase (file) or snake_case (Python) keys."""
        return cls(**_translate_keys(cls, values))

    def to_mapping(self) -> Dict[str, float]:
        return {f.metadata["key"]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def schema(cls) -> Dict[str, Dict[str, Any]]:
        out = {}
        for f in fields(cls):
            out[f.metadata["key"]] = {
                "type": "float",
                "min": f.metadata["min"],
                "max": f.metadata["max"],
                "default": f.default,
                "units": f.metadata["units"],
                "description": f.metadata["description"],
            }
        return out


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and math.isfinite(value)


@dataclass(frozen=True)
class SceneParams:
    camera_position: Tuple[float, float, float] = field(
        default=(0.0, 200.0, 300.0), metadata={"key": "cameraPosition", "kind": "vector"})
    camera_target: Tuple[float, float, float] = field(
        default=(0.0, 0.0, 0.0), metadata={"key": "cameraTarget", "kind": "vector"})
    fov_deg: float = field(default=60.0, metadata={"key": "fov", "kind": "number"})
    large_font_size: int = field(default=50, metadata={"key": "largeFontSize", "kind": "int"})
    small_font_size: int = field(default=25, metadata={"key": "smallFontSize", "kind": "int"})
    line_width: int = field(default=1, metadata={"key": "lineWidth", "kind": "int"})
    background: Tuple[int, int, int] = field(default=(0, 0, 0), metadata={"key": "background", "kind": "color"})
    foreground: Tuple[int, int, int] = field(
        default=(255, 255, 255), metadata={"key": "foreground", "kind": "color"})
    show_titles: bool = field(default=True, metadata={"key": "showTitles", "kind": "bool"})
    fps: int = field(default=60, metadata={"key": "fps", "kind": "int"})

    def __post_init__(self):
        for f in fields(self):
            key, kind, value = f.metadata["key"], f.metadata["kind"], getattr(self, f.name)
            if kind in ("vector", "color"):
                if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)) or len(value) != 3:
                    raise ConfigError(f"{key} needs 3 components, got {value!r}")
                if not all(_is_number(c) for c in value):
                    raise ConfigError(f"{key} components must be finite numbers, got {value!r}")
                if kind == "color" and not all(isinstance(c, int) and 0 <= c <= 255 for c in value):
                    raise ConfigError(f"{key} components must be integers in [0, 255], got {value!r}")
                # JSON hands back lists; keep the vectors hashable
                object.__setattr__(self, f.name, tuple(value))
            elif kind == "number" and not _is_number(value):
                raise ConfigError(f"{key} must be a number, got {value!r}")
            elif kind == "int" and (isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigError(f"{key} must be an integer, got {value!r}")
            elif kind == "bool" and not isinstance(value, bool):
                raise ConfigError(f"{key} must be true or false, got {value!r}")
        if not 0.0 < self.fov_deg < 180.0:
            raise ConfigError(f"fov={self.fov_deg} must lie in (0, 180)")
        if self.fps <= 0:
            raise ConfigError(f"fps={self.fps} must be positive")
        if self.line_width < 1:
            raise ConfigError(f"lineWidth={self.line_width} must be at least 1")
        if self.large_font_size < 1 or self.small_font_size < 1:
            raise ConfigError("font sizes must be at least 1")
        if self.camera_position == self.camera_target:
            raise ConfigError("cameraPosition and cameraTarget must differ")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SceneParams":
        return cls(**_translate_keys(cls, values))

    def to_mapping(self) -> Dict[str, Any]:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.metadata["key"]] = list(value) if isinstance(value, tuple) else value
        return out


def _translate_keys(cls, values: Mapping[str, Any]) -> Dict[str, Any]:
    by_key = {f.metadata["key"]: f.name for f in fields(cls)}
    by_name = {f.name for f in fields(cls)}
    kwargs = {}
    for k, v in values.items():
        if k in by_key:
            kwargs[by_key[k]] = v
        elif k in by_name:
            kwargs[k] = v
        else:
            raise ConfigError(f"unknown {cls.__name__} key {k!r}")
    return kwargs


def load_params(path: str) -> Tuple[WaveParams, SceneParams]:
    """Read a JSON parameter file with optional "wave" and "scene" sections."""
    if not os.path.exists(path):
        raise ConfigError(f"parameter file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be an object")
    unknown = set(data) - {"wave", "scene"}
    if unknown:
        raise ConfigError(f"{path}: unknown sections {sorted(unknown)}")
    wave = WaveParams.from_mapping(data.get("wave", {}))
    scene = SceneParams.from_mapping(data.get("scene", {}))
    logger.info("Loaded parameters from %s", path)
    return wave, scene


def save_params(path: str, wave: WaveParams, scene: SceneParams | None = None) -> None:
    data = {"wave": wave.to_mapping(), "scene": (scene or SceneParams()).to_mapping()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)
    logger.info("Saved parameters to %s", path)

