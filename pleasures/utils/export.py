from __future__ import annotations

import logging
import os
from typing import Callable, Optional, Tuple

import numpy as np

from ..core.field import WaveField
from ..core.params import ConfigError, SceneParams
from .camera import Camera
from .raster import render_frame

logger = logging.getLogger(__name__)

FORMATS = {".gif": "GIF", ".mp4": "MP4"}


def export_format(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext not in FORMATS:
        raise ConfigError(f"cannot export {path!r}: expected one of {sorted(FORMATS)}")
    return FORMATS[ext]


def render_frames(
    field: WaveField,
    frames: int,
    fps: int,
    size: Tuple[int, int],
    scene: SceneParams | None = None,
    warmup: int = 0,
    progress: Optional[Callable[[int], None]] = None,
) -> list:
    """Run ``field`` on a fixed timeline (t = i / fps) and rasterize each tick."""
    if frames <= 0:
        raise ConfigError(f"frames must be positive, got {frames}")
    if fps <= 0:
        raise ConfigError(f"fps must be positive, got {fps}")
    if warmup < 0:
        raise ConfigError(f"warmup must not be negative, got {warmup}")
    scene = scene or SceneParams()
    camera = Camera.from_scene(scene)
    dt = 1.0 / fps
    for i in range(warmup):
        field.tick(i * dt)
    out = []
    for i in range(frames):
        field.tick((warmup + i) * dt)
        out.append(np.asarray(render_frame(field, camera, size, scene).convert("RGB")))
        if progress is not None:
            progress(int((i + 1) * 100 / frames))
    return out


def export_animation(
    path: str,
    field: WaveField,
    frames: int = 120,
    fps: int = 30,
    size: Tuple[int, int] = (800, 800),
    scene: SceneParams | None = None,
    warmup: int = 0,
    progress: Optional[Callable[[int], None]] = None,
) -> str:
    fmt = export_format(path)
    out = render_frames(field, frames, fps, size, scene, warmup, progress)
    logger.info("Writing %d frames to %s (%s, %d fps)", len(out), path, fmt, fps)
    if fmt == "GIF":
        import imageio.v3 as iio
        iio.imwrite(path, np.stack(out), plugin="pillow", extension=".gif",
                    duration=max(10, int(1000 / fps)), loop=0)
    else:
        import imageio
        writer = imageio.get_writer(
            path,
            fps=fps,
            codec='libx264',
            quality=8,
            ffmpeg_log_level='error',
            pixelformat='yuv420p',
            macro_block_size=1,
        )
        try:
            for fr in out:
                writer.append_data(fr)
        finally:
            writer.close()
    return path
