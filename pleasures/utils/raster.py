from __future__ import annotations

import functools
import logging
from typing import Iterable, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..core.params import SceneParams
from .camera import Camera

logger = logging.getLogger(__name__)

TITLE = "JOY DIVISION"
SUBTITLE = "UNKNOWN PLEASURES"
FONT_CANDIDATES = ("Helvetica.ttc", "Helvetica.ttf", "Arial.ttf", "DejaVuSans.ttf")


@functools.lru_cache(maxsize=8)
def load_font(size: int) -> ImageFont.ImageFont:
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.debug("No TrueType font found, using PIL default at %dpx", size)
    return ImageFont.load_default(size)


def depth_order(polylines: Sequence[np.ndarray], eye: Sequence[float]) -> list:
    """Indices of rows sorted farthest-first from ``eye``."""
    eye = np.asarray(eye, dtype=np.float64)
    dist = [float(np.linalg.norm(pl[:, [0, 2]].mean(axis=0) - eye[[0, 2]])) for pl in polylines]
    return sorted(range(len(polylines)), key=lambda i: -dist[i])


def draw_titles(img: Image.Image, scene: SceneParams) -> None:
    d = ImageDraw.Draw(img)
    w, h = img.size
    d.text((w * 0.08, h * 0.06), TITLE, fill=scene.foreground, font=load_font(scene.large_font_size))
    d.text((w * 0.08, h * 0.90), SUBTITLE, fill=scene.foreground, font=load_font(scene.small_font_size))


def render_polylines(
    polylines: Iterable[np.ndarray],
    camera: Camera,
    size: Tuple[int, int],
    scene: SceneParams | None = None,
) -> Image.Image:
    """Draw row traces back to front; each row hides what lies behind it."""
    scene = scene or SceneParams()
    w, h = size
    img = Image.new("RGB", (max(1, int(w)), max(1, int(h))), color=scene.background)
    d = ImageDraw.Draw(img)
    polylines = list(polylines)
    for i in depth_order(polylines, camera.position):
        px, visible = camera.project(polylines[i], w, h)
        px = px[visible]
        if px.shape[0] < 2:
            continue
        pts = [tuple(p) for p in px.tolist()]
        # mask everything below the trace so nearer rows occlude farther ones
        d.polygon(pts + [(pts[-1][0], h), (pts[0][0], h)], fill=scene.background)
        d.line(pts, fill=scene.foreground, width=scene.line_width)
    if scene.show_titles:
        draw_titles(img, scene)
    return img


def render_frame(field, camera: Camera, size: Tuple[int, int], scene: SceneParams | None = None) -> Image.Image:
    return render_polylines(field.polylines(), camera, size, scene)
