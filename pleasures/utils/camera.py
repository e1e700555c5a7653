from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..core.params import SceneParams


def _normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    if n == 0:
        return v
    return v / n


def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float] = (0.0, 1.0, 0.0)) -> np.ndarray:
    """Right-handed view matrix (camera looks down its -Z)."""
    eye = np.asarray(eye, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    f = _normalize(target - eye)
    s = _normalize(np.cross(f, np.asarray(up, dtype=np.float64)))
    if not s.any():
        # looking straight along up; any perpendicular will do
        s = _normalize(np.cross(f, np.array([0.0, 0.0, 1.0])))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[:3, 3] = -m[:3, :3] @ eye
    return m


def perspective(fovy_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    f = 1.0 / math.tan(math.radians(fovy_deg) / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = 2.0 * far * near / (near - far)
    m[3, 2] = -1.0
    return m


@dataclass
class Camera:
    position: Tuple[float, float, float] = (0.0, 200.0, 300.0)
    target: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    fov_deg: float = 60.0
    near: float = 1.0
    far: float = 5000.0

    @classmethod
    def from_scene(cls, scene: SceneParams) -> "Camera":
        return cls(scene.camera_position, scene.camera_target, scene.fov_deg)

    def mvp(self, aspect: float) -> np.ndarray:
        return perspective(self.fov_deg, aspect, self.near, self.far) @ look_at(self.position, self.target)

    def project(self, points: np.ndarray, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        """World (N, 3) points to (N, 2) pixel coordinates.

        Returns the pixels and a mask of points in front of the camera.
        """
        pts = np.asarray(points, dtype=np.float64)
        homo = np.hstack((pts, np.ones((pts.shape[0], 1))))
        clip = homo @ self.mvp(width / max(1, height)).T
        w = clip[:, 3]
        visible = w > 1e-9
        w = np.where(visible, w, 1.0)
        ndc = clip[:, :2] / w[:, None]
        px = np.empty((pts.shape[0], 2))
        px[:, 0] = (ndc[:, 0] + 1.0) * 0.5 * width
        px[:, 1] = (1.0 - ndc[:, 1]) * 0.5 * height
        return px, visible
