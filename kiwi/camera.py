"""A perspective camera producing view and projection matrices."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

FOV_Y_RADS = math.pi / 2

OPENGL_TO_WGPU_MATRIX = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.5, 0.5],
        [0.0, 0.0, 0.0, 1.0],
    ]
)
OPENGL_TO_WGPU_MATRIX.setflags(write=False)

_UP = np.array([0.0, 1.0, 0.0])


def _vec(value: Iterable[float]) -> np.ndarray:
    return np.array(value, dtype=float)


def _normalize(v: np.ndarray) -> np.ndarray:
    with np.errstate(invalid="ignore", divide="ignore"):
        return v / np.linalg.norm(v)


def _direction(yaw: float, pitch: float) -> np.ndarray:
    return _normalize(
        np.array(
            [
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            ]
        )
    )


def perspective_rh(fov_y: float, aspect_ratio: float, z_near: float, z_far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [0, 1]."""
    h = math.cos(0.5 * fov_y) / math.sin(0.5 * fov_y)
    w = h / aspect_ratio
    r = z_far / (z_near - z_far)
    return np.array(
        [
            [w, 0.0, 0.0, 0.0],
            [0.0, h, 0.0, 0.0],
            [0.0, 0.0, r, r * z_near],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def look_at_rh(eye: Iterable[float], target: Iterable[float], up: Iterable[float]) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``target``."""
    eye = _vec(eye)
    f = _normalize(_vec(target) - eye)
    s = _normalize(np.cross(f, _vec(up)))
    u = np.cross(s, f)
    with np.errstate(invalid="ignore"):
        return np.array(
            [
                [s[0], s[1], s[2], -eye.dot(s)],
                [u[0], u[1], u[2], -eye.dot(u)],
                [-f[0], -f[1], -f[2], eye.dot(f)],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )


class Camera:
    """A camera with a position, a yaw/pitch rotation and a fixed vertical FOV."""

    def __init__(self, aspect_ratio: float, z_near: float, z_far: float) -> None:
        self._projection = perspective_rh(FOV_Y_RADS, aspect_ratio, z_near, z_far)
        self._view = look_at_rh(np.zeros(3), np.zeros(3), _UP)
        self.rot = np.zeros(2)
        self.position = np.zeros(3)
        self._direction = _direction(0.0, 0.0)

    def resize(self, aspect_ratio: float, z_near: float, z_far: float) -> None:
        """Rebuild the projection matrix."""
        self._projection = perspective_rh(FOV_Y_RADS, aspect_ratio, z_near, z_far)

    def set_orientation(self, yaw: float, pitch: float) -> None:
        """Orbit the origin at distance 2, facing it along the given yaw and pitch."""
        self.rot = np.array([yaw, pitch], dtype=float)
        direction = _direction(yaw, pitch)
        self._direction = direction
        target = np.zeros(3)
        self.position = target - direction * 2.0
        self._view = look_at_rh(self.position, target, _UP)

    def look_at(self, target: Iterable[float]) -> None:
        """Turn the camera towards ``target``."""
        target = _vec(target)
        direction = _normalize(target - self.position)
        with np.errstate(invalid="ignore"):
            self.rot = np.array(
                [np.arctan2(direction[2], direction[0]), np.arcsin(direction[1])]
            )
        self._direction = direction
        self._view = look_at_rh(self.position, target, _UP)

    def pos(self, position: Iterable[float]) -> None:
        """Move the camera, keeping its facing direction."""
        self.position = _vec(position)
        self._view = look_at_rh(self.position, self.position + self._direction, _UP)

    def projection(self) -> np.ndarray:
        return self._projection.copy()

    def view(self) -> np.ndarray:
        return self._view.copy()

    def front(self) -> np.ndarray:
        """The unit vector the camera faces."""
        return self._direction.copy()

    def projection_view_matrix(self) -> np.ndarray:
        """The combined clip-space matrix for the GPU."""
        return OPENGL_TO_WGPU_MATRIX @ self._projection @ self._view

    def flush(self) -> None:
        """Recompute direction and view from ``rot`` and ``position``."""
        self._direction = _direction(float(self.rot[0]), float(self.rot[1]))
        self._view = look_at_rh(self.position, self.position + self._direction, _UP)

    def __repr__(self) -> str:
        return f"Camera(position={self.position.tolist()}, rot={self.rot.tolist()})"