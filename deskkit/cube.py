"""Geometry and transforms for a textured, spinning cube."""

from __future__ import annotations

import math
from typing import Sequence

Matrix = tuple[tuple[float, float, float, float], ...]
Vertex = tuple[float, float, float, float, float]

CLEAR_COLOR = (0, 38, 64)
FACE_COLORS = (
    (0, 0, 0),
    (255, 255, 0),
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 255),
)
SCALE = 0.2
NEAR_PLANE = 4.0
FAR_PLANE = 15.0
EYE_DISTANCE = 10.0
MAX_ANGLE = 360.0

_FACES = (
    ((+1, -1, -1), (-1, -1, -1), (-1, +1, -1), (+1, +1, -1)),
    ((+1, +1, -1), (-1, +1, -1), (-1, +1, +1), (+1, +1, +1)),
    ((+1, -1, +1), (+1, -1, -1), (+1, +1, -1), (+1, +1, +1)),
    ((-1, -1, -1), (-1, -1, +1), (-1, +1, +1), (-1, +1, -1)),
    ((+1, -1, +1), (-1, -1, +1), (-1, -1, -1), (+1, -1, -1)),
    ((-1, -1, +1), (+1, -1, +1), (+1, +1, +1), (-1, +1, +1)),
)


def face_vertices() -> list[Vertex]:
    """Interleaved (x, y, z, u, v) data: six faces of four vertices, drawn as fans."""
    data = []
    for face in _FACES:
        for corner, (x, y, z) in enumerate(face):
            u = float(corner in (0, 3))
            v = float(corner in (0, 1))
            data.append((SCALE * x, SCALE * y, SCALE * z, u, v))
    return data


def _identity() -> list[list[float]]:
    return [[1.0 if row == col else 0.0 for col in range(4)] for row in range(4)]


def _multiply(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> list[list[float]]:
    return [
        [sum(a[row][k] * b[k][col] for k in range(4)) for col in range(4)]
        for row in range(4)
    ]


def _ortho(left: float, right: float, bottom: float, top: float, near: float, far: float):
    width = right - left
    height = top - bottom
    depth = far - near
    m = _identity()
    m[0][0] = 2.0 / width
    m[0][3] = -(left + right) / width
    m[1][1] = 2.0 / height
    m[1][3] = -(top + bottom) / height
    m[2][2] = -2.0 / depth
    m[2][3] = -(near + far) / depth
    return m


def _translation(x: float, y: float, z: float):
    m = _identity()
    m[0][3], m[1][3], m[2][3] = x, y, z
    return m


def _rotation(angle: float, x: float, y: float, z: float):
    length = math.sqrt(x * x + y * y + z * z)
    x, y, z = x / length, y / length, z / length
    radians = math.radians(angle)
    c, s = math.cos(radians), math.sin(radians)
    ic = 1.0 - c
    return [
        [x * x * ic + c, x * y * ic - z * s, x * z * ic + y * s, 0.0],
        [x * y * ic + z * s, y * y * ic + c, y * z * ic - x * s, 0.0],
        [x * z * ic - y * s, y * z * ic + x * s, z * z * ic + c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


class CubeView:
    """The state of the spinning cube: its angle and how it maps to the screen."""

    def __init__(self, angle: float = 0.0) -> None:
        self.angle = float(angle)
        self.clear_color = CLEAR_COLOR

    def rotate(self) -> float:
        """Advance the angle by one degree, wrapping past a full turn; return it."""
        self.angle += 1.0
        if self.angle > MAX_ANGLE:
            self.angle = 0.0
        return self.angle

    def projection(self, width: float, height: float) -> Matrix:
        """The row-major model-view-projection matrix for a surface of this size."""
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        ratio = width / height
        if width > height:
            top = 0.5
            right = top * ratio
        else:
            right = 0.5
            top = right / ratio
        m = _ortho(-right, right, -top, top, NEAR_PLANE, FAR_PLANE)
        m = _multiply(m, _translation(0.0, 0.0, -EYE_DISTANCE))
        m = _multiply(m, _rotation(self.angle, 1.0, 1.0, 1.0))
        m = _multiply(m, _rotation(self.angle, 1.0, 1.0, 0.0))
        m = _multiply(m, _rotation(self.angle, 0.0, 0.0, 1.0))
        return tuple(tuple(row) for row in m)

    def viewport(self, width: int, height: int) -> tuple[int, int, int, int]:
        """The centred square (x, y, width, height) the cube is drawn into."""
        side = min(width, height)
        return ((width - side) // 2, (height - side) // 2, side, side)