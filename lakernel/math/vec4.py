# lakernel/math/vec4.py
"""
4‑мерный вектор (float32). Однородные координаты (w = 1 – точка,
w = 0 – направление) или «плоская» форма кватерниона (x, y, z, w).
"""

import numpy as np
from typing import Optional, Tuple

from lakernel.math.vec3 import Vec3
from lakernel.utils.config import DEFAULT_CONFIG
from lakernel.utils.logger import logger

_CMP_TOL = DEFAULT_CONFIG["compare_tolerance"]


class Vec4:
    """Короткий и быстрый вектор‑4 (float32)."""

    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = None,
                 z: float = None, w: float = None):
        if y is None and z is None and w is None:
            y = z = w = x
        self._v = np.array([x,
                            0.0 if y is None else y,
                            0.0 if z is None else z,
                            0.0 if w is None else w], dtype=np.float32)

    @staticmethod
    def from_vec3(xyz: Vec3, w: float = 1.0) -> "Vec4":
        """Однородная запись: w = 1 – точка, w = 0 – направление."""
        return Vec4(xyz.x, xyz.y, xyz.z, w)

    # -----------------------------------------------------------------
    # свойства (c‑сеттерами)
    # -----------------------------------------------------------------
    @property
    def x(self) -> float:
        return float(self._v[0])

    @x.setter
    def x(self, value: float) -> None:
        self._v[0] = value

    @property
    def y(self) -> float:
        return float(self._v[1])

    @y.setter
    def y(self, value: float) -> None:
        self._v[1] = value

    @property
    def z(self) -> float:
        return float(self._v[2])

    @z.setter
    def z(self, value: float) -> None:
        self._v[2] = value

    @property
    def w(self) -> float:
        return float(self._v[3])

    @w.setter
    def w(self, value: float) -> None:
        self._v[3] = value

    # -----------------------------------------------------------------
    # арифметика (операторы возвращают новый объект)
    # -----------------------------------------------------------------
    @staticmethod
    def _operand(other):
        if isinstance(other, Vec4):
            return other._v
        if isinstance(other, (int, float, np.number)):
            return np.float32(other)
        return None

    def __add__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec4(*(self._v + b))

    def __sub__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec4(*(self._v - b))

    def __mul__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec4(*(self._v * b))

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec4(*(self._v / b))

    # -----------------------------------------------------------------
    # in‑place арифметика (меняет текущий объект)
    # -----------------------------------------------------------------
    def __iadd__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v += b
        return self

    def __isub__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v -= b
        return self

    def __imul__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v *= b
        return self

    def __itruediv__(self, other) -> "Vec4":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v /= b
        return self

    def __neg__(self) -> "Vec4":
        return Vec4(*(-self._v))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec4):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    # -----------------------------------------------------------------
    # вспомогательные методы
    # -----------------------------------------------------------------
    def dot(self, other: "Vec4") -> float:
        """Скалярное произведение."""
        return float(np.dot(self._v, other._v))

    def length_sq(self) -> float:
        return float(np.dot(self._v, self._v))

    def length(self) -> float:
        """Евклидова длина."""
        return float(np.sqrt(np.dot(self._v, self._v)))

    def normalize(self) -> None:
        """Нормализовать на месте (нулевой вектор → NaN)."""
        self._v /= np.float32(self.length())

    def normalized(self) -> "Vec4":
        """Нормализованный вектор (нулевой вектор → NaN)."""
        return Vec4(*(self._v / np.float32(self.length())))

    def try_normalized(self) -> Optional["Vec4"]:
        n = self.length()
        if n == 0.0 or not np.isfinite(n):
            logger.debug(f"[Vec4] Cannot normalize {self!r}")
            return None
        return self.normalized()

    def isclose(self, other: "Vec4", tol: float = _CMP_TOL) -> bool:
        return bool(np.allclose(self._v, other._v, rtol=0.0, atol=tol))

    # -----------------------------------------------------------------
    # однородные координаты → 3D
    # -----------------------------------------------------------------
    def xyz(self) -> Vec3:
        return Vec3(*self._v[:3])

    def xyz_normalized(self) -> Vec3:
        return self.xyz().normalized()

    def homogenized(self) -> Vec3:
        """(x/w, y/w, z/w). При w = 0 – Inf/NaN (точка на бесконечности)."""
        return Vec3(*(self._v[:3] / self._v[3]))

    # -----------------------------------------------------------------
    # статические конструкторы
    # -----------------------------------------------------------------
    @staticmethod
    def zero() -> "Vec4":
        return Vec4(0.0)

    @staticmethod
    def ones() -> "Vec4":
        return Vec4(1.0)

    @staticmethod
    def unit_x() -> "Vec4":
        return Vec4(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def unit_y() -> "Vec4":
        return Vec4(0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def unit_z() -> "Vec4":
        return Vec4(0.0, 0.0, 1.0, 0.0)

    @staticmethod
    def unit_w() -> "Vec4":
        return Vec4(0.0, 0.0, 0.0, 1.0)

    def set(self, x: float, y: float, z: float, w: float) -> None:
        self._v[:] = (x, y, z, w)

    # -----------------------------------------------------------------
    # представление
    # -----------------------------------------------------------------
    def copy(self) -> "Vec4":
        return Vec4(*self._v)

    def as_np(self) -> np.ndarray:
        """Копия 4‑компонентного ndarray (float32)."""
        return self._v.copy()

    def __repr__(self) -> str:
        return f"Vec4({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.w:.3f})"

    # -----------------------------------------------------------------
    # приведение к кортежу (удобно для передачи в шейдеры)
    # -----------------------------------------------------------------
    def to_tuple(self) -> Tuple[float, float, float, float]:
        return tuple(self._v.tolist())
