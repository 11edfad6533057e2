# -*- coding: utf-8 -*-
"""
Трёхмерный вектор на базе NumPy (float32).

В зависимости от места вызова это точка, направление, ось вращения,
коэффициенты масштаба или тройка углов. Длина единичной не обязана
быть: ``is_norm()`` – это запрос, а не инвариант.
"""
import numpy as np

from lakernel.math.vec2 import Vec2
from lakernel.utils.config import DEFAULT_CONFIG
from lakernel.utils.logger import logger

_NORM_EPS = DEFAULT_CONFIG["norm_epsilon"]
_CMP_TOL = DEFAULT_CONFIG["compare_tolerance"]


class Vec3:
    __slots__ = ("_v",)

    def __init__(self, x=0.0, y=None, z=None):
        if y is None and z is None:
            y = z = x
        self._v = np.array([x,
                            0.0 if y is None else y,
                            0.0 if z is None else z], dtype=np.float32)

    @staticmethod
    def from_vec2(xy: Vec2, z: float = 0.0) -> "Vec3":
        return Vec3(xy.x, xy.y, z)

    # -------------------------------------------------
    # свойства с сеттерами
    # -------------------------------------------------
    @property
    def x(self) -> float:
        return float(self._v[0])

    @x.setter
    def x(self, value: float):
        self._v[0] = value

    @property
    def y(self) -> float:
        return float(self._v[1])

    @y.setter
    def y(self, value: float):
        self._v[1] = value

    @property
    def z(self) -> float:
        return float(self._v[2])

    @z.setter
    def z(self, value: float):
        self._v[2] = value

    # -------------------------------------------------
    # проекции на локальные плоскости
    # -------------------------------------------------
    def xy(self) -> Vec2:
        return Vec2(self._v[0], self._v[1])

    def xz(self) -> Vec2:
        return Vec2(self._v[0], self._v[2])

    def yz(self) -> Vec2:
        return Vec2(self._v[1], self._v[2])

    # -------------------------------------------------
    # арифметика
    # -------------------------------------------------
    @staticmethod
    def _operand(other):
        if isinstance(other, Vec3):
            return other._v
        if isinstance(other, (int, float, np.number)):
            return np.float32(other)
        return None

    def __add__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec3(*(self._v + b))

    def __sub__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec3(*(self._v - b))

    def __mul__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec3(*(self._v * b))

    __rmul__ = __mul__

    def __truediv__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec3(*(self._v / b))

    def __iadd__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v += b
        return self

    def __isub__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v -= b
        return self

    def __imul__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v *= b
        return self

    def __itruediv__(self, other):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v /= b
        return self

    def __neg__(self):
        return Vec3(*(-self._v))

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    # -------------------------------------------------
    # вспомогательные методы
    # -------------------------------------------------
    def dot(self, other):
        return float(np.dot(self._v, other._v))

    def cross(self, other):
        """Правое векторное произведение."""
        return Vec3(*np.cross(self._v, other._v))

    def length_sq(self):
        return float(np.dot(self._v, self._v))

    def length(self):
        return float(np.sqrt(np.dot(self._v, self._v)))

    def normalize(self):
        """Нормализовать на месте (без проверки нулевой длины)."""
        self._v /= np.float32(self.length())

    def normalized(self):
        """Нормализованная копия (без проверки нулевой длины)."""
        return Vec3(*(self._v / np.float32(self.length())))

    def try_normalized(self):
        """Как normalized(), но None вместо NaN для нулевого вектора."""
        n = self.length()
        if n == 0.0 or not np.isfinite(n):
            logger.debug(f"[Vec3] Cannot normalize {self!r}")
            return None
        return self.normalized()

    def is_norm(self, eps=_NORM_EPS):
        return abs(self.length() - 1.0) < eps

    def angle(self, other):
        """Угол между векторами в радианах, [0, π].

        Аргумент arccos не зажимается: из‑за погрешности он может выйти
        за [-1, 1], тогда результат – NaN.
        """
        return float(np.arccos(np.dot(self.normalized()._v,
                                      other.normalized()._v)))

    def clip_length(self, limit):
        """Если длина больше ``limit`` – уменьшить ровно до ``limit``."""
        assert limit > 0.0, "clip limit must be positive"
        limit = np.float32(limit)
        rad = np.dot(self._v, self._v) / (limit * limit)
        if rad > 1.0:
            self._v /= np.sqrt(rad)

    def is_ndc(self):
        """Лежит ли точка строго внутри куба NDC (-1, 1)^3."""
        return bool(np.all((self._v > -1.0) & (self._v < 1.0)))

    def isclose(self, other, tol=_CMP_TOL):
        return bool(np.allclose(self._v, other._v, rtol=0.0, atol=tol))

    # -------------------------------------------------
    # статические конструкторы и сеттеры
    # -------------------------------------------------
    @staticmethod
    def zero():
        return Vec3(0.0)

    @staticmethod
    def ones():
        return Vec3(1.0)

    @staticmethod
    def unit_x():
        return Vec3(1.0, 0.0, 0.0)

    @staticmethod
    def unit_y():
        return Vec3(0.0, 1.0, 0.0)

    @staticmethod
    def unit_z():
        return Vec3(0.0, 0.0, 1.0)

    def set(self, x, y, z):
        self._v[:] = (x, y, z)

    def set_zero(self):
        self._v[:] = 0.0

    def set_ones(self):
        self._v[:] = 1.0

    def set_unit_x(self):
        self._v[:] = (1.0, 0.0, 0.0)

    def set_unit_y(self):
        self._v[:] = (0.0, 1.0, 0.0)

    def set_unit_z(self):
        self._v[:] = (0.0, 0.0, 1.0)

    def copy(self):
        return Vec3(*self._v)

    def as_np(self) -> np.ndarray:
        """Возврат копии 3‑элементного массива float32."""
        return self._v.copy()

    def to_tuple(self):
        return tuple(self._v.tolist())

    def __repr__(self):
        return f"Vec3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"
