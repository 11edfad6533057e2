# lakernel/math/vec2.py
"""
2‑мерный вектор (float32). Точка или направление на плоскости.
"""

import numpy as np
from typing import Optional, Tuple

from lakernel.utils.config import DEFAULT_CONFIG
from lakernel.utils.logger import logger

_NORM_EPS = DEFAULT_CONFIG["norm_epsilon"]
_CMP_TOL = DEFAULT_CONFIG["compare_tolerance"]


class Vec2:
    """Короткий и быстрый вектор‑2 (float32).

    ``Vec2(b)`` заполняет обе компоненты значением ``b``.
    """

    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = None):
        if y is None:
            y = x
        self._v = np.array([x, y], dtype=np.float32)

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

    # -----------------------------------------------------------------
    # арифметика: операторы возвращают новый объект,
    # in‑place версии меняют текущий
    # -----------------------------------------------------------------
    @staticmethod
    def _operand(other):
        if isinstance(other, Vec2):
            return other._v
        if isinstance(other, (int, float, np.number)):
            return np.float32(other)
        return None

    def __add__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec2(*(self._v + b))

    def __sub__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec2(*(self._v - b))

    def __mul__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec2(*(self._v * b))

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return Vec2(*(self._v / b))

    def __iadd__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v += b
        return self

    def __isub__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v -= b
        return self

    def __imul__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v *= b
        return self

    def __itruediv__(self, other) -> "Vec2":
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._v /= b
        return self

    def __neg__(self) -> "Vec2":
        return Vec2(*(-self._v))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vec2):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    # -----------------------------------------------------------------
    # векторная алгебра
    # -----------------------------------------------------------------
    def dot(self, other: "Vec2") -> float:
        return float(np.dot(self._v, other._v))

    def length_sq(self) -> float:
        return float(np.dot(self._v, self._v))

    def length(self) -> float:
        return float(np.sqrt(np.dot(self._v, self._v)))

    def normalize(self) -> None:
        """Нормализовать на месте. Нулевой вектор даёт NaN."""
        self._v /= np.float32(self.length())

    def normalized(self) -> "Vec2":
        """Нормализованная копия. Нулевой вектор даёт NaN."""
        return Vec2(*(self._v / np.float32(self.length())))

    def try_normalized(self) -> Optional["Vec2"]:
        """Как normalized(), но возвращает None для нулевой длины."""
        n = self.length()
        if n == 0.0 or not np.isfinite(n):
            logger.debug(f"[Vec2] Cannot normalize {self!r}")
            return None
        return self.normalized()

    def is_norm(self, eps: float = _NORM_EPS) -> bool:
        return abs(self.length() - 1.0) < eps

    def angle(self, other: "Vec2") -> float:
        """Угол (рад) через отношение скалярного произведения к длинам."""
        s = self._v * other._v
        p = s[0] + s[1]
        q = np.float32(self.length()) * np.float32(other.length())
        return float(np.arccos(p / q))

    def clip_length(self, limit: float) -> None:
        """Ограничить длину значением ``limit`` (на месте)."""
        assert limit > 0.0, "clip limit must be positive"
        limit = np.float32(limit)
        rad = np.dot(self._v, self._v) / (limit * limit)
        if rad > 1.0:
            self._v /= np.sqrt(rad)

    def reflected(self, other: "Vec2") -> "Vec2":
        """Отражение ``other`` относительно прямой вдоль этого вектора.

        reflected = 2 * proj_self(other) - other
        """
        k = np.float32(self.dot(other)) / np.float32(self.length_sq())
        return self * k * 2 - other

    def isclose(self, other: "Vec2", tol: float = _CMP_TOL) -> bool:
        return bool(np.allclose(self._v, other._v, rtol=0.0, atol=tol))

    # -----------------------------------------------------------------
    # статические конструкторы и сеттеры
    # -----------------------------------------------------------------
    @staticmethod
    def zero() -> "Vec2":
        return Vec2(0.0)

    @staticmethod
    def ones() -> "Vec2":
        return Vec2(1.0)

    @staticmethod
    def unit_x() -> "Vec2":
        return Vec2(1.0, 0.0)

    @staticmethod
    def unit_y() -> "Vec2":
        return Vec2(0.0, 1.0)

    def set(self, x: float, y: float) -> None:
        self._v[:] = (x, y)

    def set_zero(self) -> None:
        self._v[:] = 0.0

    def set_ones(self) -> None:
        self._v[:] = 1.0

    def set_unit_x(self) -> None:
        self._v[:] = (1.0, 0.0)

    def set_unit_y(self) -> None:
        self._v[:] = (0.0, 1.0)

    # -----------------------------------------------------------------
    # приведение и представление
    # -----------------------------------------------------------------
    def copy(self) -> "Vec2":
        return Vec2(*self._v)

    def as_np(self) -> np.ndarray:
        """Копия 2‑компонентного ndarray (float32)."""
        return self._v.copy()

    def to_tuple(self) -> Tuple[float, float]:
        return tuple(self._v.tolist())

    def __repr__(self) -> str:
        return f"Vec2({self.x:.3f}, {self.y:.3f})"
