# lakernel/math/mat4.py
"""
Матрица 4×4 (float32) для аффинных и проективных преобразований.

Хранение row‑major: ячейка ``r*4 + c`` – строка r, столбец c.
Вектора – столбцы, поэтому в ``A * B`` матрица A – внешнее преобразование:
``(T * R * S).mul_point(p) == T(R(S(p)))``.
"""

import numpy as np
from typing import Optional

from lakernel.math.vec3 import Vec3
from lakernel.math.vec4 import Vec4
from lakernel.utils.config import DEFAULT_CONFIG
from lakernel.utils.logger import logger, check_finite

_SINGULAR_EPS = DEFAULT_CONFIG["singular_epsilon"]
_CMP_TOL = DEFAULT_CONFIG["compare_tolerance"]
_DIAG = np.arange(3)


class Mat4:
    __slots__ = ("m",)

    def __init__(self, array=None):
        if array is None:
            self.m = np.zeros((4, 4), dtype=np.float32)
        elif np.isscalar(array):
            self.m = np.full((4, 4), array, dtype=np.float32)
        else:
            self.m = np.array(array, dtype=np.float32, order="C").reshape((4, 4))

    @property
    def cells(self) -> np.ndarray:
        """Плоский view на 16 ячеек (row‑major), запись меняет матрицу."""
        return self.m.reshape(16)

    # -----------------------------------------------------------
    #  Построители: перезаписывают все 16 ячеек
    # -----------------------------------------------------------
    def fill(self, value: float) -> "Mat4":
        self.m[:] = value
        return self

    def make_zero(self) -> "Mat4":
        return self.fill(0.0)

    def make_identity(self) -> "Mat4":
        self.m[:] = np.identity(4, dtype=np.float32)
        return self

    def make_rot_x(self, angle: float) -> "Mat4":
        a = np.float32(angle)
        c, s = np.cos(a), np.sin(a)
        self.make_identity()
        self.m[1, 1] = c
        self.m[1, 2] = -s
        self.m[2, 1] = s
        self.m[2, 2] = c
        return self

    def make_rot_y(self, angle: float) -> "Mat4":
        a = np.float32(angle)
        c, s = np.cos(a), np.sin(a)
        self.make_identity()
        self.m[0, 0] = c
        self.m[0, 2] = s
        self.m[2, 0] = -s
        self.m[2, 2] = c
        return self

    def make_rot_z(self, angle: float) -> "Mat4":
        a = np.float32(angle)
        c, s = np.cos(a), np.sin(a)
        self.make_identity()
        self.m[0, 0] = c
        self.m[0, 1] = -s
        self.m[1, 0] = s
        self.m[1, 1] = c
        return self

    def make_trans(self, t: Vec3) -> "Mat4":
        self.make_identity()
        self.m[:3, 3] = t.as_np()
        return self

    def make_scale(self, s: Vec3) -> "Mat4":
        self.make_identity()
        self.m[_DIAG, _DIAG] = s.as_np()
        return self

    # -----------------------------------------------------------
    #  Фабрики
    # -----------------------------------------------------------
    @staticmethod
    def zero() -> "Mat4":
        return Mat4()

    @staticmethod
    def identity() -> "Mat4":
        return Mat4().make_identity()

    @staticmethod
    def rot_x(angle: float) -> "Mat4":
        return Mat4().make_rot_x(angle)

    @staticmethod
    def rot_y(angle: float) -> "Mat4":
        return Mat4().make_rot_y(angle)

    @staticmethod
    def rot_z(angle: float) -> "Mat4":
        return Mat4().make_rot_z(angle)

    @staticmethod
    def trans(t: Vec3) -> "Mat4":
        return Mat4().make_trans(t)

    @staticmethod
    def scaling(s) -> "Mat4":
        """Масштаб: число (равномерный) или Vec3."""
        if not isinstance(s, Vec3):
            s = Vec3(s)
        return Mat4().make_scale(s)

    @staticmethod
    def perspective(fov_y: float, aspect: float,
                    z_near: float, z_far: float) -> "Mat4":
        """Перспектива в стиле OpenGL (NDC z в [-1, 1]), fov в радианах."""
        f = 1.0 / np.tan(np.float32(fov_y) / 2.0)
        m = Mat4()
        m.m[0, 0] = f / aspect
        m.m[1, 1] = f
        m.m[2, 2] = (z_far + z_near) / (z_near - z_far)
        m.m[2, 3] = (2.0 * z_far * z_near) / (z_near - z_far)
        m.m[3, 2] = -1.0
        return m

    @staticmethod
    def look_at(eye: Vec3, target: Vec3, up: Vec3) -> "Mat4":
        f = (target - eye).normalized()
        s = f.cross(up.normalized()).normalized()
        u = s.cross(f)

        m = Mat4.identity()
        m.m[0, :3] = s.as_np()
        m.m[1, :3] = u.as_np()
        m.m[2, :3] = (-f).as_np()

        m.m[0, 3] = -s.dot(eye)
        m.m[1, 3] = -u.dot(eye)
        m.m[2, 3] = f.dot(eye)
        return m

    # -----------------------------------------------------------
    #  Оси, перенос, масштаб
    # -----------------------------------------------------------
    @property
    def x_axis(self) -> Vec3:
        return Vec3(*self.m[:3, 0])

    @x_axis.setter
    def x_axis(self, v: Vec3) -> None:
        self.m[:3, 0] = v.as_np()

    @property
    def y_axis(self) -> Vec3:
        return Vec3(*self.m[:3, 1])

    @y_axis.setter
    def y_axis(self, v: Vec3) -> None:
        self.m[:3, 1] = v.as_np()

    @property
    def z_axis(self) -> Vec3:
        return Vec3(*self.m[:3, 2])

    @z_axis.setter
    def z_axis(self, v: Vec3) -> None:
        self.m[:3, 2] = v.as_np()

    @property
    def translation(self) -> Vec3:
        return Vec3(*self.m[:3, 3])

    @translation.setter
    def translation(self, v: Vec3) -> None:
        self.m[:3, 3] = v.as_np()

    @property
    def scale(self) -> Vec3:
        """Диагональ 3×3 блока (ячейки 0, 5, 10)."""
        return Vec3(*self.m[_DIAG, _DIAG])

    @scale.setter
    def scale(self, v: Vec3) -> None:
        self.m[_DIAG, _DIAG] = v.as_np()

    def translate(self, t: Vec3) -> None:
        """Добавить к текущему переносу (не перестраивает матрицу)."""
        self.m[:3, 3] += t.as_np()

    def stretch(self, s: Vec3) -> None:
        """Домножить текущие диагональные коэффициенты масштаба."""
        self.m[_DIAG, _DIAG] *= s.as_np()

    # -----------------------------------------------------------
    #  Преобразование векторов
    # -----------------------------------------------------------
    def mul_point(self, p: Vec3) -> Vec3:
        """Точка: w = 1, полное 4×4 преобразование и деление на w."""
        r = self.m @ np.array([p.x, p.y, p.z, 1.0], dtype=np.float32)
        return Vec3(*(r[:3] / r[3]))

    def mul_direction(self, d: Vec3) -> Vec3:
        """Направление: только верхний левый 3×3 блок, без переноса."""
        return Vec3(*(self.m[:3, :3] @ d.as_np()))

    # -----------------------------------------------------------
    #  Обратная матрица (присоединённая / определитель)
    # -----------------------------------------------------------
    def _adjugate(self) -> np.ndarray:
        c = self.cells
        inv = np.empty(16, dtype=np.float32)
        inv[0] = (c[5] * c[10] * c[15] - c[5] * c[11] * c[14] -
                  c[9] * c[6] * c[15] + c[9] * c[7] * c[14] +
                  c[13] * c[6] * c[11] - c[13] * c[7] * c[10])
        inv[1] = (-c[1] * c[10] * c[15] + c[1] * c[11] * c[14] +
                  c[9] * c[2] * c[15] - c[9] * c[3] * c[14] -
                  c[13] * c[2] * c[11] + c[13] * c[3] * c[10])
        inv[2] = (c[1] * c[6] * c[15] - c[1] * c[7] * c[14] -
                  c[5] * c[2] * c[15] + c[5] * c[3] * c[14] +
                  c[13] * c[2] * c[7] - c[13] * c[3] * c[6])
        inv[3] = (-c[1] * c[6] * c[11] + c[1] * c[7] * c[10] +
                  c[5] * c[2] * c[11] - c[5] * c[3] * c[10] -
                  c[9] * c[2] * c[7] + c[9] * c[3] * c[6])
        inv[4] = (-c[4] * c[10] * c[15] + c[4] * c[11] * c[14] +
                  c[8] * c[6] * c[15] - c[8] * c[7] * c[14] -
                  c[12] * c[6] * c[11] + c[12] * c[7] * c[10])
        inv[5] = (c[0] * c[10] * c[15] - c[0] * c[11] * c[14] -
                  c[8] * c[2] * c[15] + c[8] * c[3] * c[14] +
                  c[12] * c[2] * c[11] - c[12] * c[3] * c[10])
        inv[6] = (-c[0] * c[6] * c[15] + c[0] * c[7] * c[14] +
                  c[4] * c[2] * c[15] - c[4] * c[3] * c[14] -
                  c[12] * c[2] * c[7] + c[12] * c[3] * c[6])
        inv[7] = (c[0] * c[6] * c[11] - c[0] * c[7] * c[10] -
                  c[4] * c[2] * c[11] + c[4] * c[3] * c[10] +
                  c[8] * c[2] * c[7] - c[8] * c[3] * c[6])
        inv[8] = (c[4] * c[9] * c[15] - c[4] * c[11] * c[13] -
                  c[8] * c[5] * c[15] + c[8] * c[7] * c[13] +
                  c[12] * c[5] * c[11] - c[12] * c[7] * c[9])
        inv[9] = (-c[0] * c[9] * c[15] + c[0] * c[11] * c[13] +
                  c[8] * c[1] * c[15] - c[8] * c[3] * c[13] -
                  c[12] * c[1] * c[11] + c[12] * c[3] * c[9])
        inv[10] = (c[0] * c[5] * c[15] - c[0] * c[7] * c[13] -
                   c[4] * c[1] * c[15] + c[4] * c[3] * c[13] +
                   c[12] * c[1] * c[7] - c[12] * c[3] * c[5])
        inv[11] = (-c[0] * c[5] * c[11] + c[0] * c[7] * c[9] +
                   c[4] * c[1] * c[11] - c[4] * c[3] * c[9] -
                   c[8] * c[1] * c[7] + c[8] * c[3] * c[5])
        inv[12] = (-c[4] * c[9] * c[14] + c[4] * c[10] * c[13] +
                   c[8] * c[5] * c[14] - c[8] * c[6] * c[13] -
                   c[12] * c[5] * c[10] + c[12] * c[6] * c[9])
        inv[13] = (c[0] * c[9] * c[14] - c[0] * c[10] * c[13] -
                   c[8] * c[1] * c[14] + c[8] * c[2] * c[13] +
                   c[12] * c[1] * c[10] - c[12] * c[2] * c[9])
        inv[14] = (-c[0] * c[5] * c[14] + c[0] * c[6] * c[13] +
                   c[4] * c[1] * c[14] - c[4] * c[2] * c[13] -
                   c[12] * c[1] * c[6] + c[12] * c[2] * c[5])
        inv[15] = (c[0] * c[5] * c[10] - c[0] * c[6] * c[9] -
                   c[4] * c[1] * c[10] + c[4] * c[2] * c[9] +
                   c[8] * c[1] * c[6] - c[8] * c[2] * c[5])
        return inv

    def _det_from(self, adj: np.ndarray) -> np.float32:
        c = self.cells
        return c[0] * adj[0] + c[1] * adj[4] + c[2] * adj[8] + c[3] * adj[12]

    def determinant(self) -> float:
        return float(self._det_from(self._adjugate()))

    def inverse(self) -> "Mat4":
        """Обратная матрица без проверок: вырожденная даёт Inf/NaN."""
        adj = self._adjugate()
        out = Mat4(adj)
        out /= self._det_from(adj)
        return out

    def try_inverse(self, eps: float = _SINGULAR_EPS) -> Optional["Mat4"]:
        """Обратная матрица или None, если |det| <= eps."""
        adj = self._adjugate()
        det = self._det_from(adj)
        if not abs(det) > eps:
            logger.warning(f"[Mat4] Singular matrix (det={float(det):.3e}), "
                           f"inverse skipped")
            return None
        out = Mat4(adj)
        out /= det
        if not check_finite(out.m, "Mat4.try_inverse"):
            return None
        return out

    def transposed(self) -> "Mat4":
        return Mat4(self.m.T)

    # -----------------------------------------------------------
    #  Операторы
    # -----------------------------------------------------------
    def __mul__(self, other):
        if isinstance(other, Mat4):
            return Mat4(np.dot(self.m, other.m))
        if isinstance(other, Vec4):
            return Vec4(*(self.m @ other.as_np()))
        if isinstance(other, (int, float, np.number)):
            return Mat4(self.m * np.float32(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float, np.number)):
            return Mat4(self.m * np.float32(other))
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, (Mat4, Vec4)):
            return self * other
        return NotImplemented

    def __imul__(self, other):
        # Mat4 *= Vec4 подменил бы матрицу вектором через __mul__.
        if isinstance(other, Vec4):
            raise TypeError("in-place Mat4 *= Vec4 is not supported, use m * v")
        if isinstance(other, Mat4):
            self.m = np.dot(self.m, other.m)
        elif isinstance(other, (int, float, np.number)):
            self.m *= np.float32(other)
        else:
            return NotImplemented
        return self

    def __truediv__(self, other):
        if isinstance(other, (int, float, np.number)):
            return Mat4(self.m * (np.float32(1.0) / np.float32(other)))
        return NotImplemented

    def __itruediv__(self, other):
        if isinstance(other, (int, float, np.number)):
            self.m *= np.float32(1.0) / np.float32(other)
            return self
        return NotImplemented

    def __add__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4(self.m + other.m)

    def __sub__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4(self.m - other.m)

    def __iadd__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        self.m += other.m
        return self

    def __isub__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        self.m -= other.m
        return self

    def __eq__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return bool(np.array_equal(self.m, other.m))

    def isclose(self, other: "Mat4", tol: float = _CMP_TOL) -> bool:
        return bool(np.allclose(self.m, other.m, rtol=0.0, atol=tol))

    def copy(self) -> "Mat4":
        return Mat4(self.m)

    def __repr__(self):
        return f"Mat4({self.m})"

    def to_np(self) -> np.ndarray:
        return self.m.copy()

    def to_gl(self) -> np.ndarray:
        """Транспонируем для передачи в OpenGL (столбцы‑массив)."""
        return self.m.T.copy()
