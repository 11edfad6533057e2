# lakernel/math/quat.py
# ---------------------------------------------------------------
# Кватернион w + xi + yj + zk (i² = j² = k² = ijk = −1) с поддержкой:
# - создания из пары векторов и из оси/угла,
# - произведения Гамильтона,
# - сопряжения и обращения,
# - вращения вектора (формула Эйлера‑Родрига),
# - преобразования в 4×4 матрицу.
#
# Компоненты хранятся как (w, x, y, z) и доступны только по имени;
# конструктор принимает их только как keyword‑аргументы.
# ---------------------------------------------------------------

import numpy as np

from lakernel.math.vec3 import Vec3
from lakernel.math.vec4 import Vec4
from lakernel.math.mat4 import Mat4
from lakernel.utils.config import DEFAULT_CONFIG
from lakernel.utils.logger import logger

_NORM_EPS = DEFAULT_CONFIG["norm_epsilon"]
_DEGENERATE_EPS = DEFAULT_CONFIG["degenerate_epsilon"]
_CMP_TOL = DEFAULT_CONFIG["compare_tolerance"]


class Quat:
    """Кватернион; единичный описывает вращение.

    ``Quat()`` – нулевой кватернион (w = 0), а не тождественное
    вращение: для него используйте ``Quat.unit_w()``.
    """

    __slots__ = ("_q",)

    def __init__(self, *, x=0.0, y=0.0, z=0.0, w=0.0, dtype=np.float32):
        self._q = np.array([w, x, y, z], dtype=dtype)

    @classmethod
    def _from_array(cls, wxyz: np.ndarray) -> "Quat":
        q = cls.__new__(cls)
        q._q = wxyz
        return q

    @property
    def dtype(self):
        return self._q.dtype

    # -----------------------------------------------------------
    #  Компоненты
    # -----------------------------------------------------------
    @property
    def w(self) -> float:
        return float(self._q[0])

    @w.setter
    def w(self, value: float) -> None:
        self._q[0] = value

    @property
    def x(self) -> float:
        return float(self._q[1])

    @x.setter
    def x(self, value: float) -> None:
        self._q[1] = value

    @property
    def y(self) -> float:
        return float(self._q[2])

    @y.setter
    def y(self, value: float) -> None:
        self._q[2] = value

    @property
    def z(self) -> float:
        return float(self._q[3])

    @z.setter
    def z(self, value: float) -> None:
        self._q[3] = value

    def set(self, *, x: float, y: float, z: float, w: float) -> None:
        self._q[:] = (w, x, y, z)

    def set_unit(self, axis: int) -> None:
        """Обнулить и выставить 1 в компоненте: 0 – x, 1 – y, 2 – z, 3 – w."""
        assert 0 <= axis <= 3, "axis must be in 0..3"
        self._q[:] = 0.0
        self._q[(axis + 1) % 4] = 1.0

    # -----------------------------------------------------------
    #  Построение
    # -----------------------------------------------------------
    @staticmethod
    def from_vectors(a: Vec3, b: Vec3, unit_length: bool = False,
                     *, dtype=np.float32) -> "Quat":
        """Кратчайшее вращение, переводящее ``a`` в ``b``.

        При ``unit_length=True`` векторы считаются уже нормированными.
        """
        if not unit_length:
            a = a.normalized()
            b = b.normalized()
        return Quat._shortest_arc(a, b, dtype)

    @staticmethod
    def from_vectors_checked(a: Vec3, b: Vec3, *, dtype=np.float32) -> "Quat":
        """Как from_vectors(), но нормирует только то, что не нормировано."""
        if not a.is_norm():
            a = a.normalized()
        if not b.is_norm():
            b = b.normalized()
        return Quat._shortest_arc(a, b, dtype)

    @staticmethod
    def _shortest_arc(a: Vec3, b: Vec3, dtype) -> "Quat":
        d = np.float32(a.dot(b))
        axis = a.cross(b)
        # Строго противоположные векторы: (axis, 1 + d) обнуляется целиком,
        # любая ось ⟂ a подошла бы, берём identity.
        if (abs(np.float32(1.0) + d) < _DEGENERATE_EPS
                and axis.length_sq() < _DEGENERATE_EPS ** 2):
            logger.debug(f"[Quat] Opposite vectors {a!r}, {b!r}: identity used")
            return Quat.unit_w(dtype=dtype)

        t = Vec4(axis.x, axis.y, axis.z, np.float32(1.0) + d)
        t.normalize()
        return Quat.from_vec4(t, dtype=dtype)

    @staticmethod
    def from_axis_angle(axis: Vec3, angle: float, *, dtype=np.float32) -> "Quat":
        """Смешение (axis, 1 + angle) с последующей нормировкой.

        Это не половинный угол: для вращения на угол θ вокруг оси
        используйте from_axis_rotation().
        """
        if abs(angle) < _DEGENERATE_EPS:
            return Quat.unit_w(dtype=dtype)
        t = Vec4(axis.x, axis.y, axis.z, np.float32(1.0) + np.float32(angle))
        t.normalize()
        return Quat.from_vec4(t, dtype=dtype)

    @staticmethod
    def from_axis_rotation(axis: Vec3, angle: float, *, dtype=np.float32) -> "Quat":
        """Вращение на ``angle`` радиан вокруг ``axis`` (ось нормируется)."""
        half = np.dtype(dtype).type(angle) / 2
        s = np.sin(half)
        n = axis.as_np().astype(dtype)
        n /= np.sqrt(np.dot(n, n))
        return Quat(x=n[0] * s, y=n[1] * s, z=n[2] * s, w=np.cos(half),
                    dtype=dtype)

    @staticmethod
    def from_vec4(v: Vec4, *, dtype=np.float32) -> "Quat":
        """Из плоской формы (x, y, z, w)."""
        return Quat(x=v.x, y=v.y, z=v.z, w=v.w, dtype=dtype)

    @staticmethod
    def unit_x(*, dtype=np.float32) -> "Quat":
        return Quat(x=1.0, dtype=dtype)

    @staticmethod
    def unit_y(*, dtype=np.float32) -> "Quat":
        return Quat(y=1.0, dtype=dtype)

    @staticmethod
    def unit_z(*, dtype=np.float32) -> "Quat":
        return Quat(z=1.0, dtype=dtype)

    @staticmethod
    def unit_w(*, dtype=np.float32) -> "Quat":
        """Тождественное вращение."""
        return Quat(w=1.0, dtype=dtype)

    # -----------------------------------------------------------
    #  Алгебра
    # -----------------------------------------------------------
    def _scalar(self, other):
        if isinstance(other, (int, float, np.number)):
            return self._q.dtype.type(other)
        return None

    @staticmethod
    def _hamilton(a: np.ndarray, b: np.ndarray) -> np.ndarray:
        # вектор: b_vec * a.w + a_vec * b.w + a_vec × b_vec
        # скаляр: a.w * b.w − a_vec · b_vec
        av, bv = a[1:], b[1:]
        vec = bv * a[0] + av * b[0] + np.cross(av, bv)
        w = a[0] * b[0] - np.dot(av, bv)
        return np.array([w, vec[0], vec[1], vec[2]], dtype=a.dtype)

    def __add__(self, other) -> "Quat":
        if isinstance(other, Quat):
            return Quat._from_array(self._q + other._q)
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        return Quat._from_array(self._q + b)

    def __sub__(self, other) -> "Quat":
        if isinstance(other, Quat):
            return Quat._from_array(self._q - other._q)
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        return Quat._from_array(self._q - b)

    def __mul__(self, other) -> "Quat":
        """Произведение Гамильтона (некоммутативно) или умножение на число."""
        if isinstance(other, Quat):
            return Quat._from_array(Quat._hamilton(self._q, other._q))
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        return Quat._from_array(self._q * b)

    def __rmul__(self, other) -> "Quat":
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        return Quat._from_array(self._q * b)

    def __truediv__(self, other) -> "Quat":
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        return Quat._from_array(self._q / b)

    def __iadd__(self, other) -> "Quat":
        b = other._q if isinstance(other, Quat) else self._scalar(other)
        if b is None:
            return NotImplemented
        self._q += b
        return self

    def __isub__(self, other) -> "Quat":
        b = other._q if isinstance(other, Quat) else self._scalar(other)
        if b is None:
            return NotImplemented
        self._q -= b
        return self

    def __imul__(self, other) -> "Quat":
        if isinstance(other, Quat):
            self._q = Quat._hamilton(self._q, other._q)
            return self
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        self._q *= b
        return self

    def __itruediv__(self, other) -> "Quat":
        b = self._scalar(other)
        if b is None:
            return NotImplemented
        self._q /= b
        return self

    def __neg__(self) -> "Quat":
        return Quat._from_array(-self._q)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quat):
            return NotImplemented
        return bool(np.array_equal(self._q, other._q))

    def conjugate(self) -> "Quat":
        """q* = (w, −x, −y, −z)."""
        q = self._q.copy()
        q[1:] = -q[1:]
        return Quat._from_array(q)

    def inverse(self) -> "Quat":
        """q⁻¹ = q* / |q|², так что q * q⁻¹ = (1, 0, 0, 0)."""
        return self.conjugate() / self.length_sq()

    def length_sq(self) -> float:
        return float(np.dot(self._q, self._q))

    def length(self) -> float:
        return float(np.sqrt(np.dot(self._q, self._q)))

    def normalize(self) -> None:
        self._q /= self._q.dtype.type(self.length())

    def normalized(self) -> "Quat":
        return Quat._from_array(self._q / self._q.dtype.type(self.length()))

    def is_unit(self, tol: float = _NORM_EPS) -> bool:
        return abs(self.length() - 1.0) < tol

    def isclose(self, other: "Quat", tol: float = _CMP_TOL) -> bool:
        return bool(np.allclose(self._q, other._q, rtol=0.0, atol=tol))

    # -----------------------------------------------------------
    #  Преобразования
    # -----------------------------------------------------------
    def rotate_vector(self, v: Vec3) -> Vec3:
        """Вращает ``v`` единичным кватернионом.

        v' = v + 2w (r × v) + 2 r × (r × v), где r – векторная часть.
        """
        r = self._q[1:]
        w = self._q[0]
        p = v.as_np().astype(self._q.dtype)
        t = np.cross(r, p)
        out = p + 2 * w * t + 2 * np.cross(r, t)
        return Vec3(*out)

    def vector_part(self) -> Vec3:
        return Vec3(*self._q[1:])

    def to_vec4(self) -> Vec4:
        """Плоская форма (x, y, z, w)."""
        return Vec4(self._q[1], self._q[2], self._q[3], self._q[0])

    def to_mat4(self) -> Mat4:
        """Возвращает 4×4 матрицу вращения (кватернион считается единичным)."""
        w, x, y, z = self._q
        xx, yy, zz = x*x, y*y, z*z
        xy, xz, yz = x*y, x*z, y*z
        wx, wy, wz = w*x, w*y, w*z

        m = Mat4.identity()
        m.m[0, 0] = 1 - 2*(yy + zz)
        m.m[0, 1] = 2*(xy - wz)
        m.m[0, 2] = 2*(xz + wy)

        m.m[1, 0] = 2*(xy + wz)
        m.m[1, 1] = 1 - 2*(xx + zz)
        m.m[1, 2] = 2*(yz - wx)

        m.m[2, 0] = 2*(xz - wy)
        m.m[2, 1] = 2*(yz + wx)
        m.m[2, 2] = 1 - 2*(xx + yy)

        return m

    def copy(self) -> "Quat":
        return Quat._from_array(self._q.copy())

    def __repr__(self):
        return (f"Quat(w={self.w:.3f}, x={self.x:.3f}, "
                f"y={self.y:.3f}, z={self.z:.3f})")
