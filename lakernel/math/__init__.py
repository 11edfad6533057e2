"""
Математический суб‑пакет: Vec2, Vec3, Vec4, Mat4, Quat.
"""

from lakernel.math.vec2 import Vec2
from lakernel.math.vec3 import Vec3
from lakernel.math.vec4 import Vec4
from lakernel.math.mat4 import Mat4
from lakernel.math.quat import Quat

__all__ = ["Vec2", "Vec3", "Vec4", "Mat4", "Quat"]
