"""
lakernel – компактное линейно‑алгебраическое ядро для 3‑D движка:
векторы 2D/3D/4D, матрица 4×4 и кватернион (float32).

Допуски по умолчанию берутся из ``DEFAULT_CONFIG`` при импорте.
``Config`` – помощник на стороне вызывающего кода: загруженные из JSON
значения сами по себе ничего не меняют, их передают явно, например
``m.try_inverse(eps=cfg["singular_epsilon"])`` или
``v.is_norm(cfg["norm_epsilon"])``.
"""

from lakernel.utils import logger, Config
from lakernel.math import Vec2, Vec3, Vec4, Mat4, Quat

__version__ = "1.0.0"

__all__ = [
    "Vec2",
    "Vec3",
    "Vec4",
    "Mat4",
    "Quat",
    "Config",
    "logger",
]
