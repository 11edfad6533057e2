# -*- coding: utf-8 -*-
"""
conftest.py – общие фикстуры для тестов ядра.
"""

import math

import numpy as np
import pytest

from lakernel.math import Vec3, Mat4


@pytest.fixture
def trs_matrix() -> Mat4:
    """Хорошо обусловленное аффинное преобразование T * R * S."""
    return (Mat4.trans(Vec3(1.0, -2.0, 3.0))
            * Mat4.rot_x(0.3)
            * Mat4.rot_y(-0.7)
            * Mat4.scaling(Vec3(2.0, 0.5, 1.5)))


@pytest.fixture
def general_matrix() -> Mat4:
    """Невырожденная матрица с ненулевой проективной строкой."""
    return Mat4([
        [4.0, 1.0, 0.0, 2.0],
        [1.0, 5.0, 1.0, 0.0],
        [0.0, 2.0, 6.0, 1.0],
        [0.5, 0.0, 1.0, 3.0],
    ])


@pytest.fixture
def arbitrary_matrix() -> Mat4:
    return Mat4(np.arange(16, dtype=np.float32) * 0.37 - 2.1)


# Пары (a, b) без вырожденного случая противоположных векторов.
VECTOR_PAIRS = [
    (Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0)),
    (Vec3(1.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0)),
    (Vec3(0.0, 1.0, 0.0), Vec3(1.0, 1.0, 0.0)),
    (Vec3(1.0, 2.0, 3.0), Vec3(-2.0, 0.5, 1.0)),
    (Vec3(0.0, 0.0, 1.0), Vec3(0.3, -0.4, math.sqrt(0.75))),
    (Vec3(1.0, 0.0, 0.0), Vec3(1.0, 1e-3, 0.0)),
    (Vec3(-3.0, 1.0, 2.0), Vec3(2.0, -1.0, -1.0)),
]


@pytest.fixture(params=VECTOR_PAIRS, ids=lambda p: f"{p[0]!r}->{p[1]!r}")
def vector_pair(request):
    a, b = request.param
    return a.copy(), b.copy()
