# -*- coding: utf-8 -*-
import math

import numpy as np
import pytest

from lakernel.math import Vec3, Vec4, Mat4


# ----------------------------------------------------------------------
#  Композиция и обратная матрица
# ----------------------------------------------------------------------
def test_identity_is_neutral(trs_matrix, general_matrix, arbitrary_matrix):
    I = Mat4.identity()
    for m in (trs_matrix, general_matrix, arbitrary_matrix):
        assert I * m == m
        assert m * I == m


def test_default_is_zero():
    assert Mat4() == Mat4.zero()
    assert np.all(Mat4().cells == 0.0)
    assert np.all(Mat4(2.5).cells == 2.5)
    with pytest.raises(ValueError):
        Mat4([1.0, 2.0, 3.0])


@pytest.mark.parametrize("name", ["trs_matrix", "general_matrix"])
def test_inverse_roundtrip(name, request):
    m = request.getfixturevalue(name)
    inv = m.inverse()
    assert np.allclose((m * inv).m, np.identity(4), atol=1e-4)
    assert np.allclose((inv * m).m, np.identity(4), atol=1e-4)


def test_inverse_matches_numpy(general_matrix):
    expected = np.linalg.inv(general_matrix.m.astype(np.float64))
    assert np.allclose(general_matrix.inverse().m, expected, atol=1e-5)


def test_determinant():
    assert Mat4.scaling(Vec3(2.0, 3.0, 4.0)).determinant() == 24.0
    assert Mat4.identity().determinant() == 1.0
    assert Mat4.rot_z(0.8).determinant() == pytest.approx(1.0, abs=1e-6)


def test_inverse_of_singular_is_not_finite():
    with np.errstate(all="ignore"):
        inv = Mat4(1.0).inverse()
    assert not np.any(np.isfinite(inv.m))


def test_try_inverse(trs_matrix, caplog):
    caplog.set_level("WARNING", logger="lakernel")
    assert trs_matrix.try_inverse() == trs_matrix.inverse()
    assert Mat4(1.0).try_inverse() is None
    assert "[Mat4] Singular matrix" in caplog.text
    assert Mat4.scaling(0.01).try_inverse(eps=1e-3) is None


def test_scaling_inverse():
    inv = Mat4.scaling(Vec3(2.0, 4.0, 0.5)).inverse()
    assert inv.isclose(Mat4.scaling(Vec3(0.5, 0.25, 2.0)))


# ----------------------------------------------------------------------
#  Преобразование точек и направлений
# ----------------------------------------------------------------------
def test_rotations_map_axes():
    assert Mat4.rot_z(math.pi / 2).mul_point(Vec3.unit_x()).isclose(Vec3.unit_y(), 1e-5)
    assert Mat4.rot_x(math.pi / 2).mul_point(Vec3.unit_y()).isclose(Vec3.unit_z(), 1e-5)
    assert Mat4.rot_y(math.pi / 2).mul_point(Vec3.unit_z()).isclose(Vec3.unit_x(), 1e-5)
    assert Mat4.rot_y(math.pi / 2).mul_point(Vec3.unit_x()).isclose(-Vec3.unit_z(), 1e-5)


def test_direction_ignores_translation():
    t = Mat4.trans(Vec3(1.0, 2.0, 3.0))
    v = Vec3(0.3, -0.4, 5.0)
    assert t.mul_direction(v) == v
    assert t.mul_point(v).isclose(Vec3(1.3, 1.6, 8.0), 1e-6)


def test_trs_composition_order():
    m = Mat4.trans(Vec3(0.0, 0.0, 5.0)) * Mat4.rot_y(math.pi / 2) * Mat4.scaling(2.0)
    p = m.mul_point(Vec3(1.0, 0.0, 0.0))
    assert p.isclose(Vec3(0.0, 0.0, 3.0), 1e-5)

    step = Mat4.scaling(2.0).mul_point(Vec3(1.0, 0.0, 0.0))
    step = Mat4.rot_y(math.pi / 2).mul_point(step)
    step = Mat4.trans(Vec3(0.0, 0.0, 5.0)).mul_point(step)
    assert p.isclose(step, 1e-5)


def test_mul_point_divides_by_w():
    m = Mat4.identity()
    m.cells[15] = 2.0
    assert m.mul_point(Vec3(2.0, 4.0, 6.0)) == Vec3(1.0, 2.0, 3.0)


def test_mul_vec4_has_no_divide():
    m = Mat4.trans(Vec3(1.0, 2.0, 3.0))
    assert m * Vec4(1.0, 1.0, 1.0, 1.0) == Vec4(2.0, 3.0, 4.0, 1.0)
    assert m * Vec4(1.0, 1.0, 1.0, 0.0) == Vec4(1.0, 1.0, 1.0, 0.0)
    assert m @ Vec4(0.0, 0.0, 0.0, 2.0) == Vec4(2.0, 4.0, 6.0, 2.0)


# ----------------------------------------------------------------------
#  Проекция и вид
# ----------------------------------------------------------------------
def test_perspective_depth_range():
    p = Mat4.perspective(math.radians(60.0), 16 / 9, 1.0, 10.0)
    near = p.mul_point(Vec3(0.0, 0.0, -1.0))
    far = p.mul_point(Vec3(0.0, 0.0, -10.0))
    assert near.z == pytest.approx(-1.0, abs=1e-5)
    assert far.z == pytest.approx(1.0, abs=1e-5)
    assert p.mul_point(Vec3(0.0, 0.0, -5.0)).is_ndc()


def test_look_at():
    view = Mat4.look_at(Vec3(0.0, 0.0, 5.0), Vec3.zero(), Vec3.unit_y())
    assert view.mul_point(Vec3.zero()).isclose(Vec3(0.0, 0.0, -5.0))
    assert view.mul_point(Vec3(0.0, 0.0, 5.0)).isclose(Vec3.zero())
    assert view.mul_direction(Vec3.unit_x()).isclose(Vec3.unit_x())


# ----------------------------------------------------------------------
#  Построители и доступ к ячейкам
# ----------------------------------------------------------------------
def test_builders_overwrite_everything(arbitrary_matrix):
    m = arbitrary_matrix.copy()
    m.make_identity()
    assert m == Mat4.identity()

    m = arbitrary_matrix.copy().make_rot_x(0.4)
    assert m == Mat4.rot_x(0.4)
    m = arbitrary_matrix.copy().make_trans(Vec3(1.0, 2.0, 3.0))
    assert m == Mat4.trans(Vec3(1.0, 2.0, 3.0))
    m = arbitrary_matrix.copy().make_scale(Vec3(2.0))
    assert m == Mat4.scaling(2.0)
    assert arbitrary_matrix.copy().make_zero() == Mat4.zero()
    assert arbitrary_matrix.copy().fill(3.0) == Mat4(3.0)


def test_axis_accessors_read_columns():
    m = Mat4(np.arange(16))
    c = m.cells
    assert m.x_axis == Vec3(c[0], c[4], c[8])
    assert m.y_axis == Vec3(c[1], c[5], c[9])
    assert m.z_axis == Vec3(c[2], c[6], c[10])
    assert m.translation == Vec3(c[3], c[7], c[11])
    assert m.scale == Vec3(c[0], c[5], c[10])


def test_axis_setters_write_cells():
    m = Mat4.identity()
    m.x_axis = Vec3(1.0, 2.0, 3.0)
    m.translation = Vec3(7.0, 8.0, 9.0)
    m.scale = Vec3(4.0, 5.0, 6.0)
    c = m.cells
    assert (c[0], c[4], c[8]) == (4.0, 2.0, 3.0)
    assert (c[3], c[7], c[11]) == (7.0, 8.0, 9.0)
    assert (c[5], c[10], c[15]) == (5.0, 6.0, 1.0)


def test_y_and_z_axis_setters():
    m = Mat4.zero()
    m.y_axis = Vec3(1.0, 2.0, 3.0)
    m.z_axis = Vec3(4.0, 5.0, 6.0)
    c = m.cells
    assert (c[1], c[5], c[9]) == (1.0, 2.0, 3.0)
    assert (c[2], c[6], c[10]) == (4.0, 5.0, 6.0)
    assert m.y_axis == Vec3(1.0, 2.0, 3.0)
    assert m.z_axis == Vec3(4.0, 5.0, 6.0)
    assert m.x_axis == Vec3.zero()
    assert m.translation == Vec3.zero()


def test_translate_and_stretch_are_incremental():
    m = Mat4.trans(Vec3(1.0, 0.0, 0.0))
    m.translate(Vec3(0.5, 2.0, 0.0))
    assert m.translation == Vec3(1.5, 2.0, 0.0)

    s = Mat4.scaling(Vec3(2.0, 3.0, 4.0))
    s.stretch(Vec3(0.5, 2.0, 1.0))
    assert s.scale == Vec3(1.0, 6.0, 4.0)


def test_cells_are_row_major_view():
    m = Mat4(np.arange(16))
    assert m.m[1, 2] == 6.0
    assert m.cells[6] == 6.0
    m.cells[6] = -1.0
    assert m.m[1, 2] == -1.0


def test_transposed(arbitrary_matrix):
    t = arbitrary_matrix.transposed()
    assert np.array_equal(t.m, arbitrary_matrix.m.T)
    assert t.transposed() == arbitrary_matrix
    t.cells[1] = 100.0
    assert t.m[0, 1] == 100.0


# ----------------------------------------------------------------------
#  Арифметика
# ----------------------------------------------------------------------
def test_arithmetic(general_matrix):
    a = general_matrix
    b = Mat4.identity()
    assert (a + b).m[0, 0] == 5.0
    assert (a - a) == Mat4.zero()
    assert (a * 2.0) == (2.0 * a)
    assert (a * 2.0).m[1, 1] == 10.0
    assert (a / 2.0).m[1, 1] == 2.5
    assert a @ b == a


def test_inplace_operators(trs_matrix, general_matrix):
    expected = trs_matrix * general_matrix
    m = trs_matrix.copy()
    same = m
    m *= general_matrix
    assert m is same
    assert m == expected

    m += Mat4.identity()
    m -= Mat4.identity()
    assert m.isclose(expected, 1e-5)

    before = m.copy()
    m /= 4.0
    assert m == before / 4.0


def test_unsupported_operands():
    with pytest.raises(TypeError):
        Mat4.identity() * Vec3(1.0, 2.0, 3.0)
    with pytest.raises(TypeError):
        Mat4.identity() + 1.0


def test_inplace_mul_by_vec4_keeps_matrix():
    m = Mat4.trans(Vec3(1.0, 2.0, 3.0))
    before = m.copy()
    with pytest.raises(TypeError):
        m *= Vec4(1.0, 1.0, 1.0, 1.0)
    assert isinstance(m, Mat4)
    assert m == before


def test_to_gl_is_transposed_copy(trs_matrix):
    gl = trs_matrix.to_gl()
    assert np.array_equal(gl, trs_matrix.m.T)
    assert gl.flags["C_CONTIGUOUS"]
    gl[0, 0] = 99.0
    assert trs_matrix.m[0, 0] != 99.0
