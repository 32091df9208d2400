import math

import pytest

from pcstream.vec3f import Vec2f, Vec3f, float_equal, float_error, quantize

A = Vec3f(1.5, -2.0, 3.25)
B = Vec3f(-0.5, 4.0, 2.0)


def approx_vec(v):
    return pytest.approx(tuple(v))


def test_float_error_bounds():
    assert float_error(1.0, 1.05, 0.1)
    assert not float_error(1.0, 1.2, 0.1)
    assert not float_error(1.0, 1.1, 0.1 - 1e-12) or float_error(1.0, 1.1, 0.1 - 1e-12) is False


def test_float_equal():
    assert float_equal(0.3, 0.3)
    assert not float_equal(0.3, 0.31)


def test_quantize_is_idempotent_and_multiple():
    q = quantize(7.3, 0.5)
    assert quantize(q, 0.5) == pytest.approx(q)
    assert (q / 0.5) == pytest.approx(round(q / 0.5))
    assert abs(q - 7.3) <= 0.25


def test_vec2f_iter():
    assert tuple(Vec2f(1.0, 2.0)) == (1.0, 2.0)


def test_add_sub_round_trip():
    assert (A + B - B).is_close(A)


def test_componentwise_mul():
    assert tuple(A * B) == pytest.approx((A.x * B.x, A.y * B.y, A.z * B.z))


def test_scale_by_scalar_values():
    assert tuple(A.scale(2.0)) == pytest.approx((3.0, -4.0, 6.5))


def test_scale_matches_magnitude():
    assert A.scale(3.0).magnitude() == pytest.approx(3.0 * A.magnitude())


def test_truncate_keeps_integers():
    v = Vec3f(2.0, -3.0, 4.0)
    assert v.truncate() == v
    t = A.truncate()
    assert all(c == int(c) for c in t)
    assert all(abs(c) <= abs(o) for c, o in zip(t, A))


def test_inverse_round_trip():
    assert A.inverse().inverse().is_close(A)


def test_inverse_of_zero_component_raises():
    with pytest.raises(ZeroDivisionError):
        Vec3f(0.0, 1.0, 1.0).inverse()


def test_normalize_has_unit_length():
    assert A.normalize().magnitude() == pytest.approx(1.0)


def test_normalize_zero_vector():
    assert Vec3f().normalize() == Vec3f()


def test_cross_is_orthogonal_to_inputs():
    c = A.cross(B)
    assert c.dot(A) == pytest.approx(0.0, abs=1e-9)
    assert c.dot(B) == pytest.approx(0.0, abs=1e-9)


def test_cross_is_anticommutative():
    assert (A.cross(B) + B.cross(A)).is_close(Vec3f())


def test_dot_of_self_is_squared_magnitude():
    assert A.dot(A) == pytest.approx(A.magnitude() ** 2)


def test_angle_between_parallel_and_orthogonal():
    assert A.angle_between(A.scale(2.0)) == pytest.approx(0.0, abs=1e-6)
    assert A.angle_between(A.cross(B)) == pytest.approx(math.pi / 2)


def test_ordering():
    lo, hi = Vec3f(1.0, 2.0, 3.0), Vec3f(1.0, 2.0, 4.0)
    assert lo.less(hi) and hi.greater(lo)
    assert not lo.greater(hi) and not hi.less(lo)
    assert lo.less_equal(lo) and lo.greater_equal(lo)
    assert not lo.less(lo) and not lo.greater(lo)


def test_reflect_twice_with_unit_normal_is_identity():
    n = B.normalize()
    assert A.reflect(n).reflect(n).is_close(A)
    assert A.reflect(n).magnitude() == pytest.approx(A.magnitude())


def test_vector_quantize_componentwise():
    q = A.quantize(0.5)
    assert tuple(q) == pytest.approx(tuple(quantize(c, 0.5) for c in A))


def test_mvp_identity():
    identity = [1.0, 0, 0, 0, 0, 1.0, 0, 0, 0, 0, 1.0, 0, 0, 0, 0, 1.0]
    assert A.mvp_mul(identity).is_close(A)


def test_mvp_translation_is_column_major():
    t = B
    matrix = [1.0, 0, 0, 0, 0, 1.0, 0, 0, 0, 0, 1.0, 0, t.x, t.y, t.z, 1.0]
    assert A.mvp_mul(matrix).is_close(A + t)


def test_mvp_wrong_length():
    with pytest.raises(ValueError):
        A.mvp_mul([1.0] * 9)


def test_mvp_zero_w_raises():
    with pytest.raises(ZeroDivisionError):
        A.mvp_mul([0.0] * 16)


def test_rotate_zero_angle_is_identity():
    assert A.rotate(0.0, B).is_close(A)


def test_rotate_preserves_length_and_axis_component():
    r = A.rotate(0.7, B)
    axis = B.normalize()
    assert r.magnitude() == pytest.approx(A.magnitude())
    assert r.dot(axis) == pytest.approx(A.dot(axis))


def test_rotate_inverse():
    assert A.rotate(1.1, B).rotate(-1.1, B).is_close(A)