import math

import pytest

from dodgeball.math_utils import Vector2, distance, normalize


def test_vector2_add_sub_mul():
    a = Vector2(1, 2)
    b = Vector2(3, 4)
    assert a + b == Vector2(4, 6)
    assert b - a == Vector2(2, 2)
    assert a * 2 == Vector2(2, 4)
    assert -a == Vector2(-1, -2)


def test_vector2_rmul():
    v = Vector2(1.5, -2.0)
    result = 3 * v
    assert result.x == pytest.approx(4.5)
    assert result.y == pytest.approx(-6.0)


def test_vector2_inplace_ops_return_self():
    v = Vector2(2, 3)
    assert v.add_inplace(Vector2(1, 1)) is v
    assert v.mul_inplace(2) is v
    assert v == Vector2(6, 8)
    v.sub_inplace(Vector2(6, 8))
    assert v == Vector2(0, 0)


def test_normalize_zero_vector_is_zero():
    v = Vector2(0, 0)
    assert v.normalize() == Vector2(0, 0)
    assert normalize(v) == Vector2(0, 0)


def test_normalize_unit_length():
    n = Vector2(3, 4).normalize()
    assert n.length() == pytest.approx(1.0)
    assert n == Vector2(0.6, 0.8)


def test_perpendicular_is_counter_clockwise():
    v = Vector2(1, 0)
    p = v.perpendicular()
    assert p == Vector2(0, 1)
    assert v.dot(p) == 0


def test_limit_inplace():
    v = Vector2(30, 40)
    v.limit_inplace(5)
    assert v.length() == pytest.approx(5.0)
    assert v.x == pytest.approx(3.0)

    short = Vector2(1, 1)
    short.limit_inplace(5)
    assert short == Vector2(1, 1)


def test_distance():
    assert distance(Vector2(0, 0), Vector2(3, 4)) == pytest.approx(5.0)
    assert Vector2(1, 1).distance_to(Vector2(1, 1)) == 0


def test_vector2_equality_tolerance():
    base = Vector2(1.0, 1.0)
    close = Vector2(1.0 + 5e-10, 1.0 - 5e-10)
    far = Vector2(1.0, 1.0001)

    assert base == close
    assert base != far
    assert base != (1.0, 1.0)


def test_copy_is_independent():
    v = Vector2(1, 2)
    c = v.copy()
    c.x = 10
    assert v.x == 1
    assert c.as_tuple() == (10, 2)


def test_update_coerces_to_float():
    v = Vector2()
    v.update(1, 2)
    assert isinstance(v.x, float)
    assert math.isclose(v.y, 2.0)
