import math

import pytest

from kickorbit.vector_utils import Vector2, clamp


def test_add_sub_scale():
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -4.0)
    assert a.add(b) == Vector2(4.0, -2.0)
    assert a.sub(b) == Vector2(-2.0, 6.0)
    assert a.scale(2.5) == Vector2(2.5, 5.0)
    assert a + b == a.add(b)
    assert 2 * a == a * 2 == Vector2(2.0, 4.0)


def test_magnitude_and_normalize():
    v = Vector2(3.0, 4.0)
    assert v.magnitude() == 5.0
    n = v.normalize()
    assert n.x == pytest.approx(0.6)
    assert n.y == pytest.approx(0.8)
    assert n.magnitude() == pytest.approx(1.0)


def test_normalize_zero_vector_is_zero():
    assert Vector2(0.0, 0.0).normalize() == Vector2(0.0, 0.0)


def test_from_angle():
    v = Vector2.from_angle(math.pi / 2, 10.0)
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(10.0)


def test_is_immutable_and_unpackable():
    v = Vector2(1.0, 2.0)
    with pytest.raises(AttributeError):
        v.x = 5.0
    x, y = v
    assert (x, y) == (1.0, 2.0)
    assert v[1] == 2.0


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
