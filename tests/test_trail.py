import pytest

from kickorbit.errors import ConfigurationError
from kickorbit.trail import TrailBuffer
from kickorbit.vector_utils import Vector2


def test_push_keeps_insertion_order():
    trail = TrailBuffer(5)
    for i in range(3):
        trail.push(Vector2(i, -i))
    assert len(trail) == 3
    assert list(trail) == [Vector2(0, 0), Vector2(1, -1), Vector2(2, -2)]
    assert trail.latest == Vector2(2, -2)


def test_bound_keeps_last_points_in_order():
    n, k = 10, 7
    trail = TrailBuffer(n)
    for i in range(n + k):
        trail.push(Vector2(float(i), 0.0))
    assert len(trail) == n
    assert [p.x for p in trail] == [float(i) for i in range(k, n + k)]


def test_clear():
    trail = TrailBuffer(3)
    trail.push(Vector2(1.0, 1.0))
    trail.clear()
    assert len(trail) == 0
    assert trail.latest is None
    assert trail.points() == ()


def test_points_is_a_snapshot():
    trail = TrailBuffer(3)
    trail.push(Vector2(1.0, 1.0))
    snap = trail.points()
    trail.push(Vector2(2.0, 2.0))
    assert snap == (Vector2(1.0, 1.0),)
    assert trail.capacity == 3


@pytest.mark.parametrize("capacity", [0, -1, 2.5, True])
def test_invalid_capacity(capacity):
    with pytest.raises(ConfigurationError):
        TrailBuffer(capacity)
