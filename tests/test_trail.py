import pytest

from cannonlab.core.trail import Trail
from cannonlab.dynamics.geometry import Point


def test_empty_trail():
    trail = Trail()
    assert len(trail) == 0
    assert list(trail) == []
    assert trail.interval == 60


def test_append_returns_new_trail():
    trail = Trail()
    longer = trail.append(Point(1.0, 2.0))
    assert len(trail) == 0
    assert longer.points == (Point(1.0, 2.0),)


def test_insertion_order_is_kept():
    trail = Trail()
    for i in range(5):
        trail = trail.append(Point(float(i), float(i * i)))
    assert [p.x for p in trail] == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_record_only_on_interval():
    trail = Trail(interval=60)
    p = Point(3.0, 4.0)
    assert trail.record(p, 59) is trail
    assert len(trail.record(p, 60)) == 1
    assert trail.record(p, 0) is trail


@pytest.mark.parametrize("n_updates", [0, 59, 60, 61, 119, 120, 600, 1000])
def test_sample_count_is_floor_of_updates(n_updates):
    trail = Trail()
    for count in range(1, n_updates + 1):
        trail = trail.record(Point(float(count), 0.0), count)
    assert len(trail) == n_updates // 60


def test_sampled_points_are_the_interval_updates():
    trail = Trail(interval=3)
    for count in range(1, 10):
        trail = trail.record(Point(float(count), 0.0), count)
    assert [p.x for p in trail] == [3.0, 6.0, 9.0]


def test_cleared_keeps_interval():
    trail = Trail(interval=7).append(Point(0.0, 0.0))
    empty = trail.cleared()
    assert len(empty) == 0
    assert empty.interval == 7


def test_invalid_interval():
    with pytest.raises(ValueError, match="at least 1"):
        Trail(interval=0)
