import pytest

from teletrace.collections import EvictedQueue, LruMap


def test_add():
    q = EvictedQueue(3)
    q.add("value1")
    q.add("value2")
    assert len(q) == 2
    assert q.dropped_count == 0


def test_drop_count():
    q = EvictedQueue(3)
    for value in ["value1", "value2", "value3", "value1", "value4"]:
        q.add(value)
    assert len(q) == 3
    assert q.dropped_count == 2
    assert q.items() == ["value3", "value1", "value4"]


def test_queue_iterates_oldest_first():
    q = EvictedQueue(2)
    q.add("a")
    q.add("b")
    assert list(q) == ["a", "b"]


def test_lru_replacing_key_keeps_value_and_evicts_oldest():
    m = LruMap(2)
    m.add("key1", "value1")
    m.add("key2", "value2")
    m.add("key1", "value3")
    m.add("key4", "value4")
    assert m.items() == [("key1", "value3"), ("key4", "value4")]
    assert m.dropped_count == 1


def test_lru_within_capacity_drops_nothing():
    m = LruMap(3)
    m.add("key1", "value1")
    m.add("key2", "value2")
    assert len(m) == 2
    assert m.dropped_count == 0
    assert m.items() == [("key1", "value1"), ("key2", "value2")]


@pytest.mark.parametrize("size", [0, -1])
def test_lru_rejects_non_positive_size(size):
    with pytest.raises(ValueError):
        LruMap(size)