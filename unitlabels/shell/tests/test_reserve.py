import threading

import pytest

from unitlabels.patterns.schema import SchemeId
from unitlabels.shell.memory_oracle import InMemoryUniquenessOracle
from unitlabels.shell.oracle_factory import create_uniqueness_oracle
from unitlabels.shell.reserve import ReservationError, reserve_next_label
from unitlabels.shell.uniqueness_oracle import LabelTakenError, UniquenessOracle


class _RacingOracle(InMemoryUniquenessOracle):
    """Loses the first `races` claims to a concurrent writer."""

    races = 0

    def claim(self, property_id, label):
        if self.races > 0:
            self.races -= 1
            super().claim(property_id, label)  # the other writer gets there first
        super().claim(property_id, label)


def test_factory():
    assert isinstance(create_uniqueness_oracle("memory"), InMemoryUniquenessOracle)
    with pytest.raises(ValueError):
        create_uniqueness_oracle("redis")


def test_interface_is_abstract():
    oracle = UniquenessOracle()
    with pytest.raises(NotImplementedError):
        oracle.snapshot("p1")
    with pytest.raises(NotImplementedError):
        oracle.claim("p1", "101")


def test_memory_oracle_claims():
    oracle = InMemoryUniquenessOracle()
    oracle.claim("p1", "102")
    oracle.claim("p1", "101")
    oracle.claim("p2", "101")
    assert oracle.snapshot("p1") == ["101", "102"]
    assert oracle.snapshot("missing") == []
    with pytest.raises(LabelTakenError) as exc:
        oracle.claim("p1", "101")
    assert exc.value.label == "101"
    assert exc.value.property_id == "p1"


def test_reserve_first_label():
    oracle = InMemoryUniquenessOracle()
    s = reserve_next_label(oracle, "p1", SchemeId.ALPHA_NUMERIC)
    assert s.next_label == "A-1001"
    assert oracle.snapshot("p1") == ["A-1001"]


def test_reserve_continues_numbering():
    oracle = InMemoryUniquenessOracle(labels={"p1": {"101", "102"}})
    assert reserve_next_label(oracle, "p1", "sequential").next_label == "103"
    assert reserve_next_label(oracle, "p1", "sequential").next_label == "104"


def test_reserve_requires_property_id():
    with pytest.raises(ValueError, match="Property ID is required"):
        reserve_next_label(InMemoryUniquenessOracle(), "", "sequential")


def test_reserve_retries_after_losing_a_race():
    oracle = _RacingOracle(labels={"p1": {"101"}})
    oracle.races = 2
    s = reserve_next_label(oracle, "p1", SchemeId.SEQUENTIAL)
    assert s.next_label == "104"
    assert oracle.snapshot("p1") == ["101", "102", "103", "104"]


def test_reserve_gives_up():
    oracle = _RacingOracle()
    oracle.races = 10
    with pytest.raises(ReservationError):
        reserve_next_label(oracle, "p1", "suite", max_attempts=3)


def test_concurrent_reservations_are_distinct():
    oracle = InMemoryUniquenessOracle()
    results = []
    lock = threading.Lock()

    def worker():
        s = reserve_next_label(oracle, "p1", SchemeId.FLOOR_BASED, 2, max_attempts=50)
        with lock:
            results.append(s.next_label)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert len(set(results)) == 8
    assert sorted(results) == oracle.snapshot("p1")
