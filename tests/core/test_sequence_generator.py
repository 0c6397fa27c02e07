"""
ChainTrace Sequence — Tests
=============================
Monotonic, never reused, persisted by snapshot.
"""

import threading

import pytest

from core.sequence import SEQUENCE_PRODUCT, SequenceGenerator, SequenceSnapshot


def test_starts_at_zero_and_increments_by_one():
    seq = SequenceGenerator(SEQUENCE_PRODUCT)
    assert [seq.next() for _ in range(4)] == [0, 1, 2, 3]


def test_snapshot_restore_continues_without_reuse():
    seq = SequenceGenerator(SEQUENCE_PRODUCT)
    seq.next()
    seq.next()
    snap = seq.snapshot()
    assert snap == SequenceSnapshot(name=SEQUENCE_PRODUCT, next_value=2)

    restored = SequenceGenerator.restore(snap)
    assert restored.name == SEQUENCE_PRODUCT
    assert restored.next() == 2


def test_negative_start_rejected():
    with pytest.raises(ValueError):
        SequenceGenerator(SEQUENCE_PRODUCT, start_at=-1)
    with pytest.raises(ValueError):
        SequenceSnapshot(name=SEQUENCE_PRODUCT, next_value=-5)


def test_concurrent_issue_never_duplicates():
    seq = SequenceGenerator(SEQUENCE_PRODUCT)
    issued = []
    lock = threading.Lock()

    def worker():
        local = [seq.next() for _ in range(200)]
        with lock:
            issued.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(issued) == list(range(1600))
