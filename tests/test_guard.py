"""Unit tests for fibserver/guard.py -- poisoning Mutex and RWLock.

Covers:
- an exception escaping a holder poisons the guard, Aborted does not
- clear_poison() restores service
- RWLock admits concurrent readers and excludes writers from readers
"""

import threading

import pytest

from fibserver.guard import Aborted, LockError, Mutex, RWLock

WAIT = 2.0


class Boom(Exception):
    pass


# ---------------------------------------------------------------------------
# Mutex
# ---------------------------------------------------------------------------


def test_mutex_yields_protected_value():
    m = Mutex([1])
    with m.lock() as value:
        value.append(2)
    with m.lock() as value:
        assert value == [1, 2]


def test_mutex_poisoned_by_failed_holder():
    m = Mutex({})
    with pytest.raises(Boom):
        with m.lock():
            raise Boom()
    assert m.poisoned
    with pytest.raises(LockError):
        with m.lock():
            pytest.fail("poisoned mutex must not enter the block")


def test_mutex_aborted_does_not_poison():
    m = Mutex({})
    with pytest.raises(Aborted):
        with m.lock():
            raise Aborted()
    assert not m.poisoned
    with m.lock() as value:
        assert value == {}


def test_mutex_clear_poison_recovers():
    m = Mutex(0)
    with pytest.raises(Boom):
        with m.lock():
            raise Boom()
    m.clear_poison()
    with m.lock() as value:
        assert value == 0


def test_mutex_excludes_concurrent_holders():
    m = Mutex({"n": 0})

    def work():
        for _ in range(1000):
            with m.lock() as value:
                value["n"] += 1

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    with m.lock() as value:
        assert value["n"] == 8000


# ---------------------------------------------------------------------------
# RWLock
# ---------------------------------------------------------------------------


def test_rwlock_readers_share_access():
    lock = RWLock({})
    barrier = threading.Barrier(3, timeout=WAIT)
    errors = []

    def reader():
        try:
            with lock.read():
                # all three must be inside at once to pass the barrier
                barrier.wait()
        except threading.BrokenBarrierError as e:
            errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_rwlock_writer_waits_for_reader():
    lock = RWLock([])
    reader_in = threading.Event()
    release_reader = threading.Event()
    writer_done = threading.Event()

    def reader():
        with lock.read():
            reader_in.set()
            release_reader.wait(WAIT)

    def writer():
        with lock.write() as value:
            value.append("w")
        writer_done.set()

    r = threading.Thread(target=reader)
    r.start()
    assert reader_in.wait(WAIT)
    w = threading.Thread(target=writer)
    w.start()
    assert not writer_done.wait(0.2)
    release_reader.set()
    assert writer_done.wait(WAIT)
    r.join()
    w.join()
    with lock.read() as value:
        assert value == ["w"]


def test_rwlock_failed_writer_poisons_readers_and_writers():
    lock = RWLock({})
    with pytest.raises(Boom):
        with lock.write():
            raise Boom()
    assert lock.poisoned
    with pytest.raises(LockError):
        with lock.read():
            pass
    with pytest.raises(LockError):
        with lock.write():
            pass
    lock.clear_poison()
    with lock.read() as value:
        assert value == {}


def test_rwlock_failed_reader_does_not_poison():
    lock = RWLock({})
    with pytest.raises(Boom):
        with lock.read():
            raise Boom()
    assert not lock.poisoned
    with lock.write() as value:
        value["ok"] = True
