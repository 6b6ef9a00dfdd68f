import threading

import pytest

from threadlab.rwlock import (
    LockBusy,
    ReadWriteLock,
    retry_acquire,
    readwrite_multi,
    readwrite_single,
)


def test_many_readers_share_the_lock():
    lock = ReadWriteLock()
    lock.try_acquire_read()
    lock.try_acquire_read()
    assert lock.readers == 2
    lock.release()
    lock.release()
    assert lock.readers == 0


def test_writer_excludes_readers_and_writers():
    lock = ReadWriteLock()
    lock.acquire_write()
    errors = []

    def other():
        for attempt in (lock.try_acquire_read, lock.try_acquire_write):
            try:
                attempt()
            except LockBusy as exc:
                errors.append(exc)

    worker = threading.Thread(target=other)
    worker.start()
    worker.join()
    lock.release()
    assert len(errors) == 2
    assert lock.write_locked is False


def test_reader_blocks_writer():
    lock = ReadWriteLock()
    lock.acquire_read()
    with pytest.raises(LockBusy):
        lock.try_acquire_write()
    lock.release()
    lock.try_acquire_write()
    assert lock.write_locked is True
    lock.release()


def test_release_unheld_lock_raises():
    with pytest.raises(RuntimeError):
        ReadWriteLock().release()


def test_writer_cannot_relock():
    lock = ReadWriteLock()
    lock.acquire_write()
    with pytest.raises(RuntimeError):
        lock.acquire_read()
    lock.release()


def test_context_managers_release():
    lock = ReadWriteLock()
    with lock.read_locked():
        assert lock.readers == 1
    with lock.write_locked_block():
        assert lock.write_locked is True
    assert lock.readers == 0
    assert lock.write_locked is False


def test_retry_acquire_counts_retries():
    failures = iter([True, True, False])

    def attempt():
        if next(failures):
            raise LockBusy()

    assert retry_acquire(attempt, retries=5, delay=0) == 2


def test_retry_acquire_gives_up():
    calls = []

    def attempt():
        calls.append(1)
        raise LockBusy()

    with pytest.raises(LockBusy):
        retry_acquire(attempt, retries=3, delay=0)
    assert len(calls) == 4


def test_readwrite_single_reader_waits_for_writer():
    retries = readwrite_single(hold=0.3, work=0.05, delay=0.05)
    assert retries >= 1


def test_readwrite_single_runs_out_of_retries():
    with pytest.raises(LockBusy):
        readwrite_single(hold=0.5, work=0, delay=0.01)


def test_readwrite_multi_both_writers_wait():
    retries = readwrite_multi(hold=0.2, work=0.2, delay=0.05)
    assert len(retries) == 2
    assert all(count >= 1 for count in retries)