"""Read-write locks: many readers or one writer, with non-blocking attempts."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Iterator

MAX_RETRIES = 10


class LockBusy(Exception):
    """Raised by a non-blocking attempt when the lock cannot be taken at once."""


class ReadWriteLock:
    """A lock shared by any number of readers or held by a single writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer: int | None = None

    @property
    def readers(self) -> int:
        """Number of read locks currently held."""
        with self._cond:
            return self._readers

    @property
    def write_locked(self) -> bool:
        """True while some thread holds the write lock."""
        with self._cond:
            return self._writer is not None

    def _check_not_writer(self) -> None:
        if self._writer == threading.get_ident():
            raise RuntimeError("calling thread already holds the write lock")

    def acquire_read(self) -> None:
        """Take a read lock, waiting while a writer holds the lock."""
        with self._cond:
            self._check_not_writer()
            while self._writer is not None:
                self._cond.wait()
            self._readers += 1

    def acquire_write(self) -> None:
        """Take the write lock, waiting while anyone else holds the lock."""
        with self._cond:
            self._check_not_writer()
            while self._writer is not None or self._readers:
                self._cond.wait()
            self._writer = threading.get_ident()

    def try_acquire_read(self) -> None:
        """Take a read lock now or raise :class:`LockBusy`."""
        with self._cond:
            self._check_not_writer()
            if self._writer is not None:
                raise LockBusy("write lock is held")
            self._readers += 1

    def try_acquire_write(self) -> None:
        """Take the write lock now or raise :class:`LockBusy`."""
        with self._cond:
            self._check_not_writer()
            if self._writer is not None or self._readers:
                raise LockBusy("lock is held")
            self._writer = threading.get_ident()

    def release(self) -> None:
        """Release the write lock held by this thread, or else one read lock."""
        with self._cond:
            if self._writer == threading.get_ident():
                self._writer = None
            elif self._readers:
                self._readers -= 1
            elif self._writer is not None:
                raise RuntimeError("write lock is held by another thread")
            else:
                raise RuntimeError("lock is not held")
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[ReadWriteLock]:
        """Hold a read lock for the duration of a ``with`` block."""
        self.acquire_read()
        try:
            yield self
        finally:
            self.release()

    @contextmanager
    def write_locked_block(self) -> Iterator[ReadWriteLock]:
        """Hold the write lock for the duration of a ``with`` block."""
        self.acquire_write()
        try:
            yield self
        finally:
            self.release()


def _thread_id() -> str:
    return f"{threading.get_ident():#x}"


def retry_acquire(
    try_acquire: Callable[[], Any],
    retries: int = MAX_RETRIES,
    delay: float = 1.0,
) -> int:
    """Call ``try_acquire`` until it stops raising :class:`LockBusy`.

    Sleeps ``delay`` seconds between attempts and gives up, re-raising
    :class:`LockBusy`, after ``retries`` retries. Returns how many retries
    were needed.
    """
    count = 0
    while True:
        try:
            try_acquire()
        except LockBusy:
            if count >= retries:
                print(f"Thread {_thread_id()}: retried to many times, exiting failure")
                raise
            count += 1
            print(f"Thread {_thread_id()}: couldn't get the lock, do other work and RETRY...")
            time.sleep(delay)
        else:
            return count


def _read_routine(lock: ReadWriteLock, work: float, delay: float) -> int:
    print("Thread: getting read lock")
    retries = retry_acquire(lock.try_acquire_read, MAX_RETRIES, delay)
    time.sleep(work)
    print("Thread: unlocking read lock")
    lock.release()
    print("Thread: completed, exiting")
    return retries


def _write_routine(lock: ReadWriteLock, work: float, delay: float) -> int:
    tid = _thread_id()
    print(f"Thread {tid}: getting write lock")
    retries = retry_acquire(lock.try_acquire_write, MAX_RETRIES, delay)
    time.sleep(work)
    print(f"Thread {tid}: unlocking write lock")
    lock.release()
    print(f"Thread {tid}: completed, exiting")
    return retries


def readwrite_single(hold: float = 5.0, work: float = 2.0, delay: float = 1.0) -> int:
    """Hold the write lock while a reader thread keeps trying for a read lock.

    Returns how many retries the reader needed; raises :class:`LockBusy`
    if it ran out of retries.
    """
    lock = ReadWriteLock()
    print("Main: locking write lock")
    lock.acquire_write()
    with ThreadPoolExecutor(max_workers=1) as pool:
        try:
            print("Main: creating a new thread")
            future = pool.submit(_read_routine, lock, work, delay)
            print("Main: waiting holding the write lock")
            time.sleep(hold)
        finally:
            print("Main: unlocking the write lock")
            lock.release()
        print("Main: waiting the new thread to join")
        retries = future.result()
    print("Main: completed, exiting")
    return retries


def readwrite_multi(hold: float = 1.0, work: float = 2.0, delay: float = 1.0) -> list[int]:
    """Hold the write lock while two writer threads keep trying for it.

    Returns the retries each writer needed, in the order they were created.
    """
    lock = ReadWriteLock()
    print("Main: locking write lock")
    lock.acquire_write()
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = []
        try:
            for number in (1, 2):
                print(f"Main: creating thread {number}")
                futures.append(pool.submit(_write_routine, lock, work, delay))
            print("Main: waiting holding the write lock")
            time.sleep(hold)
        finally:
            print("Main: unlocking the write lock")
            lock.release()
        print("Main: waiting the threads to join")
        results = [future.result() for future in futures]
    print("Main: completed, exiting")
    return results


__all__ = [
    "LockBusy",
    "ReadWriteLock",
    "retry_acquire",
    "readwrite_single",
    "readwrite_multi",
]