"""Waiting for another thread: busy polling, condition variables and timed waits."""

from __future__ import annotations

import threading
import time


class Latch:
    """A one-shot flag guarded by a mutex and a condition variable.

    :meth:`set` changes the state and wakes a waiter; :meth:`wait` sleeps on
    the condition until the state has been set.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._state = False

    @property
    def is_set(self) -> bool:
        """True once :meth:`set` has been called."""
        with self._cond:
            return self._state

    def set(self) -> None:
        """Mark the latch as set and wake the waiting thread."""
        with self._cond:
            self._state = True
            self._cond.notify()

    def wait(self) -> None:
        """Block until the latch has been set."""
        with self._cond:
            while not self._state:
                self._cond.wait()


class _Flag:
    def __init__(self) -> None:
        self.done = False


def busy_join(poll_interval: float = 0.1) -> int:
    """Wait for a child thread by polling a shared flag.

    The calling thread stays active, checking the flag over and over until
    the child has set it. Returns how many times it had to wait.
    """
    print("initial thread: begin")
    flag = _Flag()

    def child() -> None:
        print("child thread: begin")
        flag.done = True

    worker = threading.Thread(target=child)
    worker.start()
    polls = 0
    while not flag.done:
        print("initial thread: waiting...")
        polls += 1
        time.sleep(poll_interval)
    print("initial thread: end")
    worker.join()
    return polls


def manual_join() -> bool:
    """Wait for a child thread through a :class:`Latch` the child sets on exit.

    Returns the state of the latch once the wait is over.
    """
    print("initial thread: begin")
    latch = Latch()

    def child() -> None:
        print("child thread: begin")
        latch.set()

    worker = threading.Thread(target=child)
    worker.start()
    latch.wait()
    print("initial thread: end")
    worker.join()
    return latch.is_set


def timed_wait(timeout: float = 3.0) -> float:
    """Wait on a condition nobody signals until ``timeout`` seconds have passed.

    Spurious wake-ups go back to waiting for the same deadline. Returns the
    seconds actually spent waiting.
    """
    cond = threading.Condition()
    with cond:
        start = time.monotonic()
        deadline = start + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            if not cond.wait(remaining):
                break
        return time.monotonic() - start


__all__ = ["Latch", "busy_join", "manual_join", "timed_wait"]