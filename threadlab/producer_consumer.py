"""Producers and consumers sharing a buffer through mutexes and condition variables."""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Any, Callable

LOOPS = 10
MAXSIZE = 5

_NOTHING = object()


def _thread_id() -> str:
    return f"{threading.get_ident():#x}"


class SingleSlot:
    """A buffer holding at most one value.

    :meth:`put` waits until the slot is empty, :meth:`get` until it is full.
    Every change wakes all waiters, so any number of producers and consumers
    may share one slot.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._filled = False
        self._value: Any = None

    @property
    def filled(self) -> bool:
        """True while the slot holds a value."""
        with self._cond:
            return self._filled

    def put(self, value: Any) -> None:
        """Store ``value`` once the slot is empty."""
        with self._cond:
            while self._filled:
                self._cond.wait()
            self._value = value
            self._filled = True
            self._cond.notify_all()

    def get(self) -> Any:
        """Take the value once the slot is full."""
        with self._cond:
            while not self._filled:
                self._cond.wait()
            value, self._value = self._value, None
            self._filled = False
            self._cond.notify_all()
            return value


class BoundedBuffer:
    """A first-in first-out buffer of at most ``maxsize`` values."""

    def __init__(self, maxsize: int = MAXSIZE) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._maxsize = maxsize
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)
        self._stopped = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def put(self, value: Any) -> None:
        """Append ``value``, waiting while the buffer is full."""
        with self._lock:
            while len(self._items) == self._maxsize:
                print("producer waiting")
                self._not_full.wait()
                print("producer wakesup")
            self._items.append(value)
            self._not_empty.notify()

    def get(self) -> Any:
        """Remove and return the oldest value, waiting while the buffer is empty."""
        with self._lock:
            while not self._items:
                self._not_empty.wait()
            return self._take()

    def _take(self) -> Any:
        value = self._items.popleft()
        self._not_full.notify()
        return value

    def _get_unless_stopped(self, tid: str) -> Any:
        with self._lock:
            while not self._items and not self._stopped:
                print(f"consumer {tid} waiting")
                self._not_empty.wait()
                print(f"consumer {tid} wakesup")
            if not self._items:
                return _NOTHING
            return self._take()

    def _mark_stopped(self) -> int:
        with self._lock:
            self._stopped += 1
            self._not_empty.notify_all()
            return self._stopped

    def _get_before(self, deadline: float, tid: str) -> tuple[Any, bool]:
        with self._lock:
            timed_out = False
            while not self._items and not timed_out:
                print(f"consumer {tid} waiting")
                remaining = deadline - time.monotonic()
                timed_out = remaining <= 0 or not self._not_empty.wait(remaining)
                print(f"consumer {tid} wakesup")
            if not self._items:
                return _NOTHING, True
            return self._take(), timed_out


def _run(producer: Callable[[], None], consumer: Callable[[list], None], consumers: int) -> list[list[Any]]:
    if consumers < 1:
        raise ValueError("at least one consumer is needed")
    results: list[list[Any]] = [[] for _ in range(consumers)]
    threads = [threading.Thread(target=producer)]
    threads.extend(threading.Thread(target=consumer, args=(got,)) for got in results)
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results


def run_single_slot(loops: int = LOOPS, consumers: int = 1) -> list[list[int]]:
    """One producer and ``consumers`` consumers share a :class:`SingleSlot`.

    Each consumer takes ``loops`` values, so the producer puts
    ``loops * consumers`` values, counting up from 0. Returns what each
    consumer received, in the order the consumers were started.
    """
    slot = SingleSlot()

    def producer() -> None:
        for value in range(loops * consumers):
            slot.put(value)
        print("producer exiting thread")

    def consumer(got: list) -> None:
        for _ in range(loops):
            value = slot.get()
            print(value)
            got.append(value)
        print("consumer exiting thread")

    results = _run(producer, consumer, consumers)
    print("run_single_slot(): End")
    return results


def run_bounded(loops: int = LOOPS, consumers: int = 2, maxsize: int = MAXSIZE) -> list[list[int]]:
    """One producer puts ``loops`` values into a :class:`BoundedBuffer`.

    Consumers take up to ``loops`` values each. Once the producer has
    finished and the buffer is empty, waiting consumers give up; every thread
    that finishes wakes the consumers still waiting. Returns what each
    consumer received.
    """
    buffer = BoundedBuffer(maxsize)

    def producer() -> None:
        for value in range(loops):
            buffer.put(value)
            print(f"producer putting {value} from the buffer")
        stop = buffer._mark_stopped()
        print(f"producer exited: stop = {stop}")

    def consumer(got: list) -> None:
        tid = _thread_id()
        for _ in range(loops):
            value = buffer._get_unless_stopped(tid)
            if value is _NOTHING:
                break
            print(f"consumer {tid} getting {value} from the buffer")
            got.append(value)
        stop = buffer._mark_stopped()
        print(f"consumer {tid} exited, stop = {stop}")

    results = _run(producer, consumer, consumers)
    print("run_bounded(): End")
    return results


def run_timed(
    loops: int = LOOPS, consumers: int = 2, timeout: float = 2.0, maxsize: int = MAXSIZE
) -> list[list[int]]:
    """Like :func:`run_bounded`, but consumers stop after waiting ``timeout`` seconds.

    A consumer that times out takes a value if one is there and then leaves.
    Returns what each consumer received.
    """
    buffer = BoundedBuffer(maxsize)

    def producer() -> None:
        for value in range(loops):
            buffer.put(value)
            print(f"producer putting {value} from the buffer")
        print("producer exited")

    def consumer(got: list) -> None:
        tid = _thread_id()
        for _ in range(loops):
            value, timed_out = buffer._get_before(time.monotonic() + timeout, tid)
            if value is not _NOTHING:
                print(f"consumer {tid} getting {value} from the buffer")
                got.append(value)
            if timed_out:
                break
        print(f"consumer {tid} exited")

    results = _run(producer, consumer, consumers)
    print("run_timed(): End")
    return results


__all__ = [
    "LOOPS",
    "MAXSIZE",
    "SingleSlot",
    "BoundedBuffer",
    "run_single_slot",
    "run_bounded",
    "run_timed",
]