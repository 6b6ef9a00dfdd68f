"""Deferred thread cancellation with cancellation points and cleanup handlers."""

from __future__ import annotations

import enum
import re
import threading
import time
from typing import Any, Callable, Sequence

from threadlab.creation import NTHREADS

_ENABLED_SLEEP = 5.0
_HELLO_INTERVAL = 2.0
_HELLO_ROUNDS = 10


class _CancelState(enum.Enum):
    CANCELED = "canceled"


CANCELED = _CancelState.CANCELED
"""Value returned by :meth:`CancellableThread.join` for a cancelled thread."""


class Cancelled(BaseException):
    """Raised inside a thread at a cancellation point once it has been cancelled."""


class CancellableThread:
    """A thread that honours cancellation requests at its cancellation points.

    The target is called as ``target(thread, *args)`` so that it can reach
    :meth:`testcancel`, :meth:`sleep`, :meth:`set_cancel_enabled` and the
    cleanup stack of the thread that runs it.
    """

    def __init__(
        self,
        target: Callable[..., Any],
        *args: Any,
        name: str | None = None,
    ) -> None:
        self._target = target
        self._args = args
        self._requested = threading.Event()
        self._enabled = True
        self._cleanups: list[Callable[[], Any]] = []
        self._result: Any = None
        self._error: BaseException | None = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def _run(self) -> None:
        try:
            self._result = self._target(self, *self._args)
        except Cancelled:
            while self._cleanups:
                self._cleanups.pop()()
            self._result = CANCELED
        except BaseException as exc:  # handed to whoever joins
            self._error = exc

    @property
    def cancelled(self) -> bool:
        """True once the thread has finished by being cancelled."""
        return self._result is CANCELED

    def start(self) -> CancellableThread:
        """Start running the target in a new thread."""
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Send a cancellation request; it is acted on at the next cancellation point."""
        if self._thread.ident is None:
            raise RuntimeError("cannot cancel a thread that has not been started")
        self._requested.set()

    def join(self, timeout: float | None = None) -> Any:
        """Wait for the thread and return its result, or ``CANCELED``."""
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise TimeoutError("thread did not finish in time")
        if self._error is not None:
            raise self._error
        return self._result

    def set_cancel_enabled(self, enabled: bool) -> bool:
        """Enable or disable cancellation; return the previous setting."""
        previous = self._enabled
        self._enabled = bool(enabled)
        return previous

    def testcancel(self) -> None:
        """An explicit cancellation point."""
        if self._enabled and self._requested.is_set():
            raise Cancelled()

    def sleep(self, seconds: float) -> None:
        """Sleep; while cancellation is enabled this is a cancellation point."""
        if self._enabled:
            if self._requested.wait(seconds):
                raise Cancelled()
        else:
            time.sleep(seconds)

    def push_cleanup(self, handler: Callable[[], Any]) -> None:
        """Push a handler that runs if the thread is cancelled."""
        self._cleanups.append(handler)

    def pop_cleanup(self, execute: bool = False) -> Callable[[], Any]:
        """Remove the most recently pushed handler, running it if ``execute``."""
        if not self._cleanups:
            raise IndexError("cleanup stack is empty")
        handler = self._cleanups.pop()
        if execute:
            handler()
        return handler


def _report_join(func: str, cancelled: bool, label: str = "thread") -> None:
    verdict = "was cancelled" if cancelled else "wasn't cancelled"
    print(f"{func}(): {label} {verdict}")


def _routine_cancel(thread: CancellableThread, disabled_for: float) -> None:
    thread.set_cancel_enabled(False)
    print("start_routinecancel(): started, cancellation disabled")
    thread.sleep(disabled_for)
    print("start_routinecancel(): about to enable cancellation")
    thread.set_cancel_enabled(True)
    thread.sleep(_ENABLED_SLEEP)
    print("start_routinecancel(): not cancelled!")


def cancel_thread(disabled_for: float = 3.0, delay: float = 3.0) -> bool:
    """Cancel a thread that starts with cancellation disabled.

    Returns whether the thread ended by cancellation.
    """
    worker = CancellableThread(_routine_cancel, disabled_for).start()
    time.sleep(delay)
    print("cancel_thread(): sending cancellation request")
    worker.cancel()
    cancelled = worker.join() is CANCELED
    _report_join("cancel_thread", cancelled)
    return cancelled


def _routine_cancel_all(thread: CancellableThread, ident: int, disabled_for: float) -> None:
    thread.set_cancel_enabled(False)
    print(f"start_routinecancelall(): started, cancellation disabled for thread {ident}")
    thread.sleep(disabled_for)
    print(f"start_routinecancelall(): about to enable thread cancellation for thread {ident}")
    thread.set_cancel_enabled(True)
    for round_no in range(_HELLO_ROUNDS):
        thread.testcancel()
        print(f"{round_no}. Hello from thread {ident}")
        thread.sleep(_HELLO_INTERVAL)
    print(f"start_routinecancelall(): not cancelled thread {ident}!")


def cancel_many(
    count: int = NTHREADS, disabled_for: float = 2.0, delay: float = 5.0
) -> list[bool]:
    """Start ``count`` threads, cancel them all and report who was cancelled."""
    workers = [
        CancellableThread(_routine_cancel_all, ident, disabled_for).start()
        for ident in range(count)
    ]
    time.sleep(delay)
    for ident, worker in enumerate(workers):
        print(f"cancel_many(): sending cancellation request to thread {ident}")
        worker.cancel()
    outcome = []
    for ident, worker in enumerate(workers):
        print(f"cancel_many(): joining thread {ident}")
        cancelled = worker.join() is CANCELED
        _report_join("cancel_many", cancelled, f"thread {ident}")
        outcome.append(cancelled)
    return outcome


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


class _CleanupState:
    def __init__(self) -> None:
        self.done = False
        self.pop_arg = 0
        self.count = 0


def _routine_cancel_clean(thread: CancellableThread, state: _CleanupState) -> None:
    print("start_routinecancelclean(): new thread started")

    def handler() -> None:
        print("cleanup_handler(): cleanup handler called")
        state.count = 0

    thread.push_cleanup(handler)
    current = int(time.time())
    while not state.done:
        thread.testcancel()
        now = int(time.time())
        if current < now:
            current = now
            thread.testcancel()
            print(f"count = {state.count}")
            state.count += 1
        time.sleep(0.001)
    thread.pop_cleanup(bool(state.pop_arg))


def cancel_with_cleanup(
    argv: Sequence[str] | None = None, delay: float = 2.0
) -> tuple[bool, int]:
    """Stop a counting thread by cancellation or by a flag.

    With a single argument the thread is cancelled and its cleanup handler
    resets the count. With more, it is asked to stop; a third argument, read
    as an integer, decides whether the cleanup handler runs on the way out.
    Returns whether the thread was cancelled and the final count.
    """
    args = list(argv) if argv is not None else ["threadlab"]
    state = _CleanupState()
    worker = CancellableThread(_routine_cancel_clean, state).start()
    time.sleep(delay)
    if len(args) > 1:
        if len(args) > 2:
            state.pop_arg = _atoi(args[2])
        state.done = True
    else:
        print("cancel_with_cleanup(): sending cancellation request")
        worker.cancel()
    cancelled = worker.join() is CANCELED
    if cancelled:
        print(f"cancel_with_cleanup(): thread was cancelled, count = {state.count}")
    else:
        print(f"cancel_with_cleanup(): thread terminated normally, count = {state.count}")
    return cancelled, state.count