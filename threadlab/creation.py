"""Starting threads and letting them report who they are."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

NTHREADS = 5


def _thread_id() -> str:
    return f"{threading.get_ident():#x}"


def start_routine(message: int) -> str:
    """Report the calling thread's id and the message it was handed."""
    line = f"start_routine(): new thread ID = {_thread_id()}, message = {message}"
    print(line)
    return line


def create_thread(message: int = 10) -> str:
    """Run ``start_routine`` in a new thread and wait for it to finish."""
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(start_routine, message)
        print(f"Main thread ID = {_thread_id()}")
    return future.result()


def create_many(count: int = NTHREADS) -> list[str]:
    """Start ``count`` threads, each given its own index as message.

    Returns the reports of the threads in the order they were created.
    """
    with ThreadPoolExecutor(max_workers=max(count, 1)) as pool:
        futures = []
        for index in range(count):
            print(f"Creating thread {index}")
            futures.append(pool.submit(start_routine, index))
        print(f"Main thread ID = {_thread_id()}")
    return [future.result() for future in futures]


def sleep_then_report(message: int = 10, delay: float = 1.0) -> str:
    """Start a thread, sleep in the calling thread, then wait for the new one."""
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(start_routine, message)
        time.sleep(delay)
        print("Main thread: got here")
    return future.result()