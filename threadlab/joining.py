"""Joining threads and collecting what they return."""

from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor

from threadlab.creation import NTHREADS, start_routine

_RANDOM_LIMIT = 2**31


def busy_sum(ident: int, iterations: int = 1_000_000, seed: int | None = None) -> float:
    """Add up ``iterations`` random numbers in [0, 2**31) and report the total."""
    rng = random.Random(seed)
    total = sum(float(rng.randrange(_RANDOM_LIMIT)) for _ in range(iterations))
    print(f"busy_sum(): thread {ident}, result = {total:e}")
    return total


def join_thread(message: int = 10) -> str:
    """Run ``start_routine`` in a thread, join it and return its report."""
    with ThreadPoolExecutor(max_workers=1) as pool:
        result = pool.submit(start_routine, message).result()
    print(f"join_thread(): completed join, retval = 0")
    return result


def join_multi(count: int = NTHREADS, iterations: int = 1_000_000) -> list[float]:
    """Run ``count`` busy threads, join them in order and return their sums.

    Thread ``i`` seeds its generator with ``i``, so results are reproducible.
    """
    with ThreadPoolExecutor(max_workers=max(count, 1)) as pool:
        futures = []
        for index in range(count):
            print(f"join_multi(): creating thread = {index}")
            futures.append(pool.submit(busy_sum, index, iterations, index))
        results = []
        for index, future in enumerate(futures):
            results.append(future.result())
            print(f"join_multi(): completed joining thread {index}, retval = 0")
    return results


def reverse_string(text: str) -> str:
    """Return ``text`` reversed."""
    print(f"reverse_string(): reversing the string = {text}")
    return text[::-1]


def join_returnval(message: str = "Hello there") -> str:
    """Reverse ``message`` in a new thread and return what the thread produced."""
    with ThreadPoolExecutor(max_workers=1) as pool:
        result = pool.submit(reverse_string, message).result()
    print(f"join_returnval(): completed join, retval = {result}")
    return result