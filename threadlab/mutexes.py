"""Mutual exclusion: one-time initialisation, shared counters and serialised lookups."""

from __future__ import annotations

import random
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable

from threadlab.creation import NTHREADS

TARGET_COUNT = 1_000_000
_RANDOM_LIMIT = 2**31

WORDLIST: tuple[str, ...] = (
    "char", "short", "int",
    "long", "float", "double",
    "void", "static", "const",
    "return", "restrict", "struct",
    "if", "else", "elseif",
    "for", "while", "do",
)

DEFAULT_SEARCH: tuple[str, ...] = ("static", "include", "struct", "define", "else")


class Once:
    """Run an initialiser exactly once, however many threads ask for it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        """True once an initialiser has completed."""
        return self._done

    def call(self, func: Callable[[], Any]) -> bool:
        """Call ``func`` unless an initialiser already ran; return whether it ran now.

        Callers that arrive while the initialiser runs wait for it to finish.
        If ``func`` raises, the next caller tries again.
        """
        if self._done:
            return False
        with self._lock:
            if self._done:
                return False
            func()
            self._done = True
            return True


def init_random(seed: int = 0) -> int:
    """Seed a generator with ``seed`` and return its first number in [0, 2**31)."""
    return random.Random(seed).randrange(_RANDOM_LIMIT)


def _thread_id() -> str:
    return f"{threading.get_ident():#x}"


class _Counter:
    def __init__(self) -> None:
        self.value = 0


def _count_up(counter: _Counter, target: int, func: str) -> None:
    tid = _thread_id()
    print(f"{func}(): thread {tid} stating count at = {counter.value}")
    for _ in range(target):
        counter.value += 1
    print(f"{func}(): thread {tid} final count = {counter.value}")


def _run_counters(threads: int, target: int, worker: Callable[[], None], func: str) -> int:
    print(f"{func}(): expected count = {threads * target}")
    workers = [threading.Thread(target=worker) for _ in range(threads)]
    for thread in workers:
        thread.start()
        print(f"{func}(): created thread {thread.ident:#x}")
    for thread in workers:
        thread.join()
        print(f"{func}(): completed joining thread {thread.ident:#x}")
    return threads * target


def _report_total(func: str, expected: int, total: int) -> None:
    verdict = "ok" if total == expected else "error"
    print(f"{func}(): {verdict}, total count = {total}")


def count_unsynced(threads: int = 2, target: int = TARGET_COUNT) -> int:
    """Let ``threads`` threads each add ``target`` to a shared counter without a lock.

    Updates may be lost, so the result can fall short of ``threads * target``.
    """
    counter = _Counter()
    expected = _run_counters(
        threads, target, lambda: _count_up(counter, target, "count_unsynced"), "count_unsynced"
    )
    _report_total("count_unsynced", expected, counter.value)
    return counter.value


def count_synced(threads: int = 2, target: int = TARGET_COUNT) -> int:
    """Like :func:`count_unsynced`, but each thread counts while holding a mutex."""
    counter = _Counter()
    lock = threading.Lock()

    def worker() -> None:
        with lock:
            _count_up(counter, target, "count_synced")

    expected = _run_counters(threads, target, worker, "count_synced")
    _report_total("count_synced", expected, counter.value)
    return counter.value


_init_seq = Once()
_seqlock: threading.Lock | None = None


def _init_seqlock() -> None:
    global _seqlock
    _seqlock = threading.Lock()


def _get_seqlock() -> threading.Lock:
    _init_seq.call(_init_seqlock)
    assert _seqlock is not None
    return _seqlock


def find_word(word: str) -> str | None:
    """Look ``word`` up in the word list while holding the sequence lock.

    Returns ``"<word>: FOUND"`` when it is listed, otherwise ``None``.
    """
    with _get_seqlock():
        tid = _thread_id()
        print(f"===> find_word(): lock acquired, thread {tid}")
        result = None
        if word in WORDLIST:
            print(f'found "{word}", thread {tid}')
            result = f"{word}: FOUND"
        else:
            print(f'couldn\'t find "{word}", thread {tid}')
        print(f"find_word(): releasing lock, thread {tid} ===>")
    return result


def find_words(words: Iterable[str] = DEFAULT_SEARCH) -> list[str | None]:
    """Search for each word in its own thread; return the results in order."""
    _get_seqlock()
    items = list(words)
    with ThreadPoolExecutor(max_workers=max(len(items), 1)) as pool:
        futures = [pool.submit(find_word, word) for word in items]
        results: list[str | None] = []
        for index, future in enumerate(futures):
            result = future.result()
            print(f"find_words(): completed joining thread {index}")
            if result is not None:
                print(f'find_words(): returned "{result}", thread {index}')
            results.append(result)
    return results


__all__ = [
    "NTHREADS",
    "Once",
    "init_random",
    "count_unsynced",
    "count_synced",
    "find_word",
    "find_words",
]