"""Reentrant and thread-safe functions beside ones that are neither."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

MAX_STR = 64

_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

# Shared storage reused by every call of to_upper_shared.
_shared_buffer: list[str] = []


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def to_upper_shared(text: str) -> str:
    """Upper-case ASCII letters of ``text`` through one module-wide buffer.

    Not reentrant: concurrent calls overwrite each other's buffer. The
    buffer holds fewer than ``MAX_STR`` characters; longer text raises
    ``ValueError``.
    """
    if len(text) >= MAX_STR:
        raise ValueError(f"text must be shorter than {MAX_STR} characters")
    _shared_buffer.clear()
    _shared_buffer.extend(text.translate(_ASCII_UPPER))
    return "".join(_shared_buffer)


def to_upper(text: str) -> str:
    """Upper-case ASCII letters of ``text``; reentrant and thread-safe."""
    return text.translate(_ASCII_UPPER)


def find_lowercase(text: str, index: int = 0) -> tuple[str, int]:
    """Find the next lowercase ASCII letter at or after ``index``.

    Returns the letter and the index just past it, or ``("", len(text))``
    when there is none. The caller keeps the position between calls.
    """
    if index < 0:
        raise ValueError("index must not be negative")
    for position in range(index, len(text)):
        if _is_lower(text[position]):
            return text[position], position + 1
    return "", max(index, len(text))


class LowercaseScanner:
    """Step through the lowercase letters of a text kept between calls.

    Not reentrant: the text and position live in the scanner, so one
    scanner shared by several callers mixes up their scans.
    """

    def __init__(self) -> None:
        self._text: str | None = None
        self._index = 0

    def next(self, text: str | None = None) -> str:
        """Return the next lowercase letter, or ``""`` at the end.

        Passing ``text`` starts a new scan of it; ``None`` continues the
        current one.
        """
        if text is not None:
            self._text = text
            self._index = 0
        if self._text is None:
            raise ValueError("no text to scan")
        char, self._index = find_lowercase(self._text, self._index)
        return char


def diff(x: int, y: int) -> int:
    """Absolute difference of ``x`` and ``y``; uses no shared state."""
    return abs(y - x)


class SharedCounter:
    """A counter several threads may increment.

    With ``synchronized`` the increment holds a mutex; without it updates
    from concurrent threads may be lost.
    """

    def __init__(self, synchronized: bool = True) -> None:
        self._count = 0
        self._lock = threading.Lock() if synchronized else None

    @property
    def count(self) -> int:
        return self._count

    def increment(self) -> int:
        """Add one and return the count this call produced."""
        if self._lock is None:
            self._count += 1
            return self._count
        with self._lock:
            self._count += 1
            return self._count


def count_with_threads(threads: int = 2) -> list[int]:
    """Let ``threads`` threads increment one synchronised counter once each.

    Returns the value each thread saw, in the order the threads were joined.
    """
    counter = SharedCounter()
    with ThreadPoolExecutor(max_workers=max(threads, 1)) as pool:
        futures = [pool.submit(counter.increment) for _ in range(threads)]
        results = [future.result() for future in futures]
    if results:
        print(results[-1])
    return results


__all__ = [
    "MAX_STR",
    "LowercaseScanner",
    "SharedCounter",
    "to_upper_shared",
    "to_upper",
    "find_lowercase",
    "diff",
    "count_with_threads",
]