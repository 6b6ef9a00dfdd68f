"""Worked examples of threading primitives and concurrency patterns, with a demo command."""

__version__ = "0.1.0"
__all__ = [
    "cancellation",
    "cli",
    "conditions",
    "creation",
    "joining",
    "mutexes",
    "producer_consumer",
    "reentrant",
    "rwlock",
]