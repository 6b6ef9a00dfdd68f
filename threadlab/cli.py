"""Command line entry point that runs one of the threading demonstrations."""

from __future__ import annotations

import argparse
from typing import Callable, Sequence

from threadlab import (
    cancellation,
    conditions,
    creation,
    joining,
    mutexes,
    producer_consumer,
    reentrant,
    rwlock,
)


def _demos() -> dict[str, tuple[str, Callable[[list[str]], object]]]:
    return {
        "create": ("start one thread", lambda extra: creation.create_thread()),
        "create-many": ("start several threads", lambda extra: creation.create_many()),
        "sleep": ("sleep in the main thread", lambda extra: creation.sleep_then_report()),
        "join": ("join one thread", lambda extra: joining.join_thread()),
        "join-multi": ("join busy threads", lambda extra: joining.join_multi()),
        "join-returnval": ("join and collect a result", lambda extra: joining.join_returnval()),
        "cancel": ("cancel one thread", lambda extra: cancellation.cancel_thread()),
        "cancel-many": ("cancel several threads", lambda extra: cancellation.cancel_many()),
        "cancel-cleanup": (
            "cancel with a cleanup handler; extra args as for the stop flag",
            lambda extra: cancellation.cancel_with_cleanup(["threadlab", *extra]),
        ),
        "count-unsynced": ("count without a lock", lambda extra: mutexes.count_unsynced()),
        "count-synced": ("count under a mutex", lambda extra: mutexes.count_synced()),
        "find-words": ("serialised word lookups", lambda extra: mutexes.find_words()),
        "busy-join": ("wait by polling", lambda extra: conditions.busy_join()),
        "manual-join": ("wait on a condition", lambda extra: conditions.manual_join()),
        "timed-wait": ("wait with a timeout", lambda extra: conditions.timed_wait()),
        "single-slot": ("producer and one-slot buffer", lambda extra: producer_consumer.run_single_slot()),
        "bounded": ("producer and bounded buffer", lambda extra: producer_consumer.run_bounded()),
        "timed": ("consumers with timed waits", lambda extra: producer_consumer.run_timed()),
        "rw-single": ("reader against a writer", lambda extra: rwlock.readwrite_single()),
        "rw-multi": ("writers against a writer", lambda extra: rwlock.readwrite_multi()),
        "upper": (
            "upper-case the extra arguments",
            lambda extra: [print(reentrant.to_upper(word)) for word in extra],
        ),
        "count": (
            "increment a shared counter from threads; optional thread count",
            lambda extra: reentrant.count_with_threads(int(extra[0]) if extra else 2),
        ),
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Run the demonstration named on the command line, or list them all."""
    demos = _demos()
    parser = argparse.ArgumentParser(
        prog="threadlab", description="Run a threading demonstration."
    )
    parser.add_argument("demo", nargs="?", choices=sorted(demos), help="demonstration to run")
    parser.add_argument("extra", nargs="*", help="arguments for the demonstration")
    args = parser.parse_args(argv)
    if args.demo is None:
        for name in sorted(demos):
            print(f"{name:16} {demos[name][0]}")
        return 0
    demos[args.demo][1](list(args.extra))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())