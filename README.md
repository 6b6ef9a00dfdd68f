# threadlab

Small, runnable examples of multithreaded programming with Python's
`threading` module. Each module covers one topic:

| Module | Topic |
| --- | --- |
| `threadlab.creation` | starting threads (`start_routine`, `create_thread`, `create_many`, `sleep_then_report`) |
| `threadlab.joining` | joining threads and collecting results (`join_thread`, `join_multi`, `busy_sum`, `reverse_string`, `join_returnval`) |
| `threadlab.cancellation` | deferred cancellation with cancellation points and cleanup handlers (`CancellableThread`, `Cancelled`, `CANCELED`, `cancel_thread`, `cancel_many`, `cancel_with_cleanup`) |
| `threadlab.mutexes` | one-time initialisation and mutual exclusion (`Once`, `init_random`, `count_unsynced`, `count_synced`, `find_word`, `find_words`) |
| `threadlab.conditions` | busy waiting against condition variables, and timed waits (`Latch`, `busy_join`, `manual_join`, `timed_wait`) |
| `threadlab.producer_consumer` | single-slot and bounded buffers (`SingleSlot`, `BoundedBuffer`, `run_single_slot`, `run_bounded`, `run_timed`) |
| `threadlab.rwlock` | a read-write lock with non-blocking attempts and retries (`ReadWriteLock`, `LockBusy`, `retry_acquire`, `readwrite_single`, `readwrite_multi`) |
| `threadlab.reentrant` | reentrancy and thread safety (`to_upper_shared`, `to_upper`, `find_lowercase`, `LowercaseScanner`, `diff`, `SharedCounter`, `count_with_threads`) |

The demonstration functions print a trace of what each thread does and
return their results, so they can be used from code as well as watched.

## Installation

```
pip install .
```

## Command line

With no arguments, `threadlab` lists the demonstrations it can run:

```
threadlab
```

Name one to run it; some take extra arguments:

```
threadlab bounded
threadlab cancel-cleanup x 1
threadlab upper kale kopila
threadlab count 4
```

The demonstrations are `create`, `create-many`, `sleep`, `join`,
`join-multi`, `join-returnval`, `cancel`, `cancel-many`, `cancel-cleanup`,
`count-unsynced`, `count-synced`, `find-words`, `busy-join`, `manual-join`,
`timed-wait`, `single-slot`, `bounded`, `timed`, `rw-single`, `rw-multi`,
`upper` and `count`. Several of them sleep for a few seconds on purpose.

For `cancel-cleanup`, no extra argument cancels the counting thread; one or
more stops it through a flag instead, and a second extra argument, read as
an integer, decides whether the cleanup handler runs on the way out.

## Library use

```python
from threadlab.mutexes import count_synced
from threadlab.producer_consumer import BoundedBuffer
from threadlab.reentrant import diff, to_upper
from threadlab.rwlock import LockBusy, ReadWriteLock

print(count_synced(2, 1000))    # 2000
print(to_upper("kale"))         # KALE
print(diff(7, 2))               # 5

buf = BoundedBuffer(5)
buf.put(1)
print(buf.get())                # 1

lock = ReadWriteLock()
with lock.read_locked():
    print(lock.readers)         # 1
```

`CancellableThread` calls its target as `target(thread, *args)`, so the
target can reach `thread.testcancel()`, `thread.sleep()`,
`thread.set_cancel_enabled()` and `thread.push_cleanup()`. Cancellation is
cooperative: a request takes effect only at those cancellation points, and
`join()` then returns `CANCELED`.

## Running the tests

```
pip install .[test]
pytest
```