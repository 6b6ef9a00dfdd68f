import threading

import pytest

from threadlab.conditions import Latch, busy_join, manual_join, timed_wait


def test_latch_starts_unset():
    latch = Latch()
    assert latch.is_set is False


def test_latch_wait_returns_after_set():
    latch = Latch()
    latch.set()
    latch.wait()
    assert latch.is_set is True


def test_latch_releases_waiting_thread():
    latch = Latch()
    released = threading.Event()

    def waiter():
        latch.wait()
        released.set()

    worker = threading.Thread(target=waiter, daemon=True)
    worker.start()
    assert not released.wait(0.1)
    assert latch.is_set is False
    latch.set()
    assert latch.is_set is True
    assert released.wait(2.0)
    worker.join(2.0)
    assert not worker.is_alive()


def test_busy_join_counts_its_polls(capsys):
    polls = busy_join(0.01)
    lines = capsys.readouterr().out.splitlines()
    assert polls == lines.count("initial thread: waiting...")
    assert lines[0] == "initial thread: begin"
    assert lines[-1] == "initial thread: end"
    assert "child thread: begin" in lines


def test_manual_join_waits_for_child(capsys):
    assert manual_join() is True
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "initial thread: begin"
    assert lines[-1] == "initial thread: end"
    assert lines.index("child thread: begin") < lines.index("initial thread: end")


@pytest.mark.parametrize("timeout", [0.1, 0.3])
def test_timed_wait_lasts_at_least_timeout(timeout):
    elapsed = timed_wait(timeout)
    assert elapsed >= timeout
    assert elapsed < timeout + 2.0


def test_timed_wait_with_past_deadline_returns_at_once():
    assert timed_wait(0) < 1.0
    assert timed_wait(-1) < 1.0