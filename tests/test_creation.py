import threading

from threadlab.creation import (
    NTHREADS,
    create_many,
    create_thread,
    sleep_then_report,
    start_routine,
)

PREFIX = "start_routine(): new thread ID = "


def _parse(line):
    assert line.startswith(PREFIX)
    ident_part, message_part = line[len(PREFIX):].split(", message = ")
    return int(ident_part, 16), int(message_part)


def test_start_routine_reports_current_thread(capsys):
    line = start_routine(3)
    ident, message = _parse(line)
    assert ident == threading.get_ident()
    assert message == 3
    assert line in capsys.readouterr().out


def test_create_thread_runs_in_other_thread(capsys):
    line = create_thread(10)
    ident, message = _parse(line)
    assert message == 10
    assert ident != threading.get_ident()
    out = capsys.readouterr().out
    assert line in out
    assert f"Main thread ID = {threading.get_ident():#x}" in out


def test_create_many_messages_in_order(capsys):
    lines = create_many(NTHREADS)
    assert [_parse(line)[1] for line in lines] == list(range(NTHREADS))
    out = capsys.readouterr().out
    positions = [out.index(f"Creating thread {i}\n") for i in range(NTHREADS)]
    assert positions == sorted(positions)


def test_create_many_zero():
    assert create_many(0) == []


def test_sleep_then_report(capsys):
    line = sleep_then_report(7, delay=0.01)
    assert _parse(line)[1] == 7
    out = capsys.readouterr().out
    assert "Main thread: got here\n" in out
    assert line in out