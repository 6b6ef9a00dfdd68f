import pytest

from threadlab.joining import (
    busy_sum,
    join_multi,
    join_returnval,
    join_thread,
    reverse_string,
)


def test_busy_sum_no_iterations(capsys):
    assert busy_sum(1, 0) == 0.0
    assert "busy_sum(): thread 1, result = 0.000000e+00" in capsys.readouterr().out


def test_busy_sum_is_reproducible_with_seed():
    first = busy_sum(0, 200, seed=42)
    second = busy_sum(0, 200, seed=42)
    assert first > 0.0
    assert second == first


@pytest.mark.parametrize("iterations", [1, 10, 100])
def test_busy_sum_bounds(iterations):
    total = busy_sum(0, iterations, seed=5)
    assert 0.0 <= total <= iterations * (2**31 - 1)


def test_join_thread(capsys):
    line = join_thread(10)
    assert line.endswith(", message = 10")
    assert "join_thread(): completed join, retval = 0" in capsys.readouterr().out


def test_join_multi_matches_seeded_sums(capsys):
    results = join_multi(3, 50)
    assert results == [busy_sum(i, 50, i) for i in range(3)]
    out = capsys.readouterr().out
    for index in range(3):
        assert f"join_multi(): completed joining thread {index}, retval = 0" in out


def test_reverse_string_example():
    assert reverse_string("Hello there") == "ereht olleH"


@pytest.mark.parametrize("text", ["", "a", "abc", "racecar", "Hello there"])
def test_reverse_string_round_trip(text):
    reversed_text = reverse_string(text)
    assert len(reversed_text) == len(text)
    assert reverse_string(reversed_text) == text


def test_join_returnval(capsys):
    assert join_returnval() == "ereht olleH"
    out = capsys.readouterr().out
    assert "reverse_string(): reversing the string = Hello there" in out
    assert "join_returnval(): completed join, retval = ereht olleH" in out


def test_join_returnval_custom_message():
    assert join_returnval("abc") == reverse_string("abc")