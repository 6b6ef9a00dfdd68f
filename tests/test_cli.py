import pytest

from threadlab.cli import main


def test_lists_demos_without_arguments(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    names = [line.split()[0] for line in out.splitlines()]
    assert "bounded" in names
    assert names == sorted(names)


def test_unknown_demo_exits_with_usage_error():
    with pytest.raises(SystemExit) as info:
        main(["no-such-demo"])
    assert info.value.code == 2


def test_upper_demo(capsys):
    assert main(["upper", "kale", "kopila"]) == 0
    assert capsys.readouterr().out.split() == ["KALE", "KOPILA"]


def test_find_words_demo(capsys):
    assert main(["find-words"]) == 0
    out = capsys.readouterr().out
    assert '"static: FOUND"' in out
    assert 'couldn\'t find "include"' in out


def test_join_returnval_demo(capsys):
    assert main(["join-returnval"]) == 0
    assert "retval = ereht olleH" in capsys.readouterr().out


def test_count_demo(capsys):
    assert main(["count", "3"]) == 0
    value = int(capsys.readouterr().out.strip().splitlines()[-1])
    assert 1 <= value <= 3