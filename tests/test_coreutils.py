import io

import pytest

from pkapps.coreutils import cat, echo, ls, main, mkdir, rm, touch, tree


def test_cat_concatenates_files(tmp_path):
    first = tmp_path / "one.txt"
    second = tmp_path / "two.txt"
    first.write_text("alpha\n")
    second.write_text("beta\n")
    out = io.StringIO()
    status = cat(["cat", str(first), str(second)], out)
    assert status == 0
    assert out.getvalue() == "alpha\nbeta\n"


def test_cat_large_file_round_trips(tmp_path):
    path = tmp_path / "big.txt"
    content = "é" * 3000 + "end\n"
    path.write_text(content, encoding="utf-8")
    out = io.StringIO()
    status = cat(["cat", str(path)], out)
    assert status == 0
    assert out.getvalue() == content


def test_cat_without_files_prints_usage():
    out = io.StringIO()
    status = cat(["cat"], out)
    assert status == 1
    assert out.getvalue() == "Invalid arguments\nUsage: cat <file 1> [<file 2> ...]\n"


def test_cat_missing_file(tmp_path):
    missing = str(tmp_path / "missing")
    out = io.StringIO()
    status = cat(["cat", missing], out)
    assert status == 1
    assert out.getvalue() == f'Unable to open "{missing}"\n'


def test_cat_stops_at_first_failure(tmp_path):
    good = tmp_path / "good.txt"
    good.write_text("kept\n")
    missing = str(tmp_path / "missing")
    out = io.StringIO()
    status = cat(["cat", str(good), missing, str(good)], out)
    assert status == 1
    assert out.getvalue() == f'kept\nUnable to open "{missing}"\n'


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["echo"], "\n"),
        (["echo", "hello"], "hello\n"),
        (["echo", "a", "b", "c"], "a b c\n"),
    ],
)
def test_echo(argv, expected):
    out = io.StringIO()
    status = echo(argv, out)
    assert status == 0
    assert out.getvalue() == expected


def test_ls_lists_entries(tmp_path):
    for name in ("b", "a", "c"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    out = io.StringIO()
    status = ls(["ls", str(tmp_path)], out)
    assert status == 0
    assert out.getvalue().splitlines() == sorted(["a", "b", "c", "sub"])


def test_ls_defaults_to_current_directory(tmp_path, monkeypatch):
    (tmp_path / "only").write_text("")
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    status = ls(["ls"], out)
    assert status == 0
    assert out.getvalue() == "only\n"


def test_ls_missing_directory(tmp_path):
    out = io.StringIO()
    status = ls(["ls", str(tmp_path / "nope")], out)
    assert status == 1
    assert out.getvalue() == "Unable to open directory\n"


def test_ls_too_many_arguments():
    out = io.StringIO()
    status = ls(["ls", "a", "b"], out)
    assert status == 1
    assert out.getvalue() == "Invalid arguments\nUsage: ls [<dir>]\n"


def test_tree_structure(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "b").write_text("")
    (tmp_path / "c").write_text("")
    root = str(tmp_path)
    out = io.StringIO()
    status = tree(["tree", root], out)
    assert status == 0
    assert out.getvalue() == f"{root}\n| a\n| | b\n| c\n"


def test_tree_unreadable_root(tmp_path):
    missing = str(tmp_path / "missing")
    out = io.StringIO()
    status = tree(["tree", missing], out)
    assert status == 0
    assert out.getvalue() == f"{missing}\nUnable to open directory: {missing}\n"


def test_tree_too_many_arguments():
    out = io.StringIO()
    status = tree(["tree", "a", "b"], out)
    assert status == 1
    assert out.getvalue() == "Invalid arguments!\n"


def test_mkdir_creates_directory(tmp_path):
    target = tmp_path / "new"
    out = io.StringIO()
    status = mkdir(["mkdir", str(target)], out)
    assert status == 0
    assert out.getvalue() == ""
    assert target.is_dir()


def test_mkdir_existing_directory_fails(tmp_path):
    out = io.StringIO()
    status = mkdir(["mkdir", str(tmp_path)], out)
    assert status == 1
    assert out.getvalue() == "Error while creating directory\n"


def test_mkdir_usage():
    out = io.StringIO()
    status = mkdir(["mkdir"], out)
    assert status == 1
    assert out.getvalue() == "Invalid arguments\nUsage: mkdir <path>\n"


def test_touch_creates_and_keeps_files(tmp_path):
    existing = tmp_path / "existing"
    existing.write_text("content")
    fresh = tmp_path / "fresh"
    out = io.StringIO()
    status = touch(["touch", str(existing), str(fresh)], out)
    assert status == 0
    assert fresh.exists()
    assert fresh.read_text() == ""
    assert existing.read_text() == "content"


def test_touch_without_arguments():
    out = io.StringIO()
    status = touch(["touch"], out)
    assert status == 1
    assert out.getvalue() == ""


def test_rm_removes_files_and_skips_missing(tmp_path):
    target = tmp_path / "target"
    target.write_text("")
    out = io.StringIO()
    status = rm(["rm", str(tmp_path / "missing"), str(target)], out)
    assert status == 0
    assert out.getvalue() == ""
    assert not target.exists()


def test_rm_usage():
    out = io.StringIO()
    status = rm(["rm"], out)
    assert status == 1
    assert out.getvalue() == "Invalid arguments\nUsage: rm <file 1> <file 2> ...\n"


def test_main_dispatches(capsys):
    status = main(["echo", "hi", "there"])
    assert status == 0
    assert capsys.readouterr().out == "hi there\n"


def test_main_unknown_utility(capsys):
    status = main(["frobnicate"])
    assert status == 1
    assert "Usage" in capsys.readouterr().err