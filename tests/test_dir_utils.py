import os
from pathlib import Path

import pytest
from pytest_mock import MockerFixture
from conftest import TREE, VISIBLE, make_tree

from inventorize.core.exceptions import FileIoError
from inventorize.utils.dir_utils import DirectoryIterator, is_hidden


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (".git", True),
        ("repo/.hidden", True),
        ("repo/visible.txt", False),
        (".config/visible.txt", False),
        ("a.b", False),
    ],
)
def test_is_hidden(path: str, expected: bool) -> None:
    assert is_hidden(path) is expected


def test_yields_all_files_relative_to_root(repository: Path) -> None:
    with DirectoryIterator(repository) as files:
        found = {p.as_posix() for p in files.relative_paths()}

    assert found == set(TREE)


def test_skip_hidden_prunes_hidden_directories(repository: Path) -> None:
    with DirectoryIterator(repository, skip_hidden=True) as files:
        found = {p.as_posix() for p in files.relative_paths()}

    assert found == VISIBLE
    assert ".git/objects/visible.txt" not in found


def test_paths_are_absolute_under_root(repository: Path) -> None:
    with DirectoryIterator(repository) as files:
        paths = list(files.paths())

    assert paths
    assert all(p.is_relative_to(repository) and p.is_file() for p in paths)


def test_directories_are_never_yielded(tmp_path: Path) -> None:
    make_tree(tmp_path, {"a/b/c/d.txt": b"x"})
    (tmp_path / "empty" / "nested").mkdir(parents=True)

    with DirectoryIterator(tmp_path) as files:
        assert [p.as_posix() for p in files.relative_paths()] == ["a/b/c/d.txt"]


def test_depth_first_order(tmp_path: Path, mocker: MockerFixture) -> None:
    make_tree(tmp_path, {"top.txt": b"", "d1/x.txt": b"", "d1/d2/y.txt": b"", "d1/d2/d3/z.txt": b""})

    # Fix the listing order so that the directory comes before its sibling file.
    real_scandir = os.scandir

    def sorted_scandir(path):
        with real_scandir(path) as it:
            entries = sorted(it, key=lambda e: (not e.is_dir(), e.name))
        return _ListIterator(entries)

    mocker.patch("inventorize.utils.dir_utils.os.scandir", side_effect=sorted_scandir)

    with DirectoryIterator(tmp_path) as files:
        order = [p.as_posix() for p in files.relative_paths()]

    # The deepest file is reached before any shallower sibling.
    assert order == ["d1/d2/d3/z.txt", "d1/d2/y.txt", "d1/x.txt", "top.txt"]


def test_deep_tree_does_not_recurse(tmp_path: Path) -> None:
    depth = 200
    deep = tmp_path.joinpath(*(["d"] * depth))
    deep.mkdir(parents=True)
    (deep / "leaf.txt").write_bytes(b"leaf")

    with DirectoryIterator(tmp_path) as files:
        found = list(files.relative_paths())

    assert found == [Path(*(["d"] * depth), "leaf.txt")]


def test_iterator_is_not_restartable(repository: Path) -> None:
    files = DirectoryIterator(repository)
    first = list(files)
    second = list(files)

    assert len(first) == len(TREE)
    assert second == []


def test_missing_root_raises_file_io_error(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileIoError) as excinfo:
        DirectoryIterator(missing)

    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.io_error, FileNotFoundError)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_unreadable_subdirectory_raises_and_closes(tmp_path: Path, mocker: MockerFixture) -> None:
    make_tree(tmp_path, {"locked/file.txt": b"x"})
    real_scandir = os.scandir

    def failing_scandir(path):
        if os.fspath(path).endswith("locked"):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    mocker.patch("inventorize.utils.dir_utils.os.scandir", side_effect=failing_scandir)

    files = DirectoryIterator(tmp_path)
    with pytest.raises(FileIoError, match="Permission denied") as excinfo:
        list(files)

    assert excinfo.value.path == tmp_path / "locked"
    # The failure is permanent.
    assert list(files) == []


class _ListIterator:
    """Stand-in for the object returned by os.scandir."""

    def __init__(self, entries):
        self._entries = iter(entries)

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._entries)

    def close(self):
        pass
