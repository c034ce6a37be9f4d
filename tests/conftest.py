"""Shared fixtures for inventorize tests."""

import os
import sys
from pathlib import Path

import pytest

from inventorize.core.config import get_settings

TREE = {
    "a.txt": b"0123456789",
    "sub/b.txt": b"hello world",
    "sub/deeper/c.bin": bytes(range(256)) * 4,
    "empty.dat": b"",
    ".hidden": b"secret",
    ".git/config": b"[core]\n",
    ".git/objects/visible.txt": b"nested inside a hidden directory",
    "sub/.env": b"KEY=value\n",
}

VISIBLE = {"a.txt", "sub/b.txt", "sub/deeper/c.bin", "empty.dat"}


def make_tree(root: Path, files: dict[str, bytes]) -> Path:
    """Create the given files (relative path -> contents) under root."""
    for rel_path, contents in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(contents)
    return root


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """A repository with visible and hidden files at several depths."""
    root = tmp_path / "repo"
    root.mkdir()
    return make_tree(root, TREE)


@pytest.fixture
def inventory_path(tmp_path: Path) -> Path:
    """Location of the inventory file, outside of the repository."""
    return tmp_path / "inventory.json"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make sure every test reads the settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def undecodable_file(repository: Path) -> Path:
    """Add a file whose name is not valid UTF-8 to the repository."""
    if sys.platform == "win32":
        pytest.skip("file names are always Unicode on Windows")
    name = os.path.join(os.fsencode(repository), b"bad\xff.txt")
    try:
        with open(name, "wb") as f:
            f.write(b"data")
    except OSError as e:
        pytest.skip(f"filesystem rejects non-UTF-8 file names: {e}")
    return Path(os.fsdecode(name))
