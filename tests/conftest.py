"""
Shared fixtures for sweep tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dupsweep' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from dupsweep.core.models import Fingerprint, DuplicateGroup


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def set_mtime(path: Path, mtime: int) -> None:
    os.utime(path, (mtime, mtime))


@pytest.fixture
def abc_tree(temp_dir) -> Dict[str, Path]:
    """
    The classic layout:
    - a and b share content, b is newer than a
    - c has different content of the same size
    """
    files = {
        "a": temp_dir / "a",
        "b": temp_dir / "b",
        "c": temp_dir / "c",
    }
    files["a"].write_bytes(b"H1" * 512)
    files["b"].write_bytes(b"H1" * 512)
    files["c"].write_bytes(b"H2" * 512)
    set_mtime(files["a"], 1_600_000_000)
    set_mtime(files["b"], 1_700_000_000)
    set_mtime(files["c"], 1_650_000_000)
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 2 identical files (duplicates) plus a third copy in a subdirectory
    - 2 identical files of another content
    - 2 unique files of distinct sizes
    - 2 empty files (duplicates of each other)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["empty1"] = temp_dir / "empty1.txt"
    files["empty1"].write_bytes(b"")
    files["empty2"] = temp_dir / "empty2.txt"
    files["empty2"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


def make_group(*specs) -> DuplicateGroup:
    """Build a group from (mtime, path) pairs sharing hash 'h'."""
    return DuplicateGroup(
        hash="h",
        members=[Fingerprint(hash="h", mtime=mtime, path=path) for mtime, path in specs]
    )


@pytest.fixture
def group_factory():
    return make_group
