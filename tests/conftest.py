"""Shared test fixtures for chunk_dist test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from chunk_dist.config import Settings
from chunk_dist.policy import ONE_KB, ONE_MB


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CHUNK_DIST_* variables from the host out of the tests."""
    for name in ("CHUNK_DIST_ROOT_DIR", "CHUNK_DIST_ZERO_REMAINDER_CHUNK", "CHUNK_DIST_FOLLOW_SYMLINKS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    """Settings rooted at an empty tmp_path directory."""
    return Settings(root_dir=tmp_path)


# ---------------------------------------------------------------------------
# Sample trees
# ---------------------------------------------------------------------------

def _write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        if size:
            f.truncate(size)
    return path


@pytest.fixture()
def sample_tree(tmp_path: Path) -> Path:
    """A small tree with one file per policy rule.

    root/
      tiny.txt              500 B      -> 1 chunk + datamap
      docs/three_kb.bin     3 KB       -> 3 chunks + datamap
      docs/nested/big.bin   2 MB + 10 KB -> 2 large + tail + datamap
      empty/
    """
    root = tmp_path / "tree"
    _write_file(root / "tiny.txt", 500)
    _write_file(root / "docs" / "three_kb.bin", 3 * ONE_KB)
    _write_file(root / "docs" / "nested" / "big.bin", 2 * ONE_MB + 10 * ONE_KB)
    (root / "empty").mkdir()
    return root


@pytest.fixture()
def make_file():
    """Return a helper that writes a sparse file of the given size."""
    return _write_file
