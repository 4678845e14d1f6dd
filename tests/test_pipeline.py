"""Tests for chunk_dist.pipeline — orchestration logic."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from chunk_dist.config import Settings
from chunk_dist.histogram import SizeBucket
from chunk_dist.pipeline import aggregate_sizes, analyze, analyze_tree
from chunk_dist.policy import ONE_KB, ONE_MB
from chunk_dist.walker import HomeDirResolutionError


# ---------------------------------------------------------------------------
# analyze_tree
# ---------------------------------------------------------------------------

def test_analyze_tree_totals(sample_tree: Path):
    report = analyze_tree(sample_tree)
    t = report.totals
    assert t.total_files == 3
    assert t.large_files == 1
    assert t.small_files == 2
    assert t.small_file_bytes == 500 + 3 * ONE_KB
    assert t.large_file_bytes == 2 * ONE_MB + 10 * ONE_KB
    assert t.total_chunks == 10
    assert t.large_chunks == 2
    assert t.small_chunks == 8


def test_analyze_tree_histogram(sample_tree: Path):
    report = analyze_tree(sample_tree)
    hist = dict(report.histogram)
    assert hist[SizeBucket.KB_0] == 8
    assert hist[SizeBucket.KB_1000_PLUS] == 2
    assert sum(hist.values()) == report.totals.total_chunks


def test_analyze_tree_empty(tmp_path: Path):
    report = analyze_tree(tmp_path)
    assert report.totals.total_files == 0
    assert all(count == 0 for _, count in report.histogram)


def test_analyze_tree_strict_remainder(tmp_path: Path, make_file):
    make_file(tmp_path / "two_mb.bin", 2 * ONE_MB)
    default = analyze_tree(tmp_path)
    strict = analyze_tree(tmp_path, zero_remainder_chunk=False)
    assert default.totals.large_chunks == 1
    assert strict.totals.large_chunks == 2
    assert default.totals.total_chunks == strict.totals.total_chunks == 3


def test_aggregate_sizes_accepts_any_iterable():
    agg = aggregate_sizes(iter([0, 500, 3 * ONE_KB]))
    assert agg.totals.total_chunks == 2 + 2 + 4


# ---------------------------------------------------------------------------
# analyze (settings-driven)
# ---------------------------------------------------------------------------

def test_analyze_uses_settings_root(sample_tree: Path):
    report = analyze(Settings(root_dir=sample_tree))
    assert report.root == sample_tree
    assert report.totals.total_files == 3


def test_analyze_explicit_root_overrides_settings(sample_tree: Path, tmp_path: Path):
    other = tmp_path / "other"
    other.mkdir()
    report = analyze(Settings(root_dir=sample_tree), other)
    assert report.root == other
    assert report.totals.total_files == 0


def test_analyze_defaults_to_home(sample_tree: Path):
    with patch("chunk_dist.config.Path.home", return_value=sample_tree):
        report = analyze(Settings())
    assert report.root == sample_tree


def test_analyze_home_failure_propagates():
    with patch("chunk_dist.config.Path.home", side_effect=RuntimeError("no home")):
        with pytest.raises(HomeDirResolutionError):
            analyze(Settings())


# ---------------------------------------------------------------------------
# ChunkReport.to_dict
# ---------------------------------------------------------------------------

def test_report_to_dict(sample_tree: Path):
    data = analyze_tree(sample_tree).to_dict()
    assert data["root"] == str(sample_tree)
    assert data["files"]["total"] == 3
    assert data["files"]["larger_than_1mb"]["count"] == 1
    assert data["chunks"] == {"total": 10, "large": 2, "small": 8}
    assert [h["label"] for h in data["histogram"]][0] == "0-100 KB"
    assert data["histogram"][-1] == {"bucket_kb": 1000, "label": "1000+", "count": 2}
    assert data["skipped_dirs"] == []
