"""Orchestration: list files → chunk policy → histogram."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chunk_dist.config import Settings
from chunk_dist.histogram import HistogramAggregator, RunningTotals, SizeBucket
from chunk_dist.walker import DirectoryLister

logger = logging.getLogger(__name__)


@dataclass
class ChunkReport:
    """Aggregated chunk statistics for one directory tree."""

    root: Path
    totals: RunningTotals
    histogram: list[tuple[SizeBucket, int]]
    skipped_dirs: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        t = self.totals
        return {
            "root": str(self.root),
            "files": {
                "total": t.total_files,
                "larger_than_1mb": {"count": t.large_files, "gigabytes": t.large_gigabytes},
                "smaller_than_1mb": {"count": t.small_files, "gigabytes": t.small_gigabytes},
            },
            "chunks": {
                "total": t.total_chunks,
                "large": t.large_chunks,
                "small": t.small_chunks,
            },
            "histogram": [
                {"bucket_kb": int(bucket), "label": bucket.label, "count": count}
                for bucket, count in self.histogram
            ],
            "skipped_dirs": [str(p) for p in self.skipped_dirs],
        }


def aggregate_sizes(sizes: Iterable[int], *, zero_remainder_chunk: bool = True) -> HistogramAggregator:
    """Feed every file size through the chunk policy into a fresh aggregator."""
    aggregator = HistogramAggregator(zero_remainder_chunk=zero_remainder_chunk)
    for size in sizes:
        aggregator.add_file(size)
    return aggregator


def analyze_tree(
    root: Path,
    *,
    zero_remainder_chunk: bool = True,
    follow_symlinks: bool = False,
) -> ChunkReport:
    """Walk ``root`` and return the chunk report for every file beneath it."""
    lister = DirectoryLister(root, follow_symlinks=follow_symlinks)
    aggregator = aggregate_sizes(
        lister.iter_file_sizes(), zero_remainder_chunk=zero_remainder_chunk
    )
    totals, histogram = aggregator.finalize()

    logger.info(
        "Scanned %d files under %s (%d chunks, %d directories skipped)",
        totals.total_files, root, totals.total_chunks, len(lister.skipped),
    )
    return ChunkReport(root=root, totals=totals, histogram=histogram, skipped_dirs=lister.skipped)


def analyze(settings: Settings, root: Path | None = None) -> ChunkReport:
    """Run the analysis for ``root``, or the root resolved from settings."""
    if root is None:
        root = settings.resolve_root()
    return analyze_tree(
        root,
        zero_remainder_chunk=settings.zero_remainder_chunk,
        follow_symlinks=settings.follow_symlinks,
    )
