"""Chunk size histogram and running totals."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, fields

from chunk_dist.policy import (
    ONE_GB,
    ONE_KB,
    ChunkGroup,
    ChunkRole,
    chunks_for,
    is_large_file,
)

logger = logging.getLogger(__name__)

BUCKET_WIDTH_KB = 100


class SizeBucket(enum.IntEnum):
    """Histogram classes keyed by their lower bound in KB."""

    KB_0 = 0
    KB_100 = 100
    KB_200 = 200
    KB_300 = 300
    KB_400 = 400
    KB_500 = 500
    KB_600 = 600
    KB_700 = 700
    KB_800 = 800
    KB_900 = 900
    KB_1000_PLUS = 1000

    @property
    def label(self) -> str:
        if self is SizeBucket.KB_1000_PLUS:
            return f"{self.value}+"
        upper = self.value + BUCKET_WIDTH_KB
        if self is SizeBucket.KB_0:
            return f"{self.value}-{upper} KB"
        return f"{self.value}-{upper}"


_TOP_BUCKET = SizeBucket.KB_1000_PLUS


def bucket_for(size_bytes: int) -> SizeBucket:
    """Map a chunk size in bytes to its histogram bucket.

    Anything at or beyond the top band lands in ``1000+``.
    """
    key = (size_bytes // ONE_KB) // BUCKET_WIDTH_KB * BUCKET_WIDTH_KB
    if key >= _TOP_BUCKET:
        if key > _TOP_BUCKET:
            logger.debug("Chunk of %d bytes clamped into %s bucket", size_bytes, _TOP_BUCKET.label)
        return _TOP_BUCKET
    return SizeBucket(key)


@dataclass
class RunningTotals:
    large_files: int = 0
    small_files: int = 0
    large_file_bytes: int = 0
    small_file_bytes: int = 0
    total_chunks: int = 0
    large_chunks: int = 0
    small_chunks: int = 0

    @property
    def total_files(self) -> int:
        return self.large_files + self.small_files

    @property
    def large_gigabytes(self) -> float:
        return self.large_file_bytes / ONE_GB

    @property
    def small_gigabytes(self) -> float:
        return self.small_file_bytes / ONE_GB

    def __add__(self, other: RunningTotals) -> RunningTotals:
        return RunningTotals(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )


class HistogramAggregator:
    """Accumulates chunk counts per size bucket plus file and chunk totals.

    Aggregators over disjoint sets of files can be combined with ``merge``
    (or ``+``); the result equals aggregating all files at once.
    """

    def __init__(self, *, zero_remainder_chunk: bool = True) -> None:
        self.zero_remainder_chunk = zero_remainder_chunk
        self.totals = RunningTotals()
        self.histogram: dict[SizeBucket, int] = {bucket: 0 for bucket in SizeBucket}

    def record(self, chunk_size: int, role: ChunkRole, count: int = 1) -> None:
        """Add ``count`` chunks of ``chunk_size`` bytes to the histogram and chunk totals."""
        if count <= 0:
            return
        self.histogram[bucket_for(chunk_size)] += count
        self.totals.total_chunks += count
        if ChunkGroup(chunk_size, role).is_large:
            self.totals.large_chunks += count
        else:
            self.totals.small_chunks += count

    def add_file(self, size: int) -> None:
        """Account for one file of ``size`` bytes."""
        chunk_set = chunks_for(size, zero_remainder_chunk=self.zero_remainder_chunk)
        if is_large_file(size):
            self.totals.large_files += 1
            self.totals.large_file_bytes += size
        else:
            self.totals.small_files += 1
            self.totals.small_file_bytes += size

        for group in chunk_set.groups:
            self.record(group.size, group.role, group.count)

    def merge(self, other: HistogramAggregator) -> HistogramAggregator:
        if other.zero_remainder_chunk != self.zero_remainder_chunk:
            raise ValueError("Cannot merge aggregators using different zero-remainder policies")
        merged = HistogramAggregator(zero_remainder_chunk=self.zero_remainder_chunk)
        merged.totals = self.totals + other.totals
        merged.histogram = {
            bucket: self.histogram[bucket] + other.histogram[bucket] for bucket in SizeBucket
        }
        return merged

    __add__ = merge

    def finalize(self) -> tuple[RunningTotals, list[tuple[SizeBucket, int]]]:
        """Return a copy of the totals and the histogram sorted by bucket."""
        totals = RunningTotals(**{f.name: getattr(self.totals, f.name) for f in fields(self.totals)})
        entries = sorted(self.histogram.items())
        return totals, entries
