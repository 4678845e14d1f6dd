"""Chunking policy: how many chunks of which sizes a file would produce."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ONE_KB = 1024
ONE_MB = 1024 * ONE_KB
ONE_GB = 1024 * ONE_MB

MAX_CHUNK_SIZE = ONE_MB
MIN_SPLIT_SIZE = 3 * ONE_KB
SPLIT_COUNT = 3

# A datamap is typically about 500 B; it is always binned as a 1 KB record.
DATAMAP_SIZE = ONE_KB


class ChunkRole(str, enum.Enum):
    DATA = "data"
    DATAMAP = "datamap"


@dataclass(frozen=True)
class ChunkGroup:
    """``count`` chunks of ``size`` bytes sharing one role."""

    size: int
    role: ChunkRole
    count: int = 1

    @property
    def is_large(self) -> bool:
        return self.role is ChunkRole.DATA and self.size == MAX_CHUNK_SIZE


@dataclass(frozen=True)
class ChunkSizeSet:
    """Ordered chunk groups for a single file, data chunks first, datamap last."""

    file_size: int
    groups: tuple[ChunkGroup, ...]

    @property
    def total(self) -> int:
        return sum(g.count for g in self.groups)

    @property
    def large(self) -> int:
        return sum(g.count for g in self.groups if g.is_large)

    @property
    def small(self) -> int:
        return self.total - self.large

    def sizes(self) -> list[int]:
        """Expand the groups into the flat ordered list of chunk sizes."""
        return [g.size for g in self.groups for _ in range(g.count)]


def is_large_file(size: int) -> bool:
    return size > MAX_CHUNK_SIZE


def chunks_for(size: int, *, zero_remainder_chunk: bool = True) -> ChunkSizeSet:
    """Compute the chunks a file of ``size`` bytes would be split into.

    Files over 1 MB become 1 MB chunks plus a tail chunk holding the
    remainder. Files of 3 KB up to 1 MB become three equal chunks, and
    smaller files stay whole. Every file also gets one datamap.

    When ``size`` is an exact multiple of 1 MB and ``zero_remainder_chunk``
    is true, the last chunk is still emitted as a 0-byte tail. With it false
    all chunks are full 1 MB chunks.
    """
    if size < 0:
        raise ValueError(f"File size must be non-negative, got {size}")

    datamap = ChunkGroup(DATAMAP_SIZE, ChunkRole.DATAMAP)

    if is_large_file(size):
        full, remainder = divmod(size, MAX_CHUNK_SIZE)
        if remainder or zero_remainder_chunk:
            # ceil(size / 1 MB) chunks, the last one holding the remainder
            n_chunks = full + (1 if remainder else 0)
            groups = (
                ChunkGroup(MAX_CHUNK_SIZE, ChunkRole.DATA, n_chunks - 1),
                ChunkGroup(remainder, ChunkRole.DATA),
                datamap,
            )
        else:
            groups = (ChunkGroup(MAX_CHUNK_SIZE, ChunkRole.DATA, full), datamap)
        return ChunkSizeSet(size, groups)

    if size < MIN_SPLIT_SIZE:
        return ChunkSizeSet(size, (ChunkGroup(size, ChunkRole.DATA), datamap))

    return ChunkSizeSet(
        size,
        (ChunkGroup(size // SPLIT_COUNT, ChunkRole.DATA, SPLIT_COUNT), datamap),
    )
