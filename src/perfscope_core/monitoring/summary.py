"""
Summary aggregation over retained render records and snapshots.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import time
from itertools import islice
from typing import Dict, Iterable, Sequence

from .models import MemorySnapshot, PerformanceSummary, RenderRecord, RenderStats


def aggregate_renders(records: Iterable[RenderRecord]) -> Dict[str, RenderStats]:
    """
    Group closed render records by label.

    Open records (duration is None) are skipped.

    Args:
        records: Render records in any order

    Returns:
        Mapping of label to RenderStats, in first-seen label order
    """
    render_summary: Dict[str, RenderStats] = {}

    for record in records:
        if record.duration is None:
            continue
        render_summary.setdefault(record.label, RenderStats()).update(record.duration)

    return render_summary


def summarize(
    records: Iterable[RenderRecord],
    snapshots: Sequence[MemorySnapshot],
    snapshot_count: int = 10,
) -> PerformanceSummary:
    """
    Build a PerformanceSummary. Reads its inputs only.

    Args:
        records: Retained render records
        snapshots: Snapshot history, oldest first
        snapshot_count: How many of the newest snapshots to include

    Returns:
        PerformanceSummary with a fresh timestamp
    """
    skip = max(len(snapshots) - snapshot_count, 0)
    recent = list(islice(snapshots, skip, None))

    return PerformanceSummary(
        render_summary=aggregate_renders(records),
        memory_snapshots=recent,
        timestamp=time.time(),
    )
