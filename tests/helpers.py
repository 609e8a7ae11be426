"""
Shared helpers for schedule engine tests.
"""

from typing import List

from dayplanner.models import ScheduleBlock, Schedules
from dayplanner.scheduler import find_overlaps


DAY = "2025-03-10"
NEXT_DAY = "2025-03-11"


def make_block(
    block_id: str,
    start_hour: float,
    duration: int,
    auto: bool = False,
    anchor_id: str = None,
    id: str = None
) -> ScheduleBlock:
    """Build a block with a readable id (defaults to '{kind}@{start}')."""
    return ScheduleBlock(
        id=id or f"{block_id}@{start_hour}",
        block_id=block_id,
        start_hour=start_hour,
        duration=duration,
        auto=auto,
        anchor_id=anchor_id,
    )


def timing(blocks: List[ScheduleBlock]) -> List[tuple]:
    """Id-free view of a block list: (kind, start, duration, auto)."""
    return [(b.block_id, b.start_hour, b.duration, b.auto) for b in blocks]


def snapshot(schedules: Schedules) -> dict:
    """Value snapshot of a schedules mapping, for before/after comparisons."""
    return {day: [b.model_dump() for b in blocks] for day, blocks in schedules.items()}


def assert_no_overlaps(schedules: Schedules):
    for day, blocks in schedules.items():
        overlaps = find_overlaps(blocks)
        assert not overlaps, (
            f"{day} has overlapping blocks: "
            f"{[(a.id, b.id) for a, b in overlaps]}"
        )
