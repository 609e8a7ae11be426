"""
Day Planner - Auto-Block Generator
Derives the dependent blocks (travel, buffer, family time) that follow an operation.
"""

import math
import time
from typing import Optional, List

from .config import AutoBlockConfig, get_auto_block_config
from .logger import logger
from .models import ScheduleBlock, make_block_id
from .time_grid import round_to_half_hour, block_end


class AutoBlockGenerator:
    """
    Pure generator for an anchor's dependent blocks.

    Output is independent of any schedule; callers collision-check it
    before committing.
    """

    def __init__(self, settings: Optional[AutoBlockConfig] = None):
        self.settings = settings or get_auto_block_config()

    def generate(
        self,
        anchor_start: float,
        anchor_duration: int,
        anchor_id: Optional[str] = None
    ) -> List[ScheduleBlock]:
        """
        Build ROAD / BUFFER / FAM blocks around an anchor.

        Args:
            anchor_start: Anchor start hour on the extended grid
            anchor_duration: Anchor duration in minutes
            anchor_id: Id of the owning anchor, stamped on every generated block

        Returns:
            Generated blocks, all with auto=True; empty for a non-finite start
        """
        if not math.isfinite(anchor_start):
            logger.warning(f"Cannot generate auto-blocks for anchor start {anchor_start}")
            return []

        cfg = self.settings
        timestamp = int(time.time() * 1000)
        anchor_end = block_end(anchor_start, anchor_duration)
        blocks = []

        road_start = round_to_half_hour(anchor_start - 0.5)
        if road_start >= cfg.min_road_start:
            blocks.append(ScheduleBlock(
                id=make_block_id("ROAD", "pre", timestamp),
                block_id="ROAD",
                start_hour=road_start,
                duration=cfg.road_duration,
                auto=True,
                anchor_id=anchor_id,
            ))

        blocks.append(ScheduleBlock(
            id=make_block_id("BUFFER", None, timestamp),
            block_id="BUFFER",
            start_hour=round_to_half_hour(anchor_end),
            duration=cfg.buffer_duration,
            auto=True,
            anchor_id=anchor_id,
        ))

        fam_start = round_to_half_hour(anchor_end + 0.5)
        if block_end(fam_start, cfg.family_duration) <= cfg.max_family_end:
            blocks.append(ScheduleBlock(
                id=make_block_id("FAM", None, timestamp),
                block_id="FAM",
                start_hour=fam_start,
                duration=cfg.family_duration,
                auto=True,
                anchor_id=anchor_id,
            ))

        return blocks


def generate_auto_blocks(anchor_start: float, anchor_duration: int) -> List[ScheduleBlock]:
    """Generate auto-blocks with the default settings."""
    return AutoBlockGenerator().generate(anchor_start, anchor_duration)
