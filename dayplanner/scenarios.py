"""
Day Planner - Scenarios
Expands a named day scenario into a full block list, and infers the scenario
behind an existing day.
"""

import time
from typing import Optional, List

from .catalog import (
    BlockCatalog, ScenarioCatalog, WorkContexts,
    DEFAULT_BLOCKS, DEFAULT_SCENARIOS, DEFAULT_CONTEXTS,
    OPERATION_PREFIX, WEEKEND_SCENARIO,
)
from .config import AutoBlockConfig, get_auto_block_config
from .logger import logger
from .models import Confidence, Scenario, ScenarioDetection, ScheduleBlock, WorkContext, make_block_id
from .scheduler import sort_blocks
from .time_grid import round_to_half_hour, block_end


# ============================================
# CONFIGURATION - Fixed scenario templates
# ============================================

SLEEP_DURATION = 480
GYM_START = 12.5
GYM_DURATION = 90
EVENING_CUTOFF = 23.0
EVENING_MAX_DURATION = 180

OPERATION_KINDS = {1: "OP_1", 2: "OP_2", 3: "OP_3"}

# (block kind, start hour, duration) for a day off
WEEKEND_TEMPLATE = [
    ("SLEEP", 27.0, 480),
    ("FAM", 12.0, 120),
    ("WALK", 14.5, 90),
    ("SPORT_SPA", 16.5, 150),
    ("HYPER", 20.0, 180),
]

# Upper bound on operation start hour for each queue position
DETECTION_THRESHOLDS = [
    (9.0, "1", "1st"),
    (11.0, "2", "2nd"),
    (13.0, "3", "3rd"),
]


# ============================================
# SCENARIO EXPANSION
# ============================================

class ScenarioExpander:
    """
    Builds a whole day from a scenario key, an operation count and a work context.

    Weekday expansion lays out its own travel/buffer/family sequence around
    the operation: a second ROAD leg home and an evening work block, no 07:00
    floor on the first ROAD leg. It deliberately does not reuse
    AutoBlockGenerator.
    """

    def __init__(
        self,
        scenarios: Optional[ScenarioCatalog] = None,
        catalog: Optional[BlockCatalog] = None,
        contexts: Optional[WorkContexts] = None,
        settings: Optional[AutoBlockConfig] = None
    ):
        self.scenarios = scenarios or DEFAULT_SCENARIOS
        self.catalog = catalog or DEFAULT_BLOCKS
        self.contexts = contexts or DEFAULT_CONTEXTS
        self.settings = settings or get_auto_block_config()

    def apply(self, scenario_key: str, operation_count: int = 1, context: str = "") -> List[ScheduleBlock]:
        """
        Expand a scenario into a day's blocks.

        Args:
            scenario_key: Scenario catalog key ("1".."4", "w")
            operation_count: 1-3 operations; anything else counts as 1
            context: Work context key tagging home-window and evening work

        Returns:
            Blocks sorted by start hour; empty for an unknown scenario
        """
        scenario = self.scenarios.get(scenario_key)
        if scenario is None:
            logger.warning(f"Unknown scenario '{scenario_key}', nothing to apply")
            return []

        timestamp = int(time.time() * 1000)
        work = self.contexts.get(context)
        if context and work is None:
            logger.warning(f"Unknown work context '{context}', skipping work blocks")

        if scenario.is_weekend:
            blocks = self._weekend(timestamp)
        elif scenario.op_start is not None:
            blocks = self._weekday(scenario, operation_count, work, timestamp)
        else:
            blocks = []

        return sort_blocks(blocks)

    def _weekend(self, timestamp: int) -> List[ScheduleBlock]:
        return [
            ScheduleBlock(
                id=make_block_id(kind, None, timestamp),
                block_id=kind,
                start_hour=start,
                duration=duration,
            )
            for kind, start, duration in WEEKEND_TEMPLATE
            if self._known(kind)
        ]

    def _weekday(
        self,
        scenario: Scenario,
        operation_count: int,
        work: Optional[WorkContext],
        timestamp: int
    ) -> List[ScheduleBlock]:
        cfg = self.settings
        blocks = [ScheduleBlock(
            id=make_block_id("SLEEP", None, timestamp),
            block_id="SLEEP",
            start_hour=scenario.wake_up - 8 + 24,
            duration=SLEEP_DURATION,
        )]

        work_kind = work.block_id if work and self._known(work.block_id) else None

        if scenario.home_window and work_kind:
            blocks.append(ScheduleBlock(
                id=make_block_id(work_kind, "home", timestamp),
                block_id=work_kind,
                start_hour=scenario.home_window.start,
                duration=scenario.home_window.duration,
            ))

        if scenario.can_gym:
            blocks.append(ScheduleBlock(
                id=make_block_id("SPORT", None, timestamp),
                block_id="SPORT",
                start_hour=GYM_START,
                duration=GYM_DURATION,
            ))

        op_kind = OPERATION_KINDS.get(operation_count, "OP_1")
        op_definition = self.catalog.get(op_kind)
        if op_definition is None:
            logger.warning(f"Operation kind {op_kind} missing from catalog, skipping operation")
            return blocks

        op_start = scenario.op_start
        op_end = block_end(op_start, op_definition.duration)
        op_id = make_block_id(op_kind, None, timestamp)
        blocks.append(ScheduleBlock(
            id=op_id,
            block_id=op_kind,
            start_hour=op_start,
            duration=op_definition.duration,
        ))

        def dependent(kind: str, suffix: str, start: float, duration: int) -> ScheduleBlock:
            return ScheduleBlock(
                id=make_block_id(kind, suffix, timestamp),
                block_id=kind,
                start_hour=start,
                duration=duration,
                auto=True,
                anchor_id=op_id,
            )

        blocks.append(dependent("ROAD", "pre", op_start - 0.5, cfg.road_duration))
        blocks.append(dependent("BUFFER", "post", round_to_half_hour(op_end), cfg.buffer_duration))
        blocks.append(dependent("ROAD", "home", round_to_half_hour(op_end + 0.5), cfg.road_duration))

        fam_start = round_to_half_hour(op_end + 1)
        if fam_start < cfg.max_family_end:
            blocks.append(dependent("FAM", "post", fam_start, cfg.family_duration))

        eve_start = round_to_half_hour(fam_start + 1)
        if eve_start < EVENING_CUTOFF and work_kind:
            blocks.append(ScheduleBlock(
                id=make_block_id(work_kind, "eve", timestamp),
                block_id=work_kind,
                start_hour=eve_start,
                duration=int(min(EVENING_MAX_DURATION, (24 - eve_start) * 60)),
            ))

        return blocks

    def _known(self, block_kind_id: str) -> bool:
        if block_kind_id in self.catalog:
            return True
        logger.warning(f"Block kind {block_kind_id} missing from catalog, skipped")
        return False


def apply_scenario(scenario_key: str, operation_count: int = 1, context: str = "") -> List[ScheduleBlock]:
    """Expand a scenario with the default catalogs."""
    return ScenarioExpander().apply(scenario_key, operation_count, context)


# ============================================
# SCENARIO DETECTION
# ============================================

def detect_scenario(schedule: List[ScheduleBlock]) -> ScenarioDetection:
    """
    Infer which scenario most likely produced a day.

    Classifies by the start hour of the first operation block; a day with no
    operation is taken to be a weekend.
    """
    op_block = next((b for b in schedule if b.block_id.startswith(OPERATION_PREFIX)), None)

    if op_block is None:
        return ScenarioDetection(
            scenario=WEEKEND_SCENARIO,
            confidence=Confidence.MEDIUM,
            reason="No operation blocks found - assuming weekend",
        )

    op_start = op_block.start_hour
    for threshold, key, position in DETECTION_THRESHOLDS:
        if op_start <= threshold:
            return ScenarioDetection(
                scenario=key,
                confidence=Confidence.HIGH,
                reason=f"Operation starts at {op_start:.1f}, indicating {position} in queue",
            )

    return ScenarioDetection(
        scenario="4",
        confidence=Confidence.HIGH,
        reason=f"Operation starts at {op_start:.1f}, indicating 4th+ in queue",
    )
