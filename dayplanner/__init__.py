"""
Day Planner - schedule editing and scenario engine.
"""

from .auto_blocks import AutoBlockGenerator, generate_auto_blocks
from .catalog import (
    BlockCatalog, ScenarioCatalog, WorkContexts,
    DEFAULT_BLOCKS, DEFAULT_SCENARIOS, DEFAULT_CONTEXTS,
)
from .models import (
    BlockCategory, BlockDefinition, EditResult, Rejection, Scenario,
    ScenarioDetection, ScheduleBlock, Schedules, WorkContext,
)
from .scenarios import ScenarioExpander, apply_scenario, detect_scenario
from .scheduler import ScheduleEditor, has_collision
from .time_grid import round_to_half_hour, is_valid_start, format_hour, time_slots, sleep_overflow

__all__ = [
    # Catalogs
    "BlockCatalog",
    "ScenarioCatalog",
    "WorkContexts",
    "DEFAULT_BLOCKS",
    "DEFAULT_SCENARIOS",
    "DEFAULT_CONTEXTS",
    # Types
    "BlockCategory",
    "BlockDefinition",
    "EditResult",
    "Rejection",
    "Scenario",
    "ScenarioDetection",
    "ScheduleBlock",
    "Schedules",
    "WorkContext",
    # Engine
    "AutoBlockGenerator",
    "generate_auto_blocks",
    "ScheduleEditor",
    "has_collision",
    "ScenarioExpander",
    "apply_scenario",
    "detect_scenario",
    # Time grid
    "round_to_half_hour",
    "is_valid_start",
    "format_hour",
    "time_slots",
    "sleep_overflow",
]
