"""
Day Planner - Time Grid
Half-hour addressing over an extended day: 06:00 today through 06:00 tomorrow,
stored as hours 6.0-30.0 (24.0 = midnight, 29.5 = 05:30).
"""

from typing import List, Optional, Dict, Any

from .config import GridConfig, get_grid_config
from .models import ScheduleBlock


SLOTS_PER_HOUR = 2
MIDNIGHT = 24.0


def round_to_half_hour(hour: float) -> float:
    """Snap an hour to the nearest half hour (Python round, ties to even)."""
    return round(hour * 2) / 2


def is_valid_start(hour: float, grid: Optional[GridConfig] = None) -> bool:
    """True if a block may start at this hour."""
    grid = grid or get_grid_config()
    return grid.day_start_hour <= hour < grid.day_end_hour


def block_end(start_hour: float, duration_minutes: int) -> float:
    return start_hour + duration_minutes / 60


def intervals_overlap(start_a: float, end_a: float, start_b: float, end_b: float) -> bool:
    """Half-open interval overlap: [a) and [b) share at least one instant."""
    return start_a < end_b and end_a > start_b


def format_hour(hour: float) -> str:
    """Format an extended-grid hour as a clock label (24.5 -> '00:30')."""
    display_hour = hour - 24 if hour >= MIDNIGHT else hour
    h = int(display_hour)
    m = int(round((display_hour - h) * 60))
    return f"{h:02d}:{m:02d}"


def time_slots() -> List[Dict[str, Any]]:
    """
    Enumerate grid labels from 06:00 through 06:00 next day.

    Returns:
        List of slot dicts with hour, label, is_half, is_midnight, is_night
    """
    grid = get_grid_config()
    slots = []
    start = int(grid.day_start_hour)
    end = int(grid.day_end_hour)

    for i in range(start * SLOTS_PER_HOUR, end * SLOTS_PER_HOUR + 1):
        hour = i / SLOTS_PER_HOUR
        is_half = hour % 1 != 0
        slots.append({
            "hour": hour,
            "label": "" if is_half else format_hour(hour)[:2],
            "is_half": is_half,
            "is_midnight": hour == MIDNIGHT,
            "is_night": hour > MIDNIGHT,
        })

    return slots


def sleep_overflow(block: ScheduleBlock) -> Optional[Dict[str, Any]]:
    """
    Portion of a night block that spills past the grid end onto the next day.

    The stored block keeps its true interval; this only describes the
    carry-over a calendar shows at the top of the following day.
    """
    grid = get_grid_config()
    end = block.end_hour
    if end <= grid.day_end_hour:
        return None

    return {
        "id": f"{block.id}-overflow",
        "block_id": block.block_id,
        "start_hour": grid.day_start_hour,
        "duration": int(round((end - grid.day_end_hour) * 60)),
    }
