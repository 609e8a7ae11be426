"""
Day Planner - Schedule Store
Collision detection and the place / move / shift / resize / remove mutators.

Every mutator takes the caller's ``day -> blocks`` mapping and returns an
EditResult. The input mapping and its lists are never mutated: a rejected edit
hands back the input unchanged, an accepted one returns a new mapping that
shares untouched days with the input.
"""

import math
from typing import Optional, List, Iterable, Dict, Set

from .auto_blocks import AutoBlockGenerator
from .catalog import BlockCatalog, DEFAULT_BLOCKS
from .config import GridConfig, get_grid_config
from .logger import logger
from .models import EditResult, Rejection, ScheduleBlock, Schedules, make_block_id
from .time_grid import round_to_half_hour, is_valid_start, block_end, intervals_overlap


# ============================================
# UTILITY FUNCTIONS
# ============================================

def sort_blocks(blocks: Iterable[ScheduleBlock]) -> List[ScheduleBlock]:
    """Order a day's blocks by start hour (stable for equal starts)."""
    return sorted(blocks, key=lambda b: b.start_hour)


def find_block(schedule: List[ScheduleBlock], block_id: str) -> Optional[ScheduleBlock]:
    return next((b for b in schedule if b.id == block_id), None)


def unique_id(candidate: str, taken: Set[str]) -> str:
    """Append a numeric suffix until the id is unused in `taken`."""
    if candidate not in taken:
        return candidate
    n = 2
    while f"{candidate}-{n}" in taken:
        n += 1
    return f"{candidate}-{n}"


def has_collision(
    schedule: List[ScheduleBlock],
    start_hour: float,
    duration: int,
    exclude_ids: Iterable[str] = ()
) -> bool:
    """
    Check whether [start, start + duration) overlaps any block in the schedule.

    Args:
        schedule: One day's blocks
        start_hour: Candidate start hour
        duration: Candidate duration in minutes
        exclude_ids: Block ids to ignore (the block being edited, its dependents)
    """
    excluded = set(exclude_ids)
    end = block_end(start_hour, duration)
    return any(
        b.id not in excluded and intervals_overlap(start_hour, end, b.start_hour, b.end_hour)
        for b in schedule
    )


def find_overlaps(schedule: List[ScheduleBlock]) -> List[tuple]:
    """Return every pair of overlapping blocks (empty for a consistent day)."""
    ordered = sort_blocks(schedule)
    overlaps = []
    for i, a in enumerate(ordered):
        for b in ordered[i + 1:]:
            if b.start_hour >= a.end_hour:
                break
            overlaps.append((a, b))
    return overlaps


# ============================================
# SCHEDULE EDITOR
# ============================================

class ScheduleEditor:
    """
    Applies schedule mutations while keeping each day free of overlaps.

    Operation (anchor) blocks own auto-generated dependents. Whenever an anchor
    is placed, moved, shifted or resized its dependents are retracted and
    regenerated; removing the anchor retracts them.
    """

    def __init__(
        self,
        catalog: Optional[BlockCatalog] = None,
        generator: Optional[AutoBlockGenerator] = None,
        grid: Optional[GridConfig] = None
    ):
        self.catalog = catalog or DEFAULT_BLOCKS
        self.generator = generator or AutoBlockGenerator()
        self.grid = grid or get_grid_config()

    has_collision = staticmethod(has_collision)

    def dependents_of(self, schedule: List[ScheduleBlock], anchor: ScheduleBlock) -> List[ScheduleBlock]:
        """
        Auto blocks owned by `anchor`.

        Auto blocks without an owner (legacy data) belong to whichever anchor
        in the day is edited.
        """
        return [
            b for b in schedule
            if b.auto and b.id != anchor.id and b.anchor_id in (anchor.id, None)
        ]

    # ----------------------------------------
    # Mutators
    # ----------------------------------------

    def place(self, schedules: Schedules, day: str, block_kind_id: str, start_hour: float) -> EditResult:
        """Place a new block of the given kind at `start_hour` on `day`."""
        definition = self.catalog.get(block_kind_id)
        if definition is None:
            return self._reject(schedules, Rejection.UNKNOWN_BLOCK_KIND,
                                f"place {block_kind_id}: unknown block kind")

        if not math.isfinite(start_hour):
            return self._reject(schedules, Rejection.OUT_OF_BOUNDS,
                                f"place {block_kind_id}: {start_hour} is not an hour")

        start = round_to_half_hour(start_hour)
        if not is_valid_start(start, self.grid):
            return self._reject(schedules, Rejection.OUT_OF_BOUNDS,
                                f"place {block_kind_id}: {start} is off the grid")

        is_anchor = self.catalog.is_anchor(block_kind_id)
        if is_anchor and start >= self.grid.anchor_cutoff_hour:
            return self._reject(schedules, Rejection.TOO_LATE_FOR_ANCHOR,
                                f"place {block_kind_id}: operations cannot start at {start}")

        schedule = schedules.get(day, [])
        if has_collision(schedule, start, definition.duration):
            return self._reject(schedules, Rejection.COLLISION,
                                f"place {block_kind_id} at {start} on {day}: slot taken")

        taken = {b.id for b in schedule}
        block = ScheduleBlock(
            id=unique_id(make_block_id(block_kind_id), taken),
            block_id=block_kind_id,
            start_hour=start,
            duration=definition.duration,
        )
        placed = [block]

        if is_anchor:
            generated = self._regenerate(block, list(schedule))
            if generated is None:
                return self._reject(schedules, Rejection.COLLISION,
                                    f"place {block_kind_id} at {start} on {day}: auto-blocks collide")
            placed.extend(generated)

        return self._commit(schedules, {day: list(schedule) + placed}, block, "place")

    def move(
        self,
        schedules: Schedules,
        from_day: str,
        block_id: str,
        to_day: str,
        new_start_hour: float
    ) -> EditResult:
        """Move a block to `new_start_hour`, possibly onto another day."""
        source = schedules.get(from_day, [])
        block = find_block(source, block_id)
        if block is None:
            return self._reject(schedules, Rejection.BLOCK_NOT_FOUND,
                                f"move {block_id}: not on {from_day}")

        if not math.isfinite(new_start_hour):
            return self._reject(schedules, Rejection.OUT_OF_BOUNDS,
                                f"move {block_id}: {new_start_hour} is not an hour")

        start = round_to_half_hour(new_start_hour)
        if not is_valid_start(start, self.grid):
            return self._reject(schedules, Rejection.OUT_OF_BOUNDS,
                                f"move {block_id}: {start} is off the grid")

        is_anchor = self.catalog.is_anchor(block.block_id)
        if is_anchor and start >= self.grid.anchor_cutoff_hour:
            return self._reject(schedules, Rejection.TOO_LATE_FOR_ANCHOR,
                                f"move {block_id}: operations cannot start at {start}")

        exclude = self._exclusion_set(source, block, is_anchor)
        remaining = [b for b in source if b.id not in exclude]
        same_day = from_day == to_day
        target = remaining if same_day else list(schedules.get(to_day, []))

        if has_collision(target, start, block.duration):
            return self._reject(schedules, Rejection.COLLISION,
                                f"move {block_id} to {to_day} at {start}: slot taken")

        moved = block.model_copy(update={"start_hour": start})
        placed = [moved]
        if is_anchor:
            generated = self._regenerate(moved, target)
            if generated is None:
                return self._reject(schedules, Rejection.COLLISION,
                                    f"move {block_id} to {to_day} at {start}: auto-blocks collide")
            placed.extend(generated)

        updates = {to_day: target + placed}
        if not same_day:
            updates[from_day] = remaining
        return self._commit(schedules, updates, moved, "move")

    def shift(self, schedules: Schedules, day: str, block_id: str, delta_hours: float) -> EditResult:
        """Move a block within its day by `delta_hours` (usually +/-0.5)."""
        block = find_block(schedules.get(day, []), block_id)
        if block is None:
            return self._reject(schedules, Rejection.BLOCK_NOT_FOUND,
                                f"shift {block_id}: not on {day}")

        # Only whole half-hour steps
        if not math.isfinite(delta_hours) or (delta_hours * 2) % 1:
            return self._reject(schedules, Rejection.OUT_OF_BOUNDS,
                                f"shift {block_id}: {delta_hours} h is not a half-hour step")

        new_start = block.start_hour + delta_hours
        if not is_valid_start(new_start, self.grid):
            return self._reject(schedules, Rejection.OUT_OF_BOUNDS,
                                f"shift {block_id}: {new_start} is off the grid")

        return self.move(schedules, day, block_id, day, new_start)

    def resize(self, schedules: Schedules, day: str, block_id: str, delta_minutes: int) -> EditResult:
        """Change a block's duration, keeping its start hour."""
        schedule = schedules.get(day, [])
        block = find_block(schedule, block_id)
        if block is None:
            return self._reject(schedules, Rejection.BLOCK_NOT_FOUND,
                                f"resize {block_id}: not on {day}")

        definition = self.catalog.get(block.block_id)
        if definition is None:
            return self._reject(schedules, Rejection.UNKNOWN_BLOCK_KIND,
                                f"resize {block_id}: unknown block kind {block.block_id}")

        new_duration = block.duration + delta_minutes
        if not definition.min_dur <= new_duration <= definition.max_dur:
            return self._reject(schedules, Rejection.DURATION_OUT_OF_RANGE,
                                f"resize {block_id}: {new_duration} min outside "
                                f"{definition.min_dur}-{definition.max_dur}")

        is_anchor = self.catalog.is_anchor(block.block_id)
        exclude = self._exclusion_set(schedule, block, is_anchor)
        if has_collision(schedule, block.start_hour, new_duration, exclude):
            return self._reject(schedules, Rejection.COLLISION,
                                f"resize {block_id} to {new_duration} min: slot taken")

        remaining = [b for b in schedule if b.id not in exclude]
        resized = block.model_copy(update={"duration": new_duration})
        placed = [resized]
        if is_anchor:
            generated = self._regenerate(resized, remaining)
            if generated is None:
                return self._reject(schedules, Rejection.COLLISION,
                                    f"resize {block_id} to {new_duration} min: auto-blocks collide")
            placed.extend(generated)

        return self._commit(schedules, {day: remaining + placed}, resized, "resize")

    def remove(self, schedules: Schedules, day: str, block_id: str) -> EditResult:
        """Delete a block; removing an operation also retracts its auto-blocks."""
        schedule = schedules.get(day, [])
        block = find_block(schedule, block_id)
        if block is None:
            return self._reject(schedules, Rejection.BLOCK_NOT_FOUND,
                                f"remove {block_id}: not on {day}")

        exclude = self._exclusion_set(schedule, block, self.catalog.is_anchor(block.block_id))
        remaining = [b for b in schedule if b.id not in exclude]
        return self._commit(schedules, {day: remaining}, block, "remove")

    # ----------------------------------------
    # Internals
    # ----------------------------------------

    def _exclusion_set(self, schedule: List[ScheduleBlock], block: ScheduleBlock, is_anchor: bool) -> Set[str]:
        exclude = {block.id}
        if is_anchor:
            exclude.update(d.id for d in self.dependents_of(schedule, block))
        return exclude

    def _regenerate(self, anchor: ScheduleBlock, others: List[ScheduleBlock]) -> Optional[List[ScheduleBlock]]:
        """
        Generate the anchor's dependents against the rest of its day.

        Returns None if any generated block would overlap the anchor, another
        block, or an earlier generated block.
        """
        occupied = others + [anchor]
        taken = {b.id for b in occupied}
        generated = []

        for block in self.generator.generate(anchor.start_hour, anchor.duration, anchor_id=anchor.id):
            if has_collision(occupied + generated, block.start_hour, block.duration):
                return None
            block = block.model_copy(update={"id": unique_id(block.id, taken)})
            taken.add(block.id)
            generated.append(block)

        return generated

    def _commit(
        self,
        schedules: Schedules,
        updates: Dict[str, List[ScheduleBlock]],
        block: ScheduleBlock,
        action: str
    ) -> EditResult:
        result = dict(schedules)
        for day, blocks in updates.items():
            result[day] = sort_blocks(blocks)

        logger.debug(f"{action} {block.id} ({block.block_id}) at {block.start_hour} "
                     f"for {block.duration} min applied")
        return EditResult(schedules=result, applied=True, block=block)

    def _reject(self, schedules: Schedules, reason: Rejection, message: str) -> EditResult:
        logger.info(f"Edit rejected ({reason.value}): {message}")
        return EditResult(schedules=schedules, applied=False, rejection=reason)
