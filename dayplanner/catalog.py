"""
Day Planner - Static Catalogs
Block kinds, day scenarios and work contexts. Built once at import and never mutated;
engine components receive them by reference.
"""

from types import MappingProxyType
from typing import Optional, Iterable, Mapping, List

from .models import BlockCategory, BlockDefinition, HomeWindow, Scenario, WorkContext


OPERATION_PREFIX = "OP_"
WEEKEND_SCENARIO = "w"


class BlockCatalog:
    """Read-only lookup from block-kind id to its definition."""

    def __init__(self, definitions: Iterable[BlockDefinition]):
        self._blocks: Mapping[str, BlockDefinition] = MappingProxyType(
            {d.id: d for d in definitions}
        )

    def get(self, block_kind_id: str) -> Optional[BlockDefinition]:
        return self._blocks.get(block_kind_id)

    def is_anchor(self, block_kind_id: str) -> bool:
        """Operation blocks anchor dependent auto-blocks."""
        definition = self._blocks.get(block_kind_id)
        return definition is not None and definition.category == BlockCategory.OP

    def by_category(self, category: BlockCategory) -> List[BlockDefinition]:
        return [d for d in self._blocks.values() if d.category == category]

    def all(self) -> List[BlockDefinition]:
        return list(self._blocks.values())

    def __contains__(self, block_kind_id: str) -> bool:
        return block_kind_id in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)


class ScenarioCatalog:
    def __init__(self, scenarios: Iterable[Scenario]):
        self._scenarios: Mapping[str, Scenario] = MappingProxyType(
            {s.key: s for s in scenarios}
        )

    def get(self, key: str) -> Optional[Scenario]:
        return self._scenarios.get(key)

    def all(self) -> List[Scenario]:
        return list(self._scenarios.values())

    def __contains__(self, key: str) -> bool:
        return key in self._scenarios


class WorkContexts:
    def __init__(self, contexts: Iterable[WorkContext]):
        self._contexts: Mapping[str, WorkContext] = MappingProxyType(
            {c.key: c for c in contexts}
        )

    def get(self, key: Optional[str]) -> Optional[WorkContext]:
        if not key:
            return None
        return self._contexts.get(key)

    def all(self) -> List[WorkContext]:
        return list(self._contexts.values())


# ============================================
# DEFAULT CATALOG CONTENTS
# ============================================

DEFAULT_BLOCKS = BlockCatalog([
    BlockDefinition(id="OP_1", name="1 operation", emoji="🏥", category=BlockCategory.OP,
                    color="#EF4444", duration=180, min_dur=120, max_dur=240),
    BlockDefinition(id="OP_2", name="2 operations", emoji="🏥🏥", category=BlockCategory.OP,
                    color="#DC2626", duration=300, min_dur=240, max_dur=420),
    BlockDefinition(id="OP_3", name="3 operations", emoji="🏥🏥🏥", category=BlockCategory.OP,
                    color="#B91C1C", duration=420, min_dur=360, max_dur=540),
    BlockDefinition(id="BUFFER", name="Buffer", emoji="⏳", category=BlockCategory.BUFFER,
                    color="#6B7280", duration=30, min_dur=15, max_dur=60),
    BlockDefinition(id="ROAD", name="Road", emoji="🚶", category=BlockCategory.BUFFER,
                    color="#4B5563", duration=25, min_dur=20, max_dur=40),
    BlockDefinition(id="FAM", name="50 min family", emoji="👨‍👩‍👧", category=BlockCategory.SACRED,
                    color="#A855F7", duration=50, min_dur=30, max_dur=120),
    BlockDefinition(id="WALK", name="Family walk", emoji="🚶‍♂️", category=BlockCategory.SACRED,
                    color="#9333EA", duration=90, min_dur=60, max_dur=120),
    BlockDefinition(id="POLECHAT", name="Polechat", emoji="💼", category=BlockCategory.POLECHAT,
                    color="#3B82F6", duration=120, min_dur=30, max_dur=300),
    BlockDefinition(id="CALL_P", name="Polechat call", emoji="📞💼", category=BlockCategory.POLECHAT,
                    color="#2563EB", duration=60, min_dur=30, max_dur=90),
    BlockDefinition(id="SOMALAB", name="Somalab", emoji="⚡", category=BlockCategory.SOMALAB,
                    color="#F97316", duration=90, min_dur=30, max_dur=180),
    BlockDefinition(id="CALL_S", name="Somalab call", emoji="📞⚡", category=BlockCategory.SOMALAB,
                    color="#EA580C", duration=60, min_dur=30, max_dur=90),
    BlockDefinition(id="LAB", name="Laboratory", emoji="🔬", category=BlockCategory.LAB,
                    color="#8B5CF6", duration=120, min_dur=60, max_dur=240),
    BlockDefinition(id="SPORT", name="Sport", emoji="🏋️", category=BlockCategory.CARE,
                    color="#22C55E", duration=90, min_dur=60, max_dur=150),
    BlockDefinition(id="SPORT_SPA", name="Sport + spa", emoji="🏋️🧖", category=BlockCategory.CARE,
                    color="#16A34A", duration=150, min_dur=120, max_dur=180),
    BlockDefinition(id="NAP", name="Power nap", emoji="💤", category=BlockCategory.CARE,
                    color="#14B8A6", duration=30, min_dur=20, max_dur=45),
    BlockDefinition(id="SLEEP", name="Sleep", emoji="😴", category=BlockCategory.NIGHT,
                    color="#6366F1", duration=480, min_dur=360, max_dur=540),
    BlockDefinition(id="HYPER", name="Hyperfocus", emoji="🔥", category=BlockCategory.FREE,
                    color="#F59E0B", duration=180, min_dur=120, max_dur=360),
    BlockDefinition(id="FREE", name="Free time", emoji="🎨", category=BlockCategory.FREE,
                    color="#EAB308", duration=60, min_dur=30, max_dur=180),
])


# Queue position at the clinic decides when the day starts
DEFAULT_SCENARIOS = ScenarioCatalog([
    Scenario(key="1", name="1st", desc="by 8:30", wake_up=7.5, op_start=8.5,
             arrive_by="8:30-8:40"),
    Scenario(key="2", name="2nd", desc="by 10:00", wake_up=8.5, op_start=10.0,
             home_window=HomeWindow(start=9.0, duration=30), arrive_by="10:00"),
    Scenario(key="3", name="3rd", desc="by 12:00", wake_up=10.0, op_start=12.0,
             home_window=HomeWindow(start=10.5, duration=60), arrive_by="12:00",
             note="Call to confirm! Might be 15:00"),
    Scenario(key="4", name="4+", desc="by 15:00", wake_up=11.0, op_start=15.0,
             home_window=HomeWindow(start=11.5, duration=180), can_gym=True, arrive_by="15:00"),
    Scenario(key=WEEKEND_SCENARIO, name="Weekend", desc="day off", wake_up=11.0, is_weekend=True),
])


DEFAULT_CONTEXTS = WorkContexts([
    WorkContext(key="POLECHAT", name="Polechat", emoji="💼", color="#3B82F6", block_id="POLECHAT"),
    WorkContext(key="SOMALAB", name="Somalab", emoji="⚡", color="#F97316", block_id="SOMALAB"),
    WorkContext(key="LAB", name="Lab", emoji="🔬", color="#8B5CF6", block_id="LAB"),
])
