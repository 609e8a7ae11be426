"""
Day Planner - Pydantic Models (v2 syntax)
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================
# ENUMS
# ============================================

class BlockCategory(str, Enum):
    OP = "OP"
    BUFFER = "BUFFER"
    SACRED = "SACRED"
    POLECHAT = "POLECHAT"
    SOMALAB = "SOMALAB"
    LAB = "LAB"
    CARE = "CARE"
    NIGHT = "NIGHT"
    FREE = "FREE"


class Rejection(str, Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    COLLISION = "collision"
    DURATION_OUT_OF_RANGE = "duration_out_of_range"
    UNKNOWN_BLOCK_KIND = "unknown_block_kind"
    TOO_LATE_FOR_ANCHOR = "too_late_for_anchor"
    BLOCK_NOT_FOUND = "block_not_found"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WireModel(BaseModel):
    """Base for models exchanged with the UI: camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# CATALOG MODELS
# ============================================

class BlockDefinition(WireModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    emoji: str
    category: BlockCategory
    color: str
    duration: int
    min_dur: int
    max_dur: int


class HomeWindow(WireModel):
    model_config = ConfigDict(frozen=True)

    start: float
    duration: int


class Scenario(WireModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    desc: str
    wake_up: float
    op_start: Optional[float] = None
    home_window: Optional[HomeWindow] = None
    can_gym: bool = False
    arrive_by: Optional[str] = None
    note: Optional[str] = None
    is_weekend: bool = False


class WorkContext(WireModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    emoji: str
    color: str
    block_id: str


# ============================================
# SCHEDULE MODELS
# ============================================

class ScheduleBlock(WireModel):
    id: str
    block_id: str
    start_hour: float = Field(allow_inf_nan=False)
    duration: int
    auto: bool = False
    # Owning anchor for auto blocks; None on user blocks and legacy data
    anchor_id: Optional[str] = None

    @property
    def end_hour(self) -> float:
        return self.start_hour + self.duration / 60


Schedules = Dict[str, List[ScheduleBlock]]


def make_block_id(block_kind_id: str, suffix: Optional[str] = None, timestamp: Optional[int] = None) -> str:
    """Build an id of the form ``{kind}-{unix_ms}[-suffix]``."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    block_id = f"{block_kind_id}-{timestamp}"
    if suffix:
        block_id = f"{block_id}-{suffix}"
    return block_id


@dataclass
class EditResult:
    """Outcome of a schedule mutation. On rejection `schedules` is the input mapping, untouched."""
    schedules: Schedules
    applied: bool
    rejection: Optional[Rejection] = None
    block: Optional[ScheduleBlock] = None


class ScenarioDetection(BaseModel):
    scenario: str
    confidence: Confidence
    reason: str


# ============================================
# API REQUEST / RESPONSE MODELS
# ============================================

class AutoBlocksRequest(WireModel):
    operation_start: float = Field(allow_inf_nan=False)
    operation_duration: int = Field(gt=0)


class AutoBlocksResponse(WireModel):
    blocks: List[ScheduleBlock]


class ApplyScenarioRequest(WireModel):
    scenario: str
    operation_count: int = 1
    context: str = ""


class ApplyScenarioResponse(WireModel):
    schedule: List[ScheduleBlock]
    scenario: str


class DetectScenarioResponse(WireModel):
    scenario: str
    confidence: Confidence = Confidence.LOW
    reason: str = ""


class PlaceRequest(WireModel):
    schedules: Schedules = Field(default_factory=dict)
    day: str
    block_kind_id: str
    start_hour: float = Field(allow_inf_nan=False)


class MoveRequest(WireModel):
    schedules: Schedules = Field(default_factory=dict)
    from_day: str
    block_id: str
    to_day: str
    new_start_hour: float = Field(allow_inf_nan=False)


class ShiftRequest(WireModel):
    schedules: Schedules = Field(default_factory=dict)
    day: str
    block_id: str
    delta_hours: float = Field(default=0.5, allow_inf_nan=False)


class ResizeRequest(WireModel):
    schedules: Schedules = Field(default_factory=dict)
    day: str
    block_id: str
    delta_minutes: int = 30


class RemoveRequest(WireModel):
    schedules: Schedules = Field(default_factory=dict)
    day: str
    block_id: str


class EditResponse(WireModel):
    schedules: Schedules
    applied: bool
    rejection: Optional[Rejection] = None


class HealthStatus(BaseModel):
    status: str = "healthy"
    version: str = "1.0.0"
