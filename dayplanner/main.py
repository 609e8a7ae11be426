"""
Day Planner - FastAPI Backend
Thin HTTP surface over the schedule engine. The caller owns all schedule state;
every endpoint receives it in the request and returns the result.
"""

import math
from datetime import date
from contextlib import asynccontextmanager
from typing import Any, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .auto_blocks import AutoBlockGenerator
from .catalog import DEFAULT_BLOCKS, DEFAULT_SCENARIOS, DEFAULT_CONTEXTS
from .config import get_app_config, get_config_summary
from .logger import logger
from .models import (
    ApplyScenarioRequest, ApplyScenarioResponse, AutoBlocksRequest, AutoBlocksResponse,
    BlockDefinition, DetectScenarioResponse, EditResponse, EditResult, HealthStatus,
    MoveRequest, PlaceRequest, RemoveRequest, ResizeRequest, Scenario, ScheduleBlock,
    ShiftRequest, WorkContext,
)
from .scenarios import ScenarioExpander, detect_scenario
from .scheduler import ScheduleEditor


# Engine components (stateless; share the static catalogs)
generator = AutoBlockGenerator()
expander = ScenarioExpander()
editor = ScheduleEditor(catalog=DEFAULT_BLOCKS, generator=generator)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(f"Server started: {get_config_summary()}")
    yield
    logger.info("Server shutting down")


app_config = get_app_config()

app = FastAPI(
    title=app_config.app_name,
    description="Daily schedule planner: time blocks, scenarios and auto-blocks",
    version=app_config.version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def validate_day(day: str) -> str:
    """Day keys are ISO dates (YYYY-MM-DD)."""
    try:
        date.fromisoformat(day)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date format: {day}")
    return day


def to_response(result: EditResult) -> EditResponse:
    return EditResponse(
        schedules=result.schedules,
        applied=result.applied,
        rejection=result.rejection
    )


def json_safe(value: Any) -> Any:
    """Replace NaN and infinities (not representable in JSON) with their string form."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [json_safe(v) for v in value]
    return value


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Default 422 body, made encodable when the rejected input held NaN or Infinity."""
    logger.info(f"Invalid request to {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(
        status_code=422,
        content={"detail": json_safe(jsonable_encoder(exc.errors()))}
    )


# ============================================
# HEALTH & CATALOGS
# ============================================

@app.get("/health", response_model=HealthStatus)
@app.get("/api/health", response_model=HealthStatus)
async def health_check():
    """Check API health."""
    return HealthStatus(status="healthy", version=app_config.version)


@app.get("/schedule/blocks", response_model=List[BlockDefinition])
@app.get("/api/schedule/blocks", response_model=List[BlockDefinition])
async def list_blocks():
    """Get the block catalog."""
    return DEFAULT_BLOCKS.all()


@app.get("/schedule/scenarios", response_model=List[Scenario], response_model_exclude_none=True)
@app.get("/api/schedule/scenarios", response_model=List[Scenario], response_model_exclude_none=True)
async def list_scenarios():
    """Get the available day scenarios."""
    return DEFAULT_SCENARIOS.all()


@app.get("/schedule/contexts", response_model=List[WorkContext])
@app.get("/api/schedule/contexts", response_model=List[WorkContext])
async def list_contexts():
    """Get the work contexts usable with apply-scenario."""
    return DEFAULT_CONTEXTS.all()


# ============================================
# GENERATION & DETECTION
# ============================================

@app.post("/schedule/auto-blocks", response_model=AutoBlocksResponse, response_model_exclude_none=True)
@app.post("/api/schedule/auto-blocks", response_model=AutoBlocksResponse, response_model_exclude_none=True)
async def generate_auto_blocks(request: AutoBlocksRequest):
    """Generate ROAD / BUFFER / FAM blocks for an operation."""
    blocks = generator.generate(request.operation_start, request.operation_duration)
    return AutoBlocksResponse(blocks=blocks)


@app.post("/schedule/apply-scenario", response_model=ApplyScenarioResponse, response_model_exclude_none=True)
@app.post("/api/schedule/apply-scenario", response_model=ApplyScenarioResponse, response_model_exclude_none=True)
async def apply_scenario(request: ApplyScenarioRequest):
    """Apply a scenario to generate a full day schedule."""
    schedule = expander.apply(request.scenario, request.operation_count, request.context)
    return ApplyScenarioResponse(schedule=schedule, scenario=request.scenario)


@app.post("/schedule/detect-scenario", response_model=DetectScenarioResponse)
@app.post("/api/schedule/detect-scenario", response_model=DetectScenarioResponse)
async def detect_scenario_endpoint(schedule: List[ScheduleBlock]):
    """Detect the scenario behind an existing day."""
    detection = detect_scenario(schedule)
    return DetectScenarioResponse(
        scenario=detection.scenario,
        confidence=detection.confidence,
        reason=detection.reason
    )


# ============================================
# SCHEDULE EDITING
# ============================================

@app.post("/schedule/place", response_model=EditResponse, response_model_exclude_none=True)
@app.post("/api/schedule/place", response_model=EditResponse, response_model_exclude_none=True)
async def place_block(request: PlaceRequest):
    """Place a new block on a day."""
    day = validate_day(request.day)
    return to_response(editor.place(request.schedules, day, request.block_kind_id, request.start_hour))


@app.post("/schedule/move", response_model=EditResponse, response_model_exclude_none=True)
@app.post("/api/schedule/move", response_model=EditResponse, response_model_exclude_none=True)
async def move_block(request: MoveRequest):
    """Move a block to a new start hour, possibly on another day."""
    from_day = validate_day(request.from_day)
    to_day = validate_day(request.to_day)
    return to_response(editor.move(request.schedules, from_day, request.block_id, to_day, request.new_start_hour))


@app.post("/schedule/shift", response_model=EditResponse, response_model_exclude_none=True)
@app.post("/api/schedule/shift", response_model=EditResponse, response_model_exclude_none=True)
async def shift_block(request: ShiftRequest):
    """Shift a block within its day."""
    day = validate_day(request.day)
    return to_response(editor.shift(request.schedules, day, request.block_id, request.delta_hours))


@app.post("/schedule/resize", response_model=EditResponse, response_model_exclude_none=True)
@app.post("/api/schedule/resize", response_model=EditResponse, response_model_exclude_none=True)
async def resize_block(request: ResizeRequest):
    """Grow or shrink a block."""
    day = validate_day(request.day)
    return to_response(editor.resize(request.schedules, day, request.block_id, request.delta_minutes))


@app.post("/schedule/remove", response_model=EditResponse, response_model_exclude_none=True)
@app.post("/api/schedule/remove", response_model=EditResponse, response_model_exclude_none=True)
async def remove_block(request: RemoveRequest):
    """Remove a block from a day."""
    day = validate_day(request.day)
    return to_response(editor.remove(request.schedules, day, request.block_id))


# ============================================
# RUN SERVER
# ============================================

# python -m dayplanner.main  (or: uvicorn dayplanner.main:app)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dayplanner.main:app", host="0.0.0.0", port=8000)
