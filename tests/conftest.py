"""
Pytest fixtures for schedule engine tests.
"""

import pytest

from dayplanner.auto_blocks import AutoBlockGenerator
from dayplanner.models import Schedules
from dayplanner.scenarios import ScenarioExpander
from dayplanner.scheduler import ScheduleEditor

from helpers import DAY, make_block


@pytest.fixture
def editor() -> ScheduleEditor:
    return ScheduleEditor()


@pytest.fixture
def generator() -> AutoBlockGenerator:
    return AutoBlockGenerator()


@pytest.fixture
def expander() -> ScenarioExpander:
    return ScenarioExpander()


@pytest.fixture
def empty_day() -> Schedules:
    return {DAY: []}


@pytest.fixture
def busy_day() -> Schedules:
    """A day with a morning work block and an evening walk."""
    return {
        DAY: [
            make_block("POLECHAT", 9.0, 120),
            make_block("WALK", 18.0, 90),
        ]
    }


@pytest.fixture
def operation_day(editor) -> Schedules:
    """A day with OP_1 placed at 8.5 and its auto-blocks."""
    result = editor.place({DAY: []}, DAY, "OP_1", 8.5)
    assert result.applied
    return result.schedules
