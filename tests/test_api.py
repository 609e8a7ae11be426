"""
Tests for the HTTP surface.
"""

import pytest
from fastapi.testclient import TestClient

from dayplanner.main import app

from helpers import DAY, NEXT_DAY


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


def wire_block(block_id, start_hour, duration, id=None, auto=False):
    return {
        "id": id or f"{block_id}@{start_hour}",
        "blockId": block_id,
        "startHour": start_hour,
        "duration": duration,
        "auto": auto,
    }


class TestHealthAndCatalogs:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_blocks(self, client):
        blocks = client.get("/schedule/blocks").json()
        op = next(b for b in blocks if b["id"] == "OP_1")

        assert op["minDur"] == 120
        assert op["maxDur"] == 240
        assert op["category"] == "OP"

    def test_scenarios(self, client):
        scenarios = client.get("/schedule/scenarios").json()
        second = next(s for s in scenarios if s["key"] == "2")

        assert [s["key"] for s in scenarios] == ["1", "2", "3", "4", "w"]
        assert second["homeWindow"] == {"start": 9.0, "duration": 30}

    def test_contexts(self, client):
        keys = [c["key"] for c in client.get("/schedule/contexts").json()]
        assert keys == ["POLECHAT", "SOMALAB", "LAB"]

    def test_api_prefix(self, client):
        assert client.get("/api/health").status_code == 200
        assert client.get("/api/schedule/blocks").status_code == 200


class TestAutoBlocksEndpoint:
    def test_generates_blocks(self, client):
        resp = client.post("/schedule/auto-blocks", json={"operationStart": 8.5, "operationDuration": 180})

        assert resp.status_code == 200
        blocks = resp.json()["blocks"]
        assert [(b["blockId"], b["startHour"], b["duration"]) for b in blocks] == [
            ("ROAD", 8.0, 25),
            ("BUFFER", 11.5, 30),
            ("FAM", 12.0, 50),
        ]
        assert all(b["auto"] for b in blocks)
        assert set(blocks[0]) == {"id", "blockId", "startHour", "duration", "auto"}

    def test_family_cutoff(self, client):
        resp = client.post("/api/schedule/auto-blocks", json={"operationStart": 21.0, "operationDuration": 60})
        assert [b["blockId"] for b in resp.json()["blocks"]] == ["ROAD", "BUFFER"]

    def test_missing_field(self, client):
        resp = client.post("/schedule/auto-blocks", json={"operationStart": 8.5})
        assert resp.status_code == 422


class TestApplyScenarioEndpoint:
    def test_apply(self, client):
        resp = client.post("/schedule/apply-scenario",
                           json={"scenario": "1", "operationCount": 1, "context": ""})

        assert resp.status_code == 200
        body = resp.json()
        assert body["scenario"] == "1"
        starts = [b["startHour"] for b in body["schedule"]]
        assert starts == sorted(starts)
        assert [b["blockId"] for b in body["schedule"]] == ["ROAD", "OP_1", "BUFFER", "ROAD", "FAM", "SLEEP"]

    def test_defaults(self, client):
        resp = client.post("/schedule/apply-scenario", json={"scenario": "w"})
        assert len(resp.json()["schedule"]) == 5

    def test_unknown_scenario(self, client):
        resp = client.post("/schedule/apply-scenario", json={"scenario": "zzz"})

        assert resp.status_code == 200
        assert resp.json() == {"schedule": [], "scenario": "zzz"}


class TestDetectScenarioEndpoint:
    def test_detect(self, client):
        resp = client.post("/schedule/detect-scenario", json=[wire_block("OP_1", 12.0, 180)])

        assert resp.status_code == 200
        body = resp.json()
        assert body["scenario"] == "3"
        assert body["confidence"] == "high"
        assert "12.0" in body["reason"]

    def test_detect_weekend(self, client):
        resp = client.post("/schedule/detect-scenario", json=[])
        assert resp.json()["scenario"] == "w"
        assert resp.json()["confidence"] == "medium"


class TestEditEndpoints:
    def test_place(self, client):
        resp = client.post("/schedule/place", json={
            "schedules": {DAY: []},
            "day": DAY,
            "blockKindId": "OP_1",
            "startHour": 8.5,
        })

        body = resp.json()
        assert body["applied"] is True
        assert "rejection" not in body
        assert [b["blockId"] for b in body["schedules"][DAY]] == ["ROAD", "OP_1", "BUFFER", "FAM"]

    def test_place_rejection_returns_input(self, client):
        schedules = {DAY: [wire_block("FREE", 10.0, 60)]}

        resp = client.post("/schedule/place", json={
            "schedules": schedules,
            "day": DAY,
            "blockKindId": "NAP",
            "startHour": 10.5,
        })

        assert resp.status_code == 200
        body = resp.json()
        assert body["applied"] is False
        assert body["rejection"] == "collision"
        assert body["schedules"] == schedules

    def test_place_too_late(self, client):
        resp = client.post("/schedule/place", json={
            "day": DAY, "blockKindId": "OP_2", "startHour": 21.5,
        })
        assert resp.json()["rejection"] == "too_late_for_anchor"

    def test_move_across_days(self, client):
        resp = client.post("/schedule/move", json={
            "schedules": {DAY: [wire_block("FREE", 10.0, 60)]},
            "fromDay": DAY,
            "blockId": "FREE@10.0",
            "toDay": NEXT_DAY,
            "newStartHour": 14.0,
        })

        body = resp.json()
        assert body["schedules"][DAY] == []
        assert body["schedules"][NEXT_DAY][0]["startHour"] == 14.0

    def test_shift(self, client):
        resp = client.post("/schedule/shift", json={
            "schedules": {DAY: [wire_block("FREE", 10.0, 60)]},
            "day": DAY,
            "blockId": "FREE@10.0",
            "deltaHours": -0.5,
        })
        assert resp.json()["schedules"][DAY][0]["startHour"] == 9.5

    def test_resize_out_of_range(self, client):
        resp = client.post("/schedule/resize", json={
            "schedules": {DAY: [wire_block("NAP", 10.0, 30)]},
            "day": DAY,
            "blockId": "NAP@10.0",
            "deltaMinutes": 30,
        })
        assert resp.json()["rejection"] == "duration_out_of_range"

    def test_remove(self, client):
        resp = client.post("/schedule/remove", json={
            "schedules": {DAY: [wire_block("FREE", 10.0, 60)]},
            "day": DAY,
            "blockId": "FREE@10.0",
        })
        assert resp.json()["schedules"][DAY] == []

    def test_invalid_day_key(self, client):
        resp = client.post("/schedule/remove", json={"day": "tomorrow", "blockId": "x"})

        assert resp.status_code == 400
        assert "Invalid date format" in resp.json()["detail"]


class TestNonFiniteHours:
    """JSON NaN/Infinity literals are refused at validation time."""

    JSON = {"Content-Type": "application/json"}

    def test_auto_blocks_nan(self, client):
        resp = client.post("/schedule/auto-blocks", headers=self.JSON,
                           content='{"operationStart": NaN, "operationDuration": 60}')
        assert resp.status_code == 422
        assert resp.json()["detail"][0]["input"] == "nan"

    def test_place_infinity(self, client):
        resp = client.post("/schedule/place", headers=self.JSON,
                           content=f'{{"day": "{DAY}", "blockKindId": "FREE", "startHour": Infinity}}')
        assert resp.status_code == 422

    def test_move_negative_infinity(self, client):
        resp = client.post("/schedule/move", headers=self.JSON, content=(
            f'{{"fromDay": "{DAY}", "blockId": "x", "toDay": "{DAY}", "newStartHour": -Infinity}}'
        ))
        assert resp.status_code == 422

    def test_shift_nan_delta(self, client):
        resp = client.post("/schedule/shift", headers=self.JSON,
                           content=f'{{"day": "{DAY}", "blockId": "x", "deltaHours": NaN}}')
        assert resp.status_code == 422

    def test_nan_in_schedule(self, client):
        resp = client.post("/schedule/detect-scenario", headers=self.JSON, content=(
            '[{"id": "a", "blockId": "OP_1", "startHour": NaN, "duration": 180}]'
        ))
        assert resp.status_code == 422

    def test_off_grid_shift_not_applied(self, client):
        resp = client.post("/schedule/shift", json={
            "schedules": {DAY: [wire_block("FREE", 10.0, 60)]},
            "day": DAY,
            "blockId": "FREE@10.0",
            "deltaHours": 0.2,
        })

        body = resp.json()
        assert body["applied"] is False
        assert body["rejection"] == "out_of_bounds"
        assert body["schedules"][DAY][0]["startHour"] == 10.0
