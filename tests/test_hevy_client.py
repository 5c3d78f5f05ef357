"""
Tests for the live-mode Hevy API client — pagination, retries, conversion.
Run: pytest tests/ -v
"""
import pytest
import requests


class _FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload or {}
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


@pytest.fixture
def no_sleep(monkeypatch):
    from hevy_stats import hevy_client
    monkeypatch.setattr(hevy_client.time, "sleep", lambda s: None)


def _api_workout(wid="abc", start="2025-12-16T15:06:00+00:00", sets=None) -> dict:
    return {
        "id": wid,
        "title": "Push Day",
        "description": "",
        "start_time": start,
        "end_time": "2025-12-16T16:10:00+00:00",
        "exercises": [
            {
                "index": 0,
                "title": "Bench Press (Barbell)",
                "notes": "",
                "superset_id": None,
                "sets": sets if sets is not None else [
                    {"index": 0, "type": "warmup", "weight_kg": 60, "reps": 10,
                     "distance_meters": None, "duration_seconds": None, "rpe": None},
                    {"index": 1, "type": "normal", "weight_kg": 100, "reps": 5,
                     "distance_meters": None, "duration_seconds": None, "rpe": 8.5},
                ],
            },
            {
                "index": 1,
                "title": "Treadmill",
                "notes": "easy",
                "superset_id": 2,
                "sets": [{"index": 0, "type": "normal", "weight_kg": None, "reps": None,
                          "distance_meters": 2500, "duration_seconds": 900, "rpe": None}],
            },
        ],
    }


# ═══════════════════════════════════════════════════════════════════════
# CONVERSION
# ═══════════════════════════════════════════════════════════════════════

class TestWorkoutFromApi:

    def test_shape_matches_csv_model(self):
        from hevy_stats.hevy_client import workout_from_api
        wk = workout_from_api(_api_workout())
        assert wk.id == "abc"
        assert wk.start_time == 1765897560
        assert wk.duration_min == 64
        assert wk.description is None
        assert [ex.title for ex in wk.exercises] == ["Bench Press (Barbell)", "Treadmill"]
        assert wk.estimated_volume_kg == 1100

    def test_set_fields(self):
        from hevy_stats.hevy_client import workout_from_api
        wk = workout_from_api(_api_workout())
        bench, tread = wk.exercises
        assert bench.sets[1].set_type == "normal"
        assert bench.sets[1].rpe == 8.5
        assert tread.sets[0].distance_km == 2.5
        assert tread.sets[0].duration_seconds == 900
        assert tread.superset_id == "2"
        assert tread.notes == "easy"

    def test_sorted_newest_first(self):
        from hevy_stats.hevy_client import workouts_from_api
        wks = workouts_from_api([
            _api_workout("old", start="2025-12-01T10:00:00+00:00"),
            _api_workout("new", start="2025-12-20T10:00:00+00:00"),
        ])
        assert [w.id for w in wks] == ["new", "old"]


# ═══════════════════════════════════════════════════════════════════════
# HTTP
# ═══════════════════════════════════════════════════════════════════════

class TestFetchAllWorkouts:

    def test_paginates_until_page_count(self, monkeypatch, no_sleep):
        from hevy_stats import hevy_client
        pages = {
            1: {"page": 1, "page_count": 2, "workouts": [_api_workout("a")]},
            2: {"page": 2, "page_count": 2, "workouts": [_api_workout("b")]},
        }
        calls = []

        def fake_get(url, headers, params, timeout):
            calls.append(params["page"])
            assert headers["api-key"] == "test-key"
            return _FakeResponse(pages[params["page"]])

        monkeypatch.setattr(hevy_client.requests, "get", fake_get)
        result = hevy_client.fetch_all_workouts(api_key="test-key")
        assert [w["id"] for w in result] == ["a", "b"]
        assert calls == [1, 2]

    def test_stops_on_empty_page(self, monkeypatch, no_sleep):
        from hevy_stats import hevy_client
        monkeypatch.setattr(hevy_client.requests, "get",
                            lambda *a, **kw: _FakeResponse({"page_count": 5, "workouts": []}))
        assert hevy_client.fetch_all_workouts(api_key="k") == []

    def test_retries_rate_limit(self, monkeypatch, no_sleep):
        from hevy_stats import hevy_client
        responses = iter([
            _FakeResponse(status_code=429),
            _FakeResponse({"page_count": 1, "workouts": [_api_workout("a")]}),
        ])
        monkeypatch.setattr(hevy_client.requests, "get", lambda *a, **kw: next(responses))
        assert len(hevy_client.fetch_all_workouts(api_key="k")) == 1

    def test_client_error_not_retried(self, monkeypatch, no_sleep):
        from hevy_stats import hevy_client
        calls = []

        def fake_get(*a, **kw):
            calls.append(1)
            return _FakeResponse(status_code=401)

        monkeypatch.setattr(hevy_client.requests, "get", fake_get)
        with pytest.raises(requests.exceptions.HTTPError):
            hevy_client.fetch_all_workouts(api_key="bad")
        assert len(calls) == 1

    def test_fetch_workouts_converts(self, monkeypatch, no_sleep):
        from hevy_stats import hevy_client
        monkeypatch.setattr(hevy_client.requests, "get",
                            lambda *a, **kw: _FakeResponse({"page_count": 1, "workouts": [_api_workout()]}))
        wks = hevy_client.fetch_workouts(api_key="k")
        assert wks[0].exercises[0].sets[1].weight_kg == 100
