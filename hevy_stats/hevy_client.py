"""
Hevy Stats — Hevy API Client

Live mode: pages through /v1/workouts and converts the JSON into the same
Workout → Exercise → WorkoutSet model the CSV importer produces.
"""
import time

import pandas as pd
import requests

from hevy_stats.config import HEVY_API_KEY, UNKNOWN_EXERCISE, UNNAMED_WORKOUT
from hevy_stats.models import Exercise, Workout, WorkoutSet

BASE_URL = "https://api.hevyapp.com/v1"

# Rate limiting: Hevy API has undocumented limits
RATE_LIMIT_DELAY = 0.35  # seconds between requests
MAX_RETRIES = 3
RETRY_BACKOFF = 2  # exponential backoff multiplier
PAGE_SIZE = 10  # API maximum for /workouts


def _headers(api_key: str | None = None) -> dict:
    return {"accept": "application/json", "api-key": api_key or HEVY_API_KEY}


def _get(endpoint: str, params: dict = None, api_key: str | None = None) -> dict:
    """GET request to Hevy API with retry and rate limiting."""
    time.sleep(RATE_LIMIT_DELAY)
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            r = requests.get(
                f"{BASE_URL}{endpoint}", headers=_headers(api_key),
                params=params or {}, timeout=15,
            )
            if r.status_code == 429:
                wait = RETRY_BACKOFF ** attempt
                print(f"  ⏳ Hevy rate limit, retrying in {wait}s (attempt {attempt}/{MAX_RETRIES})")
                time.sleep(wait)
                continue
            r.raise_for_status()
            return r.json()
        except requests.exceptions.Timeout:
            if attempt < MAX_RETRIES:
                print(f"  ⏳ Hevy timeout, retrying (attempt {attempt}/{MAX_RETRIES})")
                time.sleep(RETRY_BACKOFF ** attempt)
            else:
                raise
        except requests.exceptions.HTTPError:
            if attempt < MAX_RETRIES and r.status_code >= 500:
                print(f"  ⏳ Hevy {r.status_code}, retrying (attempt {attempt}/{MAX_RETRIES})")
                time.sleep(RETRY_BACKOFF ** attempt)
            else:
                raise
    raise requests.exceptions.RetryError(f"Hevy API failed after {MAX_RETRIES} attempts")


def fetch_all_workouts(api_key: str | None = None) -> list[dict]:
    """Fetch all workouts from Hevy, paginated."""
    all_workouts = []
    page = 1
    while True:
        data = _get("/workouts", {"page": page, "pageSize": PAGE_SIZE}, api_key=api_key)
        wks = data.get("workouts", [])
        if not wks:
            break
        all_workouts.extend(wks)
        if page >= data.get("page_count", 1):
            break
        page += 1
    return all_workouts


def _epoch(value: str | None) -> int | None:
    if not value:
        return None
    return int(pd.Timestamp(value).timestamp())


def _set_from_api(s: dict) -> WorkoutSet:
    distance_m = s.get("distance_meters")
    return WorkoutSet(
        index=int(s.get("index") or 0),
        set_type=s.get("type") or None,
        weight_kg=s.get("weight_kg"),
        reps=s.get("reps"),
        distance_km=distance_m / 1000 if distance_m is not None else None,
        duration_seconds=s.get("duration_seconds"),
        rpe=s.get("rpe"),
    )


def workout_from_api(w: dict) -> Workout:
    """Convert one Hevy API workout to the frozen model."""
    exercises = []
    for pos, ex in enumerate(w.get("exercises", [])):
        title = ex.get("title") or UNKNOWN_EXERCISE
        superset = ex.get("superset_id")
        exercises.append(Exercise(
            id=f"{w['id']}_ex_{pos}_{title}",
            title=title,
            superset_id=str(superset) if superset is not None else None,
            notes=ex.get("notes") or None,
            sets=tuple(_set_from_api(s) for s in ex.get("sets", [])),
        ))
    volume = sum(s.volume_kg for ex in exercises for s in ex.sets)
    return Workout(
        id=w["id"],
        title=w.get("title") or UNNAMED_WORKOUT,
        start_time=_epoch(w["start_time"]),
        end_time=_epoch(w.get("end_time")),
        description=w.get("description") or None,
        exercises=tuple(exercises),
        estimated_volume_kg=volume,
    )


def workouts_from_api(workouts: list[dict]) -> tuple[Workout, ...]:
    """Convert and sort newest first, same order as the CSV importer."""
    converted = [workout_from_api(w) for w in workouts]
    return tuple(sorted(converted, key=lambda w: w.start_time, reverse=True))


def fetch_workouts(api_key: str | None = None) -> tuple[Workout, ...]:
    return workouts_from_api(fetch_all_workouts(api_key))
