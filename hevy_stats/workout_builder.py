"""
Hevy Stats — Workout tree builder

The export is flat: one row per set. Rows are folded into
Workout → Exercise → WorkoutSet, keyed by the raw title + start_time strings.
"""
import math
import time
from typing import Iterable

from hevy_stats.config import UNKNOWN_EXERCISE, UNNAMED_WORKOUT
from hevy_stats.dates import normalize_date
from hevy_stats.errors import DateParseError
from hevy_stats.models import CsvRow, Exercise, ParseResult, Workout, WorkoutSet


def clean_text(value: str | None) -> str | None:
    """Empty, whitespace-only or a lone quote → None."""
    if value is None or not value.strip() or value == '"':
        return None
    return value


def to_float(value: str | None) -> float | None:
    """Tolerant float: empty, non-numeric or non-finite → None. Accepts "82,5"."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    if "," in value and "." not in value:
        value = value.replace(",", ".")
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_int(value: str | None) -> int | None:
    number = to_float(value)
    return int(number) if number is not None else None


def build_set(row: CsvRow) -> WorkoutSet:
    return WorkoutSet(
        index=to_int(row.set_index) or 0,
        set_type=clean_text(row.set_type),
        weight_kg=to_float(row.weight_kg),
        reps=to_int(row.reps),
        distance_km=to_float(row.distance_km),
        duration_seconds=to_int(row.duration_seconds),
        rpe=to_float(row.rpe),
    )


def _new_workout(row: CsvRow, key: str, strict_dates: bool, warnings: list[str]) -> dict:
    start = normalize_date(row.start_time)
    end = normalize_date(row.end_time) if clean_text(row.end_time) else None
    for parsed in (start, end):
        if parsed is None or not parsed.fallback:
            continue
        if strict_dates:
            parsed.unwrap()
        msg = f"Row {row.line_no}: could not parse date {parsed.source!r}, using current time"
        print(f"  ⚠️ {msg}")
        warnings.append(msg)

    workout_id = f"csv_{key}_{time.time_ns() // 1_000_000}"
    return {
        "id": workout_id,
        "title": row.title or UNNAMED_WORKOUT,
        "start_time": start.timestamp,
        "end_time": end.timestamp if end else None,
        "description": clean_text(row.description),
        "exercises": [],
        "estimated_volume_kg": 0.0,
    }


def _freeze(wk: dict) -> Workout:
    exercises = tuple(
        Exercise(
            id=ex["id"], title=ex["title"], superset_id=ex["superset_id"],
            notes=ex["notes"], sets=tuple(ex["sets"]),
        )
        for ex in wk["exercises"]
    )
    return Workout(**{**wk, "exercises": exercises})


def build_workouts(rows: Iterable[CsvRow], strict_dates: bool = False) -> ParseResult:
    """
    Fold mapped rows into workouts, newest first.

    Rows sharing title + start_time merge into one workout; rows sharing an
    exercise title within a workout merge their sets in input order. With
    strict_dates, a row whose new workout has an unparseable date is skipped
    instead of being dated "now".
    """
    result = ParseResult()
    workouts: dict[str, dict] = {}

    for row in rows:
        key = f"{row.title}_{row.start_time}"

        if key not in workouts:
            try:
                workouts[key] = _new_workout(row, key, strict_dates, result.warnings)
            except DateParseError as e:
                msg = f"Row {row.line_no}: {e}"
                print(f"  ⚠️ Skipping row — {msg}")
                result.warnings.append(msg)
                result.rows_skipped += 1
                continue
        wk = workouts[key]

        title = clean_text(row.exercise_title) or UNKNOWN_EXERCISE
        exercise = next((ex for ex in wk["exercises"] if ex["title"] == title), None)
        if exercise is None:
            exercise = {
                "id": f"{wk['id']}_ex_{len(wk['exercises'])}_{title}",
                "title": title,
                "superset_id": clean_text(row.superset_id),
                "notes": clean_text(row.exercise_notes),
                "sets": [],
            }
            wk["exercises"].append(exercise)

        s = build_set(row)
        exercise["sets"].append(s)
        wk["estimated_volume_kg"] += s.volume_kg
        result.rows_parsed += 1

    result.workouts = tuple(
        sorted((_freeze(wk) for wk in workouts.values()), key=lambda w: w.start_time, reverse=True)
    )
    return result
