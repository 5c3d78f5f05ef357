"""
Hevy Stats — Analytics Engine

Pure functions over an already-built workout collection (CSV import or Hevy
API). Nothing here mutates the workouts or keeps state between calls.
"""
import math

import numpy as np
import pandas as pd

from hevy_stats.config import MUSCLE_GROUPS, MUSCLE_PATTERNS, PR_PERIODS, TOP_EXERCISES_LIMIT
from hevy_stats.models import Workout, WorkoutSet

EXERCISE_COLUMNS = ["workout_id", "date", "workout_title", "exercise", "n_sets", "total_reps", "volume_kg"]
SET_COLUMNS = ["workout_id", "date", "workout_title", "exercise", "set_index", "set_type",
               "weight_kg", "reps", "volume_kg", "e1rm"]


def _round(value: float) -> int:
    """Round half up."""
    return int(math.floor(value + 0.5))


def epley_1rm(weight: float, reps: int) -> float:
    """Estimated one-rep max: weight × (1 + reps/30)."""
    return weight * (1 + reps / 30)


def workout_date(workout: Workout) -> pd.Timestamp:
    """UTC calendar date of the workout start."""
    return pd.Timestamp(workout.start_time, unit="s", tz="UTC").normalize()


# ═══════════════════════════════════════════════════════════════════════
# 1. FLAT VIEWS
# ═══════════════════════════════════════════════════════════════════════

def exercises_dataframe(workouts: tuple[Workout, ...] | list[Workout]) -> pd.DataFrame:
    """One row per exercise per workout."""
    rows = []
    for w in workouts:
        date = workout_date(w)
        for ex in w.exercises:
            rows.append({
                "workout_id": w.id,
                "date": date,
                "workout_title": w.title,
                "exercise": ex.title,
                "n_sets": len(ex.sets),
                "total_reps": sum(s.reps or 0 for s in ex.sets),
                "volume_kg": sum(s.volume_kg for s in ex.sets),
            })
    return pd.DataFrame(rows, columns=EXERCISE_COLUMNS)


def sets_dataframe(workouts: tuple[Workout, ...] | list[Workout]) -> pd.DataFrame:
    """One row per set. Missing weight/reps stay NaN; volume and e1rm are 0 then."""
    rows = []
    for w in workouts:
        date = workout_date(w)
        for ex in w.exercises:
            for s in ex.sets:
                rows.append({
                    "workout_id": w.id,
                    "date": date,
                    "workout_title": w.title,
                    "exercise": ex.title,
                    "set_index": s.index,
                    "set_type": s.set_type,
                    "weight_kg": s.weight_kg,
                    "reps": s.reps,
                    "volume_kg": s.volume_kg,
                })
    df = pd.DataFrame(rows, columns=SET_COLUMNS)
    if df.empty:
        return df
    weight = df["weight_kg"].astype(float)
    reps = df["reps"].astype(float)
    df["e1rm"] = np.where((weight > 0) & (reps > 0), (weight * (1 + reps / 30)).round(1), 0.0)
    return df


# ═══════════════════════════════════════════════════════════════════════
# 2. VOLUME
# ═══════════════════════════════════════════════════════════════════════

def total_volume(workouts) -> int:
    """Σ weight × reps over every set that has both. Rounded once, at the end."""
    total = 0.0
    for w in workouts:
        for ex in w.exercises:
            for s in ex.sets:
                total += s.volume_kg
    return _round(total)


def avg_volume(workouts) -> int:
    if len(workouts) == 0:
        return 0
    return _round(total_volume(workouts) / len(workouts))


def weekly_volume(workouts) -> pd.DataFrame:
    """Sessions, sets and volume per Monday-anchored week."""
    df = exercises_dataframe(workouts)
    if df.empty:
        return pd.DataFrame()
    df["week_start"] = df["date"] - pd.to_timedelta(df["date"].dt.weekday, unit="D")
    weekly = (
        df.groupby("week_start")
        .agg(
            sessions=("workout_id", "nunique"),
            total_sets=("n_sets", "sum"),
            total_reps=("total_reps", "sum"),
            total_volume=("volume_kg", "sum"),
        )
        .reset_index()
    )
    weekly["vol_per_session"] = (weekly["total_volume"] / weekly["sessions"]).round(0)
    weekly["vol_delta_pct"] = weekly["total_volume"].pct_change() * 100
    return weekly


# ═══════════════════════════════════════════════════════════════════════
# 3. MUSCLE GROUP DISTRIBUTION
# ═══════════════════════════════════════════════════════════════════════

def classify_exercise(title: str, patterns=MUSCLE_PATTERNS) -> tuple[str, ...]:
    """Muscle groups for an exercise title. First matching pattern wins; () if none."""
    name = title.lower()
    for pattern, groups in patterns:
        if pattern in name:
            return groups
    return ()


def muscle_distribution(workouts, patterns=MUSCLE_PATTERNS) -> dict[str, int]:
    """
    Sets per muscle group. Every group an exercise maps to gets that
    exercise's full set count; unmatched exercises are not counted.
    """
    dist = {group: 0 for group in MUSCLE_GROUPS}
    for w in workouts:
        for ex in w.exercises:
            for group in classify_exercise(ex.title, patterns):
                if group in dist:
                    dist[group] += len(ex.sets)
    return dist


# ═══════════════════════════════════════════════════════════════════════
# 4. PR TRACKING
# ═══════════════════════════════════════════════════════════════════════

def _set_prs(s: WorkoutSet, best: dict) -> list[tuple[str, float]]:
    """
    Compare one set against the running maxima for its exercise, update them,
    and return the (metric, value) records it broke.
    """
    reps = s.reps or 0
    weight = s.weight_kg or 0
    if reps <= 0:
        return []

    candidates = [("reps", reps)]
    if weight > 0:
        candidates = [("e1rm", epley_1rm(weight, reps)), ("weight", weight), ("reps", reps)]

    broken = []
    for metric, value in candidates:
        if value > best[metric]:
            best[metric] = value
            broken.append((metric, value))
    return broken


def pr_events(workouts) -> list[dict]:
    """
    Walk workouts oldest first and report, per workout, every PR it set.

    Maxima are tracked per exercise title for e1RM, weight and reps. Workouts
    without PRs are left out.
    """
    maxima: dict[str, dict] = {}
    events = []
    for w in sorted(workouts, key=lambda w: w.start_time):
        records = []
        for ex in w.exercises:
            best = maxima.setdefault(ex.title, {"e1rm": 0.0, "weight": 0.0, "reps": 0})
            for s in ex.sets:
                for metric, value in _set_prs(s, best):
                    records.append({"exercise": ex.title, "metric": metric, "value": value})
        if records:
            events.append({
                "workout_id": w.id,
                "workout_title": w.title,
                "start_time": w.start_time,
                "date": workout_date(w),
                "count": len(records),
                "records": records,
            })
    return events


def _bucket_label(date: pd.Timestamp, period: str) -> str:
    if period == "week":
        return (date - pd.Timedelta(days=date.weekday())).strftime("%Y-%m-%d")
    if period == "month":
        return date.strftime("%Y-%m")
    return date.strftime("%Y-%m-%d")


def pr_timeline(workouts, period: str = "day") -> list[dict]:
    """
    PR counts per day, Monday-anchored week or month, ascending by date label.
    Each entry is {"date": label, "count": n}.
    """
    if period not in PR_PERIODS:
        raise ValueError(f"Unknown period {period!r}, expected one of {PR_PERIODS}")
    counts: dict[str, int] = {}
    for event in pr_events(workouts):
        label = _bucket_label(event["date"], period)
        counts[label] = counts.get(label, 0) + event["count"]
    return [{"date": label, "count": counts[label]} for label in sorted(counts)]


def pr_table(workouts) -> pd.DataFrame:
    """Best e1RM set per exercise, strongest first."""
    df = sets_dataframe(workouts)
    if df.empty:
        return pd.DataFrame()
    weighted = df[df["e1rm"] > 0]
    if weighted.empty:
        return pd.DataFrame()
    idx = weighted.groupby("exercise")["e1rm"].idxmax()
    prs = weighted.loc[idx, ["exercise", "weight_kg", "reps", "e1rm", "date", "workout_title"]].copy()
    prs = prs.sort_values("e1rm", ascending=False).reset_index(drop=True)
    prs.index = prs.index + 1
    return prs


# ═══════════════════════════════════════════════════════════════════════
# 5. EXERCISE RANKING
# ═══════════════════════════════════════════════════════════════════════

def top_exercises(workouts, limit: int = TOP_EXERCISES_LIMIT) -> list[dict]:
    """Exercises ranked by total volume: [{"name", "volume", "sets"}, ...]."""
    df = exercises_dataframe(workouts)
    if df.empty:
        return []
    ranked = (
        df.groupby("exercise", sort=False)
        .agg(volume=("volume_kg", "sum"), sets=("n_sets", "sum"))
        .reset_index()
        .sort_values("volume", ascending=False, kind="mergesort")
        .head(limit)
    )
    return [
        {"name": row.exercise, "volume": round(float(row.volume), 2), "sets": int(row.sets)}
        for row in ranked.itertuples(index=False)
    ]


# ═══════════════════════════════════════════════════════════════════════
# 6. SUMMARY
# ═══════════════════════════════════════════════════════════════════════

STATS_JSON_KEYS = {
    "total_volume": "totalVolume",
    "avg_volume_per_workout": "avgVolumePerWorkout",
    "total_workouts": "totalWorkouts",
    "total_sets": "totalSets",
    "total_reps": "totalReps",
    "muscle_distribution": "muscleDistribution",
    "prs_over_time": "prsOverTime",
    "top_exercises": "topExercises",
}


def calculate_stats(workouts, pr_period: str = "day") -> dict:
    """Everything the dashboard needs in one record. Safe on an empty collection."""
    return {
        "total_volume": total_volume(workouts),
        "avg_volume_per_workout": avg_volume(workouts),
        "total_workouts": len(workouts),
        "total_sets": sum(len(ex.sets) for w in workouts for ex in w.exercises),
        "total_reps": sum(s.reps or 0 for w in workouts for ex in w.exercises for s in ex.sets),
        "muscle_distribution": muscle_distribution(workouts),
        "prs_over_time": pr_timeline(workouts, pr_period),
        "top_exercises": top_exercises(workouts),
    }


def stats_to_json(stats: dict) -> dict:
    """Rename summary keys to the camelCase names the web frontend reads."""
    return {STATS_JSON_KEYS.get(k, k): v for k, v in stats.items()}
