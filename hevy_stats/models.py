"""
Hevy Stats — Workout model

Workout → Exercise → WorkoutSet, shared by the CSV importer and the Hevy API
client. All records are frozen and hold tuples: once built, a workout
collection is a read-only snapshot.
"""
from dataclasses import dataclass, field

from hevy_stats.config import EXPECTED_COLUMNS


@dataclass(frozen=True)
class CsvRow:
    """One export line mapped onto the expected header. Every value is a raw string."""

    title: str
    start_time: str
    end_time: str
    description: str
    exercise_title: str
    superset_id: str
    exercise_notes: str
    set_index: str
    set_type: str
    weight_kg: str
    reps: str
    distance_km: str
    duration_seconds: str
    rpe: str
    line_no: int = 0

    @classmethod
    def from_fields(cls, header: list[str], values: list[str], line_no: int = 0) -> "CsvRow":
        mapped = dict(zip(header, values))
        return cls(**{col: mapped[col] for col in EXPECTED_COLUMNS}, line_no=line_no)


@dataclass(frozen=True)
class WorkoutSet:
    index: int
    set_type: str | None = None
    weight_kg: float | None = None
    reps: int | None = None
    distance_km: float | None = None
    duration_seconds: int | None = None
    rpe: float | None = None

    @property
    def volume_kg(self) -> float:
        """weight × reps, 0 when either is missing."""
        if self.weight_kg and self.reps:
            return self.weight_kg * self.reps
        return 0.0


@dataclass(frozen=True)
class Exercise:
    id: str
    title: str
    superset_id: str | None = None
    notes: str | None = None
    sets: tuple[WorkoutSet, ...] = ()


@dataclass(frozen=True)
class Workout:
    id: str
    title: str
    start_time: int
    end_time: int | None = None
    description: str | None = None
    exercises: tuple[Exercise, ...] = ()
    estimated_volume_kg: float = 0.0

    @property
    def key(self) -> tuple[str, int]:
        return (self.title, self.start_time)

    @property
    def duration_min(self) -> int | None:
        if self.end_time is None:
            return None
        return round((self.end_time - self.start_time) / 60)


@dataclass
class ParseResult:
    """Workouts (newest first) plus everything the importer recovered from."""

    workouts: tuple[Workout, ...] = ()
    warnings: list[str] = field(default_factory=list)
    rows_parsed: int = 0
    rows_skipped: int = 0
