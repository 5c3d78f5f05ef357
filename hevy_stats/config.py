"""
Hevy Stats — Configuration

CSV layout, locale tables and the exercise → muscle group pattern table.
Lookup tables are tuples/MappingProxyType so nothing can mutate them at runtime.
"""
import os
from types import MappingProxyType

# ── API Keys ─────────────────────────────────────────────────────────
HEVY_API_KEY = os.environ.get("HEVY_API_KEY", "")

# ── CSV Import ───────────────────────────────────────────────────────
EXPECTED_COLUMNS = (
    "title",
    "start_time",
    "end_time",
    "description",
    "exercise_title",
    "superset_id",
    "exercise_notes",
    "set_index",
    "set_type",
    "weight_kg",
    "reps",
    "distance_km",
    "duration_seconds",
    "rpe",
)
WEIGHT_COLUMN = "weight_kg"
UNSUPPORTED_WEIGHT_COLUMNS = ("weight_lbs",)

MAX_CSV_BYTES = 10 * 1024 * 1024  # 10 MB upload limit

# Naive export timestamps ("16 Dec 2025, 15:06") are read in this timezone
CSV_TIMEZONE = os.environ.get("HEVY_CSV_TIMEZONE", "UTC")

# Strict dates: an unparseable timestamp skips the row instead of becoming "now"
STRICT_DATES = os.environ.get("HEVY_STRICT_DATES", "").lower() in ("1", "true", "yes")

UNNAMED_WORKOUT = "Unnamed Workout"
UNKNOWN_EXERCISE = "Unknown Exercise"

# ── Locale ───────────────────────────────────────────────────────────
# German export month abbreviations → English. First match wins.
GERMAN_MONTHS = (
    ("Jan", "Jan"),
    ("Feb", "Feb"),
    ("Mär", "Mar"),
    ("Mar", "Mar"),
    ("Apr", "Apr"),
    ("Mai", "May"),
    ("Jun", "Jun"),
    ("Jul", "Jul"),
    ("Aug", "Aug"),
    ("Sep", "Sep"),
    ("Okt", "Oct"),
    ("Nov", "Nov"),
    ("Dez", "Dec"),
)

# ═════════════════════════════════════════════════════════════════════
# MUSCLE GROUPS
#
# Ordered substring patterns over the lower-cased exercise title.
# The FIRST matching pattern wins, so "deadlift" shadows "romanian deadlift"
# (same groups) and "leg raise" shadows "hanging leg raise": hanging leg
# raises count toward core AND legs.
# Titles that match nothing are not counted.
# ═════════════════════════════════════════════════════════════════════

MUSCLE_GROUPS = ("chest", "back", "shoulders", "biceps", "triceps", "legs", "core")

MUSCLE_PATTERNS = (
    # Chest
    ("bench press", ("chest",)),
    ("incline bench", ("chest",)),
    ("decline bench", ("chest",)),
    ("chest press", ("chest",)),
    ("chest fly", ("chest",)),
    ("pec deck", ("chest",)),
    ("push up", ("chest", "triceps")),
    ("dips", ("chest", "triceps")),
    # Back
    ("deadlift", ("back", "legs")),
    ("pull up", ("back", "biceps")),
    ("chin up", ("back", "biceps")),
    ("lat pulldown", ("back",)),
    ("seated row", ("back",)),
    ("cable row", ("back",)),
    ("bent over row", ("back",)),
    ("barbell row", ("back",)),
    ("t-bar row", ("back",)),
    ("reverse fly", ("back", "shoulders")),
    # Shoulders
    ("shoulder press", ("shoulders",)),
    ("overhead press", ("shoulders",)),
    ("military press", ("shoulders",)),
    ("lateral raise", ("shoulders",)),
    ("front raise", ("shoulders",)),
    ("rear delt", ("shoulders",)),
    ("shrug", ("shoulders",)),
    # Arms
    ("bicep curl", ("biceps",)),
    ("biceps curl", ("biceps",)),
    ("hammer curl", ("biceps",)),
    ("preacher curl", ("biceps",)),
    ("concentration curl", ("biceps",)),
    ("ez bar", ("biceps", "triceps")),
    ("reverse curl", ("biceps",)),
    ("tricep extension", ("triceps",)),
    ("triceps extension", ("triceps",)),
    ("tricep pushdown", ("triceps",)),
    ("triceps pushdown", ("triceps",)),
    ("skull crusher", ("triceps",)),
    ("overhead extension", ("triceps",)),
    ("close grip", ("triceps",)),
    # Legs
    ("squat", ("legs",)),
    ("leg press", ("legs",)),
    ("leg extension", ("legs",)),
    ("leg curl", ("legs",)),
    ("lunge", ("legs",)),
    ("calf raise", ("legs",)),
    ("romanian deadlift", ("legs", "back")),
    ("leg raise", ("core", "legs")),
    # Core
    ("plank", ("core",)),
    ("crunch", ("core",)),
    ("sit up", ("core",)),
    ("ab wheel", ("core",)),
    ("russian twist", ("core",)),
    ("hanging leg raise", ("core",)),
)

MUSCLE_GROUP_COLORS = MappingProxyType({
    "chest": "#ef4444",
    "back": "#3b82f6",
    "shoulders": "#f97316",
    "biceps": "#eab308",
    "triceps": "#a855f7",
    "legs": "#22c55e",
    "core": "#06b6d4",
})

# ── Analytics ────────────────────────────────────────────────────────
TOP_EXERCISES_LIMIT = 10
PR_PERIODS = ("day", "week", "month")
