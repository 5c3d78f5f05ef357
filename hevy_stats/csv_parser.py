"""
Hevy Stats — CSV export parser

Expected header (Hevy "Export workouts" CSV, metric units):
title, start_time, end_time, description, exercise_title, superset_id,
exercise_notes, set_index, set_type, weight_kg, reps, distance_km,
duration_seconds, rpe

Pounds exports (weight_lbs) are rejected, never converted.
"""
from pathlib import Path

from hevy_stats.config import (
    EXPECTED_COLUMNS,
    MAX_CSV_BYTES,
    STRICT_DATES,
    UNSUPPORTED_WEIGHT_COLUMNS,
    WEIGHT_COLUMN,
)
from hevy_stats.errors import (
    FormatError,
    MissingColumnError,
    RowShapeError,
    UnsupportedUnitError,
)
from hevy_stats.models import CsvRow, ParseResult
from hevy_stats.workout_builder import build_workouts


def parse_line(line: str, delimiter: str = ",") -> list[str]:
    """
    Split one CSV record, respecting double-quoted fields.

    "" inside a quoted field is a literal quote. Fields are trimmed.
    Broken quoting is split on a best-effort basis and never raises.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"' and in_quotes and line[i + 1:i + 2] == '"':
            current.append('"')
            i += 1
        elif char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current).strip())
    return fields


def detect_delimiter(header_line: str) -> str:
    """Semicolon if the header has more unquoted ';' than ',', else comma."""
    counts = {",": 0, ";": 0}
    in_quotes = False
    for char in header_line:
        if char == '"':
            in_quotes = not in_quotes
        elif char in counts and not in_quotes:
            counts[char] += 1
    return ";" if counts[";"] > counts[","] else ","


def validate_header(columns: list[str]) -> None:
    """Reject pounds exports and headers that don't match the expected layout."""
    lbs = [c for c in columns if c in UNSUPPORTED_WEIGHT_COLUMNS]
    if lbs:
        raise UnsupportedUnitError(
            f"Weight column '{lbs[0]}' uses pounds — export your workouts in kilograms (weight_kg)"
        )
    if WEIGHT_COLUMN not in columns:
        raise MissingColumnError(f"CSV header has no '{WEIGHT_COLUMN}' column")

    missing = [c for c in EXPECTED_COLUMNS if c not in columns]
    if missing:
        raise MissingColumnError(f"CSV header is missing columns: {', '.join(missing)}")
    unknown = [c for c in columns if c not in EXPECTED_COLUMNS]
    if unknown:
        raise FormatError(f"CSV header has unexpected columns: {', '.join(unknown)}")
    if len(set(columns)) != len(columns):
        raise FormatError("CSV header has duplicate columns")


def split_records(text: str) -> list[tuple[int, str]]:
    """
    Split text into (line number, record) pairs. A newline inside a quoted
    field belongs to the record, so multi-line notes stay in one row.
    """
    records = []
    current = []
    in_quotes = False
    line_no = start = 1
    for char in text:
        if char == '"':
            in_quotes = not in_quotes
        if char == "\n":
            line_no += 1
            if not in_quotes:
                records.append((start, "".join(current).rstrip("\r")))
                current = []
                start = line_no
                continue
        current.append(char)
    records.append((start, "".join(current).rstrip("\r")))
    return records


def _split_records(text: str) -> list[tuple[int, str]]:
    text = text.lstrip("\ufeff")
    return [(n, rec) for n, rec in split_records(text) if rec.strip()]


def iter_rows(records: list[tuple[int, str]], header: list[str], delimiter: str, result: ParseResult):
    """
    Yield a CsvRow per data record. Rows with the wrong field count are
    skipped and recorded on the result.
    """
    for line_no, raw in records[1:]:
        line = raw.strip()
        values = parse_line(line, delimiter)
        if len(values) != len(header):
            err = RowShapeError(line_no, len(header), len(values))
            print(f"  ⚠️ Skipping row: {err}")
            result.warnings.append(str(err))
            result.rows_skipped += 1
            continue
        yield CsvRow.from_fields(header, values, line_no=line_no)


def parse_csv(text: str, strict_dates: bool | None = None) -> ParseResult:
    """
    Full import: header validation → row mapping → workout tree.

    Raises FormatError (or a subclass) for structural problems; row and date
    problems are recovered and listed in result.warnings.
    """
    records = _split_records(text or "")
    if not records:
        raise FormatError("CSV file is empty")
    header_line = records[0][1].strip()
    if not header_line:
        raise FormatError("CSV header is missing")

    delimiter = detect_delimiter(header_line)
    header = [h.strip('"') for h in parse_line(header_line, delimiter)]
    validate_header(header)

    if strict_dates is None:
        strict_dates = STRICT_DATES
    result = ParseResult()
    rows = iter_rows(records, header, delimiter, result)
    built = build_workouts(rows, strict_dates=strict_dates)

    result.workouts = built.workouts
    result.warnings.extend(built.warnings)
    result.rows_parsed = built.rows_parsed
    result.rows_skipped += built.rows_skipped
    return result


def validate_csv_file(path: str | Path) -> Path:
    """Check extension and size before reading an uploaded export."""
    path = Path(path)
    if path.suffix.lower() != ".csv":
        raise FormatError("File must be a CSV file")
    if path.stat().st_size > MAX_CSV_BYTES:
        raise FormatError(f"File size must be less than {MAX_CSV_BYTES // (1024 * 1024)}MB")
    return path


def read_csv_file(path: str | Path) -> str:
    path = validate_csv_file(path)
    return path.read_text(encoding="utf-8-sig")


def load_csv(path: str | Path, strict_dates: bool | None = None) -> ParseResult:
    """Validate, read and parse an export file."""
    return parse_csv(read_csv_file(path), strict_dates=strict_dates)
