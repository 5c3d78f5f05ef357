"""
Hevy Stats — Console report
Run: python -m hevy_stats.report workouts.csv [--group week|month] [--strict-dates]
     python -m hevy_stats.report --api
"""
import sys

from hevy_stats.analytics import calculate_stats, pr_table
from hevy_stats.config import PR_PERIODS
from hevy_stats.csv_parser import load_csv
from hevy_stats.errors import HevyStatsError
from hevy_stats.hevy_client import fetch_workouts


def _option(argv: list[str], name: str, default: str) -> str:
    if name in argv:
        idx = argv.index(name)
        if idx + 1 < len(argv):
            return argv[idx + 1]
    return default


def load_workouts(argv: list[str]) -> tuple:
    if "--api" in argv:
        print("📥 Fetching workouts from Hevy...")
        workouts = fetch_workouts()
        print(f"   Found {len(workouts)} workouts")
        return workouts

    paths = [a for a in argv if a.lower().endswith(".csv")]
    if not paths:
        raise HevyStatsError("No CSV file given (or use --api)")
    print(f"📥 Reading {paths[0]}...")
    result = load_csv(paths[0], strict_dates="--strict-dates" in argv or None)
    print(f"   {result.rows_parsed} sets across {len(result.workouts)} workouts")
    if result.rows_skipped:
        print(f"   ⚠️ {result.rows_skipped} rows skipped")
    return result.workouts


def print_report(workouts, period: str = "day") -> dict:
    stats = calculate_stats(workouts, pr_period=period)

    print(f"\n{'='*50}")
    print("📊 Training Summary:")
    print(f"   Workouts: {stats['total_workouts']}")
    print(f"   Total volume: {stats['total_volume']:,} kg")
    print(f"   Avg volume / workout: {stats['avg_volume_per_workout']:,} kg")
    print(f"   Total sets: {stats['total_sets']}")
    print(f"   Total reps: {stats['total_reps']}")

    print("\n💪 Sets per muscle group:")
    for group, n in sorted(stats["muscle_distribution"].items(), key=lambda kv: -kv[1]):
        print(f"   {group:<10} {n}")

    if stats["top_exercises"]:
        print("\n🏋️ Top exercises by volume:")
        for i, ex in enumerate(stats["top_exercises"], start=1):
            print(f"   {i:>2}. {ex['name']}: {ex['volume']:,.0f} kg ({ex['sets']} sets)")

    if stats["prs_over_time"]:
        print(f"\n🏆 PRs per {period}:")
        for entry in stats["prs_over_time"]:
            print(f"   {entry['date']}: {entry['count']}")

    prs = pr_table(workouts)
    if not prs.empty:
        print("\n🥇 Best e1RM:")
        for _, row in prs.head(5).iterrows():
            print(f"   {row['exercise']}: {row['weight_kg']}kg x{int(row['reps'])} (e1RM {row['e1rm']})")
    return stats


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    period = _option(argv, "--group", "day")
    if period not in PR_PERIODS:
        print(f"❌ --group must be one of {', '.join(PR_PERIODS)}")
        return 1
    try:
        workouts = load_workouts(argv)
    except (HevyStatsError, OSError) as e:
        print(f"❌ Import failed: {e}")
        return 1
    print_report(workouts, period)
    return 0


if __name__ == "__main__":
    sys.exit(main())
