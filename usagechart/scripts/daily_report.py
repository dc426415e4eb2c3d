import argparse
import os
import sys
from datetime import datetime

current_file_path = os.path.abspath(__file__)
scripts_dir = os.path.dirname(current_file_path)
package_dir = os.path.dirname(scripts_dir)
project_root = os.path.dirname(package_dir)

if project_root not in sys.path:
    sys.path.append(project_root)

from usagechart.config import DEFAULT_TARGET_DATE
from usagechart.errors import UsageError
from usagechart.schemas.usage import UsageSummary
from usagechart.services.aggregator import UsageAggregator
from usagechart.services.formatting import hours_minutes, percentage_of
from usagechart.services.session_source import SessionRepository

BAR_WIDTH = 30


def hour_bar(minutes: int) -> str:
    # Bir saat en fazla 60 dakika; bar genişliğine ölçekle
    filled = round(min(minutes, 60) / 60 * BAR_WIDTH)
    return "#" * filled


def render(summary: UsageSummary) -> str:
    total = summary.total_minutes
    lines = [f"Usage for {summary.daily.date}: {hours_minutes(total)}", ""]

    lines.append("Categories")
    for s in summary.categories:
        lines.append(f"  {s.category:<20} {hours_minutes(s.minutes):>8} {percentage_of(s.minutes, total):>6}")

    lines.append("")
    lines.append("Apps")
    for r in summary.rows:
        lines.append(
            f"  {r.app_name:<20} {r.category:<16} {hours_minutes(r.total_minutes):>8} "
            f"{percentage_of(r.total_minutes, total):>6}  {r.sessions_text}"
        )

    hourly_totals = [0] * 24
    for a in summary.daily.apps:
        for h in a.hourly:
            hourly_totals[h.hour] += h.minutes

    lines.append("")
    lines.append("Hourly")
    for hour, minutes in enumerate(hourly_totals):
        lines.append(f"  {hour:02d} {minutes:>3}m {hour_bar(minutes)}")

    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Print the usage summary of one day")
    parser.add_argument("--sessions", default=None, help="Session file (.json or .csv)")
    parser.add_argument("--date", default=DEFAULT_TARGET_DATE, help="Target day, yyyy-MM-dd (UTC)")
    parser.add_argument("--now", type=datetime.fromisoformat, default=None,
                        help="Ignore usage after this ISO-8601 instant")
    args = parser.parse_args()

    try:
        sessions = SessionRepository(args.sessions).load_sessions()
        summary = UsageAggregator(sessions, args.date, now=args.now).summarize()
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print(render(summary))


if __name__ == "__main__":
    main()
