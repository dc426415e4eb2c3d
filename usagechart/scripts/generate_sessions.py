import argparse
import json
import pathlib
import random
import uuid
from datetime import datetime, timedelta, timezone

# (app_name, category) çiftleri; kategori boş/"others" olanlar normalizasyonu besler
APPS = [
    ("Clock", "System"),
    ("Settings", "System"),
    ("Messages", "Social"),
    ("Instagram", "Social"),
    ("YouTube", "Entertainment"),
    ("Netflix", "Entertainment"),
    ("Notes", "Productivity"),
    ("Mail", "Productivity"),
    ("Duolingo", "Education"),
    ("Calculator", None),
    ("Weather", "others"),
]

# Saat ağırlıkları: gece az, akşam yoğun
HOUR_WEIGHTS = [1, 1, 1, 1, 1, 1, 2, 4, 6, 5, 4, 4, 5, 4, 4, 4, 5, 6, 7, 8, 8, 7, 4, 2]


def generate_sessions(day: datetime, count: int) -> list[dict]:
    sessions = []
    for _ in range(count):
        app_name, category = random.choice(APPS)
        hour = random.choices(range(24), weights=HOUR_WEIGHTS)[0]
        start = day + timedelta(hours=hour, minutes=random.randint(0, 59))
        end = start + timedelta(minutes=random.randint(1, 75))

        row = {
            "session_id": str(uuid.UUID(int=random.getrandbits(128))),
            "app_name": app_name,
            "start_timestamp": start.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "end_timestamp": end.strftime("%Y-%m-%dT%H:%M:%SZ"),
        }
        if category is not None:
            row["category"] = category
        sessions.append(row)

    sessions.sort(key=lambda s: s["start_timestamp"])
    return sessions


def main():
    parser = argparse.ArgumentParser(description="Generate a mock session feed for one day")
    parser.add_argument("--date", default="2026-02-23", help="Day to fill, yyyy-MM-dd (UTC)")
    parser.add_argument("--count", type=int, default=40, help="Number of sessions")
    parser.add_argument("--out", type=pathlib.Path, default=pathlib.Path("usagechart/assets/mock-data.json"), help="Output JSON path")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    random.seed(args.seed)
    day = datetime.strptime(args.date, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    sessions = generate_sessions(day, args.count)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(json.dumps(sessions, indent=2), encoding="utf-8")
    print(f"wrote {len(sessions)} sessions to {args.out}")


if __name__ == "__main__":
    main()
