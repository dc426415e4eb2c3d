# usagechart/services/aggregator.py
"""Day aggregation of raw usage sessions.

Every view (hourly bars, category pie, app list) is built from the same
grouping pass: sessions are clipped to the target UTC day (and to an optional
"now" cutoff), spread over hour-of-day buckets and folded per app.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Union

from usagechart.config import DATE_FORMAT, REFERENCE_TZ
from usagechart.errors import InvalidTargetDate
from usagechart.schemas.usage import (
    AppUsage,
    AppUsageRowItem,
    CategorySlice,
    DailyUsage,
    HourlyUsage,
    Session,
    UsageSummary,
)
from usagechart.services.category_constants import normalize_category

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24

TargetDate = Union[date, str]


class ClippedInterval(NamedTuple):
    clip_start: datetime
    clip_end: datetime
    minutes: int


@dataclass
class _AppBucket:
    category: str
    total_minutes: int = 0
    sessions: int = 0
    hourly: List[int] = field(default_factory=lambda: [0] * HOURS_PER_DAY)


# --- Tarih yardımcıları ---

def parse_target_date(value: TargetDate) -> date:
    """Parse a strict ``yyyy-MM-dd`` string (or pass a date through)."""
    if isinstance(value, datetime):
        return value.astimezone(REFERENCE_TZ).date() if value.tzinfo else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidTargetDate(value)
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidTargetDate(value) from None
    # strptime "2026-2-3" gibi sıfırsız değerleri de kabul ediyor
    if parsed.strftime(DATE_FORMAT) != value:
        raise InvalidTargetDate(value)
    return parsed


def day_bounds(target: date):
    """Half-open [day_start, day_end) of the target day in the reference zone."""
    day_start = datetime(target.year, target.month, target.day, tzinfo=REFERENCE_TZ)
    return day_start, day_start + timedelta(days=1)


def _as_reference(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=REFERENCE_TZ)
    return value.astimezone(REFERENCE_TZ)


def _whole_minutes(delta: timedelta) -> int:
    return max(0, int(delta.total_seconds() // 60))


# --- Kırpma ve saatlik dağıtım ---

def overlaps_day(session: Session, day_start: datetime, day_end: datetime) -> bool:
    return session.start < day_end and session.end > day_start


def clip_interval(start: datetime, end: datetime, day_start: datetime, day_end: datetime,
                  now: Optional[datetime] = None) -> ClippedInterval:
    """Clip [start, end) to the day and to ``now``.

    A reversed interval (end < start) is treated as zero length. Fractional
    minutes are dropped.
    """
    start, end = _as_reference(start), _as_reference(end)
    effective_end = max(end, start)
    clip_start = max(start, day_start)
    clip_end = min(effective_end, day_end)
    if now is not None:
        clip_end = min(clip_end, _as_reference(now))

    if clip_end <= clip_start:
        return ClippedInterval(clip_start, clip_start, 0)
    return ClippedInterval(clip_start, clip_end, _whole_minutes(clip_end - clip_start))


def distribute_hourly(clip_start: datetime, clip_end: datetime) -> List[int]:
    """Spread an interval confined to one day over 24 hour-of-day buckets.

    Minutes are counted on a scale anchored at ``clip_start`` so the buckets
    always add up to the interval's whole minutes.
    """
    buckets = [0] * HOURS_PER_DAY
    cursor = _as_reference(clip_start)
    clip_end = _as_reference(clip_end)
    counted = 0
    steps = 0

    while cursor < clip_end:
        if steps == HOURS_PER_DAY:
            raise ValueError(f"interval {clip_start.isoformat()} - {clip_end.isoformat()} spans more than one day")
        hour_start = cursor.replace(minute=0, second=0, microsecond=0)
        segment_end = min(hour_start + timedelta(hours=1), clip_end)

        reached = _whole_minutes(segment_end - clip_start)
        buckets[cursor.hour] += reached - counted
        counted = reached

        cursor = segment_end
        steps += 1

    return buckets


# --- Gruplama ---

def _group_by_app(sessions: Iterable[Session], target: date,
                  now: Optional[datetime] = None) -> Dict[str, _AppBucket]:
    """Fold clipped sessions into per-app buckets, in first-seen order."""
    day_start, day_end = day_bounds(target)
    buckets: Dict[str, _AppBucket] = {}

    for session in sessions:
        if not overlaps_day(session, day_start, day_end):
            continue

        clipped = clip_interval(session.start, session.end, day_start, day_end, now)
        if clipped.minutes <= 0:
            continue

        bucket = buckets.get(session.app_name)
        if bucket is None:
            # Kategori, uygulamanın ilk oturumundaki değerle sabitlenir
            bucket = _AppBucket(category=normalize_category(session.category))
            buckets[session.app_name] = bucket

        bucket.total_minutes += clipped.minutes
        bucket.sessions += 1
        for hour, minutes in enumerate(distribute_hourly(clipped.clip_start, clipped.clip_end)):
            bucket.hourly[hour] += minutes

    return buckets


def _daily_from_buckets(target: date, buckets: Dict[str, _AppBucket]) -> DailyUsage:
    apps = [
        AppUsage(
            app_name=app_name,
            category=b.category,
            total_minutes=b.total_minutes,
            sessions=b.sessions,
            hourly=[HourlyUsage(hour=h, minutes=m) for h, m in enumerate(b.hourly)],
        )
        for app_name, b in buckets.items()
    ]
    # sorted() stabil: eşit toplamlar gruplama sırasını korur
    apps = sorted(apps, key=lambda a: a.total_minutes, reverse=True)
    return DailyUsage(date=target.strftime(DATE_FORMAT), apps=apps)


def _categories_from_buckets(buckets: Dict[str, _AppBucket]) -> List[CategorySlice]:
    totals: Dict[str, int] = {}
    for b in buckets.values():
        totals[b.category] = totals.get(b.category, 0) + b.total_minutes

    slices = [CategorySlice(category=c, minutes=m) for c, m in totals.items() if m > 0]
    return sorted(slices, key=lambda s: s.minutes, reverse=True)


def _rows_from_buckets(buckets: Dict[str, _AppBucket]) -> List[AppUsageRowItem]:
    rows = [
        AppUsageRowItem(
            app_name=app_name,
            category=b.category,
            total_minutes=b.total_minutes,
            sessions_count=b.sessions,
        )
        for app_name, b in buckets.items()
    ]
    return sorted(rows, key=lambda r: r.total_minutes, reverse=True)


# --- Public views ---

def aggregate(sessions: Iterable[Session], target_date: TargetDate,
              now: Optional[datetime] = None) -> DailyUsage:
    """Per-app totals with hourly buckets for one day (hourly bar chart)."""
    target = parse_target_date(target_date)
    return _daily_from_buckets(target, _group_by_app(sessions, target, now))


def category_breakdown(sessions: Iterable[Session], target_date: TargetDate,
                       now: Optional[datetime] = None) -> List[CategorySlice]:
    """Per-category minutes for one day (pie chart)."""
    target = parse_target_date(target_date)
    return _categories_from_buckets(_group_by_app(sessions, target, now))


def app_usage_row_items(sessions: Iterable[Session], target_date: TargetDate,
                        now: Optional[datetime] = None) -> List[AppUsageRowItem]:
    """Per-app totals and session counts for one day (app list)."""
    target = parse_target_date(target_date)
    return _rows_from_buckets(_group_by_app(sessions, target, now))


class UsageAggregator:
    """
    Computes every view of one day from a single grouping pass.

    ``now`` is resolved once here (explicit value, or one call to ``clock``)
    and reused by all views, so the result does not drift while it is built.
    Without either, no future cutoff is applied.
    """

    def __init__(self, sessions: Iterable[Session], target_date: TargetDate,
                 now: Optional[datetime] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.target = parse_target_date(target_date)
        if now is None and clock is not None:
            now = clock()
        self.now = _as_reference(now)

        self.sessions = list(sessions)
        self._buckets = _group_by_app(self.sessions, self.target, self.now)

        logger.debug(
            "USAGE AGGREGATE step=grouped date=%s sessions=%d apps=%d now=%s",
            self.target, len(self.sessions), len(self._buckets),
            self.now.isoformat() if self.now else None,
        )

    def daily_usage(self) -> DailyUsage:
        return _daily_from_buckets(self.target, self._buckets)

    def category_breakdown(self) -> List[CategorySlice]:
        return _categories_from_buckets(self._buckets)

    def app_rows(self) -> List[AppUsageRowItem]:
        return _rows_from_buckets(self._buckets)

    def total_minutes(self) -> int:
        return sum(b.total_minutes for b in self._buckets.values())

    def summarize(self) -> UsageSummary:
        summary = UsageSummary(
            daily=self.daily_usage(),
            categories=self.category_breakdown(),
            rows=self.app_rows(),
            total_minutes=self.total_minutes(),
            now=self.now,
        )
        logger.info(
            "USAGE AGGREGATE step=done date=%s apps=%d categories=%d total_minutes=%d",
            summary.daily.date, len(summary.daily.apps), len(summary.categories), summary.total_minutes,
        )
        return summary
