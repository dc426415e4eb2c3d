# usagechart/routers/usage.py
import logging
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
import time as perf_time

from usagechart.config import DEFAULT_TARGET_DATE
from usagechart.errors import InvalidTargetDate, SourceUnavailable
from usagechart.schemas.usage import (
    AppShare,
    AppUsageRowItem,
    CategoryShare,
    CategorySlice,
    DailyUsage,
    SummaryResponse,
    UsageSummary,
)
from usagechart.services.aggregator import UsageAggregator
from usagechart.services.formatting import hours_minutes, percentage_of
from usagechart.services.session_source import SessionRepository, get_repository

logger = logging.getLogger(__name__)

router = APIRouter()


# --- YARDIMCI FONKSİYON ---
# Her endpoint aynı yükle + topla adımını kullanıyor
def _build_summary(repo: SessionRepository, date: str, now: Optional[datetime],
                   clip_future: bool) -> UsageSummary:
    t0 = perf_time.perf_counter()
    try:
        sessions = repo.load_sessions()
        aggregator = UsageAggregator(
            sessions,
            date,
            now=now,
            clock=(lambda: datetime.now(timezone.utc)) if clip_future else None,
        )
    except InvalidTargetDate as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SourceUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    summary = aggregator.summarize()
    logger.info(
        "USAGE REQUEST date=%s sessions=%d elapsed_ms=%.1f",
        summary.daily.date, len(sessions), (perf_time.perf_counter() - t0) * 1000,
    )
    return summary


# --- ENDPOINTLER ---

@router.get("/daily", response_model=DailyUsage)
def get_daily_usage(
    date: str = DEFAULT_TARGET_DATE,
    now: Optional[datetime] = None,
    clip_future: bool = False,
    repo: SessionRepository = Depends(get_repository),
):
    """Saatlik bar grafiği için uygulama bazlı günlük kullanım"""
    return _build_summary(repo, date, now, clip_future).daily


@router.get("/categories", response_model=List[CategorySlice])
def get_category_breakdown(
    date: str = DEFAULT_TARGET_DATE,
    now: Optional[datetime] = None,
    clip_future: bool = False,
    repo: SessionRepository = Depends(get_repository),
):
    """Pasta grafiği için kategori dilimleri"""
    return _build_summary(repo, date, now, clip_future).categories


@router.get("/apps", response_model=List[AppUsageRowItem])
def get_app_rows(
    date: str = DEFAULT_TARGET_DATE,
    now: Optional[datetime] = None,
    clip_future: bool = False,
    repo: SessionRepository = Depends(get_repository),
):
    """Uygulama listesi satırları"""
    return _build_summary(repo, date, now, clip_future).rows


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    date: str = DEFAULT_TARGET_DATE,
    now: Optional[datetime] = None,
    clip_future: bool = False,
    repo: SessionRepository = Depends(get_repository),
):
    summary = _build_summary(repo, date, now, clip_future)
    total = summary.total_minutes

    categories = [
        CategoryShare(
            category=s.category,
            minutes=s.minutes,
            duration=hours_minutes(s.minutes),
            percentage=percentage_of(s.minutes, total),
        )
        for s in summary.categories
    ]
    apps = [
        AppShare(
            app_name=r.app_name,
            category=r.category,
            total_minutes=r.total_minutes,
            duration=hours_minutes(r.total_minutes),
            percentage=percentage_of(r.total_minutes, total),
            sessions_text=r.sessions_text,
        )
        for r in summary.rows
    ]

    return SummaryResponse(
        date=summary.daily.date,
        total_minutes=total,
        total_duration=hours_minutes(total),
        categories=categories,
        apps=apps,
    )
