# usagechart/schemas/usage.py
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from usagechart.services.formatting import sessions_text as format_sessions_text


class Session(BaseModel):
    """Raw usage session as it appears in the session feed."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="session_id")
    app_name: str
    category: Optional[str] = None
    start: datetime = Field(alias="start_timestamp")
    end: datetime = Field(alias="end_timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Bazı feed'ler sayısal id gönderiyor
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("start", "end")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class HourlyUsage(BaseModel):
    hour: int = Field(ge=0, le=23)
    minutes: int = Field(ge=0)


class AppUsage(BaseModel):
    app_name: str
    category: str
    total_minutes: int = Field(ge=0)
    sessions: int = Field(ge=0)
    hourly: List[HourlyUsage]


class DailyUsage(BaseModel):
    date: str  # yyyy-MM-dd
    apps: List[AppUsage] = []


class CategorySlice(BaseModel):
    category: str
    minutes: int = Field(ge=0)


class AppUsageRowItem(BaseModel):
    app_name: str
    category: str
    total_minutes: int = Field(ge=0)
    sessions_count: int = Field(ge=0)

    @computed_field
    @property
    def sessions_text(self) -> str:
        return format_sessions_text(self.sessions_count)


class UsageSummary(BaseModel):
    """All views of one aggregation call, computed under the same cutoff."""
    daily: DailyUsage
    categories: List[CategorySlice]
    rows: List[AppUsageRowItem]
    total_minutes: int = Field(ge=0)
    now: Optional[datetime] = None


# Summary endpoint (presentation-ready scalars)
class CategoryShare(BaseModel):
    category: str
    minutes: int
    duration: str
    percentage: str


class AppShare(BaseModel):
    app_name: str
    category: str
    total_minutes: int
    duration: str
    percentage: str
    sessions_text: str


class SummaryResponse(BaseModel):
    date: str
    total_minutes: int
    total_duration: str
    categories: List[CategoryShare]
    apps: List[AppShare]
