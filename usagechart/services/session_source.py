# usagechart/services/session_source.py
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
from pydantic import TypeAdapter, ValidationError

from usagechart.config import SESSIONS_PATH
from usagechart.errors import SourceUnavailable
from usagechart.schemas.usage import DailyUsage, Session
from usagechart.services.aggregator import aggregate

logger = logging.getLogger(__name__)

# CSV başlıkları: session_id, app_name, category, start_timestamp, end_timestamp
CSV_COLUMNS = ["session_id", "app_name", "category", "start_timestamp", "end_timestamp"]

_session_list = TypeAdapter(List[Session])


class SessionRepository:
    """Reads the session feed from a local JSON or CSV file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else SESSIONS_PATH

    def load_sessions(self) -> List[Session]:
        if not self.path.exists():
            raise SourceUnavailable(f"{self.path.name} not found ({self.path})")

        try:
            if self.path.suffix.lower() == ".csv":
                sessions = self._load_csv()
            else:
                sessions = _session_list.validate_json(self.path.read_bytes())
        except (OSError, ValueError, ValidationError) as e:
            logger.error("SESSION SOURCE step=load_failed path=%s error=%s", self.path, e)
            raise SourceUnavailable(f"Could not read sessions from {self.path.name}: {e}") from e

        logger.info("SESSION SOURCE step=loaded path=%s count=%d", self.path, len(sessions))
        return sessions

    def _load_csv(self) -> List[Session]:
        df = pd.read_csv(self.path, usecols=CSV_COLUMNS, dtype=str)
        # Boş kategori hücreleri NaN geliyor; None'a çevir
        df = df.astype(object).where(pd.notna(df), None)
        return _session_list.validate_python(df.to_dict(orient="records"))

    def load_daily_usage(self, target_date: Union[date, str]) -> DailyUsage:
        return aggregate(self.load_sessions(), target_date)


def get_repository() -> SessionRepository:
    """FastAPI dependency; tests override it with a repository on a temp file."""
    return SessionRepository()
