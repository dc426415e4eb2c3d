# usagechart/config.py
import os
from datetime import timezone
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

# Gün sınırları ve saat kovaları bu saat dilimine göre hesaplanır
REFERENCE_TZ = timezone.utc
DATE_FORMAT = "%Y-%m-%d"

SESSIONS_PATH = Path(
    os.getenv("USAGECHART_SESSIONS_PATH", str(PACKAGE_DIR / "assets" / "mock-data.json"))
)

# Örnek verinin günü; istemci tarih göndermezse bu kullanılır
DEFAULT_TARGET_DATE = os.getenv("USAGECHART_TARGET_DATE", "2026-02-23")

LOG_LEVEL = os.getenv("USAGECHART_LOG_LEVEL", "INFO").upper()
