# usagechart/services/formatting.py
from decimal import Decimal, ROUND_HALF_UP


def percentage_of(part: int, total: int) -> str:
    """Share of ``part`` in ``total`` as a display string.

    Shares below 1% keep one decimal so small apps don't show up as "0%".
    """
    if total == 0:
        return "0%"

    percent = 100 * part / total
    if 0 < percent < 1:
        return f"{percent:.1f}%"

    # %.0f yarıyı çifte yuvarlıyor (12.5 -> 12), burada yukarı yuvarlıyoruz
    rounded = Decimal(str(percent)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def hours_minutes(total_minutes: int) -> str:
    """Format minutes as "2h 15m", or "45m" under an hour."""
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def sessions_text(count: int) -> str:
    return "1 session" if count == 1 else f"{count} sessions"
