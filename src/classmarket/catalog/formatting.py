"""Display strings in the ko-KR locale.

Mirrors the browser's ``toLocaleString('ko-KR')`` output so pages render the
same text regardless of the server's locale.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

FREE_LABEL = "무료"
UNLIMITED_LABEL = "무제한"
MISSING = "-"


def format_datetime(value: datetime | None, tz: tzinfo) -> str:
    """Format as ``"2025. 03. 01. 오후 02:00"`` in the given timezone."""
    if value is None:
        return MISSING
    local = value.astimezone(tz)
    meridiem = "오전" if local.hour < 12 else "오후"
    hour = local.hour % 12 or 12
    date = f"{local.year}. {local.month:02d}. {local.day:02d}."
    return f"{date} {meridiem} {hour:02d}:{local.minute:02d}"


def format_date(value: datetime | None, tz: tzinfo) -> str:
    """Format as ``"2025. 3. 1."`` in the given timezone."""
    if value is None:
        return MISSING
    local = value.astimezone(tz)
    return f"{local.year}. {local.month}. {local.day}."


def format_period(start: datetime | None, end: datetime | None, tz: tzinfo) -> str:
    """Format a date range as ``"2025. 3. 1. ~ 2025. 4. 1."``."""
    return f"{format_date(start, tz)} ~ {format_date(end, tz)}"


def format_price(price: int) -> str:
    """Format a price in won, or the free label for 0."""
    if price == 0:
        return FREE_LABEL
    return f"{price:,}원"


def format_capacity(total: int, maximum: int | None) -> str:
    """Format enrollment against capacity, e.g. ``"12 / 30"``."""
    return f"{total} / {maximum if maximum is not None else UNLIMITED_LABEL}"
