"""Unit tests for ko-KR display formatting."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from classmarket.catalog import (
    format_capacity,
    format_date,
    format_datetime,
    format_period,
    format_price,
)

SEOUL = ZoneInfo("Asia/Seoul")


@pytest.mark.unit
class TestFormatDatetime:
    """Tests for format_datetime."""

    def test_afternoon(self) -> None:
        """05:00 UTC is 14:00 in Seoul."""
        value = datetime(2025, 3, 1, 5, 0, tzinfo=UTC)

        assert format_datetime(value, SEOUL) == "2025. 03. 01. 오후 02:00"

    def test_morning(self) -> None:
        value = datetime(2025, 12, 24, 0, 5, tzinfo=UTC)

        assert format_datetime(value, SEOUL) == "2025. 12. 24. 오전 09:05"

    def test_midnight_and_noon_use_twelve(self) -> None:
        midnight = datetime(2025, 3, 1, 0, 0, tzinfo=SEOUL)
        noon = datetime(2025, 3, 1, 12, 30, tzinfo=SEOUL)

        assert format_datetime(midnight, SEOUL) == "2025. 03. 01. 오전 12:00"
        assert format_datetime(noon, SEOUL) == "2025. 03. 01. 오후 12:30"

    def test_missing(self) -> None:
        assert format_datetime(None, SEOUL) == "-"


@pytest.mark.unit
class TestFormatDate:
    """Tests for format_date and format_period."""

    def test_date_without_padding(self) -> None:
        value = datetime(2025, 3, 1, 5, 0, tzinfo=UTC)

        assert format_date(value, SEOUL) == "2025. 3. 1."

    def test_date_crosses_midnight_in_timezone(self) -> None:
        """20:00 UTC on Feb 28 is already Mar 1 in Seoul."""
        value = datetime(2025, 2, 28, 20, 0, tzinfo=UTC)

        assert format_date(value, SEOUL) == "2025. 3. 1."

    def test_period(self) -> None:
        start = datetime(2025, 3, 1, 5, 0, tzinfo=UTC)
        end = datetime(2025, 4, 10, 5, 0, tzinfo=UTC)

        assert format_period(start, end, SEOUL) == "2025. 3. 1. ~ 2025. 4. 10."

    def test_period_with_missing_end(self) -> None:
        start = datetime(2025, 3, 1, 5, 0, tzinfo=UTC)

        assert format_period(start, None, SEOUL) == "2025. 3. 1. ~ -"


@pytest.mark.unit
class TestLabels:
    """Tests for price and capacity labels."""

    def test_free_price(self) -> None:
        assert format_price(0) == "무료"

    def test_paid_price_has_thousands_separator(self) -> None:
        assert format_price(50000) == "50,000원"

    def test_capacity(self) -> None:
        assert format_capacity(12, 30) == "12 / 30"

    def test_unlimited_capacity(self) -> None:
        assert format_capacity(12, None) == "12 / 무제한"

    def test_zero_capacity_is_shown_as_zero(self) -> None:
        assert format_capacity(0, 0) == "0 / 0"
