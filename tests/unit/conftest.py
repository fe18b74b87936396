import pytest
from datetime import date, time
from decimal import Decimal
from itertools import count
from unittest.mock import AsyncMock, MagicMock

from src.domain.time_entry import TimeEntry, BillingStatus


@pytest.fixture
def mock_uow():
    """Unit of work mock with awaitable commit/rollback"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def entry_factory():
    """Builds in-memory TimeEntry rows; ids are assigned in creation order"""
    ids = count(1)

    def _make(
        minutes: int = 60,
        entry_date: date = date(2025, 3, 1),
        hourly_rate: str = "1000",
        client_id: int = 7,
        phase_id=None,
        description: str = "",
        billing_status: BillingStatus = BillingStatus.UNBILLED,
        invoice_id=None,
        start_hour: int = 9,
    ) -> TimeEntry:
        start = time(start_hour, 0)
        end_minutes = start_hour * 60 + minutes
        end = time(end_minutes // 60, end_minutes % 60)
        return TimeEntry(
            id=next(ids),
            user_id="user_123",
            client_id=client_id,
            phase_id=phase_id,
            entry_date=entry_date,
            start_time=start,
            end_time=end,
            duration_minutes=TimeEntry.minutes_between(start, end),
            description=description,
            hourly_rate=Decimal(hourly_rate),
            billing_status=billing_status,
            invoice_id=invoice_id,
        )

    return _make
