"""Invoice Line Grouping

Turns a selection of time entries into invoice item drafts.

Strategies:
- entry: one item per entry
- phase: one item per phase (entries without phase share the "Bez fáze" item)
- day:   one item per calendar date

Entries that land in the same phase/day group but carry different hourly
rates are split into one item per rate, so the grouped subtotal matches the
per-entry subtotal.

Quantities (hours) are rounded to storage precision for display; line
amounts are priced from the exact minutes.
"""

from collections import OrderedDict
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from pydantic import BaseModel
from src.domain.invoice_totals import to_storage
from src.domain.time_entry import TimeEntry

HOURS_UNIT = "hod"
NO_PHASE_KEY = "no-phase"
NO_PHASE_LABEL = "Bez fáze"
MINUTES_PER_HOUR = Decimal("60")


class GroupBy(str, Enum):
    """Line grouping strategy"""
    ENTRY = "entry"
    PHASE = "phase"
    DAY = "day"


class InvoiceItemDraft(BaseModel):
    """Invoice item before it is persisted"""

    description: str
    quantity: Decimal
    unit_price: Decimal
    unit: str = HOURS_UNIT
    minutes: Optional[int] = None
    entry_id: Optional[int] = None
    phase_id: Optional[int] = None
    project_id: Optional[int] = None
    sort_order: int = 0

    @property
    def amount(self) -> Decimal:
        """Unrounded line amount; billed time is priced from minutes, not from the rounded quantity"""
        if self.minutes is not None:
            return Decimal(self.minutes) * self.unit_price / MINUTES_PER_HOUR
        return self.quantity * self.unit_price

    @property
    def total_price(self) -> Decimal:
        return to_storage(self.amount)


class _Group:
    __slots__ = ("description", "phase_id", "hourly_rate", "minutes")

    def __init__(self, description: str, phase_id: Optional[int], hourly_rate: Decimal):
        self.description = description
        self.phase_id = phase_id
        self.hourly_rate = hourly_rate
        self.minutes = 0


def minutes_to_hours(minutes: int) -> Decimal:
    return to_storage(Decimal(minutes) / MINUTES_PER_HOUR)


def group_entries(
    entries: Sequence[TimeEntry],
    group_by: GroupBy,
    phase_names: Optional[Mapping[int, str]] = None,
) -> List[InvoiceItemDraft]:
    """
    Build invoice item drafts from time entries

    Args:
        entries: Non-empty selection of entries for one client
        group_by: Grouping strategy
        phase_names: Phase id -> display name, used by phase grouping

    Returns:
        Drafts in invoice order with sort_order set to list position

    Raises:
        ValueError: If entries is empty
    """
    if not entries:
        raise ValueError("Cannot build invoice items from an empty selection")

    group_by = GroupBy(group_by)
    if group_by == GroupBy.ENTRY:
        drafts = _per_entry(entries)
    elif group_by == GroupBy.PHASE:
        drafts = _per_phase(entries, phase_names or {})
    else:
        drafts = _per_day(entries)

    for position, draft in enumerate(drafts):
        draft.sort_order = position
    return drafts


def _per_entry(entries: Sequence[TimeEntry]) -> List[InvoiceItemDraft]:
    return [
        InvoiceItemDraft(
            description=entry.description or f"Práce {entry.entry_date.isoformat()}",
            quantity=minutes_to_hours(entry.duration_minutes),
            unit_price=Decimal(entry.hourly_rate),
            minutes=entry.duration_minutes,
            entry_id=entry.id,
            phase_id=entry.phase_id,
            project_id=entry.project_id,
        )
        for entry in entries
    ]


def _per_phase(
    entries: Sequence[TimeEntry], phase_names: Mapping[int, str]
) -> List[InvoiceItemDraft]:
    groups: Dict[Tuple[object, Decimal], _Group] = OrderedDict()
    for entry in entries:
        rate = Decimal(entry.hourly_rate)
        key = (entry.phase_id if entry.phase_id is not None else NO_PHASE_KEY, rate)
        if key not in groups:
            label = phase_names.get(entry.phase_id) if entry.phase_id is not None else None
            groups[key] = _Group(label or NO_PHASE_LABEL, entry.phase_id, rate)
        groups[key].minutes += entry.duration_minutes
    return _drafts_from_groups(groups.values())


def _per_day(entries: Sequence[TimeEntry]) -> List[InvoiceItemDraft]:
    groups: Dict[Tuple[object, Decimal], _Group] = OrderedDict()
    for entry in entries:
        rate = Decimal(entry.hourly_rate)
        key = (entry.entry_date, rate)
        if key not in groups:
            groups[key] = _Group(f"Práce dne {entry.entry_date.isoformat()}", None, rate)
        groups[key].minutes += entry.duration_minutes
    return _drafts_from_groups(groups.values())


def _drafts_from_groups(groups) -> List[InvoiceItemDraft]:
    return [
        InvoiceItemDraft(
            description=group.description,
            quantity=minutes_to_hours(group.minutes),
            unit_price=group.hourly_rate,
            minutes=group.minutes,
            phase_id=group.phase_id,
        )
        for group in groups
    ]
