"""OS support lifecycle: classify catalog entries as active, ending soon, or end of life."""

import math
from collections import defaultdict
from datetime import datetime, time, timedelta, timezone

from app.operating_systems.models import OperatingSystem

ACTIVE = "active"
ENDING_SOON = "ending_soon"
END_OF_LIFE = "end_of_life"

VALID_STATUSES = (ACTIVE, ENDING_SOON, END_OF_LIFE)

STATUS_LABELS = {
    ACTIVE: "Supported",
    ENDING_SOON: "Ending Soon",
    END_OF_LIFE: "End of Life",
}

ENDING_SOON_MONTHS = 6


def add_months(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` by whole calendar months.

    A day that does not exist in the target month rolls over into the next
    one, so Aug 31 + 6 months is Mar 3 (Mar 2 in a leap year) rather than
    the last day of February.
    """
    years, month_index = divmod(moment.month - 1 + months, 12)
    first_of_month = moment.replace(year=moment.year + years, month=month_index + 1, day=1)
    return first_of_month + timedelta(days=moment.day - 1)


def end_of_support_at(os_record: OperatingSystem) -> datetime:
    """End of support as a UTC instant (midnight at the start of the date)."""
    return datetime.combine(os_record.end_of_support, time.min, tzinfo=timezone.utc)


def _as_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def classify(os_record: OperatingSystem, now: datetime) -> str:
    now = _as_utc(now)
    ends_at = end_of_support_at(os_record)

    if ends_at < now:
        return END_OF_LIFE
    if ends_at < add_months(now, ENDING_SOON_MONTHS):
        return ENDING_SOON
    return ACTIVE


def days_until_end_of_support(os_record: OperatingSystem, now: datetime) -> int:
    """Whole days left before support ends; negative once it has ended."""
    remaining = end_of_support_at(os_record) - _as_utc(now)
    return math.floor(remaining.total_seconds() / 3600 / 24)


def support_status_label(os_record: OperatingSystem, now: datetime) -> str:
    return STATUS_LABELS[classify(os_record, now)]


def group_catalog_by_family(catalog: list[OperatingSystem]) -> dict[str, list[OperatingSystem]]:
    """Group catalog entries by family name, each family sorted by version string.

    Versions are compared as plain strings, so "9" sorts after "10".
    """
    families: dict[str, list[OperatingSystem]] = defaultdict(list)
    for os_record in catalog:
        families[os_record.name].append(os_record)
    return {name: sorted(entries, key=lambda o: o.version) for name, entries in families.items()}


def filter_catalog_by_status(
    catalog: list[OperatingSystem],
    now: datetime,
    status: str,
) -> list[OperatingSystem]:
    return [os_record for os_record in catalog if classify(os_record, now) == status]
