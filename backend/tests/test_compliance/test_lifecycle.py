from datetime import date, datetime, timezone

import pytest

from app.compliance.lifecycle import (
    ACTIVE,
    END_OF_LIFE,
    ENDING_SOON,
    VALID_STATUSES,
    add_months,
    classify,
    days_until_end_of_support,
    filter_catalog_by_status,
    group_catalog_by_family,
    support_status_label,
)
from app.operating_systems.models import OperatingSystem

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_os(version: str, end_of_support: date, name: str = "Ubuntu", os_id: int = 1) -> OperatingSystem:
    return OperatingSystem(id=os_id, name=name, version=version, end_of_support=end_of_support)


@pytest.mark.parametrize(
    "end_of_support, expected",
    [
        (date(2024, 1, 15), END_OF_LIFE),
        (date(2025, 1, 14), END_OF_LIFE),
        (date(2025, 4, 15), ENDING_SOON),
        (date(2025, 7, 15), ENDING_SOON),
        (date(2025, 7, 16), ACTIVE),
        (date(2027, 1, 15), ACTIVE),
    ],
)
def test_classify(end_of_support, expected):
    assert classify(make_os("x", end_of_support), NOW) == expected


def test_classify_end_date_equal_to_now_is_ending_soon():
    now = datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert classify(make_os("x", date(2025, 1, 15)), now) == ENDING_SOON


def test_classify_six_month_boundary_is_active():
    now = datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert classify(make_os("x", date(2025, 7, 15)), now) == ACTIVE
    assert classify(make_os("x", date(2025, 7, 14)), now) == ENDING_SOON


def test_classify_naive_reference_time_treated_as_utc():
    naive = datetime(2025, 1, 15, 12, 0)
    assert classify(make_os("x", date(2025, 4, 15)), naive) == ENDING_SOON


def test_six_month_window_rolls_overflowing_day_forward():
    # Aug 31 + 6 months lands on "Feb 31", which rolls over to Mar 3
    now = datetime(2024, 8, 31, tzinfo=timezone.utc)
    assert classify(make_os("x", date(2025, 3, 2)), now) == ENDING_SOON
    assert classify(make_os("x", date(2025, 3, 3)), now) == ACTIVE


@pytest.mark.parametrize(
    "start, expected",
    [
        (datetime(2025, 1, 31, 8, 30), datetime(2025, 7, 31, 8, 30)),
        (datetime(2024, 8, 31), datetime(2025, 3, 3)),
        (datetime(2023, 8, 31), datetime(2024, 3, 2)),
        (datetime(2024, 10, 15), datetime(2025, 4, 15)),
        (datetime(2024, 12, 31), datetime(2025, 7, 1)),
    ],
)
def test_add_months(start, expected):
    assert add_months(start, 6) == expected


@pytest.mark.parametrize(
    "end_of_support, expected_days",
    [
        (date(2025, 1, 25), 9),
        (date(2025, 1, 16), 0),
        (date(2025, 1, 15), -1),
        (date(2025, 1, 5), -11),
    ],
)
def test_days_until_end_of_support(end_of_support, expected_days):
    assert days_until_end_of_support(make_os("x", end_of_support), NOW) == expected_days


def test_support_status_label():
    assert support_status_label(make_os("x", date(2020, 1, 1)), NOW) == "End of Life"
    assert support_status_label(make_os("x", date(2025, 3, 1)), NOW) == "Ending Soon"
    assert support_status_label(make_os("x", date(2030, 1, 1)), NOW) == "Supported"


def test_statuses_partition_catalog():
    catalog = [
        make_os(str(i), date(2024, 1, 1).replace(month=(i % 12) + 1, year=2023 + i // 12), os_id=i)
        for i in range(60)
    ]

    buckets = {status: filter_catalog_by_status(catalog, NOW, status) for status in VALID_STATUSES}

    seen = [o.id for members in buckets.values() for o in members]
    assert sorted(seen) == [o.id for o in catalog]
    assert all(classify(o, NOW) in VALID_STATUSES for o in catalog)
    assert all(buckets.values())


def test_filter_catalog_by_status_keeps_input_order():
    catalog = [
        make_os("22.04", date(2027, 4, 1), os_id=1),
        make_os("16.04", date(2021, 4, 1), os_id=2),
        make_os("18.04", date(2023, 5, 31), os_id=3),
    ]
    assert [o.id for o in filter_catalog_by_status(catalog, NOW, END_OF_LIFE)] == [2, 3]


def test_group_catalog_by_family_sorts_versions_lexically():
    catalog = [
        make_os("22.04", date(2027, 4, 1), os_id=1),
        make_os("20.04", date(2025, 4, 1), os_id=2),
        make_os("12", date(2028, 6, 30), name="Debian", os_id=3),
        make_os("11", date(2026, 6, 30), name="Debian", os_id=4),
        make_os("9", date(2022, 6, 30), name="Debian", os_id=5),
    ]

    grouped = group_catalog_by_family(catalog)

    assert set(grouped) == {"Ubuntu", "Debian"}
    assert [o.version for o in grouped["Ubuntu"]] == ["20.04", "22.04"]
    assert [o.version for o in grouped["Debian"]] == ["11", "12", "9"]
