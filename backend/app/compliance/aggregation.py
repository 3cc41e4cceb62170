"""Server population views keyed by operating system.

Servers whose OS could not be resolved (``server.os is None``) are left out of
every OS-dependent view. Output lists keep the order of the input.
"""

from collections import defaultdict
from datetime import datetime

from app.compliance.lifecycle import classify, group_catalog_by_family
from app.operating_systems.models import OperatingSystem
from app.servers.models import Server


def os_key(os_record: OperatingSystem) -> str:
    return f"{os_record.name} {os_record.version}"


def group_by_os_identity(servers: list[Server]) -> dict[str, list[Server]]:
    groups: dict[str, list[Server]] = defaultdict(list)
    for server in servers:
        if server.os is not None:
            groups[os_key(server.os)].append(server)
    return dict(groups)


def os_distribution(servers: list[Server]) -> dict[str, int]:
    return {key: len(members) for key, members in group_by_os_identity(servers).items()}


def group_by_os_family(servers: list[Server]) -> dict[str, int]:
    counts: dict[str, int] = defaultdict(int)
    for server in servers:
        if server.os is not None:
            counts[server.os.name] += 1
    return dict(counts)


def filter_by_status(servers: list[Server], now: datetime, status: str) -> list[Server]:
    return [s for s in servers if s.os is not None and classify(s.os, now) == status]


def find_by_os_id(servers: list[Server], os_id: int) -> list[Server]:
    return [s for s in servers if s.os_id == os_id]


def latest_version_per_family(catalog: list[OperatingSystem]) -> dict[str, OperatingSystem]:
    """Pick the lexically greatest version in each family.

    This is a string comparison, not a semantic one: between "9" and "10",
    "9" is the latest.
    """
    return {
        family: versions[-1]
        for family, versions in group_catalog_by_family(catalog).items()
        if versions
    }
