"""Compliance report, score and upgrade recommendations for a server inventory snapshot."""

from datetime import datetime

from app.compliance.aggregation import (
    filter_by_status,
    group_by_os_family,
    group_by_os_identity,
    latest_version_per_family,
    os_distribution,
    os_key,
)
from app.compliance.lifecycle import END_OF_LIFE, ENDING_SOON, ENDING_SOON_MONTHS
from app.operating_systems.models import OperatingSystem
from app.servers.models import Server

END_OF_LIFE_PENALTY = 2.0
ENDING_SOON_PENALTY = 0.5

# (lower bound, description), checked from the top
SCORE_BANDS = [
    (90, "Excellent - Infrastructure is well maintained and compliant"),
    (75, "Good - Minor compliance issues that should be addressed"),
    (50, "Fair - Several compliance issues requiring attention"),
    (25, "Poor - Significant compliance issues need immediate action"),
]
CRITICAL_DESCRIPTION = "Critical - Infrastructure has serious compliance problems"


def generate_report(servers: list[Server], now: datetime) -> dict:
    """Summarize support status across ``servers`` as of ``now``.

    Returns a dict with the following keys:

    - ``total_servers``, ``supported_servers``, ``end_of_life_servers``,
      ``ending_soon_servers`` -- counts; the last three always add up to
      the first
    - ``os_distribution`` -- ``"Name Version"`` to server count
    - ``os_family_distribution`` -- OS family name to server count
    - ``end_of_life_list``, ``ending_soon_list`` -- the matching servers
    - ``generated_at`` -- ``now``
    """
    end_of_life = filter_by_status(servers, now, END_OF_LIFE)
    ending_soon = filter_by_status(servers, now, ENDING_SOON)

    return {
        "total_servers": len(servers),
        "supported_servers": len(servers) - len(end_of_life) - len(ending_soon),
        "end_of_life_servers": len(end_of_life),
        "ending_soon_servers": len(ending_soon),
        "os_distribution": os_distribution(servers),
        "os_family_distribution": group_by_os_family(servers),
        "end_of_life_list": end_of_life,
        "ending_soon_list": ending_soon,
        "generated_at": now,
    }


def compliance_score(servers: list[Server], now: datetime) -> float:
    """Score inventory health from 0 to 100.

    An end-of-life server costs four times as much as one nearing end of
    life. An empty inventory scores 100.
    """
    if not servers:
        return 100.0

    total = len(servers)
    penalty = (
        len(filter_by_status(servers, now, END_OF_LIFE)) * END_OF_LIFE_PENALTY
        + len(filter_by_status(servers, now, ENDING_SOON)) * ENDING_SOON_PENALTY
    )
    return max(0.0, (total - penalty) / total * 100)


def recommendations(
    servers: list[Server],
    catalog: list[OperatingSystem],
    now: datetime,
) -> list[str]:
    messages: list[str] = []

    end_of_life_count = len(filter_by_status(servers, now, END_OF_LIFE))
    ending_soon_count = len(filter_by_status(servers, now, ENDING_SOON))

    if end_of_life_count:
        messages.append(
            f"CRITICAL: {end_of_life_count} servers are running end-of-life operating systems "
            "and need immediate updates"
        )
    if ending_soon_count:
        messages.append(
            f"WARNING: {ending_soon_count} servers are running operating systems that will reach "
            f"end-of-life within {ENDING_SOON_MONTHS} months"
        )

    latest = latest_version_per_family(catalog)
    groups = group_by_os_identity(servers)

    # One suggestion per (version in use, family) pair; several outdated
    # versions of one family each get their own line.
    for version_key in sorted(groups):
        members = groups[version_key]
        in_use_family = members[0].os.name
        for family in sorted(latest):
            latest_key = os_key(latest[family])
            if in_use_family == family and version_key != latest_key:
                messages.append(
                    f"SUGGESTION: Consider upgrading {len(members)} servers from {version_key} to {latest_key}"
                )

    return messages


def score_description(score: float) -> str:
    for lower_bound, description in SCORE_BANDS:
        if score >= lower_bound:
            return description
    return CRITICAL_DESCRIPTION


def build_compliance_payload(
    servers: list[Server],
    catalog: list[OperatingSystem],
    now: datetime,
) -> dict:
    """Report plus score, score description and recommendations."""
    report = generate_report(servers, now)
    score = compliance_score(servers, now)
    report["compliance_score"] = score
    report["score_description"] = score_description(score)
    report["recommendations"] = recommendations(servers, catalog, now)
    return report
