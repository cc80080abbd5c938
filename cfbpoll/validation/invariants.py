"""Invariant checks for RankingsResult snapshots.

A snapshot is replayed unchanged once published, so these checks are meant
for snapshots loaded from outside the engine:
- ranks and SOS ranks are each exactly 1..N
- direct and weighted SOS lie in [0, 1]
- each team's location buckets and opponent-tier buckets each sum to its
  wins + losses
"""

from cfbpoll.data.models import RankedTeam, RankingsResult
from cfbpoll.validation.models import InvariantReport, InvariantViolation


def check_dense(
    values: list[int],
    check: str,
    label: str,
) -> list[InvariantViolation]:
    """
    Check that a list of ranks is exactly {1..N} with no duplicates.

    Args:
        values: Assigned ranks
        check: Check name to report under
        label: Human-readable name of the rank ("rank", "SOS rank")

    Returns:
        Violations found (empty when dense)
    """
    expected = set(range(1, len(values) + 1))
    actual = set(values)
    violations = []

    if len(actual) != len(values):
        duplicates = sorted({v for v in values if values.count(v) > 1})
        violations.append(InvariantViolation(check, f"Duplicate {label}s: {duplicates}"))

    missing = sorted(expected - actual)
    if missing:
        violations.append(InvariantViolation(check, f"Missing {label}s: {missing}"))

    unexpected = sorted(actual - expected)
    if unexpected:
        violations.append(InvariantViolation(check, f"Out-of-range {label}s: {unexpected}"))

    return violations


def check_sos_bounds(team: RankedTeam) -> list[InvariantViolation]:
    """Check that a team's SOS values lie in [0, 1]."""
    violations = []
    for label, value in (
        ("strength of schedule", team.strength_of_schedule),
        ("weighted SOS", team.weighted_sos),
    ):
        if not 0.0 <= value <= 1.0:
            violations.append(
                InvariantViolation("sos_bounds", f"{label} {value} outside [0, 1]", team.team_name)
            )
    return violations


def check_record_sums(team: RankedTeam) -> list[InvariantViolation]:
    """Check that location and tier buckets each account for every decision."""
    games = team.wins + team.losses
    violations = []

    for label, records in (
        ("location", team.details.location_records()),
        ("opponent-tier", team.details.tier_records()),
    ):
        total = sum(r.total for r in records)
        wins = sum(r.wins for r in records)
        if total != games or wins != team.wins:
            violations.append(
                InvariantViolation(
                    "record_sums",
                    f"{label} buckets hold {wins}-{total - wins}, record is {team.wins}-{team.losses}",
                    team.team_name,
                )
            )

    return violations


def check_rankings(result: RankingsResult) -> InvariantReport:
    """
    Check every invariant of a snapshot.

    Args:
        result: Snapshot to check

    Returns:
        InvariantReport listing all violations
    """
    report = InvariantReport(
        season=result.season,
        week=result.week,
        teams_checked=len(result.rankings),
    )

    report.violations.extend(check_dense([t.rank for t in result.rankings], "rank_density", "rank"))
    report.violations.extend(
        check_dense([t.sos_ranking for t in result.rankings], "sos_rank_density", "SOS rank")
    )

    for team in result.rankings:
        report.violations.extend(check_sos_bounds(team))
        report.violations.extend(check_record_sums(team))

    return report
