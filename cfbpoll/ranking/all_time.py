"""All-time lists built from final (postseason) ranking snapshots."""

import logging
from collections.abc import Iterable

from cfbpoll.data.models import AllTimeEntry, AllTimeResult, RankingsResult

logger = logging.getLogger(__name__)

BEST_TEAMS_THRESHOLD = 40.0
WORST_TEAMS_THRESHOLD = 16.0
LIST_SIZE = 25


def _entries(snapshots: Iterable[RankingsResult]) -> list[AllTimeEntry]:
    return [
        AllTimeEntry(
            season=snapshot.season,
            week=snapshot.week,
            team_name=team.team_name,
            logo_url=team.logo_url,
            rank=team.rank,
            rating=team.rating,
            weighted_sos=team.weighted_sos,
            wins=team.wins,
            losses=team.losses,
        )
        for snapshot in snapshots
        for team in snapshot.rankings
    ]


def _assign_ranks(entries: Iterable[AllTimeEntry]) -> list[AllTimeEntry]:
    return [
        entry.model_copy(update={"all_time_rank": index})
        for index, entry in enumerate(entries, start=1)
    ]


def build_best_teams(entries: list[AllTimeEntry]) -> list[AllTimeEntry]:
    """Highest ratings; falls back to the top 25 when few clear the threshold."""
    ordered = sorted(entries, key=lambda e: (-e.rating, e.season, e.team_name))
    candidates = [e for e in ordered if e.rating >= BEST_TEAMS_THRESHOLD]

    if len(candidates) < LIST_SIZE:
        return _assign_ranks(ordered[:LIST_SIZE])
    return _assign_ranks(candidates[:LIST_SIZE])


def build_worst_teams(entries: list[AllTimeEntry]) -> list[AllTimeEntry]:
    """Lowest ratings among teams that played; same fallback as best teams."""
    eligible = sorted(
        (e for e in entries if e.wins + e.losses > 0),
        key=lambda e: (e.rating, e.season, e.team_name),
    )
    candidates = [e for e in eligible if e.rating <= WORST_TEAMS_THRESHOLD]

    if len(candidates) < LIST_SIZE:
        return _assign_ranks(eligible[:LIST_SIZE])
    return _assign_ranks(candidates[:LIST_SIZE])


def build_hardest_schedules(entries: list[AllTimeEntry]) -> list[AllTimeEntry]:
    """Highest weighted SOS."""
    ordered = sorted(entries, key=lambda e: (-e.weighted_sos, e.season, e.team_name))
    return _assign_ranks(ordered[:LIST_SIZE])


def build_all_time(snapshots: Iterable[RankingsResult]) -> AllTimeResult:
    """
    Build the all-time lists.

    Args:
        snapshots: One final snapshot per season

    Returns:
        AllTimeResult with best teams, worst teams and hardest schedules
    """
    snapshots = list(snapshots)
    entries = _entries(snapshots)
    logger.info(f"Building all-time lists from {len(snapshots)} snapshots ({len(entries)} team-seasons)")

    return AllTimeResult(
        best_teams=build_best_teams(entries),
        worst_teams=build_worst_teams(entries),
        hardest_schedules=build_hardest_schedules(entries),
    )
