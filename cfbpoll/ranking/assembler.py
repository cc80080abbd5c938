"""Ranking assembly: ranks, SOS ranks and record splits.

Assembly runs in two strict phases:

1. ``rank_teams`` orders every team and assigns dense ranks 1..N and SOS
   ranks 1..N.
2. ``attach_team_details`` classifies each team's games by location and by
   the opponent's *final* rank from phase 1.

Phase 2 cannot start before phase 1 has finished for the whole team set:
the tier bucket of any game depends on the opponent's final rank.
"""

import logging
from collections.abc import Iterable, Mapping

from cfbpoll.algorithm.graph import ScheduleGraph
from cfbpoll.algorithm.tiebreaker import order_by_rating, order_by_sos
from cfbpoll.data.models import (
    EngineConfig,
    RankedTeam,
    RankingsResult,
    RatingDetails,
    Record,
    ScheduleEdge,
    SeasonData,
    TeamDetails,
)

logger = logging.getLogger(__name__)

# (highest rank in tier, TeamDetails field); anything deeper or unranked is 101+
OPPONENT_TIERS: tuple[tuple[int, str], ...] = (
    (10, "vs_rank_1_to_10"),
    (25, "vs_rank_11_to_25"),
    (50, "vs_rank_26_to_50"),
    (100, "vs_rank_51_to_100"),
)
LOWEST_TIER = "vs_rank_101_plus"


def opponent_tier(opponent: str, rank_lookup: Mapping[str, int]) -> str:
    """
    Classify an opponent by its final rank.

    Args:
        opponent: Opponent team name
        rank_lookup: Case-folded team name -> final rank

    Returns:
        Name of the TeamDetails tier field; unranked opponents are 101+
    """
    rank = rank_lookup.get(opponent.casefold())
    if rank is None:
        return LOWEST_TIER

    for limit, field_name in OPPONENT_TIERS:
        if rank <= limit:
            return field_name
    return LOWEST_TIER


def _update(record: Record, is_win: bool) -> Record:
    return record.add_win() if is_win else record.add_loss()


def compute_team_details(
    edges: Iterable[ScheduleEdge],
    rank_lookup: Mapping[str, int],
) -> TeamDetails:
    """
    Build location and opponent-tier record splits for one team.

    Args:
        edges: The team's completed-game edges
        rank_lookup: Final ranks of all teams (case-folded names)

    Returns:
        TeamDetails
    """
    buckets: dict[str, Record] = {name: Record() for name in TeamDetails.model_fields}

    for edge in edges:
        buckets[edge.location] = _update(buckets[edge.location], edge.is_win)

        tier = opponent_tier(edge.opponent, rank_lookup)
        buckets[tier] = _update(buckets[tier], edge.is_win)

    return TeamDetails(**buckets)


def rank_teams(
    season_data: SeasonData,
    ratings: Mapping[str, RatingDetails],
    config: EngineConfig,
) -> tuple[RankedTeam, ...]:
    """
    Phase 1: assign ranks and SOS ranks to every rated team.

    Args:
        season_data: Season data (team metadata)
        ratings: Dict mapping team name to RatingDetails
        config: Engine configuration (tie-breaks, precision)

    Returns:
        RankedTeams ordered by rank, with empty TeamDetails
    """
    ordered = order_by_rating(ratings, config)
    sos_ranks = {name: index for index, name in enumerate(order_by_sos(ratings, config), start=1)}
    digits = config.rounding_digits

    ranked = []
    for rank, team_name in enumerate(ordered, start=1):
        details = ratings[team_name]
        team = season_data.teams.get(team_name)

        ranked.append(
            RankedTeam(
                team_name=team_name,
                conference=team.conference if team else "",
                division=team.division if team else "",
                logo_url=team.logo_url if team else "",
                wins=details.wins,
                losses=details.losses,
                rank=rank,
                sos_ranking=sos_ranks[team_name],
                rating=round(details.rating, digits),
                rating_components={
                    name: round(value, digits) for name, value in details.rating_components.items()
                },
                strength_of_schedule=round(details.strength_of_schedule, digits),
                weighted_sos=round(details.weighted_strength_of_schedule, digits),
            )
        )

    return tuple(ranked)


def attach_team_details(
    ranked: tuple[RankedTeam, ...],
    graph: ScheduleGraph,
) -> tuple[RankedTeam, ...]:
    """
    Phase 2: compute record splits against the finished ranking.

    Args:
        ranked: Complete phase-1 output
        graph: Schedule graph

    Returns:
        New RankedTeams carrying their TeamDetails
    """
    rank_lookup = {team.team_name.casefold(): team.rank for team in ranked}

    return tuple(
        team.model_copy(
            update={"details": compute_team_details(graph.get(team.team_name, ()), rank_lookup)}
        )
        for team in ranked
    )


def assemble_rankings(
    season_data: SeasonData,
    ratings: Mapping[str, RatingDetails],
    graph: ScheduleGraph,
    config: EngineConfig,
) -> RankingsResult:
    """
    Produce the final RankingsResult.

    Args:
        season_data: Season data
        ratings: Composer output
        graph: Schedule graph built from ``season_data``
        config: Engine configuration

    Returns:
        RankingsResult ordered by rank
    """
    ranked = rank_teams(season_data, ratings, config)
    ranked = attach_team_details(ranked, graph)

    if ranked:
        top = ", ".join(f"{t.rank}. {t.team_name}" for t in ranked[:5])
        logger.info(f"Ranked {len(ranked)} teams for {season_data.season} week {season_data.week}: {top}")

    return RankingsResult(
        season=season_data.season,
        week=season_data.week,
        rankings=ranked,
    )
