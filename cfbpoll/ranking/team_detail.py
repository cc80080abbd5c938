"""Per-team detail view built from a finished ranking."""

import logging

from cfbpoll.data.models import (
    Game,
    RankingsResult,
    ScheduleEntry,
    SeasonData,
    TeamDetailResult,
)

logger = logging.getLogger(__name__)


def _schedule_entry(team_name: str, game: Game, rank_lookup: dict[str, int]) -> ScheduleEntry:
    is_home = game.home_team.casefold() == team_name.casefold()
    opponent = game.away_team if is_home else game.home_team
    team_points = game.home_points if is_home else game.away_points
    opponent_points = game.away_points if is_home else game.home_points

    if game.neutral_site:
        location = "neutral"
    else:
        location = "home" if is_home else "away"

    return ScheduleEntry(
        week=game.week,
        season_type=game.season_type,
        opponent=opponent,
        opponent_rank=rank_lookup.get(opponent.casefold()),
        location=location,
        team_points=team_points,
        opponent_points=opponent_points,
        completed=game.is_completed,
        is_win=(team_points > opponent_points) if game.is_completed else None,
    )


def get_team_detail(
    result: RankingsResult,
    season_data: SeasonData,
    team_name: str,
) -> TeamDetailResult | None:
    """
    Build the detail view for one team.

    Args:
        result: Rankings for the week
        season_data: Season data the rankings came from
        team_name: Team to look up (case-insensitive)

    Returns:
        TeamDetailResult, or None if the team is not in the season or ranking
    """
    team = next(
        (t for name, t in season_data.teams.items() if name.casefold() == team_name.casefold()),
        None,
    )
    if team is None:
        logger.debug(
            f"Team {team_name} not found in season data for season {season_data.season}, "
            f"week {season_data.week}"
        )
        return None

    ranked_team = result.find(team.name)
    if ranked_team is None:
        logger.debug(
            f"Team {team_name} not found in rankings for season {result.season}, week {result.week}"
        )
        return None

    rank_lookup = {t.team_name.casefold(): t.rank for t in result.rankings}
    schedule = sorted(
        (_schedule_entry(team.name, game, rank_lookup) for game in team.games),
        key=lambda entry: (entry.season_type != "regular", entry.week),
    )

    return TeamDetailResult(
        season=result.season,
        week=result.week,
        ranked_team=ranked_team,
        schedule=schedule,
    )
