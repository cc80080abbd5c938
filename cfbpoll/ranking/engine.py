"""Ranking engine that orchestrates the full rating and ranking pipeline.

The RankingEngine ties together:
- Schedule graph (completed games per team)
- SOS propagation (direct and weighted strength of schedule)
- Early-season stabilization (blend with prior-season final ratings)
- Rating composition (scalar rating plus named components)
- Ranking assembly (ranks, SOS ranks, record splits)

Every call is a pure function of its arguments: the engine holds only its
configuration, performs no I/O and caches nothing, so independent
(season, week) computations can run side by side.
"""

import logging

from cfbpoll.algorithm.composer import compose_ratings
from cfbpoll.algorithm.graph import build_schedule_graph
from cfbpoll.algorithm.propagation import compute_schedule_metrics
from cfbpoll.algorithm.stabilization import stabilize
from cfbpoll.data.assembler import assemble_season_data, postseason_week
from cfbpoll.data.models import (
    EngineConfig,
    FBSTeam,
    Game,
    RankingsResult,
    RatingDetails,
    SeasonData,
)
from cfbpoll.ranking.assembler import assemble_rankings

logger = logging.getLogger(__name__)


class InvalidSeasonDataError(ValueError):
    """Input violates the engine's contract."""


class RankingEngine:
    """Orchestrates the ranking pipeline."""

    def __init__(
        self,
        config: EngineConfig | None = None,
    ):
        """
        Initialize the ranking engine.

        Args:
            config: Engine configuration (uses defaults if None)
        """
        self.config = config or EngineConfig()

    def validate(
        self,
        season_data: SeasonData,
        prior: RankingsResult | None = None,
    ) -> None:
        """
        Fail fast on input that would silently produce a wrong ranking.

        Raises:
            InvalidSeasonDataError: On the first violation found
        """
        seen: dict[str, str] = {}
        for key, team in season_data.teams.items():
            if key != team.name:
                raise InvalidSeasonDataError(
                    f"Team map key '{key}' does not match team name '{team.name}'"
                )
            folded = key.casefold()
            if folded in seen:
                raise InvalidSeasonDataError(
                    f"Team names '{seen[folded]}' and '{key}' differ only by case"
                )
            seen[folded] = key

        for game in season_data.games:
            label = f"{game.away_team} at {game.home_team} (week {game.week})"
            if game.season_type == "regular" and game.week > season_data.week:
                raise InvalidSeasonDataError(
                    f"Game {label} is after the cutoff week {season_data.week}"
                )
            if game.is_completed and game.home_points == game.away_points:
                raise InvalidSeasonDataError(f"Game {label} ended in a tie")

        graph = build_schedule_graph(season_data)
        for name in sorted(season_data.teams):
            team = season_data.teams[name]
            edges = graph[name]
            wins = sum(1 for edge in edges if edge.is_win)
            losses = len(edges) - wins
            if (team.wins, team.losses) != (wins, losses):
                raise InvalidSeasonDataError(
                    f"Team '{name}' has record {team.wins}-{team.losses} "
                    f"but its completed games add up to {wins}-{losses}"
                )

        if prior is not None:
            if prior.season >= season_data.season:
                raise InvalidSeasonDataError(
                    f"Prior-season rankings ({prior.season}) must precede season {season_data.season}"
                )
            if prior.season != season_data.season - 1:
                logger.warning(
                    f"Prior rankings are from {prior.season}, not {season_data.season - 1}"
                )

    def rate_teams(
        self,
        season_data: SeasonData,
        prior: RankingsResult | None = None,
    ) -> dict[str, RatingDetails]:
        """
        Compute rating details for every team.

        Args:
            season_data: Teams and completed games up to the cutoff week
            prior: Previous season's final rankings (early weeks only)

        Returns:
            Dict mapping team name to RatingDetails
        """
        self.validate(season_data, prior)

        graph = build_schedule_graph(season_data)
        metrics = compute_schedule_metrics(season_data, graph, self.config)
        metrics = stabilize(metrics, season_data.week, prior, self.config)
        return compose_ratings(metrics, self.config)

    def generate_rankings(
        self,
        season_data: SeasonData,
        ratings: dict[str, RatingDetails],
    ) -> RankingsResult:
        """
        Assemble rankings from already-computed ratings.

        Args:
            season_data: The season data the ratings were computed from
            ratings: Output of ``rate_teams``

        Returns:
            RankingsResult ordered by rank
        """
        graph = build_schedule_graph(season_data)
        return assemble_rankings(season_data, ratings, graph, self.config)

    def rank(
        self,
        season_data: SeasonData,
        prior: RankingsResult | None = None,
    ) -> RankingsResult:
        """
        Generate the rankings for one (season, week).

        Args:
            season_data: Teams and completed games up to the cutoff week
            prior: Previous season's final rankings (early weeks only)

        Returns:
            RankingsResult ordered by rank
        """
        ratings = self.rate_teams(season_data, prior)
        return self.generate_rankings(season_data, ratings)

    def rank_all_weeks(
        self,
        season: int,
        teams: list[FBSTeam],
        regular_games: list[Game],
        postseason_games: list[Game] | None = None,
        prior: RankingsResult | None = None,
    ) -> dict[int, RankingsResult]:
        """
        Generate week-by-week rankings.

        Each week is computed independently from its own SeasonData.

        Args:
            season: Season year
            teams: FBS roster
            regular_games: Regular-season games
            postseason_games: Postseason games (ranked as the week after the
                last regular-season week)
            prior: Previous season's final rankings

        Returns:
            Dict mapping week number to RankingsResult
        """
        postseason_games = postseason_games or []

        weeks = sorted({g.week for g in regular_games if g.is_completed})
        if any(g.is_completed for g in postseason_games):
            weeks.append(postseason_week(regular_games))

        result = {}
        for week in weeks:
            season_data = assemble_season_data(
                season, week, teams, regular_games, postseason_games
            )
            result[week] = self.rank(season_data, prior)

        return result
