"""Schedule graph construction.

Turns the flat list of games into a per-team adjacency view. The schedule
graph is cyclic (A played B, B played C, C played A), so it is kept as a
mapping keyed by team name rather than as linked objects; every consumer
walks it by name lookups.

Team names in games are matched to the team map case-insensitively and
edges always carry the team map's spelling for known opponents.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from cfbpoll.data.models import Game, ScheduleEdge, SeasonData

ScheduleGraph = Mapping[str, tuple[ScheduleEdge, ...]]


def build_name_index(team_names: Iterable[str]) -> dict[str, str]:
    """Map case-folded names to the team map's spelling."""
    return {name.casefold(): name for name in team_names}


def game_to_edges(game: Game, name_index: Mapping[str, str]) -> tuple[ScheduleEdge, ScheduleEdge]:
    """
    Generate the edge for both teams of a completed game.

    Args:
        game: A completed game (both scores present)
        name_index: Case-folded name -> team map key, used to flag unknown opponents

    Returns:
        (home_edge, away_edge)
    """
    if game.home_points is None or game.away_points is None:
        raise ValueError(f"Game {game.home_team} vs {game.away_team} has no final score")

    if game.neutral_site:
        home_location = away_location = "neutral"
    else:
        home_location, away_location = "home", "away"

    home_name = name_index.get(game.home_team.casefold())
    away_name = name_index.get(game.away_team.casefold())

    home_edge = ScheduleEdge(
        opponent=away_name or game.away_team,
        team_points=game.home_points,
        opponent_points=game.away_points,
        location=home_location,
        week=game.week,
        season_type=game.season_type,
        opponent_known=away_name is not None,
    )
    away_edge = ScheduleEdge(
        opponent=home_name or game.home_team,
        team_points=game.away_points,
        opponent_points=game.home_points,
        location=away_location,
        week=game.week,
        season_type=game.season_type,
        opponent_known=home_name is not None,
    )
    return home_edge, away_edge


def build_schedule_graph(season_data: SeasonData) -> ScheduleGraph:
    """
    Build a read-only lookup of completed-game edges by team.

    Every team in the team map gets an entry, possibly empty. Games with a
    missing score are skipped. Teams outside the team map that appear as
    opponents get no entry of their own; their edges are kept on the
    known side with ``opponent_known=False``.

    Args:
        season_data: Season roster and games up to the cutoff

    Returns:
        Mapping of team name to its edges in game-list order
    """
    name_index = build_name_index(season_data.teams)
    edges: dict[str, list[ScheduleEdge]] = {name: [] for name in season_data.teams}

    for game in season_data.games:
        if not game.is_completed:
            continue

        home_edge, away_edge = game_to_edges(game, name_index)
        home_name = name_index.get(game.home_team.casefold())
        away_name = name_index.get(game.away_team.casefold())
        if home_name is not None:
            edges[home_name].append(home_edge)
        if away_name is not None:
            edges[away_name].append(away_edge)

    return MappingProxyType({name: tuple(team_edges) for name, team_edges in edges.items()})


def completed_game_count(graph: ScheduleGraph, team_name: str) -> int:
    """Number of completed games for a team in the graph."""
    return len(graph.get(team_name, ()))
