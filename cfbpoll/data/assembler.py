"""Assemble SeasonData for one cutoff week from a roster and raw games.

Postseason games carry their own week numbering (bowl week 1), so they are
not filtered by week: they are included as a block once the cutoff is past
the last regular-season week.
"""

from collections.abc import Iterable

from cfbpoll.data.models import FBSTeam, Game, SeasonData, SeasonType, Team


def max_regular_week(regular_games: Iterable[Game]) -> int:
    """Last regular-season week with a game on the schedule (0 if none)."""
    return max((g.week for g in regular_games), default=0)


def postseason_week(regular_games: Iterable[Game]) -> int:
    """Cutoff week that represents the final ranking, bowls included."""
    return max_regular_week(regular_games) + 1


def week_label(week: int, season_type: SeasonType = "regular") -> str:
    """Display label for a week: "Postseason" or "Week N"."""
    if season_type == "postseason":
        return "Postseason"
    return f"Week {week}"


def cutoff_label(season_data: SeasonData) -> str:
    """Label for the cutoff week of a SeasonData; postseason once bowls are included."""
    if any(g.season_type == "postseason" for g in season_data.games):
        return week_label(season_data.week, "postseason")
    return week_label(season_data.week)


def filter_games_to_week(
    regular_games: Iterable[Game],
    postseason_games: Iterable[Game],
    week: int,
    last_regular_week: int,
) -> list[Game]:
    """
    Select the games that belong to a cutoff week.

    Args:
        regular_games: Regular-season games
        postseason_games: Postseason games
        week: Cutoff week (inclusive)
        last_regular_week: Last regular-season week

    Returns:
        Regular games through ``week``, plus all postseason games when the
        cutoff is past the regular season
    """
    filtered = [g for g in regular_games if g.week <= week]

    if week > last_regular_week:
        filtered.extend(postseason_games)

    return filtered


def count_record(team_name: str, games: Iterable[Game]) -> tuple[int, int]:
    """
    Count wins and losses for a team from completed games.

    Args:
        team_name: Team name (matched case-insensitively)
        games: Games involving the team

    Returns:
        (wins, losses)
    """
    wins = 0
    losses = 0
    folded = team_name.casefold()

    for game in games:
        if not game.is_completed:
            continue

        if game.home_team.casefold() == folded:
            team_points, opp_points = game.home_points, game.away_points
        else:
            team_points, opp_points = game.away_points, game.home_points

        if team_points > opp_points:
            wins += 1
        elif opp_points > team_points:
            losses += 1

    return wins, losses


def build_team_dictionary(
    teams: Iterable[FBSTeam],
    games: list[Game],
) -> dict[str, Team]:
    """
    Build the season team map with each team's games and record.

    Roster entries with an empty name are skipped.

    Args:
        teams: Roster
        games: Games already filtered to the cutoff

    Returns:
        Dict mapping team name to Team
    """
    team_dict: dict[str, Team] = {}

    for team in teams:
        if not team.name:
            continue

        team_games = [g for g in games if g.involves(team.name)]
        wins, losses = count_record(team.name, team_games)

        team_dict[team.name] = Team(
            name=team.name,
            conference=team.conference,
            division=team.division,
            logo_url=team.logo_url,
            color=team.color,
            alt_color=team.alt_color,
            wins=wins,
            losses=losses,
            games=team_games,
        )

    return team_dict


def assemble_season_data(
    season: int,
    week: int,
    teams: Iterable[FBSTeam],
    regular_games: list[Game],
    postseason_games: list[Game],
) -> SeasonData:
    """
    Assemble the SeasonData for one (season, week).

    Args:
        season: Season year
        week: Cutoff week
        teams: FBS roster
        regular_games: All regular-season games of the season
        postseason_games: All postseason games of the season

    Returns:
        SeasonData ready for the engine
    """
    last_regular_week = max_regular_week(regular_games)
    games = filter_games_to_week(regular_games, postseason_games, week, last_regular_week)

    return SeasonData(
        season=season,
        week=week,
        teams=build_team_dictionary(teams, games),
        games=games,
    )
