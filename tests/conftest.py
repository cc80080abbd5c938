"""Shared pytest fixtures for ranking engine tests."""

import pytest


def make_game(
    home: str,
    away: str,
    home_points: int | None,
    away_points: int | None,
    week: int = 1,
    neutral: bool = False,
    season_type: str = "regular",
):
    """Helper to create test games."""
    from cfbpoll.data.models import Game

    return Game(
        week=week,
        home_team=home,
        away_team=away,
        home_points=home_points,
        away_points=away_points,
        neutral_site=neutral,
        season_type=season_type,
    )


def make_season(games, team_names=None, season: int = 2024, week: int | None = None):
    """Helper to assemble SeasonData from games and a roster of names."""
    from cfbpoll.data.assembler import assemble_season_data
    from cfbpoll.data.models import FBSTeam

    if team_names is None:
        team_names = sorted({g.home_team for g in games} | {g.away_team for g in games})
    if week is None:
        week = max((g.week for g in games), default=0)

    roster = [FBSTeam(name=name, conference="Test") for name in team_names]
    return assemble_season_data(season, week, roster, games, [])


@pytest.fixture
def sample_teams():
    """Sample roster for testing."""
    from cfbpoll.data.models import FBSTeam

    return [
        FBSTeam(name="Ohio State", conference="Big Ten", logo_url="https://example.com/osu.png"),
        FBSTeam(name="Michigan", conference="Big Ten"),
        FBSTeam(name="Alabama", conference="SEC", division="West"),
        FBSTeam(name="Georgia", conference="SEC", division="East"),
    ]


@pytest.fixture
def four_team_round_robin():
    """
    Canonical test case: 4-team round robin.

    A beats B, C, D
    B beats C, D
    C beats D
    D loses all

    Expected order: A > B > C > D
    """
    return [
        # Week 1: A beats B, C beats D
        make_game("A", "B", 28, 14, week=1),
        make_game("C", "D", 21, 14, week=1),
        # Week 2: A beats C, B beats D
        make_game("A", "C", 35, 17, week=2),
        make_game("B", "D", 24, 10, week=2),
        # Week 3: A beats D, B beats C
        make_game("A", "D", 42, 7, week=3),
        make_game("B", "C", 17, 14, week=3),
    ]


@pytest.fixture
def round_robin_season(four_team_round_robin):
    """SeasonData for the 4-team round robin through week 3."""
    return make_season(four_team_round_robin)


@pytest.fixture
def engine_config():
    """Default engine configuration for testing."""
    from cfbpoll.data.models import EngineConfig

    return EngineConfig()
