"""Tests for all-time lists built from final snapshots."""

from cfbpoll.data.models import RankedTeam, RankingsResult


def make_ranked(name: str, rank: int, rating: float, weighted_sos: float = 0.5, wins: int = 10, losses: int = 2) -> RankedTeam:
    """Helper to create test RankedTeam."""
    return RankedTeam(
        team_name=name,
        wins=wins,
        losses=losses,
        rank=rank,
        sos_ranking=rank,
        rating=rating,
        strength_of_schedule=0.5,
        weighted_sos=weighted_sos,
    )


def make_season(season: int, ratings: list[float]) -> RankingsResult:
    """Helper to create a final snapshot with teams T0..Tn in rating order."""
    return RankingsResult(
        season=season,
        week=16,
        rankings=tuple(
            make_ranked(f"T{i}", i + 1, rating, weighted_sos=rating / 100)
            for i, rating in enumerate(sorted(ratings, reverse=True))
        ),
    )


class TestBestTeams:
    """Tests for build_best_teams function."""

    def test_threshold_applied_when_enough_candidates(self):
        from cfbpoll.ranking.all_time import _entries, build_best_teams

        snapshots = [make_season(2000 + i, [45.0, 44.0, 10.0]) for i in range(15)]
        best = build_best_teams(_entries(snapshots))

        assert len(best) == 25
        assert all(e.rating >= 40.0 for e in best)
        assert [e.all_time_rank for e in best] == list(range(1, 26))

    def test_falls_back_when_few_clear_threshold(self):
        from cfbpoll.ranking.all_time import _entries, build_best_teams

        best = build_best_teams(_entries([make_season(2020, [45.0, 30.0, 20.0])]))

        assert [e.rating for e in best] == [45.0, 30.0, 20.0]

    def test_ties_broken_by_season(self):
        from cfbpoll.ranking.all_time import _entries, build_best_teams

        best = build_best_teams(_entries([make_season(2021, [42.0]), make_season(2019, [42.0])]))
        assert [e.season for e in best] == [2019, 2021]


class TestWorstTeams:
    """Tests for build_worst_teams function."""

    def test_lowest_first(self):
        from cfbpoll.ranking.all_time import _entries, build_worst_teams

        worst = build_worst_teams(_entries([make_season(2020, [45.0, 12.0, 3.0])]))
        assert [e.rating for e in worst] == [3.0, 12.0, 45.0]

    def test_teams_without_games_excluded(self):
        from cfbpoll.ranking.all_time import _entries, build_worst_teams

        snapshot = RankingsResult(
            season=2020,
            week=16,
            rankings=(
                make_ranked("Played", 1, 5.0),
                make_ranked("Opted Out", 2, 0.0, wins=0, losses=0),
            ),
        )
        assert [e.team_name for e in build_worst_teams(_entries([snapshot]))] == ["Played"]


class TestBuildAllTime:
    """Tests for build_all_time function."""

    def test_hardest_schedules(self):
        from cfbpoll.ranking.all_time import build_all_time

        result = build_all_time([make_season(2020, [45.0, 30.0]), make_season(2021, [50.0])])

        assert [(e.season, e.weighted_sos) for e in result.hardest_schedules] == [
            (2021, 0.5),
            (2020, 0.45),
            (2020, 0.3),
        ]

    def test_no_snapshots(self):
        from cfbpoll.ranking.all_time import build_all_time

        result = build_all_time([])
        assert result.best_teams == []
        assert result.worst_teams == []
        assert result.hardest_schedules == []

    def test_accepts_generator(self):
        from cfbpoll.ranking.all_time import build_all_time

        result = build_all_time(make_season(s, [20.0]) for s in (2019, 2020))
        assert len(result.best_teams) == 2
