"""Tests for snapshot invariant checks."""

from cfbpoll.data.models import RankedTeam, RankingsResult, Record, TeamDetails


def make_ranked(
    name: str,
    rank: int,
    sos_ranking: int | None = None,
    details: TeamDetails | None = None,
    wins: int = 0,
    losses: int = 0,
) -> RankedTeam:
    """Helper to create test RankedTeam."""
    return RankedTeam(
        team_name=name,
        wins=wins,
        losses=losses,
        rank=rank,
        sos_ranking=sos_ranking or rank,
        rating=10.0,
        strength_of_schedule=0.5,
        weighted_sos=0.5,
        details=details or TeamDetails(),
    )


class TestCheckDense:
    """Tests for check_dense function."""

    def test_dense(self):
        from cfbpoll.validation import check_dense

        assert check_dense([3, 1, 2], "rank_density", "rank") == []

    def test_duplicate_and_missing(self):
        from cfbpoll.validation import check_dense

        violations = check_dense([1, 1, 3], "rank_density", "rank")
        messages = [v.message for v in violations]

        assert "Duplicate ranks: [1]" in messages
        assert "Missing ranks: [2]" in messages

    def test_out_of_range(self):
        from cfbpoll.validation import check_dense

        violations = check_dense([1, 5], "sos_rank_density", "SOS rank")
        assert any("Out-of-range" in v.message for v in violations)

    def test_empty(self):
        from cfbpoll.validation import check_dense

        assert check_dense([], "rank_density", "rank") == []


class TestCheckRecordSums:
    """Tests for check_record_sums function."""

    def test_consistent(self):
        from cfbpoll.validation import check_record_sums

        details = TeamDetails(
            home=Record(wins=1),
            away=Record(losses=1),
            vs_rank_1_to_10=Record(losses=1),
            vs_rank_101_plus=Record(wins=1),
        )
        assert check_record_sums(make_ranked("A", 1, details=details, wins=1, losses=1)) == []

    def test_missing_tier_game(self):
        from cfbpoll.validation import check_record_sums

        details = TeamDetails(home=Record(wins=2), vs_rank_1_to_10=Record(wins=1))
        violations = check_record_sums(make_ranked("A", 1, details=details, wins=2))

        assert len(violations) == 1
        assert violations[0].check == "record_sums"
        assert violations[0].team_name == "A"


class TestCheckSosBounds:
    """Tests for check_sos_bounds function."""

    def test_in_bounds(self):
        from cfbpoll.validation import check_sos_bounds

        assert check_sos_bounds(make_ranked("A", 1)) == []

    def test_out_of_bounds(self):
        from cfbpoll.validation import check_sos_bounds

        # model_copy skips field validation
        team = make_ranked("A", 1).model_copy(update={"weighted_sos": 1.2})
        violations = check_sos_bounds(team)

        assert [v.check for v in violations] == ["sos_bounds"]


class TestCheckRankings:
    """Tests for check_rankings function."""

    def test_engine_output_passes(self, round_robin_season):
        from cfbpoll.ranking.engine import RankingEngine
        from cfbpoll.validation import check_rankings

        report = check_rankings(RankingEngine().rank(round_robin_season))

        assert report.ok
        assert report.teams_checked == 4
        assert (report.season, report.week) == (2024, 3)

    def test_broken_snapshot(self):
        from cfbpoll.validation import check_rankings

        snapshot = RankingsResult(
            season=2024,
            week=4,
            rankings=(make_ranked("A", 1), make_ranked("B", 1, sos_ranking=2)),
        )
        report = check_rankings(snapshot)

        assert not report.ok
        assert set(report.by_check()) == {"rank_density"}
