"""Unit tests for the CLI interface.

Tests the Typer CLI commands for ranking, team detail, snapshot
comparison, all-time lists and snapshot validation.
"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cfbpoll.cli.main import app
from cfbpoll.data.models import RankedTeam, RankingsResult


# =============================================================================
# Test Fixtures
# =============================================================================


runner = CliRunner()


def game(week: int, home: str, away: str, home_points: int | None, away_points: int | None) -> dict:
    """Helper to create a raw game entry."""
    return {
        "week": week,
        "home_team": home,
        "away_team": away,
        "home_points": home_points,
        "away_points": away_points,
    }


def make_ranked(name: str, rank: int, rating: float = 30.0) -> RankedTeam:
    """Helper to create test RankedTeam."""
    return RankedTeam(
        team_name=name,
        wins=10,
        losses=2,
        rank=rank,
        sos_ranking=rank,
        rating=rating,
        strength_of_schedule=0.5,
        weighted_sos=0.5,
    )


@pytest.fixture
def season_file(tmp_path):
    """Season file for a 4-team round robin plus one bowl."""
    path = tmp_path / "2024.json"
    path.write_text(
        json.dumps(
            {
                "season": 2024,
                "teams": [
                    {"name": "Georgia", "conference": "SEC"},
                    {"name": "Alabama", "conference": "SEC"},
                    {"name": "Clemson", "conference": "ACC"},
                    {"name": "Duke", "conference": "ACC"},
                ],
                "regular_games": [
                    game(1, "Georgia", "Alabama", 28, 14),
                    game(1, "Clemson", "Duke", 21, 14),
                    game(2, "Georgia", "Clemson", 35, 17),
                    game(2, "Alabama", "Duke", 24, 10),
                    game(3, "Georgia", "Duke", 42, 7),
                    game(3, "Alabama", "Clemson", 17, 14),
                ],
                "postseason_games": [
                    {
                        "week": 1,
                        "home_team": "Alabama",
                        "away_team": "Clemson",
                        "home_points": 31,
                        "away_points": 20,
                        "neutral_site": True,
                        "season_type": "postseason",
                    }
                ],
            }
        )
    )
    return path


def write_snapshot(path, result: RankingsResult):
    path.write_text(result.model_dump_json())
    return path


# =============================================================================
# Rank Command
# =============================================================================


class TestRankCommand:
    """Tests for the rank command."""

    def test_rank_final_week(self, season_file):
        result = runner.invoke(app, ["rank", str(season_file)])

        assert result.exit_code == 0
        assert "Postseason" in result.stdout
        assert "Georgia" in result.stdout

    def test_rank_specific_week(self, season_file):
        result = runner.invoke(app, ["rank", str(season_file), "--week", "1"])

        assert result.exit_code == 0
        assert "Week 1" in result.stdout

    def test_rank_top(self, season_file):
        result = runner.invoke(app, ["rank", str(season_file), "--top", "1"])

        assert result.exit_code == 0
        assert "Georgia" in result.stdout
        assert "Duke" not in result.stdout

    def test_rank_output_file(self, season_file, tmp_path):
        output = tmp_path / "final.json"
        result = runner.invoke(app, ["rank", str(season_file), "--output", str(output)])

        assert result.exit_code == 0
        snapshot = RankingsResult.model_validate_json(output.read_text())
        assert snapshot.week == 4
        assert [t.rank for t in snapshot.rankings] == [1, 2, 3, 4]

    def test_rank_with_profile(self, season_file):
        result = runner.invoke(app, ["rank", str(season_file), "--profile", "results_first"])
        assert result.exit_code == 0

    def test_rank_invalid_profile(self, season_file):
        result = runner.invoke(app, ["rank", str(season_file), "--profile", "nope"])

        assert result.exit_code == 1
        assert "Unknown profile" in result.stdout

    def test_rank_with_config_file(self, season_file, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"propagationLevels": 1}))

        result = runner.invoke(app, ["rank", str(season_file), "--config", str(config)])
        assert result.exit_code == 0

    def test_rank_invalid_config_file(self, season_file, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"tieBreakOrder": ["coin_flip"]}))

        result = runner.invoke(app, ["rank", str(season_file), "--config", str(config)])
        assert result.exit_code == 1

    def test_rank_missing_season_file(self, tmp_path):
        result = runner.invoke(app, ["rank", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_rank_with_prior(self, season_file, tmp_path):
        prior = write_snapshot(
            tmp_path / "2023.json",
            RankingsResult(season=2023, week=16, rankings=(make_ranked("Duke", 1),)),
        )
        result = runner.invoke(app, ["rank", str(season_file), "--week", "1", "--prior", str(prior)])
        assert result.exit_code == 0

    def test_rank_prior_from_same_season_rejected(self, season_file, tmp_path):
        prior = write_snapshot(
            tmp_path / "2024.json.prior",
            RankingsResult(season=2024, week=16, rankings=(make_ranked("Duke", 1),)),
        )
        result = runner.invoke(app, ["rank", str(season_file), "--week", "1", "--prior", str(prior)])

        assert result.exit_code == 1
        assert "Invalid season data" in result.stdout

    def test_rank_empty_results(self, season_file):
        empty = RankingsResult(season=2024, week=4)
        with patch("cfbpoll.cli.main.get_rankings", return_value=empty):
            result = runner.invoke(app, ["rank", str(season_file)])

        assert result.exit_code == 0
        assert "No rankings available" in result.stdout


# =============================================================================
# Team Command
# =============================================================================


class TestTeamCommand:
    """Tests for the team command."""

    def test_team_detail(self, season_file):
        result = runner.invoke(app, ["team", str(season_file), "Alabama"])

        assert result.exit_code == 0
        assert "ALABAMA" in result.stdout
        assert "Rating Components" in result.stdout
        assert "Schedule" in result.stdout

    def test_team_schedule_labels_bowl_game(self, season_file):
        result = runner.invoke(app, ["team", str(season_file), "Alabama"])

        assert result.exit_code == 0
        assert "Postseason" in result.stdout
        assert "P1" not in result.stdout

    def test_team_not_found(self, season_file):
        result = runner.invoke(app, ["team", str(season_file), "Vanderbilt"])

        assert result.exit_code == 1
        assert "not found" in result.stdout


# =============================================================================
# Compare / All-Time / Validate / Profiles
# =============================================================================


class TestCompareCommand:
    """Tests for the compare command."""

    def test_compare(self, tmp_path):
        previous = write_snapshot(
            tmp_path / "w1.json",
            RankingsResult(season=2024, week=1, rankings=(make_ranked("A", 1), make_ranked("B", 2))),
        )
        current = write_snapshot(
            tmp_path / "w2.json",
            RankingsResult(season=2024, week=2, rankings=(make_ranked("B", 1), make_ranked("A", 2))),
        )

        result = runner.invoke(app, ["compare", str(previous), str(current)])

        assert result.exit_code == 0
        assert "Spearman" in result.stdout
        assert "Biggest Movers" in result.stdout

    def test_compare_missing_file(self, tmp_path):
        result = runner.invoke(app, ["compare", str(tmp_path / "a.json"), str(tmp_path / "b.json")])
        assert result.exit_code == 1


class TestAllTimeCommand:
    """Tests for the all-time command."""

    def test_all_time(self, tmp_path):
        files = [
            write_snapshot(
                tmp_path / f"{season}.json",
                RankingsResult(season=season, week=16, rankings=(make_ranked(f"Team{season}", 1),)),
            )
            for season in (2022, 2023)
        ]

        result = runner.invoke(app, ["all-time", *map(str, files)])

        assert result.exit_code == 0
        assert "Best Teams" in result.stdout
        assert "Hardest Schedules" in result.stdout


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_snapshot(self, season_file, tmp_path):
        output = tmp_path / "final.json"
        runner.invoke(app, ["rank", str(season_file), "--output", str(output)])

        result = runner.invoke(app, ["validate", str(output)])

        assert result.exit_code == 0
        assert "all invariants hold" in result.stdout

    def test_invalid_snapshot(self, tmp_path):
        snapshot = write_snapshot(
            tmp_path / "bad.json",
            RankingsResult(season=2024, week=3, rankings=(make_ranked("A", 1), make_ranked("B", 3))),
        )

        result = runner.invoke(app, ["validate", str(snapshot)])

        assert result.exit_code == 1
        assert "rank_density" in result.stdout

    def test_json_report(self, tmp_path):
        snapshot = write_snapshot(
            tmp_path / "bad.json",
            RankingsResult(season=2024, week=3, rankings=(make_ranked("A", 2),)),
        )

        result = runner.invoke(app, ["validate", str(snapshot), "--json"])

        assert result.exit_code == 1
        assert '"ok": false' in result.stdout


class TestProfilesCommand:
    """Tests for the profiles command."""

    def test_lists_profiles(self):
        result = runner.invoke(app, ["profiles"])

        assert result.exit_code == 0
        assert "standard" in result.stdout
        assert "no_stabilization" in result.stdout
