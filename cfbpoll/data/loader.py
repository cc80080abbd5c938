"""JSON loading of season files, configs and ranking snapshots.

A season file holds one season's roster and games as delivered by the
data collaborator:

    {
        "season": 2024,
        "teams": [{"name": "Georgia", "conference": "SEC", ...}],
        "regular_games": [{"week": 1, "home_team": ..., "home_points": 34, ...}],
        "postseason_games": [...]
    }
"""

from pathlib import Path

from pydantic import BaseModel, Field

from cfbpoll.data.models import EngineConfig, FBSTeam, Game, RankingsResult


class SeasonFile(BaseModel):
    """Raw roster and schedule for one season."""

    season: int
    teams: list[FBSTeam] = Field(default_factory=list)
    regular_games: list[Game] = Field(default_factory=list)
    postseason_games: list[Game] = Field(default_factory=list)


def load_season_file(path: str | Path) -> SeasonFile:
    """
    Load and validate a season file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the content is malformed
    """
    return SeasonFile.model_validate_json(Path(path).read_text())


def load_config_file(path: str | Path) -> EngineConfig:
    """Load an EngineConfig from JSON (snake_case or camelCase keys)."""
    return EngineConfig.model_validate_json(Path(path).read_text())


def load_rankings_result(path: str | Path) -> RankingsResult:
    """Load a RankingsResult snapshot from JSON."""
    return RankingsResult.model_validate_json(Path(path).read_text())


def dump_rankings_result(result: RankingsResult) -> str:
    """Serialize a RankingsResult to indented JSON."""
    return result.model_dump_json(indent=2)
