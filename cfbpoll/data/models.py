"""Pydantic data models for the college-football ranking engine."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Location = Literal["home", "away", "neutral"]
SeasonType = Literal["regular", "postseason"]

# Rating components in the order they are always combined
RATING_COMPONENTS: tuple[str, ...] = (
    "win_pct",
    "win_quality",
    "strength_of_schedule",
    "weighted_sos",
)

# Secondary sort keys recognized by the tie-break chain
TIEBREAK_KEYS: tuple[str, ...] = (
    "weighted_sos",
    "strength_of_schedule",
    "win_pct",
    "wins",
    "losses",
)


class FBSTeam(BaseModel):
    """Roster entry for a team as supplied by the data collaborator."""

    name: str
    conference: str = ""
    division: str = ""
    logo_url: str = ""
    color: str = ""
    alt_color: str = ""

    model_config = {"frozen": True}


class Game(BaseModel):
    """Represents a single scheduled or completed game."""

    game_id: int | None = None
    week: int = Field(ge=0)
    home_team: str
    away_team: str
    home_points: int | None = Field(default=None, ge=0)
    away_points: int | None = Field(default=None, ge=0)
    neutral_site: bool = False
    season_type: SeasonType = "regular"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def teams_must_differ(self) -> "Game":
        """Ensure home and away teams are different."""
        if self.home_team == self.away_team:
            raise ValueError("Home and away teams must be different")
        return self

    @property
    def is_completed(self) -> bool:
        """A game counts only once both scores are known."""
        return self.home_points is not None and self.away_points is not None

    def involves(self, team_name: str) -> bool:
        """Case-insensitive check for whether a team played in this game."""
        folded = team_name.casefold()
        return folded in (self.home_team.casefold(), self.away_team.casefold())


class ScheduleEdge(BaseModel):
    """One completed game from one team's perspective."""

    opponent: str
    team_points: int
    opponent_points: int
    location: Location
    week: int
    season_type: SeasonType = "regular"
    opponent_known: bool = True

    model_config = {"frozen": True}

    @property
    def is_win(self) -> bool:
        return self.team_points > self.opponent_points


class Team(BaseModel):
    """A team as of the cutoff week, with its cumulative record and games."""

    name: str
    conference: str = ""
    division: str = ""
    logo_url: str = ""
    color: str = ""
    alt_color: str = ""
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    games: list[Game] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def decisions(self) -> int:
        return self.wins + self.losses


class SeasonData(BaseModel):
    """Everything the engine needs for one (season, week) computation."""

    season: int
    week: int = Field(ge=0)
    teams: dict[str, Team] = Field(default_factory=dict)
    games: list[Game] = Field(default_factory=list)

    model_config = {"frozen": True}


class ScheduleMetrics(BaseModel):
    """Schedule-derived inputs for the rating composer."""

    wins: int
    losses: int
    win_pct: float = Field(ge=0.0, le=1.0)
    win_quality: float = Field(ge=0.0, le=1.0)
    strength_of_schedule: float = Field(ge=0.0, le=1.0)
    weighted_strength_of_schedule: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}


class RatingDetails(BaseModel):
    """Computed rating for one team, with its named components."""

    wins: int
    losses: int
    strength_of_schedule: float = Field(ge=0.0, le=1.0)
    weighted_strength_of_schedule: float = Field(ge=0.0, le=1.0)
    rating: float
    rating_components: dict[str, float] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def win_pct(self) -> float:
        decisions = self.wins + self.losses
        return self.wins / decisions if decisions else 0.0


class Record(BaseModel):
    """Win/loss record for one bucket."""

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return self.wins + self.losses

    def add_win(self) -> "Record":
        return Record(wins=self.wins + 1, losses=self.losses)

    def add_loss(self) -> "Record":
        return Record(wins=self.wins, losses=self.losses + 1)


class TeamDetails(BaseModel):
    """Record splits by location and by opponent final-rank tier."""

    home: Record = Field(default_factory=Record)
    away: Record = Field(default_factory=Record)
    neutral: Record = Field(default_factory=Record)
    vs_rank_1_to_10: Record = Field(default_factory=Record)
    vs_rank_11_to_25: Record = Field(default_factory=Record)
    vs_rank_26_to_50: Record = Field(default_factory=Record)
    vs_rank_51_to_100: Record = Field(default_factory=Record)
    vs_rank_101_plus: Record = Field(default_factory=Record)

    model_config = {"frozen": True}

    def location_records(self) -> tuple[Record, ...]:
        return (self.home, self.away, self.neutral)

    def tier_records(self) -> tuple[Record, ...]:
        return (
            self.vs_rank_1_to_10,
            self.vs_rank_11_to_25,
            self.vs_rank_26_to_50,
            self.vs_rank_51_to_100,
            self.vs_rank_101_plus,
        )


class RankedTeam(BaseModel):
    """A team's place in a published ranking."""

    team_name: str
    conference: str = ""
    division: str = ""
    logo_url: str = ""
    wins: int
    losses: int
    rank: int = Field(ge=1)
    sos_ranking: int = Field(ge=1)
    rating: float
    rating_components: dict[str, float] = Field(default_factory=dict)
    strength_of_schedule: float = Field(ge=0.0, le=1.0)
    weighted_sos: float = Field(ge=0.0, le=1.0)
    details: TeamDetails = Field(default_factory=TeamDetails)

    model_config = {"frozen": True}


class RankingsResult(BaseModel):
    """Ordered ranking for one (season, week); the unit that gets persisted."""

    season: int
    week: int
    rankings: tuple[RankedTeam, ...] = ()

    model_config = {"frozen": True}

    def find(self, team_name: str) -> RankedTeam | None:
        """Case-insensitive lookup of a ranked team."""
        folded = team_name.casefold()
        for team in self.rankings:
            if team.team_name.casefold() == folded:
                return team
        return None


class EngineConfig(BaseModel):
    """Configuration parameters for the rating and ranking engine.

    Accepts snake_case field names or the camelCase option names
    (``propagationLevels``, ``blendWeightPerLevel``,
    ``earlySeasonWeekThreshold``, ``ratingComponentWeights``,
    ``tieBreakOrder``).

    Organized into categories:
    - Propagation (2): depth and per-level blend of weighted SOS
    - Stabilization (3): early-season blending with prior-season results
    - Composition (2): component weights and rating scale
    - Ordering (2): tie-break keys and published precision
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # ========== PROPAGATION (2) ==========
    propagation_levels: int = Field(default=3, ge=0)
    blend_weight_per_level: float = Field(default=0.5, ge=0.0, le=1.0)

    # ========== STABILIZATION (3) ==========
    early_season_week_threshold: int = Field(default=5, ge=0)
    early_season_prior_weights: dict[int, float] = Field(default_factory=dict)
    blend_win_pct: bool = True

    # ========== COMPOSITION (2) ==========
    rating_component_weights: dict[str, float] = Field(
        default_factory=lambda: {
            "win_pct": 0.50,
            "win_quality": 0.20,
            "strength_of_schedule": 0.10,
            "weighted_sos": 0.20,
        }
    )
    rating_scale: float = Field(default=50.0, gt=0)

    # ========== ORDERING (2) ==========
    tie_break_order: list[str] = Field(
        default_factory=lambda: ["weighted_sos", "wins", "losses"]
    )
    rounding_digits: int = Field(default=4, ge=0, le=12)

    @field_validator("rating_component_weights")
    @classmethod
    def known_components(cls, value: dict[str, float]) -> dict[str, float]:
        unknown = sorted(set(value) - set(RATING_COMPONENTS))
        if unknown:
            raise ValueError(
                f"Unknown rating components {unknown}. "
                f"Available: {', '.join(RATING_COMPONENTS)}"
            )
        negative = sorted(name for name, weight in value.items() if weight < 0)
        if negative:
            raise ValueError(f"Rating component weights must be >= 0: {negative}")
        return value

    @field_validator("tie_break_order")
    @classmethod
    def known_tiebreak_keys(cls, value: list[str]) -> list[str]:
        unknown = [key for key in value if key not in TIEBREAK_KEYS]
        if unknown:
            raise ValueError(
                f"Unknown tie-break keys {unknown}. Available: {', '.join(TIEBREAK_KEYS)}"
            )
        if len(set(value)) != len(value):
            raise ValueError("Tie-break keys must not repeat")
        return value

    @field_validator("early_season_prior_weights")
    @classmethod
    def non_increasing_schedule(cls, value: dict[int, float]) -> dict[int, float]:
        previous = 1.0
        for week in sorted(value):
            weight = value[week]
            if week < 0 or not 0.0 <= weight <= 1.0:
                raise ValueError(
                    f"Prior weight for week {week} must be within [0, 1], got {weight}"
                )
            if weight > previous:
                raise ValueError("Prior weights must not increase as the week increases")
            previous = weight
        return value


class ScheduleEntry(BaseModel):
    """One row of a team's schedule in the team-detail view."""

    week: int
    season_type: SeasonType
    opponent: str
    opponent_rank: int | None = None
    location: Location
    team_points: int | None = None
    opponent_points: int | None = None
    completed: bool
    is_win: bool | None = None


class TeamDetailResult(BaseModel):
    """Detail view for one ranked team."""

    season: int
    week: int
    ranked_team: RankedTeam
    schedule: list[ScheduleEntry] = Field(default_factory=list)


class TeamMovement(BaseModel):
    """Rank change for one team between two snapshots."""

    team_name: str
    previous_rank: int
    current_rank: int

    @property
    def change(self) -> int:
        """Positive when the team moved up."""
        return self.previous_rank - self.current_rank


class SnapshotComparison(BaseModel):
    """Week-over-week comparison of two rankings."""

    season: int
    previous_week: int
    current_week: int
    spearman_correlation: float
    teams_compared: int
    risers: list[TeamMovement] = Field(default_factory=list)
    fallers: list[TeamMovement] = Field(default_factory=list)
    new_teams: list[str] = Field(default_factory=list)
    dropped_teams: list[str] = Field(default_factory=list)


class AllTimeEntry(BaseModel):
    """One team-season appearing on an all-time list."""

    all_time_rank: int = 0
    season: int
    week: int
    team_name: str
    logo_url: str = ""
    rank: int
    rating: float
    weighted_sos: float
    wins: int
    losses: int


class AllTimeResult(BaseModel):
    """All-time lists built from final snapshots."""

    best_teams: list[AllTimeEntry] = Field(default_factory=list)
    worst_teams: list[AllTimeEntry] = Field(default_factory=list)
    hardest_schedules: list[AllTimeEntry] = Field(default_factory=list)
