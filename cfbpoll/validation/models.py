"""Data models for ranking invariant checks."""

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class InvariantViolation:
    """One broken invariant in a ranking snapshot."""

    check: Literal["rank_density", "sos_rank_density", "sos_bounds", "record_sums"]
    message: str
    team_name: str | None = None


@dataclass
class InvariantReport:
    """Outcome of checking one RankingsResult."""

    season: int
    week: int
    teams_checked: int = 0
    violations: list[InvariantViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def by_check(self) -> dict[str, list[InvariantViolation]]:
        """Group violations by the check that found them."""
        grouped: dict[str, list[InvariantViolation]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.check, []).append(violation)
        return grouped
