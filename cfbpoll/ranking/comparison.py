"""Week-over-week comparison of two ranking snapshots.

Compares two RankingsResults using Spearman rank correlation and lists the
teams that moved up, moved down, entered or left the ranking.
"""

import math

from scipy.stats import spearmanr

from cfbpoll.data.models import RankingsResult, SnapshotComparison, TeamMovement


class SnapshotComparator:
    """Compares two ranking snapshots."""

    @staticmethod
    def _compute_spearman(
        previous_ranks: list[int],
        current_ranks: list[int],
    ) -> float:
        """
        Compute Spearman rank correlation coefficient.

        Args:
            previous_ranks: Ranks in the earlier snapshot
            current_ranks: Ranks in the later snapshot

        Returns:
            Correlation coefficient between -1 and 1.
            Returns 0.0 for empty lists, 1.0 for single element.
        """
        if not previous_ranks or not current_ranks:
            return 0.0

        if len(previous_ranks) != len(current_ranks):
            raise ValueError("Rank lists must have the same length")

        if len(previous_ranks) == 1:
            return 1.0

        correlation, _ = spearmanr(previous_ranks, current_ranks)

        # Handle NaN (can occur with constant arrays)
        if math.isnan(correlation):
            return 1.0

        return float(correlation)

    @staticmethod
    def _movements(previous: RankingsResult, current: RankingsResult) -> list[TeamMovement]:
        previous_lookup = {t.team_name: t.rank for t in previous.rankings}
        return [
            TeamMovement(
                team_name=team.team_name,
                previous_rank=previous_lookup[team.team_name],
                current_rank=team.rank,
            )
            for team in current.rankings
            if team.team_name in previous_lookup
        ]

    def compare(
        self,
        previous: RankingsResult,
        current: RankingsResult,
    ) -> SnapshotComparison:
        """
        Compare a ranking to an earlier one.

        Args:
            previous: Earlier snapshot (e.g. last week)
            current: Later snapshot

        Returns:
            SnapshotComparison with correlation and movers
        """
        movements = self._movements(previous, current)

        previous_names = {t.team_name for t in previous.rankings}
        current_names = {t.team_name for t in current.rankings}

        ordered = sorted(movements, key=lambda m: m.team_name)
        correlation = self._compute_spearman(
            [m.previous_rank for m in ordered],
            [m.current_rank for m in ordered],
        )

        risers = sorted(
            (m for m in movements if m.change > 0),
            key=lambda m: (-m.change, m.team_name),
        )
        fallers = sorted(
            (m for m in movements if m.change < 0),
            key=lambda m: (m.change, m.team_name),
        )

        return SnapshotComparison(
            season=current.season,
            previous_week=previous.week,
            current_week=current.week,
            spearman_correlation=correlation,
            teams_compared=len(movements),
            risers=risers,
            fallers=fallers,
            new_teams=sorted(current_names - previous_names),
            dropped_teams=sorted(previous_names - current_names),
        )

    def biggest_movers(
        self,
        previous: RankingsResult,
        current: RankingsResult,
        limit: int = 10,
    ) -> list[TeamMovement]:
        """
        Find teams with the biggest rank changes in either direction.

        Args:
            previous: Earlier snapshot
            current: Later snapshot
            limit: Maximum number of results to return

        Returns:
            TeamMovements sorted by absolute change (largest first), then name
        """
        movements = [m for m in self._movements(previous, current) if m.change != 0]
        movements.sort(key=lambda m: (-abs(m.change), m.team_name))
        return movements[:limit]
