"""Strength-of-schedule propagation over the schedule graph.

Direct SOS is the mean win percentage of a team's opponents. Weighted SOS
extends that through the graph: each level blends a team's previous value
with the mean previous value of its opponents, so after k levels it
reflects opponents' opponents k hops out.

The graph is cyclic, so propagation runs a fixed number of synchronous
passes. Every pass reads only the previous pass's complete snapshot and
writes a fresh dict; nothing is updated in place.

Opponents that contribute nothing:
- not in the team map (unknown, e.g. non-FBS)
- in the team map but without a single decision
They are excluded from both the sum and the divisor, never counted as 0.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from cfbpoll.algorithm.graph import ScheduleGraph
from cfbpoll.data.models import EngineConfig, ScheduleMetrics, SeasonData, Team

logger = logging.getLogger(__name__)


@dataclass
class PropagationResult:
    """Result of weighted-SOS propagation."""

    weighted_sos: dict[str, float]
    levels: int
    delta_history: list[float]


def clamp_unit(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, value))


def win_percentage(team: Team | None) -> float | None:
    """
    Win percentage from a team's own cumulative record.

    Returns:
        wins / (wins + losses), or None when the team has no decisions
    """
    if team is None or team.decisions == 0:
        return None
    return team.wins / team.decisions


def contributing_opponents(
    team_name: str,
    graph: ScheduleGraph,
    teams: Mapping[str, Team],
) -> list[str]:
    """
    Opponents (one entry per game) that count toward schedule averages.

    Args:
        team_name: Team whose schedule is walked
        graph: Schedule graph
        teams: Team map

    Returns:
        Opponent names in graph order, repeated for rematches
    """
    opponents = []
    for edge in graph.get(team_name, ()):
        if not edge.opponent_known:
            continue
        if win_percentage(teams.get(edge.opponent)) is None:
            continue
        opponents.append(edge.opponent)
    return opponents


def compute_direct_sos(
    graph: ScheduleGraph,
    teams: Mapping[str, Team],
) -> dict[str, float]:
    """
    Compute direct strength of schedule for every team.

    Direct SOS = mean win percentage of contributing opponents, 0.0 when
    there are none.

    Args:
        graph: Schedule graph
        teams: Team map with cumulative records

    Returns:
        Dict mapping team name to direct SOS in [0, 1]
    """
    sos: dict[str, float] = {}

    for team_name in sorted(graph):
        opponents = contributing_opponents(team_name, graph, teams)
        if not opponents:
            sos[team_name] = 0.0
            continue

        total = math.fsum(win_percentage(teams[opp]) for opp in opponents)
        sos[team_name] = clamp_unit(total / len(opponents))

    return sos


def compute_win_quality(
    graph: ScheduleGraph,
    teams: Mapping[str, Team],
) -> dict[str, float]:
    """
    Compute win quality: opponent win percentage credited for wins only.

    Averaged over the same contributing-opponent games as direct SOS, so
    beating good teams scores high and losing scores nothing.

    Args:
        graph: Schedule graph
        teams: Team map with cumulative records

    Returns:
        Dict mapping team name to win quality in [0, 1]
    """
    quality: dict[str, float] = {}

    for team_name in sorted(graph):
        credits = []
        for edge in graph[team_name]:
            if not edge.opponent_known:
                continue
            opp_pct = win_percentage(teams.get(edge.opponent))
            if opp_pct is None:
                continue
            credits.append(opp_pct if edge.is_win else 0.0)

        quality[team_name] = clamp_unit(math.fsum(credits) / len(credits)) if credits else 0.0

    return quality


def propagate_once(
    previous: Mapping[str, float],
    graph: ScheduleGraph,
    teams: Mapping[str, Team],
    blend_weight: float,
) -> dict[str, float]:
    """
    Perform one synchronous propagation pass.

    CRITICAL: Reads only ``previous``; the returned dict is new.

    For each team:
        value = (1 - w) * previous[T] + w * mean(previous[opp])

    Teams with no contributing opponents keep their previous value.

    Args:
        previous: Complete snapshot from the previous level
        graph: Schedule graph
        teams: Team map
        blend_weight: Weight on the opponents' mean (w)

    Returns:
        New snapshot, clamped to [0, 1]
    """
    current: dict[str, float] = {}

    for team_name in sorted(previous):
        opponents = [
            opp for opp in contributing_opponents(team_name, graph, teams) if opp in previous
        ]
        if not opponents:
            current[team_name] = previous[team_name]
            continue

        opponent_mean = math.fsum(previous[opp] for opp in opponents) / len(opponents)
        blended = (1.0 - blend_weight) * previous[team_name] + blend_weight * opponent_mean
        current[team_name] = clamp_unit(blended)

    return current


def propagate_weighted_sos(
    graph: ScheduleGraph,
    teams: Mapping[str, Team],
    direct_sos: Mapping[str, float],
    levels: int,
    blend_weight: float,
) -> PropagationResult:
    """
    Run a bounded number of propagation passes starting from direct SOS.

    Args:
        graph: Schedule graph
        teams: Team map
        direct_sos: Level-0 values
        levels: Number of passes (0 returns direct SOS)
        blend_weight: Weight on the opponents' mean per pass

    Returns:
        PropagationResult with the final level and per-pass max deltas
    """
    values = {team: clamp_unit(value) for team, value in direct_sos.items()}
    delta_history: list[float] = []

    for level in range(levels):
        new_values = propagate_once(values, graph, teams, blend_weight)

        max_delta = max((abs(new_values[t] - values[t]) for t in values), default=0.0)
        delta_history.append(max_delta)
        logger.debug(f"SOS propagation level {level + 1}: max delta = {max_delta:.6f}")

        values = new_values

    return PropagationResult(
        weighted_sos=values,
        levels=levels,
        delta_history=delta_history,
    )


def compute_schedule_metrics(
    season_data: SeasonData,
    graph: ScheduleGraph,
    config: EngineConfig,
) -> dict[str, ScheduleMetrics]:
    """
    Compute all schedule-derived metrics for every team in the season.

    Args:
        season_data: Season roster and games
        graph: Schedule graph built from ``season_data``
        config: Engine configuration (propagation depth and blend)

    Returns:
        Dict mapping team name to ScheduleMetrics, keys in sorted order
    """
    teams = season_data.teams
    direct = compute_direct_sos(graph, teams)
    quality = compute_win_quality(graph, teams)
    propagation = propagate_weighted_sos(
        graph,
        teams,
        direct,
        levels=config.propagation_levels,
        blend_weight=config.blend_weight_per_level,
    )

    metrics: dict[str, ScheduleMetrics] = {}
    for team_name in sorted(teams):
        team = teams[team_name]
        metrics[team_name] = ScheduleMetrics(
            wins=team.wins,
            losses=team.losses,
            win_pct=win_percentage(team) or 0.0,
            win_quality=quality.get(team_name, 0.0),
            strength_of_schedule=direct.get(team_name, 0.0),
            weighted_strength_of_schedule=propagation.weighted_sos.get(team_name, 0.0),
        )

    if metrics:
        hardest = sorted(
            metrics.items(),
            key=lambda item: (-item[1].weighted_strength_of_schedule, item[0]),
        )[:3]
        logger.info(
            "Hardest schedules: "
            + ", ".join(f"{name} ({m.weighted_strength_of_schedule:.3f})" for name, m in hardest)
        )

    return metrics
