"""Early-season stabilization against the previous season's final ratings.

Early in a season a team has played one or two games, so its SOS and win
percentage swing wildly. Until the configured threshold week, each team's
current metrics are blended with the same metrics from the previous
season's final RankingsResult. The prior's weight falls as the season
progresses and reaches zero at the threshold, after which this stage is
skipped entirely.

Teams without a prior entry (new programs, teams that moved up to FBS)
keep 100% current values.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from cfbpoll.algorithm.propagation import clamp_unit
from cfbpoll.data.models import EngineConfig, RankedTeam, RankingsResult, ScheduleMetrics

logger = logging.getLogger(__name__)


@dataclass
class BlendedMetrics:
    """How one team's metrics were stabilized."""

    team_name: str
    prior_weight: float
    source: str  # "current_only" or "blended"


def prior_weight(week: int, config: EngineConfig) -> float:
    """
    Get the weight of prior-season values for a given cutoff week.

    Each week's raw weight is the explicit ``early_season_prior_weights``
    entry when the schedule names the week, otherwise a linear fall from
    1.0 at week 0 to 0.0 at the threshold. The returned weight is the
    lowest raw weight of any week up to this one, so a partial schedule
    never lets the weight rise again.

    Args:
        week: Cutoff week
        config: Engine configuration

    Returns:
        Prior weight in [0, 1]; 0.0 at or after the threshold
    """
    threshold = config.early_season_week_threshold
    if threshold <= 0 or week >= threshold:
        return 0.0

    schedule = config.early_season_prior_weights
    return min(
        schedule.get(w, clamp_unit(1.0 - w / threshold))
        for w in range(max(week, 0) + 1)
    )


def is_active(week: int, prior: RankingsResult | None, config: EngineConfig) -> bool:
    """Whether the blender applies to this computation at all."""
    return prior is not None and prior_weight(week, config) > 0.0


def _prior_win_pct(entry: RankedTeam) -> float | None:
    decisions = entry.wins + entry.losses
    if decisions == 0:
        return None
    return entry.wins / decisions


def _blend(current: float, prior: float, weight: float) -> float:
    return clamp_unit((1.0 - weight) * current + weight * prior)


def blend_team_metrics(
    current: ScheduleMetrics,
    prior: RankedTeam,
    weight: float,
    blend_win_pct: bool = True,
) -> ScheduleMetrics:
    """
    Blend one team's current metrics with its prior-season final entry.

    Args:
        current: Current-season metrics
        prior: The team's entry in the prior season's final ranking
        weight: Prior weight
        blend_win_pct: Also blend win percentage

    Returns:
        New ScheduleMetrics; wins, losses and win quality are untouched
    """
    update = {
        "strength_of_schedule": _blend(
            current.strength_of_schedule, prior.strength_of_schedule, weight
        ),
        "weighted_strength_of_schedule": _blend(
            current.weighted_strength_of_schedule, prior.weighted_sos, weight
        ),
    }

    prior_pct = _prior_win_pct(prior)
    if blend_win_pct and prior_pct is not None:
        update["win_pct"] = _blend(current.win_pct, prior_pct, weight)

    return current.model_copy(update=update)


def stabilize(
    metrics: Mapping[str, ScheduleMetrics],
    week: int,
    prior: RankingsResult | None,
    config: EngineConfig,
) -> dict[str, ScheduleMetrics]:
    """
    Blend current metrics with prior-season values during early weeks.

    Args:
        metrics: Current-season metrics by team
        week: Cutoff week of the current computation
        prior: Previous season's final RankingsResult (optional)
        config: Engine configuration

    Returns:
        New dict of metrics; equal to ``metrics`` when the stage is skipped
    """
    if not is_active(week, prior, config):
        return dict(metrics)

    weight = prior_weight(week, config)
    prior_lookup = {entry.team_name.casefold(): entry for entry in prior.rankings}
    logger.debug(f"Blending week {week} with {prior.season} final ratings at prior weight {weight:.3f}")

    stabilized: dict[str, ScheduleMetrics] = {}
    outcomes: list[BlendedMetrics] = []
    for team_name in sorted(metrics):
        entry = prior_lookup.get(team_name.casefold())
        if entry is None:
            logger.debug(f"No {prior.season} entry for {team_name}; using current values only")
            stabilized[team_name] = metrics[team_name]
            outcomes.append(BlendedMetrics(team_name, 0.0, "current_only"))
            continue

        stabilized[team_name] = blend_team_metrics(
            metrics[team_name], entry, weight, blend_win_pct=config.blend_win_pct
        )
        outcomes.append(BlendedMetrics(team_name, weight, "blended"))

    blended_count = sum(1 for o in outcomes if o.source == "blended")
    logger.info(f"Stabilized {blended_count} of {len(outcomes)} teams with prior-season values")

    return stabilized
