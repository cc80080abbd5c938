"""Rating composition from schedule metrics.

The rating is a weighted sum of named components:

    Rating = scale * (w_win_pct * WinPct
                      + w_win_quality * WinQuality
                      + w_sos * SOS
                      + w_weighted_sos * WeightedSOS)

Each component's contribution (scale * weight * value) is kept in the
breakdown so the rating can be explained. Components are always combined
in RATING_COMPONENTS order and summed with math.fsum, so the result never
depends on dict iteration order.
"""

import math
from collections.abc import Mapping

from cfbpoll.data.models import RATING_COMPONENTS, EngineConfig, RatingDetails, ScheduleMetrics


def component_values(metrics: ScheduleMetrics) -> dict[str, float]:
    """Raw [0, 1] value of every rating component for one team."""
    return {
        "win_pct": metrics.win_pct,
        "win_quality": metrics.win_quality,
        "strength_of_schedule": metrics.strength_of_schedule,
        "weighted_sos": metrics.weighted_strength_of_schedule,
    }


def compute_components(
    metrics: ScheduleMetrics,
    config: EngineConfig | None = None,
) -> dict[str, float]:
    """
    Calculate each configured component's contribution.

    Args:
        metrics: Schedule metrics for one team
        config: Optional config for custom weights

    Returns:
        Ordered dict of component name to contribution; components without
        a configured weight are omitted
    """
    if config is None:
        config = EngineConfig()

    values = component_values(metrics)
    weights = config.rating_component_weights

    return {
        name: config.rating_scale * weights[name] * values[name]
        for name in RATING_COMPONENTS
        if name in weights
    }


def compose_rating(
    metrics: ScheduleMetrics,
    config: EngineConfig | None = None,
) -> RatingDetails:
    """
    Combine one team's metrics into a scalar rating plus breakdown.

    Args:
        metrics: Schedule metrics for one team
        config: Optional config for custom weights

    Returns:
        RatingDetails
    """
    components = compute_components(metrics, config)

    return RatingDetails(
        wins=metrics.wins,
        losses=metrics.losses,
        strength_of_schedule=metrics.strength_of_schedule,
        weighted_strength_of_schedule=metrics.weighted_strength_of_schedule,
        rating=math.fsum(components.values()),
        rating_components=components,
    )


def compose_ratings(
    metrics_by_team: Mapping[str, ScheduleMetrics],
    config: EngineConfig | None = None,
) -> dict[str, RatingDetails]:
    """
    Compose ratings for every team.

    Returns:
        Dict mapping team name to RatingDetails, keys in sorted order
    """
    return {
        team_name: compose_rating(metrics_by_team[team_name], config)
        for team_name in sorted(metrics_by_team)
    }
