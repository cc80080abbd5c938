"""Tiebreaker logic for ordering teams with equal published values.

Teams are compared on their primary value (rating, or weighted SOS for the
SOS ranking) rounded to the published precision. Teams that are still
equal go through the configured tie-break chain, for example:
1. Weighted SOS (higher first)
2. Wins (more first)
3. Losses (fewer first)

The chain always ends with the team name, so the order is total: no two
teams can ever share a position.
"""

from collections.abc import Callable, Mapping

from cfbpoll.data.models import EngineConfig, RatingDetails

# key name -> value where smaller sorts first
TIEBREAKERS: dict[str, Callable[[RatingDetails], float]] = {
    "weighted_sos": lambda d: -d.weighted_strength_of_schedule,
    "strength_of_schedule": lambda d: -d.strength_of_schedule,
    "win_pct": lambda d: -d.win_pct,
    "wins": lambda d: -d.wins,
    "losses": lambda d: d.losses,
}


def name_key(team_name: str) -> tuple[str, str]:
    """Final, total tiebreaker: case-folded name, then exact name."""
    return (team_name.casefold(), team_name)


def _chain(details: RatingDetails, keys: list[str], digits: int) -> tuple[float, ...]:
    values = []
    for key in keys:
        value = TIEBREAKERS[key](details)
        if isinstance(value, float):
            value = round(value, digits)
        values.append(value)
    return tuple(values)


def rating_sort_key(
    team_name: str,
    details: RatingDetails,
    tie_break_order: list[str],
    digits: int = 4,
) -> tuple:
    """
    Sort key for the main ranking (ascending sort = best first).

    Args:
        team_name: Team name
        details: Team's rating details
        tie_break_order: Secondary keys in priority order
        digits: Published precision of ratings

    Returns:
        (-rounded rating, *tie-break values, *name key)
    """
    return (
        -round(details.rating, digits),
        *_chain(details, tie_break_order, digits),
        *name_key(team_name),
    )


def sos_sort_key(
    team_name: str,
    details: RatingDetails,
    tie_break_order: list[str],
    digits: int = 4,
) -> tuple:
    """
    Sort key for the SOS ranking (ascending sort = hardest schedule first).

    ``weighted_sos`` is the primary value here, so it is dropped from the
    secondary chain; direct SOS is always consulted next.
    """
    keys = [k for k in tie_break_order if k not in ("weighted_sos", "strength_of_schedule")]
    return (
        -round(details.weighted_strength_of_schedule, digits),
        -round(details.strength_of_schedule, digits),
        *_chain(details, keys, digits),
        *name_key(team_name),
    )


def order_by_rating(
    ratings: Mapping[str, RatingDetails],
    config: EngineConfig,
) -> list[str]:
    """
    Order teams for the main ranking.

    Args:
        ratings: Dict mapping team name to RatingDetails
        config: Engine configuration (tie-break order, precision)

    Returns:
        Team names, best first
    """
    return sorted(
        ratings,
        key=lambda name: rating_sort_key(
            name, ratings[name], config.tie_break_order, config.rounding_digits
        ),
    )


def order_by_sos(
    ratings: Mapping[str, RatingDetails],
    config: EngineConfig,
) -> list[str]:
    """
    Order teams by weighted strength of schedule.

    Returns:
        Team names, hardest schedule first
    """
    return sorted(
        ratings,
        key=lambda name: sos_sort_key(
            name, ratings[name], config.tie_break_order, config.rounding_digits
        ),
    )
