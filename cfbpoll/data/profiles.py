"""Predefined configuration profiles for the ranking engine.

Each profile represents a different philosophy or use case:
- standard: Default weights, three propagation levels, five-week stabilization
- results_first: Record-heavy, schedule is a secondary signal
- schedule_first: Schedule-heavy, deeper propagation
- no_stabilization: Never blends with the prior season
"""

from cfbpoll.data.models import EngineConfig


# Standard - the defaults
STANDARD = EngineConfig()


# Results first - winning matters most, schedule breaks near-ties
RESULTS_FIRST = EngineConfig(
    rating_component_weights={
        "win_pct": 0.65,
        "win_quality": 0.20,
        "strength_of_schedule": 0.05,
        "weighted_sos": 0.10,
    },
    propagation_levels=2,
    tie_break_order=["wins", "losses", "weighted_sos"],
)


# Schedule first - who you played matters as much as the record
SCHEDULE_FIRST = EngineConfig(
    rating_component_weights={
        "win_pct": 0.40,
        "win_quality": 0.25,
        "strength_of_schedule": 0.10,
        "weighted_sos": 0.25,
    },
    propagation_levels=4,
    blend_weight_per_level=0.6,
    # Prior fades more slowly through the opening month
    early_season_week_threshold=6,
    early_season_prior_weights={0: 1.0, 1: 0.8, 2: 0.6, 3: 0.45, 4: 0.3, 5: 0.15},
)


# No stabilization - current-season data only, even in week 1
NO_STABILIZATION = EngineConfig(
    early_season_week_threshold=0,
)


# Dictionary of all profiles
PROFILES: dict[str, EngineConfig] = {
    "standard": STANDARD,
    "results_first": RESULTS_FIRST,
    "schedule_first": SCHEDULE_FIRST,
    "no_stabilization": NO_STABILIZATION,
}


def get_profile(name: str) -> EngineConfig:
    """
    Get a configuration profile by name.

    Args:
        name: Profile name (standard, results_first, schedule_first, no_stabilization)

    Returns:
        A fresh EngineConfig; mutating it never changes the stored profile

    Raises:
        ValueError: If profile name not found
    """
    if name not in PROFILES:
        available = ", ".join(PROFILES.keys())
        raise ValueError(f"Unknown profile '{name}'. Available: {available}")
    return PROFILES[name].model_copy(deep=True)


def list_profiles() -> list[str]:
    """
    List all available profile names.

    Returns:
        List of profile names
    """
    return list(PROFILES.keys())


def get_profile_description(name: str) -> str:
    """
    Get a human-readable description of a profile.

    Args:
        name: Profile name

    Returns:
        Description string
    """
    descriptions = {
        "standard": (
            "Default component weights, three levels of SOS propagation, "
            "prior-season blending through week 4."
        ),
        "results_first": (
            "Record-heavy weights. Schedule strength mostly breaks near-ties."
        ),
        "schedule_first": (
            "Schedule-heavy weights with deeper propagation. "
            "Prior season fades more slowly early on."
        ),
        "no_stabilization": (
            "Standard weights without prior-season blending. "
            "Early weeks reflect current results only."
        ),
    }
    if name not in descriptions:
        return "No description available."
    return descriptions[name]
