"""
Flocking Presets Library
========================

Named flock tunings for the viewer and the headless recorder.
Each preset sets flock parameters, per-agent kinematics, and a population size.

Categories:
- CLASSIC: The stock tuning and close variations
- CALM: Slow, heavily smoothed schools
- DENSE: Tight, cohesive swarms
- WILD: Fast, loosely bound flocks
- INTERACTIVE: Tunings that favor pinch attraction
"""

from typing import Dict, List, Optional, Tuple

from config import swarm as config
from swarm.params import SwarmParams

AGENT_FIELDS = ("max_speed", "max_force", "smoothing_factor")

CATEGORY_ORDER = ["CLASSIC", "CALM", "DENSE", "WILD", "INTERACTIVE"]


def _defaults() -> dict:
    values = dict(config.FLOCK)
    values.update({k: config.AGENT[k] for k in AGENT_FIELDS})
    values["count"] = config.AGENT["count"]
    return values


# =============================================================================
# PRESET DEFINITIONS
# =============================================================================

PRESETS: Dict[str, dict] = {}

PRESETS["default"] = {
    "name": "Default",
    "description": "Stock tuning: loose flock drifting inside the boundary",
    "category": "CLASSIC",
    **_defaults(),
}

PRESETS["small_flock"] = {
    "name": "Small Flock",
    "description": "Stock tuning with a handful of agents, easy to follow",
    "category": "CLASSIC",
    **_defaults(),
    "count": 30,
}

PRESETS["calm_school"] = {
    "name": "Calm School",
    "description": "Slow, strongly aligned fish-like school",
    "category": "CALM",
    **_defaults(),
    "separation_force": 0.8,
    "alignment_distance": 2.0,
    "alignment_force": 1.2,
    "cohesion_force": 0.8,
    "max_speed": 0.03,
    "smoothing_factor": 0.9,
    "count": 120,
}

PRESETS["sluggish"] = {
    "name": "Sluggish",
    "description": "Heavily damped agents that barely change course",
    "category": "CALM",
    **_defaults(),
    "max_speed": 0.02,
    "max_force": 0.002,
    "smoothing_factor": 0.95,
    "count": 80,
}

PRESETS["tight_swarm"] = {
    "name": "Tight Swarm",
    "description": "Dense ball of agents in a small boundary",
    "category": "DENSE",
    **_defaults(),
    "separation_distance": 0.4,
    "cohesion_distance": 3.0,
    "cohesion_force": 1.5,
    "alignment_force": 0.8,
    "boundary_radius": 3.5,
    "boundary_force": 0.4,
    "count": 150,
}

PRESETS["murmuration"] = {
    "name": "Murmuration",
    "description": "Wide, fast-turning sheets of agents",
    "category": "WILD",
    **_defaults(),
    "alignment_distance": 2.5,
    "alignment_force": 1.5,
    "cohesion_distance": 3.5,
    "cohesion_force": 0.6,
    "boundary_radius": 8.0,
    "boundary_force": 0.1,
    "max_speed": 0.06,
    "max_force": 0.008,
    "count": 200,
}

PRESETS["scatter"] = {
    "name": "Scatter",
    "description": "Agents keep their distance and roam alone",
    "category": "WILD",
    **_defaults(),
    "separation_distance": 1.5,
    "separation_force": 2.5,
    "alignment_force": 0.2,
    "cohesion_force": 0.1,
    "max_speed": 0.08,
    "max_force": 0.01,
    "smoothing_factor": 0.6,
    "count": 100,
}

PRESETS["eager"] = {
    "name": "Eager",
    "description": "Long-range, strong pull toward pinch points",
    "category": "INTERACTIVE",
    **_defaults(),
    "attraction_distance": 5.0,
    "attraction_force": 3.0,
    "count": 80,
}

PRESETS["shy"] = {
    "name": "Shy",
    "description": "Only agents right next to a pinch notice it",
    "category": "INTERACTIVE",
    **_defaults(),
    "attraction_distance": 1.0,
    "attraction_force": 0.5,
    "count": 120,
}


# =============================================================================
# LOOKUP
# =============================================================================

def get_preset_list() -> List[Tuple[str, dict]]:
    """Get list of all presets sorted by category."""
    return sorted(
        PRESETS.items(),
        key=lambda x: (CATEGORY_ORDER.index(x[1]["category"]) if x[1]["category"] in CATEGORY_ORDER else 99, x[0])
    )


def list_presets() -> List[str]:
    return [key for key, _ in get_preset_list()]


def get_preset_by_index(index: int) -> Tuple[Optional[str], Optional[dict]]:
    """Get preset by menu index."""
    presets = get_preset_list()
    if 0 <= index < len(presets):
        return presets[index]
    return None, None


def get_preset_config(key: str) -> Optional[dict]:
    """Get a copy of a preset by key, or None if unknown."""
    if key not in PRESETS:
        return None
    return PRESETS[key].copy()


def split_preset(preset: dict) -> Tuple[Dict[str, float], Dict[str, float], int]:
    """Separate a preset into (flock params, agent params, agent count)."""
    flock = {k: preset[k] for k in SwarmParams.field_names() if k in preset}
    agent = {k: preset[k] for k in AGENT_FIELDS if k in preset}
    return flock, agent, int(preset.get("count", config.AGENT["count"]))


def out_of_range(preset: dict) -> List[str]:
    """Names of tunable values that fall outside PARAM_RANGES."""
    problems = []
    for key, (lo, hi, _step) in config.PARAM_RANGES.items():
        source = "count" if key == "agent_count" else key
        if source in preset and not lo <= preset[source] <= hi:
            problems.append(f"{source}={preset[source]} not in [{lo}, {hi}]")
    return problems


# =============================================================================
# APPLY
# =============================================================================

def apply_preset(swarm, key: str, reset_population: bool = True) -> dict:
    """
    Apply a preset to a swarm.

    Args:
        swarm: Target Swarm
        key: Preset key
        reset_population: Re-seed the flock with the preset's agent count

    Returns:
        The applied preset

    Raises:
        ValueError: if the preset does not exist
    """
    preset = get_preset_config(key)
    if preset is None:
        raise ValueError(f"Unknown preset '{key}'. Available: {', '.join(list_presets())}")

    flock, agent, count = split_preset(preset)
    swarm.set_parameters(flock)
    swarm.set_agent_parameters(**agent)
    if reset_population:
        swarm.reset(count)
    return preset


def reset_defaults(swarm, reset_population: bool = False) -> dict:
    """Restore the stock parameters (the panel's reset button)."""
    return apply_preset(swarm, "default", reset_population=reset_population)


def print_preset_menu():
    """Print formatted preset selection menu."""
    current_category = None

    print("\n" + "=" * 70)
    print("  FLOCKING PRESETS")
    print("=" * 70)

    for idx, (key, preset) in enumerate(get_preset_list()):
        if preset["category"] != current_category:
            current_category = preset["category"]
            print(f"\n{'─' * 70}")
            print(f"  {current_category}")
            print(f"{'─' * 70}")

        print(f"  [{idx:2d}] {preset['name']:<20} {preset['count']:>4} agents | key: {key}")
        print(f"       {preset['description']}")

    print(f"\n{'=' * 70}")
