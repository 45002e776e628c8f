"""Flock-level steering parameters."""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from config import swarm as config


@dataclass
class SwarmParams:
    """
    Named numeric parameters shared by every agent in a swarm.

    Distances are neighbor radii, forces are weights applied to the matching
    steering contribution. Values are not validated: negative radii simply
    select no neighbors, and keeping them sensible is the caller's job.
    """
    separation_distance: float = config.FLOCK["separation_distance"]
    alignment_distance: float = config.FLOCK["alignment_distance"]
    cohesion_distance: float = config.FLOCK["cohesion_distance"]
    separation_force: float = config.FLOCK["separation_force"]
    alignment_force: float = config.FLOCK["alignment_force"]
    cohesion_force: float = config.FLOCK["cohesion_force"]
    boundary_radius: float = config.FLOCK["boundary_radius"]
    boundary_force: float = config.FLOCK["boundary_force"]
    attraction_distance: float = config.FLOCK["attraction_distance"]
    attraction_force: float = config.FLOCK["attraction_force"]

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def merge(self, partial: Optional[Mapping[str, Any]] = None, **overrides: Any) -> None:
        """
        Overwrite only the supplied fields.

        Raises:
            ValueError: if a key is not a parameter name
        """
        updates = dict(partial or {})
        updates.update(overrides)

        unknown = sorted(set(updates) - set(self.field_names()))
        if unknown:
            raise ValueError(f"Unknown swarm parameter(s): {', '.join(unknown)}")

        for name, value in updates.items():
            setattr(self, name, float(value))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
