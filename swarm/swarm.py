"""Swarm coordinator: owns the agents, parameters, and attraction points."""

import colorsys
import itertools
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from config import swarm as config
from .agent import Agent
from .kernels import nearest_index, warmup
from .params import SwarmParams
from .snapshot import FlockSnapshot
from .vectors import vec3

logger = logging.getLogger(__name__)


class Swarm:
    """
    A flock of agents updated in lock-step once per rendered frame.

    Each ``update()`` runs two strict phases: every agent accumulates its
    steering forces against one snapshot of the whole flock, then every agent
    integrates. Not thread-safe: callers serialize ``update``,
    ``set_parameters`` and the attraction-point methods.
    """

    def __init__(
        self,
        count: int = 0,
        params: Optional[SwarmParams] = None,
        seed: Optional[int] = None,
    ):
        self.agents: List[Agent] = []
        self.params = params if params is not None else SwarmParams()
        self.rng = np.random.default_rng(seed)

        # Per-agent kinematics applied to every agent, including future spawns
        self.agent_settings: Dict[str, float] = {
            "max_speed": config.AGENT["max_speed"],
            "max_force": config.AGENT["max_force"],
            "smoothing_factor": config.AGENT["smoothing_factor"],
        }

        self._attraction_points: Dict[int, np.ndarray] = {}
        self._handles = itertools.count(1)
        self.frame = 0

        warmup()

        if count:
            self.add_agents(count)

    def __len__(self) -> int:
        return len(self.agents)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def _random_color(self) -> Tuple[float, float, float]:
        hue = float(self.rng.random())
        # colorsys orders the arguments hue, lightness, saturation
        return colorsys.hls_to_rgb(hue, config.SPAWN["lightness"], config.SPAWN["saturation"])

    def add_agents(self, count: int) -> List[Agent]:
        """Append ``count`` agents with random state inside the flock spawn volume."""
        if count < 0:
            raise ValueError(f"Agent count must be non-negative, got {count}")

        lows, highs = zip(*config.SPAWN["flock"])
        added = []
        for _ in range(count):
            agent = Agent.spawn(
                rng=self.rng,
                position=self.rng.uniform(lows, highs),
                base_color=self._random_color(),
            )
            agent.configure(**self.agent_settings)
            added.append(agent)

        self.agents.extend(added)
        logger.debug("Added %d agents (population %d)", count, len(self.agents))
        return added

    def remove_all(self):
        """Remove every agent."""
        removed = len(self.agents)
        self.agents = []
        logger.debug("Removed %d agents", removed)

    def reset(self, count: Optional[int] = None) -> List[Agent]:
        """Replace the population with ``count`` fresh agents (default: same size)."""
        count = len(self.agents) if count is None else count
        self.remove_all()
        added = self.add_agents(count)
        logger.info("Flock reset with %d agents", count)
        return added

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def snapshot(self) -> FlockSnapshot:
        """Freeze the current positions and velocities for a force phase."""
        return FlockSnapshot.capture(self.agents)

    def update(self):
        """Advance the whole flock by one frame."""
        snapshot = self.snapshot()
        points = self.attraction_points

        # Force phase: every agent reads the same pre-integration state
        for i, agent in enumerate(self.agents):
            agent.accumulate(snapshot.neighborhood(i), self.params, points)

        # Integration phase
        for agent in self.agents:
            agent.integrate()

        self.frame += 1

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def set_parameters(self, partial: Optional[Mapping[str, Any]] = None, **overrides: Any):
        """Merge the supplied flock parameters, leaving the rest untouched."""
        self.params.merge(partial, **overrides)
        if partial or overrides:
            logger.debug("Parameters updated: %s", {**dict(partial or {}), **overrides})

    def set_agent_parameters(
        self,
        max_speed: Optional[float] = None,
        max_force: Optional[float] = None,
        smoothing_factor: Optional[float] = None,
    ):
        """Apply per-agent kinematics to every agent and to agents added later."""
        supplied = {
            "max_speed": max_speed,
            "max_force": max_force,
            "smoothing_factor": smoothing_factor,
        }
        supplied = {k: float(v) for k, v in supplied.items() if v is not None}
        if not supplied:
            return

        self.agent_settings.update(supplied)
        for agent in self.agents:
            agent.configure(**supplied)
        logger.debug("Agent parameters updated: %s", supplied)

    # ------------------------------------------------------------------
    # Attraction points
    # ------------------------------------------------------------------

    @property
    def attraction_points(self) -> List[np.ndarray]:
        """Copies of the active attraction points, in insertion order."""
        return [p.copy() for p in self._attraction_points.values()]

    def add_attraction_point(self, point) -> int:
        """
        Store a private copy of ``point`` and return its handle.

        Handles are never reused, so a stale handle can only miss.
        """
        handle = next(self._handles)
        self._attraction_points[handle] = vec3(point)
        logger.debug("Attraction point %d added at %s", handle, self._attraction_points[handle])
        return handle

    def remove_attraction_point(self, handle: int) -> bool:
        if self._attraction_points.pop(handle, None) is None:
            logger.debug("Attraction point %s not found for removal", handle)
            return False
        logger.debug("Attraction point %d removed", handle)
        return True

    def update_attraction_point(self, handle: int, position) -> bool:
        point = self._attraction_points.get(handle)
        if point is None:
            logger.debug("Attraction point %s not found for update", handle)
            return False
        point[:] = vec3(position)
        return True

    def clear_attraction_points(self):
        self._attraction_points.clear()
        logger.debug("Attraction points cleared")

    # ------------------------------------------------------------------
    # Queries for renderers
    # ------------------------------------------------------------------

    def nearest_agent(self, point, cutoff: float = config.ATTRACTION["nearest_cutoff"]) -> Optional[Agent]:
        """Closest agent to ``point`` if it is strictly within ``cutoff``, else None."""
        if not self.agents:
            return None

        index, distance = nearest_index(self.positions(), vec3(point))
        if index < 0 or distance >= cutoff:
            return None
        return self.agents[index]

    def positions(self) -> np.ndarray:
        return np.array([a.position for a in self.agents], dtype=np.float64).reshape(-1, 3)

    def velocities(self) -> np.ndarray:
        return np.array([a.velocity for a in self.agents], dtype=np.float64).reshape(-1, 3)

    def orientations(self) -> np.ndarray:
        return np.array([a.orientation for a in self.agents], dtype=np.float64).reshape(-1, 4)

    def attraction_strengths(self) -> np.ndarray:
        return np.array([a.attraction_strength for a in self.agents], dtype=np.float64)

    def base_colors(self) -> np.ndarray:
        return np.array([a.base_color for a in self.agents], dtype=np.float64).reshape(-1, 3)
