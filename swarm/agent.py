"""Individual flocking agent with steering behaviors and smoothed integration."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

from config import swarm as config
from .params import SwarmParams
from .snapshot import Neighborhood
from .vectors import (
    IDENTITY_QUATERNION,
    clamp_length,
    lerp,
    look_rotation,
    normalize,
    slerp,
    vec3,
)

# Squared magnitudes below this are treated as no motion / no force
STILL_EPS_SQ = 1e-5


def attraction_strength(distance: float, radius: float) -> float:
    """
    Pull strength toward an attraction point at ``distance``.

    Closer points pull harder: ``1 - distance / radius`` clamped to
    ``[min_strength, max_strength]``. Only meaningful for distance < radius.
    """
    lo = config.ATTRACTION["min_strength"]
    hi = config.ATTRACTION["max_strength"]
    return max(lo, min(hi, 1.0 - distance / radius))


@dataclass(eq=False)
class Agent:
    """
    A single boid in the swarm.

    Attributes:
        position: 3D position vector
        velocity: 3D velocity vector, magnitude bounded by max_speed
        acceleration: Net steering force for the current frame (reset each frame)
        previous_velocity: Last frame's smoothed velocity
        base_color: RGB tint (0-1 range) shown when not attracted
        max_speed: Maximum velocity magnitude
        max_force: Maximum magnitude of any single steering force
        smoothing_factor: Blend weight toward the previous velocity (0-1)
        rotation_smoothing: Blend weight keeping the previous facing (0-1)
        orientation: Facing quaternion [x, y, z, w], local +Z is forward
        attraction_strength: Pull strength from the last attraction pass, 0 if none
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))
    previous_velocity: Optional[np.ndarray] = None
    base_color: Tuple[float, float, float] = (0.1, 0.55, 1.0)
    max_speed: float = config.AGENT["max_speed"]
    max_force: float = config.AGENT["max_force"]
    smoothing_factor: float = config.AGENT["smoothing_factor"]
    rotation_smoothing: float = config.AGENT["rotation_smoothing"]
    orientation: np.ndarray = field(default_factory=lambda: IDENTITY_QUATERNION.copy())
    attraction_strength: float = 0.0

    def __post_init__(self):
        self.position = vec3(self.position)
        self.velocity = vec3(self.velocity)
        self.acceleration = vec3(self.acceleration)
        if self.previous_velocity is None:
            self.previous_velocity = self.velocity.copy()
        else:
            self.previous_velocity = vec3(self.previous_velocity)

    @classmethod
    def spawn(
        cls,
        rng: Optional[np.random.Generator] = None,
        position=None,
        base_color: Optional[Tuple[float, float, float]] = None,
    ) -> "Agent":
        """
        Create an agent with randomized initial state.

        Args:
            rng: Random generator (a fresh unseeded one if omitted)
            position: Starting position; random inside the agent spawn box if omitted
            base_color: RGB tint; the dataclass default if omitted
        """
        rng = rng if rng is not None else np.random.default_rng()

        if position is None:
            lows, highs = zip(*config.SPAWN["agent"])
            position = rng.uniform(lows, highs)

        direction = normalize(rng.uniform(-1.0, 1.0, 3))
        velocity = direction * config.AGENT["initial_speed"]

        kwargs = {}
        if base_color is not None:
            kwargs["base_color"] = tuple(base_color)
        return cls(position=position, velocity=velocity, **kwargs)

    def configure(
        self,
        max_speed: Optional[float] = None,
        max_force: Optional[float] = None,
        smoothing_factor: Optional[float] = None,
    ):
        """Apply per-agent settings; velocities are re-clamped to a lowered max_speed."""
        if max_speed is not None:
            self.max_speed = float(max_speed)
            self.velocity = clamp_length(self.velocity, self.max_speed)
            self.previous_velocity = clamp_length(self.previous_velocity, self.max_speed)
        if max_force is not None:
            self.max_force = float(max_force)
        if smoothing_factor is not None:
            self.smoothing_factor = float(smoothing_factor)

    # ------------------------------------------------------------------
    # Steering
    # ------------------------------------------------------------------

    def _steer(self, desired_direction: np.ndarray, speed: float) -> np.ndarray:
        """Reynolds rule: desired velocity minus current velocity, capped at max_force."""
        desired = normalize(desired_direction) * speed
        return clamp_length(desired - self.velocity, self.max_force)

    def seek(self, target) -> np.ndarray:
        """Calculate steering force toward a target."""
        return self._steer(vec3(target) - self.position, self.max_speed)

    def compute_separation(self, neighbors: Neighborhood, radius: float) -> np.ndarray:
        """Steer away from close neighbors, weighting nearer ones by 1/distance."""
        mask = neighbors.within(radius)
        count = int(mask.sum())
        if count == 0:
            return np.zeros(3)

        dists = neighbors.distances[mask]
        away = self.position - neighbors.positions[mask]
        # unit(away) / distance == away / distance^2
        steering = (away / (dists * dists)[:, None]).sum(axis=0) / count

        if not steering.any():
            return np.zeros(3)
        return self._steer(steering, self.max_speed)

    def compute_alignment(self, neighbors: Neighborhood, radius: float) -> np.ndarray:
        """Steer toward the average heading of neighbors."""
        mask = neighbors.within(radius)
        if not mask.any():
            return np.zeros(3)

        average = neighbors.velocities[mask].mean(axis=0)
        return self._steer(average, self.max_speed)

    def compute_cohesion(self, neighbors: Neighborhood, radius: float) -> np.ndarray:
        """Steer toward the average position of neighbors."""
        mask = neighbors.within(radius)
        if not mask.any():
            return np.zeros(3)

        center = neighbors.positions[mask].mean(axis=0)
        return self.seek(center)

    def compute_boundary(self, radius: float) -> np.ndarray:
        """Soft containment: outside the sphere, steer back toward the origin."""
        if np.linalg.norm(self.position) > radius:
            return self._steer(-self.position, self.max_speed)
        return np.zeros(3)

    def compute_attraction(self, points: Sequence[np.ndarray], radius: float) -> np.ndarray:
        """
        Steer toward the nearest attraction point when it is within ``radius``.

        Side effect: ``attraction_strength`` is set to the pull strength, or 0.0
        when no point is in range, so the renderer can highlight attracted agents.
        """
        closest = None
        closest_dist = np.inf
        for point in points:
            d = float(np.linalg.norm(point - self.position))
            if d < closest_dist:
                closest_dist = d
                closest = point

        if closest is None or closest_dist >= radius:
            self.attraction_strength = 0.0
            return np.zeros(3)

        strength = attraction_strength(closest_dist, radius)
        self.attraction_strength = strength
        return self._steer(closest - self.position, self.max_speed * strength)

    def accumulate(
        self,
        neighbors: Neighborhood,
        params: SwarmParams,
        attraction_points: Sequence[np.ndarray] = (),
    ):
        """Add this frame's weighted steering forces to the acceleration."""
        self.acceleration += self.compute_separation(neighbors, params.separation_distance) * params.separation_force
        self.acceleration += self.compute_alignment(neighbors, params.alignment_distance) * params.alignment_force
        self.acceleration += self.compute_cohesion(neighbors, params.cohesion_distance) * params.cohesion_force
        self.acceleration += self.compute_boundary(params.boundary_radius) * params.boundary_force

        if len(attraction_points) > 0:
            attraction = self.compute_attraction(attraction_points, params.attraction_distance)
            self.acceleration += attraction * params.attraction_force
        else:
            self.attraction_strength = 0.0

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------

    def integrate(self):
        """Advance one frame: apply acceleration, smooth, move, and turn to face travel."""
        velocity = clamp_length(self.velocity + self.acceleration, self.max_speed)

        # Low-pass filter toward last frame's velocity
        velocity = lerp(velocity, self.previous_velocity, self.smoothing_factor)
        self.velocity = velocity
        self.previous_velocity = velocity.copy()

        if float(np.dot(self.acceleration, self.acceleration)) < STILL_EPS_SQ:
            self.acceleration = np.zeros(3)

        self.position = self.position + self.velocity
        self.acceleration = np.zeros(3)

        if float(np.dot(self.velocity, self.velocity)) > STILL_EPS_SQ:
            target = look_rotation(self.velocity)
            self.orientation = slerp(self.orientation, target, 1.0 - self.rotation_smoothing)
