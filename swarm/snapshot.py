"""Read-only views of the flock used during the force phase of a frame."""

from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

import numpy as np

from .kernels import pairwise_distances, distances_to

if TYPE_CHECKING:
    from .agent import Agent


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class Neighborhood:
    """
    Kinematic state of every *other* agent as seen by one agent.

    Attributes:
        positions: (K, 3) neighbor positions
        velocities: (K, 3) neighbor velocities
        distances: (K,) distance from the observing agent to each neighbor
    """
    positions: np.ndarray
    velocities: np.ndarray
    distances: np.ndarray

    def __len__(self) -> int:
        return len(self.distances)

    def within(self, radius: float) -> np.ndarray:
        """Boolean mask of neighbors at distance in the open interval (0, radius)."""
        return (self.distances > 0) & (self.distances < radius)

    @classmethod
    def empty(cls) -> "Neighborhood":
        return cls(
            positions=_frozen(np.zeros((0, 3))),
            velocities=_frozen(np.zeros((0, 3))),
            distances=_frozen(np.zeros(0)),
        )

    @classmethod
    def around(cls, agent: "Agent", others: Sequence["Agent"]) -> "Neighborhood":
        """Build the neighborhood of ``agent`` from a plain list of agents."""
        others = [o for o in others if o is not agent]
        if not others:
            return cls.empty()

        positions = np.array([o.position for o in others], dtype=np.float64)
        velocities = np.array([o.velocity for o in others], dtype=np.float64)
        distances = distances_to(positions, np.ascontiguousarray(agent.position, dtype=np.float64))
        return cls(_frozen(positions), _frozen(velocities), _frozen(distances))


class FlockSnapshot:
    """
    Immutable copy of every agent's position and velocity at frame start.

    All force computations in a frame read from the same snapshot, so the
    result does not depend on the order agents are visited in.
    """

    def __init__(self, positions: np.ndarray, velocities: np.ndarray):
        positions = np.array(positions, dtype=np.float64, order="C")
        self.distances = _frozen(pairwise_distances(positions))
        self.positions = _frozen(positions)
        self.velocities = _frozen(np.array(velocities, dtype=np.float64, order="C"))

    @classmethod
    def capture(cls, agents: Sequence["Agent"]) -> "FlockSnapshot":
        if not agents:
            return cls(np.zeros((0, 3)), np.zeros((0, 3)))
        positions = np.array([a.position for a in agents], dtype=np.float64)
        velocities = np.array([a.velocity for a in agents], dtype=np.float64)
        return cls(positions, velocities)

    def __len__(self) -> int:
        return self.positions.shape[0]

    def neighborhood(self, index: int) -> Neighborhood:
        """Neighborhood of agent ``index``: all other agents with their distances."""
        others = np.arange(len(self)) != index
        return Neighborhood(
            positions=_frozen(self.positions[others]),
            velocities=_frozen(self.velocities[others]),
            distances=_frozen(self.distances[index, others]),
        )
