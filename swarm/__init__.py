"""Flocking simulation core: agents, the swarm coordinator, and parameters."""

from .agent import Agent, attraction_strength
from .params import SwarmParams
from .snapshot import FlockSnapshot, Neighborhood
from .swarm import Swarm
from .logging_config import setup_logging

__all__ = [
    "Agent",
    "FlockSnapshot",
    "Neighborhood",
    "Swarm",
    "SwarmParams",
    "attraction_strength",
    "setup_logging",
]
