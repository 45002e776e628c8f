"""Pytest configuration - shared fixtures for the flock tests."""
from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from swarm import Agent, Swarm, SwarmParams

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def project_root():
    """Return path to project root."""
    return ROOT


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def params():
    """Default flock parameters."""
    return SwarmParams()


@pytest.fixture
def empty_swarm():
    """Seeded swarm with no agents."""
    return Swarm(seed=42)


@pytest.fixture
def swarm_with(empty_swarm):
    """Factory: place hand-built agents into an otherwise empty swarm."""
    def _build(*agents: Agent) -> Swarm:
        empty_swarm.agents.extend(agents)
        return empty_swarm
    return _build
