"""Attraction highlight colors, kept apart from the simulation."""

import numpy as np

from config import swarm as config


def attraction_tint(base_colors: np.ndarray, strengths: np.ndarray) -> np.ndarray:
    """
    Blend each agent's base color toward the highlight by ``strength * tint_scale``.

    Agents with zero strength keep their base color exactly.
    """
    base = np.asarray(base_colors, dtype=np.float64).reshape(-1, 3)
    s = np.asarray(strengths, dtype=np.float64).reshape(-1, 1)
    highlight = np.array(config.ATTRACTION["highlight_color"], dtype=np.float64)
    t = s * config.ATTRACTION["tint_scale"]
    return base + (highlight - base) * t


def attraction_glow(strengths: np.ndarray) -> np.ndarray:
    """Emissive contribution of attracted agents (black when not attracted)."""
    s = np.asarray(strengths, dtype=np.float64).reshape(-1, 1)
    return s * np.array(config.ATTRACTION["emissive_color"], dtype=np.float64)


def shaded_colors(base_colors: np.ndarray, strengths: np.ndarray) -> np.ndarray:
    """Final per-agent RGB: tint plus glow, clipped to [0, 1]."""
    return np.clip(attraction_tint(base_colors, strengths) + attraction_glow(strengths), 0.0, 1.0)
