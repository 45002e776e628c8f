"""Tests for the attraction highlight colors."""

import numpy as np

from config import swarm as config
from rendering.colors import attraction_glow, attraction_tint, shaded_colors

HIGHLIGHT = np.array(config.ATTRACTION["highlight_color"])


class TestAttractionTint:

    def test_unattracted_keeps_base_color(self):
        base = np.array([[0.1, 0.2, 0.9], [0.5, 0.5, 0.5]])
        np.testing.assert_array_equal(attraction_tint(base, np.zeros(2)), base)
        np.testing.assert_array_equal(shaded_colors(base, np.zeros(2)), base)

    def test_full_strength_blends_seventy_percent(self):
        base = np.array([[0.0, 0.0, 0.0]])
        tint = attraction_tint(base, np.array([1.0]))
        np.testing.assert_allclose(tint[0], HIGHLIGHT * 0.7)

    def test_tint_grows_with_strength(self):
        base = np.tile([0.1, 0.2, 0.9], (3, 1))
        tint = attraction_tint(base, np.array([0.1, 0.5, 1.0]))
        dist = np.linalg.norm(tint - HIGHLIGHT, axis=1)
        assert dist[0] > dist[1] > dist[2]

    def test_glow(self):
        glow = attraction_glow(np.array([0.0, 1.0]))
        np.testing.assert_array_equal(glow[0], [0.0, 0.0, 0.0])
        np.testing.assert_allclose(glow[1], config.ATTRACTION["emissive_color"])

    def test_shaded_colors_are_clipped(self):
        out = shaded_colors(np.array([[1.0, 1.0, 1.0]]), np.array([1.0]))
        assert (out <= 1.0).all()
