"""Boundary sphere and attraction point markers."""

import math
from typing import Sequence

import numpy as np
from OpenGL.GL import *

from config import swarm as config


def _circle(center, radius: float, axis_a: int, axis_b: int, segments: int):
    """Line loop of a circle in the plane spanned by two world axes."""
    glBegin(GL_LINE_LOOP)
    for k in range(segments):
        a = 2.0 * math.pi * k / segments
        p = [center[0], center[1], center[2]]
        p[axis_a] += math.cos(a) * radius
        p[axis_b] += math.sin(a) * radius
        glVertex3f(*p)
    glEnd()


class BoundarySphere:
    """Wireframe of the soft containment sphere, resized with boundary_radius."""

    def __init__(self):
        self.color = config.RENDER["boundary_color"]
        self.segments = config.RENDER["boundary_segments"]

    def draw(self, radius: float):
        glColor3f(*self.color)
        origin = (0.0, 0.0, 0.0)

        # Meridians
        _circle(origin, radius, 0, 1, self.segments)
        _circle(origin, radius, 2, 1, self.segments)

        # Parallels
        for lat in (-60.0, -30.0, 0.0, 30.0, 60.0):
            phi = math.radians(lat)
            ring = (0.0, radius * math.sin(phi), 0.0)
            _circle(ring, radius * math.cos(phi), 0, 2, self.segments)


class AttractionMarkers:
    """Small three-ring gizmos drawn at every active attraction point."""

    def __init__(self):
        self.radius = config.RENDER["marker_radius"]
        self.color = config.RENDER["marker_color"]

    def draw(self, points: Sequence[np.ndarray]):
        if not points:
            return
        glColor3f(*self.color)
        for p in points:
            _circle(p, self.radius, 0, 1, 12)
            _circle(p, self.radius, 0, 2, 12)
            _circle(p, self.radius, 1, 2, 12)
