"""Agent rendering: oriented cones drawn from VBOs."""

import math
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import swarm as config


@njit(parallel=True, fastmath=True, cache=True)
def build_cone_vertices(
    positions: np.ndarray,
    orientations: np.ndarray,
    colors: np.ndarray,
    vertices: np.ndarray,
    vert_colors: np.ndarray,
    cone_length: float,
    cone_radius: float,
    segments: int,
    num_agents: int
):
    """Write one cone per agent (tip along local +Z) rotated by its quaternion."""
    half = cone_length * 0.5
    verts_per_agent = segments * 3

    for i in prange(num_agents):
        qx = orientations[i, 0]
        qy = orientations[i, 1]
        qz = orientations[i, 2]
        qw = orientations[i, 3]
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
        base = i * verts_per_agent

        for k in range(segments):
            for corner in range(3):
                if corner == 0:
                    lx, ly, lz = 0.0, 0.0, half
                else:
                    a = 2.0 * math.pi * (k + corner - 1) / segments
                    lx = math.cos(a) * cone_radius
                    ly = math.sin(a) * cone_radius
                    lz = -half

                # v' = v + w*t + u x t, with t = 2 * (u x v)
                tx = 2.0 * (qy * lz - qz * ly)
                ty = 2.0 * (qz * lx - qx * lz)
                tz = 2.0 * (qx * ly - qy * lx)
                rx = lx + qw * tx + (qy * tz - qz * ty)
                ry = ly + qw * ty + (qz * tx - qx * tz)
                rz = lz + qw * tz + (qx * ty - qy * tx)

                v = base + k * 3 + corner
                vertices[v, 0] = px + rx
                vertices[v, 1] = py + ry
                vertices[v, 2] = pz + rz
                vert_colors[v, 0] = colors[i, 0]
                vert_colors[v, 1] = colors[i, 1]
                vert_colors[v, 2] = colors[i, 2]


class AgentRenderer:
    """Draws every agent as a small cone pointing along its facing."""

    def __init__(self):
        self.cone_length = float(config.RENDER["cone_length"])
        self.cone_radius = float(config.RENDER["cone_radius"])
        self.segments = int(config.RENDER["cone_segments"])
        self.verts_per_agent = self.segments * 3

        self._capacity = 0
        self._vertices = np.zeros((0, 3), dtype=np.float32)
        self._vert_colors = np.zeros((0, 3), dtype=np.float32)
        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _ensure_capacity(self, num_agents: int):
        if num_agents <= self._capacity:
            return
        self._capacity = num_agents
        self._vertices = np.zeros((num_agents * self.verts_per_agent, 3), dtype=np.float32)
        self._vert_colors = np.zeros((num_agents * self.verts_per_agent, 3), dtype=np.float32)
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Render] VBO init failed, using client arrays: {e}")
            self._vbo_vertices = None
            self._vbo_colors = None
            self._vbos_initialized = False

    def draw(self, positions: np.ndarray, orientations: np.ndarray, colors: np.ndarray):
        """Render agents given (N, 3) positions, (N, 4) quaternions and (N, 3) colors."""
        num_agents = len(positions)
        if num_agents == 0:
            return

        self._ensure_capacity(num_agents)
        if not self._vbos_initialized:
            self._init_vbos()

        build_cone_vertices(
            np.ascontiguousarray(positions, dtype=np.float64),
            np.ascontiguousarray(orientations, dtype=np.float64),
            np.ascontiguousarray(colors, dtype=np.float64),
            self._vertices,
            self._vert_colors,
            self.cone_length,
            self.cone_radius,
            self.segments,
            num_agents
        )
        total_verts = num_agents * self.verts_per_agent

        if self._vbos_initialized and self._vbo_vertices is not None:
            self._vbo_vertices.set_array(self._vertices[:total_verts])
            self._vbo_colors.set_array(self._vert_colors[:total_verts])

            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(3, GL_FLOAT, 0, None)

            self._vbo_colors.bind()
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
        else:
            glEnableClientState(GL_VERTEX_ARRAY)
            glEnableClientState(GL_COLOR_ARRAY)

            glVertexPointer(3, GL_FLOAT, 0, self._vertices[:total_verts])
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors[:total_verts])
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
