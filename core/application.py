"""Main application class that ties the flock, input, and rendering together."""

import logging

import numpy as np
import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import swarm as config
from swarm import Swarm
from tools.presets import apply_preset, get_preset_by_index
from rendering.agents import AgentRenderer
from rendering.colors import shaded_colors
from rendering.grid import Grid
from rendering.scene import AttractionMarkers, BoundarySphere
from rendering.text import TextRenderer
from .camera import Camera
from .input_handler import InputHandler
from .pinch import PinchTracker

logger = logging.getLogger("swarm.viewer")


class Application:
    """Main application managing the frame loop and rendering."""

    def __init__(self, count: int = config.AGENT["count"], preset: str = None, seed: int = None):
        pygame.init()
        self.screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        pygame.display.set_mode(self.screen_size, DOUBLEBUF | OPENGL)
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        self.swarm = Swarm(seed=seed)
        if preset:
            preset_values = apply_preset(self.swarm, preset, reset_population=False)
            count = preset_values["count"]
        self.swarm.add_agents(count)
        self.preset_name = preset or "default"

        # Core components
        self.camera = Camera()
        self.pinch = PinchTracker(self.swarm, self.camera, self.screen_size)
        self.input_handler = InputHandler(self.camera, self.pinch, self)

        # Rendering components
        self.grid = Grid()
        self.agent_renderer = AgentRenderer()
        self.boundary = BoundarySphere()
        self.markers = AttractionMarkers()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False
        self.fps = 0

        self._setup_gl()

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    # ------------------------------------------------------------------
    # Flock controls (called from the input handler)
    # ------------------------------------------------------------------

    def reset_flock(self):
        self.pinch.end()
        self.swarm.clear_attraction_points()
        self.swarm.reset()

    def change_population(self, delta: int):
        lo, hi, _step = config.PARAM_RANGES["agent_count"]
        count = max(lo, min(hi, len(self.swarm) + delta))
        if count != len(self.swarm):
            self.swarm.reset(count)

    def apply_preset_index(self, index: int):
        key, _preset = get_preset_by_index(index)
        if key is None:
            return
        apply_preset(self.swarm, key)
        self.preset_name = key
        logger.info("Preset '%s' applied", key)

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        """Update state; the flock advances one step per rendered frame."""
        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)
        if not self.paused:
            self.swarm.update()

    def _agent_colors(self) -> np.ndarray:
        colors = shaded_colors(self.swarm.base_colors(), self.swarm.attraction_strengths())
        flashed = self.pinch.flashed_agents
        if flashed:
            for i, agent in enumerate(self.swarm.agents):
                if any(agent is f for f in flashed):
                    colors[i] = config.ATTRACTION["nearest_flash_color"]
        return colors

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        self.grid.draw()
        self.boundary.draw(self.swarm.params.boundary_radius)
        self.markers.draw(self.swarm.attraction_points)
        self.agent_renderer.draw(
            self.swarm.positions(),
            self.swarm.orientations(),
            self._agent_colors()
        )

        attracted = int(np.count_nonzero(self.swarm.attraction_strengths()))
        self.text_renderer.draw_lines([
            f"Agents: {len(self.swarm)}  |  Attracted: {attracted}  |  FPS: {self.fps:.0f}",
            f"Preset: {self.preset_name}  |  {'PAUSED' if self.paused else 'running'}",
            "RMB/MMB: pinch  LMB: orbit  R: reset  [ ]: count  1-9: presets  Space: pause",
        ], 10, 10, self.screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = self.clock.tick(60) / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
