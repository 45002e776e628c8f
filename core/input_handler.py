"""Input handling: camera control, pinch emulation, and flock shortcuts."""

import pygame
from pygame.locals import *
from config import swarm as config

from .camera import Camera
from .pinch import PinchTracker


class InputHandler:
    """Handles keyboard and mouse input for the camera, pinch and flock controls."""

    def __init__(self, camera: Camera, pinch: PinchTracker, app):
        self.camera = camera
        self.pinch = pinch
        self.app = app
        self.mouse_dragging = False
        self.last_mouse_pos = (0, 0)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            self._handle_key(event)
        elif event.type == MOUSEBUTTONDOWN:
            if event.button == 1:
                self.mouse_dragging = True
                self.last_mouse_pos = pygame.mouse.get_pos()
            elif event.button in config.PINCH["buttons"]:
                self.pinch.start(config.PINCH["buttons"][event.button], event.pos)
        elif event.type == MOUSEBUTTONUP:
            if event.button == 1:
                self.mouse_dragging = False
            elif event.button in config.PINCH["buttons"]:
                self.pinch.end(config.PINCH["buttons"][event.button])
        elif event.type == MOUSEMOTION:
            if self.pinch.pinching:
                self.pinch.move(event.pos)
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.25)

        return True

    def _handle_key(self, event: pygame.event.Event):
        if event.key == K_SPACE:
            self.app.paused = not self.app.paused
        elif event.key == K_r:
            self.app.reset_flock()
        elif event.key == K_LEFTBRACKET:
            self.app.change_population(-config.PARAM_RANGES["agent_count"][2])
        elif event.key == K_RIGHTBRACKET:
            self.app.change_population(config.PARAM_RANGES["agent_count"][2])
        elif K_1 <= event.key <= K_9:
            self.app.apply_preset_index(event.key - K_1)

    def handle_continuous_input(self, dt: float):
        """Handle continuous keyboard input (called each frame)."""
        keys = pygame.key.get_pressed()
        rot_speed = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom_speed = config.CAMERA["keyboard_zoom_speed"] * dt

        if keys[K_a]:
            self.camera.rotate(-rot_speed, 0)
        if keys[K_d]:
            self.camera.rotate(rot_speed, 0)
        if keys[K_w]:
            self.camera.rotate(0, rot_speed)
        if keys[K_s]:
            self.camera.rotate(0, -rot_speed)

        if keys[K_q]:
            self.camera.zoom(-zoom_speed)
        if keys[K_e]:
            self.camera.zoom(zoom_speed)

        if self.mouse_dragging:
            current_pos = pygame.mouse.get_pos()
            dx = current_pos[0] - self.last_mouse_pos[0]
            dy = current_pos[1] - self.last_mouse_pos[1]
            self.camera.rotate(
                dx * config.CAMERA["mouse_sensitivity"],
                -dy * config.CAMERA["mouse_sensitivity"]
            )
            self.last_mouse_pos = current_pos
