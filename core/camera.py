"""Orbital camera with screen-to-world picking for pinch input."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import swarm as config


class Camera:
    """Orbital camera around the flock with smooth zoom and mouse/keyboard controls."""

    def __init__(self):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]
        self.target = np.array(config.CAMERA["target"], dtype=np.float64)
        self.fov = config.CAMERA["fov"]
        self.zoom_smoothing = 8.0

    def get_direction(self) -> np.ndarray:
        """Get the normalized direction vector from target to camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        x = math.cos(phi_rad) * math.cos(theta_rad)
        y = math.sin(phi_rad)
        z = math.cos(phi_rad) * math.sin(theta_rad)
        return np.array([x, y, z])

    def get_camera_axes(self) -> tuple:
        """
        Get the camera's local coordinate axes (forward, right, up).
        Forward points from camera toward target.
        """
        forward = -self.get_direction()
        world_up = np.array([0.0, 1.0, 0.0])

        right = np.cross(forward, world_up)
        right_len = np.linalg.norm(right)
        if right_len < 0.001:
            right = np.array([1.0, 0.0, 0.0])
        else:
            right = right / right_len

        up = np.cross(right, forward)
        up = up / np.linalg.norm(up)

        return forward, right, up

    def get_position(self) -> np.ndarray:
        """Get the camera's world position."""
        return self.target + self.radius * self.get_direction()

    def screen_to_world(self, x: float, y: float, screen_size: tuple) -> np.ndarray:
        """
        Project a pixel onto the plane through the orbit target facing the camera.

        Args:
            x: Pixel column from the left edge
            y: Pixel row from the top edge
            screen_size: (width, height) of the window

        Returns:
            World-space point under the cursor
        """
        width, height = screen_size
        ndc_x = 2.0 * x / width - 1.0
        ndc_y = 1.0 - 2.0 * y / height

        forward, right, up = self.get_camera_axes()
        tan_v = math.tan(math.radians(self.fov) / 2)
        aspect = width / height
        ray = forward + right * (ndc_x * tan_v * aspect) + up * (ndc_y * tan_v)

        origin = self.get_position()
        t = np.dot(self.target - origin, forward) / np.dot(ray, forward)
        return origin + ray * t

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate the camera by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(
            config.CAMERA["min_phi"],
            min(config.CAMERA["max_phi"], self.phi + d_phi)
        )

    def zoom(self, delta: float):
        """Immediately zoom by the given amount."""
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius + delta)
        )
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        """Smoothly zoom by the given amount."""
        self.target_radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.target_radius + delta)
        )

    def update(self, dt: float):
        """Update camera state (called each frame)."""
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)

    def apply(self):
        """Apply the camera transformation to the OpenGL modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )
