"""Floor grid rendering for spatial reference."""

from OpenGL.GL import *
from config import swarm as config


class Grid:
    """Draws a square line grid on the y=0 floor under the flock."""

    def __init__(self):
        self.size = config.GRID["size"]
        self.divisions = config.GRID["divisions"]
        self.color = config.GRID["color"]

    def draw(self):
        e = self.size
        step = 2 * e / self.divisions

        glBegin(GL_LINES)
        glColor3f(*self.color)

        for i in range(self.divisions + 1):
            t = -e + i * step
            # Lines parallel to Z
            glVertex3f(t, 0.0, -e); glVertex3f(t, 0.0, e)
            # Lines parallel to X
            glVertex3f(-e, 0.0, t); glVertex3f(e, 0.0, t)

        glEnd()
