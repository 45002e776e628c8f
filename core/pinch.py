"""Pinch emulation: mouse buttons standing in for a left and a right hand."""

from typing import Dict, List, Optional


class PinchTracker:
    """
    Tracks one attraction point per pinching hand.

    Pressing a hand's button places an attraction point under the cursor,
    dragging moves it, and releasing removes it. Each hand owns its own
    handle, so both hands can attract the flock at once.
    """

    def __init__(self, swarm, camera, screen_size: tuple):
        self.swarm = swarm
        self.camera = camera
        self.screen_size = screen_size
        self.handles: Dict[str, int] = {}
        self.flashed: Dict[str, object] = {}

    @property
    def pinching(self) -> bool:
        return bool(self.handles)

    @property
    def flashed_agents(self) -> List[object]:
        return [agent for agent in self.flashed.values() if agent is not None]

    def _world_point(self, mouse_pos: tuple):
        return self.camera.screen_to_world(mouse_pos[0], mouse_pos[1], self.screen_size)

    def start(self, hand: str, mouse_pos: tuple):
        if hand in self.handles:
            self.end(hand)
        point = self._world_point(mouse_pos)
        self.handles[hand] = self.swarm.add_attraction_point(point)
        self.flashed[hand] = self.swarm.nearest_agent(point)

    def move(self, mouse_pos: tuple, hand: Optional[str] = None):
        """Move one hand's point, or every active one when ``hand`` is None."""
        hands = list(self.handles) if hand is None else [hand]
        point = self._world_point(mouse_pos)
        for h in hands:
            handle = self.handles.get(h)
            if handle is None:
                continue
            if not self.swarm.update_attraction_point(handle, point):
                # Point vanished (e.g. cleared by a reset) while the button was held
                del self.handles[h]
                self.flashed.pop(h, None)

    def end(self, hand: Optional[str] = None):
        """Release one hand, or every hand when ``hand`` is None."""
        hands = list(self.handles) if hand is None else [hand]
        for h in hands:
            handle = self.handles.pop(h, None)
            if handle is not None:
                self.swarm.remove_attraction_point(handle)
            self.flashed.pop(h, None)
