"""
Pinch Flock
===========

A real-time 3D flocking simulation where a held mouse button acts as a
pinching hand that attracts nearby agents.

Controls:
    - Right mouse (hold): Right-hand pinch - attract agents to the cursor
    - Middle mouse (hold): Left-hand pinch - a second attraction point
    - Left mouse drag: Rotate camera
    - W/S, A/D: Rotate camera
    - Q/E, Mouse wheel: Zoom
    - R: Reset flock
    - [ / ]: Fewer / more agents
    - 1-9: Apply preset
    - Space: Pause
    - ESC: Quit
"""

import argparse
import logging

from config import swarm as config
from swarm import setup_logging
from tools.presets import get_preset_config, list_presets


def main(argv=None):
    parser = argparse.ArgumentParser(description="Interactive 3D flock viewer")
    parser.add_argument("--count", "-n", type=int, default=config.AGENT["count"], help="Number of agents")
    parser.add_argument("--preset", "-p", type=str, help="Preset key (overrides --count)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.preset and get_preset_config(args.preset) is None:
        parser.error(f"unknown preset '{args.preset}' (available: {', '.join(list_presets())})")

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    # Imported late so --help works without a display
    from core.application import Application

    app = Application(count=args.count, preset=args.preset, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
