"""
Headless Flock Recorder
=======================

Runs the flock without a window and stores every frame on disk.

Directory structure:
    recordings/
        <session_name>/
            metadata.json      - Recording settings and progress
            frame_00000.zstd   - Compressed positions/velocities/attraction strengths

An optional attractor orbits the flock for the whole recording, standing in
for a pinching hand.
"""

import json
import math
import struct
import time
import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np
import zstandard as zstd

from config import swarm as config
from swarm import Swarm, setup_logging
from tools.presets import apply_preset, get_preset_config, list_presets, print_preset_menu

logger = logging.getLogger("swarm.record")

FRAME_MAGIC = b"FLK1"
HEADER = struct.Struct("<4sII")   # magic, agent count, frame index


# =============================================================================
# FRAME CODEC
# =============================================================================

def compress_frame(frame_idx: int, positions: np.ndarray, velocities: np.ndarray,
                   strengths: np.ndarray, level: int = config.RECORDING["compression_level"]) -> bytes:
    """
    Pack one frame as float32 arrays behind a small header and compress with zstd.

    Layout (before compression):
    - 12 bytes: magic, agent count, frame index
    - N*3 float32 positions, N*3 float32 velocities, N float32 strengths
    """
    n = len(positions)
    payload = b"".join((
        HEADER.pack(FRAME_MAGIC, n, frame_idx),
        np.ascontiguousarray(positions, dtype=np.float32).tobytes(),
        np.ascontiguousarray(velocities, dtype=np.float32).tobytes(),
        np.ascontiguousarray(strengths, dtype=np.float32).tobytes(),
    ))
    return zstd.ZstdCompressor(level=level).compress(payload)


def decompress_frame(data: bytes) -> Dict[str, np.ndarray]:
    """Inverse of compress_frame."""
    raw = zstd.ZstdDecompressor().decompress(data)
    magic, n, frame_idx = HEADER.unpack_from(raw, 0)
    if magic != FRAME_MAGIC:
        raise ValueError(f"Not a flock frame (magic {magic!r})")

    offset = HEADER.size
    vec_bytes = n * 3 * 4

    positions = np.frombuffer(raw, dtype=np.float32, count=n * 3, offset=offset).reshape(n, 3)
    offset += vec_bytes
    velocities = np.frombuffer(raw, dtype=np.float32, count=n * 3, offset=offset).reshape(n, 3)
    offset += vec_bytes
    strengths = np.frombuffer(raw, dtype=np.float32, count=n, offset=offset)

    return {
        "frame": frame_idx,
        "positions": positions.copy(),
        "velocities": velocities.copy(),
        "strengths": strengths.copy(),
    }


# =============================================================================
# SESSION FILES
# =============================================================================

def get_recording_dir(session_name: str, base_dir: Optional[Path] = None) -> Path:
    """Get the directory for a recording session."""
    base = Path(base_dir) if base_dir is not None else Path(config.RECORDING["directory"])
    return base / session_name


def frame_path(rec_dir: Path, frame_idx: int) -> Path:
    return rec_dir / f"frame_{frame_idx:05d}.zstd"


def save_metadata(rec_dir: Path, metadata: dict):
    with open(rec_dir / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)


def load_metadata(rec_dir: Path) -> dict:
    with open(rec_dir / "metadata.json", "r") as f:
        return json.load(f)


def save_frame(rec_dir: Path, frame_idx: int, swarm: Swarm):
    data = compress_frame(frame_idx, swarm.positions(), swarm.velocities(), swarm.attraction_strengths())
    with open(frame_path(rec_dir, frame_idx), "wb") as f:
        f.write(data)


def load_frame(rec_dir: Path, frame_idx: int) -> Dict[str, np.ndarray]:
    """Load a recorded frame as a dict of arrays."""
    with open(frame_path(rec_dir, frame_idx), "rb") as f:
        return decompress_frame(f.read())


def get_completed_frames(rec_dir: Path) -> int:
    """Count consecutive frames already on disk."""
    count = 0
    while frame_path(rec_dir, count).exists():
        count += 1
    return count


# =============================================================================
# RECORDING
# =============================================================================

def orbit_point(frame: int, radius: float = config.RECORDING["orbit_radius"],
                height: float = config.RECORDING["orbit_height"],
                period: int = config.RECORDING["orbit_period"]) -> np.ndarray:
    """Position of the orbiting attractor at a frame."""
    angle = 2.0 * math.pi * frame / period
    return np.array([radius * math.cos(angle), height, radius * math.sin(angle)])


def build_swarm(settings: dict) -> Swarm:
    """Create the swarm described by recording settings."""
    swarm = Swarm(seed=settings.get("seed"))
    preset = settings.get("preset")
    if preset:
        apply_preset(swarm, preset, reset_population=False)
    swarm.add_agents(settings["count"])
    return swarm


def record(settings: dict, base_dir: Optional[Path] = None, progress_every: int = 100) -> Path:
    """
    Run a headless recording.

    Args:
        settings: session, frames, count, and optional preset, seed, orbit
        base_dir: Directory holding sessions (config default if omitted)
        progress_every: Print a progress line every N frames (0 disables)

    Returns:
        The session directory
    """
    rec_dir = get_recording_dir(settings["session"], base_dir)
    rec_dir.mkdir(parents=True, exist_ok=True)

    swarm = build_swarm(settings)
    metadata = {
        **settings,
        "params": swarm.params.to_dict(),
        "agent": dict(swarm.agent_settings),
        "started": datetime.now().isoformat(timespec="seconds"),
        "completed_frames": 0,
    }
    save_metadata(rec_dir, metadata)
    logger.info("Recording '%s': %d agents, %d frames", settings["session"], len(swarm), settings["frames"])

    handle = swarm.add_attraction_point(orbit_point(0)) if settings.get("orbit") else None

    start = time.time()
    total = settings["frames"]
    for frame in range(total):
        if handle is not None:
            swarm.update_attraction_point(handle, orbit_point(frame))
        swarm.update()
        save_frame(rec_dir, frame, swarm)

        if progress_every and (frame + 1) % progress_every == 0:
            elapsed = time.time() - start
            print(f"[record] frame {frame + 1}/{total} | {elapsed:.1f}s elapsed")

    metadata["completed_frames"] = total
    metadata["elapsed_seconds"] = round(time.time() - start, 3)
    save_metadata(rec_dir, metadata)
    logger.info("Recording '%s' finished in %.1fs", settings["session"], metadata["elapsed_seconds"])
    return rec_dir


def show_status(session_name: str, base_dir: Optional[Path] = None) -> Tuple[int, int]:
    """Print and return (completed, planned) frames for a session."""
    rec_dir = get_recording_dir(session_name, base_dir)
    if not (rec_dir / "metadata.json").exists():
        print(f"[record] No recording named '{session_name}'")
        return 0, 0

    metadata = load_metadata(rec_dir)
    done = get_completed_frames(rec_dir)
    planned = metadata.get("frames", 0)
    print(f"[record] {session_name}: {done}/{planned} frames, {metadata.get('count')} agents, "
          f"preset={metadata.get('preset') or 'none'}, orbit={metadata.get('orbit', False)}")
    return done, planned


def list_recordings(base_dir: Optional[Path] = None) -> list:
    """List session names that have metadata."""
    base = Path(base_dir) if base_dir is not None else Path(config.RECORDING["directory"])
    if not base.exists():
        print("[record] No recordings yet")
        return []
    sessions = sorted(d.name for d in base.iterdir() if d.is_dir() and (d / "metadata.json").exists())
    for name in sessions:
        print(f"  {name}")
    return sessions


def main(argv=None):
    parser = argparse.ArgumentParser(description="Headless flock recorder")
    parser.add_argument("session", nargs="?", help="Session name")
    parser.add_argument("--frames", "-f", type=int, default=config.RECORDING["frames"], help="Number of frames")
    parser.add_argument("--count", "-n", type=int, help="Number of agents (default: preset or config)")
    parser.add_argument("--preset", "-p", type=str, help=f"Preset key ({', '.join(list_presets())})")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible runs")
    parser.add_argument("--orbit", action="store_true", help="Add an attractor orbiting the flock")
    parser.add_argument("--dir", type=Path, help="Recordings directory")
    parser.add_argument("--status", action="store_true", help="Show recording status")
    parser.add_argument("--list", action="store_true", help="List all recordings")
    parser.add_argument("--presets", action="store_true", help="Show available presets")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.presets:
        print_preset_menu()
        return 0

    if args.list:
        list_recordings(args.dir)
        return 0

    if not args.session:
        parser.error("a session name is required")

    if args.status:
        show_status(args.session, args.dir)
        return 0

    count = args.count
    if args.preset:
        preset = get_preset_config(args.preset)
        if preset is None:
            parser.error(f"unknown preset '{args.preset}'")
        if count is None:
            count = preset["count"]
    if count is None:
        count = config.AGENT["count"]

    settings = {
        "session": args.session,
        "frames": args.frames,
        "count": count,
        "preset": args.preset,
        "seed": args.seed,
        "orbit": args.orbit,
    }
    rec_dir = record(settings, args.dir)
    print(f"[record] Saved to {rec_dir}")
    return 0


if __name__ == "__main__":
    main()
