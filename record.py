#!/usr/bin/env python3
"""
Convenience entry point for headless flock recording.

Usage:
    python record.py demo                          # Record with default settings
    python record.py demo --preset murmuration     # Record a preset
    python record.py demo --orbit --frames 1200    # With an orbiting attractor
    python record.py demo --status                 # Check recording status
    python record.py --list                        # List all recordings
"""

from tools.record import main

if __name__ == "__main__":
    main()
