"""Viewer components: camera, input, pinch emulation, and the application loop.

Submodules are imported directly, so the pinch tracker stays importable on
machines without a GL driver.
"""
