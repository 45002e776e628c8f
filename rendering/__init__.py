"""Rendering components for the flock viewer.

Submodules that touch OpenGL are imported directly by the viewer, so the
color helpers stay importable on machines without a GL driver.
"""
