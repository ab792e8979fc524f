"""Lightweight package initializer for golfsg.

Submodules are imported explicitly by callers so that plotting and tabular
dependencies are only loaded when needed.
"""

__all__ = []
