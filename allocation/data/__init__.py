"""
Data Module - Reads positions and targets from disk.
"""

from .loaders import load_positions, load_targets

__all__ = [
    'load_positions',
    'load_targets',
]
