"""
Core data models for SceneDiff.
"""

from .mesh import Mesh, MAX_COLOR_SETS, MAX_TEXTURE_COORDS
from .scene import Scene

__all__ = [
    "Mesh",
    "Scene",
    "MAX_COLOR_SETS",
    "MAX_TEXTURE_COORDS",
]
