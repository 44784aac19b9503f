"""
SceneDiff - Structural differ for imported 3D scenes

Compares two in-memory scenes mesh by mesh and reports every mismatch.
"""

__version__ = "0.1.0"

from .core.mesh import Mesh, MAX_COLOR_SETS, MAX_TEXTURE_COORDS
from .core.scene import Scene
from .diff.model_differ import ModelDiffer
from .diff.policy import DifferConfig, TolerancePolicy, configure, get_config, reset_config
from .diff.renderer import ReportRenderer, logging_sink, stream_sink

__all__ = [
    # Version
    "__version__",
    # Data models
    "Mesh",
    "Scene",
    "MAX_COLOR_SETS",
    "MAX_TEXTURE_COORDS",
    # Differ
    "ModelDiffer",
    "DifferConfig",
    "TolerancePolicy",
    "configure",
    "get_config",
    "reset_config",
    # Report output
    "ReportRenderer",
    "logging_sink",
    "stream_sink",
]
