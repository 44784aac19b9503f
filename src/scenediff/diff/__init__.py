"""
Diff engine for comparing imported scenes.
"""

from .model_differ import ModelDiffer
from .policy import DifferConfig, TolerancePolicy, configure, get_config, reset_config
from .renderer import (
    ReportRenderer,
    ReportSink,
    format_color4,
    format_vector3,
    logging_sink,
    stream_sink,
)

__all__ = [
    "ModelDiffer",
    "DifferConfig",
    "TolerancePolicy",
    "configure",
    "get_config",
    "reset_config",
    "ReportRenderer",
    "ReportSink",
    "format_color4",
    "format_vector3",
    "logging_sink",
    "stream_sink",
]
