"""
Report formatting for the model differ.

Formats vectors and colors for diff messages and provides sinks that
consume an ordered report.
"""

import logging
import sys
from io import StringIO
from typing import Callable, Iterable, Optional, Sequence, TextIO

import numpy as np

ReportSink = Callable[[Sequence[str]], None]


def format_real(value: float) -> str:
    """Shortest round-trip form of a number, trailing zeros trimmed."""
    return np.format_float_positional(value, trim="-")


def _format_tuple(values: Iterable[float]) -> str:
    return "(" + ", ".join(format_real(v) for v in values) + ")"


def format_vector3(vector: Sequence[float]) -> str:
    """Format a 3D vector as "(x, y, z)"."""
    return _format_tuple(vector[:3])


def format_color4(color: Sequence[float]) -> str:
    """Format an RGBA color as "(r, g, b, a)"."""
    return _format_tuple(color[:4])


def stream_sink(stream: Optional[TextIO] = None) -> ReportSink:
    """
    Sink writing one entry per line followed by a blank line.

    Args:
        stream: Target stream, sys.stdout at emission time when omitted

    Returns:
        Sink callable
    """
    def _write(entries: Sequence[str]) -> None:
        target = stream if stream is not None else sys.stdout
        for entry in entries:
            target.write(entry + "\n")
        target.write("\n")
        target.flush()

    return _write


def logging_sink(logger: logging.Logger, level: int = logging.INFO) -> ReportSink:
    """Sink forwarding each entry to `logger` at `level`."""
    def _log(entries: Sequence[str]) -> None:
        for entry in entries:
            logger.log(level, entry)

    return _log


class ReportRenderer:
    """
    Renders a diff report for terminal display.
    """

    def __init__(self, color: bool = True, width: int = 60):
        """
        Initialize the renderer.

        Args:
            color: Whether to use ANSI colors
            width: Width of the header rules
        """
        self.color = color
        self.width = width

    def render(self, entries: Sequence[str], title: str = "MODEL DIFF REPORT") -> str:
        """
        Render a report with a header and entry count.

        Args:
            entries: Report entries in insertion order
            title: Header line

        Returns:
            Formatted string
        """
        output = StringIO()

        output.write("=" * self.width + "\n")
        output.write(title + "\n")
        output.write("=" * self.width + "\n")

        if not entries:
            output.write(self._color("No differences", "green") + "\n")
        else:
            output.write(self._color(f"{len(entries)} difference(s)", "red") + "\n")
            output.write("-" * (self.width // 2) + "\n")
            for i, entry in enumerate(entries, start=1):
                output.write(f"{i:>4}. {entry}\n")

        output.write("=" * self.width + "\n")
        return output.getvalue()

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.color:
            return text

        colors = {
            "red": "\033[91m",
            "green": "\033[92m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"
