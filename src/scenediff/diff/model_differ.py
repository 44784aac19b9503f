"""
Model differ for comparing imported scenes.

Walks two scenes mesh by mesh and attribute by attribute, collecting a
human-readable entry for every mismatch found. A mesh-level mismatch that
makes later per-vertex arrays incomparable stops the comparison of that
mesh pair; the scene walk always continues with the next pair.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

import numpy as np

from ..core.mesh import Mesh
from ..core.scene import Scene
from .policy import DifferConfig, get_config
from .renderer import ReportSink, format_color4, format_vector3, stream_sink

logger = logging.getLogger(__name__)


def _presence(flag: bool) -> str:
    return "present" if flag else "absent"


class ModelDiffer:
    """
    Structural differ for in-memory scenes.

    The differ owns an append-only report. Each compare call returns True
    iff it appended no entries, so a fresh differ whose compare_scenes
    returned True also has an empty report.

    Usage:
        differ = ModelDiffer()
        if not differ.compare_scenes(expected, actual):
            differ.emit_report()
        differ.reset()
    """

    def __init__(self, config: Optional[DifferConfig] = None, **overrides: Any):
        """
        Initialize the differ.

        Args:
            config: Settings to use, the configured default when omitted
            **overrides: DifferConfig fields replacing those of `config`
        """
        self.config = (config or get_config()).with_overrides(**overrides)
        self._diffs: List[str] = []
        self._prefix = ""

    # Report

    @property
    def diffs(self) -> Tuple[str, ...]:
        """Snapshot of the report in insertion order."""
        return tuple(self._diffs)

    @property
    def has_diffs(self) -> bool:
        return bool(self._diffs)

    def __len__(self) -> int:
        return len(self._diffs)

    def add_diff(self, message: str) -> None:
        """Append a message to the report. Empty messages are ignored."""
        if not message:
            return
        self._diffs.append(self._prefix + message)

    def reset(self) -> None:
        """Clear the report."""
        self._diffs.clear()

    def emit_report(self, sink: Optional[ReportSink] = None) -> None:
        """
        Hand the report to a sink. Does nothing when the report is empty.

        Args:
            sink: Consumer of the ordered entries, stdout when omitted
        """
        if not self._diffs:
            return
        (sink or stream_sink())(self.diffs)

    # Scenes

    def compare_scenes(self, expected: Optional[Scene], actual: Optional[Scene]) -> bool:
        """
        Compare two scenes, recording every mismatch.

        Mesh pairs are compared by index up to the smaller mesh count.
        A mesh count mismatch is recorded but does not stop the walk.

        Args:
            expected: Reference scene
            actual: Scene under test

        Returns:
            True if no report entry was added
        """
        start = len(self._diffs)

        if expected is actual:
            return True

        if expected is None or actual is None:
            logger.warning(
                "Scene missing (expected: %s, found: %s)",
                _presence(expected is not None), _presence(actual is not None),
            )
            self.add_diff(
                f"Scene not present (expected: {_presence(expected is not None)}, "
                f"found: {_presence(actual is not None)})"
            )
            return False

        if expected.num_meshes != actual.num_meshes:
            self.add_diff(
                f"Number of meshes not equal (expected: {expected.num_meshes}, "
                f"found: {actual.num_meshes})"
            )

        for index in range(min(expected.num_meshes, actual.num_meshes)):
            self._compare_mesh_at(index, expected.meshes[index], actual.meshes[index])

        added = len(self._diffs) - start
        logger.debug("Compared scenes %r and %r: %d difference(s)", expected.name, actual.name, added)
        return added == 0

    def _compare_mesh_at(self, index: int, expected: Optional[Mesh], actual: Optional[Mesh]) -> bool:
        if not self.config.label_meshes:
            return self.compare_meshes(expected, actual)

        name = expected.name if expected is not None else actual.name if actual is not None else ""
        self._prefix = f"Mesh {index} '{name}': "
        try:
            return self.compare_meshes(expected, actual)
        finally:
            self._prefix = ""

    # Meshes

    def compare_meshes(self, expected: Optional[Mesh], actual: Optional[Mesh]) -> bool:
        """
        Compare two meshes through the ordered attribute pipeline.

        A name mismatch is recorded and the pipeline continues. A vertex
        count or presence mismatch stops it at once. Per-vertex mismatches
        are all recorded for the array being scanned, then stop it.

        Args:
            expected: Reference mesh
            actual: Mesh under test

        Returns:
            True if no report entry was added
        """
        start = len(self._diffs)

        if expected is actual:
            return True

        if expected is None or actual is None:
            logger.warning(
                "Mesh missing (expected: %s, found: %s)",
                _presence(expected is not None), _presence(actual is not None),
            )
            self.add_diff(
                f"Mesh not present (expected: {_presence(expected is not None)}, "
                f"found: {_presence(actual is not None)})"
            )
            return False

        if expected.name != actual.name:
            self.add_diff(f"Mesh name not equal (expected: '{expected.name}', found: '{actual.name}')")

        if expected.num_vertices != actual.num_vertices:
            self.add_diff(
                f"Number of vertices not equal (expected: {expected.num_vertices}, "
                f"found: {actual.num_vertices})"
            )
            return self._abort(expected, "vertex count")

        stages: Sequence[Tuple[str, Callable[[Mesh, Mesh], bool]]] = (
            ("positions", self._compare_positions),
            ("normals", self._compare_normals),
            ("vertex colors", self._compare_colors),
            ("texture coords", self._compare_texture_coords),
            ("tangents", self._compare_tangents),
        )
        for stage, compare in stages:
            if not compare(expected, actual):
                return self._abort(expected, stage)

        return len(self._diffs) == start

    def _abort(self, mesh: Mesh, stage: str) -> bool:
        logger.debug("Stopped comparing mesh %r at %s", mesh.name, stage)
        return False

    # Attribute stages; each returns False when the pipeline must stop

    def _compare_positions(self, expected: Mesh, actual: Mesh) -> bool:
        return self._compare_channel(
            "Positions", "Position",
            expected.has_positions(), actual.has_positions(),
            expected.positions, actual.positions, format_vector3,
        )

    def _compare_normals(self, expected: Mesh, actual: Mesh) -> bool:
        return self._compare_channel(
            "Normals", "Normal",
            expected.has_normals(), actual.has_normals(),
            expected.normals, actual.normals, format_vector3,
        )

    def _compare_colors(self, expected: Mesh, actual: Mesh) -> bool:
        for slot in range(self.config.max_color_sets):
            label = f"Color set {slot}"
            if not self._compare_channel(
                label, label,
                expected.has_vertex_colors(slot), actual.has_vertex_colors(slot),
                self._slot(expected.colors, slot), self._slot(actual.colors, slot),
                format_color4,
            ):
                return False
        return True

    def _compare_texture_coords(self, expected: Mesh, actual: Mesh) -> bool:
        for slot in range(self.config.max_texture_coords):
            label = f"Texture coords set {slot}"
            if not self._compare_channel(
                label, label,
                expected.has_texture_coords(slot), actual.has_texture_coords(slot),
                self._slot(expected.texture_coords, slot), self._slot(actual.texture_coords, slot),
                format_vector3,
            ):
                return False
        return True

    def _compare_tangents(self, expected: Mesh, actual: Mesh) -> bool:
        has_expected = expected.has_tangents_and_bitangents()
        has_actual = actual.has_tangents_and_bitangents()
        if not self._compare_presence("Tangents and bitangents", has_expected, has_actual):
            return False
        if not has_expected:
            return True

        tangent_rows = set(self._mismatched_vertices(expected.tangents, actual.tangents))
        bitangent_rows = set(self._mismatched_vertices(expected.bitangents, actual.bitangents))

        # Interleaved per vertex: tangent entry, then bitangent entry
        for i in sorted(tangent_rows | bitangent_rows):
            if i in tangent_rows:
                self._add_value_diff("Tangent", i, expected.tangents[i], actual.tangents[i], format_vector3)
            if i in bitangent_rows:
                self._add_value_diff("Bitangent", i, expected.bitangents[i], actual.bitangents[i], format_vector3)

        return not (tangent_rows or bitangent_rows)

    # Field helpers

    def _compare_channel(
        self,
        presence_label: str,
        value_label: str,
        has_expected: bool,
        has_actual: bool,
        expected: Optional[np.ndarray],
        actual: Optional[np.ndarray],
        fmt: Callable[[Sequence[float]], str],
    ) -> bool:
        """Presence check, then a full per-vertex scan of a present channel."""
        if not self._compare_presence(presence_label, has_expected, has_actual):
            return False
        if not has_expected:
            return True

        rows = self._mismatched_vertices(expected, actual)
        for i in rows:
            self._add_value_diff(value_label, i, expected[i], actual[i], fmt)
        return len(rows) == 0

    def _compare_presence(self, label: str, has_expected: bool, has_actual: bool) -> bool:
        if has_expected == has_actual:
            return True
        self.add_diff(
            f"{label} presence not equal (expected: {_presence(has_expected)}, "
            f"found: {_presence(has_actual)})"
        )
        return False

    def _mismatched_vertices(self, expected: np.ndarray, actual: np.ndarray) -> List[int]:
        return [int(i) for i in self.config.tolerance.mismatched_rows(expected, actual)]

    def _add_value_diff(
        self,
        label: str,
        index: int,
        expected: Sequence[float],
        actual: Sequence[float],
        fmt: Callable[[Sequence[float]], str],
    ) -> None:
        self.add_diff(
            f"{label} not equal at vertex {index} (expected: {fmt(expected)}, found: {fmt(actual)})"
        )

    @staticmethod
    def _slot(channels: List[Optional[np.ndarray]], slot: int) -> Optional[np.ndarray]:
        return channels[slot] if slot < len(channels) else None
