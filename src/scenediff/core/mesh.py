"""
Mesh data structures for SceneDiff.

A Mesh represents one geometric submesh of an imported model: a vertex
count plus optional per-vertex attribute arrays. Every optional channel is
either fully present (one entry per vertex) or absent.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Dict, List

import numpy as np

# Fixed channel slot counts of the importer's mesh layout
MAX_COLOR_SETS = 8
MAX_TEXTURE_COORDS = 8

REAL_DTYPE = np.float64


def _as_vertex_array(
    name: str,
    values: Any,
    num_vertices: int,
    width: int,
    pad_from: Optional[int] = None,
) -> Optional[np.ndarray]:
    """Coerce a per-vertex channel into a (num_vertices, width) array."""
    if values is None:
        return None

    array = np.asarray(values, dtype=REAL_DTYPE)
    if array.ndim == 1 and array.size == 0 and num_vertices == 0:
        array = array.reshape(0, width)

    if pad_from is not None and array.ndim == 2 and array.shape[1] == pad_from:
        array = np.hstack([array, np.zeros((array.shape[0], width - pad_from), dtype=REAL_DTYPE)])

    if array.shape != (num_vertices, width):
        raise ValueError(
            f"{name} must have shape ({num_vertices}, {width}), got {array.shape}"
        )
    return array


def _as_channels(
    name: str,
    channels: Optional[List[Any]],
    limit: int,
    num_vertices: int,
    width: int,
    pad_from: Optional[int] = None,
) -> List[Optional[np.ndarray]]:
    channels = [] if channels is None else list(channels)
    if len(channels) > limit:
        raise ValueError(f"{name} supports at most {limit} channels, got {len(channels)}")
    return [
        _as_vertex_array(f"{name}[{slot}]", values, num_vertices, width, pad_from)
        for slot, values in enumerate(channels)
    ]


@dataclass(eq=False)
class Mesh:
    """
    One submesh of a scene.

    Channels given as nested sequences are converted to float arrays.
    Texture coordinates with two components are padded to three.
    """
    name: str = ""
    num_vertices: int = 0

    positions: Optional[np.ndarray] = None
    normals: Optional[np.ndarray] = None
    tangents: Optional[np.ndarray] = None
    bitangents: Optional[np.ndarray] = None

    # One slot per channel, None for an unused slot
    colors: List[Optional[np.ndarray]] = field(default_factory=list)
    texture_coords: List[Optional[np.ndarray]] = field(default_factory=list)

    def __post_init__(self):
        if self.num_vertices < 0:
            raise ValueError(f"num_vertices must be non-negative, got {self.num_vertices}")

        n = self.num_vertices
        self.positions = _as_vertex_array("positions", self.positions, n, 3)
        self.normals = _as_vertex_array("normals", self.normals, n, 3)
        self.tangents = _as_vertex_array("tangents", self.tangents, n, 3)
        self.bitangents = _as_vertex_array("bitangents", self.bitangents, n, 3)

        if (self.tangents is None) != (self.bitangents is None):
            raise ValueError("tangents and bitangents must be supplied together")

        self.colors = _as_channels("colors", self.colors, MAX_COLOR_SETS, n, 4)
        self.texture_coords = _as_channels(
            "texture_coords", self.texture_coords, MAX_TEXTURE_COORDS, n, 3, pad_from=2
        )

    def has_positions(self) -> bool:
        return self.positions is not None

    def has_normals(self) -> bool:
        return self.normals is not None

    def has_tangents_and_bitangents(self) -> bool:
        return self.tangents is not None and self.bitangents is not None

    def has_vertex_colors(self, slot: int) -> bool:
        """Whether color set `slot` is populated."""
        return 0 <= slot < len(self.colors) and self.colors[slot] is not None

    def has_texture_coords(self, slot: int) -> bool:
        """Whether texture coordinate set `slot` is populated."""
        return 0 <= slot < len(self.texture_coords) and self.texture_coords[slot] is not None

    @property
    def num_color_channels(self) -> int:
        return sum(1 for c in self.colors if c is not None)

    @property
    def num_uv_channels(self) -> int:
        return sum(1 for c in self.texture_coords if c is not None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a summary dictionary (presence flags, no vertex data)."""
        return {
            "name": self.name,
            "num_vertices": self.num_vertices,
            "has_positions": self.has_positions(),
            "has_normals": self.has_normals(),
            "has_tangents_and_bitangents": self.has_tangents_and_bitangents(),
            "color_sets": [slot for slot in range(len(self.colors)) if self.has_vertex_colors(slot)],
            "texture_coord_sets": [
                slot for slot in range(len(self.texture_coords)) if self.has_texture_coords(slot)
            ],
        }
