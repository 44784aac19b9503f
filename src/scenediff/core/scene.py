"""
Scene data structure for SceneDiff.

A Scene is the root of an imported model and holds its meshes in order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .mesh import Mesh


@dataclass(eq=False)
class Scene:
    """Root structure of an imported model."""
    name: str = ""
    meshes: List[Mesh] = field(default_factory=list)

    @property
    def num_meshes(self) -> int:
        return len(self.meshes)

    def add_mesh(self, mesh: Mesh):
        """Append a mesh to the scene."""
        self.meshes.append(mesh)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "num_meshes": self.num_meshes,
            "meshes": [m.to_dict() for m in self.meshes],
        }
