"""
Basic usage example for SceneDiff.

This example demonstrates:
- Building two scenes
- Comparing them exactly and with a tolerance
- Printing the report
"""

import logging

import numpy as np

from scenediff import Mesh, ModelDiffer, ReportRenderer, Scene, TolerancePolicy


def build_scene(offset: float = 0.0) -> Scene:
    positions = np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=float)
    mesh = Mesh(
        name="triangle",
        num_vertices=3,
        positions=positions + offset,
        normals=np.tile([0.0, 0.0, 1.0], (3, 1)),
        texture_coords=[[[0, 0], [1, 0], [0, 1]]],
    )
    return Scene(name="example", meshes=[mesh])


def main():
    logging.basicConfig(level=logging.DEBUG)

    expected = build_scene()
    round_tripped = build_scene(offset=1e-7)

    # 1. Exact comparison reports every moved vertex
    differ = ModelDiffer()
    if not differ.compare_scenes(expected, round_tripped):
        print(ReportRenderer().render(differ.diffs))
    differ.reset()

    # 2. A tolerant differ accepts the precision loss
    tolerant = ModelDiffer(tolerance=TolerancePolicy.absolute(1e-5))
    print("Equal within tolerance:", tolerant.compare_scenes(expected, round_tripped))
    tolerant.emit_report()


if __name__ == "__main__":
    main()
