"""
Comparison policy and configuration for the model differ.

Exact component-wise equality is the default. A tolerant policy is
available for comparing data that went through a lossy round-trip.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

import numpy as np

from ..core.mesh import MAX_COLOR_SETS, MAX_TEXTURE_COORDS


@dataclass(frozen=True)
class TolerancePolicy:
    """
    Floating-point equality policy for vectors and colors.

    Two components a (expected) and b (actual) match when
    |a - b| <= atol + rtol * |a|. With both tolerances at zero the
    comparison is exact.
    """
    atol: float = 0.0
    rtol: float = 0.0
    equal_nan: bool = False

    def __post_init__(self):
        if self.atol < 0 or self.rtol < 0:
            raise ValueError(
                f"Tolerances must be non-negative (atol={self.atol}, rtol={self.rtol})"
            )

    @classmethod
    def exact(cls) -> "TolerancePolicy":
        return cls()

    @classmethod
    def absolute(cls, epsilon: float) -> "TolerancePolicy":
        """Policy accepting component differences up to `epsilon`."""
        return cls(atol=epsilon)

    @property
    def is_exact(self) -> bool:
        return self.atol == 0.0 and self.rtol == 0.0

    def mismatched_rows(self, expected: np.ndarray, actual: np.ndarray) -> np.ndarray:
        """
        Indices of rows where any component differs under this policy.

        Args:
            expected: (n, k) array of expected values
            actual: (n, k) array of actual values

        Returns:
            Sorted array of row indices
        """
        if self.is_exact:
            equal = expected == actual
            if self.equal_nan:
                equal |= np.isnan(expected) & np.isnan(actual)
        else:
            equal = np.isclose(
                actual, expected, rtol=self.rtol, atol=self.atol, equal_nan=self.equal_nan
            )
        return np.flatnonzero(~np.all(equal, axis=1))


@dataclass(frozen=True)
class DifferConfig:
    """Settings for a ModelDiffer."""
    tolerance: TolerancePolicy = field(default_factory=TolerancePolicy)
    max_color_sets: int = MAX_COLOR_SETS
    max_texture_coords: int = MAX_TEXTURE_COORDS

    # Prefix mesh-level messages with the mesh index and name
    label_meshes: bool = False

    def __post_init__(self):
        if self.max_color_sets < 0 or self.max_texture_coords < 0:
            raise ValueError(
                "Channel limits must be non-negative "
                f"(max_color_sets={self.max_color_sets}, "
                f"max_texture_coords={self.max_texture_coords})"
            )

    def with_overrides(self, **kwargs: Any) -> "DifferConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs) if kwargs else self


_global_config: Optional[DifferConfig] = None


def configure(**kwargs: Any) -> DifferConfig:
    """
    Configure the default settings used by new differs.

    Args:
        **kwargs: DifferConfig fields

    Returns:
        The configured DifferConfig
    """
    global _global_config
    _global_config = DifferConfig(**kwargs)
    return _global_config


def get_config() -> DifferConfig:
    """
    Get the default differ settings.

    Returns:
        The configured DifferConfig, or an exact-match default
    """
    if _global_config is None:
        return DifferConfig()
    return _global_config


def reset_config() -> None:
    """Restore the built-in default settings."""
    global _global_config
    _global_config = None
