"""
Tests for the comparison policy and configuration.
"""

import numpy as np
import pytest

from scenediff.core.mesh import MAX_COLOR_SETS, MAX_TEXTURE_COORDS
from scenediff.diff.policy import (
    DifferConfig,
    TolerancePolicy,
    configure,
    get_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def clean_config():
    """Restore default settings after each test."""
    yield
    reset_config()


class TestTolerancePolicy:
    """Tests for TolerancePolicy."""

    def test_exact_default(self):
        """Test the default policy is exact."""
        assert TolerancePolicy().is_exact
        assert TolerancePolicy.exact() == TolerancePolicy()
        assert not TolerancePolicy.absolute(1e-6).is_exact

    def test_exact_mismatched_rows(self):
        """Test exact comparison flags every differing row."""
        expected = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 2.0, 2.0]])
        actual = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 1e-12], [2.0, 2.0, 2.5]])

        rows = TolerancePolicy.exact().mismatched_rows(expected, actual)

        assert rows.tolist() == [1, 2]

    def test_absolute_mismatched_rows(self):
        """Test absolute tolerance accepts small differences."""
        expected = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 2.0, 2.0]])
        actual = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 1e-12], [2.0, 2.0, 2.5]])

        rows = TolerancePolicy.absolute(1e-9).mismatched_rows(expected, actual)

        assert rows.tolist() == [2]

    def test_relative_tolerance(self):
        """Test relative tolerance scales with the expected value."""
        expected = np.array([[1000.0, 0.0, 0.0]])
        actual = np.array([[1000.5, 0.0, 0.0]])

        assert TolerancePolicy(rtol=1e-3).mismatched_rows(expected, actual).size == 0
        assert TolerancePolicy(rtol=1e-4).mismatched_rows(expected, actual).tolist() == [0]

    def test_empty_arrays(self):
        """Test empty channels have no mismatches."""
        empty = np.zeros((0, 3))

        assert TolerancePolicy().mismatched_rows(empty, empty).size == 0

    def test_negative_tolerance_rejected(self):
        """Test negative tolerances are rejected."""
        with pytest.raises(ValueError):
            TolerancePolicy(atol=-1.0)
        with pytest.raises(ValueError):
            TolerancePolicy(rtol=-0.1)


class TestDifferConfig:
    """Tests for DifferConfig and the configure helpers."""

    def test_defaults(self):
        """Test default channel limits."""
        config = DifferConfig()

        assert config.max_color_sets == MAX_COLOR_SETS
        assert config.max_texture_coords == MAX_TEXTURE_COORDS
        assert config.tolerance.is_exact
        assert not config.label_meshes

    def test_negative_limits_rejected(self):
        """Test negative channel limits are rejected."""
        with pytest.raises(ValueError):
            DifferConfig(max_color_sets=-1)

    def test_with_overrides(self):
        """Test overriding fields returns a copy."""
        config = DifferConfig()
        changed = config.with_overrides(max_color_sets=2)

        assert changed.max_color_sets == 2
        assert config.max_color_sets == MAX_COLOR_SETS
        assert config.with_overrides() is config

    def test_configure_and_reset(self):
        """Test configuring the process default."""
        configured = configure(label_meshes=True)

        assert get_config() is configured
        assert get_config().label_meshes

        reset_config()
        assert get_config() == DifferConfig()
