"""
Test suite for package configuration.

Tests cover:
- Default values and reset()
- temp_config() restoration, including on error
- Effect of settings on the solvers
"""

import pytest

import anomalia
from anomalia import config, temp_config, kepler1, kepler2b, kepler3, Angle, ConvergenceError


class TestDefaults:
    """Default configuration values."""

    def test_default_values(self):
        """Package defaults are in place."""
        assert config.FIXED_POINT_TOL == 1e-8
        assert config.NEWTON_TOL == 1e-12
        assert config.BISECTION_STEPS == 53
        assert config.STRICT_VALIDATION is True

    def test_hash_decimals_follows_atol(self):
        """HASH_DECIMALS is derived from EQUALITY_ATOL."""
        assert config.HASH_DECIMALS == 12
        with temp_config(EQUALITY_ATOL=1e-6):
            assert config.HASH_DECIMALS == 4

    def test_reset(self):
        """reset() restores every field."""
        config.NEWTON_TOL = 1e-3
        config.STRICT_VALIDATION = False
        config.reset()
        assert config.NEWTON_TOL == 1e-12
        assert config.STRICT_VALIDATION is True

    def test_repr_lists_settings(self):
        """repr() shows every tunable value."""
        text = repr(config)
        for key in config.__dataclass_fields__:
            assert key in text

    def test_package_exposes_instance(self):
        """anomalia.config is the shared instance."""
        assert anomalia.config is config


class TestTempConfig:
    """Temporary configuration changes."""

    def test_restores_on_exit(self):
        """Values revert when the block ends."""
        with temp_config(NEWTON_TOL=1e-6, DEFAULT_MAX_ITER=5) as cfg:
            assert cfg.NEWTON_TOL == 1e-6
            assert config.DEFAULT_MAX_ITER == 5
        assert config.NEWTON_TOL == 1e-12
        assert config.DEFAULT_MAX_ITER == 50

    def test_restores_on_error(self):
        """Values revert even if the block raises."""
        with pytest.raises(RuntimeError):
            with temp_config(FIXED_POINT_TOL=1.0):
                raise RuntimeError("boom")
        assert config.FIXED_POINT_TOL == 1e-8

    def test_unknown_key(self):
        """Unknown settings raise AttributeError and change nothing."""
        with pytest.raises(AttributeError, match="no attribute"):
            with temp_config(NOT_A_SETTING=1):
                pass

    def test_derived_property_not_settable(self):
        """HASH_DECIMALS is derived, not a setting."""
        with pytest.raises(AttributeError):
            with temp_config(HASH_DECIMALS=3):
                pass


class TestSolverSettings:
    """Settings feed into the solvers."""

    def test_looser_fixed_point_tolerance_needs_fewer_steps(self):
        """A loose tolerance lets kepler1 finish within a tiny budget."""
        with pytest.raises(ConvergenceError):
            kepler1(0.1, Angle.from_deg(5), 3)
        with temp_config(FIXED_POINT_TOL=1e-3):
            E = kepler1(0.1, Angle.from_deg(5), 3)
        assert E.deg == pytest.approx(5.5546, abs=1e-2)

    def test_bisection_steps(self):
        """Fewer halvings give a coarser binary search."""
        exact = kepler3(0.5, 1.0)
        with temp_config(BISECTION_STEPS=5):
            coarse = kepler3(0.5, 1.0)
        assert abs(coarse - exact) > 1e-3
        assert abs(coarse - exact) < 0.05

    def test_step_limit(self):
        """A tighter step limit slows the robust Newton start."""
        with temp_config(NEWTON_STEP_LIMIT=1e-3):
            with pytest.raises(ConvergenceError):
                kepler2b(0.99, 0.2, 14)
