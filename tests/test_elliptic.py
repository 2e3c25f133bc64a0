"""
Test suite for EllipticElements.

Tests cover:
- Mean motion and period
- Position at the apsides
- Consistency with the Kepler solvers
- Choice of solver through the elements
- DataFrame output
"""

import pytest
import numpy as np
import pandas as pd

from anomalia import EllipticElements, KeplerMethod, ConvergenceError, kepler3
from anomalia.defaults import GAUSS_K


@pytest.fixture
def comet():
    """A long-period, highly eccentric orbit."""
    return EllipticElements(time_p=2450000.5, a=17.834, e=0.96714)


@pytest.fixture
def earth_like():
    """A nearly circular 1 AU orbit."""
    return EllipticElements(time_p=2451547.0, a=1.0, e=0.0167)


class TestOrbitParameters:
    """Derived quantities of the elements."""

    def test_mean_motion_one_au(self, earth_like):
        """At a = 1 AU, n equals the Gaussian constant."""
        assert earth_like.mean_motion == pytest.approx(GAUSS_K, rel=1e-15)

    def test_period_one_au(self, earth_like):
        """At a = 1 AU the period is the Gaussian year (~365.2569 d)."""
        assert earth_like.period == pytest.approx(365.2569, abs=1e-3)

    def test_keplers_third_law(self, comet):
        """Period scales as a^1.5."""
        assert comet.period == pytest.approx(365.25690 * 17.834 ** 1.5, rel=1e-6)

    def test_perihelion_distance(self, comet):
        """q = a(1 - e)."""
        assert comet.q == pytest.approx(17.834 * (1 - 0.96714))

    def test_mean_anomaly_not_reduced(self, earth_like):
        """Several periods after perihelion M exceeds 2 pi."""
        M = earth_like.mean_anomaly(earth_like.time_p + 3.5 * earth_like.period)
        assert M.rad == pytest.approx(7 * np.pi, rel=1e-12)


class TestAnomalyDistance:
    """Position along the orbit."""

    def test_at_perihelion(self, comet):
        """At t = time_p, nu = 0 and r = q."""
        nu, r = comet.anomaly_distance(comet.time_p)
        assert nu.rad == 0.0
        assert r == pytest.approx(comet.q, rel=1e-14)

    def test_at_aphelion(self, comet):
        """Half a period later the body is at aphelion."""
        nu, r = comet.anomaly_distance(comet.time_p + comet.period / 2)
        assert nu.deg == pytest.approx(180.0, abs=1e-6)
        assert r == pytest.approx(comet.a * (1 + comet.e), rel=1e-12)

    def test_after_full_period(self, earth_like):
        """One period later nu has advanced by a full revolution."""
        t = earth_like.time_p + 100.0
        nu0, r0 = earth_like.anomaly_distance(t)
        nu1, r1 = earth_like.anomaly_distance(t + earth_like.period)
        assert nu1.rad == pytest.approx(nu0.rad + 2 * np.pi, abs=1e-9)
        assert r1 == pytest.approx(r0, rel=1e-10)

    def test_matches_bisection(self, comet):
        """Robust Newton through the elements agrees with the binary search."""
        t = comet.time_p + 400.0
        E = comet.eccentric_anomaly(t)
        assert E.rad == pytest.approx(kepler3(comet.e, comet.mean_anomaly(t)), abs=1e-11)

    @pytest.mark.parametrize("method", ['robust', 'bisection', KeplerMethod.NEWTON])
    def test_methods_agree(self, earth_like, method):
        """Every exact method yields the same position."""
        t = earth_like.time_p + 77.7
        nu_ref, r_ref = earth_like.anomaly_distance(t)
        nu, r = earth_like.anomaly_distance(t, method=method)
        assert nu.rad == pytest.approx(nu_ref.rad, abs=1e-11)
        assert r == pytest.approx(r_ref, rel=1e-12)

    def test_budget_passed_through(self, comet):
        """A tiny budget surfaces the solver's ConvergenceError."""
        with pytest.raises(ConvergenceError):
            comet.anomaly_distance(comet.time_p + 400.0, method='fixed', n=2)


class TestEphemeris:
    """Tabular output."""

    def test_columns_and_rows(self, earth_like):
        """DataFrame columns and row count."""
        jdes = earth_like.time_p + np.arange(0.0, 365.0, 30.0)
        df = earth_like.ephemeris(jdes)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['jde', 'nu_deg', 'r']
        assert len(df) == len(jdes)
        assert df['r'].between(earth_like.q, earth_like.a * (1 + earth_like.e) + 1e-12).all()
