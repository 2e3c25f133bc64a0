"""Smoke tests to verify package imports work."""

def test_package_imports():
    """Test that all main names can be imported."""
    from anomalia import (Angle, ConvergenceError, EllipticElements,
                          ParabolicElements, KeplerMethod, solve_kepler)
    assert Angle is not None
    assert ConvergenceError is not None
    assert EllipticElements is not None
    assert ParabolicElements is not None
    assert KeplerMethod is not None
    assert solve_kepler is not None

def test_version_exists():
    """Test that version is defined."""
    import anomalia
    assert hasattr(anomalia, '__version__')
    assert anomalia.__version__ == "0.1.0"

def test_all_names_resolve():
    """Every name in __all__ exists on the package."""
    import anomalia
    for name in anomalia.__all__:
        assert hasattr(anomalia, name), name

def test_can_solve_kepler():
    """Test a basic Kepler solve."""
    from anomalia import kepler3
    assert abs(kepler3(0.0, 1.0) - 1.0) < 1e-14

def test_can_create_parabolic_elements():
    """Test basic ParabolicElements creation."""
    from anomalia import ParabolicElements
    orbit = ParabolicElements(time_p=2451000.5, q=1.0)
    assert orbit.q == 1.0
