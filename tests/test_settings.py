import numpy as np
import pytest

from swarmulate import (
    BoundaryMode,
    ConfigurationError,
    InertiaStrategy,
    NeighborhoodStrategy,
    Settings,
    calc_swarm_size,
)


def test_defaults() -> None:
    """Test the default settings match the classic PSO parameters."""
    settings = Settings(30, -5.12, 5.12)
    assert settings.size == calc_swarm_size(30) == 20
    assert settings.steps == 100000
    assert settings.goal == 1e-5
    assert settings.c1 == settings.c2 == 1.496
    assert settings.inertia == settings.w_max == 0.7298
    assert settings.w_min == 0.3
    assert settings.nhood_strategy is NeighborhoodStrategy.RING
    assert settings.nhood_size == 5
    assert settings.w_strategy is InertiaStrategy.LINEAR_DECREASING
    assert settings.boundary is BoundaryMode.CLAMP
    assert settings.print_every == 1000
    assert settings.step == 0


@pytest.mark.parametrize("dim, expected", [(1, 12), (2, 12), (4, 14), (30, 20), (10000, 100)])
def test_calc_swarm_size(dim: int, expected: int) -> None:
    """Test the swarm-size heuristic including its upper cap."""
    assert calc_swarm_size(dim) == expected


def test_scalar_bounds_are_broadcast() -> None:
    """Test a scalar bound pair applies to all dimensions and the bounds are read-only."""
    settings = Settings(3, -1.0, 2.0)
    np.testing.assert_array_equal(settings.range_lo, [-1.0, -1.0, -1.0])
    np.testing.assert_array_equal(settings.range_hi, [2.0, 2.0, 2.0])
    with pytest.raises(ValueError):
        settings.range_lo[0] = 0.0


def test_per_dimension_bounds() -> None:
    """Test per-dimension bounds are kept as given and decoupled from the caller's array."""
    lo = np.array([-1.0, 0.0])
    settings = Settings(2, lo, [1.0, 10.0])
    lo[0] = 5.0
    np.testing.assert_array_equal(settings.range_lo, [-1.0, 0.0])
    np.testing.assert_array_equal(settings.range_hi, [1.0, 10.0])


def test_string_tags() -> None:
    """Test strategies can be selected by their string values."""
    settings = Settings(2, -1.0, 1.0, nhood_strategy="random", w_strategy="constant", boundary="periodic")
    assert settings.nhood_strategy is NeighborhoodStrategy.RANDOM
    assert settings.w_strategy is InertiaStrategy.CONSTANT
    assert settings.boundary is BoundaryMode.PERIODIC


@pytest.mark.parametrize(
    "args, kwargs",
    [
        ((0, -1.0, 1.0), {}),
        ((2, 1.0, 1.0), {}),
        ((2, [-1.0, 2.0], [1.0, 1.0]), {}),
        ((2, [-1.0, -1.0, -1.0], 1.0), {}),
        ((2, -np.inf, 1.0), {}),
        ((2, np.nan, 1.0), {}),
        ((2, -1.0, 1.0), {"size": 0}),
        ((2, -1.0, 1.0), {"c1": 0.0}),
        ((2, -1.0, 1.0), {"c2": -1.0}),
        ((2, -1.0, 1.0), {"steps": -1}),
        ((2, -1.0, 1.0), {"print_every": -10}),
        ((2, -1.0, 1.0), {"nhood_size": -1}),
        ((2, -1.0, 1.0), {"nhood_strategy": "star"}),
        ((2, -1.0, 1.0), {"w_strategy": "chaotic"}),
        ((2, -1.0, 1.0), {"boundary": "reflect"}),
    ],
)
def test_invalid_settings(args: tuple, kwargs: dict) -> None:
    """Test invalid settings are rejected on construction."""
    with pytest.raises(ConfigurationError):
        Settings(*args, **kwargs)


def test_configuration_error_is_value_error() -> None:
    """Test configuration errors can be caught as ``ValueError``."""
    with pytest.raises(ValueError):
        Settings(-3, -1.0, 1.0)
