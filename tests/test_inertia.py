import pytest

from swarmulate import ConstantInertia, LinearDecreasingInertia, Settings
from swarmulate.inertia import make_inertia


def test_constant() -> None:
    """Test the constant schedule returns the same weight for every step."""
    schedule = ConstantInertia(0.7298)
    assert all(schedule.weight(step) == 0.7298 for step in range(0, 1000, 7))


def test_linear_decreasing() -> None:
    """Test the weight decreases linearly over three quarters of the run and is held afterwards."""
    schedule = LinearDecreasingInertia(0.9, 0.4, 100)
    assert schedule.stage == 75
    assert schedule.weight(0) == pytest.approx(0.9)
    assert schedule.weight(30) == pytest.approx(0.4 + 0.5 * 45 / 75)
    assert schedule.weight(75) == pytest.approx(0.4)
    assert schedule.weight(76) == 0.4
    assert schedule.weight(99) == 0.4
    weights = [schedule.weight(step) for step in range(100)]
    assert all(a >= b for a, b in zip(weights, weights[1:]))


@pytest.mark.parametrize("steps", [0, 1])
def test_linear_decreasing_short_run(steps: int) -> None:
    """Test runs too short for a decreasing stage use the final weight."""
    assert LinearDecreasingInertia(0.9, 0.4, steps).weight(0) == 0.4


def test_make_inertia() -> None:
    """Test the inertia factory honors the selected strategy and its parameters."""
    constant = make_inertia(Settings(2, -1.0, 1.0, w_strategy="constant", inertia=0.5))
    assert isinstance(constant, ConstantInertia)
    assert constant.weight(10) == 0.5

    decreasing = make_inertia(Settings(2, -1.0, 1.0, steps=40, w_max=0.8, w_min=0.2))
    assert isinstance(decreasing, LinearDecreasingInertia)
    assert decreasing.weight(0) == pytest.approx(0.8)
    assert decreasing.weight(39) == pytest.approx(0.2)
