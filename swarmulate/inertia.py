"""
This file contains the inertia schedules computing the inertia weight of each step.
"""
from .settings import InertiaStrategy, Settings


class InertiaSchedule:
    """
    Abstract base class for all inertia schedules.

    Methods
    -------
    weight()
        Return the inertia weight for a step.
    """

    def weight(self, step: int) -> float:
        """
        Return the inertia weight for the given step (not implemented for abstract base class).

        Parameters
        ----------
        step : int
            The current step, starting at 0.

        Raises
        ------
        NotImplementedError
            Whenever called (abstract base class method).
        """
        raise NotImplementedError()


class ConstantInertia(InertiaSchedule):
    """Use the same inertia weight in every step."""

    def __init__(self, w: float) -> None:
        self.w = w

    def weight(self, step: int) -> float:
        return self.w


class LinearDecreasingInertia(InertiaSchedule):
    """
    Decrease the inertia weight linearly from ``w_max`` to ``w_min`` over the first three quarters of the run.

    For the remaining quarter, the weight is held at ``w_min``. A high weight early on favors exploration of the
    search domain, a low weight later on favors refinement around the best positions found.

    This schedule was proposed by Y. Shi and R. Eberhart, "Empirical study of particle swarm optimization", 1999.
    https://doi.org/10.1109/CEC.1999.785511

    Attributes
    ----------
    w_max : float
        The weight at step 0.
    w_min : float
        The weight from the end of the decreasing stage on.
    stage : int
        The last step of the decreasing stage.
    """

    def __init__(self, w_max: float, w_min: float, steps: int) -> None:
        self.w_max = w_max
        self.w_min = w_min
        self.stage = 3 * steps // 4

    def weight(self, step: int) -> float:
        if step >= self.stage:  # Also covers runs too short for a decreasing stage.
            return self.w_min
        return self.w_min + (self.w_max - self.w_min) * (self.stage - step) / self.stage


def make_inertia(settings: Settings) -> InertiaSchedule:
    """Create the inertia schedule selected in the settings."""
    if settings.w_strategy == InertiaStrategy.CONSTANT:
        return ConstantInertia(settings.inertia)
    elif settings.w_strategy == InertiaStrategy.LINEAR_DECREASING:
        return LinearDecreasingInertia(settings.w_max, settings.w_min, settings.steps)
    raise ValueError(f"Unknown inertia strategy {settings.w_strategy!r}.")
