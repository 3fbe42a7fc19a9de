import math
from enum import Enum
from typing import Sequence, Type, TypeVar, Union

import numpy as np

from ._globals import DEFAULT_INERTIA, MAX_SWARM_SIZE
from .errors import ConfigurationError

Bounds = Union[float, Sequence[float], np.ndarray]
_Tag = TypeVar("_Tag", bound=Enum)


class NeighborhoodStrategy(str, Enum):
    """Which particles inform which others."""

    GLOBAL = "global"
    RING = "ring"
    RANDOM = "random"


class InertiaStrategy(str, Enum):
    """How the inertia weight evolves over the steps of a run."""

    CONSTANT = "constant"
    LINEAR_DECREASING = "linear_decreasing"


class BoundaryMode(str, Enum):
    """What happens to a particle leaving the search domain."""

    CLAMP = "clamp"
    PERIODIC = "periodic"


def calc_swarm_size(dim: int) -> int:
    """
    Suggest a swarm size for a problem of the given dimension.

    Uses the common heuristic ``10 + 2 * sqrt(dim)``, capped at ``MAX_SWARM_SIZE``.

    Parameters
    ----------
    dim : int
        The problem dimension.

    Returns
    -------
    int
        The suggested number of particles.
    """
    size = int(10.0 + 2.0 * math.sqrt(dim))
    return min(size, MAX_SWARM_SIZE)


def _as_tag(value: Union[str, _Tag], tag_type: Type[_Tag], name: str) -> _Tag:
    try:
        return tag_type(value)
    except ValueError:
        choices = ", ".join(repr(t.value) for t in tag_type)
        raise ConfigurationError(f"Invalid {name} {value!r}, expected one of {choices}.") from None


def _as_bounds(value: Bounds, dim: int, name: str) -> np.ndarray:
    bounds = np.array(value, dtype=float)
    if bounds.ndim == 0:
        bounds = np.full(dim, bounds.item())
    if bounds.shape != (dim,):
        raise ConfigurationError(f"{name} must be a scalar or have length {dim}, got shape {bounds.shape}.")
    if not np.all(np.isfinite(bounds)):
        raise ConfigurationError(f"{name} must be finite, got {bounds.tolist()}.")
    bounds.flags.writeable = False
    return bounds


class Settings:
    """
    Configuration of a single PSO run.

    A ``Settings`` object is validated once on construction and must not be changed while a run is in progress.
    The only exception is ``step``, which the solver updates so that the current step can be inspected from outside.

    Attributes
    ----------
    dim : int
        The problem dimension.
    range_lo : numpy.ndarray
        The read-only per-dimension lower bounds.
    range_hi : numpy.ndarray
        The read-only per-dimension upper bounds.
    size : int
        The number of particles in the swarm.
    steps : int
        The maximum number of update steps.
    goal : float
        The run stops as soon as the global best fitness is less than or equal to this threshold.
    c1 : float
        The cognitive coefficient, i.e., the pull towards a particle's personal best.
    c2 : float
        The social coefficient, i.e., the pull towards the best informant's personal best.
    inertia : float
        The inertia weight of the constant inertia schedule.
    w_max : float
        The initial inertia weight of the linearly decreasing inertia schedule.
    w_min : float
        The final inertia weight of the linearly decreasing inertia schedule.
    nhood_strategy : NeighborhoodStrategy
        The neighborhood topology.
    nhood_size : int
        The number of random informant targets each particle draws in the random topology.
    w_strategy : InertiaStrategy
        The inertia schedule.
    boundary : BoundaryMode
        The boundary handling policy.
    print_every : int
        The interval in steps between progress reports. 0 disables progress reports.
    step : int
        The current step of the run using these settings.
    """

    def __init__(
        self,
        dim: int,
        range_lo: Bounds,
        range_hi: Bounds,
        size: int = -1,
        steps: int = 100000,
        goal: float = 1e-5,
        c1: float = 1.496,
        c2: float = 1.496,
        inertia: float = DEFAULT_INERTIA,
        w_max: float = DEFAULT_INERTIA,
        w_min: float = 0.3,
        nhood_strategy: Union[str, NeighborhoodStrategy] = NeighborhoodStrategy.RING,
        nhood_size: int = 5,
        w_strategy: Union[str, InertiaStrategy] = InertiaStrategy.LINEAR_DECREASING,
        boundary: Union[str, BoundaryMode] = BoundaryMode.CLAMP,
        print_every: int = 1000,
    ) -> None:
        """
        Initialize and validate PSO settings.

        Parameters
        ----------
        dim : int
            The problem dimension. Must be at least 1.
        range_lo : float | Sequence[float] | numpy.ndarray
            The lower bounds, either one value for all dimensions or one value per dimension.
        range_hi : float | Sequence[float] | numpy.ndarray
            The upper bounds, either one value for all dimensions or one value per dimension.
        size : int, optional
            The swarm size. Default is -1, i.e., derive it from ``dim`` with ``calc_swarm_size``.
        steps : int, optional
            The maximum number of steps. Default is 100000.
        goal : float, optional
            The goal error threshold. Default is 1e-5.
        c1 : float, optional
            The cognitive coefficient. Default is 1.496.
        c2 : float, optional
            The social coefficient. Default is 1.496.
        inertia : float, optional
            The constant inertia weight. Default is 0.7298.
        w_max : float, optional
            The initial weight of the linearly decreasing schedule. Default is 0.7298.
        w_min : float, optional
            The final weight of the linearly decreasing schedule. Default is 0.3.
        nhood_strategy : str | NeighborhoodStrategy, optional
            The neighborhood topology. Default is ring.
        nhood_size : int, optional
            The random topology fan-out. Default is 5.
        w_strategy : str | InertiaStrategy, optional
            The inertia schedule. Default is linearly decreasing.
        boundary : str | BoundaryMode, optional
            The boundary handling policy. Default is clamp.
        print_every : int, optional
            The progress report interval. Default is 1000.

        Raises
        ------
        ConfigurationError
            If any of the settings is invalid.
        """
        if dim < 1:
            raise ConfigurationError(f"Dimension must be at least 1, got {dim}.")
        self.dim = dim
        self.range_lo = _as_bounds(range_lo, dim, "range_lo")
        self.range_hi = _as_bounds(range_hi, dim, "range_hi")
        if not np.all(self.range_lo < self.range_hi):
            bad = np.flatnonzero(~(self.range_lo < self.range_hi)).tolist()
            raise ConfigurationError(f"Lower bounds must be less than upper bounds, violated in dimensions {bad}.")

        self.size = calc_swarm_size(dim) if size == -1 else size
        if self.size < 1:
            raise ConfigurationError(f"Swarm size must be at least 1, got {size}.")
        if not c1 > 0 or not c2 > 0:
            raise ConfigurationError(f"Coefficients c1 and c2 must be positive, got c1={c1}, c2={c2}.")
        if steps < 0:
            raise ConfigurationError(f"Number of steps must not be negative, got {steps}.")
        if print_every < 0:
            raise ConfigurationError(f"Progress interval must not be negative, got {print_every}.")
        if nhood_size < 0:
            raise ConfigurationError(f"Neighborhood size must not be negative, got {nhood_size}.")

        self.steps = steps
        self.goal = goal
        self.c1 = c1
        self.c2 = c2
        self.inertia = inertia
        self.w_max = w_max
        self.w_min = w_min
        self.nhood_strategy = _as_tag(nhood_strategy, NeighborhoodStrategy, "neighborhood strategy")
        self.nhood_size = nhood_size
        self.w_strategy = _as_tag(w_strategy, InertiaStrategy, "inertia strategy")
        self.boundary = _as_tag(boundary, BoundaryMode, "boundary mode")
        self.print_every = print_every
        self.step = 0

    def __repr__(self) -> str:
        return (
            f"Settings(dim={self.dim}, size={self.size}, steps={self.steps}, goal={self.goal}, "
            f"c1={self.c1}, c2={self.c2}, nhood_strategy={self.nhood_strategy.value}, "
            f"w_strategy={self.w_strategy.value}, boundary={self.boundary.value})"
        )
