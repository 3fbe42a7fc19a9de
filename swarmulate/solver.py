import logging
import random
from enum import Enum
from typing import Any, Callable, List, NamedTuple, Optional

import numpy as np

from .boundary import BoundaryPolicy, make_boundary
from .inertia import InertiaSchedule, make_inertia
from .settings import Settings
from .swarm import Objective, Solution, SwarmState
from .topology import NeighborhoodTopology, make_topology
from .utils import log_progress

log = logging.getLogger(__name__)  # Get logger instance.


class SolverState(Enum):
    """The states of a PSO run. All states but ``INITIALIZING`` and ``RUNNING`` are terminal."""

    INITIALIZING = "initializing"
    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self not in (SolverState.INITIALIZING, SolverState.RUNNING)


class ProgressReport(NamedTuple):
    """Snapshot handed to the progress collaborator every ``print_every`` steps."""

    step: int
    steps: int
    inertia: float
    best_fitness: float


class Result:
    """
    The outcome of a PSO run.

    Attributes
    ----------
    position : numpy.ndarray
        The global best position.
    fitness : float
        The global best fitness.
    state : SolverState
        The terminal state of the run.
    step : int
        The number of update steps performed before the run terminated.
    history : List[float]
        The global best fitness at the end of each performed step.
    """

    def __init__(
        self,
        position: np.ndarray,
        fitness: float,
        state: SolverState,
        step: int,
        history: List[float],
    ) -> None:
        self.position = position
        self.fitness = fitness
        self.state = state
        self.step = step
        self.history = history

    @property
    def converged(self) -> bool:
        return self.state is SolverState.CONVERGED

    def __repr__(self) -> str:
        return f"Result(state={self.state.value}, step={self.step}, fitness={self.fitness}, position={self.position})"


class Solver:
    """
    Particle swarm optimizer minimizing a real-valued objective over a box-bounded domain.

    One solver performs exactly one run and exclusively owns all state of it: the swarm, the global best, the
    neighborhood topology, and the random number stream. A run moves from ``INITIALIZING`` to ``RUNNING`` and ends
    either ``CONVERGED`` (goal reached), ``EXHAUSTED`` (step budget used up), or ``CANCELLED`` (``should_stop``
    returned True).

    Attributes
    ----------
    boundary : BoundaryPolicy
        The boundary policy.
    history : List[float]
        The global best fitness at the end of each performed step.
    improved : bool
        Whether the global best improved during the last performed step.
    inertia : InertiaSchedule
        The inertia schedule.
    objective : Callable[[numpy.ndarray, Any], float]
        The objective function to minimize.
    params : Any
        The opaque parameter handle passed on to the objective.
    progress : Callable[[ProgressReport], None], optional
        The progress collaborator.
    rng : random.Random
        The random number stream of the run.
    settings : Settings
        The run settings.
    should_stop : Callable[[], bool], optional
        Cancellation check evaluated at the beginning of each step.
    solution : Solution
        The global best.
    state : SolverState
        The current state of the run.
    steps_done : int
        The number of performed update steps.
    swarm : SwarmState
        The swarm.
    topology : NeighborhoodTopology
        The neighborhood topology.
    w : float
        The inertia weight used in the last performed step.

    Methods
    -------
    initialize()
        Scatter and evaluate the initial swarm.
    step()
        Perform a single step of the run.
    solve()
        Run until a terminal state is reached.
    """

    def __init__(
        self,
        objective: Objective,
        settings: Settings,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        params: Any = None,
        progress: Optional[Callable[[ProgressReport], None]] = log_progress,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        """
        Initialize a solver for one run.

        Parameters
        ----------
        objective : Callable[[numpy.ndarray, Any], float]
            The objective function to minimize. It receives a position and ``params`` and must not have side effects.
        settings : Settings
            The run settings. They must not be changed during the run.
        rng : random.Random, optional
            The random number stream to consume. Mutually exclusive with ``seed``.
        seed : int, optional
            The seed of a new random number stream. Mutually exclusive with ``rng``.
        params : Any, optional
            The opaque parameter handle passed on to the objective. Default is None.
        progress : Callable[[ProgressReport], None], optional
            Called every ``settings.print_every`` steps. Default logs the report.
        should_stop : Callable[[], bool], optional
            Checked at the beginning of each step; the run is cancelled once it returns True.

        Raises
        ------
        ValueError
            If both ``rng`` and ``seed`` are given.
        """
        if rng is not None and seed is not None:
            raise ValueError("Pass either a random number stream or a seed, not both.")
        self.objective = objective
        self.params = params
        self.settings = settings
        self.rng = rng if rng is not None else random.Random(seed)
        self.progress = progress
        self.should_stop = should_stop

        self.inertia: InertiaSchedule = make_inertia(settings)
        self.boundary: BoundaryPolicy = make_boundary(settings)
        self.topology: Optional[NeighborhoodTopology] = None
        self.swarm: Optional[SwarmState] = None
        self.solution: Optional[Solution] = None

        self.state = SolverState.INITIALIZING
        self.steps_done = 0
        self.improved = False
        self.w = self.inertia.weight(0)
        self.history: List[float] = []

    def initialize(self) -> None:
        """
        Build the topology and scatter and evaluate the initial swarm.

        Raises
        ------
        RuntimeError
            If the solver has already been initialized.
        ResourceExhaustionError
            If the swarm buffers or the communication relation cannot be allocated.
        """
        if self.state is not SolverState.INITIALIZING:
            raise RuntimeError(f"Solver has already been initialized, state is {self.state.value}.")
        settings = self.settings
        settings.step = 0
        log.info(f"Starting PSO run: {settings}")

        self.topology = make_topology(settings, self.rng)
        self.swarm = SwarmState(settings.size, settings.dim)
        self.solution = Solution(settings.dim)
        self.swarm.initialize(self.objective, self.params, settings, self.rng, self.solution)
        self.state = SolverState.RUNNING
        log.info(f"Initial global best fitness: {self.solution.fitness}")

    def step(self) -> SolverState:
        """
        Perform a single step of the run.

        The stopping conditions are checked first, so a goal already reached by the initial swarm stops the run
        before any particle moves. Otherwise, every particle is accelerated towards its personal best and its best
        informant's personal best, moved, kept in the domain, and evaluated.

        Returns
        -------
        SolverState
            The state after the step. Stepping a terminated solver does nothing.

        Raises
        ------
        RuntimeError
            If the solver has not been initialized.
        """
        if self.state is SolverState.INITIALIZING:
            raise RuntimeError("Solver has to be initialized before stepping.")
        if self.state.terminal:
            return self.state

        settings, swarm, solution = self.settings, self.swarm, self.solution
        step = self.steps_done
        settings.step = step

        if solution.fitness <= settings.goal:
            log.info(f"Goal achieved @ step {step} (error={solution.fitness:.3e}).")
            self.state = SolverState.CONVERGED
            return self.state
        if step >= settings.steps:
            log.info(f"Step budget of {settings.steps} exhausted (error={solution.fitness:.3e}).")
            self.state = SolverState.EXHAUSTED
            return self.state
        if self.should_stop is not None and self.should_stop():
            log.info(f"Run cancelled @ step {step} (error={solution.fitness:.3e}).")
            self.state = SolverState.CANCELLED
            return self.state

        self.w = w = self.inertia.weight(step)
        # The topology sees whether the previous step improved the global best.
        self.topology.inform_neighbors(swarm, solution, self.improved, settings)
        self.improved = False

        dim = settings.dim
        for i in range(settings.size):
            draws = np.array([self.rng.random() for _ in range(2 * dim)])
            rho1 = settings.c1 * draws[0::2]
            rho2 = settings.c2 * draws[1::2]

            position, velocity = swarm.positions[i], swarm.velocities[i]
            velocity[:] = (
                w * velocity
                + rho1 * (swarm.best_positions[i] - position)
                + rho2 * (swarm.informants[i] - position)
            )
            position += velocity
            self.boundary.apply(position, velocity)

            swarm.fitness[i] = self.objective(position, self.params)
            swarm.update_best(i)
            if solution.update(position, swarm.fitness[i]):
                self.improved = True

        self.history.append(solution.fitness)
        if settings.print_every and step % settings.print_every == 0 and self.progress is not None:
            self.progress(ProgressReport(step, settings.steps, w, solution.fitness))
        self.steps_done += 1
        return self.state

    def solve(self) -> Result:
        """
        Run until the goal is reached, the step budget is exhausted, or the run is cancelled.

        Returns
        -------
        Result
            The global best and the terminal state of the run.
        """
        if self.state is SolverState.INITIALIZING:
            self.initialize()
        while not self.state.terminal:
            self.step()
        result = self.result()
        log.info(f"PSO run done: {result}")
        return result

    def result(self) -> Result:
        """Return a snapshot of the current global best and state of the run."""
        return Result(
            self.solution.position.copy(),
            self.solution.fitness,
            self.state,
            self.steps_done,
            list(self.history),
        )


def solve(objective: Objective, settings: Settings, **kwargs: Any) -> Result:
    """
    Minimize ``objective`` with the given settings in a single call.

    Parameters
    ----------
    objective : Callable[[numpy.ndarray, Any], float]
        The objective function to minimize.
    settings : Settings
        The run settings.
    **kwargs
        Passed on to ``Solver``.

    Returns
    -------
    Result
        The global best and the terminal state of the run.
    """
    return Solver(objective, settings, **kwargs).solve()
