"""
This file contains the numeric state of a particle swarm and the best solution found by it.
"""
import logging
from random import Random
from typing import Any, Callable

import numpy as np

from .errors import ResourceExhaustionError
from .settings import Settings

log = logging.getLogger(__name__)

Objective = Callable[[np.ndarray, Any], float]


class Solution:
    """
    The global best of a run, i.e., the lowest fitness observed at any evaluated position so far.

    Attributes
    ----------
    position : numpy.ndarray
        The global best position.
    fitness : float
        The global best fitness, ``inf`` until the first finite evaluation.
    """

    def __init__(self, dim: int) -> None:
        self.position = np.zeros(dim)
        self.fitness: float = float("inf")

    def update(self, position: np.ndarray, fitness: float) -> bool:
        """
        Take over the given position if its fitness is strictly better than the current global best.

        Non-finite fitness values never compare as better and are thus ignored.

        Parameters
        ----------
        position : numpy.ndarray
            The candidate position. It is copied.
        fitness : float
            The fitness at the candidate position.

        Returns
        -------
        bool
            True if the global best was replaced, False otherwise.
        """
        if fitness < self.fitness:
            self.fitness = float(fitness)
            self.position[:] = position
            return True
        return False

    def __repr__(self) -> str:
        return f"Solution(fitness={self.fitness}, position={self.position})"


class SwarmState:
    """
    Positions, velocities, personal bests and informant positions of all particles of a swarm.

    Each array is indexed by particle first, so that ``positions[i]`` is the position of particle ``i``.

    Attributes
    ----------
    positions : numpy.ndarray
        The current positions, shape ``(size, dim)``.
    velocities : numpy.ndarray
        The current velocities, shape ``(size, dim)``.
    best_positions : numpy.ndarray
        The personal best positions, shape ``(size, dim)``.
    fitness : numpy.ndarray
        The fitness at the current positions, shape ``(size,)``.
    best_fitness : numpy.ndarray
        The personal best fitness values, shape ``(size,)``.
    informants : numpy.ndarray
        The best position contributed by each particle's neighborhood in the current step, shape ``(size, dim)``.
    """

    def __init__(self, size: int, dim: int) -> None:
        """
        Allocate the buffers of a swarm.

        Parameters
        ----------
        size : int
            The number of particles.
        dim : int
            The problem dimension.

        Raises
        ------
        ResourceExhaustionError
            If the buffers cannot be allocated.
        """
        try:
            self.positions = np.zeros((size, dim))
            self.velocities = np.zeros((size, dim))
            self.best_positions = np.zeros((size, dim))
            self.informants = np.zeros((size, dim))
            self.fitness = np.full(size, np.inf)
            self.best_fitness = np.full(size, np.inf)
        except (MemoryError, ValueError) as e:
            raise ResourceExhaustionError(f"Cannot allocate swarm of {size} particles in {dim} dimensions.") from e

    @property
    def size(self) -> int:
        return self.positions.shape[0]

    @property
    def dim(self) -> int:
        return self.positions.shape[1]

    def initialize(
        self,
        objective: Objective,
        params: Any,
        settings: Settings,
        rng: Random,
        solution: Solution,
    ) -> None:
        """
        Scatter the particles uniformly over the search domain and evaluate them.

        For each particle and dimension, two uniform samples ``a`` and ``b`` are drawn from the domain. ``a`` becomes
        the position and the personal best, ``(a - b) / 2`` the initial velocity. The global best is set to the best
        initial particle.

        Parameters
        ----------
        objective : Callable[[numpy.ndarray, Any], float]
            The objective function to minimize.
        params : Any
            The opaque parameter handle passed on to the objective.
        settings : Settings
            The run settings providing the search domain.
        rng : random.Random
            The random number stream of the run.
        solution : Solution
            The global best to initialize.
        """
        lo, hi = settings.range_lo, settings.range_hi
        width = hi - lo
        for i in range(self.size):
            draws = np.array([rng.random() for _ in range(2 * self.dim)])
            a = lo + width * draws[0::2]
            b = lo + width * draws[1::2]
            self.positions[i] = a
            self.best_positions[i] = a
            self.velocities[i] = (a - b) / 2.0

            self.fitness[i] = objective(self.positions[i], params)
            self.best_fitness[i] = self.fitness[i]
            solution.update(self.positions[i], self.fitness[i])
        log.debug(f"Initialized {self.size} particles, best initial fitness {solution.fitness}.")

    def update_best(self, i: int) -> bool:
        """
        Take over particle ``i``'s current position as its personal best if its current fitness is strictly better.

        Parameters
        ----------
        i : int
            The particle index.

        Returns
        -------
        bool
            True if the personal best was replaced, False otherwise.
        """
        if self.fitness[i] < self.best_fitness[i]:
            self.best_fitness[i] = self.fitness[i]
            self.best_positions[i] = self.positions[i]
            return True
        return False
