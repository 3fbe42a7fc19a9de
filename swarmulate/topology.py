"""
This file contains the neighborhood topologies deciding which particles inform which others.
"""
import logging
from random import Random
from typing import List

import numpy as np

from .errors import ResourceExhaustionError
from .settings import NeighborhoodStrategy, Settings
from .swarm import Solution, SwarmState

log = logging.getLogger(__name__)


class CommunicationRelation:
    """
    Square boolean matrix stating which particle informs which.

    Entry ``(i, j)`` is True if particle ``i`` acts as an informant for particle ``j``. Every particle always informs
    itself.

    Attributes
    ----------
    matrix : numpy.ndarray
        The boolean ``(size, size)`` matrix, mutated in place.

    Raises
    ------
    ResourceExhaustionError
        If the matrix cannot be allocated.
    """

    def __init__(self, size: int) -> None:
        try:
            self.matrix = np.zeros((size, size), dtype=bool)
        except (MemoryError, ValueError) as e:
            raise ResourceExhaustionError(f"Cannot allocate communication relation of {size} particles.") from e
        self.reset()

    @property
    def size(self) -> int:
        return self.matrix.shape[0]

    def reset(self) -> None:
        """Drop all edges except for the self-informing ones."""
        self.matrix[...] = False
        np.fill_diagonal(self.matrix, True)

    def __getitem__(self, index: tuple) -> bool:
        return bool(self.matrix[index])

    def __setitem__(self, index: tuple, value: bool) -> None:
        self.matrix[index] = value

    def informants_of(self, j: int) -> List[int]:
        """Return the indices of all particles informing particle ``j`` in ascending order."""
        return np.flatnonzero(self.matrix[:, j]).tolist()

    def degree(self, i: int) -> int:
        """Return the number of particles informed by particle ``i``, itself included."""
        return int(np.count_nonzero(self.matrix[i]))

    def copy(self) -> np.ndarray:
        return self.matrix.copy()


class NeighborhoodTopology:
    """
    Abstract base class for all neighborhood topologies.

    A topology fills each particle's informant position, i.e., the position pulling the particle in the social term
    of the velocity update.

    Attributes
    ----------
    relation : CommunicationRelation
        Who informs whom. Only set by topologies based on an explicit relation, i.e., not by ``GlobalTopology``.

    Methods
    -------
    inform_neighbors()
        Refresh the informant positions of all particles.
    """

    relation: CommunicationRelation

    def inform_neighbors(self, swarm: SwarmState, solution: Solution, improved: bool, settings: Settings) -> None:
        """
        Refresh the informant positions of all particles (not implemented for abstract base class).

        Parameters
        ----------
        swarm : SwarmState
            The swarm whose ``informants`` are filled from its personal bests.
        solution : Solution
            The current global best.
        improved : bool
            Whether the previous step improved the global best.
        settings : Settings
            The run settings.

        Raises
        ------
        NotImplementedError
            Whenever called (abstract base class method).
        """
        raise NotImplementedError()


class GlobalTopology(NeighborhoodTopology):
    """Every particle is informed by the global best. No communication relation is needed."""

    def inform_neighbors(self, swarm: SwarmState, solution: Solution, improved: bool, settings: Settings) -> None:
        swarm.informants[:] = solution.position


class RingTopology(NeighborhoodTopology):
    """
    Each particle is informed by itself and its left and right neighbor in index order, wrapping around at the ends.

    The relation is fixed on construction and never changes during a run. For swarms of at most two particles, the
    left and right neighbors coincide.

    Attributes
    ----------
    relation : CommunicationRelation
        The fixed ring relation.
    """

    def __init__(self, size: int) -> None:
        self.relation = CommunicationRelation(size)
        for i in range(size):
            self.relation[i, (i - 1) % size] = True
            self.relation[i, (i + 1) % size] = True

    def inform_neighbors(self, swarm: SwarmState, solution: Solution, improved: bool, settings: Settings) -> None:
        inform_best(self.relation, swarm)


class RandomTopology(NeighborhoodTopology):
    """
    Each particle informs itself and ``nhood_size`` randomly drawn particles.

    Whenever a step fails to improve the global best, the whole relation is drawn anew, so that stagnation reshuffles
    the information flow in the swarm. Drawing the same target twice just reinforces the same edge.

    Reference: M. Clerc. Back to random topology. 2007. http://clerc.maurice.free.fr/pso/random_topology.pdf

    Attributes
    ----------
    nhood_size : int
        The number of random targets drawn per particle.
    relation : CommunicationRelation
        The current random relation, regenerated in place.
    rng : random.Random
        The random number stream of the run.
    """

    def __init__(self, size: int, nhood_size: int, rng: Random) -> None:
        self.nhood_size = nhood_size
        self.rng = rng
        self.relation = CommunicationRelation(size)
        self.reshuffle()

    def reshuffle(self) -> None:
        """Draw a new random relation."""
        self.relation.reset()
        size = self.relation.size
        for i in range(size):
            for _ in range(self.nhood_size):
                self.relation[i, self.rng.randrange(size)] = True

    def inform_neighbors(self, swarm: SwarmState, solution: Solution, improved: bool, settings: Settings) -> None:
        if not improved:
            log.debug(f"Step {settings.step}: no improvement, reshuffling random topology.")
            self.reshuffle()
        inform_best(self.relation, swarm)


def inform_best(relation: CommunicationRelation, swarm: SwarmState) -> None:
    """
    Set each particle's informant position to the personal best of its best informant.

    For particle ``j``, all particles ``i`` informing ``j`` are scanned in index order, starting from ``j`` itself.
    An informant only replaces the current choice if its personal best fitness is strictly lower, so ties are won by
    the first one found.

    Parameters
    ----------
    relation : CommunicationRelation
        The communication relation to scan.
    swarm : SwarmState
        The swarm whose ``informants`` are filled.
    """
    for j in range(relation.size):
        best = j
        for i in relation.informants_of(j):
            if swarm.best_fitness[i] < swarm.best_fitness[best]:
                best = i
        swarm.informants[j] = swarm.best_positions[best]


def make_topology(settings: Settings, rng: Random) -> NeighborhoodTopology:
    """
    Create the neighborhood topology selected in the settings.

    Parameters
    ----------
    settings : Settings
        The run settings.
    rng : random.Random
        The random number stream of the run, consumed by the random topology.

    Returns
    -------
    NeighborhoodTopology
        The topology instance owned by one run.
    """
    if settings.nhood_strategy == NeighborhoodStrategy.GLOBAL:
        return GlobalTopology()
    elif settings.nhood_strategy == NeighborhoodStrategy.RING:
        return RingTopology(settings.size)
    elif settings.nhood_strategy == NeighborhoodStrategy.RANDOM:
        return RandomTopology(settings.size, settings.nhood_size, rng)
    raise ValueError(f"Unknown neighborhood strategy {settings.nhood_strategy!r}.")
