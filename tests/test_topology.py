import random

import numpy as np
import pytest

from swarmulate import (
    CommunicationRelation,
    GlobalTopology,
    RandomTopology,
    RingTopology,
    Settings,
    Solution,
    SwarmState,
)
from swarmulate.topology import inform_best, make_topology


@pytest.fixture
def swarm() -> SwarmState:
    """Provide a one-dimensional swarm of four particles whose personal best positions equal their indices."""
    swarm = SwarmState(4, 1)
    swarm.best_positions[:, 0] = np.arange(4)
    return swarm


def test_relation_reset() -> None:
    """Test a fresh relation only contains self-informing edges."""
    relation = CommunicationRelation(5)
    np.testing.assert_array_equal(relation.matrix, np.eye(5, dtype=bool))
    relation[0, 3] = True
    assert relation[0, 3]
    assert relation.informants_of(3) == [0, 3]
    relation.reset()
    assert not relation[0, 3]
    assert all(relation.degree(i) == 1 for i in range(5))


@pytest.mark.parametrize("size", [3, 4, 10, 31])
def test_ring_degree(size: int) -> None:
    """Test every particle of a ring informs itself and its two neighbors."""
    relation = RingTopology(size).relation
    for i in range(size):
        assert relation.degree(i) == 3
        assert relation[i, i]
        assert relation[i, (i - 1) % size]
        assert relation[i, (i + 1) % size]


@pytest.mark.parametrize("size, degree", [(1, 1), (2, 2)])
def test_small_ring(size: int, degree: int) -> None:
    """Test the left and right neighbors of tiny rings coincide."""
    relation = RingTopology(size).relation
    assert all(relation.degree(i) == degree for i in range(size))


def test_inform_best(swarm: SwarmState) -> None:
    """Test each particle is informed by the personal best of its best ring neighbor."""
    swarm.best_fitness[:] = [5.0, 2.0, 2.0, 9.0]
    inform_best(RingTopology(4).relation, swarm)
    np.testing.assert_array_equal(swarm.informants[:, 0], [1.0, 1.0, 2.0, 2.0])


def test_inform_best_ties(swarm: SwarmState) -> None:
    """Test the first informant in index order wins ties, unless the particle itself is already as good."""
    swarm.best_fitness[:] = [2.0, 5.0, 2.0, 9.0]
    relation = CommunicationRelation(4)
    relation.matrix[:, 3] = True
    relation[0, 2] = True
    inform_best(relation, swarm)
    np.testing.assert_array_equal(swarm.informants[:, 0], [0.0, 1.0, 2.0, 0.0])


def test_global(swarm: SwarmState) -> None:
    """Test the global topology informs every particle with the global best."""
    solution = Solution(1)
    solution.update(np.array([42.0]), 0.5)
    settings = Settings(1, -100.0, 100.0, size=4, nhood_strategy="global")
    topology = GlobalTopology()
    topology.inform_neighbors(swarm, solution, True, settings)
    np.testing.assert_array_equal(swarm.informants[:, 0], [42.0] * 4)
    assert not hasattr(topology, "relation")


def test_random_initialization() -> None:
    """Test the random topology adds at most ``nhood_size`` targets to every particle."""
    topology = RandomTopology(20, 3, random.Random(3))
    relation = topology.relation
    for i in range(20):
        assert relation[i, i]
        assert 1 <= relation.degree(i) <= 4


def test_random_reshuffle() -> None:
    """Test the random relation is only redrawn after a step without improvement."""
    settings = Settings(1, -100.0, 100.0, size=20, nhood_strategy="random", nhood_size=3)
    swarm = SwarmState(20, 1)
    solution = Solution(1)
    topology = RandomTopology(20, 3, random.Random(11))

    before = topology.relation.copy()
    topology.inform_neighbors(swarm, solution, True, settings)
    np.testing.assert_array_equal(topology.relation.matrix, before)

    topology.inform_neighbors(swarm, solution, False, settings)
    assert not np.array_equal(topology.relation.matrix, before)
    assert np.all(np.diag(topology.relation.matrix))


@pytest.mark.parametrize(
    "strategy, topology_type",
    [("global", GlobalTopology), ("ring", RingTopology), ("random", RandomTopology)],
)
def test_make_topology(strategy: str, topology_type: type) -> None:
    """Test the topology factory honors the selected strategy."""
    settings = Settings(2, -1.0, 1.0, size=6, nhood_strategy=strategy)
    topology = make_topology(settings, random.Random(0))
    assert isinstance(topology, topology_type)
    if strategy != "global":
        assert topology.relation.size == 6
