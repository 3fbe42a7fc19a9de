from importlib.metadata import PackageNotFoundError, version

try:
    # Change here if project is renamed and does not equal the package name
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

from .boundary import BoundaryPolicy, ClampBoundary, PeriodicBoundary
from .errors import ConfigurationError, ResourceExhaustionError, SwarmulateError
from .inertia import ConstantInertia, InertiaSchedule, LinearDecreasingInertia
from .settings import (
    BoundaryMode,
    InertiaStrategy,
    NeighborhoodStrategy,
    Settings,
    calc_swarm_size,
)
from .solver import ProgressReport, Result, Solver, SolverState, solve
from .swarm import Solution, SwarmState
from .topology import (
    CommunicationRelation,
    GlobalTopology,
    NeighborhoodTopology,
    RandomTopology,
    RingTopology,
)
from .utils import log_progress, set_logger_config

__all__ = [
    "Settings",
    "NeighborhoodStrategy",
    "InertiaStrategy",
    "BoundaryMode",
    "calc_swarm_size",
    "SwarmState",
    "Solution",
    "CommunicationRelation",
    "NeighborhoodTopology",
    "GlobalTopology",
    "RingTopology",
    "RandomTopology",
    "InertiaSchedule",
    "ConstantInertia",
    "LinearDecreasingInertia",
    "BoundaryPolicy",
    "ClampBoundary",
    "PeriodicBoundary",
    "Solver",
    "SolverState",
    "ProgressReport",
    "Result",
    "solve",
    "SwarmulateError",
    "ConfigurationError",
    "ResourceExhaustionError",
    "log_progress",
    "set_logger_config",
]
