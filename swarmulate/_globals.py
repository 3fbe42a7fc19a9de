from typing import Final

MAX_SWARM_SIZE: Final[int] = 100  # Upper bound for the swarm-size heuristic
DEFAULT_INERTIA: Final[float] = 0.7298  # Clerc's constriction-equivalent inertia weight
