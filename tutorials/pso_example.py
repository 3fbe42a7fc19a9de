"""
This file contains an example use case for the PSO solver. Here, you can choose between benchmark functions and
minimize them. The example shows how to set up the settings and the solver from the command line.
"""
import logging

from swarmulate import Settings, Solver, set_logger_config
from swarmulate.utils.benchmark_functions import get_function_search_space, parse_arguments

log = logging.getLogger("swarmulate")

if __name__ == "__main__":
    print(
        "############################################\n"
        "# SWARMULATE: Particle Swarm Optimization  #\n"
        "############################################\n"
    )

    config = parse_arguments()

    # Set up logger for the PSO run.
    set_logger_config(
        level=config.logging_level,  # Logging level
        log_file=config.log_file,  # Logging path
        log_to_stdout=True,  # Print log on stdout.
        colors=True,  # Use colors.
    )

    function, lo, hi = get_function_search_space(config.function)  # Get callable function + search-space bounds.

    settings = Settings(
        config.dim,
        lo,
        hi,
        size=config.size,
        steps=config.steps,
        goal=config.goal,
        c1=config.c1,
        c2=config.c2,
        inertia=config.inertia,
        w_max=config.w_max,
        w_min=config.w_min,
        nhood_strategy=config.topology,
        nhood_size=config.nhood_size,
        w_strategy=config.inertia_strategy,
        boundary=config.boundary,
        print_every=config.print_every,
    )

    solver = Solver(function, settings, seed=config.seed)
    result = solver.solve()

    log.info(f"Function: {config.function} | state: {result.state.value} @ step {result.step}")
    log.info(f"Best error: {result.fitness:.6e}")
    log.info(f"Best position: {result.position}")
