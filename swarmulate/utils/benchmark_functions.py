"""Benchmark function module."""
import argparse
import logging
from typing import Any, Callable, Tuple

import numpy as np


def sphere(x: np.ndarray, params: Any = None) -> float:
    """
    Sphere function: continuous, convex, separable, differentiable, unimodal.

    Input domain: -100 <= x_i <= 100, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.
    params : Any, optional
        Unused.

    Returns
    -------
    float
        The function value.
    """
    return np.sum(x**2).item()


def rosenbrock(x: np.ndarray, params: Any = None) -> float:
    """
    Rosenbrock function. This function has a narrow minimum inside a parabola-shaped valley.

    Input domain: -2.048 <= x_i <= 2.048, i = 1,...,N
    Global minimum 0 at (x_i)_N = (1)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate. One-dimensional positions have no valley and evaluate to a penalty of 1e9.
    params : Any, optional
        Unused.

    Returns
    -------
    float
        The function value.
    """
    if len(x) < 2:
        return 1e9
    return np.sum(100 * (x[1:] - x[:-1] ** 2) ** 2 + (1 - x[:-1]) ** 2).item()


def griewank(x: np.ndarray, params: Any = None) -> float:
    """
    Griewank function.

    Griewank's product creates subpopulations strongly codependent to parallel GAs, while the summation produces a
    parabola. Its local optima lie above parabola level but decrease with increasing dimensions, i.e., the larger the
    search range, the flatter the function.

    Input domain: -600 <= x_i <= 600, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.
    params : Any, optional
        Unused.

    Returns
    -------
    float
        The function value.
    """
    idx = np.arange(1, len(x) + 1)
    return (1 + 1.0 / 4000 * np.sum(x**2) - np.prod(np.cos(x / np.sqrt(idx)))).item()


def rastrigin(x: np.ndarray, params: Any = None) -> float:
    """
    Rastrigin function: continuous, non-convex, separable, differentiable, multimodal.

    A non-linear and highly multimodal function. The local minima are located at a rectangular grid with size 1.
    Their functional values increase with the distance to the global minimum.

    Input domain: -5.12 <= x_i <= 5.12, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.
    params : Any, optional
        Unused.

    Returns
    -------
    float
        The function value.
    """
    a = 10.0
    return (a * len(x) + np.sum(x**2 - a * np.cos(2 * np.pi * x))).item()


def ackley(x: np.ndarray, params: Any = None) -> float:
    """
    Ackley function: continuous, non-convex, non-separable, multimodal.

    A nearly flat outer region with a deep hole at the center, covered by many shallow local minima.

    Input domain: -32 <= x_i <= 32, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.
    params : Any, optional
        Unused.

    Returns
    -------
    float
        The function value.
    """
    a, b, c = 20.0, 0.2, 2 * np.pi
    n = len(x)
    return (-a * np.exp(-b * np.sqrt(np.sum(x**2) / n)) - np.exp(np.sum(np.cos(c * x)) / n) + a + np.e).item()


def get_function_search_space(fname: str) -> Tuple[Callable[[np.ndarray, Any], float], float, float]:
    """
    Get function and search-space bounds from function name.

    The bounds hold for every dimension.

    Parameters
    ----------
    fname : str
        The function name.

    Returns
    -------
    Callable
        The callable function.
    float
        The lower bound.
    float
        The upper bound.

    Raises
    ------
    ValueError
        If the function name is unknown.
    """
    if fname == "sphere":
        return sphere, -100.0, 100.0
    elif fname == "rosenbrock":
        return rosenbrock, -2.048, 2.048
    elif fname == "griewank":
        return griewank, -600.0, 600.0
    elif fname == "rastrigin":
        return rastrigin, -5.12, 5.12
    elif fname == "ackley":
        return ackley, -32.0, 32.0
    else:
        raise ValueError(f"Invalid benchmark function name {fname!r}.")


def parse_arguments() -> argparse.Namespace:
    """
    Set up argument parser for PSO minimization of simple mathematical functions.

    Returns
    -------
    Namespace
        The namespace of all parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="Simple Swarmulate example",
        description="Set up and run a PSO minimization of mathematical functions.",
    )
    parser.add_argument(  # Function to minimize
        "--function",
        type=str,
        choices=["sphere", "rosenbrock", "griewank", "rastrigin", "ackley"],
        default="sphere",
    )
    parser.add_argument("--dim", type=int, default=30)  # Problem dimension
    parser.add_argument("--size", type=int, default=-1)  # Swarm size, -1 derives it from the dimension.
    parser.add_argument("--steps", type=int, default=100000)  # Maximum number of steps
    parser.add_argument("--goal", type=float, default=1e-5)  # Goal error threshold
    parser.add_argument("--seed", type=int, default=0)  # Seed for the random number stream
    parser.add_argument("--c1", type=float, default=1.496)  # Cognitive coefficient
    parser.add_argument("--c2", type=float, default=1.496)  # Social coefficient
    parser.add_argument("--topology", type=str, choices=["global", "ring", "random"], default="ring")
    parser.add_argument("--nhood_size", type=int, default=5)  # Random topology fan-out
    parser.add_argument(
        "--inertia_strategy", type=str, choices=["constant", "linear_decreasing"], default="linear_decreasing"
    )
    parser.add_argument("--inertia", type=float, default=0.7298)  # Constant inertia weight
    parser.add_argument("--w_max", type=float, default=0.7298)
    parser.add_argument("--w_min", type=float, default=0.3)
    parser.add_argument("--boundary", type=str, choices=["clamp", "periodic"], default="clamp")
    parser.add_argument("--print_every", type=int, default=1000)  # Progress report interval, 0 disables it.
    parser.add_argument("--logging_level", type=int, default=logging.INFO)
    parser.add_argument("--log_file", type=str, default=None)

    return parser.parse_args()
