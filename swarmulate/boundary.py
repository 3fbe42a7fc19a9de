"""
This file contains the boundary policies keeping particles inside the search domain.
"""
import numpy as np

from .settings import BoundaryMode, Settings


class BoundaryPolicy:
    """
    Abstract base class for all boundary policies.

    A policy corrects a freshly moved particle in place, dimension by dimension. Only dimensions that left the
    interval ``[range_lo, range_hi]`` are touched; their velocity component is set to zero.

    Attributes
    ----------
    range_lo : numpy.ndarray
        The per-dimension lower bounds.
    range_hi : numpy.ndarray
        The per-dimension upper bounds.
    """

    def __init__(self, range_lo: np.ndarray, range_hi: np.ndarray) -> None:
        self.range_lo = range_lo
        self.range_hi = range_hi
        self.width = range_hi - range_lo

    def apply(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        """
        Move the out-of-bounds components of ``position`` back into the domain and stop them.

        Parameters
        ----------
        position : numpy.ndarray
            The particle position, modified in place.
        velocity : numpy.ndarray
            The particle velocity, modified in place.

        Returns
        -------
        numpy.ndarray
            A boolean mask of the corrected dimensions.
        """
        below = position < self.range_lo
        above = position > self.range_hi
        self._correct(position, below, above)
        violated = below | above
        velocity[violated] = 0.0
        return violated

    def _correct(self, position: np.ndarray, below: np.ndarray, above: np.ndarray) -> None:
        raise NotImplementedError()


class ClampBoundary(BoundaryPolicy):
    """Pin violated components to the bound they crossed. Zeroing the velocity prevents repeated overshooting."""

    def _correct(self, position: np.ndarray, below: np.ndarray, above: np.ndarray) -> None:
        position[below] = self.range_lo[below]
        position[above] = self.range_hi[above]


class PeriodicBoundary(BoundaryPolicy):
    """
    Wrap violated components around, treating the domain as periodic in every dimension.

    A particle leaving the domain at one edge re-enters at the opposite edge at the same offset, modulo the width of
    the domain: ``range_lo - eps`` becomes ``range_hi - eps`` and ``range_hi + eps`` becomes ``range_lo + eps``.
    """

    def _correct(self, position: np.ndarray, below: np.ndarray, above: np.ndarray) -> None:
        position[below] = self.range_hi[below] - np.fmod(self.range_lo[below] - position[below], self.width[below])
        position[above] = self.range_lo[above] + np.fmod(position[above] - self.range_hi[above], self.width[above])


def make_boundary(settings: Settings) -> BoundaryPolicy:
    """Create the boundary policy selected in the settings."""
    if settings.boundary == BoundaryMode.CLAMP:
        return ClampBoundary(settings.range_lo, settings.range_hi)
    elif settings.boundary == BoundaryMode.PERIODIC:
        return PeriodicBoundary(settings.range_lo, settings.range_hi)
    raise ValueError(f"Unknown boundary mode {settings.boundary!r}.")
