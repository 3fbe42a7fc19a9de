"""Exceptions raised by Swarmulate."""


class SwarmulateError(Exception):
    """Base class for all errors raised by Swarmulate."""


class ConfigurationError(SwarmulateError, ValueError):
    """Raised when settings are invalid. Always raised before a run starts."""


class ResourceExhaustionError(SwarmulateError, MemoryError):
    """Raised when the numeric buffers of a swarm cannot be allocated."""
