"""
Exceptions raised by the simulation engine.

NEVER fails silently: clamping and default substitution are logged,
everything else is raised to the caller.
"""


class InvalidSimulationRequest(ValueError):
    """Raised in strict mode when a trial or thread count is not positive."""

    pass


class SimulationExecutionError(RuntimeError):
    """Raised when a game fails inside a worker; the whole run is aborted."""

    pass


class SchedulerStateError(RuntimeError):
    """Raised when the chunk scheduler is driven out of order."""

    pass
