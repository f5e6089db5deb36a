"""Exceptions raised by DazzleWalk.

Handler failures are never raised from here - they are recorded on the
walk's context and routed to the walker's error callback. The classes below
cover contract violations made before or outside a walk.
"""


class WalkerError(Exception):
    """Base class for all DazzleWalk errors."""
    pass


class WalkerConfigurationError(WalkerError, ValueError):
    """Raised when a walker or its configuration is set up incorrectly.

    Examples: two child walkers registered for the same value type, or a
    WalkConfig that fails validation.
    """
    pass


class WalkEndedError(WalkerError, RuntimeError):
    """Raised when work is handed to a context whose walk already ended."""
    pass
