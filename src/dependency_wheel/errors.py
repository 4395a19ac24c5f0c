"""Exception types raised by dependency_wheel."""


class DependencyWheelError(Exception):
    """Base class for all dependency wheel errors."""


class ValidationError(DependencyWheelError, ValueError):
    """Input matrix or configuration is malformed."""


class LayoutError(DependencyWheelError):
    """Chord layout cannot be computed for the given parameters."""
