"""Custom exceptions for terrain generation."""


class GenerationError(Exception):
    """Base exception for terrain generation errors."""

    pass


class InvalidJobError(GenerationError):
    """Raised when a job has a missing or invalid input descriptor."""

    pass


class JobStateError(GenerationError):
    """Raised when a job is run twice or its output is read before it is done."""

    pass


class FieldShapeError(GenerationError):
    """Raised when a field or mesh array has the wrong shape."""

    pass
