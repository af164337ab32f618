class EmptyCollectionError(ValueError):
    """Raised when a random pick is requested from zero elements."""


class AbortedError(Exception):
    """Raised when a cancellable delay is interrupted by its signal."""


class NotAdjacentError(AssertionError):
    """Raised when carving between two cells that are not grid neighbors."""
