"""Exceptions raised while building or loading rating policies."""


class PolicyError(Exception):
    """Base class for rating policy errors."""

    pass


class PolicyValidationError(PolicyError):
    """Raised when a rating policy is malformed or inconsistent.

    Surfaced at load time; a policy is never silently corrected.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the problem.
            field: Dotted path of the offending field, if known
                (e.g., "thresholds.good").
        """
        self.message = message
        self.field = field
        super().__init__(message)
