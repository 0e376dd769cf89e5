"""Custom exception classes for the team builder.

This module defines the application-specific error taxonomy. Managers raise
these; routes translate them into HTTP responses.
"""


class TeamBuilderError(Exception):
    """Base exception for all team builder errors."""

    pass


class InvalidInputError(TeamBuilderError):
    """Raised when input is malformed or violates a semantic rule."""

    pass


class NotFoundError(TeamBuilderError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        """Initialize the exception.

        Args:
            entity: Human readable entity name, e.g. "Project".
            entity_id: The ID that was looked up.
        """
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ForbiddenError(TeamBuilderError):
    """Raised when the acting user may not touch the target entity."""

    pass


class ConflictError(TeamBuilderError):
    """Raised on a uniqueness or state violation."""

    pass


class UpstreamFormatError(TeamBuilderError):
    """Raised when the text-generation boundary returns unusable content."""

    pass


class UpstreamUnavailableError(TeamBuilderError):
    """Raised when the text-generation boundary is absent or times out.

    Never surfaced to API callers: the concierge recovers with its local
    ranking.
    """

    pass
