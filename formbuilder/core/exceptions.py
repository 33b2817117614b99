"""
Core Exceptions

Custom exceptions for the form builder.
"""


class FormBuilderError(Exception):
    """
    Base class for domain errors.

    Routers translate these into HTTP responses; nothing below the router
    layer knows about status codes.
    """

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(FormBuilderError):
    """Raised when a user-scoped operation runs without a current user."""

    default_message = "Not authenticated"


class NotFound(FormBuilderError):
    """
    Raised when a form or record is absent.

    Forms owned by another user are reported the same way, so callers
    cannot probe for ids they do not own.
    """

    default_message = "Form not found"


class ValidationFailed(FormBuilderError):
    """
    Raised when submitted values or a create/update payload are rejected.

    Usage:
        raise ValidationFailed("Check form for errors", invalid_fields=["a1", "b2"])
    """

    default_message = "Validation failed"

    def __init__(self, message: str | None = None, invalid_fields: list[str] | None = None):
        self.invalid_fields = invalid_fields or []
        super().__init__(message)


class MalformedLayout(FormBuilderError):
    """Raised when persisted content cannot be parsed into element instances."""

    default_message = "Malformed form layout"


class InvalidTarget(FormBuilderError):
    """Raised when a drop references an element id missing from the layout."""

    default_message = "Invalid drop target"


class UnknownVariant(FormBuilderError, LookupError):
    """Raised when an element type tag has no registered variant."""

    default_message = "Unknown element type"
