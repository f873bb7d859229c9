"""
Exceptions raised by the ticketing services.

All of them are reported synchronously to the caller and never retried.
"""


class TicketingError(Exception):
    """Base class for all ticketing errors."""


class ValidationError(TicketingError, ValueError):
    """A required field is missing or empty."""


class AuthorizationError(TicketingError):
    """The acting role or the ticket's current state does not permit the operation."""


class NotFoundError(TicketingError, LookupError):
    """The referenced record does not exist in the store."""


class DuplicateIdError(TicketingError):
    """A record with the same identifier already exists in the store."""


class CollaboratorError(TicketingError):
    """The analysis collaborator failed to produce a report."""
