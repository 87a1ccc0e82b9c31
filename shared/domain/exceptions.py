"""Error taxonomy shared by the domain services.

Validation failures use Django's ``ValidationError`` directly; the classes
below cover the remaining cases the API layer maps to HTTP statuses.
"""

from shared.domain.base import DomainError


class NotFoundError(DomainError):
    """Requested record does not exist."""


class DependencyUnavailable(DomainError):
    """A backing store could not be reached or is not provisioned."""
