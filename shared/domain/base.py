"""
Base Domain Classes

Foundational building blocks shared by the rental domains:
- ValueObject: Immutable objects compared by value
- DomainError: Root of the errors raised by domain services
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


class DomainError(Exception):
    """Base class for errors raised by domain services."""
