"""
Common Value Objects

Value objects used across the vehicle and booking domains:
- DateRange: A half-open period [start, end) between two instants
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for availability windows, booking periods and availability queries.
    Both bounds must be of the same kind (two dates or two datetimes).
    """
    start_date: date | datetime
    end_date: date | datetime

    def __post_init__(self):
        if self.start_date is None or self.end_date is None:
            raise ValueError("Both start and end of a date range are required")
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        end_date is exclusive, so adjacent ranges don't overlap.

        Examples:
            - DateRange(10, 20) overlaps with DateRange(15, 16) -> True
            - DateRange(10, 20) overlaps with DateRange(20, 25) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        # Overlap formula: start1 < end2 AND start2 < end1
        return (self.start_date < other.end_date and
                other.start_date < self.end_date)

    def contains(self, moment: date | datetime) -> bool:
        """Check if a moment falls within this range"""
        return self.start_date <= moment < self.end_date

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date!r}, {self.end_date!r})"
