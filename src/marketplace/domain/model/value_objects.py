"""Immutable values used by shops, carts and orders.

Money is a plain two-decimal amount (the marketplace has one currency),
coordinates and distances are in degrees and kilometres, and opening
hours are minutes since midnight.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from marketplace.domain.exceptions import ValidationError

EARTH_RADIUS_KM = 6371.0
MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative Decimal amount, ordered by value."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(f"Money needs a Decimal amount, not {type(self.amount).__name__}")
        if self.amount.is_signed():
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            return NotImplemented
        return Money(self.amount * factor)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    @staticmethod
    def zero() -> Money:
        return Money(Decimal(0))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Build from any numeric form; floats go through ``str`` first."""
        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            raise ValidationError(f"Invalid money amount: {amount!r}") from None
        return Money(value)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity needs an int, not {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError(f"Longitude out of range: {self.longitude}")

    def distance_km(self, other: Coordinate) -> float:
        """Great-circle (haversine) distance to *other* in kilometres."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = lat2 - lat1
        d_lng = math.radians(other.longitude - self.longitude)
        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
        )
        return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


@dataclass(frozen=True)
class AddressSnapshot:
    """A delivery endpoint frozen into an order.

    Copied from the shop profile or the customer's address book when the
    order is placed and never re-read from those sources afterwards.
    """

    coordinate: Coordinate
    province: str
    city: str
    district: str
    town: str
    address: str
    name: str
    tel: str


@dataclass(frozen=True)
class OpeningHours:
    """Daily opening window in minutes since midnight.

    ``end <= start`` means the window wraps past midnight, e.g. 22:00-02:00
    is ``OpeningHours(True, 1320, 120)``.
    """

    opened: bool
    start: int
    end: int

    def __post_init__(self) -> None:
        for minute in (self.start, self.end):
            if not 0 <= minute < MINUTES_PER_DAY:
                raise ValidationError(f"Minute of day out of range: {minute}")

    def is_open_at(self, minute_of_day: int) -> bool:
        if not self.opened:
            return False
        if self.start < self.end:
            return self.start <= minute_of_day < self.end
        return minute_of_day >= self.start or minute_of_day < self.end
