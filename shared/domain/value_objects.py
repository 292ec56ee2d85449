"""
Common Value Objects

- Money: rent and deposit amounts in one of the marketplace currencies
- DateRange: booking windows and lease terms (start inclusive, end exclusive)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('KES', 'USD', 'EUR')

CENT = Decimal('0.01')


@dataclass(frozen=True)
class Money(ValueObject):
    """Non-negative amount rounded to cents"""
    amount: Decimal
    currency: str = 'KES'

    def __post_init__(self):
        amount = Decimal(str(self.amount)).quantize(CENT, rounding=ROUND_HALF_UP)
        if amount < 0:
            raise ValueError(f"Amount cannot be negative: {amount}")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")
        object.__setattr__(self, 'amount', amount)

    def __str__(self):
        return f"{self.currency} {self.amount:,.2f}"


@dataclass(frozen=True)
class DateRange(ValueObject):
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    @classmethod
    def starting(cls, start_date: date, days: int) -> 'DateRange':
        """Range of ``days`` days beginning at ``start_date``"""
        return cls(start_date, start_date + timedelta(days=days))

    def contains(self, day: date) -> bool:
        return self.start_date <= day < self.end_date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()}..{self.end_date.isoformat()}"
