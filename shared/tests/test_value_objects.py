from datetime import date
from decimal import Decimal

import pytest

from shared.domain.value_objects import DateRange, Money


def test_money_rounds_to_cents_and_formats_with_currency():
    rent = Money("45000.005", "KES")

    assert rent.amount == Decimal("45000.01")
    assert str(rent) == "KES 45,000.01"


@pytest.mark.parametrize("amount,currency", [(Decimal("-1"), "KES"), (Decimal("10"), "GBP")])
def test_money_rejects_negative_or_unknown_currency(amount, currency):
    with pytest.raises(ValueError):
        Money(amount, currency)


def test_booking_window_excludes_its_end_date():
    window = DateRange.starting(date(2026, 3, 2), 30)

    assert window.end_date == date(2026, 4, 1)
    assert window.days == 30
    assert window.contains(date(2026, 3, 2))
    assert not window.contains(date(2026, 4, 1))


def test_empty_range_is_rejected():
    with pytest.raises(ValueError):
        DateRange(date(2026, 3, 2), date(2026, 3, 2))
