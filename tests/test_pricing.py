import pytest

from tour_service.app.enum.booking_enum import PaymentMode
from tour_service.app.util.pricing import (
    compute_payment_update, compute_total_amount, default_deposit, parse_price)


@pytest.mark.parametrize("value, expected", [
    ("450", 450),
    ("450.90", 450),
    ("  200 MAD", 200),
    ("1100", 1100),
    (300, 300),
    ("MAD 200", None),
    ("", None),
    (None, None),
])
def test_parse_price_keeps_leading_integer(value, expected):
    assert parse_price(value) == expected


def test_total_amount_is_unit_price_times_people_as_string():
    assert compute_total_amount("450", 2) == "900"
    assert compute_total_amount("450.90", 3) == "1350"
    assert compute_total_amount("1100", 1) == "1100"


def test_total_amount_rejects_non_numeric_price():
    with pytest.raises(ValueError):
        compute_total_amount("free", 2)


@pytest.mark.parametrize("total, deposit", [
    (900, 270),
    (1000, 300),
    (455, 137),
    (5, 2),
    (0, 0),
])
def test_default_deposit_is_thirty_percent_rounded_half_up(total, deposit):
    assert default_deposit(total) == deposit


def test_full_payment_pays_the_total():
    update = compute_payment_update("900", 0, PaymentMode.full)
    assert update == {
        "payment_status": "fully_paid",
        "paid_amount": 900,
        "payment_method": "cash",
    }


def test_deposit_defaults_to_thirty_percent():
    update = compute_payment_update("900", 0, PaymentMode.deposit)
    assert update["payment_status"] == "deposit_paid"
    assert update["paid_amount"] == 270
    assert update["deposit_amount"] == 270
    assert update["payment_method"] == "cash_deposit"


def test_deposit_with_explicit_amount():
    update = compute_payment_update("900", 0, "deposit", amount=400)
    assert update["paid_amount"] == 400
    assert update["deposit_amount"] == 400


def test_balance_collects_the_remaining_amount():
    update = compute_payment_update("900", 270, PaymentMode.balance)
    assert update["payment_status"] == "fully_paid"
    assert update["paid_amount"] == 900
    assert update["payment_method"] == "cash"


def test_balance_with_explicit_amount_adds_to_paid():
    update = compute_payment_update("900", 270, PaymentMode.balance, amount=100)
    assert update["paid_amount"] == 370
