import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..enum.booking_enum import PaymentMethod, PaymentMode, PaymentStatus

DEPOSIT_RATE = Decimal("0.3")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_price(value) -> Optional[int]:
    """Leading integer of a price string, "450.90" -> 450, "abc" -> None."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def compute_total_amount(price: str, number_of_people: int) -> str:
    unit_price = parse_price(price)
    if unit_price is None:
        raise ValueError(f"Price {price!r} is not a number")
    return str(unit_price * number_of_people)


def default_deposit(total_amount: int) -> int:
    deposit = (Decimal(total_amount) * DEPOSIT_RATE).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP)
    return int(deposit)


def compute_payment_update(total_amount: str, paid_amount: int, mode: PaymentMode,
                           amount: Optional[int] = None) -> dict:
    """Payment fields for a booking after a full, deposit or balance payment."""
    total = parse_price(total_amount) or 0

    if mode == PaymentMode.full:
        return {
            "payment_status": PaymentStatus.fully_paid.value,
            "paid_amount": total,
            "payment_method": PaymentMethod.cash.value,
        }

    if mode == PaymentMode.deposit:
        deposit = amount if amount is not None else default_deposit(total)
        return {
            "payment_status": PaymentStatus.deposit_paid.value,
            "paid_amount": deposit,
            "deposit_amount": deposit,
            "payment_method": PaymentMethod.cash_deposit.value,
        }

    remaining = max(total - (paid_amount or 0), 0)
    collected = amount if amount is not None else remaining
    return {
        "payment_status": PaymentStatus.fully_paid.value,
        "paid_amount": (paid_amount or 0) + collected,
        "payment_method": PaymentMethod.cash.value,
    }
