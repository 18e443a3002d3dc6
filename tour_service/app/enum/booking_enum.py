from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class PaymentStatus(str, Enum):
    unpaid = "unpaid"
    deposit_paid = "deposit_paid"
    fully_paid = "fully_paid"


class PaymentMethod(str, Enum):
    cash = "cash"
    cash_deposit = "cash_deposit"


class PaymentMode(str, Enum):
    full = "full"
    deposit = "deposit"
    balance = "balance"


class MetricsRange(str, Enum):
    last_hour = "1h"
    last_day = "24h"
    last_week = "7d"
    last_month = "30d"
    all = "all"
