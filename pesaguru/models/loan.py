"""Loan value types: terms in, schedule out."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class Frequency(Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


@dataclass(frozen=True)
class LoanTerms:
    principal: Decimal
    annual_rate_percent: Decimal  # 12 means 12% a year
    frequency: Frequency = Frequency.MONTHLY
    term_periods: int | None = None
    term_years: Decimal | None = None  # Used only when term_periods is None
    start_date: date = field(default_factory=date.today)


@dataclass(frozen=True)
class PaymentPeriod:
    index: int
    due_date: date
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class AmortizationResult:
    principal: Decimal
    periodic_rate: Decimal
    frequency: Frequency
    periodic_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    schedule: tuple[PaymentPeriod, ...]

    @property
    def term_periods(self) -> int:
        return len(self.schedule)


@dataclass(frozen=True)
class LoanOffer:
    id: str
    provider_name: str
    loan_name: str
    interest_rate: Decimal  # Annual percent
    term_periods: int | None = None
    amount: Decimal | None = None
    fees: Decimal | None = None
    requirements: tuple[str, ...] = ()
    frequency: Frequency = Frequency.MONTHLY
