"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP, DecimalException, localcontext

from pesaguru.config import settings
from pesaguru.engine.exceptions import (
    ComputationError,
    InvalidAmountError,
    InvalidRateError,
    InvalidTermError,
)
from pesaguru.engine.periods import advance, as_frequency, periods_per_year, resolve_term_periods
from pesaguru.models.loan import AmortizationResult, Frequency, LoanTerms, PaymentPeriod
from pesaguru.models.results import YearlySummary

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
MAX_EXTRA_DIGITS = 1000  # Rates smaller than 1E-1000 per period amortize as interest-free


def to_decimal(value, error_cls: type[Exception], label: str) -> Decimal:
    """Coerce to a finite Decimal or raise `error_cls`."""
    if isinstance(value, bool):
        raise error_cls(f"{label} must be a number, got {value!r}")
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except DecimalException:
        raise error_cls(f"{label} must be a number, got {value!r}") from None
    if not d.is_finite():
        raise error_cls(f"{label} must be finite, got {value!r}")
    return d


def _validate_principal(principal) -> Decimal:
    amount = to_decimal(principal, InvalidAmountError, "Principal")
    try:
        amount = amount.quantize(TWO_PLACES, ROUND_HALF_UP)
    except DecimalException:
        raise InvalidAmountError(f"Principal is too large: {principal}") from None
    if amount <= 0:
        raise InvalidAmountError(f"Principal must be positive, got {principal}")
    return amount


def _validate_rate(annual_rate_percent) -> Decimal:
    rate = to_decimal(annual_rate_percent, InvalidRateError, "Annual rate")
    if rate < 0:
        raise InvalidRateError(f"Annual rate cannot be negative, got {rate}")
    return rate


def _validate_term(term_periods) -> int:
    if isinstance(term_periods, bool) or not isinstance(term_periods, int):
        raise InvalidTermError(f"Term must be a whole number of periods, got {term_periods!r}")
    if term_periods <= 0:
        raise InvalidTermError(f"Term must be at least one period, got {term_periods}")
    if term_periods > settings.max_term_periods:
        raise InvalidTermError(
            f"Term of {term_periods} periods exceeds the limit of {settings.max_term_periods}"
        )
    return term_periods


def periodic_rate(annual_rate_percent, frequency: Frequency | str) -> Decimal:
    """Per-period rate as a fraction: 12 (%) monthly -> 0.01."""
    rate = _validate_rate(annual_rate_percent)
    return rate / 100 / periods_per_year(frequency)


def compute_periodic_payment(
    principal,
    annual_rate_percent,
    frequency: Frequency | str,
    term_periods: int,
) -> Decimal:
    """Fixed payment per period that fully repays the loan.

    Zero rate: P / n. Otherwise the annuity formula, evaluated at full
    precision and rounded half-up to cents once at the end.
    """
    amount = _validate_principal(principal)
    rate_pct = _validate_rate(annual_rate_percent)
    n = _validate_term(term_periods)
    r = periodic_rate(rate_pct, frequency)

    try:
        if r == 0 or -r.adjusted() > MAX_EXTRA_DIGITS:
            # Interest over the whole term is far below one cent
            payment = amount / n
        else:
            with localcontext() as ctx:
                # Room for every digit of r, or (1+r)^n - 1 cancels to nothing
                ctx.prec += max(0, -r.adjusted()) + len(str(n))
                # M = P * [r(1+r)^n] / [(1+r)^n - 1]
                factor = (1 + r) ** n
                payment = amount * r * factor / (factor - 1)
        payment = payment.quantize(TWO_PLACES, ROUND_HALF_UP)
    except DecimalException as e:
        raise ComputationError(f"Payment computation failed: {e!r}") from e

    if not payment.is_finite():
        raise ComputationError(f"Payment is not finite: {payment}")

    # A tiny loan over many periods can round to nothing
    if payment < TWO_PLACES:
        payment = TWO_PLACES
    return payment


def generate_schedule(
    principal,
    periodic_rate: Decimal,
    payment,
    term_periods: int,
    start_date: date,
    frequency: Frequency | str,
) -> AmortizationResult:
    """Expand a fixed payment into a period-by-period schedule.

    Interest is rounded to cents each period. Once the balance is paid off
    early, remaining periods carry zero payments. The final period always pays
    the exact remaining balance, so its payment differs from `payment` by the
    accumulated rounding drift and the closing balance is exactly zero.
    """
    freq = as_frequency(frequency)
    amount = _validate_principal(principal)
    rate = to_decimal(periodic_rate, InvalidRateError, "Periodic rate")
    if rate < 0:
        raise InvalidRateError(f"Periodic rate cannot be negative, got {rate}")
    pmt = to_decimal(payment, InvalidAmountError, "Payment")
    if pmt <= 0:
        raise InvalidAmountError(f"Payment must be positive, got {pmt}")
    n = _validate_term(term_periods)

    periods: list[PaymentPeriod] = []
    balance = amount
    total_payment = ZERO

    try:
        for index in range(1, n + 1):
            interest = (balance * rate).quantize(TWO_PLACES, ROUND_HALF_UP)

            if index == n:
                # Final period absorbs all residual drift
                principal_paid = balance
                actual_payment = principal_paid + interest
            else:
                principal_paid = pmt - interest
                actual_payment = pmt
                if principal_paid > balance:
                    principal_paid = balance
                    actual_payment = interest + principal_paid

            balance -= principal_paid
            total_payment += actual_payment

            periods.append(PaymentPeriod(
                index=index,
                due_date=advance(start_date, freq, index),
                payment_amount=actual_payment,
                principal_portion=principal_paid,
                interest_portion=interest,
                remaining_balance=balance,
            ))
    except DecimalException as e:
        raise ComputationError(f"Schedule computation failed: {e!r}") from e

    if not total_payment.is_finite():
        raise ComputationError(f"Total payment is not finite: {total_payment}")

    return AmortizationResult(
        principal=amount,
        periodic_rate=rate,
        frequency=freq,
        periodic_payment=pmt,
        total_payment=total_payment,
        total_interest=total_payment - amount,
        schedule=tuple(periods),
    )


def amortize(terms: LoanTerms) -> AmortizationResult:
    """Payment and full schedule for a set of loan terms."""
    n = resolve_term_periods(terms.frequency, terms.term_periods, terms.term_years)
    pmt = compute_periodic_payment(terms.principal, terms.annual_rate_percent, terms.frequency, n)
    r = periodic_rate(terms.annual_rate_percent, terms.frequency)
    result = generate_schedule(terms.principal, r, pmt, n, terms.start_date, terms.frequency)

    logger.debug(
        "Amortized %s at %s%% over %d %s periods: payment %s, interest %s",
        result.principal, terms.annual_rate_percent, n, result.frequency.value,
        result.periodic_payment, result.total_interest,
    )
    return result


def yearly_summary(result: AmortizationResult) -> list[YearlySummary]:
    """Aggregate a schedule by loan year (not calendar year)."""
    per_year = periods_per_year(result.frequency)
    yearly: list[YearlySummary] = []
    year_principal = ZERO
    year_interest = ZERO
    year_payments = ZERO

    for p in result.schedule:
        year_principal += p.principal_portion
        year_interest += p.interest_portion
        year_payments += p.payment_amount

        if p.index % per_year == 0 or p.index == len(result.schedule):
            yearly.append(YearlySummary(
                year=(p.index - 1) // per_year + 1,
                principal=year_principal,
                interest=year_interest,
                payments=year_payments,
                ending_balance=p.remaining_balance,
            ))
            year_principal = ZERO
            year_interest = ZERO
            year_payments = ZERO

    return yearly
