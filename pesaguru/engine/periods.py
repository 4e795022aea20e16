"""Payment frequency conversion: periods per year and due-date stepping.

Pure functions. No I/O.
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from pesaguru.engine.exceptions import InvalidTermError, UnsupportedFrequencyError
from pesaguru.models.loan import Frequency

PERIODS_PER_YEAR = {
    Frequency.WEEKLY: 52,
    Frequency.BIWEEKLY: 26,
    Frequency.MONTHLY: 12,
    Frequency.QUARTERLY: 4,
}

DAY_STEPS = {
    Frequency.WEEKLY: 7,
    Frequency.BIWEEKLY: 14,
}

MONTH_STEPS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
}


def as_frequency(frequency: Frequency | str) -> Frequency:
    """Accept a Frequency or its string value ("monthly", ...)."""
    if isinstance(frequency, Frequency):
        return frequency
    try:
        return Frequency(frequency)
    except ValueError:
        raise UnsupportedFrequencyError(f"Unsupported payment frequency: {frequency!r}") from None


def periods_per_year(frequency: Frequency | str) -> int:
    return PERIODS_PER_YEAR[as_frequency(frequency)]


def add_months(anchor: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's end.

    Jan 31 + 1 month = Feb 28 (or 29), never Mar 3.
    """
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))


def advance(start: date, frequency: Frequency | str, times: int = 1) -> date:
    """Due date `times` periods after `start`.

    Month-based steps are measured from `start` itself, so a clamped month end
    does not carry into later periods (Jan 31 -> Feb 28 -> Mar 31).
    """
    freq = as_frequency(frequency)
    if freq in DAY_STEPS:
        return start + timedelta(days=DAY_STEPS[freq] * times)
    return add_months(start, MONTH_STEPS[freq] * times)


def resolve_term_periods(
    frequency: Frequency | str,
    term_periods: int | None = None,
    term_years: Decimal | None = None,
) -> int:
    """Number of payment periods from an explicit count or a term in years.

    An explicit period count wins. Years are converted with the frequency's
    periods per year and rounded half-up (1.5 years quarterly = 6 periods).
    """
    if term_periods is not None:
        return term_periods
    if term_years is None:
        raise InvalidTermError("Either term_periods or term_years is required")

    try:
        years = Decimal(str(term_years))
        periods = (years * periods_per_year(frequency)).quantize(Decimal("1"), ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidTermError(f"Invalid term in years: {term_years!r}") from None

    if not periods.is_finite() or periods < 1:
        raise InvalidTermError(f"Term of {term_years} years is shorter than one payment period")
    return int(periods)
