from datetime import date
from decimal import Decimal

import pytest

from pesaguru.engine.exceptions import InvalidTermError, UnsupportedFrequencyError
from pesaguru.engine.periods import add_months, advance, periods_per_year, resolve_term_periods
from pesaguru.models.loan import Frequency


class TestPeriodsPerYear:
    @pytest.mark.parametrize("frequency,expected", [
        (Frequency.WEEKLY, 52),
        (Frequency.BIWEEKLY, 26),
        (Frequency.MONTHLY, 12),
        (Frequency.QUARTERLY, 4),
    ])
    def test_known_frequencies(self, frequency, expected):
        assert periods_per_year(frequency) == expected

    def test_string_value_accepted(self):
        assert periods_per_year("quarterly") == 4

    def test_unknown_frequency(self):
        with pytest.raises(UnsupportedFrequencyError):
            periods_per_year("daily")


class TestAdvance:
    def test_weekly(self):
        assert advance(date(2026, 1, 1), Frequency.WEEKLY) == date(2026, 1, 8)

    def test_biweekly_crosses_month(self):
        assert advance(date(2026, 1, 25), Frequency.BIWEEKLY) == date(2026, 2, 8)

    def test_monthly_preserves_day(self):
        assert advance(date(2026, 1, 15), Frequency.MONTHLY) == date(2026, 2, 15)

    def test_monthly_clamps_to_month_end(self):
        assert advance(date(2026, 1, 31), Frequency.MONTHLY) == date(2026, 2, 28)

    def test_leap_february(self):
        assert advance(date(2024, 1, 31), Frequency.MONTHLY) == date(2024, 2, 29)

    def test_clamp_does_not_drift(self):
        """Jan 31 anchor: Feb 28, then back to Mar 31, Apr 30."""
        start = date(2026, 1, 31)
        assert advance(start, Frequency.MONTHLY, 2) == date(2026, 3, 31)
        assert advance(start, Frequency.MONTHLY, 3) == date(2026, 4, 30)

    def test_quarterly(self):
        start = date(2025, 11, 30)
        assert advance(start, Frequency.QUARTERLY) == date(2026, 2, 28)
        assert advance(start, Frequency.QUARTERLY, 2) == date(2026, 5, 30)

    def test_year_rollover(self):
        assert add_months(date(2025, 12, 15), 1) == date(2026, 1, 15)

    def test_unknown_frequency(self):
        with pytest.raises(UnsupportedFrequencyError):
            advance(date(2026, 1, 1), "fortnightly")


class TestResolveTermPeriods:
    def test_explicit_periods_win(self):
        assert resolve_term_periods(Frequency.MONTHLY, term_periods=36, term_years=Decimal("5")) == 36

    def test_years_monthly(self):
        assert resolve_term_periods(Frequency.MONTHLY, term_years=Decimal("3")) == 36

    def test_half_years_quarterly(self):
        assert resolve_term_periods(Frequency.QUARTERLY, term_years=Decimal("1.5")) == 6

    def test_half_year_weekly(self):
        assert resolve_term_periods(Frequency.WEEKLY, term_years=Decimal("0.5")) == 26

    def test_fractional_rounds_half_up(self):
        # 0.3 * 12 = 3.6
        assert resolve_term_periods(Frequency.MONTHLY, term_years=Decimal("0.3")) == 4

    def test_too_short(self):
        with pytest.raises(InvalidTermError):
            resolve_term_periods(Frequency.MONTHLY, term_years=Decimal("0.04"))

    def test_missing_term(self):
        with pytest.raises(InvalidTermError):
            resolve_term_periods(Frequency.MONTHLY)
