"""Canonical test fixtures used across engine and API tests.

Fixture: 100,000 borrowed at 12% a year, repaid monthly over 36 months,
first due one month after 2026-01-15.
"""

from datetime import date
from decimal import Decimal

import pytest

from pesaguru.models.loan import Frequency, LoanOffer, LoanTerms


@pytest.fixture
def canonical_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("12"),
        frequency=Frequency.MONTHLY,
        term_periods=36,
        start_date=date(2026, 1, 15),
    )


@pytest.fixture
def offers() -> list[LoanOffer]:
    """Three competing offers for the same 100K loan."""
    return [
        LoanOffer(
            id="kcb-personal",
            provider_name="KCB",
            loan_name="Personal Loan",
            interest_rate=Decimal("14"),
            term_periods=12,
            amount=Decimal("100000"),
            fees=Decimal("2500"),
            requirements=("Payslip", "National ID"),
        ),
        LoanOffer(
            id="equity-flex",
            provider_name="Equity Bank",
            loan_name="Flex Loan",
            interest_rate=Decimal("12"),
            term_periods=24,
            amount=Decimal("100000"),
        ),
        LoanOffer(
            id="coop-salary",
            provider_name="Co-op Bank",
            loan_name="Salary Advance",
            interest_rate=Decimal("12"),
            term_periods=12,
            amount=Decimal("100000"),
            fees=Decimal("1000"),
        ),
    ]
