"""Affordability check: does a loan payment fit under a debt-to-income cap?

Pure functions. No I/O (income comes from the caller's profile source).
"""

from decimal import Decimal, ROUND_HALF_UP

from pesaguru.config import settings
from pesaguru.engine.amortization import to_decimal
from pesaguru.engine.exceptions import InvalidAmountError
from pesaguru.engine.periods import periods_per_year
from pesaguru.models.loan import AmortizationResult, Frequency
from pesaguru.models.results import AffordabilityAssessment

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def monthly_equivalent(payment: Decimal, frequency: Frequency | str) -> Decimal:
    """Convert a periodic payment to its average monthly cost."""
    amount = to_decimal(payment, InvalidAmountError, "Payment")
    return (amount * periods_per_year(frequency) / 12).quantize(TWO_PLACES, ROUND_HALF_UP)


def evaluate(
    payment: Decimal,
    monthly_income: Decimal | None,
    debt_to_income_threshold: Decimal | None = None,
    existing_obligations: Decimal = Decimal("0"),
) -> AffordabilityAssessment:
    """Assess a monthly payment against the applicant's monthly income.

    required income = (payment + existing obligations) / threshold.
    Unknown income never yields "unaffordable": is_affordable stays None.
    """
    if debt_to_income_threshold is None:
        debt_to_income_threshold = settings.default_dti_threshold

    pmt = to_decimal(payment, InvalidAmountError, "Payment")
    if pmt <= 0:
        raise InvalidAmountError(f"Payment must be positive, got {pmt}")

    threshold = to_decimal(debt_to_income_threshold, InvalidAmountError, "Debt-to-income threshold")
    if not (0 < threshold <= 1):
        raise InvalidAmountError(f"Debt-to-income threshold must be in (0, 1], got {threshold}")

    existing = to_decimal(existing_obligations, InvalidAmountError, "Existing obligations")
    if existing < 0:
        raise InvalidAmountError(f"Existing obligations cannot be negative, got {existing}")

    obligation = pmt + existing
    required = (obligation / threshold).quantize(TWO_PLACES, ROUND_HALF_UP)

    if monthly_income is None:
        return AffordabilityAssessment(
            required_monthly_income=required,
            monthly_obligation=obligation,
        )

    income = to_decimal(monthly_income, InvalidAmountError, "Monthly income")
    if income < 0:
        raise InvalidAmountError(f"Monthly income cannot be negative, got {income}")

    ratio = (obligation / income).quantize(FOUR_PLACES, ROUND_HALF_UP) if income > 0 else None

    return AffordabilityAssessment(
        required_monthly_income=required,
        monthly_obligation=obligation,
        applicant_monthly_income=income,
        # income >= obligation / threshold, without rounding the quotient
        is_affordable=income * threshold >= obligation,
        debt_to_income_ratio=ratio,
    )


def evaluate_result(
    result: AmortizationResult,
    monthly_income: Decimal | None,
    debt_to_income_threshold: Decimal | None = None,
    existing_obligations: Decimal = Decimal("0"),
) -> AffordabilityAssessment:
    """Affordability of an amortized loan, normalized to a monthly payment."""
    return evaluate(
        monthly_equivalent(result.periodic_payment, result.frequency),
        monthly_income,
        debt_to_income_threshold,
        existing_obligations,
    )
