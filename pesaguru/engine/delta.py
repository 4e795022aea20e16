"""Savings from switching between two amortized loans."""

from pesaguru.engine.exceptions import LoanEngineError
from pesaguru.models.loan import AmortizationResult
from pesaguru.models.results import ComparisonDelta


def delta(result_a: AmortizationResult, result_b: AmortizationResult) -> ComparisonDelta:
    """Differences of A minus B.

    Positive savings: moving from A to B is cheaper by that amount.
    Negative savings: B costs more.
    """
    if result_a is None or result_b is None:
        raise LoanEngineError("Both amortization results are required")

    return ComparisonDelta(
        savings=result_a.total_payment - result_b.total_payment,
        periodic_payment_difference=result_a.periodic_payment - result_b.periodic_payment,
        interest_difference=result_a.total_interest - result_b.total_interest,
    )
