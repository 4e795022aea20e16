"""Loan offer comparison: amortize each offer and flag the best on each axis.

Pure functions. No I/O (offers are fetched by the caller).
"""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from pesaguru.engine.amortization import amortize, to_decimal
from pesaguru.engine.exceptions import (
    EmptyOfferSetError,
    InvalidAmountError,
    InvalidRateError,
    InvalidTermError,
)
from pesaguru.models.loan import AmortizationResult, LoanOffer, LoanTerms
from pesaguru.models.results import ComparisonResult, RankingPriority

logger = logging.getLogger(__name__)


def _first_min_index(values: list[Decimal]) -> int:
    """Index of the first minimum; ties go to the earliest entry."""
    best = 0
    for i in range(1, len(values)):
        if values[i] < values[best]:
            best = i
    return best


def _amortize_offer(
    offer: LoanOffer,
    shared_principal: Decimal | None,
    shared_term_periods: int | None,
    start_date: date,
) -> AmortizationResult:
    amount = offer.amount if offer.amount is not None else shared_principal
    if amount is None:
        raise InvalidAmountError(f"Offer {offer.id!r} has no amount and no shared principal was given")

    term = offer.term_periods if offer.term_periods is not None else shared_term_periods
    if term is None:
        raise InvalidTermError(f"Offer {offer.id!r} has no term and no shared term was given")

    return amortize(LoanTerms(
        principal=amount,
        annual_rate_percent=offer.interest_rate,
        frequency=offer.frequency,
        term_periods=term,
        start_date=start_date,
    ))


def compare(
    offers: Sequence[LoanOffer],
    shared_principal: Decimal | None = None,
    shared_term_periods: int | None = None,
    start_date: date | None = None,
) -> list[ComparisonResult]:
    """Amortize every offer and flag best rate, lowest payment, lowest total.

    Each flag lands on exactly one offer: the first in input order that reaches
    the minimum. Results keep the input order.
    """
    if not offers:
        raise EmptyOfferSetError("At least one loan offer is required for comparison")

    if start_date is None:
        start_date = date.today()

    # Amortize everything up front so a bad offer fails the whole comparison
    rates = [to_decimal(o.interest_rate, InvalidRateError, "Interest rate") for o in offers]
    results = [
        _amortize_offer(o, shared_principal, shared_term_periods, start_date)
        for o in offers
    ]

    best_rate = _first_min_index(rates)
    lowest_payment = _first_min_index([r.periodic_payment for r in results])
    lowest_total = _first_min_index([r.total_payment for r in results])

    logger.debug(
        "Compared %d offers: best rate %s, lowest payment %s, lowest total %s",
        len(offers), offers[best_rate].id, offers[lowest_payment].id, offers[lowest_total].id,
    )

    return [
        ComparisonResult(
            offer=offer,
            result=result,
            is_best_rate=i == best_rate,
            is_lowest_payment=i == lowest_payment,
            is_lowest_total_cost=i == lowest_total,
        )
        for i, (offer, result) in enumerate(zip(offers, results))
    ]


def best_offer(
    comparisons: Sequence[ComparisonResult],
    priority: RankingPriority | str = RankingPriority.INTEREST,
) -> ComparisonResult:
    """Pick the flagged comparison for a ranking priority.

    interest -> best rate, monthly -> lowest periodic payment,
    total -> lowest total repayment.
    """
    if not comparisons:
        raise EmptyOfferSetError("No compared offers to choose from")

    priority = RankingPriority(priority)
    flag = {
        RankingPriority.INTEREST: "is_best_rate",
        RankingPriority.MONTHLY: "is_lowest_payment",
        RankingPriority.TOTAL: "is_lowest_total_cost",
    }[priority]

    for c in comparisons:
        if getattr(c, flag):
            return c
    # Not produced by compare(); rank directly
    key = {
        RankingPriority.INTEREST: lambda c: c.offer.interest_rate,
        RankingPriority.MONTHLY: lambda c: c.result.periodic_payment,
        RankingPriority.TOTAL: lambda c: c.result.total_payment,
    }[priority]
    return min(comparisons, key=key)
