"""Loan calculator routes: amortization, offer comparison, affordability, switch savings."""

from datetime import date

from fastapi import APIRouter, HTTPException

from pesaguru.api.schemas import (
    AffordabilityRequest,
    AffordabilityResponse,
    AmortizationResponse,
    CompareRequest,
    CompareResponse,
    ComparisonEntryResponse,
    DeltaRequest,
    DeltaResponse,
    LoanTermsRequest,
    PaymentPeriodResponse,
    YearlySummaryResponse,
)
from pesaguru.engine.affordability import evaluate
from pesaguru.engine.amortization import amortize, yearly_summary
from pesaguru.engine.comparison import compare
from pesaguru.engine.delta import delta
from pesaguru.engine.exceptions import ComputationError
from pesaguru.models.loan import AmortizationResult, LoanOffer, LoanTerms

router = APIRouter(prefix="/api/v1/loans", tags=["loans"])


def _to_terms(req: LoanTermsRequest) -> LoanTerms:
    return LoanTerms(
        principal=req.principal,
        annual_rate_percent=req.annual_rate_percent,
        frequency=req.frequency,
        term_periods=req.term_periods,
        term_years=req.term_years,
        start_date=req.start_date or date.today(),
    )


def _amortization_to_response(result: AmortizationResult) -> AmortizationResponse:
    """Convert engine AmortizationResult to API response."""
    return AmortizationResponse(
        principal=result.principal,
        frequency=result.frequency,
        term_periods=result.term_periods,
        periodic_payment=result.periodic_payment,
        total_payment=result.total_payment,
        total_interest=result.total_interest,
        schedule=[
            PaymentPeriodResponse(
                index=p.index,
                due_date=p.due_date,
                payment_amount=p.payment_amount,
                principal_portion=p.principal_portion,
                interest_portion=p.interest_portion,
                remaining_balance=p.remaining_balance,
            )
            for p in result.schedule
        ],
        yearly=[
            YearlySummaryResponse(
                year=y.year,
                principal=y.principal,
                interest=y.interest,
                payments=y.payments,
                ending_balance=y.ending_balance,
            )
            for y in yearly_summary(result)
        ],
    )


def _engine_error(e: ValueError) -> HTTPException:
    status = 422 if isinstance(e, ComputationError) else 400
    return HTTPException(status_code=status, detail=str(e))


@router.post("/amortization", response_model=AmortizationResponse)
async def amortization(req: LoanTermsRequest):
    """Loan terms → periodic payment, totals and the complete schedule."""
    try:
        result = amortize(_to_terms(req))
    except ValueError as e:
        raise _engine_error(e)
    return _amortization_to_response(result)


@router.post("/compare", response_model=CompareResponse)
async def compare_offers(req: CompareRequest):
    """Amortize competing offers and flag the best on rate, payment and total."""
    offers = [
        LoanOffer(
            id=o.id,
            provider_name=o.provider_name,
            loan_name=o.loan_name,
            interest_rate=o.interest_rate,
            term_periods=o.term_periods,
            amount=o.amount,
            fees=o.fees,
            requirements=tuple(o.requirements),
            frequency=o.frequency,
        )
        for o in req.offers
    ]
    try:
        comparisons = compare(
            offers,
            shared_principal=req.shared_principal,
            shared_term_periods=req.shared_term_periods,
            start_date=req.start_date,
        )
    except ValueError as e:
        raise _engine_error(e)

    return CompareResponse(results=[
        ComparisonEntryResponse(
            id=c.offer.id,
            provider_name=c.offer.provider_name,
            loan_name=c.offer.loan_name,
            interest_rate=c.offer.interest_rate,
            term_periods=c.result.term_periods,
            amount=c.result.principal,
            fees=c.offer.fees,
            requirements=list(c.offer.requirements),
            periodic_payment=c.result.periodic_payment,
            total_payment=c.result.total_payment,
            total_interest=c.result.total_interest,
            total_cost=c.total_cost,
            is_best_rate=c.is_best_rate,
            is_lowest_payment=c.is_lowest_payment,
            is_lowest_total_cost=c.is_lowest_total_cost,
        )
        for c in comparisons
    ])


@router.post("/affordability", response_model=AffordabilityResponse)
async def affordability(req: AffordabilityRequest):
    """Check a monthly payment against the applicant's income."""
    try:
        a = evaluate(
            req.payment,
            req.monthly_income,
            req.debt_to_income_threshold,
            req.existing_obligations,
        )
    except ValueError as e:
        raise _engine_error(e)

    return AffordabilityResponse(
        required_monthly_income=a.required_monthly_income,
        monthly_obligation=a.monthly_obligation,
        applicant_monthly_income=a.applicant_monthly_income,
        is_affordable=a.is_affordable,
        debt_to_income_ratio=a.debt_to_income_ratio,
    )


@router.post("/delta", response_model=DeltaResponse)
async def switch_delta(req: DeltaRequest):
    """Savings of moving from the current loan to the alternative."""
    try:
        d = delta(amortize(_to_terms(req.current)), amortize(_to_terms(req.alternative)))
    except ValueError as e:
        raise _engine_error(e)

    return DeltaResponse(
        savings=d.savings,
        periodic_payment_difference=d.periodic_payment_difference,
        interest_difference=d.interest_difference,
        is_switch_cheaper=d.is_switch_cheaper,
    )
