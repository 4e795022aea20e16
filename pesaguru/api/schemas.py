"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from pesaguru.models.loan import Frequency


# ---- Request schemas ----

class LoanTermsRequest(BaseModel):
    principal: Decimal = Field(..., description="Amount borrowed")
    annual_rate_percent: Decimal = Field(..., description="Annual interest rate in percent, e.g. 12")
    frequency: Frequency = Frequency.MONTHLY
    term_periods: int | None = Field(None, description="Number of payments")
    term_years: Decimal | None = Field(None, description="Term in years, used when term_periods is absent")
    start_date: date | None = Field(None, description="Defaults to today")


class LoanOfferRequest(BaseModel):
    id: str
    provider_name: str
    loan_name: str
    interest_rate: Decimal
    term_periods: int | None = None
    amount: Decimal | None = None
    fees: Decimal | None = None
    requirements: list[str] = []
    frequency: Frequency = Frequency.MONTHLY


class CompareRequest(BaseModel):
    offers: list[LoanOfferRequest]
    shared_principal: Decimal | None = None
    shared_term_periods: int | None = None
    start_date: date | None = None


class AffordabilityRequest(BaseModel):
    payment: Decimal
    monthly_income: Decimal | None = None
    debt_to_income_threshold: Decimal | None = None
    existing_obligations: Decimal = Decimal("0")


class DeltaRequest(BaseModel):
    current: LoanTermsRequest
    alternative: LoanTermsRequest


# ---- Response schemas ----

class PaymentPeriodResponse(BaseModel):
    index: int
    due_date: date
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


class YearlySummaryResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    payments: Decimal
    ending_balance: Decimal


class AmortizationResponse(BaseModel):
    principal: Decimal
    frequency: Frequency
    term_periods: int
    periodic_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    schedule: list[PaymentPeriodResponse]
    yearly: list[YearlySummaryResponse] = []


class ComparisonEntryResponse(BaseModel):
    id: str
    provider_name: str
    loan_name: str
    interest_rate: Decimal
    term_periods: int
    amount: Decimal
    fees: Decimal | None = None
    requirements: list[str] = []
    periodic_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    total_cost: Decimal
    is_best_rate: bool
    is_lowest_payment: bool
    is_lowest_total_cost: bool


class CompareResponse(BaseModel):
    results: list[ComparisonEntryResponse]


class AffordabilityResponse(BaseModel):
    required_monthly_income: Decimal
    monthly_obligation: Decimal
    applicant_monthly_income: Decimal | None = None
    is_affordable: bool | None = None
    debt_to_income_ratio: Decimal | None = None


class DeltaResponse(BaseModel):
    savings: Decimal
    periodic_payment_difference: Decimal
    interest_difference: Decimal
    is_switch_cheaper: bool
