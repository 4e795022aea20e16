from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from pesaguru.models.loan import AmortizationResult, LoanOffer


class RankingPriority(Enum):
    INTEREST = "interest"
    MONTHLY = "monthly"
    TOTAL = "total"


@dataclass(frozen=True)
class ComparisonResult:
    offer: LoanOffer
    result: AmortizationResult
    is_best_rate: bool = False
    is_lowest_payment: bool = False
    is_lowest_total_cost: bool = False

    @property
    def total_cost(self) -> Decimal:
        """Total repayment plus any upfront fees."""
        return self.result.total_payment + (self.offer.fees or Decimal("0"))


@dataclass(frozen=True)
class AffordabilityAssessment:
    required_monthly_income: Decimal
    monthly_obligation: Decimal  # New payment plus existing obligations
    applicant_monthly_income: Decimal | None = None
    is_affordable: bool | None = None  # None = income unknown, not "no"
    debt_to_income_ratio: Decimal | None = None


@dataclass(frozen=True)
class ComparisonDelta:
    savings: Decimal  # Positive = switching from A to B is cheaper
    periodic_payment_difference: Decimal
    interest_difference: Decimal

    @property
    def is_switch_cheaper(self) -> bool:
        return self.savings > 0


@dataclass(frozen=True)
class YearlySummary:
    year: int
    principal: Decimal
    interest: Decimal
    payments: Decimal
    ending_balance: Decimal
