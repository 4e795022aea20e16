"""CLI for the loan engine: payment, totals and the full schedule in the terminal.

Usage:
    python -m pesaguru.cli 100000 12 --term-periods 36
    python -m pesaguru.cli 100000 12 --term-years 3 --frequency biweekly --income 9000
    python -m pesaguru.cli 100000 12 --term-years 3 --compare-rate 11 --compare-years 5
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from pesaguru.config import settings
from pesaguru.engine.affordability import evaluate_result
from pesaguru.engine.amortization import amortize, yearly_summary
from pesaguru.engine.delta import delta
from pesaguru.engine.exceptions import LoanEngineError
from pesaguru.models.loan import AmortizationResult, Frequency, LoanTerms


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None


def _money(v) -> str:
    return f"{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def print_summary(result: AmortizationResult) -> None:
    _header("Loan Summary")
    print(f"  Principal:          {_money(result.principal)}")
    print(f"  Frequency:          {result.frequency.value} ({result.term_periods} payments)")
    print(f"  Periodic Payment:   {_money(result.periodic_payment)}")
    print(f"  Final Payment:      {_money(result.schedule[-1].payment_amount)}")
    print(f"  Total Payment:      {_money(result.total_payment)}")
    print(f"  Total Interest:     {_money(result.total_interest)}")


def print_yearly(result: AmortizationResult) -> None:
    _header("Yearly Breakdown")
    print(f"  {'Year':>4}  {'Principal':>14}  {'Interest':>12}  {'Balance':>14}")
    for y in yearly_summary(result):
        print(f"  {y.year:>4}  {_money(y.principal):>14}  {_money(y.interest):>12}  {_money(y.ending_balance):>14}")


def print_schedule(result: AmortizationResult) -> None:
    _header("Amortization Schedule")
    print(f"  {'#':>4}  {'Due':>10}  {'Payment':>12}  {'Principal':>12}  {'Interest':>12}  {'Balance':>14}")
    for p in result.schedule:
        print(
            f"  {p.index:>4}  {p.due_date.isoformat():>10}  {_money(p.payment_amount):>12}"
            f"  {_money(p.principal_portion):>12}  {_money(p.interest_portion):>12}"
            f"  {_money(p.remaining_balance):>14}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Loan amortization calculator")
    parser.add_argument("principal", type=_decimal, help="Loan amount")
    parser.add_argument("rate", type=_decimal, help="Annual interest rate in percent")
    term = parser.add_mutually_exclusive_group(required=True)
    term.add_argument("--term-periods", type=int, help="Number of payments")
    term.add_argument("--term-years", type=_decimal, help="Term in years")
    parser.add_argument(
        "--frequency", choices=[f.value for f in Frequency], default="monthly",
        help="Payment frequency (default: monthly)",
    )
    parser.add_argument("--start", type=date.fromisoformat, default=date.today(), help="Start date (YYYY-MM-DD)")
    parser.add_argument("--income", type=_decimal, help="Applicant monthly income for affordability")
    parser.add_argument("--compare-rate", type=_decimal, help="Alternative annual rate in percent")
    parser.add_argument("--compare-years", type=_decimal, help="Alternative term in years")
    parser.add_argument("--no-schedule", action="store_true", help="Skip the period-by-period table")

    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")

    terms = LoanTerms(
        principal=args.principal,
        annual_rate_percent=args.rate,
        frequency=Frequency(args.frequency),
        term_periods=args.term_periods,
        term_years=args.term_years,
        start_date=args.start,
    )

    try:
        result = amortize(terms)
        print_summary(result)

        if args.compare_rate is not None or args.compare_years is not None:
            alternative = amortize(LoanTerms(
                principal=args.principal,
                annual_rate_percent=args.compare_rate if args.compare_rate is not None else args.rate,
                frequency=terms.frequency,
                term_years=args.compare_years if args.compare_years is not None else args.term_years,
                term_periods=None if args.compare_years is not None else args.term_periods,
                start_date=args.start,
            ))
            d = delta(result, alternative)
            _header("Alternative Loan")
            print(f"  Periodic Payment:   {_money(alternative.periodic_payment)}")
            print(f"  Total Payment:      {_money(alternative.total_payment)}")
            if d.savings > 0:
                print(f"  Switching saves:    {_money(d.savings)}")
            elif d.savings < 0:
                print(f"  Switching costs:    {_money(-d.savings)}")
            else:
                print("  Switching:          same total cost")

        if args.income is not None:
            a = evaluate_result(result, args.income)
            _header("Affordability")
            print(f"  Required Income:    {_money(a.required_monthly_income)}/mo")
            print(f"  Your Income:        {_money(a.applicant_monthly_income)}/mo")
            print(f"  Affordable:         {'Yes' if a.is_affordable else 'No'}")

        print_yearly(result)
        if not args.no_schedule:
            print_schedule(result)
    except LoanEngineError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
