"""Tests for loan offer comparison."""

from datetime import date
from decimal import Decimal

import pytest

from pesaguru.engine.comparison import best_offer, compare
from pesaguru.engine.exceptions import EmptyOfferSetError, InvalidAmountError, InvalidTermError
from pesaguru.models.loan import LoanOffer
from pesaguru.models.results import RankingPriority

START = date(2026, 1, 15)


def _offer(offer_id: str, rate: str, term: int | None = 12, amount: str | None = "100000") -> LoanOffer:
    return LoanOffer(
        id=offer_id,
        provider_name=f"{offer_id} bank",
        loan_name="Personal Loan",
        interest_rate=Decimal(rate),
        term_periods=term,
        amount=Decimal(amount) if amount is not None else None,
    )


class TestCompare:
    def test_empty_offers(self):
        with pytest.raises(EmptyOfferSetError):
            compare([])

    def test_preserves_input_order(self, offers):
        results = compare(offers, start_date=START)
        assert [r.offer.id for r in results] == ["kcb-personal", "equity-flex", "coop-salary"]

    def test_flags(self, offers):
        results = compare(offers, start_date=START)
        by_id = {r.offer.id: r for r in results}
        # Equity and Co-op tie at 12%: the earlier one (Equity) gets the flag
        assert by_id["equity-flex"].is_best_rate
        assert not by_id["coop-salary"].is_best_rate
        # 24 months spreads the payment thinnest
        assert by_id["equity-flex"].is_lowest_payment
        # 12% over 12 months pays the least interest overall
        assert by_id["coop-salary"].is_lowest_total_cost

    def test_exactly_one_of_each_flag(self, offers):
        results = compare(offers, start_date=START)
        assert sum(r.is_best_rate for r in results) == 1
        assert sum(r.is_lowest_payment for r in results) == 1
        assert sum(r.is_lowest_total_cost for r in results) == 1

    def test_identical_offers_flag_first(self):
        results = compare([_offer("a", "10"), _offer("b", "10"), _offer("c", "10")], start_date=START)
        assert [r.is_best_rate for r in results] == [True, False, False]
        assert [r.is_lowest_payment for r in results] == [True, False, False]
        assert [r.is_lowest_total_cost for r in results] == [True, False, False]

    def test_each_offer_uses_its_own_terms(self, offers):
        results = compare(offers, start_date=START)
        assert results[0].result.term_periods == 12
        assert results[1].result.term_periods == 24
        assert results[1].result.periodic_payment == Decimal("4707.35")

    def test_shared_parameters_fill_gaps(self):
        results = compare(
            [_offer("a", "12", term=None, amount=None), _offer("b", "12", term=6, amount="5000")],
            shared_principal=Decimal("100000"),
            shared_term_periods=36,
            start_date=START,
        )
        assert results[0].result.principal == Decimal("100000")
        assert results[0].result.periodic_payment == Decimal("3321.43")
        assert results[1].result.principal == Decimal("5000")
        assert results[1].result.term_periods == 6

    def test_missing_amount(self):
        with pytest.raises(InvalidAmountError):
            compare([_offer("a", "12", amount=None)], start_date=START)

    def test_missing_term(self):
        with pytest.raises(InvalidTermError):
            compare([_offer("a", "12", term=None)], start_date=START)

    def test_total_cost_includes_fees(self, offers):
        kcb = compare(offers, start_date=START)[0]
        assert kcb.total_cost == kcb.result.total_payment + Decimal("2500")

    def test_fees_do_not_change_ranking(self):
        cheap_with_fees = LoanOffer(
            id="fees", provider_name="A", loan_name="A", interest_rate=Decimal("10"),
            term_periods=12, amount=Decimal("100000"), fees=Decimal("50000"),
        )
        results = compare([cheap_with_fees, _offer("plain", "11")], start_date=START)
        assert results[0].is_lowest_total_cost


class TestBestOffer:
    def test_default_priority_is_interest(self, offers):
        assert best_offer(compare(offers, start_date=START)).offer.id == "equity-flex"

    @pytest.mark.parametrize("priority,expected", [
        (RankingPriority.INTEREST, "equity-flex"),
        (RankingPriority.MONTHLY, "equity-flex"),
        (RankingPriority.TOTAL, "coop-salary"),
        ("total", "coop-salary"),
    ])
    def test_priorities(self, offers, priority, expected):
        assert best_offer(compare(offers, start_date=START), priority).offer.id == expected

    def test_empty(self):
        with pytest.raises(EmptyOfferSetError):
            best_offer([])
