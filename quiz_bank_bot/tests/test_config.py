"""
Unit tests for config.py — prize ladder and money helpers.
"""
from decimal import Decimal

import pytest

from config import (
    MONEY_LADDER,
    NO_WINNINGS,
    SAFE_POINTS,
    TOP_PRIZE,
    TOTAL_QUESTIONS,
    fmt_money,
    parse_money,
    prize,
    safe_payout,
    walkaway_amount,
)


# ── Ladder shape ─────────────────────────────────────────

class TestLadder:
    def test_fifteen_rungs(self):
        assert TOTAL_QUESTIONS == 15
        assert len(MONEY_LADDER) == 15

    def test_safe_points(self):
        assert SAFE_POINTS == (4, 9)
        assert MONEY_LADDER[4] == "$1,000"
        assert MONEY_LADDER[9] == "$32,000"

    def test_top_prize(self):
        assert TOP_PRIZE == "$1,000,000"
        assert prize(14) == TOP_PRIZE

    def test_ladder_is_increasing(self):
        values = [parse_money(label) for label in MONEY_LADDER]
        assert values == sorted(values)


# ── safe_payout ──────────────────────────────────────────

class TestSafePayout:
    @pytest.mark.parametrize("index", [0, 1, 2, 3, 4])
    def test_nothing_before_first_safe_point_is_cleared(self, index):
        assert safe_payout(index) == NO_WINNINGS

    @pytest.mark.parametrize("index", [5, 6, 7, 8, 9])
    def test_first_safe_point(self, index):
        assert safe_payout(index) == "$1,000"

    @pytest.mark.parametrize("index", [10, 11, 12, 13, 14])
    def test_second_safe_point(self, index):
        assert safe_payout(index) == "$32,000"

    def test_reaching_safe_question_is_not_enough(self):
        # Index 9 is the $32,000 question itself; it has to be answered first
        assert safe_payout(9) == "$1,000"


# ── walkaway_amount ──────────────────────────────────────

class TestWalkawayAmount:
    def test_first_question(self):
        assert walkaway_amount(0) == NO_WINNINGS

    def test_keeps_previous_rung(self):
        assert walkaway_amount(5) == MONEY_LADDER[4]
        assert walkaway_amount(14) == "$500,000"


# ── Money helpers ────────────────────────────────────────

class TestParseMoney:
    def test_ladder_label(self):
        assert parse_money("$32,000") == Decimal("32000")

    def test_plain_number(self):
        assert parse_money(" 250.75 ") == Decimal("250.75")

    @pytest.mark.parametrize("text", ["", "abc", "$", "NaN", "Infinity"])
    def test_garbage_raises(self, text):
        with pytest.raises(ValueError):
            parse_money(text)


class TestFmtMoney:
    def test_cents_and_grouping(self):
        assert fmt_money(Decimal("15420.5")) == "$15,420.50"

    def test_negative(self):
        assert fmt_money(Decimal("-250")) == "-$250.00"

    def test_signed_positive(self):
        assert fmt_money(Decimal("2500"), signed=True) == "+$2,500.00"

    def test_zero_has_no_sign(self):
        assert fmt_money(Decimal("0")) == "$0.00"
