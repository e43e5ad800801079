"""
Unit tests for formatter.py — message texts for the quiz and the bank.
"""
import random
from dataclasses import replace
from decimal import Decimal

import bank
import game
from formatter import (
    account_text,
    audience_bars,
    confirm_note,
    correct_text,
    deposit_summary,
    finished_text,
    full_ladder_text,
    history_text,
    lifeline_notes,
    question_text,
    transfer_prompt,
    tx_line,
    welcome_text,
)
from questions import QUESTION_BANK


def _at(index: int) -> game.GameSession:
    return replace(game.start_game(), current_index=index)


# ── Welcome ──────────────────────────────────────────────

class TestWelcomeText:
    def test_mentions_top_prize_and_safe_amounts(self):
        text = welcome_text()
        assert "$1,000,000" in text
        assert "$1,000" in text and "$32,000" in text


# ── question_text ────────────────────────────────────────

class TestQuestionText:
    def test_header(self):
        text = question_text(_at(0))
        assert "Question 1 of 15" in text
        assert "Playing for: <b>$100</b>" in text
        assert "What is the capital of France?" in text

    def test_no_guarantee_before_first_safe_point_cleared(self):
        assert "Guaranteed" not in question_text(_at(4))

    def test_guarantee_after_safe_point(self):
        assert "Guaranteed: <b>$1,000</b>" in question_text(_at(5))

    def test_note_included(self):
        assert "hello note" in question_text(_at(0), "hello note")

    def test_prompt_is_escaped(self):
        text = question_text(_at(3))
        assert "Who wrote 'Romeo and Juliet'?" in text

    def test_confirm_note(self):
        note = confirm_note(QUESTION_BANK[0], 2)
        assert "C) Paris" in note


# ── Lifeline notes ───────────────────────────────────────

class TestAudienceBars:
    def test_one_line_per_option(self):
        text = audience_bars((10, 20, 60, 10), QUESTION_BANK[0])
        lines = text.split("\n")
        assert len(lines) == 5
        assert "<b>60%</b>" in lines[3]
        assert "C) Paris" in lines[3]

    def test_bar_width(self):
        text = audience_bars((100, 0, 0, 0), QUESTION_BANK[0])
        assert "█" * 12 in text
        assert "░" * 12 in text


class TestLifelineNotes:
    def test_empty_without_lifelines(self):
        assert lifeline_notes(_at(0)) == ""

    def test_fifty_fifty(self):
        session = game.use_fifty_fifty(_at(0))   # correct is C
        assert "removed options <b>A, B</b>" in lifeline_notes(session)

    def test_friend_needs_advice_text(self):
        session = game.use_phone_a_friend(_at(0), random.Random(1))
        assert lifeline_notes(session) == ""
        assert "Go with Paris" in lifeline_notes(session, "Go with Paris")

    def test_audience(self):
        session = game.use_ask_audience(_at(0), random.Random(4))
        assert "ASK THE AUDIENCE" in lifeline_notes(session)


# ── Ladder ───────────────────────────────────────────────

class TestFullLadderText:
    def test_highest_first(self):
        text = full_ladder_text()
        assert text.index("$1,000,000") < text.index("$100\n")

    def test_marks_current(self):
        text = full_ladder_text(6)
        assert "▶  7." in text
        assert "you are here" in text

    def test_no_marker_outside_game(self):
        assert "you are here" not in full_ladder_text(None)


# ── Results ──────────────────────────────────────────────

class TestResultTexts:
    def test_correct_text(self):
        session = _at(2)
        new, outcome = game.submit_final_answer(
            game.confirm_answer(game.select_answer(session, session.question.correct_answer))
        )
        text = correct_text(outcome, new.current_index)
        assert "CORRECT" in text
        assert "$300" in text
        assert "$500" in text

    def test_lost_text(self):
        session = _at(6)
        wrong = (session.question.correct_answer + 1) % 4
        new, outcome = game.submit_final_answer(game.confirm_answer(game.select_answer(session, wrong)))
        text = finished_text(new, outcome)
        assert "GAME OVER" in text
        assert "Your answer: ❌" in text
        assert "$1,000" in text

    def test_lost_with_nothing(self):
        session = _at(1)
        new, outcome = game.submit_final_answer(game.confirm_answer(game.select_answer(session, 0)))
        assert "leave with nothing" in finished_text(new, outcome)

    def test_won_text(self):
        session = _at(14)
        new, outcome = game.submit_final_answer(
            game.confirm_answer(game.select_answer(session, session.question.correct_answer))
        )
        assert "CONGRATULATIONS" in finished_text(new, outcome)

    def test_walk_away_text(self):
        text = finished_text(game.walk_away(_at(3)))
        assert "WELL PLAYED" in text
        assert "$300" in text


# ── Bank ─────────────────────────────────────────────────

class TestBankTexts:
    def test_account_text(self):
        text = account_text(bank.demo_account(), note="hi there")
        assert "$15,420.50" in text
        assert "Premium Checking" in text
        assert "hi there" in text
        assert "Salary Deposit" in text

    def test_tx_line_signs(self):
        account = bank.demo_account()
        assert "+$2,500.00" in tx_line(account.transactions[0])
        assert "-$250.00" in tx_line(account.transactions[1])

    def test_history_empty(self):
        account = replace(bank.demo_account(), transactions=())
        assert "No transactions yet" in history_text(account)

    def test_history_limit(self):
        account = bank.demo_account()
        for _ in range(5):
            account, _ = bank.deposit(account, Decimal("1"))
        assert history_text(account, limit=4).count("Cash Deposit") == 4

    def test_transfer_prompt_escapes(self):
        assert "&lt;Bob&gt;" in transfer_prompt("<Bob>", bank.demo_account())

    def test_deposit_summary(self):
        _, tx = bank.deposit(bank.demo_account(), Decimal("750"))
        beneficiary = bank.Beneficiary(name="A & B Traders", account="30219876543", ifsc="SBIN0001234")
        text = deposit_summary(beneficiary, tx, "IMPS")
        assert "A &amp; B Traders" in text
        assert "30219876543" in text
        assert "SBIN0001234" in text
        assert "$750.00" in text
        assert "IMPS" in text
