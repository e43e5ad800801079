"""
Unit tests for lifelines.py — 50/50, audience poll and phone-a-friend.
"""
import random
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import lifelines
from questions import QUESTION_BANK, LETTERS


class StubRng:
    """Deterministic stand-in for the `random` module."""

    def __init__(self, roll: float = 0.0, pick: int = 0):
        self.roll = roll
        self.pick = pick

    def random(self) -> float:
        return self.roll

    def randrange(self, n: int) -> int:
        return self.pick

    def choice(self, seq):
        return seq[0]


# ── fifty_fifty ──────────────────────────────────────────

class TestFiftyFifty:
    @pytest.mark.parametrize("question", QUESTION_BANK, ids=lambda q: f"q{q.id}")
    def test_hides_two_lowest_wrong(self, question):
        hidden = lifelines.fifty_fifty(question)
        wrong = [i for i in range(4) if i != question.correct_answer]
        assert hidden == (wrong[0], wrong[1])
        assert question.correct_answer not in hidden

    def test_correct_first_hides_b_and_c(self):
        question = QUESTION_BANK[9]   # correct is A
        assert lifelines.fifty_fifty(question) == (1, 2)


# ── ask_audience ─────────────────────────────────────────

class TestAskAudience:
    @pytest.mark.parametrize("seed", range(200))
    def test_distribution_invariants(self, seed):
        question = QUESTION_BANK[seed % len(QUESTION_BANK)]
        votes = lifelines.ask_audience(question, random.Random(seed))
        assert len(votes) == 4
        assert sum(votes) == 100
        assert all(isinstance(v, int) and v >= 0 for v in votes)
        assert 40 <= votes[question.correct_answer] <= 70

    def test_extreme_draws_still_sum_to_100(self):
        rng = MagicMock()
        rng.randint.side_effect = [70, 0, 0]
        votes = lifelines.ask_audience(QUESTION_BANK[0], rng)   # correct is C
        assert votes == (0, 0, 70, 30)

    def test_default_rng(self):
        votes = lifelines.ask_audience(QUESTION_BANK[3])
        assert sum(votes) == 100


# ── phone_a_friend ───────────────────────────────────────

class TestPhoneAFriend:
    def test_confident_friend_is_right(self):
        question = QUESTION_BANK[4]
        assert lifelines.phone_a_friend(question, StubRng(roll=0.5)) == question.correct_answer

    def test_unsure_friend_guesses(self):
        question = QUESTION_BANK[4]
        assert lifelines.phone_a_friend(question, StubRng(roll=0.95, pick=3)) == 3

    def test_boundary_roll_is_a_guess(self):
        question = QUESTION_BANK[4]
        assert lifelines.phone_a_friend(question, StubRng(roll=0.8, pick=0)) == 0

    def test_mostly_correct(self):
        rng = random.Random(42)
        question = QUESTION_BANK[0]
        hits = sum(lifelines.phone_a_friend(question, rng) == question.correct_answer for _ in range(2000))
        # 0.8 + 0.2 * 0.25 = 0.85 expected
        assert 0.80 < hits / 2000 < 0.90


# ── Friend's words ───────────────────────────────────────

class TestFallbackAdvice:
    def test_names_the_option(self):
        question = QUESTION_BANK[0]
        text = lifelines.fallback_advice(question, 2, StubRng())
        assert "C) Paris" in text


class TestFriendAdvice:
    @pytest.mark.asyncio
    async def test_without_client_uses_fallback(self):
        question = QUESTION_BANK[0]
        with patch.object(lifelines, "client", None):
            text = await lifelines.friend_advice(question, 2)
        assert "Paris" in text

    @pytest.mark.asyncio
    async def test_uses_model_reply(self):
        client = MagicMock()
        resp = MagicMock()
        resp.choices = [MagicMock()]
        resp.choices[0].message.content = "  It's Paris, trust me!  "
        client.chat.completions.create = AsyncMock(return_value=resp)

        with patch.object(lifelines, "client", client):
            text = await lifelines.friend_advice(QUESTION_BANK[0], 2)

        assert text == "It's Paris, trust me!"
        prompt = client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert f"{LETTERS[2]}) Paris" in prompt

    @pytest.mark.asyncio
    async def test_api_failure_falls_back(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("boom"))

        with patch.object(lifelines, "client", client):
            text = await lifelines.friend_advice(QUESTION_BANK[1], 1)

        assert "B) 8" in text
