"""Lifelines: 50/50, ask-the-audience and phone-a-friend.

The engine functions are pure and take an optional `rng` (anything with the
`random` module's interface) so results can be reproduced in tests. Only the
friend's spoken line goes through OpenAI.
"""

import logging
import random

from openai import AsyncOpenAI

from config import (
    AUDIENCE_CORRECT_RANGE,
    FRIEND_ACCURACY,
    OPENAI_API_KEY,
    OPENAI_MODEL,
)
from questions import LETTERS, Question

log = logging.getLogger(__name__)

client: AsyncOpenAI | None = AsyncOpenAI(api_key=OPENAI_API_KEY) if OPENAI_API_KEY else None


# ── 50/50 ─────────────────────────────────────────────────────────────────────
def fifty_fifty(question: Question) -> tuple[int, int]:
    """The two lowest-indexed wrong options, to be hidden."""
    wrong = [i for i in range(len(LETTERS)) if i != question.correct_answer]
    return wrong[0], wrong[1]


# ── Ask the Audience ──────────────────────────────────────────────────────────
def ask_audience(question: Question, rng=None) -> tuple[int, int, int, int]:
    """Vote percentages per option, summing to exactly 100.

    The correct option gets a share drawn from AUDIENCE_CORRECT_RANGE; the
    wrong options split what is left in order, the last one taking the rest.
    """
    rng = rng or random
    lo, hi = AUDIENCE_CORRECT_RANGE
    correct = question.correct_answer

    results = [0, 0, 0, 0]
    results[correct] = rng.randint(lo, hi)

    remaining = 100 - results[correct]
    wrong = [i for i in range(len(LETTERS)) if i != correct]
    for i in wrong[:-1]:
        vote = rng.randint(0, remaining)
        results[i] = vote
        remaining -= vote
    results[wrong[-1]] = remaining

    # Rounding guard: whatever is still unaccounted for goes to the correct answer
    results[correct] += 100 - sum(results)
    return tuple(results)


# ── Phone a Friend ────────────────────────────────────────────────────────────
def phone_a_friend(question: Question, rng=None) -> int:
    """Index the friend suggests: usually right, otherwise a blind guess."""
    rng = rng or random
    if rng.random() < FRIEND_ACCURACY:
        return question.correct_answer
    return rng.randrange(len(LETTERS))


_FALLBACK_LINES = (
    "Hmm… I'm pretty sure it's {letter}) {text}. Go with that!",
    "I remember reading about this. I'd say {letter}) {text}, but don't quote me.",
    "Honestly? {letter}) {text}. That's my gut feeling.",
)


def fallback_advice(question: Question, suggestion: int, rng=None) -> str:
    rng = rng or random
    template = rng.choice(_FALLBACK_LINES)
    return template.format(letter=LETTERS[suggestion], text=question.options[suggestion])


async def friend_advice(question: Question, suggestion: int) -> str:
    """Words for the friend on the phone, leaning toward `suggestion`."""
    if client is None:
        return fallback_advice(question, suggestion)

    opts_text = "\n".join(f"{letter}) {opt}" for letter, opt in zip(LETTERS, question.options))
    prompt = (
        "Your friend is playing 'Who Wants to be a Millionaire?' and phoned you.\n"
        f"Question: {question.prompt}\n"
        f"Options:\n{opts_text}\n\n"
        f"(You believe the answer is {LETTERS[suggestion]}) {question.options[suggestion]})\n\n"
        "Play a smart but slightly nervous friend. Give your advice:\n"
        "• Casual spoken English, 2–3 sentences.\n"
        "• Briefly explain your reasoning.\n"
        "• Lean toward the option above and name it.\n"
        "• Never mention that you are an AI."
    )

    try:
        resp = await client.chat.completions.create(
            model=OPENAI_MODEL,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.75,
            max_tokens=180,
        )
        return resp.choices[0].message.content.strip()
    except Exception as e:
        log.error("Phone a friend failed: %s", e)
        return fallback_advice(question, suggestion)
