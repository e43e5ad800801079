import os
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

load_dotenv()

BOT_TOKEN: str = os.environ["BOT_TOKEN"]
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Pause between the "Correct!" card and the next question, in seconds
ADVANCE_DELAY: float = float(os.getenv("ADVANCE_DELAY", "1.5"))

# ── Prize ladder ──────────────────────────────────────────────────────────────
MONEY_LADDER: list[str] = [
    "$100",        # 1
    "$200",        # 2
    "$300",        # 3
    "$500",        # 4
    "$1,000",      # 5  🔒 safe point
    "$2,000",      # 6
    "$4,000",      # 7
    "$8,000",      # 8
    "$16,000",     # 9
    "$32,000",     # 10 🔒 safe point
    "$64,000",     # 11
    "$125,000",    # 12
    "$250,000",    # 13
    "$500,000",    # 14
    "$1,000,000",  # 15 🏆 top prize
]

# 0-based ladder indices
SAFE_POINTS: tuple[int, ...] = (4, 9)

TOTAL_QUESTIONS = len(MONEY_LADDER)
LAST_INDEX = TOTAL_QUESTIONS - 1
NO_WINNINGS = "$0"
TOP_PRIZE = MONEY_LADDER[-1]

# ── Lifeline tuning ───────────────────────────────────────────────────────────
FRIEND_ACCURACY = 0.8
AUDIENCE_CORRECT_RANGE: tuple[int, int] = (40, 70)


# ── Ladder helpers ────────────────────────────────────────────────────────────
def prize(index: int) -> str:
    """Prize label for answering question `index` (0-based) correctly."""
    return MONEY_LADDER[index]


def safe_payout(index: int) -> str:
    """Guaranteed amount when answering wrong at `index`.

    Only safe points the player has answered past count: reaching a safe
    question is not enough, it has to be cleared.
    """
    passed = [sp for sp in SAFE_POINTS if index > sp]
    if not passed:
        return NO_WINNINGS
    return MONEY_LADDER[max(passed)]


def walkaway_amount(index: int) -> str:
    """Amount kept by walking away before answering question `index`."""
    return MONEY_LADDER[index - 1] if index > 0 else NO_WINNINGS


# ── Money helpers ─────────────────────────────────────────────────────────────
def parse_money(label: str) -> Decimal:
    """'$32,000' → Decimal('32000'). Raises ValueError on garbage."""
    cleaned = label.strip().replace("$", "").replace(",", "").replace(" ", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not a money amount: {label!r}") from None
    if not value.is_finite():
        raise ValueError(f"Not a money amount: {label!r}")
    return value


def fmt_money(amount: Decimal, signed: bool = False) -> str:
    """Format as US dollars with cents, e.g. Decimal('15420.5') → '$15,420.50'."""
    text = f"${abs(amount):,.2f}"
    if amount < 0:
        return f"-{text}"
    if signed:
        return f"+{text}"
    return text
