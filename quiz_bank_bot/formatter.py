import html

from bank import Account, Beneficiary, Transaction, TxType
from config import (
    MONEY_LADDER,
    NO_WINNINGS,
    SAFE_POINTS,
    TOP_PRIZE,
    TOTAL_QUESTIONS,
    fmt_money,
    prize,
    safe_payout,
)
from game import GameSession, Outcome, Result
from questions import LETTERS, Question

DIVIDER = "\n━━━━━━━━━━━━━━━━━━━━━━━━━━\n"

TX_ICONS = {
    TxType.DEPOSIT: "➕",
    TxType.WITHDRAWAL: "➖",
    TxType.TRANSFER: "💸",
    TxType.QUIZ_WINNING: "🏆",
}


def _esc(text: str) -> str:
    return html.escape(text, quote=False)


def _option(question: Question, index: int) -> str:
    return f"{LETTERS[index]}) {_esc(question.options[index])}"


# ── Welcome / help ────────────────────────────────────────────────────────────
def welcome_text() -> str:
    safe = " and ".join(MONEY_LADDER[sp] for sp in SAFE_POINTS)
    return (
        "🏆 <b>WHO WANTS TO BE A MILLIONAIRE?</b>\n\n"
        f"Answer {TOTAL_QUESTIONS} questions correctly to win <b>{TOP_PRIZE}</b>!\n\n"
        "📋 <b>Rules:</b>\n"
        f"• {TOTAL_QUESTIONS} questions of increasing difficulty\n"
        "• 4 options per question, lock in your final answer\n"
        "• 3 lifelines: 🔢 50/50 · 📞 Phone a Friend · 👥 Ask the Audience\n"
        f"• Safe amounts: <b>{safe}</b>\n"
        "• You may walk away with your winnings at any time\n\n"
        "🏦 Deposit what you win into your demo bank account.\n\n"
        "<i>Ready to test your knowledge?</i>"
    )


def help_text() -> str:
    return (
        "ℹ️ <b>Lifelines</b>\n\n"
        "🔢 <b>50/50</b> — removes two wrong answers.\n"
        "📞 <b>Phone a Friend</b> — a friend suggests an answer (usually right).\n"
        "👥 <b>Ask the Audience</b> — the audience votes, you see the percentages.\n\n"
        "Each lifeline can be used only once per game.\n\n"
        "/start — main menu\n"
        "/bank — your demo bank account"
    )


# ── Question card ─────────────────────────────────────────────────────────────
def question_text(session: GameSession, note: str = "") -> str:
    index = session.current_index
    question = session.question
    haven = safe_payout(index)
    haven_line = f"\n🔒 Guaranteed: <b>{haven}</b>" if haven != NO_WINNINGS else ""

    header = (
        f"🎯 <b>Question {index + 1} of {TOTAL_QUESTIONS}</b> · <i>{_esc(question.category)}</i>\n"
        f"💰 Playing for: <b>{prize(index)}</b>\n"
        f"🏅 Current winnings: <b>{session.won_amount}</b>"
        f"{haven_line}"
    )
    note_block = f"\n\n{note}" if note else ""

    return f"{header}{DIVIDER}❓ <b>{_esc(question.prompt)}</b>{note_block}{DIVIDER}Choose your answer:"


def confirm_note(question: Question, index: int) -> str:
    return f"🤔 Your answer: <b>{_option(question, index)}</b>\n<i>Is that your final answer?</i>"


def fifty_fifty_note(session: GameSession) -> str:
    removed = ", ".join(LETTERS[i] for i in sorted(session.hidden_options))
    return f"🔢 <b>50/50:</b> removed options <b>{removed}</b>"


def audience_bars(votes: tuple[int, ...], question: Question) -> str:
    BAR = "█"
    EMPTY = "░"
    BAR_WIDTH = 12

    lines = ["👥 <b>ASK THE AUDIENCE</b>"]
    for i, pct in enumerate(votes):
        filled = round(pct / 100 * BAR_WIDTH)
        bar = BAR * filled + EMPTY * (BAR_WIDTH - filled)
        lines.append(f"<code>{bar}</code> <b>{pct}%</b>  {_option(question, i)}")

    return "\n".join(lines)


def friend_note(advice: str) -> str:
    return f"📞 <b>Phone a Friend:</b>\n\n<i>«{_esc(advice)}»</i>"


def lifeline_notes(session: GameSession, advice: str | None = None) -> str:
    """Advisory blocks for the current question, in the order they were used."""
    notes = []
    if session.hidden_options:
        notes.append(fifty_fifty_note(session))
    if session.audience_results:
        notes.append(audience_bars(session.audience_results, session.question))
    if session.friend_suggestion is not None and advice:
        notes.append(friend_note(advice))
    return "\n\n".join(notes)


def full_ladder_text(current_index: int | None = None) -> str:
    lines = ["📊 <b>PRIZE LADDER</b>\n<pre>"]
    for i in range(TOTAL_QUESTIONS - 1, -1, -1):
        amount_str = f"{MONEY_LADDER[i]:>11}"

        if i == TOTAL_QUESTIONS - 1:
            icon = "🏆"
        elif i in SAFE_POINTS:
            icon = "🔒"
        else:
            icon = "  "

        if i == current_index:
            line = f"▶ {i + 1:2d}. {amount_str}  ← you are here"
        else:
            line = f"{icon} {i + 1:2d}. {amount_str}"
        lines.append(line)

    lines.append("</pre>")
    return "\n".join(lines)


# ── Results ───────────────────────────────────────────────────────────────────
def correct_text(outcome: Outcome, next_index: int) -> str:
    return (
        f"✅ <b>CORRECT!</b>\n\n"
        f"❓ <b>{_esc(outcome.question.prompt)}</b>\n\n"
        f"<b>{_option(outcome.question, outcome.question.correct_answer)}</b>\n\n"
        f"💰 You've won: <b>{outcome.won_amount}</b>\n"
        f"➡️ Next question is worth <b>{prize(next_index)}</b>"
    )


def finished_text(session: GameSession, outcome: Outcome | None = None) -> str:
    lines = []
    if session.result is Result.WON:
        lines.append(f"🎉🏆 <b>CONGRATULATIONS! YOU'VE WON {session.won_amount}!</b> 🏆🎉")
    elif session.result is Result.LOST:
        lines.append("❌ <b>GAME OVER!</b>")
    else:
        lines.append("🚶 <b>WELL PLAYED!</b> You take the money and leave.")

    if outcome is not None:
        question = outcome.question
        lines.append("")
        lines.append(f"❓ <b>{_esc(question.prompt)}</b>")
        if not outcome.correct:
            lines.append(f"Your answer: ❌ <b>{_option(question, outcome.chosen)}</b>")
        lines.append(f"Correct answer: ✅ <b>{_option(question, question.correct_answer)}</b>")

    lines.append("")
    if session.won_amount == NO_WINNINGS:
        lines.append("💔 Unfortunately, you leave with nothing.")
    else:
        lines.append(f"💰 You won: <b>{session.won_amount}</b>")
    return "\n".join(lines)


# ── Bank ──────────────────────────────────────────────────────────────────────
def tx_line(tx: Transaction) -> str:
    icon = TX_ICONS.get(tx.type, "•")
    return f"{icon} <code>{tx.date}</code>  <b>{fmt_money(tx.amount, signed=True)}</b>  {_esc(tx.description)}"


def account_text(account: Account, note: str = "", recent: int = 3) -> str:
    lines = [
        "🏦 <b>SECUREBANK ONLINE</b> <i>(demo)</i>",
        "",
        f"💳 {account.account_type} · <code>{account.account_number}</code>",
        f"💰 Balance: <b>{fmt_money(account.balance)}</b>",
    ]
    if account.transactions:
        lines.append("")
        lines.append("🧾 <b>Recent transactions</b>")
        lines.extend(tx_line(tx) for tx in account.transactions[:recent])
    if note:
        lines.append("")
        lines.append(note)
    return "\n".join(lines)


def history_text(account: Account, limit: int = 15) -> str:
    if not account.transactions:
        return "🧾 <b>Transaction history</b>\n\nNo transactions yet."
    lines = ["🧾 <b>Transaction history</b>", ""]
    lines.extend(tx_line(tx) for tx in account.transactions[:limit])
    return "\n".join(lines)


def transfer_prompt(recipient: str, account: Account) -> str:
    return (
        f"💸 Transfer to <b>{_esc(recipient)}</b>\n\n"
        f"Available: <b>{fmt_money(account.balance)}</b>\nHow much?"
    )


def deposit_summary(beneficiary: Beneficiary, tx: Transaction, payment_type: str) -> str:
    return (
        "🧾 <b>Transaction summary</b>\n\n"
        f"To: <b>{_esc(beneficiary.name)}</b>\n"
        f"Account: <code>{_esc(beneficiary.account)}</code> · IFSC <code>{_esc(beneficiary.ifsc)}</code>\n"
        f"Amount: <b>{fmt_money(tx.amount)}</b>\n"
        f"Type: {payment_type}"
    )


def bank_error(message: str) -> str:
    return f"⚠️ {_esc(message)}"
