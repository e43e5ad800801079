"""All InlineKeyboard builders for the quiz and the demo bank."""

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder

from game import GameSession, Lifeline
from questions import LETTERS
from receipt import PAYMENT_TYPES

# ── Callback data constants ───────────────────────────────────────────────────
NOOP = "noop"
CLOSE = "close"
START_GAME = "start_game"
PLAY_AGAIN = "play_again"
MAIN_MENU = "main_menu"
SHOW_LADDER = "show_ladder"
FINAL_ANSWER = "final_answer"
SUBMIT_ANSWER = "submit_answer"
CANCEL_CONFIRM = "cancel_confirm"
QUIT_GAME = "quit_game"
LIFELINE_FIFTY = "ll_fifty"
LIFELINE_PHONE = "ll_phone"
LIFELINE_AUDIENCE = "ll_audience"
DEPOSIT_WINNINGS = "deposit_winnings"

OPEN_BANK = "bank_open"
BANK_DEPOSIT = "bank_deposit"
BANK_WITHDRAW = "bank_withdraw"
BANK_TRANSFER = "bank_transfer"
BANK_HISTORY = "bank_history"
BANK_CANCEL = "bank_cancel"
SKIP_REMARK = "skip_remark"

ANSWER_PREFIX = "ans_"
PAYMENT_PREFIX = "pay_"


def answer_data(index: int) -> str:
    return f"{ANSWER_PREFIX}{LETTERS[index]}"


def parse_answer_data(data: str) -> int:
    return LETTERS.index(data.removeprefix(ANSWER_PREFIX))


def payment_data(payment_type: str) -> str:
    return f"{PAYMENT_PREFIX}{payment_type}"


# ── Helpers ───────────────────────────────────────────────────────────────────
def _btn(text: str, data: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, callback_data=data)


def _noop(text: str) -> InlineKeyboardButton:
    return _btn(text, NOOP)


# ── Welcome screen ────────────────────────────────────────────────────────────
def welcome_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_btn("🎮  Start Game", START_GAME))
    b.row(_btn("📊  Prize Ladder", SHOW_LADDER))
    b.row(_btn("🏦  My Bank", OPEN_BANK))
    return b.as_markup()


# ── Question screen ───────────────────────────────────────────────────────────
def question_keyboard(session: GameSession) -> InlineKeyboardMarkup:
    question = session.question
    b = InlineKeyboardBuilder()

    # Answer buttons — 2 × 2 grid
    for i, letter in enumerate(LETTERS):
        if i in session.hidden_options:
            b.button(text="—", callback_data=NOOP)
        elif i == session.selected_answer:
            b.button(text=f"▶️ {letter})  {question.options[i]}", callback_data=answer_data(i))
        else:
            b.button(text=f"{letter})  {question.options[i]}", callback_data=answer_data(i))
    b.adjust(2)

    # Lifeline row
    def ll_btn(lifeline: Lifeline, active_text: str, used_text: str, cb: str) -> InlineKeyboardButton:
        if session.has_lifeline(lifeline):
            return _btn(active_text, cb)
        return _noop(used_text)

    b.row(
        ll_btn(Lifeline.FIFTY_FIFTY,    "🔢 50/50",         "✗ 50/50",      LIFELINE_FIFTY),
        ll_btn(Lifeline.PHONE_A_FRIEND, "📞 Phone a Friend", "✗ Phone",      LIFELINE_PHONE),
        ll_btn(Lifeline.ASK_AUDIENCE,   "👥 Ask Audience",   "✗ Audience",   LIFELINE_AUDIENCE),
    )

    if session.selected_answer is None:
        b.row(_noop("👆 Choose an answer"))
    else:
        b.row(_btn(f"🔒  Final answer: {LETTERS[session.selected_answer]}", FINAL_ANSWER))

    # Bottom row
    b.row(
        _btn("📊 Prize Ladder", SHOW_LADDER),
        _btn("🚶 Walk Away", QUIT_GAME),
    )

    return b.as_markup()


# ── Confirmation screen ───────────────────────────────────────────────────────
def confirm_keyboard(letter: str, option_text: str) -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_btn(f"✅  Yes! {letter}) {option_text} — final answer", SUBMIT_ANSWER))
    b.row(_btn("↩️  Change answer", CANCEL_CONFIRM))
    return b.as_markup()


# ── Between questions ─────────────────────────────────────────────────────────
def advancing_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_noop("⏳  Next question…"))
    b.row(_btn("🚶  Take the money and leave", QUIT_GAME))
    return b.as_markup()


# ── Game over ─────────────────────────────────────────────────────────────────
def finished_keyboard(can_deposit: bool) -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    if can_deposit:
        b.row(_btn("🏦  Deposit winnings", DEPOSIT_WINNINGS))
    b.row(_btn("🔄  Play Again", PLAY_AGAIN))
    b.row(_btn("🏠  Main Menu", MAIN_MENU))
    return b.as_markup()


def close_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_btn("◀️  Close", CLOSE))
    return b.as_markup()


# ── Bank ──────────────────────────────────────────────────────────────────────
def bank_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(
        _btn("➕ Deposit", BANK_DEPOSIT),
        _btn("➖ Withdraw", BANK_WITHDRAW),
    )
    b.row(
        _btn("💸 Transfer", BANK_TRANSFER),
        _btn("🧾 History", BANK_HISTORY),
    )
    b.row(_btn("🏠  Main Menu", MAIN_MENU))
    return b.as_markup()


def payment_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    for payment_type in PAYMENT_TYPES:
        b.button(text=payment_type, callback_data=payment_data(payment_type))
    b.adjust(len(PAYMENT_TYPES))
    b.row(_btn("✖️  Cancel", BANK_CANCEL))
    return b.as_markup()


def remark_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_btn("⏭  No remark", SKIP_REMARK))
    b.row(_btn("✖️  Cancel", BANK_CANCEL))
    return b.as_markup()


def cancel_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_btn("✖️  Cancel", BANK_CANCEL))
    return b.as_markup()


def back_to_bank_keyboard() -> InlineKeyboardMarkup:
    b = InlineKeyboardBuilder()
    b.row(_btn("◀️  Back to account", BANK_CANCEL))
    return b.as_markup()
