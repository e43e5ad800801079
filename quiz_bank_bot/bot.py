"""Who Wants to Be a Millionaire — Telegram bot with a demo bank account."""

import asyncio
import logging
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from aiogram import Bot, Dispatcher, F, Router
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command, CommandStart, ExceptionTypeFilter
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import BotCommand, BufferedInputFile, CallbackQuery, ErrorEvent, Message

import bank
import game
from config import (
    ADVANCE_DELAY,
    BOT_TOKEN,
    LOG_LEVEL,
    NO_WINNINGS,
    TOP_PRIZE,
    fmt_money,
    parse_money,
)
from formatter import (
    account_text,
    bank_error,
    confirm_note,
    correct_text,
    deposit_summary,
    finished_text,
    full_ladder_text,
    help_text,
    history_text,
    lifeline_notes,
    question_text,
    transfer_prompt,
    welcome_text,
)
from game import GameError, GameSession, Lifeline, Phase
from keyboards import (
    ANSWER_PREFIX,
    BANK_CANCEL,
    BANK_DEPOSIT,
    BANK_HISTORY,
    BANK_TRANSFER,
    BANK_WITHDRAW,
    CANCEL_CONFIRM,
    CLOSE,
    DEPOSIT_WINNINGS,
    FINAL_ANSWER,
    LIFELINE_AUDIENCE,
    LIFELINE_FIFTY,
    LIFELINE_PHONE,
    MAIN_MENU,
    NOOP,
    OPEN_BANK,
    PAYMENT_PREFIX,
    PLAY_AGAIN,
    QUIT_GAME,
    SHOW_LADDER,
    SKIP_REMARK,
    START_GAME,
    SUBMIT_ANSWER,
    advancing_keyboard,
    back_to_bank_keyboard,
    bank_keyboard,
    cancel_keyboard,
    close_keyboard,
    confirm_keyboard,
    finished_keyboard,
    parse_answer_data,
    payment_keyboard,
    question_keyboard,
    remark_keyboard,
    welcome_keyboard,
)
from lifelines import friend_advice
from questions import LETTERS
from receipt import PAYMENT_TYPES, receipt_filename, render_deposit_record
from states import Bank, Game

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
log = logging.getLogger(__name__)

router = Router()

# Strong references to pending advance tasks so they are not collected mid-sleep
_background: set[asyncio.Task] = set()


# ── Session storage ───────────────────────────────────────────────────────────
async def _load(state: FSMContext) -> GameSession:
    data = await state.get_data()
    return GameSession.from_dict(data.get("session", {}))


async def _save(state: FSMContext, session: GameSession) -> None:
    await state.update_data(session=session.to_dict())


async def _load_account(state: FSMContext) -> bank.Account:
    data = await state.get_data()
    raw = data.get("account")
    return bank.Account.from_dict(raw) if raw else bank.demo_account()


async def _save_account(state: FSMContext, account: bank.Account) -> None:
    await state.update_data(account=account.to_dict())


# ── Rendering helpers ─────────────────────────────────────────────────────────
async def _edit(msg: Message, text: str, kb) -> Message:
    """Edit in place; fall back to a fresh message if Telegram refuses."""
    try:
        return await msg.edit_text(text, reply_markup=kb, parse_mode=ParseMode.HTML)
    except TelegramBadRequest:
        return await msg.answer(text, reply_markup=kb, parse_mode=ParseMode.HTML)


async def _show_question(msg: Message, state: FSMContext, session: GameSession) -> None:
    data = await state.get_data()
    note = lifeline_notes(session, data.get("friend_advice"))
    await _edit(msg, question_text(session, note), question_keyboard(session))
    await state.set_state(Game.question)


async def _show_finished(
    msg: Message,
    state: FSMContext,
    session: GameSession,
    outcome: game.Outcome | None = None,
) -> None:
    pending = session.won_amount if session.won_amount != NO_WINNINGS else None
    await state.update_data(pending_winnings=pending)
    await state.set_state(Game.finished)
    await _edit(msg, finished_text(session, outcome), finished_keyboard(pending is not None))


async def _show_welcome(msg: Message, state: FSMContext, edit: bool = True) -> None:
    await state.set_state(None)
    if edit:
        await _edit(msg, welcome_text(), welcome_keyboard())
    else:
        await msg.answer(welcome_text(), reply_markup=welcome_keyboard(), parse_mode=ParseMode.HTML)


async def _show_bank(msg: Message, state: FSMContext, note: str = "", edit: bool = True) -> None:
    account = await _load_account(state)
    await state.set_state(Bank.dashboard)
    text = account_text(account, note)
    if edit:
        await _edit(msg, text, bank_keyboard())
    else:
        await msg.answer(text, reply_markup=bank_keyboard(), parse_mode=ParseMode.HTML)


def _schedule(coro) -> None:
    task = asyncio.create_task(coro)
    _background.add(task)
    task.add_done_callback(_background.discard)


async def _advance_later(msg: Message, state: FSMContext, delay: float) -> None:
    await asyncio.sleep(delay)
    # Player may have walked away during the pause
    if await state.get_state() != Game.advancing.state:
        return
    session = await _load(state)
    await state.update_data(friend_advice=None)
    await _show_question(msg, state, session)


# ── /start ────────────────────────────────────────────────────────────────────
@router.message(CommandStart())
@router.message(Command("menu"))
async def cmd_start(message: Message, state: FSMContext) -> None:
    await _save(state, GameSession())
    await _show_welcome(message, state, edit=False)


# ── /help ─────────────────────────────────────────────────────────────────────
@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(help_text(), parse_mode=ParseMode.HTML)


# ── /bank ─────────────────────────────────────────────────────────────────────
@router.message(Command("bank"))
async def cmd_bank(message: Message, state: FSMContext) -> None:
    session = await _load(state)
    if session.phase is Phase.PLAYING:
        await message.answer("🎮 Finish the game or walk away before opening the bank.")
        return
    await _show_bank(message, state, edit=False)


# ── Start game ────────────────────────────────────────────────────────────────
@router.callback_query(F.data == START_GAME)
@router.callback_query(F.data == PLAY_AGAIN)
async def cb_start_game(callback: CallbackQuery, state: FSMContext) -> None:
    session = game.start_game()
    await callback.answer(f"Good luck on your journey to {TOP_PRIZE}!")
    await _save(state, session)
    await state.update_data(friend_advice=None)
    log.info("Game started in chat %s", callback.message.chat.id)
    await _show_question(callback.message, state, session)


# ── Main menu ─────────────────────────────────────────────────────────────────
@router.callback_query(F.data == MAIN_MENU)
async def cb_main_menu(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    session = await _load(state)
    if session.phase is Phase.FINISHED:
        await _save(state, game.return_to_menu(session))
    await _show_welcome(callback.message, state)


# ── Show full prize ladder ────────────────────────────────────────────────────
@router.callback_query(F.data == SHOW_LADDER)
async def cb_show_ladder(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    session = await _load(state)
    current = session.current_index if session.phase is Phase.PLAYING else None
    await callback.message.answer(
        full_ladder_text(current),
        parse_mode=ParseMode.HTML,
        reply_markup=close_keyboard(),
    )


@router.callback_query(F.data == CLOSE)
async def cb_close(callback: CallbackQuery) -> None:
    await callback.answer()
    try:
        await callback.message.delete()
    except TelegramBadRequest as e:
        log.warning("Could not delete message: %s", e)


# ── Answer selected ───────────────────────────────────────────────────────────
@router.callback_query(Game.question, F.data.startswith(ANSWER_PREFIX))
async def cb_answer_selected(callback: CallbackQuery, state: FSMContext) -> None:
    index = parse_answer_data(callback.data)
    session = await _load(state)

    updated = game.select_answer(session, index)
    if updated.selected_answer != index:
        await callback.answer("This option has been removed.", show_alert=True)
        return
    await callback.answer()
    if updated == session:
        return

    await _save(state, updated)
    await _show_question(callback.message, state, updated)


# ── Lock in (show confirmation) ───────────────────────────────────────────────
@router.callback_query(Game.question, F.data == FINAL_ANSWER)
async def cb_final_answer(callback: CallbackQuery, state: FSMContext) -> None:
    session = game.confirm_answer(await _load(state))
    await callback.answer()
    await _save(state, session)
    await state.set_state(Game.confirming)

    question = session.question
    text = question_text(session, confirm_note(question, session.final_answer))
    kb = confirm_keyboard(LETTERS[session.final_answer], question.options[session.final_answer])
    await _edit(callback.message, text, kb)


# ── Cancel confirmation (back to answer selection) ───────────────────────────
@router.callback_query(Game.confirming, F.data == CANCEL_CONFIRM)
async def cb_cancel_confirm(callback: CallbackQuery, state: FSMContext) -> None:
    session = game.cancel_confirmation(await _load(state))
    await callback.answer()
    await _save(state, session)
    await _show_question(callback.message, state, session)


# ── Final answer confirmed ────────────────────────────────────────────────────
@router.callback_query(Game.confirming, F.data == SUBMIT_ANSWER)
async def cb_submit_answer(callback: CallbackQuery, state: FSMContext) -> None:
    session, outcome = game.submit_final_answer(await _load(state))
    await callback.answer()
    await _save(state, session)

    if outcome.finished:
        await _show_finished(callback.message, state, session, outcome)
        return

    await state.set_state(Game.advancing)
    await _edit(
        callback.message,
        correct_text(outcome, session.current_index),
        advancing_keyboard(),
    )
    _schedule(_advance_later(callback.message, state, ADVANCE_DELAY))


# ── Walk away ─────────────────────────────────────────────────────────────────
@router.callback_query(Game.question, F.data == QUIT_GAME)
@router.callback_query(Game.advancing, F.data == QUIT_GAME)
async def cb_walk_away(callback: CallbackQuery, state: FSMContext) -> None:
    session = game.walk_away(await _load(state))
    await callback.answer()
    await _save(state, session)
    await _show_finished(callback.message, state, session)


# ── Lifeline: 50/50 ───────────────────────────────────────────────────────────
@router.callback_query(Game.question, F.data == LIFELINE_FIFTY)
async def cb_fifty_fifty(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _load(state)
    if not session.has_lifeline(Lifeline.FIFTY_FIFTY):
        await callback.answer("This lifeline has already been used.", show_alert=True)
        return

    await callback.answer("🔢 50/50 activated!")
    session = game.use_fifty_fifty(session)
    await _save(state, session)
    await _show_question(callback.message, state, session)


# ── Lifeline: Phone a Friend ──────────────────────────────────────────────────
@router.callback_query(Game.question, F.data == LIFELINE_PHONE)
async def cb_phone_friend(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _load(state)
    if not session.has_lifeline(Lifeline.PHONE_A_FRIEND):
        await callback.answer("This lifeline has already been used.", show_alert=True)
        return

    await callback.answer("📞 Calling your friend…")
    session = game.use_phone_a_friend(session)
    await _save(state, session)

    advice = await friend_advice(session.question, session.friend_suggestion)
    await state.update_data(friend_advice=advice)
    # Other taps may have landed while the friend was talking
    if await state.get_state() != Game.question.state:
        return
    await _show_question(callback.message, state, await _load(state))


# ── Lifeline: Ask the Audience ────────────────────────────────────────────────
@router.callback_query(Game.question, F.data == LIFELINE_AUDIENCE)
async def cb_audience(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _load(state)
    if not session.has_lifeline(Lifeline.ASK_AUDIENCE):
        await callback.answer("This lifeline has already been used.", show_alert=True)
        return

    await callback.answer("👥 Counting the audience's votes…")
    session = game.use_ask_audience(session)
    await _save(state, session)
    await _show_question(callback.message, state, session)


# ── Deposit winnings ──────────────────────────────────────────────────────────
@router.callback_query(Game.finished, F.data == DEPOSIT_WINNINGS)
async def cb_deposit_winnings(callback: CallbackQuery, state: FSMContext) -> None:
    data = await state.get_data()
    pending = data.get("pending_winnings")
    if not pending:
        await callback.answer("Nothing to deposit.", show_alert=True)
        return

    account, tx = bank.deposit_winnings(await _load_account(state), parse_money(pending))
    await _save_account(state, account)
    await state.update_data(pending_winnings=None)
    await callback.answer("🎉 Winnings deposited!")
    note = f"🎉 <b>{fmt_money(tx.amount)}</b> has been added to your account."
    await _show_bank(callback.message, state, note)


# ── Bank dashboard ────────────────────────────────────────────────────────────
@router.callback_query(F.data == OPEN_BANK)
@router.callback_query(F.data == BANK_CANCEL)
async def cb_open_bank(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    await state.update_data(form=None)
    await _show_bank(callback.message, state)


@router.callback_query(Bank.dashboard, F.data == BANK_HISTORY)
async def cb_bank_history(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    account = await _load_account(state)
    await _edit(callback.message, history_text(account), back_to_bank_keyboard())


# ── Bank: deposit form ────────────────────────────────────────────────────────
# Text steps: state → (form key, validator, next state, next prompt)
DEPOSIT_FIELDS = {
    Bank.beneficiary_name.state: (
        "beneficiary_name", bank.beneficiary_name, Bank.beneficiary_account,
        "🏷 Beneficiary's <b>account number</b>?",
    ),
    Bank.beneficiary_account.state: (
        "beneficiary_account", bank.beneficiary_account, Bank.beneficiary_ifsc,
        "🏦 Beneficiary's <b>IFSC code</b>? (e.g. SBIN0001234)",
    ),
    Bank.beneficiary_ifsc.state: (
        "beneficiary_ifsc", bank.beneficiary_ifsc, Bank.deposit_amount,
        "💰 How much would you like to deposit?",
    ),
    Bank.contact_mobile.state: (
        "mobile", bank.contact_mobile, Bank.contact_email,
        "📧 Your <b>email address</b>?",
    ),
}


async def _update_form(state: FSMContext, **fields) -> dict:
    data = await state.get_data()
    form = {**(data.get("form") or {}), **fields}
    await state.update_data(form=form)
    return form


async def _form_error(message: Message, error: bank.BankError) -> None:
    await message.answer(bank_error(str(error)), reply_markup=cancel_keyboard(), parse_mode=ParseMode.HTML)


@router.callback_query(Bank.dashboard, F.data == BANK_DEPOSIT)
async def cb_bank_deposit(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    await state.update_data(form={})
    await state.set_state(Bank.beneficiary_name)
    await _edit(
        callback.message,
        "➕ <b>Deposit</b> · Beneficiary details\n\nBeneficiary's <b>full name</b>?",
        cancel_keyboard(),
    )


@router.message(Bank.beneficiary_name, F.text)
@router.message(Bank.beneficiary_account, F.text)
@router.message(Bank.beneficiary_ifsc, F.text)
@router.message(Bank.contact_mobile, F.text)
async def msg_deposit_field(message: Message, state: FSMContext) -> None:
    key, clean, next_state, prompt = DEPOSIT_FIELDS[await state.get_state()]
    try:
        value = clean(message.text)
    except bank.BankError as e:
        await _form_error(message, e)
        return

    await _update_form(state, **{key: value})
    await state.set_state(next_state)
    await message.answer(prompt, reply_markup=cancel_keyboard(), parse_mode=ParseMode.HTML)


@router.message(Bank.deposit_amount, F.text)
async def msg_deposit_amount(message: Message, state: FSMContext) -> None:
    try:
        amount = bank.parse_amount(message.text)
    except bank.BankError as e:
        await _form_error(message, e)
        return

    await _update_form(state, amount=str(amount))
    await state.set_state(Bank.deposit_payment)
    await message.answer(
        f"➕ Deposit <b>{fmt_money(amount)}</b>\n\nChoose the payment type:",
        reply_markup=payment_keyboard(),
        parse_mode=ParseMode.HTML,
    )


@router.callback_query(Bank.deposit_payment, F.data.startswith(PAYMENT_PREFIX))
async def cb_deposit_payment(callback: CallbackQuery, state: FSMContext) -> None:
    payment_type = callback.data.removeprefix(PAYMENT_PREFIX)
    if payment_type not in PAYMENT_TYPES:
        await callback.answer("Unknown payment type.", show_alert=True)
        return

    await callback.answer()
    await _update_form(state, payment_type=payment_type)
    await state.set_state(Bank.deposit_remark)
    await _edit(
        callback.message,
        f"➕ Deposit via <b>{payment_type}</b>\n\nAdd a remark for the record, or skip:",
        remark_keyboard(),
    )


async def _ask_contact(msg: Message, state: FSMContext, remark: str) -> None:
    await _update_form(state, remark=remark)
    await state.set_state(Bank.contact_mobile)
    await msg.answer(
        "➕ Deposit · Contact information\n\n📱 Your <b>mobile number</b>?",
        reply_markup=cancel_keyboard(),
        parse_mode=ParseMode.HTML,
    )


@router.message(Bank.deposit_remark, F.text)
async def msg_deposit_remark(message: Message, state: FSMContext) -> None:
    await _ask_contact(message, state, message.text.strip())


@router.callback_query(Bank.deposit_remark, F.data == SKIP_REMARK)
async def cb_skip_remark(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    await _ask_contact(callback.message, state, "")


@router.message(Bank.contact_email, F.text)
async def msg_contact_email(message: Message, state: FSMContext) -> None:
    try:
        email = bank.contact_email(message.text)
    except bank.BankError as e:
        await _form_error(message, e)
        return

    form = await _update_form(state, email=email)
    await _finish_deposit(message, state, form)


async def _finish_deposit(msg: Message, state: FSMContext, form: dict) -> None:
    account, tx = bank.deposit(await _load_account(state), Decimal(form["amount"]))
    await _save_account(state, account)
    await state.update_data(form=None)

    beneficiary = bank.Beneficiary(
        name=form["beneficiary_name"],
        account=form["beneficiary_account"],
        ifsc=form["beneficiary_ifsc"],
    )
    contact = bank.Contact(mobile=form["mobile"], email=form["email"])
    record = render_deposit_record(tx, account, beneficiary, contact, form["payment_type"], form["remark"])
    await msg.answer_document(
        BufferedInputFile(record.encode("utf-8"), filename=receipt_filename(tx)),
        caption="🧾 Your deposit record",
    )
    await msg.answer(deposit_summary(beneficiary, tx, form["payment_type"]), parse_mode=ParseMode.HTML)
    note = f"✅ <b>{fmt_money(tx.amount)}</b> deposited to your account."
    await _show_bank(msg, state, note, edit=False)


# ── Bank: withdraw ────────────────────────────────────────────────────────────
@router.callback_query(Bank.dashboard, F.data == BANK_WITHDRAW)
async def cb_bank_withdraw(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    account = await _load_account(state)
    await state.set_state(Bank.withdraw_amount)
    await _edit(
        callback.message,
        f"➖ <b>Withdraw</b>\n\nAvailable: <b>{fmt_money(account.balance)}</b>\nHow much?",
        cancel_keyboard(),
    )


@router.message(Bank.withdraw_amount, F.text)
async def msg_withdraw_amount(message: Message, state: FSMContext) -> None:
    try:
        amount = bank.parse_amount(message.text)
        account, tx = bank.withdraw(await _load_account(state), amount)
    except bank.BankError as e:
        await message.answer(bank_error(str(e)), reply_markup=cancel_keyboard(), parse_mode=ParseMode.HTML)
        return

    await _save_account(state, account)
    note = f"✅ <b>{fmt_money(-tx.amount)}</b> withdrawn from your account."
    await _show_bank(message, state, note, edit=False)


# ── Bank: transfer form ───────────────────────────────────────────────────────
@router.callback_query(Bank.dashboard, F.data == BANK_TRANSFER)
async def cb_bank_transfer(callback: CallbackQuery, state: FSMContext) -> None:
    await callback.answer()
    await state.set_state(Bank.transfer_recipient)
    await _edit(callback.message, "💸 <b>Transfer</b>\n\nWho are you sending money to?", cancel_keyboard())


@router.message(Bank.transfer_recipient, F.text)
async def msg_transfer_recipient(message: Message, state: FSMContext) -> None:
    recipient = message.text.strip()
    if not recipient:
        await message.answer(bank_error("Please enter the recipient"), reply_markup=cancel_keyboard(),
                             parse_mode=ParseMode.HTML)
        return

    account = await _load_account(state)
    await state.update_data(form={"recipient": recipient})
    await state.set_state(Bank.transfer_amount)
    await message.answer(
        transfer_prompt(recipient, account),
        reply_markup=cancel_keyboard(),
        parse_mode=ParseMode.HTML,
    )


@router.message(Bank.transfer_amount, F.text)
async def msg_transfer_amount(message: Message, state: FSMContext) -> None:
    data = await state.get_data()
    recipient = data["form"]["recipient"]
    try:
        amount = bank.parse_amount(message.text)
        account, tx = bank.transfer(await _load_account(state), amount, recipient)
    except bank.BankError as e:
        await message.answer(bank_error(str(e)), reply_markup=cancel_keyboard(), parse_mode=ParseMode.HTML)
        return

    await _save_account(state, account)
    await state.update_data(form=None)
    note = f"✅ <b>{fmt_money(-tx.amount)}</b> transferred."
    await _show_bank(message, state, note, edit=False)


# ── No-op (disabled buttons) ──────────────────────────────────────────────────
@router.callback_query(F.data == NOOP)
async def cb_noop(callback: CallbackQuery) -> None:
    await callback.answer()


# ── Stale callbacks (e.g. after state cleared) ───────────────────────────────
@router.callback_query()
async def cb_catch_all(callback: CallbackQuery, state: FSMContext) -> None:
    current = await state.get_state()
    if current is None:
        await callback.answer(
            "No active game. Press /start to begin.", show_alert=True
        )
    else:
        await callback.answer()


# ── Game rule violations ──────────────────────────────────────────────────────
@router.error(ExceptionTypeFilter(GameError), F.update.callback_query.as_("callback"))
async def on_game_error(event: ErrorEvent, callback: CallbackQuery) -> None:
    log.warning("Rejected action %r: %s", callback.data, event.exception)
    await callback.answer(str(event.exception), show_alert=True)


# ── Bootstrap ─────────────────────────────────────────────────────────────────
async def main() -> None:
    bot = Bot(token=BOT_TOKEN)
    dp = Dispatcher(storage=MemoryStorage())
    dp.include_router(router)

    await bot.set_my_commands([
        BotCommand(command="start", description="Main menu"),
        BotCommand(command="bank", description="Demo bank account"),
        BotCommand(command="help", description="Lifelines and rules"),
    ])
    await bot.delete_webhook(drop_pending_updates=True)
    log.info("Quiz bank bot started")
    await dp.start_polling(bot)


if __name__ == "__main__":
    asyncio.run(main())
