from aiogram.fsm.state import State, StatesGroup


class Game(StatesGroup):
    question = State()     # Waiting for answer / lifeline
    confirming = State()   # "Final answer?" screen
    advancing = State()    # "Correct!" card before the next question
    finished = State()     # Won, lost or walked away


class Bank(StatesGroup):
    dashboard = State()

    # Deposit form
    beneficiary_name = State()
    beneficiary_account = State()
    beneficiary_ifsc = State()
    deposit_amount = State()
    deposit_payment = State()
    deposit_remark = State()
    contact_mobile = State()
    contact_email = State()

    withdraw_amount = State()

    # Transfer form
    transfer_recipient = State()
    transfer_amount = State()
