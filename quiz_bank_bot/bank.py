"""In-memory demo bank account.

Every operation returns a new `Account` plus the transaction it recorded;
validation failures raise a `BankError` and leave the account untouched.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import StrEnum

from config import parse_money

log = logging.getLogger(__name__)

CENT = Decimal("0.01")


class TxType(StrEnum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"
    QUIZ_WINNING = "quiz_winning"


class TxStatus(StrEnum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class BankError(Exception):
    pass


class InvalidAmount(BankError):
    pass


class InsufficientFunds(BankError):
    pass


class InvalidRecipient(BankError):
    pass


class InvalidBeneficiary(BankError):
    pass


class InvalidContact(BankError):
    pass


@dataclass(frozen=True)
class Transaction:
    id: str
    type: TxType
    amount: Decimal       # negative when money leaves the account
    description: str
    date: str             # ISO date
    status: TxStatus = TxStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "amount": str(self.amount),
            "description": self.description,
            "date": self.date,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            id=data["id"],
            type=TxType(data["type"]),
            amount=Decimal(data["amount"]),
            description=data["description"],
            date=data["date"],
            status=TxStatus(data.get("status", TxStatus.COMPLETED)),
        )


@dataclass(frozen=True)
class Account:
    account_number: str
    account_type: str
    cif_number: str
    ifsc_code: str
    branch: str
    balance: Decimal
    transactions: tuple[Transaction, ...] = ()

    def to_dict(self) -> dict:
        return {
            "account_number": self.account_number,
            "account_type": self.account_type,
            "cif_number": self.cif_number,
            "ifsc_code": self.ifsc_code,
            "branch": self.branch,
            "balance": str(self.balance),
            "transactions": [tx.to_dict() for tx in self.transactions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        return cls(
            account_number=data["account_number"],
            account_type=data["account_type"],
            cif_number=data["cif_number"],
            ifsc_code=data["ifsc_code"],
            branch=data["branch"],
            balance=Decimal(data["balance"]),
            transactions=tuple(Transaction.from_dict(tx) for tx in data["transactions"]),
        )


@dataclass(frozen=True)
class Beneficiary:
    name: str
    account: str
    ifsc: str


@dataclass(frozen=True)
class Contact:
    mobile: str
    email: str


def demo_account() -> Account:
    return Account(
        account_number="****-****-****-4582",
        account_type="Premium Checking",
        cif_number="CIF-80421957",
        ifsc_code="SECB0004582",
        branch="Downtown Branch",
        balance=Decimal("15420.50"),
        transactions=(
            Transaction("001", TxType.DEPOSIT, Decimal("2500.00"),
                        "Salary Deposit - TechCorp Inc.", "2024-06-20"),
            Transaction("002", TxType.WITHDRAWAL, Decimal("-250.00"),
                        "ATM Withdrawal - Downtown Branch", "2024-06-19"),
            Transaction("003", TxType.TRANSFER, Decimal("-500.00"),
                        "Transfer to Savings Account", "2024-06-18"),
        ),
    )


# ── Validation ────────────────────────────────────────────────────────────────
def parse_amount(text: str) -> Decimal:
    """Free-text amount from a chat message → positive Decimal in cents."""
    try:
        amount = parse_money(text)
    except ValueError:
        raise InvalidAmount("Please enter a valid amount, e.g. 250 or 1,250.50") from None
    return _positive(amount)


def _positive(amount: Decimal) -> Decimal:
    try:
        amount = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmount("Amount is too large") from None
    if amount <= 0:
        raise InvalidAmount("Amount must be greater than zero")
    return amount


def _required(text: str, error: type[BankError], message: str) -> str:
    value = text.strip()
    if not value:
        raise error(message)
    return value


def beneficiary_name(text: str) -> str:
    return _required(text, InvalidBeneficiary, "Please enter the beneficiary's full name")


def beneficiary_account(text: str) -> str:
    return _required(text, InvalidBeneficiary, "Please enter the beneficiary's account number")


def beneficiary_ifsc(text: str) -> str:
    return _required(text, InvalidBeneficiary, "Please enter the IFSC code, e.g. SBIN0001234").upper()


def contact_mobile(text: str) -> str:
    return _required(text, InvalidContact, "Please enter your mobile number")


def contact_email(text: str) -> str:
    email = _required(text, InvalidContact, "Please enter your email address")
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise InvalidContact("Please enter a valid email address, e.g. name@example.com")
    return email


def _covered(account: Account, amount: Decimal) -> None:
    if amount > account.balance:
        raise InsufficientFunds("Insufficient funds for this operation")


# ── Ledger ────────────────────────────────────────────────────────────────────
def _post(
    account: Account,
    kind: TxType,
    amount: Decimal,
    description: str,
    today: date | None,
) -> tuple[Account, Transaction]:
    tx = Transaction(
        id=uuid.uuid4().hex[:12].upper(),
        type=kind,
        amount=amount,
        description=description,
        date=(today or date.today()).isoformat(),
    )
    new = replace(
        account,
        balance=account.balance + amount,
        transactions=(tx, *account.transactions),
    )
    log.info("Posted %s %s (%s), balance %s", kind.value, amount, tx.id, new.balance)
    return new, tx


def deposit(account: Account, amount: Decimal, today: date | None = None) -> tuple[Account, Transaction]:
    amount = _positive(amount)
    return _post(account, TxType.DEPOSIT, amount, "Cash Deposit - Online Banking", today)


def withdraw(account: Account, amount: Decimal, today: date | None = None) -> tuple[Account, Transaction]:
    amount = _positive(amount)
    _covered(account, amount)
    return _post(account, TxType.WITHDRAWAL, -amount, "Cash Withdrawal - Online Banking", today)


def transfer(
    account: Account,
    amount: Decimal,
    recipient: str,
    today: date | None = None,
) -> tuple[Account, Transaction]:
    recipient = recipient.strip()
    if not recipient:
        raise InvalidRecipient("Please enter the recipient")
    amount = _positive(amount)
    _covered(account, amount)
    return _post(account, TxType.TRANSFER, -amount, f"Transfer to {recipient}", today)


def deposit_winnings(account: Account, amount: Decimal, today: date | None = None) -> tuple[Account, Transaction]:
    amount = _positive(amount)
    return _post(
        account, TxType.QUIZ_WINNING, amount, "Quiz Game Winnings - Millionaire Challenge", today
    )
