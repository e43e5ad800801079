"""Plain-text deposit record, sent to the user as a .txt document."""

from datetime import date, datetime

from bank import Account, Beneficiary, Contact, Transaction
from config import fmt_money

PAYMENT_TYPES = ("UPI", "NEFT", "IMPS")


def render_deposit_record(
    tx: Transaction,
    account: Account,
    beneficiary: Beneficiary,
    contact: Contact,
    payment_type: str,
    remark: str = "",
    generated_at: datetime | None = None,
) -> str:
    generated_at = generated_at or datetime.now()
    return (
        "=== Deposit Transaction Record ===\n"
        f"Transaction ID: {tx.id}\n"
        f"Date: {tx.date}\n"
        f"Amount: {fmt_money(tx.amount)}\n"
        f"Description: {tx.description}\n"
        f"Status: {tx.status.value}\n"
        "\n"
        "=== Beneficiary Information ===\n"
        f"Beneficiary Name: {beneficiary.name}\n"
        f"Account Number: {beneficiary.account}\n"
        f"IFSC Code: {beneficiary.ifsc}\n"
        "\n"
        "=== Payment Details ===\n"
        f"Payment Type: {payment_type}\n"
        f"Remark: {remark or 'N/A'}\n"
        "\n"
        "=== Contact Information ===\n"
        f"Mobile Number: {contact.mobile}\n"
        f"Email Address: {contact.email}\n"
        "\n"
        "=== Your Account Details ===\n"
        f"Account Number: {account.account_number}\n"
        f"Account Type: {account.account_type}\n"
        f"CIF Number: {account.cif_number}\n"
        f"IFSC Code: {account.ifsc_code}\n"
        f"Branch: {account.branch}\n"
        f"Current Balance: {fmt_money(account.balance)}\n"
        "\n"
        "=== Important Notes ===\n"
        "- Keep this transaction record for your reference\n"
        f"- For any disputes, quote Transaction ID: {tx.id}\n"
        "- This is an auto-generated record from a demo bank; no real money was moved\n"
        "\n"
        f"Generated on: {generated_at:%Y-%m-%d %H:%M:%S}\n"
    )


def receipt_filename(tx: Transaction, on: date | None = None) -> str:
    on = on or date.today()
    return f"Deposit_{tx.id}_{on.isoformat()}.txt"
