"""
Payment form: card-number formatting as the user types, per-field validation
with every message reported at once, and an explicit idle / submitting /
success state machine around a single in-flight submission.
"""
import asyncio
import enum
import logging
import re
from collections.abc import Awaitable, Callable
from decimal import Decimal

from energy_billing.config import settings
from energy_billing.schemas import AccountResponse, PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[PaymentRequest], Awaitable[PaymentResponse]]

CARD_NUMBER_MAX_LENGTH = 19
MIN_NAME_LENGTH = 3
MIN_AMOUNT = Decimal("0.01")

# ASCII digits only; \d alone would accept any Unicode decimal digit
CARD_NUMBER_RE = re.compile(r"^\d{4} \d{4} \d{4} \d{4}$", re.ASCII)
EXPIRY_DATE_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$", re.ASCII)
CVV_RE = re.compile(r"^\d{3,4}$", re.ASCII)
AMOUNT_RE = re.compile(r"^\d+(\.\d{1,2})?$", re.ASCII)
NON_DIGIT_RE = re.compile(r"\D", re.ASCII)

PAYMENT_FAILED_NOTICE = "Payment failed. Please try again."

FIELDS = ("card_number", "cardholder_name", "expiry_date", "cvv", "amount")


class FormState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"


def format_card_number(value: str) -> str:
    """Keep digits only, group in fours, cap at 16 digits plus separators."""
    digits = NON_DIGIT_RE.sub("", value)
    grouped = " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))
    return grouped[:CARD_NUMBER_MAX_LENGTH]


def _validate_card_number(value: str) -> str | None:
    if not value.strip():
        return "Card number is required"
    if not CARD_NUMBER_RE.match(value):
        return "Enter a valid 16-digit card number"
    return None


def _validate_cardholder_name(value: str) -> str | None:
    if not value.strip():
        return "Cardholder name is required"
    if len(value) < MIN_NAME_LENGTH:
        return "Name must be at least 3 characters"
    return None


def _validate_expiry_date(value: str) -> str | None:
    if not value.strip():
        return "Expiry date is required"
    if not EXPIRY_DATE_RE.match(value):
        return "Enter a valid expiry date (MM/YY)"
    return None


def _validate_cvv(value: str) -> str | None:
    if not value.strip():
        return "CVV is required"
    if not CVV_RE.match(value):
        return "Enter a valid 3 or 4 digit CVV"
    return None


def _validate_amount(value: str) -> str | None:
    if not value.strip():
        return "Amount is required"
    if not AMOUNT_RE.match(value):
        return "Enter a valid amount (up to 2 decimal places)"
    if Decimal(value) < MIN_AMOUNT:
        return "Amount must be at least $0.01"
    return None


_VALIDATORS = {
    "card_number": _validate_card_number,
    "cardholder_name": _validate_cardholder_name,
    "expiry_date": _validate_expiry_date,
    "cvv": _validate_cvv,
    "amount": _validate_amount,
}


def validate_payment_fields(values: dict[str, str]) -> dict[str, str]:
    """Return {field: message} for every field that fails; empty when all pass."""
    errors = {}
    for field, validator in _VALIDATORS.items():
        message = validator(values.get(field, ""))
        if message:
            errors[field] = message
    return errors


class PaymentForm:
    """
    Form controller for one payment at a time.

    submit_handler is the transport boundary. It returns a PaymentResponse
    for both outcomes and raises only on transport faults, which the form
    logs and contains.
    """

    def __init__(self, submit_handler: SubmitHandler, submit_timeout: float | None = None):
        self.submit_handler = submit_handler
        self.submit_timeout = submit_timeout if submit_timeout is not None else settings.request_timeout
        self.account: AccountResponse | None = None
        self.state = FormState.IDLE
        self.values: dict[str, str] = {}
        self.errors: dict[str, str] = {}
        self.failure_message: str | None = None
        self.transaction_id: str | None = None
        self._in_flight = False
        self.reset()

    @property
    def is_submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    def reset(self) -> None:
        """Clear values and messages. An outstanding submission keeps the form SUBMITTING."""
        self.values = {field: "" for field in FIELDS}
        self.errors = {}
        self.failure_message = None
        self.transaction_id = None
        self.state = FormState.SUBMITTING if self._in_flight else FormState.IDLE

    def open(self, account: AccountResponse) -> None:
        """Target an account. A different account reference always starts from a clean form."""
        if account is not self.account:
            self.account = account
            self.reset()

    def close(self) -> None:
        """Dismiss the form, including the success view. Never validates."""
        self.account = None
        self.reset()

    def update_field(self, field: str, raw: str) -> str:
        if field not in self.values:
            raise KeyError(f"Unknown payment field: {field}")
        value = format_card_number(raw) if field == "card_number" else raw
        self.values[field] = value
        return value

    def validate(self) -> dict[str, str]:
        self.errors = validate_payment_fields(self.values)
        return self.errors

    def build_request(self) -> PaymentRequest:
        return PaymentRequest(
            account_id=self.account.id,
            card_number=self.values["card_number"],
            cardholder_name=self.values["cardholder_name"],
            expiry_date=self.values["expiry_date"],
            cvv=self.values["cvv"],
            amount=Decimal(self.values["amount"]),
        )

    async def submit(self) -> PaymentResponse | None:
        """
        Validate and send. Returns the PaymentResponse, or None when nothing
        was sent or the transport failed.
        """
        if self.state is not FormState.IDLE or self.account is None:
            return None
        if self.validate():
            return None

        account = self.account
        request = self.build_request()
        self.failure_message = None
        self.state = FormState.SUBMITTING
        self._in_flight = True
        try:
            response = await asyncio.wait_for(self.submit_handler(request), self.submit_timeout)
        except Exception:
            logger.exception("Payment submission error for %s", request.account_id)
            response = None
        finally:
            self._in_flight = False

        if self.account is not account:
            # closed or retargeted while in flight; the new target starts clean
            self.state = FormState.IDLE
            return response
        if response is None:
            self.failure_message = PAYMENT_FAILED_NOTICE
            self.state = FormState.IDLE
            return None
        if response.success:
            self.transaction_id = response.transaction_id
            self.state = FormState.SUCCESS
        else:
            logger.warning("Payment for %s declined: %s", request.account_id, response.message)
            self.failure_message = response.message or PAYMENT_FAILED_NOTICE
            self.state = FormState.IDLE
        return response
