"""
Payment service: presence checks, account lookup and an in-place balance
credit, serialized per process so lookup-then-mutate never interleaves.
"""
import asyncio
import logging
import random
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession

from energy_billing.repositories import account_repo
from energy_billing.schemas import PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)

INVALID_PAYMENT_DETAILS = "Invalid payment details"
ACCOUNT_NOT_FOUND = "Account not found"


def generate_transaction_id() -> str:
    """T-#### with a random 4-digit suffix. Not collision-free."""
    return f"T-{random.randint(0, 9999):04d}"


class PaymentProcessor:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @staticmethod
    def _has_required_details(request: PaymentRequest) -> bool:
        card_fields = (
            request.card_number,
            request.cardholder_name,
            request.expiry_date,
            request.cvv,
        )
        if not all(card_fields):
            return False
        amount = request.amount
        if not isinstance(amount, Decimal) or not amount.is_finite() or amount <= 0:
            return False
        # balances are stored in cents; a sub-cent amount could not be credited exactly
        return amount.normalize().as_tuple().exponent >= -2

    async def process(self, db: AsyncSession, request: PaymentRequest) -> PaymentResponse:
        """
        Credit request.amount to the account and return a transaction id.
        Business failures come back as success=False; only unexpected faults raise.
        """
        if not self._has_required_details(request):
            logger.warning("Payment rejected for %s: missing or invalid details", request.account_id)
            return PaymentResponse.failed(INVALID_PAYMENT_DETAILS)

        async with self._lock:
            account = None
            if request.account_id:
                account = await account_repo.get_for_update(db, request.account_id)
            if account is None:
                logger.warning("Payment rejected: account %s not found", request.account_id)
                return PaymentResponse.failed(ACCOUNT_NOT_FOUND)

            new_balance = await account_repo.apply_credit(db, account.id, request.amount)
            await db.commit()

        transaction_id = generate_transaction_id()
        logger.info(
            "Payment %s credited %s to %s, new balance %s",
            transaction_id, request.amount, account.id, new_balance,
        )
        return PaymentResponse.ok(transaction_id)


payment_processor = PaymentProcessor()
