"""
Account dashboard: the client's view of the account list, the type filter
and the payment form opened against one account.
"""
import logging
from decimal import Decimal

from energy_billing.client.api import BillingApiClient, BillingApiError
from energy_billing.client.form import PaymentForm
from energy_billing.models import AccountCategory
from energy_billing.schemas import AccountResponse, PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)

ALL_ACCOUNTS = "ALL"
LOAD_FAILED = "Failed to load accounts. Please try again later."


def balance_label(balance: Decimal) -> str:
    """$30.00 CR for credit; debit and settled balances show the bare amount."""
    text = f"${abs(balance):.2f}"
    return f"{text} CR" if balance > 0 else text


def filter_accounts(accounts: list[AccountResponse], filter_type: str) -> list[AccountResponse]:
    if filter_type == ALL_ACCOUNTS:
        return list(accounts)
    return [account for account in accounts if account.type.value == filter_type]


class AccountDashboard:
    def __init__(self, api: BillingApiClient, submit_timeout: float | None = None):
        self.api = api
        self.accounts: list[AccountResponse] = []
        self.filter_type = ALL_ACCOUNTS
        self.is_loading = False
        self.error: str | None = None
        self.selected_account: AccountResponse | None = None
        self.is_modal_open = False
        self.form = PaymentForm(self._submit_payment, submit_timeout=submit_timeout)

    @property
    def visible_accounts(self) -> list[AccountResponse]:
        return filter_accounts(self.accounts, self.filter_type)

    def set_filter(self, filter_type: str) -> None:
        allowed = {ALL_ACCOUNTS, *(c.value for c in AccountCategory)}
        if filter_type not in allowed:
            raise ValueError(f"Unknown account filter: {filter_type}")
        self.filter_type = filter_type

    async def load_accounts(self) -> None:
        self.is_loading = True
        self.error = None
        try:
            self.accounts = await self.api.fetch_accounts()
        except BillingApiError:
            logger.exception("Error loading accounts")
            self.error = LOAD_FAILED
        finally:
            self.is_loading = False

    def open_payment(self, account: AccountResponse) -> None:
        self.selected_account = account
        self.is_modal_open = True
        self.form.open(account)

    def close_payment(self) -> None:
        self.is_modal_open = False
        self.selected_account = None
        self.form.close()

    async def submit_payment(self) -> PaymentResponse | None:
        return await self.form.submit()

    async def _submit_payment(self, payment: PaymentRequest) -> PaymentResponse:
        response = await self.api.make_payment(payment)
        if response.success:
            self._apply_local_credit(payment.account_id, payment.amount)
        return response

    def _apply_local_credit(self, account_id: str, amount: Decimal) -> None:
        updated = []
        for account in self.accounts:
            if account.id == account_id:
                account = account.model_copy(update={"balance": account.balance + amount})
            updated.append(account)
        self.accounts = updated
