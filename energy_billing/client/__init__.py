from energy_billing.client.api import BillingApiClient, BillingApiError
from energy_billing.client.dashboard import AccountDashboard, balance_label, filter_accounts
from energy_billing.client.form import FormState, PaymentForm, format_card_number, validate_payment_fields

__all__ = [
    "AccountDashboard",
    "BillingApiClient",
    "BillingApiError",
    "FormState",
    "PaymentForm",
    "balance_label",
    "filter_accounts",
    "format_card_number",
    "validate_payment_fields",
]
