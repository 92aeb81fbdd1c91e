from energy_billing.schemas.account import AccountResponse, Money
from energy_billing.schemas.payment import PaymentRequest, PaymentResponse

__all__ = [
    "AccountResponse",
    "Money",
    "PaymentRequest",
    "PaymentResponse",
]
