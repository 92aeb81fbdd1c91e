from energy_billing.models.account import Account, AccountCategory

__all__ = [
    "Account",
    "AccountCategory",
]
