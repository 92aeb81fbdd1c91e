from energy_billing.repositories.account import AccountRepository, account_repo

__all__ = [
    "AccountRepository",
    "account_repo",
]
