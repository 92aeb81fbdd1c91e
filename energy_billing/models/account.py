from __future__ import annotations

import enum
from decimal import Decimal
from sqlalchemy import Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from energy_billing.database import Base


class AccountCategory(str, enum.Enum):
    ELECTRICITY = "ELECTRICITY"
    GAS = "GAS"


class Account(Base):
    """Energy account. Positive balance = credit, negative = debit."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    type: Mapped[AccountCategory] = mapped_column(
        Enum(AccountCategory, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    balance: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    address: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Account(id={self.id!r}, type={self.type.value}, balance={self.balance})"
