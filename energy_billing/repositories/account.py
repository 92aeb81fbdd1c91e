from decimal import Decimal
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from energy_billing.models import Account


class AccountRepository:
    async def list_all(self, db: AsyncSession) -> list[Account]:
        result = await db.execute(select(Account).order_by(Account.id))
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, account_id: str) -> Account | None:
        result = await db.execute(select(Account).where(Account.id == account_id))
        return result.scalar_one_or_none()

    async def get_for_update(self, db: AsyncSession, account_id: str) -> Account | None:
        """Row lock on backends that support it; SQLite ignores FOR UPDATE."""
        result = await db.execute(
            select(Account).where(Account.id == account_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_balance(self, db: AsyncSession, account_id: str) -> Decimal | None:
        result = await db.execute(select(Account.balance).where(Account.id == account_id))
        return result.scalar_one_or_none()

    async def apply_credit(
        self,
        db: AsyncSession,
        account_id: str,
        amount: Decimal,
    ) -> Decimal:
        """Add amount to the balance in place (single UPDATE). Returns the new balance."""
        await db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + amount)
        )
        await db.flush()
        return await self.get_balance(db, account_id)


account_repo = AccountRepository()
