"""Fixed account seed, applied on startup of the in-memory database."""
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from energy_billing.models import Account, AccountCategory

SEED_ACCOUNTS: list[tuple[str, AccountCategory, Decimal, str]] = [
    ("A-0001", AccountCategory.ELECTRICITY, Decimal("30"), "1 Greville Ct, Thomastown, 3076, Victoria"),
    ("A-0002", AccountCategory.GAS, Decimal("0"), "74 Taltarni Rd, Yawong Hills, 3478, Victoria"),
    ("A-0003", AccountCategory.ELECTRICITY, Decimal("-40"), "44 William Road, Cresswell Downs, 0862, Northern Territory"),
    ("A-0004", AccountCategory.ELECTRICITY, Decimal("50"), "87 Carolina Park Road, Forresters Beach, 2260, New South Wales"),
    ("A-0005", AccountCategory.GAS, Decimal("25"), "12 Sunset Blvd, Redcliffe, 4020, Queensland"),
    ("A-0006", AccountCategory.ELECTRICITY, Decimal("-15"), "3 Ocean View Dr, Torquay, 3228, Victoria"),
    ("A-0007", AccountCategory.GAS, Decimal("0"), "150 Greenway Cres, Mawson Lakes, 5095, South Australia"),
    ("A-0008", AccountCategory.ELECTRICITY, Decimal("120"), "88 Harbour St, Sydney, 2000, New South Wales"),
    ("A-0009", AccountCategory.GAS, Decimal("-60"), "22 Boulder Rd, Kalgoorlie, 6430, Western Australia"),
]


async def run_seed(db: AsyncSession) -> str:
    """Insert the seed accounts. Idempotent. Returns status message."""
    r = await db.execute(select(Account).limit(1))
    if r.scalar_one_or_none() is not None:
        return "Already seeded"

    for account_id, category, balance, address in SEED_ACCOUNTS:
        db.add(Account(id=account_id, type=category, balance=balance, address=address))
    await db.flush()
    return f"Seeded {len(SEED_ACCOUNTS)} accounts"
