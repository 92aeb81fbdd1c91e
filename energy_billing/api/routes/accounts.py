import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from energy_billing.database import get_db
from energy_billing.repositories import account_repo
from energy_billing.schemas import AccountResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/accounts",
    response_model=list[AccountResponse],
    summary="List accounts",
    description="All energy accounts in id order. Filtering by type is left to the client.",
)
async def list_accounts(db: AsyncSession = Depends(get_db)):
    try:
        accounts = await account_repo.list_all(db)
    except Exception:
        logger.exception("Error fetching accounts")
        raise HTTPException(status_code=500, detail="Failed to fetch accounts")
    return [AccountResponse.model_validate(account) for account in accounts]
