import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from energy_billing.database import get_db
from energy_billing.schemas import PaymentRequest, PaymentResponse
from energy_billing.services.payment import payment_processor

logger = logging.getLogger(__name__)

router = APIRouter()

PAYMENT_FAILED = "Failed to process payment"


@router.post(
    "/payment",
    response_model=PaymentResponse,
    response_model_exclude_none=True,
    summary="Make a payment",
    description="Credit an account by card payment. 400 with a message on invalid details or unknown account.",
    responses={400: {"model": PaymentResponse}, 500: {"model": PaymentResponse}},
)
async def make_payment(
    body: PaymentRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        result = await payment_processor.process(db, body)
    except Exception:
        logger.exception("Error processing payment for %s", body.account_id)
        return JSONResponse(
            status_code=500,
            content=PaymentResponse.failed(PAYMENT_FAILED).to_json(),
        )
    return JSONResponse(status_code=200 if result.success else 400, content=result.to_json())
