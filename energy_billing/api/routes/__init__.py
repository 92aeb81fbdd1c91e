from fastapi import APIRouter
from energy_billing.api.routes import accounts, payments

api_router = APIRouter()
api_router.include_router(accounts.router, tags=["accounts"])
api_router.include_router(payments.router, tags=["payments"])
