import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from energy_billing.api.routes import api_router
from energy_billing.config import settings
from energy_billing.database import AsyncSessionLocal, Base, engine
from energy_billing.schemas import PaymentResponse
from energy_billing.seed import run_seed
from energy_billing.services.payment import INVALID_PAYMENT_DETAILS

logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


async def _init_db():
    """Create tables and load the seed accounts into the in-memory database."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        msg = await run_seed(session)
        await session.commit()
    logger.info("Database initialized: %s", msg)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await _init_db()
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Energy accounts and card payments. Demo only, balances live in memory.",
    lifespan=lifespan,
)
app.include_router(api_router, prefix=settings.api_prefix)


@app.exception_handler(RequestValidationError)
async def payment_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed payment bodies get the same structured 400 as blank card details."""
    if request.url.path.endswith("/payment"):
        logger.warning("Unparseable payment request: %s", exc.errors())
        return JSONResponse(
            status_code=400,
            content=PaymentResponse.failed(INVALID_PAYMENT_DETAILS).to_json(),
        )
    return await request_validation_exception_handler(request, exc)


@app.get("/health")
def health():
    return {"status": "ok"}


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
