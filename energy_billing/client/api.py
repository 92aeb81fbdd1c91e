"""
HTTP client for the billing API
"""
import logging

import httpx
from pydantic import TypeAdapter

from energy_billing.config import settings
from energy_billing.schemas import AccountResponse, PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)

_accounts_adapter = TypeAdapter(list[AccountResponse])


class BillingApiError(RuntimeError):
    """Transport-level failure: network error, timeout or an unexpected response."""


class BillingApiClient:
    """Talks to GET /accounts and POST /payment."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.api_url
        self.timeout = httpx.Timeout(timeout if timeout is not None else settings.request_timeout)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "BillingApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_accounts(self) -> list[AccountResponse]:
        try:
            response = await self._client.get("/accounts")
            response.raise_for_status()
            return _accounts_adapter.validate_python(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching accounts from %s: %s", self.base_url, e)
            raise BillingApiError("Failed to fetch accounts") from e

    async def make_payment(self, payment: PaymentRequest) -> PaymentResponse:
        """
        Submit a payment. 200 and 400 carry a PaymentResponse and are returned
        as-is; anything else raises BillingApiError.
        """
        try:
            response = await self._client.post(
                "/payment",
                json=payment.model_dump(mode="json", by_alias=True),
            )
        except httpx.TimeoutException as e:
            logger.error("Timeout while making payment for %s", payment.account_id)
            raise BillingApiError("Payment request timed out") from e
        except httpx.HTTPError as e:
            logger.error("Error making payment for %s: %s", payment.account_id, e)
            raise BillingApiError("Payment request failed") from e

        if response.status_code not in (200, 400):
            logger.error(
                "Unexpected status %d making payment for %s: %s",
                response.status_code, payment.account_id, response.text,
            )
            raise BillingApiError(f"Payment failed with status {response.status_code}")
        try:
            return PaymentResponse.model_validate(response.json())
        except ValueError as e:
            logger.error("Malformed payment response: %s", response.text)
            raise BillingApiError("Malformed payment response") from e
