from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from energy_billing.schemas.account import Money


class PaymentRequest(BaseModel):
    """
    Card payment against one account. Card fields are optional at the schema
    level so that a request with blanks reaches the processor's presence check
    and is answered with a structured failure.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    account_id: str | None = Field(None, description="Target account, e.g. A-0001")
    card_number: str | None = Field(None, description="Formatted as DDDD DDDD DDDD DDDD")
    cardholder_name: str | None = None
    expiry_date: str | None = Field(None, description="MM/YY")
    cvv: str | None = None
    amount: Money | None = Field(None, description="Amount to credit to the account")


class PaymentResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    transaction_id: str | None = None
    message: str | None = None

    @model_validator(mode="after")
    def check_outcome_fields(self) -> "PaymentResponse":
        if self.success and not self.transaction_id:
            raise ValueError("transactionId is required on success")
        if not self.success and self.transaction_id:
            raise ValueError("transactionId is only present on success")
        if not self.success and not self.message:
            raise ValueError("message is required on failure")
        return self

    @classmethod
    def ok(cls, transaction_id: str) -> "PaymentResponse":
        return cls(success=True, transaction_id=transaction_id)

    @classmethod
    def failed(cls, message: str) -> "PaymentResponse":
        return cls(success=False, message=message)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
