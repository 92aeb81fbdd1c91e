from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

from energy_billing.models import AccountCategory

# Decimal internally, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: AccountCategory
    balance: Money
    address: str
