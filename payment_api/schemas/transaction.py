"""Transaction payload and view schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payment_api.domain.models.transaction import AMOUNT_PRECISION, AMOUNT_SCALE, TransactionStatus

# Smallest representable amount in the description.value column
AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)


class DescriptionPayload(BaseModel):
    """Description as submitted by a client.

    Server-owned fields are optional here so that their presence can be
    detected and rejected.
    """

    id: int | None = None
    value: Decimal | None = Field(
        None,
        ge=0,
        max_digits=AMOUNT_PRECISION,
        decimal_places=AMOUNT_SCALE,
        description="Payment amount",
    )
    date_time: datetime | None = None
    establishment: str | None = Field(None, max_length=255)
    merchant_code: str | None = Field(None, max_length=64)
    nsu: str | None = None
    authorization_code: str | None = None
    status: TransactionStatus | None = None


class PaymentMethodPayload(BaseModel):
    id: int | None = None
    type: str | None = Field(None, max_length=32, description="e.g. AVISTA, DEBITO")
    installments: int | None = Field(None, ge=1)


class TransactionPayload(BaseModel):
    """Schema for authorizing a new payment."""

    id: int | None = None
    description: DescriptionPayload
    payment_method: PaymentMethodPayload


class DescriptionView(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    value: Decimal | None = None
    date_time: datetime | None = None
    establishment: str | None = None
    merchant_code: str | None = None
    nsu: str
    authorization_code: str
    status: TransactionStatus

    @field_validator("value", mode="after")
    @classmethod
    def quantize_value(cls, v: Decimal | None) -> Decimal | None:
        """Render amounts at column scale whether they came from a payload or a row."""
        if v is None:
            return v
        return v.quantize(AMOUNT_QUANTUM)


class PaymentMethodView(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    type: str | None = None
    installments: int | None = None


class TransactionView(BaseModel):
    """Read model of a persisted transaction.

    Views are immutable because the cache hands the same instance to every
    reader.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    description: DescriptionView
    payment_method: PaymentMethodView
