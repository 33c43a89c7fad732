"""Transaction persistence entities.

A Transaction exclusively owns its Description (one-to-one, deleted with
the transaction) and references a PaymentMethod.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payment_api.core.database import Base

# Digits and scale of description.value
AMOUNT_PRECISION = 12
AMOUNT_SCALE = 2


class TransactionStatus(str, Enum):
    AUTHORIZED = "AUTHORIZED"
    DENIED = "DENIED"


class Description(Base):
    """Payment details plus the fields stamped by the authorizer."""

    __tablename__ = "description"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    value: Mapped[Decimal | None] = mapped_column(
        Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=True
    )
    date_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    establishment: Mapped[str | None] = mapped_column(String(255), nullable=True)
    merchant_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    nsu: Mapped[str] = mapped_column(String(64), nullable=False)
    authorization_code: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(TransactionStatus, name="transaction_status"), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Description(id={self.id}, nsu={self.nsu}, status={self.status})>"


class PaymentMethod(Base):
    __tablename__ = "payment_method"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    installments: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<PaymentMethod(id={self.id}, type={self.type}, installments={self.installments})>"


class Transaction(Base):
    __tablename__ = "transaction"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description_id: Mapped[int] = mapped_column(
        ForeignKey("description.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    payment_method_id: Mapped[int] = mapped_column(
        ForeignKey("payment_method.id"), nullable=False
    )

    description: Mapped[Description] = relationship(
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="selectin",
    )
    payment_method: Mapped[PaymentMethod] = relationship(
        cascade="save-update, merge",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, description_id={self.description_id})>"
