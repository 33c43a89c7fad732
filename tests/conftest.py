"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from payment_api.core.cache import InMemoryCache
from payment_api.domain.models.transaction import (
    Description,
    PaymentMethod,
    Transaction,
    TransactionStatus,
)
from payment_api.schemas.transaction import (
    DescriptionPayload,
    PaymentMethodPayload,
    TransactionPayload,
)
from payment_api.services.transaction_service import TransactionService


class InMemoryTransactionRepository:
    """Repository double that assigns identifiers like the database would."""

    def __init__(self) -> None:
        self.transactions: dict[int, Transaction] = {}
        self.save_calls = 0
        self.save_description_calls = 0
        self._next_id = {"transaction": 1, "description": 1, "payment_method": 1}

    def _assign(self, table: str) -> int:
        value = self._next_id[table]
        self._next_id[table] += 1
        return value

    async def find_by_id(self, transaction_id: int) -> Transaction | None:
        return self.transactions.get(transaction_id)

    async def find_all(self) -> list[Transaction]:
        return [self.transactions[key] for key in sorted(self.transactions)]

    async def save(self, transaction: Transaction) -> Transaction:
        self.save_calls += 1
        transaction.description.id = self._assign("description")
        transaction.payment_method.id = self._assign("payment_method")
        transaction.id = self._assign("transaction")
        transaction.description_id = transaction.description.id
        transaction.payment_method_id = transaction.payment_method.id
        self.transactions[transaction.id] = transaction
        return transaction

    async def save_description(self, description: Description) -> Description:
        self.save_description_calls += 1
        for transaction in self.transactions.values():
            stored = transaction.description
            if stored.id == description.id:
                stored.value = description.value
                stored.date_time = description.date_time
                stored.establishment = description.establishment
                stored.merchant_code = description.merchant_code
                stored.nsu = description.nsu
                stored.authorization_code = description.authorization_code
                stored.status = description.status
                return stored
        raise AssertionError(f"description {description.id} is not stored")


def build_transaction(
    transaction_id: int = 1,
    status: TransactionStatus = TransactionStatus.AUTHORIZED,
) -> Transaction:
    """Persisted-looking transaction entity for repository mocks."""
    return Transaction(
        id=transaction_id,
        description_id=transaction_id,
        payment_method_id=transaction_id,
        description=Description(
            id=transaction_id,
            value=Decimal("496"),
            establishment="PUC Minas",
            merchant_code="00000000000000",
            nsu="1234567890",
            authorization_code="147258369",
            status=status,
        ),
        payment_method=PaymentMethod(id=transaction_id, type="DEBITO", installments=1),
    )


@pytest.fixture
def payment_payload() -> TransactionPayload:
    """Payment with every server-owned field absent."""
    return TransactionPayload(
        description=DescriptionPayload(
            value=Decimal("496"),
            establishment="PUC Minas",
            merchant_code="00000000000000",
        ),
        payment_method=PaymentMethodPayload(type="DEBITO", installments=1),
    )


@pytest.fixture
def make_transaction():
    return build_transaction


@pytest.fixture
def mock_session():
    """Mock async database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def repository() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
def service(mock_session, cache, repository) -> TransactionService:
    """Service wired to an in-memory repository and a fresh cache."""
    return TransactionService(mock_session, cache, repository=repository)
