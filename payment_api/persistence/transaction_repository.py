"""Transaction repository using SQLAlchemy 2.0 async ORM.

Tables: transaction, description, payment_method

All methods run inside the transaction opened by the caller; nothing here
commits.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from payment_api.domain.models.transaction import Description, Transaction


class TransactionRepository:
    """Repository for transaction data access."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, transaction_id: int) -> Transaction | None:
        """Get transaction by ID, with description and payment method loaded."""
        return await self.session.get(Transaction, transaction_id)

    async def find_all(self) -> list[Transaction]:
        """List every transaction ordered by ID."""
        result = await self.session.execute(select(Transaction).order_by(Transaction.id))
        return list(result.scalars().all())

    async def save(self, transaction: Transaction) -> Transaction:
        """Insert a transaction, cascading to its description and payment method.

        Identifiers are populated on return.
        """
        self.session.add(transaction)
        await self.session.flush()
        return transaction

    async def save_description(self, description: Description) -> Description:
        """Persist the state of a detached or transient description."""
        merged = await self.session.merge(description)
        await self.session.flush()
        return merged
