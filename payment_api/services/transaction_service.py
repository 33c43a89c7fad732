"""Payment transaction service: lookup, listing, authorization and reversal.

Reads go through the ``transacao`` cache region before touching the
store. ``pay`` evicts the whole region after commit; ``reverse`` replaces
the single entry of the reversed transaction.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from payment_api.core.cache import Cache
from payment_api.core.errors import InsertionNotPermittedError, NotFoundError
from payment_api.core.logging import get_logger
from payment_api.domain.mapper import project
from payment_api.domain.models.transaction import Transaction, TransactionStatus
from payment_api.persistence.transaction_repository import TransactionRepository
from payment_api.schemas.transaction import TransactionPayload, TransactionView
from payment_api.services.authorizer import Authorizer, StaticAuthorizer

logger = get_logger(__name__)

CACHE_REGION = "transacao"
FIND_ALL_CACHE_KEY = "find_all"


def server_owned_fields(payload: TransactionPayload) -> list[str]:
    """Names of server-owned fields the client filled in."""
    candidates = {
        "id": payload.id,
        "description.id": payload.description.id,
        "payment_method.id": payload.payment_method.id,
        "description.status": payload.description.status,
        "description.nsu": payload.description.nsu,
        "description.authorization_code": payload.description.authorization_code,
    }
    return [name for name, value in candidates.items() if value is not None]


def is_insertion_permitted(payload: TransactionPayload) -> bool:
    return not server_owned_fields(payload)


class TransactionService:
    """Service for payment transaction operations."""

    def __init__(
        self,
        session: AsyncSession,
        cache: Cache,
        repository: TransactionRepository | None = None,
        authorizer: Authorizer | None = None,
    ):
        self.session = session
        self.cache = cache
        self.repository = repository or TransactionRepository(session)
        self.authorizer = authorizer or StaticAuthorizer()

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[None]:
        """Commit on success, roll back on any failure including cancellation."""
        try:
            yield
            await self.session.commit()
        except BaseException:
            await self.session.rollback()
            raise

    async def _load(self, transaction_id: int) -> TransactionView:
        transaction = await self.repository.find_by_id(transaction_id)
        if transaction is None:
            raise NotFoundError(
                "Transaction not found", details={"transaction_id": transaction_id}
            )
        return project(transaction, TransactionView)

    async def find_by_id(self, transaction_id: int) -> TransactionView:
        """Get a transaction by ID, from cache when possible.

        Views are frozen, so the cached instance is returned as is.
        """
        cached = self.cache.get(CACHE_REGION, transaction_id)
        if cached is not None:
            return cached

        async with self._unit_of_work():
            view = await self._load(transaction_id)

        return self.cache.put_and_return(CACHE_REGION, transaction_id, view)

    async def find_all(self) -> list[TransactionView]:
        """List all transactions.

        An empty store is reported as NotFoundError rather than an empty list.
        Each call gets its own list so callers cannot reorder the cached one.
        """
        cached = self.cache.get(CACHE_REGION, FIND_ALL_CACHE_KEY)
        if cached is not None:
            return list(cached)

        async with self._unit_of_work():
            transactions = await self.repository.find_all()
            views = [project(t, TransactionView) for t in transactions]

        if not views:
            raise NotFoundError("No transactions found")

        return list(self.cache.put_and_return(CACHE_REGION, FIND_ALL_CACHE_KEY, views))

    async def pay(self, payload: TransactionPayload) -> TransactionView:
        """Authorize and persist a new payment."""
        rejected = server_owned_fields(payload)
        if rejected:
            logger.warning("insertion_rejected", fields=rejected)
            raise InsertionNotPermittedError(
                "Insertion not permitted: server-owned fields must be absent",
                details={"fields": rejected},
            )

        transaction = project(payload, Transaction)
        authorization = self.authorizer.authorize(transaction)
        transaction.description.nsu = authorization.nsu
        transaction.description.authorization_code = authorization.authorization_code
        transaction.description.status = TransactionStatus.AUTHORIZED

        async with self._unit_of_work():
            saved = await self.repository.save(transaction)
            view = project(saved, TransactionView)

        self.cache.evict_region(CACHE_REGION)
        logger.info("payment_authorized", transaction_id=view.id, nsu=view.description.nsu)
        return view

    async def reverse(self, transaction_id: int) -> TransactionView:
        """Reverse a payment by marking its description DENIED.

        A transaction that is already DENIED is reversed again without error.
        """
        async with self._unit_of_work():
            current = self.cache.get(CACHE_REGION, transaction_id)
            if current is None:
                current = await self._load(transaction_id)

            transaction = project(current, Transaction)
            transaction.description.status = TransactionStatus.DENIED
            await self.repository.save_description(transaction.description)
            view = project(transaction, TransactionView)

        logger.info("transaction_reversed", transaction_id=transaction_id)
        return self.cache.put_and_return(CACHE_REGION, transaction_id, view)
