"""API routes for payment transactions."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from payment_api.core.cache import Cache
from payment_api.core.database import get_session
from payment_api.schemas.transaction import TransactionPayload, TransactionView
from payment_api.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


def get_cache(request: Request) -> Cache:
    """Get the process-wide response cache."""
    return request.app.state.cache


def get_transaction_service(
    session: AsyncSession = Depends(get_session),
    cache: Cache = Depends(get_cache),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(session, cache)


@router.get("", response_model=list[TransactionView])
async def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> list[TransactionView]:
    """List all transactions.

    Responds 404 when no transaction exists.
    """
    return await service.find_all()


@router.get("/{transaction_id}", response_model=TransactionView)
async def get_transaction(
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionView:
    """Get a transaction by ID."""
    return await service.find_by_id(transaction_id)


@router.post("", response_model=TransactionView, status_code=201)
async def pay(
    request: TransactionPayload,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionView:
    """Authorize a new payment.

    Identifiers, nsu, authorization code and status are assigned by the
    server; a payload carrying any of them is rejected with 400.
    """
    return await service.pay(request)


@router.post("/{transaction_id}/reversal", response_model=TransactionView)
async def reverse(
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionView:
    """Reverse an authorized payment."""
    return await service.reverse(transaction_id)
