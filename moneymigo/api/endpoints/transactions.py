"""
Transaction API Endpoints
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import List

from moneymigo.api.deps import get_db, get_transaction_filters, get_stats_filters
from moneymigo.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionFilters,
    TransactionStats,
    MessageResponse
)
from moneymigo.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter()

def _server_error(message: str) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=500, detail=message)

@router.get("", response_model=List[TransactionResponse])
async def get_transactions(
    filters: TransactionFilters = Depends(get_transaction_filters),
    db: AsyncSession = Depends(get_db)
):
    """
    List transactions, newest first unless sortOrder=asc.
    Withdrawn investments are hidden unless includeWithdrawn=true.
    """
    try:
        return await TransactionService(db).list_transactions(filters)
    except SQLAlchemyError:
        raise _server_error("Failed to fetch transactions")

@router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    transaction: TransactionCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a new transaction
    """
    try:
        return await TransactionService(db).create_transaction(transaction)
    except SQLAlchemyError:
        raise _server_error("Failed to create transaction")

# Must be registered before the /{transaction_id} routes
@router.get("/stats", response_model=TransactionStats)
async def get_transaction_stats(
    filters: TransactionFilters = Depends(get_stats_filters),
    db: AsyncSession = Depends(get_db)
):
    """
    Total income, total expense and balance under the same filters as the list
    """
    try:
        stats = await TransactionService(db).get_stats(filters)
    except SQLAlchemyError:
        raise _server_error("Failed to fetch statistics")

    return TransactionStats(**stats)

@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Get specific transaction
    """
    try:
        transaction = await TransactionService(db).get_transaction(transaction_id)
    except SQLAlchemyError:
        raise _server_error("Failed to fetch transaction")

    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return transaction

@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: int,
    update_data: TransactionUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Replace every mutable field of a transaction
    """
    try:
        transaction = await TransactionService(db).update_transaction(transaction_id, update_data)
    except SQLAlchemyError:
        raise _server_error("Failed to update transaction")

    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return transaction

@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Delete transaction
    """
    try:
        deleted = await TransactionService(db).delete_transaction(transaction_id)
    except SQLAlchemyError:
        raise _server_error("Failed to delete transaction")

    if not deleted:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return {"message": "Transaction deleted successfully"}

@router.patch("/{transaction_id}/withdraw", response_model=MessageResponse)
async def withdraw_investment(
    transaction_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Mark an investment as withdrawn
    """
    try:
        transaction = await TransactionService(db).set_withdrawn(transaction_id, True)
    except SQLAlchemyError:
        raise _server_error("Failed to withdraw investment")

    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return {"message": "Investment withdrawn successfully"}

@router.patch("/{transaction_id}/reopen", response_model=MessageResponse)
async def reopen_investment(
    transaction_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Reopen a withdrawn investment
    """
    try:
        transaction = await TransactionService(db).set_withdrawn(transaction_id, False)
    except SQLAlchemyError:
        raise _server_error("Failed to reopen investment")

    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    return {"message": "Investment reopened successfully"}
