"""
Payment Type API Endpoints
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List

from moneymigo.api.deps import get_db
from moneymigo.schemas.payment_type import PaymentTypeCreate, PaymentTypeResponse
from moneymigo.schemas.transaction import MessageResponse
from moneymigo.services.payment_type_service import PaymentTypeService, normalize_name

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[PaymentTypeResponse])
async def get_payment_types(db: AsyncSession = Depends(get_db)):
    """
    All payment types, defaults first, then by name
    """
    try:
        return await PaymentTypeService(db).list_payment_types()
    except SQLAlchemyError:
        logger.exception("Error fetching payment types")
        raise HTTPException(status_code=500, detail="Failed to fetch payment types")

@router.post("", response_model=PaymentTypeResponse, status_code=201)
async def add_payment_type(
    payment_type: PaymentTypeCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Add a custom payment type
    """
    name = normalize_name(payment_type.name)
    if not name:
        raise HTTPException(status_code=400, detail="Payment type name is required")

    try:
        return await PaymentTypeService(db).add_payment_type(name)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Payment type already exists")
    except SQLAlchemyError:
        logger.exception("Error adding payment type")
        raise HTTPException(status_code=500, detail="Failed to add payment type")

@router.delete("/{payment_type_id}", response_model=MessageResponse)
async def delete_payment_type(
    payment_type_id: int,
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a custom payment type. Default types are protected.
    """
    service = PaymentTypeService(db)
    try:
        payment_type = await service.get_payment_type(payment_type_id)

        if not payment_type:
            raise HTTPException(status_code=404, detail="Payment type not found")

        if payment_type.is_default:
            raise HTTPException(status_code=400, detail="Cannot delete default payment types")

        await service.delete_payment_type(payment_type)
    except SQLAlchemyError:
        logger.exception("Error deleting payment type")
        raise HTTPException(status_code=500, detail="Failed to delete payment type")

    return {"message": "Payment type deleted successfully"}
