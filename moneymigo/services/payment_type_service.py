"""
Payment Type Service
"""

import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from moneymigo.models.payment_type import PaymentType, DEFAULT_PAYMENT_TYPES

logger = logging.getLogger(__name__)

def normalize_name(name: Optional[str]) -> str:
    """Payment type names are stored trimmed and lowercase"""
    if not name:
        return ""
    return name.strip().lower()

class PaymentTypeService:
    """
    Lists, adds, deletes and seeds payment types
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_payment_types(self) -> List[PaymentType]:
        stmt = select(PaymentType).order_by(PaymentType.is_default.desc(), PaymentType.name.asc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_payment_type(self, payment_type_id: int) -> Optional[PaymentType]:
        result = await self.db.execute(select(PaymentType).where(PaymentType.id == payment_type_id))
        return result.scalar_one_or_none()

    async def add_payment_type(self, name: str) -> PaymentType:
        """
        Insert a custom (never default) payment type.
        A duplicate name surfaces as IntegrityError from the unique constraint;
        the session is rolled back before it propagates.
        """
        db_payment_type = PaymentType(name=name, is_default=False)
        self.db.add(db_payment_type)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(db_payment_type)

        logger.info("Added payment type %r", name)
        return db_payment_type

    async def delete_payment_type(self, payment_type: PaymentType):
        # Transactions still naming this type keep the plain string
        await self.db.delete(payment_type)
        await self.db.commit()
        logger.info("Deleted payment type %r", payment_type.name)

    async def seed_defaults(self) -> int:
        """Insert any missing default payment types, returns how many were added"""
        result = await self.db.execute(
            select(PaymentType.name).where(PaymentType.name.in_(DEFAULT_PAYMENT_TYPES))
        )
        existing = set(result.scalars().all())

        added = 0
        for name in DEFAULT_PAYMENT_TYPES:
            if name not in existing:
                self.db.add(PaymentType(name=name, is_default=True))
                added += 1

        if added:
            await self.db.commit()
        return added
