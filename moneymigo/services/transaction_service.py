"""
Transaction Service
Filtered listing, aggregate stats and row mutations for transactions
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, extract, or_, asc, desc
from sqlalchemy.sql import Select

from moneymigo.models.transaction import Transaction
from moneymigo.schemas.transaction import TransactionCreate, TransactionUpdate, TransactionFilters

logger = logging.getLogger(__name__)

INCOME = "income"
EXPENSE = "expense"

def not_withdrawn():
    """Rows that were never withdrawn; NULL counts as open"""
    return or_(Transaction.withdrawn.is_(None), Transaction.withdrawn == False)

def apply_filters(query: Select, filters: TransactionFilters, include_withdrawn: bool = False) -> Select:
    """
    Narrow a transactions query by date range, month, year and purpose.

    Both range bounds are inclusive and each may be given alone. Month and
    year are independent and combine with everything else.
    """
    if not include_withdrawn:
        query = query.where(not_withdrawn())

    if filters.start_date and filters.end_date:
        query = query.where(Transaction.transaction_date.between(filters.start_date, filters.end_date))
    elif filters.start_date:
        query = query.where(Transaction.transaction_date >= filters.start_date)
    elif filters.end_date:
        query = query.where(Transaction.transaction_date <= filters.end_date)

    if filters.month:
        query = query.where(extract("month", Transaction.transaction_date) == filters.month)
    if filters.year:
        query = query.where(extract("year", Transaction.transaction_date) == filters.year)

    if filters.purpose:
        query = query.where(Transaction.purpose == filters.purpose)

    return query

ZERO = Decimal("0")

def to_number(value) -> Decimal:
    """Parse a driver aggregate, falling back to 0 for anything non-numeric"""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    if not number.is_finite():
        return ZERO
    return number

class TransactionService:
    """
    Queries and mutations over the transactions table
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_transactions(self, filters: TransactionFilters) -> List[Transaction]:
        query = apply_filters(select(Transaction), filters, filters.include_withdrawn)

        direction = asc if filters.sort_order == "asc" else desc
        query = query.order_by(
            direction(Transaction.transaction_date),
            direction(Transaction.created_at),
            direction(Transaction.id)
        )

        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        stmt = select(Transaction).where(Transaction.id == transaction_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_transaction(self, data: TransactionCreate) -> Transaction:
        db_transaction = Transaction(**data.model_dump(), withdrawn=False)

        self.db.add(db_transaction)
        await self.db.commit()
        await self.db.refresh(db_transaction)

        logger.info("Created %s transaction %s", db_transaction.type, db_transaction.id)
        return db_transaction

    async def update_transaction(self, transaction_id: int, data: TransactionUpdate) -> Optional[Transaction]:
        transaction = await self.get_transaction(transaction_id)
        if not transaction:
            return None

        for key, value in data.model_dump().items():
            setattr(transaction, key, value)

        await self.db.commit()
        await self.db.refresh(transaction)
        return transaction

    async def delete_transaction(self, transaction_id: int) -> bool:
        transaction = await self.get_transaction(transaction_id)
        if not transaction:
            return False

        await self.db.delete(transaction)
        await self.db.commit()

        logger.info("Deleted transaction %s", transaction_id)
        return True

    async def set_withdrawn(self, transaction_id: int, withdrawn: bool) -> Optional[Transaction]:
        """Withdraw or reopen an investment. Re-applying the same value is a no-op."""
        transaction = await self.get_transaction(transaction_id)
        if not transaction:
            return None

        transaction.withdrawn = withdrawn
        await self.db.commit()
        await self.db.refresh(transaction)
        return transaction

    async def _sum_amount(self, filters: TransactionFilters, transaction_type: str) -> Decimal:
        stmt = apply_filters(
            select(func.coalesce(func.sum(Transaction.amount), 0)),
            filters
        ).where(Transaction.type == transaction_type)

        result = await self.db.execute(stmt)
        return to_number(result.scalar())

    async def get_stats(self, filters: TransactionFilters) -> Dict[str, Decimal]:
        """
        Income, expense and balance over the filtered rows.
        Withdrawn rows never count, whatever include_withdrawn says.
        """
        total_income = await self._sum_amount(filters, INCOME)
        total_expense = await self._sum_amount(filters, EXPENSE)

        return {
            "total_income": total_income,
            "total_expense": total_expense,
            "balance": total_income - total_expense
        }
