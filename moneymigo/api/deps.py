"""
FastAPI Dependencies
"""

from typing import AsyncGenerator, Dict, Optional
from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from moneymigo.core.database import async_session
from moneymigo.schemas.transaction import TransactionFilters

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()

def get_transaction_filters(
    start_date: Optional[str] = Query(None, alias="startDate", description="Inclusive lower bound, YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Inclusive upper bound, YYYY-MM-DD"),
    month: Optional[str] = Query(None, description="Calendar month 1-12"),
    year: Optional[str] = Query(None, description="Calendar year"),
    purpose: Optional[str] = Query(None, description="Exact purpose match"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    include_withdrawn: Optional[str] = Query(None, alias="includeWithdrawn", description="Include withdrawn rows")
) -> TransactionFilters:
    """Transaction list filters from the query string"""
    return _build_filters({
        "startDate": start_date,
        "endDate": end_date,
        "month": month,
        "year": year,
        "purpose": purpose,
        "sortOrder": sort_order,
        "includeWithdrawn": include_withdrawn
    })

def get_stats_filters(
    start_date: Optional[str] = Query(None, alias="startDate", description="Inclusive lower bound, YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Inclusive upper bound, YYYY-MM-DD"),
    month: Optional[str] = Query(None, description="Calendar month 1-12"),
    year: Optional[str] = Query(None, description="Calendar year"),
    purpose: Optional[str] = Query(None, description="Exact purpose match")
) -> TransactionFilters:
    """Stats filters; sortOrder and includeWithdrawn are not read at all"""
    return _build_filters({
        "startDate": start_date,
        "endDate": end_date,
        "month": month,
        "year": year,
        "purpose": purpose
    })

def _build_filters(raw: Dict[str, Optional[str]]) -> TransactionFilters:
    """Empty values count as absent, bad dates and numbers become a validation error"""
    values = {key: value for key, value in raw.items() if value is not None and value.strip() != ""}

    try:
        return TransactionFilters(**values)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
