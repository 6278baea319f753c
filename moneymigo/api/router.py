"""
API Router
"""

from fastapi import APIRouter
from moneymigo.api.endpoints import transactions, payment_types

api_router = APIRouter()

@api_router.get("/health", tags=["health"])
async def health_check():
    """Liveness check"""
    return {"status": "Server is running"}

api_router.include_router(
    transactions.router,
    prefix="/transactions",
    tags=["transactions"]
)

api_router.include_router(
    payment_types.router,
    prefix="/payment-types",
    tags=["payment-types"]
)
