"""
Payment type Pydantic schemas
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class PaymentTypeCreate(BaseModel):
    # Left optional so a missing name gets the same error as a blank one
    name: Optional[str] = None

class PaymentTypeResponse(BaseModel):
    id: int
    name: str
    is_default: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
