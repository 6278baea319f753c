from pydantic import BaseModel, Field, PlainSerializer, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional

# DECIMAL(10, 2) kept exact in Python, written to JSON as a plain number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class TransactionBase(BaseModel):
    type: str = Field(..., pattern="^(income|expense)$")
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    transaction_date: date
    purpose: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    payment_type: str = Field(..., min_length=1, max_length=100)

    @field_validator("purpose")
    @classmethod
    def blank_purpose_is_none(cls, value):
        # The form sends "" when no purpose is picked
        if value is not None and not value.strip():
            return None
        return value

class TransactionCreate(TransactionBase):
    pass

class TransactionUpdate(TransactionBase):
    """Full replacement of every mutable field; withdrawn is not one of them"""
    pass

class TransactionResponse(BaseModel):
    id: int
    type: str
    amount: Money
    transaction_date: date
    purpose: Optional[str] = None
    description: Optional[str] = None
    payment_type: str
    withdrawn: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class TransactionFilters(BaseModel):
    """Filters shared by the list and stats endpoints, combined with AND"""
    start_date: Optional[date] = Field(None, alias="startDate")
    end_date: Optional[date] = Field(None, alias="endDate")
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=1, le=9999)
    purpose: Optional[str] = None
    sort_order: Literal["asc", "desc"] = Field("desc", alias="sortOrder")
    include_withdrawn: bool = Field(False, alias="includeWithdrawn")

    class Config:
        populate_by_name = True

    @field_validator("sort_order", mode="before")
    @classmethod
    def asc_or_desc(cls, value):
        # Anything but asc sorts newest first
        if isinstance(value, str) and value.strip().lower() == "asc":
            return "asc"
        return "desc"

    @field_validator("include_withdrawn", mode="before")
    @classmethod
    def only_true_includes(cls, value):
        if isinstance(value, bool):
            return value
        return isinstance(value, str) and value.strip().lower() == "true"

class TransactionStats(BaseModel):
    total_income: Money = Field(Decimal("0"), alias="totalIncome")
    total_expense: Money = Field(Decimal("0"), alias="totalExpense")
    balance: Money = Decimal("0")

    class Config:
        populate_by_name = True

class MessageResponse(BaseModel):
    message: str
