from sqlalchemy import Column, Integer, String, DateTime, Boolean
from datetime import datetime
from moneymigo.core.database import Base

DEFAULT_PAYMENT_TYPES = ["cash", "upi", "card", "hdfc_debit"]

class PaymentType(Base):
    __tablename__ = "payment_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)  # stored lowercase
    is_default = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
