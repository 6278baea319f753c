from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Text, Boolean
from datetime import datetime
from moneymigo.core.database import Base

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)

    type = Column(String(10), nullable=False)  # income, expense
    amount = Column(Numeric(10, 2), nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    purpose = Column(String(100), nullable=True, index=True)
    description = Column(Text, nullable=True)

    # Plain name of a payment type, no foreign key
    payment_type = Column(String(100), nullable=False)

    # Only meaningful for purpose = investment
    withdrawn = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
