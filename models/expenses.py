from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from database import Base


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(50), nullable=False, index=True)  # salary, maintenance, supplies ...
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(DateTime, nullable=False, index=True)

    # Payment Details
    payment_method = Column(String(30), nullable=True)
    vendor = Column(String(100), nullable=True)
    invoice_number = Column(String(50), nullable=True)
    approved_by = Column(String(100), nullable=True)
    remarks = Column(Text, nullable=True)
