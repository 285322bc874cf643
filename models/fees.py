from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from database import Base


class Fee(Base):
    __tablename__ = "fees"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    # No FK constraint: deleting a student leaves its fees in place
    student_id = Column(Integer, index=True, nullable=False)
    academic_year = Column(String(10), nullable=False)
    fee_type = Column(String(50), nullable=False)  # tuition, transport, hostel ...

    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(DateTime, nullable=False)
    paid_date = Column(DateTime, nullable=True)
    paid_amount = Column(Numeric(10, 2), default=0)
    status = Column(String(20), default="pending")  # pending, paid, overdue, partial

    payment_method = Column(String(30), nullable=True)  # cash, card, bank_transfer, upi
    transaction_id = Column(String(100), nullable=True)
    remarks = Column(Text, nullable=True)
