from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from schemas.common import Money, PatchModel, When

FeeStatus = Literal["pending", "paid", "overdue", "partial"]


class FeeCreate(BaseModel):
    student_id: int = Field(..., gt=0)
    academic_year: str = Field(..., min_length=1, max_length=10)
    fee_type: str = Field(..., min_length=1, max_length=50)
    amount: Money
    due_date: When
    paid_date: Optional[When] = None
    paid_amount: Money = Decimal("0.00")
    status: FeeStatus = "pending"
    payment_method: Optional[str] = Field(None, max_length=30)
    transaction_id: Optional[str] = Field(None, max_length=100)
    remarks: Optional[str] = None


class FeeUpdate(PatchModel):
    not_null_fields = (
        "student_id", "academic_year", "fee_type", "amount", "due_date", "paid_date", "paid_amount", "status",
    )

    student_id: Optional[int] = Field(None, gt=0)
    academic_year: Optional[str] = Field(None, min_length=1, max_length=10)
    fee_type: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[Money] = None
    due_date: Optional[When] = None
    paid_date: Optional[When] = None
    paid_amount: Optional[Money] = None
    status: Optional[FeeStatus] = None
    payment_method: Optional[str] = Field(None, max_length=30)
    transaction_id: Optional[str] = Field(None, max_length=100)
    remarks: Optional[str] = None


class FeeRecord(BaseModel):
    id: int
    student_id: int
    academic_year: str
    fee_type: str
    amount: Money
    due_date: datetime
    paid_date: Optional[datetime] = None
    paid_amount: Money = Decimal("0.00")
    status: str = "pending"
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    remarks: Optional[str] = None

    class Config:
        from_attributes = True
