from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.common import Money, PatchModel, When


class ExpenseCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    amount: Money
    date: When
    payment_method: Optional[str] = Field(None, max_length=30)
    vendor: Optional[str] = Field(None, max_length=100)
    invoice_number: Optional[str] = Field(None, max_length=50)
    approved_by: Optional[str] = Field(None, max_length=100)
    remarks: Optional[str] = None


class ExpenseUpdate(PatchModel):
    not_null_fields = ("category", "description", "amount", "date")

    category: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[Money] = None
    date: Optional[When] = None
    payment_method: Optional[str] = Field(None, max_length=30)
    vendor: Optional[str] = Field(None, max_length=100)
    invoice_number: Optional[str] = Field(None, max_length=50)
    approved_by: Optional[str] = Field(None, max_length=100)
    remarks: Optional[str] = None


class ExpenseRecord(BaseModel):
    id: int
    category: str
    description: str
    amount: Money
    date: datetime
    payment_method: Optional[str] = None
    vendor: Optional[str] = None
    invoice_number: Optional[str] = None
    approved_by: Optional[str] = None
    remarks: Optional[str] = None

    class Config:
        from_attributes = True
