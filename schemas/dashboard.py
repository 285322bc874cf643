from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_students: int
    total_fee_collection: str
    pending_fees: str
    monthly_expenses: str
    overdue_students: int
    average_performance: int


class ClassPerformance(BaseModel):
    class_name: str
    student_count: int
    average_performance: int
    above_90_count: int
    below_60_count: int


class Activity(BaseModel):
    type: str  # payment, admission, expense
    message: str
    amount: Optional[str] = None
    details: Optional[str] = None
    timestamp: datetime
