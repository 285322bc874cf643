from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.common import PatchModel, Percentage, When


# percentage is never accepted from the client, the store derives it from the marks
class PerformanceCreate(BaseModel):
    student_id: int = Field(..., gt=0)
    subject: str = Field(..., min_length=1, max_length=50)
    exam_type: str = Field(..., min_length=1, max_length=30)
    academic_year: str = Field(..., min_length=1, max_length=10)
    term: str = Field(..., min_length=1, max_length=20)
    max_marks: int = Field(..., gt=0)
    obtained_marks: int = Field(..., ge=0)
    grade: Optional[str] = Field(None, max_length=5)
    exam_date: Optional[When] = None
    remarks: Optional[str] = None


class PerformanceUpdate(PatchModel):
    not_null_fields = ("student_id", "subject", "exam_type", "academic_year", "term", "max_marks", "obtained_marks")

    student_id: Optional[int] = Field(None, gt=0)
    subject: Optional[str] = Field(None, min_length=1, max_length=50)
    exam_type: Optional[str] = Field(None, min_length=1, max_length=30)
    academic_year: Optional[str] = Field(None, min_length=1, max_length=10)
    term: Optional[str] = Field(None, min_length=1, max_length=20)
    max_marks: Optional[int] = Field(None, gt=0)
    obtained_marks: Optional[int] = Field(None, ge=0)
    grade: Optional[str] = Field(None, max_length=5)
    exam_date: Optional[When] = None
    remarks: Optional[str] = None


class PerformanceRecord(BaseModel):
    id: int
    student_id: int
    subject: str
    exam_type: str
    academic_year: str
    term: str
    max_marks: int
    obtained_marks: int
    grade: Optional[str] = None
    percentage: Optional[Percentage] = None
    exam_date: Optional[datetime] = None
    remarks: Optional[str] = None

    class Config:
        from_attributes = True
