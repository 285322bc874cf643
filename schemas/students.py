from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from schemas.common import PatchModel, When

StudentStatus = Literal["active", "inactive", "graduated"]
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


# 1. Admission form (POST)
class StudentCreate(BaseModel):
    registry_no: str = Field(..., min_length=1, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=15)
    date_of_birth: Optional[When] = None
    address: Optional[str] = None
    class_name: str = Field(..., min_length=1, max_length=20)
    section: Optional[str] = Field(None, max_length=10)
    guardian_name: Optional[str] = Field(None, max_length=100)
    guardian_phone: Optional[str] = Field(None, max_length=15)
    status: StudentStatus = "active"


# 2. Edit form (PUT) - everything optional
class StudentUpdate(PatchModel):
    not_null_fields = ("registry_no", "first_name", "last_name", "email", "class_name", "status")

    registry_no: Optional[str] = Field(None, min_length=1, max_length=20)
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[str] = Field(None, max_length=100, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=15)
    date_of_birth: Optional[When] = None
    address: Optional[str] = None
    class_name: Optional[str] = Field(None, min_length=1, max_length=20)
    section: Optional[str] = Field(None, max_length=10)
    guardian_name: Optional[str] = Field(None, max_length=100)
    guardian_phone: Optional[str] = Field(None, max_length=15)
    status: Optional[StudentStatus] = None


# 3. Stored record
class StudentRecord(BaseModel):
    id: int
    registry_no: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    address: Optional[str] = None
    class_name: str
    section: Optional[str] = None
    admission_date: Optional[datetime] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    status: str = "active"

    class Config:
        from_attributes = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# 4. List view with fee / marks summary
class StudentWithFees(StudentRecord):
    total_fees: str
    paid_fees: str
    pending_fees: str
    fee_status: str
    average_performance: int
