from typing import Optional

from pydantic import BaseModel, Field

from schemas.common import PatchModel


class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=20)
    standard: int = Field(..., ge=1)
    section: str = Field(..., min_length=1, max_length=10)
    class_teacher: Optional[str] = Field(None, max_length=100)
    room: Optional[str] = Field(None, max_length=20)
    capacity: Optional[int] = Field(40, ge=0)


class ClassUpdate(PatchModel):
    not_null_fields = ("name", "standard", "section")

    name: Optional[str] = Field(None, min_length=1, max_length=20)
    standard: Optional[int] = Field(None, ge=1)
    section: Optional[str] = Field(None, min_length=1, max_length=10)
    class_teacher: Optional[str] = Field(None, max_length=100)
    room: Optional[str] = Field(None, max_length=20)
    capacity: Optional[int] = Field(None, ge=0)


class ClassRecord(BaseModel):
    id: int
    name: str
    standard: int
    section: str
    class_teacher: Optional[str] = None
    room: Optional[str] = None
    capacity: Optional[int] = 40

    class Config:
        from_attributes = True
