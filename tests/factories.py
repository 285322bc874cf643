from datetime import datetime, timedelta

from schemas.classes import ClassCreate
from schemas.expenses import ExpenseCreate
from schemas.fees import FeeCreate
from schemas.performance import PerformanceCreate
from schemas.students import StudentCreate

NOW = datetime(2025, 6, 15, 12, 0)
PAST = NOW - timedelta(days=30)
FUTURE = NOW + timedelta(days=30)


def student_data(**overrides) -> StudentCreate:
    data = {
        "registry_no": "REG20250001",
        "first_name": "Asha",
        "last_name": "Verma",
        "email": "asha.verma@example.com",
        "class_name": "10-A",
    }
    data.update(overrides)
    return StudentCreate(**data)


def fee_data(student_id: int, **overrides) -> FeeCreate:
    data = {
        "student_id": student_id,
        "academic_year": "2025-26",
        "fee_type": "tuition",
        "amount": "1000",
        "due_date": FUTURE,
    }
    data.update(overrides)
    return FeeCreate(**data)


def expense_data(**overrides) -> ExpenseCreate:
    data = {
        "category": "supplies",
        "description": "Lab glassware",
        "amount": "250",
        "date": NOW,
    }
    data.update(overrides)
    return ExpenseCreate(**data)


def performance_data(student_id: int, **overrides) -> PerformanceCreate:
    data = {
        "student_id": student_id,
        "subject": "Maths",
        "exam_type": "midterm",
        "academic_year": "2025-26",
        "term": "first_term",
        "max_marks": 100,
        "obtained_marks": 75,
    }
    data.update(overrides)
    return PerformanceCreate(**data)


def class_data(**overrides) -> ClassCreate:
    data = {"name": "10-A", "standard": 10, "section": "A"}
    data.update(overrides)
    return ClassCreate(**data)
