from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from fastapi import Request

import analytics
from schemas.classes import ClassCreate, ClassRecord, ClassUpdate
from schemas.dashboard import Activity, ClassPerformance, DashboardStats
from schemas.expenses import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from schemas.fees import FeeCreate, FeeRecord, FeeUpdate
from schemas.performance import PerformanceCreate, PerformanceRecord, PerformanceUpdate
from schemas.students import StudentCreate, StudentRecord, StudentUpdate, StudentWithFees


class DuplicateRecordError(Exception):
    """A unique field (registry_no, email, class name) is already taken."""

    def __init__(self, entity: str, field: str, value):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field} '{value}' already exists")


class RecordStore(ABC):
    """
    Storage contract shared by MemoryStore and SqlStore.

    get/update return None for an unknown id and delete returns False; a
    missing record is a normal outcome, not an error. Aggregate views are
    implemented once here on top of the list operations.
    """

    # --- STUDENTS ---
    @abstractmethod
    def list_students(self) -> List[StudentRecord]: ...

    @abstractmethod
    def get_student(self, id: int) -> Optional[StudentRecord]: ...

    @abstractmethod
    def get_student_by_registry_no(self, registry_no: str) -> Optional[StudentRecord]: ...

    @abstractmethod
    def get_student_by_email(self, email: str) -> Optional[StudentRecord]: ...

    @abstractmethod
    def create_student(self, data: StudentCreate) -> StudentRecord: ...

    @abstractmethod
    def update_student(self, id: int, data: StudentUpdate) -> Optional[StudentRecord]: ...

    @abstractmethod
    def delete_student(self, id: int) -> bool: ...

    # --- FEES ---
    @abstractmethod
    def list_fees(self) -> List[FeeRecord]: ...

    @abstractmethod
    def get_fee(self, id: int) -> Optional[FeeRecord]: ...

    @abstractmethod
    def list_student_fees(self, student_id: int) -> List[FeeRecord]: ...

    @abstractmethod
    def create_fee(self, data: FeeCreate) -> FeeRecord: ...

    @abstractmethod
    def update_fee(self, id: int, data: FeeUpdate) -> Optional[FeeRecord]: ...

    @abstractmethod
    def delete_fee(self, id: int) -> bool: ...

    @abstractmethod
    def list_overdue_fees(self, now: Optional[datetime] = None) -> List[FeeRecord]: ...

    @abstractmethod
    def list_pending_fees(self) -> List[FeeRecord]: ...

    # --- EXPENSES ---
    @abstractmethod
    def list_expenses(self) -> List[ExpenseRecord]: ...

    @abstractmethod
    def get_expense(self, id: int) -> Optional[ExpenseRecord]: ...

    @abstractmethod
    def create_expense(self, data: ExpenseCreate) -> ExpenseRecord: ...

    @abstractmethod
    def update_expense(self, id: int, data: ExpenseUpdate) -> Optional[ExpenseRecord]: ...

    @abstractmethod
    def delete_expense(self, id: int) -> bool: ...

    @abstractmethod
    def list_expenses_by_category(self, category: str) -> List[ExpenseRecord]: ...

    @abstractmethod
    def list_expenses_by_date_range(self, start: datetime, end: datetime) -> List[ExpenseRecord]:
        """Expenses dated within [start, end], both ends inclusive."""

    # --- PERFORMANCE ---
    @abstractmethod
    def list_performances(self) -> List[PerformanceRecord]: ...

    @abstractmethod
    def get_performance(self, id: int) -> Optional[PerformanceRecord]: ...

    @abstractmethod
    def list_student_performances(self, student_id: int) -> List[PerformanceRecord]: ...

    @abstractmethod
    def create_performance(self, data: PerformanceCreate) -> PerformanceRecord: ...

    @abstractmethod
    def update_performance(self, id: int, data: PerformanceUpdate) -> Optional[PerformanceRecord]: ...

    @abstractmethod
    def delete_performance(self, id: int) -> bool: ...

    # --- CLASSES ---
    @abstractmethod
    def list_classes(self) -> List[ClassRecord]: ...

    @abstractmethod
    def get_class(self, id: int) -> Optional[ClassRecord]: ...

    @abstractmethod
    def get_class_by_name(self, name: str) -> Optional[ClassRecord]: ...

    @abstractmethod
    def create_class(self, data: ClassCreate) -> ClassRecord: ...

    @abstractmethod
    def update_class(self, id: int, data: ClassUpdate) -> Optional[ClassRecord]: ...

    @abstractmethod
    def delete_class(self, id: int) -> bool: ...

    def close(self) -> None:
        pass

    # ===========================
    #   DERIVED VIEWS
    # ===========================

    def list_students_with_fees(self, now: Optional[datetime] = None) -> List[StudentWithFees]:
        return analytics.students_with_fees(
            self.list_students(), self.list_fees(), self.list_performances(), now or datetime.now()
        )

    def search_students(self, query: str, now: Optional[datetime] = None) -> List[StudentWithFees]:
        return analytics.search_students(self.list_students_with_fees(now), query)

    def list_students_by_class(self, class_name: str, now: Optional[datetime] = None) -> List[StudentWithFees]:
        return analytics.filter_by_class(self.list_students_with_fees(now), class_name)

    def dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        return analytics.dashboard_stats(
            self.list_students(),
            self.list_fees(),
            self.list_expenses(),
            self.list_performances(),
            now or datetime.now(),
        )

    def class_performances(self) -> List[ClassPerformance]:
        return analytics.class_performances(
            self.list_classes(), self.list_students(), self.list_performances()
        )

    def recent_activities(self, now: Optional[datetime] = None) -> List[Activity]:
        return analytics.recent_activities(
            self.list_students(), self.list_fees(), self.list_expenses(), now or datetime.now()
        )


# Dependency for FastAPI routes
def get_store(request: Request) -> RecordStore:
    return request.app.state.store
