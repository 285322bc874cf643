import functools
import threading
from datetime import datetime
from typing import Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from analytics import compute_percentage, is_overdue, is_pending
from app_logger import get_logger
from schemas.classes import ClassCreate, ClassRecord, ClassUpdate
from schemas.expenses import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from schemas.fees import FeeCreate, FeeRecord, FeeUpdate
from schemas.performance import PerformanceCreate, PerformanceRecord, PerformanceUpdate
from schemas.students import StudentCreate, StudentRecord, StudentUpdate
from storage.base import DuplicateRecordError, RecordStore

log = get_logger("storage.memory")

R = TypeVar("R", bound=BaseModel)


class _Table(Generic[R]):
    """Ordered id -> record mapping; ids start at 1 and are never handed out twice."""

    def __init__(self, record_cls: Type[R]):
        self.record_cls = record_cls
        self.rows: Dict[int, R] = {}
        self.next_id = 1

    def __len__(self) -> int:
        return len(self.rows)

    def all(self) -> List[R]:
        return [r.model_copy() for r in self.rows.values()]

    def where(self, predicate: Callable[[R], bool]) -> List[R]:
        return [r.model_copy() for r in self.rows.values() if predicate(r)]

    def first(self, predicate: Callable[[R], bool]) -> Optional[R]:
        for row in self.rows.values():
            if predicate(row):
                return row.model_copy()
        return None

    def get(self, id: int) -> Optional[R]:
        row = self.rows.get(id)
        return row.model_copy() if row is not None else None

    def insert(self, values: dict) -> R:
        id = self.next_id
        self.next_id += 1
        record = self.record_cls(id=id, **values)
        self.rows[id] = record
        return record.model_copy()

    def patch(self, id: int, changes: dict) -> Optional[R]:
        current = self.rows.get(id)
        if current is None:
            return None
        # changes were validated by the Update schema already
        updated = current.model_copy(update=changes)
        self.rows[id] = updated
        return updated.model_copy()

    def delete(self, id: int) -> bool:
        removed = self.rows.pop(id, None) is not None
        if removed:
            log.debug("Deleted %s %s", self.record_cls.__name__, id)
        return removed


def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class MemoryStore(RecordStore):
    """
    Process-local store: one ordered dict per entity, nothing survives a restart.

    Route handlers run in a threadpool; every public operation holds the store
    lock for its whole check, write and copy.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self.students: _Table[StudentRecord] = _Table(StudentRecord)
        self.fees: _Table[FeeRecord] = _Table(FeeRecord)
        self.expenses: _Table[ExpenseRecord] = _Table(ExpenseRecord)
        self.performances: _Table[PerformanceRecord] = _Table(PerformanceRecord)
        self.classes: _Table[ClassRecord] = _Table(ClassRecord)

    def _check_unique(self, table: _Table, entity: str, field: str, value, own_id: Optional[int] = None):
        clash = table.first(lambda r: getattr(r, field) == value and r.id != own_id)
        if clash is not None:
            log.warning("Rejected duplicate %s %s=%r", entity, field, value)
            raise DuplicateRecordError(entity, field, value)

    # ===========================
    #   1. STUDENTS
    # ===========================
    @_locked
    def list_students(self) -> List[StudentRecord]:
        return self.students.all()

    @_locked
    def get_student(self, id: int) -> Optional[StudentRecord]:
        return self.students.get(id)

    @_locked
    def get_student_by_registry_no(self, registry_no: str) -> Optional[StudentRecord]:
        return self.students.first(lambda s: s.registry_no == registry_no)

    @_locked
    def get_student_by_email(self, email: str) -> Optional[StudentRecord]:
        return self.students.first(lambda s: s.email == email)

    @_locked
    def create_student(self, data: StudentCreate) -> StudentRecord:
        self._check_unique(self.students, "Student", "registry_no", data.registry_no)
        self._check_unique(self.students, "Student", "email", data.email)
        student = self.students.insert({**data.model_dump(), "admission_date": datetime.now()})
        log.info("Created student %s (%s)", student.id, student.registry_no)
        return student

    @_locked
    def update_student(self, id: int, data: StudentUpdate) -> Optional[StudentRecord]:
        if id not in self.students.rows:
            return None
        changes = data.changes()
        if "registry_no" in changes:
            self._check_unique(self.students, "Student", "registry_no", changes["registry_no"], own_id=id)
        if "email" in changes:
            self._check_unique(self.students, "Student", "email", changes["email"], own_id=id)
        return self.students.patch(id, changes)

    @_locked
    def delete_student(self, id: int) -> bool:
        return self.students.delete(id)

    # ===========================
    #   2. FEES
    # ===========================
    @_locked
    def list_fees(self) -> List[FeeRecord]:
        return self.fees.all()

    @_locked
    def get_fee(self, id: int) -> Optional[FeeRecord]:
        return self.fees.get(id)

    @_locked
    def list_student_fees(self, student_id: int) -> List[FeeRecord]:
        return self.fees.where(lambda f: f.student_id == student_id)

    @_locked
    def create_fee(self, data: FeeCreate) -> FeeRecord:
        fee = self.fees.insert(data.model_dump())
        log.info("Created fee %s for student %s", fee.id, fee.student_id)
        return fee

    @_locked
    def update_fee(self, id: int, data: FeeUpdate) -> Optional[FeeRecord]:
        return self.fees.patch(id, data.changes())

    @_locked
    def delete_fee(self, id: int) -> bool:
        return self.fees.delete(id)

    @_locked
    def list_overdue_fees(self, now: Optional[datetime] = None) -> List[FeeRecord]:
        now = now or datetime.now()
        return self.fees.where(lambda f: is_overdue(f, now))

    @_locked
    def list_pending_fees(self) -> List[FeeRecord]:
        return self.fees.where(is_pending)

    # ===========================
    #   3. EXPENSES
    # ===========================
    @_locked
    def list_expenses(self) -> List[ExpenseRecord]:
        return self.expenses.all()

    @_locked
    def get_expense(self, id: int) -> Optional[ExpenseRecord]:
        return self.expenses.get(id)

    @_locked
    def create_expense(self, data: ExpenseCreate) -> ExpenseRecord:
        expense = self.expenses.insert(data.model_dump())
        log.info("Recorded expense %s (%s)", expense.id, expense.category)
        return expense

    @_locked
    def update_expense(self, id: int, data: ExpenseUpdate) -> Optional[ExpenseRecord]:
        return self.expenses.patch(id, data.changes())

    @_locked
    def delete_expense(self, id: int) -> bool:
        return self.expenses.delete(id)

    @_locked
    def list_expenses_by_category(self, category: str) -> List[ExpenseRecord]:
        return self.expenses.where(lambda e: e.category == category)

    @_locked
    def list_expenses_by_date_range(self, start: datetime, end: datetime) -> List[ExpenseRecord]:
        return self.expenses.where(lambda e: start <= e.date <= end)

    # ===========================
    #   4. PERFORMANCE
    # ===========================
    @_locked
    def list_performances(self) -> List[PerformanceRecord]:
        return self.performances.all()

    @_locked
    def get_performance(self, id: int) -> Optional[PerformanceRecord]:
        return self.performances.get(id)

    @_locked
    def list_student_performances(self, student_id: int) -> List[PerformanceRecord]:
        return self.performances.where(lambda p: p.student_id == student_id)

    @_locked
    def create_performance(self, data: PerformanceCreate) -> PerformanceRecord:
        values = data.model_dump()
        values["percentage"] = compute_percentage(data.obtained_marks, data.max_marks)
        return self.performances.insert(values)

    @_locked
    def update_performance(self, id: int, data: PerformanceUpdate) -> Optional[PerformanceRecord]:
        current = self.performances.get(id)
        if current is None:
            return None
        changes = data.changes()
        if "obtained_marks" in changes or "max_marks" in changes:
            changes["percentage"] = compute_percentage(
                changes.get("obtained_marks", current.obtained_marks),
                changes.get("max_marks", current.max_marks),
            )
        return self.performances.patch(id, changes)

    @_locked
    def delete_performance(self, id: int) -> bool:
        return self.performances.delete(id)

    # ===========================
    #   5. CLASSES
    # ===========================
    @_locked
    def list_classes(self) -> List[ClassRecord]:
        return self.classes.all()

    @_locked
    def get_class(self, id: int) -> Optional[ClassRecord]:
        return self.classes.get(id)

    @_locked
    def get_class_by_name(self, name: str) -> Optional[ClassRecord]:
        return self.classes.first(lambda c: c.name == name)

    @_locked
    def create_class(self, data: ClassCreate) -> ClassRecord:
        self._check_unique(self.classes, "Class", "name", data.name)
        return self.classes.insert(data.model_dump())

    @_locked
    def update_class(self, id: int, data: ClassUpdate) -> Optional[ClassRecord]:
        if id not in self.classes.rows:
            return None
        changes = data.changes()
        if "name" in changes:
            self._check_unique(self.classes, "Class", "name", changes["name"], own_id=id)
        return self.classes.patch(id, changes)

    @_locked
    def delete_class(self, id: int) -> bool:
        return self.classes.delete(id)
