from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional, Sequence, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from analytics import compute_percentage
from app_logger import get_logger
from database import init_db, make_engine, make_sessionmaker
from models.classes import SchoolClass
from models.expenses import Expense
from models.fees import Fee
from models.performance import Performance
from models.students import Student
from schemas.classes import ClassCreate, ClassRecord, ClassUpdate
from schemas.expenses import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from schemas.fees import FeeCreate, FeeRecord, FeeUpdate
from schemas.performance import PerformanceCreate, PerformanceRecord, PerformanceUpdate
from schemas.students import StudentCreate, StudentRecord, StudentUpdate
from storage.base import DuplicateRecordError, RecordStore

log = get_logger("storage.sql")


class SqlStore(RecordStore):
    """
    Record Store on SQLAlchemy tables.

    Each call opens its own short session, commits, and hands back detached
    pydantic records. Uniqueness (registry_no, email, class name) is enforced
    by the table constraints; we also check up front so the caller learns
    which field clashed.
    """

    def __init__(self, session_factory: sessionmaker, engine=None):
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStore":
        engine = make_engine(database_url)
        init_db(engine)
        return cls(make_sessionmaker(engine), engine)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ===========================
    #   GENERIC ROW HELPERS
    # ===========================
    def _all(self, model, record_cls: Type[BaseModel], *criteria) -> list:
        with self._session() as db:
            rows = db.query(model).filter(*criteria).order_by(model.id).all()
            return [record_cls.model_validate(r) for r in rows]

    def _first(self, model, record_cls: Type[BaseModel], *criteria):
        with self._session() as db:
            row = db.query(model).filter(*criteria).first()
            return record_cls.model_validate(row) if row else None

    def _ensure_unique(self, db: Session, model, entity: str, fields: Sequence[str], values: dict, own_id=None):
        for field in fields:
            if field not in values:
                continue
            query = db.query(model).filter(getattr(model, field) == values[field])
            if own_id is not None:
                query = query.filter(model.id != own_id)
            if query.first():
                log.warning("Rejected duplicate %s %s=%r", entity, field, values[field])
                raise DuplicateRecordError(entity, field, values[field])

    def _commit(self, db: Session, model, entity: str, unique: Sequence[str], values: dict, own_id=None):
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent writer; report the clashing field
            db.rollback()
            self._ensure_unique(db, model, entity, unique, values, own_id)
            raise

    def _insert(self, model, record_cls, values: dict, entity: str, unique: Sequence[str] = ()):
        with self._session() as db:
            self._ensure_unique(db, model, entity, unique, values)
            row = model(**values)
            db.add(row)
            self._commit(db, model, entity, unique, values)
            db.refresh(row)
            log.info("Created %s %s", entity.lower(), row.id)
            return record_cls.model_validate(row)

    def _patch(self, model, record_cls, id: int, changes: dict, entity: str, unique: Sequence[str] = ()):
        with self._session() as db:
            row = db.query(model).filter(model.id == id).first()
            if not row:
                return None
            self._ensure_unique(db, model, entity, unique, changes, own_id=id)
            for key, value in changes.items():
                setattr(row, key, value)
            if model is Performance and ("obtained_marks" in changes or "max_marks" in changes):
                row.percentage = compute_percentage(row.obtained_marks, row.max_marks)
            self._commit(db, model, entity, unique, changes, own_id=id)
            db.refresh(row)
            return record_cls.model_validate(row)

    def _delete(self, model, id: int) -> bool:
        with self._session() as db:
            deleted = db.query(model).filter(model.id == id).delete()
            db.commit()
            if deleted:
                log.debug("Deleted %s %s", model.__tablename__, id)
            return deleted > 0

    # ===========================
    #   1. STUDENTS
    # ===========================
    def list_students(self) -> List[StudentRecord]:
        return self._all(Student, StudentRecord)

    def get_student(self, id: int) -> Optional[StudentRecord]:
        return self._first(Student, StudentRecord, Student.id == id)

    def get_student_by_registry_no(self, registry_no: str) -> Optional[StudentRecord]:
        return self._first(Student, StudentRecord, Student.registry_no == registry_no)

    def get_student_by_email(self, email: str) -> Optional[StudentRecord]:
        return self._first(Student, StudentRecord, Student.email == email)

    def create_student(self, data: StudentCreate) -> StudentRecord:
        values = {**data.model_dump(), "admission_date": datetime.now()}
        return self._insert(Student, StudentRecord, values, "Student", unique=("registry_no", "email"))

    def update_student(self, id: int, data: StudentUpdate) -> Optional[StudentRecord]:
        return self._patch(Student, StudentRecord, id, data.changes(), "Student", unique=("registry_no", "email"))

    def delete_student(self, id: int) -> bool:
        return self._delete(Student, id)

    # ===========================
    #   2. FEES
    # ===========================
    def list_fees(self) -> List[FeeRecord]:
        return self._all(Fee, FeeRecord)

    def get_fee(self, id: int) -> Optional[FeeRecord]:
        return self._first(Fee, FeeRecord, Fee.id == id)

    def list_student_fees(self, student_id: int) -> List[FeeRecord]:
        return self._all(Fee, FeeRecord, Fee.student_id == student_id)

    def create_fee(self, data: FeeCreate) -> FeeRecord:
        return self._insert(Fee, FeeRecord, data.model_dump(), "Fee")

    def update_fee(self, id: int, data: FeeUpdate) -> Optional[FeeRecord]:
        return self._patch(Fee, FeeRecord, id, data.changes(), "Fee")

    def delete_fee(self, id: int) -> bool:
        return self._delete(Fee, id)

    def list_overdue_fees(self, now: Optional[datetime] = None) -> List[FeeRecord]:
        now = now or datetime.now()
        return self._all(Fee, FeeRecord, Fee.status == "pending", Fee.due_date < now)

    def list_pending_fees(self) -> List[FeeRecord]:
        return self._all(Fee, FeeRecord, Fee.status.in_(("pending", "partial")))

    # ===========================
    #   3. EXPENSES
    # ===========================
    def list_expenses(self) -> List[ExpenseRecord]:
        return self._all(Expense, ExpenseRecord)

    def get_expense(self, id: int) -> Optional[ExpenseRecord]:
        return self._first(Expense, ExpenseRecord, Expense.id == id)

    def create_expense(self, data: ExpenseCreate) -> ExpenseRecord:
        return self._insert(Expense, ExpenseRecord, data.model_dump(), "Expense")

    def update_expense(self, id: int, data: ExpenseUpdate) -> Optional[ExpenseRecord]:
        return self._patch(Expense, ExpenseRecord, id, data.changes(), "Expense")

    def delete_expense(self, id: int) -> bool:
        return self._delete(Expense, id)

    def list_expenses_by_category(self, category: str) -> List[ExpenseRecord]:
        return self._all(Expense, ExpenseRecord, Expense.category == category)

    def list_expenses_by_date_range(self, start: datetime, end: datetime) -> List[ExpenseRecord]:
        return self._all(Expense, ExpenseRecord, Expense.date >= start, Expense.date <= end)

    # ===========================
    #   4. PERFORMANCE
    # ===========================
    def list_performances(self) -> List[PerformanceRecord]:
        return self._all(Performance, PerformanceRecord)

    def get_performance(self, id: int) -> Optional[PerformanceRecord]:
        return self._first(Performance, PerformanceRecord, Performance.id == id)

    def list_student_performances(self, student_id: int) -> List[PerformanceRecord]:
        return self._all(Performance, PerformanceRecord, Performance.student_id == student_id)

    def create_performance(self, data: PerformanceCreate) -> PerformanceRecord:
        values = data.model_dump()
        values["percentage"] = compute_percentage(data.obtained_marks, data.max_marks)
        return self._insert(Performance, PerformanceRecord, values, "Performance")

    def update_performance(self, id: int, data: PerformanceUpdate) -> Optional[PerformanceRecord]:
        return self._patch(Performance, PerformanceRecord, id, data.changes(), "Performance")

    def delete_performance(self, id: int) -> bool:
        return self._delete(Performance, id)

    # ===========================
    #   5. CLASSES
    # ===========================
    def list_classes(self) -> List[ClassRecord]:
        return self._all(SchoolClass, ClassRecord)

    def get_class(self, id: int) -> Optional[ClassRecord]:
        return self._first(SchoolClass, ClassRecord, SchoolClass.id == id)

    def get_class_by_name(self, name: str) -> Optional[ClassRecord]:
        return self._first(SchoolClass, ClassRecord, SchoolClass.name == name)

    def create_class(self, data: ClassCreate) -> ClassRecord:
        return self._insert(SchoolClass, ClassRecord, data.model_dump(), "Class", unique=("name",))

    def update_class(self, id: int, data: ClassUpdate) -> Optional[ClassRecord]:
        return self._patch(SchoolClass, ClassRecord, id, data.changes(), "Class", unique=("name",))

    def delete_class(self, id: int) -> bool:
        return self._delete(SchoolClass, id)
