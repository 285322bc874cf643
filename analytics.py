"""
Derived views over Record Store snapshots.

Everything here is a pure function of the records it is handed (plus an
explicit ``now``), so both store backends share one implementation. Empty
inputs give zero aggregates, nothing here raises on missing data.
"""
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from schemas.classes import ClassRecord
from schemas.common import format_money, to_cents
from schemas.dashboard import Activity, ClassPerformance, DashboardStats
from schemas.expenses import ExpenseRecord
from schemas.fees import FeeRecord
from schemas.performance import PerformanceRecord
from schemas.students import StudentRecord, StudentWithFees

RECENT_WINDOW = timedelta(days=7)
RECENT_PAYMENTS = 5
RECENT_ADMISSIONS = 3
RECENT_EXPENSES = 3

ZERO = Decimal("0")


# ===========================
#   1. SMALL HELPERS
# ===========================

def compute_percentage(obtained_marks: int, max_marks: int) -> Decimal:
    return to_cents(Decimal(obtained_marks) * 100 / Decimal(max_marks))


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def mean(values: Sequence[Decimal]) -> Decimal:
    if not values:
        return ZERO
    return sum(values, ZERO) / len(values)


def _percentages(performances: Iterable[PerformanceRecord]) -> List[Decimal]:
    return [p.percentage if p.percentage is not None else ZERO for p in performances]


def _group_by_student(records) -> Dict[int, list]:
    grouped: Dict[int, list] = {}
    for record in records:
        grouped.setdefault(record.student_id, []).append(record)
    return grouped


def is_overdue(fee: FeeRecord, now: datetime) -> bool:
    return fee.status == "pending" and fee.due_date < now


def is_pending(fee: FeeRecord) -> bool:
    return fee.status in ("pending", "partial")


# ===========================
#   2. STUDENT VIEWS
# ===========================

def student_with_fees(
    student: StudentRecord,
    fees: Sequence[FeeRecord],
    performances: Sequence[PerformanceRecord],
    now: datetime,
) -> StudentWithFees:
    total = sum((f.amount for f in fees), ZERO)
    paid = sum((f.paid_amount for f in fees), ZERO)
    pending = total - paid

    if pending <= 0:
        fee_status = "paid"
    elif any(is_overdue(f, now) for f in fees):
        fee_status = "overdue"
    else:
        fee_status = "pending"

    return StudentWithFees(
        **student.model_dump(),
        total_fees=format_money(total),
        paid_fees=format_money(paid),
        pending_fees=format_money(pending),
        fee_status=fee_status,
        average_performance=round_half_up(mean(_percentages(performances))),
    )


def students_with_fees(
    students: Sequence[StudentRecord],
    fees: Sequence[FeeRecord],
    performances: Sequence[PerformanceRecord],
    now: datetime,
) -> List[StudentWithFees]:
    fees_by_student = _group_by_student(fees)
    marks_by_student = _group_by_student(performances)
    return [
        student_with_fees(s, fees_by_student.get(s.id, []), marks_by_student.get(s.id, []), now)
        for s in students
    ]


def search_students(views: Sequence[StudentWithFees], query: str) -> List[StudentWithFees]:
    needle = query.lower()
    return [
        v for v in views
        if needle in v.first_name.lower()
        or needle in v.last_name.lower()
        or needle in v.email.lower()
        or needle in v.registry_no.lower()
        or needle in v.class_name.lower()
    ]


def filter_by_class(views: Sequence[StudentWithFees], class_name: str) -> List[StudentWithFees]:
    return [v for v in views if v.class_name == class_name]


# ===========================
#   3. DASHBOARD
# ===========================

def dashboard_stats(
    students: Sequence[StudentRecord],
    fees: Sequence[FeeRecord],
    expenses: Sequence[ExpenseRecord],
    performances: Sequence[PerformanceRecord],
    now: datetime,
) -> DashboardStats:
    collected = sum((f.paid_amount for f in fees), ZERO)
    outstanding = sum((max(f.amount - f.paid_amount, ZERO) for f in fees), ZERO)
    this_month = sum(
        (e.amount for e in expenses if e.date.month == now.month and e.date.year == now.year),
        ZERO,
    )
    overdue_students = {f.student_id for f in fees if is_overdue(f, now)}

    return DashboardStats(
        total_students=len(students),
        total_fee_collection=format_money(collected),
        pending_fees=format_money(outstanding),
        monthly_expenses=format_money(this_month),
        overdue_students=len(overdue_students),
        average_performance=round_half_up(mean(_percentages(performances))),
    )


def class_performances(
    classes: Sequence[ClassRecord],
    students: Sequence[StudentRecord],
    performances: Sequence[PerformanceRecord],
) -> List[ClassPerformance]:
    # Membership is a plain string match on Student.class_name
    marks_by_student = _group_by_student(performances)
    rows = []

    for cls in classes:
        members = [s for s in students if s.class_name == cls.name]
        if not members:
            rows.append(ClassPerformance(
                class_name=cls.name, student_count=0, average_performance=0,
                above_90_count=0, below_60_count=0,
            ))
            continue

        total = ZERO
        above_90 = below_60 = 0
        for student in members:
            marks = marks_by_student.get(student.id)
            if not marks:
                continue
            student_mean = mean(_percentages(marks))
            total += student_mean
            if student_mean >= 90:
                above_90 += 1
            if student_mean < 60:
                below_60 += 1

        rows.append(ClassPerformance(
            class_name=cls.name,
            student_count=len(members),
            average_performance=round_half_up(total / len(members)),
            above_90_count=above_90,
            below_60_count=below_60,
        ))

    return rows


def recent_activities(
    students: Sequence[StudentRecord],
    fees: Sequence[FeeRecord],
    expenses: Sequence[ExpenseRecord],
    now: datetime,
    window: Optional[timedelta] = None,
) -> List[Activity]:
    cutoff = now - (window or RECENT_WINDOW)
    by_id = {s.id: s for s in students}
    activities: List[Activity] = []

    payments = [f for f in fees if f.paid_date and f.paid_date > cutoff][:RECENT_PAYMENTS]
    for fee in payments:
        student = by_id.get(fee.student_id)
        if student is None:
            continue
        activities.append(Activity(
            type="payment",
            message=f"Fee payment received from {student.full_name}",
            amount=format_money(fee.paid_amount),
            timestamp=fee.paid_date,
        ))

    admissions = [s for s in students if s.admission_date and s.admission_date > cutoff][:RECENT_ADMISSIONS]
    for student in admissions:
        activities.append(Activity(
            type="admission",
            message=f"New student enrolled: {student.full_name}",
            details=student.class_name,
            timestamp=student.admission_date,
        ))

    spent = [e for e in expenses if e.date > cutoff][:RECENT_EXPENSES]
    for expense in spent:
        activities.append(Activity(
            type="expense",
            message=f"Expense recorded: {expense.description}",
            amount=format_money(expense.amount),
            timestamp=expense.date,
        ))

    activities.sort(key=lambda a: a.timestamp, reverse=True)
    return activities
