from datetime import datetime, timedelta

from factories import NOW, PAST, FUTURE, class_data, expense_data, fee_data, performance_data, student_data
from schemas.fees import FeeUpdate


def _student_view(store, student_id, now=NOW):
    return next(v for v in store.list_students_with_fees(now=now) if v.id == student_id)


# ===========================
#   STUDENT FEE SUMMARY
# ===========================

def test_fee_summary_pending_when_unpaid_fee_is_not_due(store):
    student = store.create_student(student_data())
    store.create_fee(fee_data(student.id, amount="1000", paid_amount="1000", status="paid"))
    store.create_fee(fee_data(student.id, amount="500", due_date=FUTURE))

    view = _student_view(store, student.id)

    assert view.total_fees == "1500.00"
    assert view.paid_fees == "1000.00"
    assert view.pending_fees == "500.00"
    assert view.fee_status == "pending"


def test_fee_summary_overdue_when_unpaid_fee_is_past_due(store):
    student = store.create_student(student_data())
    store.create_fee(fee_data(student.id, amount="1000", paid_amount="1000", status="paid"))
    store.create_fee(fee_data(student.id, amount="500", due_date=PAST))

    assert _student_view(store, student.id).fee_status == "overdue"


def test_fee_summary_paid_when_nothing_outstanding(store):
    student = store.create_student(student_data())
    store.create_fee(fee_data(student.id, amount="800", paid_amount="800", status="paid", due_date=PAST))
    # overpayment on another fee still counts as settled
    store.create_fee(fee_data(student.id, amount="100", paid_amount="150", status="paid"))

    view = _student_view(store, student.id)
    assert view.pending_fees == "-50.00"
    assert view.fee_status == "paid"


def test_stored_paid_fee_is_never_overdue(store):
    student = store.create_student(student_data())
    fee = store.create_fee(fee_data(student.id, amount="500", due_date=PAST))
    store.update_fee(fee.id, FeeUpdate(status="paid"))

    # Amount still unpaid, but the stored status is not "pending"
    view = _student_view(store, student.id)
    assert view.pending_fees == "500.00"
    assert view.fee_status == "pending"
    assert store.list_overdue_fees(now=NOW) == []


def test_student_without_fees_or_marks(store):
    student = store.create_student(student_data())

    view = _student_view(store, student.id)
    assert (view.total_fees, view.paid_fees, view.pending_fees) == ("0.00", "0.00", "0.00")
    assert view.fee_status == "paid"
    assert view.average_performance == 0


def test_average_performance_is_rounded_mean(store):
    student = store.create_student(student_data())
    store.create_performance(performance_data(student.id, obtained_marks=70))
    store.create_performance(performance_data(student.id, obtained_marks=85, subject="Science"))

    # (70 + 85) / 2 = 77.5
    assert _student_view(store, student.id).average_performance == 78


# ===========================
#   SEARCH / CLASS FILTER
# ===========================

def test_search_is_case_insensitive_across_fields(store):
    store.create_student(student_data())
    store.create_student(student_data(
        registry_no="REG20250002", first_name="Ravi", last_name="Kumar",
        email="ravi@school.in", class_name="9-B",
    ))

    assert [s.first_name for s in store.search_students("VERMA", now=NOW)] == ["Asha"]
    assert [s.first_name for s in store.search_students("school.in", now=NOW)] == ["Ravi"]
    assert [s.first_name for s in store.search_students("reg2025", now=NOW)] == ["Asha", "Ravi"]
    assert [s.first_name for s in store.search_students("9-b", now=NOW)] == ["Ravi"]
    assert store.search_students("nobody", now=NOW) == []


def test_students_by_class_is_exact_match(store):
    store.create_student(student_data())
    store.create_student(student_data(registry_no="REG20250002", email="b@example.com", class_name="10-AB"))

    assert [s.registry_no for s in store.list_students_by_class("10-A", now=NOW)] == ["REG20250001"]


# ===========================
#   DASHBOARD
# ===========================

def test_dashboard_on_empty_store(store):
    stats = store.dashboard_stats(now=NOW)

    assert stats.total_students == 0
    assert stats.total_fee_collection == "0.00"
    assert stats.pending_fees == "0.00"
    assert stats.monthly_expenses == "0.00"
    assert stats.overdue_students == 0
    assert stats.average_performance == 0


def test_dashboard_stats(store):
    asha = store.create_student(student_data())
    ravi = store.create_student(student_data(registry_no="REG20250002", email="ravi@example.com"))

    store.create_fee(fee_data(asha.id, amount="1000", paid_amount="1000", status="paid"))
    store.create_fee(fee_data(asha.id, amount="500", due_date=PAST))
    store.create_fee(fee_data(asha.id, amount="200", due_date=PAST))
    store.create_fee(fee_data(ravi.id, amount="100", paid_amount="150", status="paid"))

    store.create_expense(expense_data(amount="250", date=NOW))
    store.create_expense(expense_data(amount="40.5", date=datetime(2025, 6, 1)))
    store.create_expense(expense_data(amount="100", date=datetime(2025, 5, 31)))
    store.create_expense(expense_data(amount="100", date=datetime(2024, 6, 15)))

    store.create_performance(performance_data(asha.id, obtained_marks=90))
    store.create_performance(performance_data(ravi.id, obtained_marks=50))

    stats = store.dashboard_stats(now=NOW)

    assert stats.total_students == 2
    assert stats.total_fee_collection == "1150.00"
    assert stats.pending_fees == "700.00"
    assert stats.monthly_expenses == "290.50"
    # two overdue fees, one student
    assert stats.overdue_students == 1
    assert stats.average_performance == 70


# ===========================
#   CLASS PERFORMANCE
# ===========================

def test_class_rollup_excludes_students_without_marks_from_buckets(store):
    store.create_class(class_data())
    topper = store.create_student(student_data())
    store.create_student(student_data(registry_no="REG20250002", email="new@example.com"))
    store.create_performance(performance_data(topper.id, obtained_marks=95))

    [row] = store.class_performances()

    assert row.class_name == "10-A"
    assert row.student_count == 2
    assert row.above_90_count == 1
    assert row.below_60_count == 0
    # (95 + 0) / 2 = 47.5
    assert row.average_performance == 48


def test_class_rollup_zero_row_for_empty_class(store):
    store.create_class(class_data(name="12-A", standard=12))

    [row] = store.class_performances()
    assert row.model_dump() == {
        "class_name": "12-A",
        "student_count": 0,
        "average_performance": 0,
        "above_90_count": 0,
        "below_60_count": 0,
    }


def test_class_rollup_below_60(store):
    store.create_class(class_data(name="9-B", standard=9, section="B"))
    weak = store.create_student(student_data(class_name="9-B"))
    store.create_performance(performance_data(weak.id, obtained_marks=40))
    store.create_performance(performance_data(weak.id, obtained_marks=60, subject="Science"))

    [row] = store.class_performances()
    assert (row.student_count, row.average_performance, row.below_60_count) == (1, 50, 1)


# ===========================
#   RECENT ACTIVITIES
# ===========================

def test_recent_activities_merge_and_sort(store):
    now = datetime.now()
    student = store.create_student(student_data())
    store.create_fee(fee_data(
        student.id, paid_amount="1000", status="paid", paid_date=now - timedelta(days=1),
    ))
    store.create_fee(fee_data(
        student.id, paid_amount="300", status="partial", paid_date=now - timedelta(days=10),
    ))
    store.create_expense(expense_data(description="Projector repair", date=now - timedelta(days=2)))
    store.create_expense(expense_data(description="Old invoice", date=now - timedelta(days=20)))

    activities = store.recent_activities(now=now + timedelta(seconds=1))

    assert [a.type for a in activities] == ["admission", "payment", "expense"]
    assert activities[0].message == "New student enrolled: Asha Verma"
    assert activities[0].details == "10-A"
    assert activities[1].message == "Fee payment received from Asha Verma"
    assert activities[1].amount == "1000.00"
    assert activities[2].message == "Expense recorded: Projector repair"


def test_recent_activities_caps_each_kind(store):
    now = datetime.now()
    for i in range(5):
        store.create_student(student_data(registry_no=f"REG2025000{i}", email=f"s{i}@example.com"))
    for i in range(7):
        store.create_fee(fee_data(1, paid_amount="10", paid_date=now - timedelta(hours=i + 1)))
    for i in range(4):
        store.create_expense(expense_data(date=now - timedelta(hours=i + 1)))

    activities = store.recent_activities(now=now + timedelta(seconds=1))
    kinds = [a.type for a in activities]

    assert kinds.count("admission") == 3
    assert kinds.count("payment") == 5
    assert kinds.count("expense") == 3
    assert [a.timestamp for a in activities] == sorted((a.timestamp for a in activities), reverse=True)


def test_payment_for_deleted_student_is_skipped(store):
    now = datetime.now()
    student = store.create_student(student_data())
    store.create_fee(fee_data(student.id, paid_amount="10", paid_date=now))
    store.delete_student(student.id)

    assert store.recent_activities(now=now + timedelta(seconds=1)) == []
