from datetime import date, datetime, time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from schemas.expenses import ExpenseCreate, ExpenseRecord, ExpenseUpdate
from storage.base import RecordStore, get_store

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@router.get("", response_model=List[ExpenseRecord])
def list_expenses(
    category: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store: RecordStore = Depends(get_store),
):
    if category:
        return store.list_expenses_by_category(category)

    if start_date or end_date:
        if not (start_date and end_date):
            raise HTTPException(status_code=400, detail="start_date and end_date must be given together")
        if start_date > end_date:
            raise HTTPException(status_code=400, detail="start_date is after end_date")
        # Both days inclusive: the range runs to the last instant of end_date
        return store.list_expenses_by_date_range(
            datetime.combine(start_date, time.min),
            datetime.combine(end_date, time.max),
        )

    return store.list_expenses()


@router.get("/{id}", response_model=ExpenseRecord)
def get_expense(id: int, store: RecordStore = Depends(get_store)):
    expense = store.get_expense(id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("", response_model=ExpenseRecord, status_code=201)
def create_expense(item: ExpenseCreate, store: RecordStore = Depends(get_store)):
    return store.create_expense(item)


@router.put("/{id}", response_model=ExpenseRecord)
def update_expense(id: int, item: ExpenseUpdate, store: RecordStore = Depends(get_store)):
    expense = store.update_expense(id, item)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.delete("/{id}")
def delete_expense(id: int, store: RecordStore = Depends(get_store)):
    if not store.delete_expense(id):
        raise HTTPException(status_code=404, detail="Expense not found")
    return {"message": "Expense deleted successfully"}
