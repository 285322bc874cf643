from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from schemas.fees import FeeCreate, FeeRecord, FeeUpdate
from storage.base import RecordStore, get_store

router = APIRouter(prefix="/api/fees", tags=["Fees"])


@router.get("", response_model=List[FeeRecord])
def list_fees(
    student_id: Optional[int] = None,
    status: Optional[Literal["overdue", "pending"]] = None,
    store: RecordStore = Depends(get_store),
):
    if student_id:
        return store.list_student_fees(student_id)
    if status == "overdue":
        return store.list_overdue_fees()
    if status == "pending":
        return store.list_pending_fees()
    return store.list_fees()


@router.get("/{id}", response_model=FeeRecord)
def get_fee(id: int, store: RecordStore = Depends(get_store)):
    fee = store.get_fee(id)
    if not fee:
        raise HTTPException(status_code=404, detail="Fee record not found")
    return fee


@router.post("", response_model=FeeRecord, status_code=201)
def create_fee(item: FeeCreate, store: RecordStore = Depends(get_store)):
    return store.create_fee(item)


@router.put("/{id}", response_model=FeeRecord)
def update_fee(id: int, item: FeeUpdate, store: RecordStore = Depends(get_store)):
    fee = store.update_fee(id, item)
    if not fee:
        raise HTTPException(status_code=404, detail="Fee record not found")
    return fee


@router.delete("/{id}")
def delete_fee(id: int, store: RecordStore = Depends(get_store)):
    if not store.delete_fee(id):
        raise HTTPException(status_code=404, detail="Fee record not found")
    return {"message": "Fee record deleted successfully"}
