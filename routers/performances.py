from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from schemas.performance import PerformanceCreate, PerformanceRecord, PerformanceUpdate
from storage.base import RecordStore, get_store

router = APIRouter(prefix="/api/performances", tags=["Performance"])


@router.get("", response_model=List[PerformanceRecord])
def list_performances(student_id: Optional[int] = None, store: RecordStore = Depends(get_store)):
    if student_id:
        return store.list_student_performances(student_id)
    return store.list_performances()


@router.get("/{id}", response_model=PerformanceRecord)
def get_performance(id: int, store: RecordStore = Depends(get_store)):
    record = store.get_performance(id)
    if not record:
        raise HTTPException(status_code=404, detail="Performance record not found")
    return record


@router.post("", response_model=PerformanceRecord, status_code=201)
def create_performance(item: PerformanceCreate, store: RecordStore = Depends(get_store)):
    return store.create_performance(item)


@router.put("/{id}", response_model=PerformanceRecord)
def update_performance(id: int, item: PerformanceUpdate, store: RecordStore = Depends(get_store)):
    record = store.update_performance(id, item)
    if not record:
        raise HTTPException(status_code=404, detail="Performance record not found")
    return record


@router.delete("/{id}")
def delete_performance(id: int, store: RecordStore = Depends(get_store)):
    if not store.delete_performance(id):
        raise HTTPException(status_code=404, detail="Performance record not found")
    return {"message": "Performance record deleted successfully"}
