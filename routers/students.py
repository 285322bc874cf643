from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from schemas.students import StudentCreate, StudentRecord, StudentUpdate, StudentWithFees
from storage.base import RecordStore, get_store

router = APIRouter(prefix="/api/students", tags=["Students"])


# ===============================
#   1. LIST / SEARCH
# ===============================
@router.get("", response_model=List[StudentWithFees])
def list_students(
    search: Optional[str] = None,
    class_name: Optional[str] = Query(None, alias="class"),
    store: RecordStore = Depends(get_store),
):
    # search wins over the class filter
    if search:
        return store.search_students(search)
    if class_name:
        return store.list_students_by_class(class_name)
    return store.list_students_with_fees()


# ===============================
#   2. STUDENT CRUD OPERATIONS
# ===============================
@router.get("/{id}", response_model=StudentRecord)
def get_student(id: int, store: RecordStore = Depends(get_store)):
    student = store.get_student(id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.post("", response_model=StudentRecord, status_code=201)
def add_student(item: StudentCreate, store: RecordStore = Depends(get_store)):
    return store.create_student(item)


@router.put("/{id}", response_model=StudentRecord)
def update_student(id: int, item: StudentUpdate, store: RecordStore = Depends(get_store)):
    student = store.update_student(id, item)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.delete("/{id}")
def delete_student(id: int, store: RecordStore = Depends(get_store)):
    if not store.delete_student(id):
        raise HTTPException(status_code=404, detail="Student not found")
    return {"message": "Student deleted successfully"}
