from typing import List

from fastapi import APIRouter, Depends, HTTPException

from schemas.classes import ClassCreate, ClassRecord, ClassUpdate
from storage.base import RecordStore, get_store

router = APIRouter(prefix="/api/classes", tags=["Classes"])


@router.get("", response_model=List[ClassRecord])
def list_classes(store: RecordStore = Depends(get_store)):
    return store.list_classes()


@router.get("/{id}", response_model=ClassRecord)
def get_class(id: int, store: RecordStore = Depends(get_store)):
    cls = store.get_class(id)
    if not cls:
        raise HTTPException(status_code=404, detail="Class not found")
    return cls


@router.post("", response_model=ClassRecord, status_code=201)
def create_class(item: ClassCreate, store: RecordStore = Depends(get_store)):
    return store.create_class(item)


@router.put("/{id}", response_model=ClassRecord)
def update_class(id: int, item: ClassUpdate, store: RecordStore = Depends(get_store)):
    cls = store.update_class(id, item)
    if not cls:
        raise HTTPException(status_code=404, detail="Class not found")
    return cls


@router.delete("/{id}")
def delete_class(id: int, store: RecordStore = Depends(get_store)):
    if not store.delete_class(id):
        raise HTTPException(status_code=404, detail="Class not found")
    return {"message": "Class deleted successfully"}
