from typing import List

from fastapi import APIRouter, Depends

from schemas.dashboard import Activity, ClassPerformance, DashboardStats
from storage.base import RecordStore, get_store

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(store: RecordStore = Depends(get_store)):
    return store.dashboard_stats()


@router.get("/class-performances", response_model=List[ClassPerformance])
def class_performances(store: RecordStore = Depends(get_store)):
    return store.class_performances()


@router.get("/recent-activities", response_model=List[Activity])
def recent_activities(store: RecordStore = Depends(get_store)):
    return store.recent_activities()
