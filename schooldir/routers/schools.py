from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from schooldir.database import get_db
from schooldir.repositories.school import SchoolRepository
from schooldir.schemas.school import SchoolCreate, SchoolCreated, SchoolDistanceOut

router = APIRouter(tags=["Schools"])


def get_repository(db: Session = Depends(get_db)) -> SchoolRepository:
    return SchoolRepository(db)


@router.post("/addSchool", response_model=SchoolCreated, status_code=status.HTTP_201_CREATED)
def add_school(payload: SchoolCreate, repo: SchoolRepository = Depends(get_repository)):
    """
    Добавляет школу. Координаты уже проверены схемой.
    """
    school_id = repo.insert(payload.name, payload.address, payload.latitude, payload.longitude)
    return {"message": "School added", "schoolId": school_id}


@router.get("/listSchools", response_model=List[SchoolDistanceOut])
def list_schools(
    latitude: float = Query(..., ge=-90, le=90, allow_inf_nan=False),
    longitude: float = Query(..., ge=-180, le=180, allow_inf_nan=False),
    repo: SchoolRepository = Depends(get_repository),
):
    """
    Все школы, от ближайшей к дальней, с расстоянием в метрах.
    """
    return repo.query_near(latitude, longitude)
