# schooldir/repositories/school.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy import insert, select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from schooldir.errors import InvalidInputError, StorageError
from schooldir.models.school import School
from schooldir.utils.geo import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NearbySchool:
    id: int
    name: str
    address: str
    distance_m: float


def _required_text(field: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(field, f"{field.capitalize()} is required", value)
    return value.strip()


def insert_statement(name: str, address: str, point: GeoPoint):
    return (
        insert(School)
        .values(name=name, address=address, location=point.as_geography())
        .returning(School.id)
    )


def nearby_statement(point: GeoPoint):
    # ST_Distance по geography считает по сфероиду, в метрах
    distance = func.ST_Distance(School.location, point.as_geography()).label("distance_m")
    return (
        select(School.id, School.name, School.address, distance)
        .order_by(distance.asc())
    )


class SchoolRepository:
    """
    Вставка школ и выборка всех школ по удалённости от точки.
    Своего состояния не держит: каждый вызов идёт в базу.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, name: str, address: str, latitude, longitude) -> int:
        # Проверки до любого обращения к базе
        name = _required_text("name", name)
        address = _required_text("address", address)
        point = GeoPoint.parse(latitude, longitude)

        try:
            school_id = self.db.execute(insert_statement(name, address, point)).scalar_one()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to insert school %r", name)
            raise StorageError("Database error") from e

        logger.info("School %s added at (%s, %s)", school_id, point.latitude, point.longitude)
        return school_id

    def query_near(self, latitude, longitude) -> List[NearbySchool]:
        point = GeoPoint.parse(latitude, longitude, location="query")

        try:
            rows = self.db.execute(nearby_statement(point)).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to list schools near (%s, %s)", point.latitude, point.longitude)
            raise StorageError("Database error") from e

        return [
            NearbySchool(id=r.id, name=r.name, address=r.address, distance_m=float(r.distance_m))
            for r in rows
        ]
