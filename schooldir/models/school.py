# schooldir/models/school.py
from geoalchemy2 import Geography
from sqlalchemy import Column, Integer, Text

from schooldir.database import Base
from schooldir.utils.geo import SRID


class School(Base):
    """
    Школа. Создаётся и читается, не изменяется и не удаляется.
    """
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    address = Column(Text, nullable=False)

    # (долгота, широта) на эллипсоиде WGS84; GIST-индекс для ST_Distance
    location = Column(
        Geography(geometry_type="POINT", srid=SRID, spatial_index=True),
        nullable=False,
    )
