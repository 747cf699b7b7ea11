from collections import namedtuple

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from schooldir.errors import InvalidInputError, StorageError
from schooldir.repositories.school import SchoolRepository, insert_statement, nearby_statement
from schooldir.utils.geo import GeoPoint


Row = namedtuple("Row", "id name address distance_m")


class _Result:
    def __init__(self, scalar=None, rows=()):
        self._scalar = scalar
        self._rows = list(rows)

    def scalar_one(self):
        return self._scalar

    def all(self):
        return list(self._rows)


class StubSession:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.statements = []
        self.commits = 0
        self.rollbacks = 0

    def execute(self, stmt):
        self.statements.append(stmt)
        if self.error is not None:
            raise self.error
        return self.result

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def test_insert_returns_new_id_and_commits():
    db = StubSession(result=_Result(scalar=42))

    school_id = SchoolRepository(db).insert("  A  ", " addr ", 19.076, 72.8777)

    assert school_id == 42
    assert db.commits == 1
    assert len(db.statements) == 1
    params = db.statements[0].compile(dialect=postgresql.dialect()).params
    assert params["name"] == "A"
    assert params["address"] == "addr"


@pytest.mark.parametrize(
    "args",
    [
        ("A", "addr", 95, 0),
        ("A", "addr", 0, -200),
        ("", "addr", 0, 0),
        ("A", "   ", 0, 0),
        (None, "addr", 0, 0),
    ],
)
def test_insert_rejects_bad_input_before_touching_store(args):
    db = StubSession(result=_Result(scalar=1))

    with pytest.raises(InvalidInputError):
        SchoolRepository(db).insert(*args)

    assert db.statements == []
    assert db.commits == 0


def test_insert_wraps_store_failure():
    cause = OperationalError("INSERT ...", {}, Exception("connection refused"))
    db = StubSession(error=cause)

    with pytest.raises(StorageError) as exc_info:
        SchoolRepository(db).insert("A", "addr", 1, 1)

    assert exc_info.value.__cause__ is cause
    assert db.rollbacks == 1
    assert db.commits == 0


def test_query_near_returns_store_rows_verbatim():
    rows = [Row(3, "C", "c", 0), Row(1, "A", "a", 10.5), Row(2, "B", "b", 10.5)]
    db = StubSession(result=_Result(rows=rows))

    result = SchoolRepository(db).query_near(0, 0)

    assert [(s.id, s.distance_m) for s in result] == [(3, 0.0), (1, 10.5), (2, 10.5)]
    assert isinstance(result[0].distance_m, float)


def test_query_near_empty_table():
    db = StubSession(result=_Result(rows=[]))

    assert SchoolRepository(db).query_near(0, 0) == []


def test_query_near_rejects_bad_point_before_touching_store():
    db = StubSession(result=_Result(rows=[]))

    with pytest.raises(InvalidInputError):
        SchoolRepository(db).query_near(0, 181)

    assert db.statements == []


def test_query_near_wraps_store_failure():
    cause = OperationalError("SELECT ...", {}, Exception("server closed the connection"))
    db = StubSession(error=cause)

    with pytest.raises(StorageError) as exc_info:
        SchoolRepository(db).query_near(0, 0)

    assert exc_info.value.__cause__ is cause
    assert db.rollbacks == 1


def test_nearby_statement_uses_geodesic_distance_and_orders_ascending():
    sql = _sql(nearby_statement(GeoPoint(latitude=19.076, longitude=72.8777)))

    assert "ST_Distance(schools.location, CAST(ST_SetSRID(ST_MakePoint(" in sql
    assert "AS distance_m" in sql
    assert sql.rstrip().endswith("ORDER BY distance_m ASC")
    assert "LIMIT" not in sql


def test_insert_statement_returns_id():
    sql = _sql(insert_statement("A", "addr", GeoPoint(latitude=1, longitude=2)))

    assert sql.startswith("INSERT INTO schools (name, address, location)")
    assert "ST_MakePoint(" in sql
    assert "RETURNING schools.id" in sql


def test_query_near_reports_query_location():
    db = StubSession(result=_Result(rows=[]))

    with pytest.raises(InvalidInputError) as exc_info:
        SchoolRepository(db).query_near(95, 0)

    assert exc_info.value.as_dict() == {"field": "latitude", "msg": "Invalid latitude", "location": "query"}


def test_insert_reports_body_location():
    db = StubSession(result=_Result(scalar=1))

    with pytest.raises(InvalidInputError) as exc_info:
        SchoolRepository(db).insert("A", "addr", 0, 200)

    assert exc_info.value.as_dict()["location"] == "body"
