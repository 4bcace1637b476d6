from __future__ import annotations

from datetime import date
from decimal import Decimal
from functools import partial

import psycopg2
import pytest
from psycopg2 import errorcodes
from psycopg2.extras import RealDictCursor

from dairy_system.audit.pg_audit_repository import PgAuditLogRepository
from dairy_system.audit.service import AuditService
from dairy_system.core.exceptions import DuplicateError, ValidationError
from dairy_system.database.pg_base import transaction
from dairy_system.farmers.model import Farmer
from dairy_system.farmers.pg_farmer_repository import PgFarmerRepository
from dairy_system.milk_collections.pg_collection_repository import PgCollectionRepository
from dairy_system.milk_collections.service import CollectionService
from dairy_system.sales.pg_sale_repository import PgSaleRepository


class UniqueViolation(psycopg2.IntegrityError):
    pgcode = errorcodes.UNIQUE_VIOLATION


class ForeignKeyViolation(psycopg2.IntegrityError):
    pgcode = errorcodes.FOREIGN_KEY_VIOLATION


class StubCursor:
    def __init__(self, rows=(), rowcount=0, error=None):
        self.rows = [dict(r) for r in rows]
        self.rowcount = rowcount
        self.error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))
        if self.error is not None:
            raise self.error

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class StubConnection:
    def __init__(self, cursors: list):
        self._cursors = cursors
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, cursor_factory=None):
        assert cursor_factory is RealDictCursor
        return self._cursors.pop(0)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class StubDatabase:
    """Stands in for DatabaseConnection; hands out the queued cursors in order."""

    def __init__(self, *cursors: StubCursor):
        self.cursors = list(cursors)
        self._queue = list(cursors)
        self.connections: list[StubConnection] = []

    def connect(self) -> StubConnection:
        conn = StubConnection(self._queue)
        self.connections.append(conn)
        return conn

    @property
    def executed(self):
        return [statement for cur in self.cursors for statement in cur.executed]

    @property
    def commits(self):
        return sum(c.commits for c in self.connections)

    @property
    def rollbacks(self):
        return sum(c.rollbacks for c in self.connections)


FARMER_ROW = {"id": 3, "name": "Farmer A", "code": "F001", "contact": "7777777777", "bank_id": None, "branch_id": 1}
FARMER = Farmer(id=None, name="Farmer A", code="F001", contact="7777777777", branch_id=1)


def test_farmer_add_inserts_and_returns_new_id():
    db = StubDatabase(StubCursor(rows=[{"id": 3}]))

    assert PgFarmerRepository(db).add(FARMER) == 3

    sql, params = db.executed[0]
    assert sql.startswith("INSERT INTO farmer(name, code, contact, bank_id, branch_id)")
    assert sql.endswith("RETURNING id")
    assert params == ("Farmer A", "F001", "7777777777", None, 1)
    assert db.commits == 1
    assert db.cursors[0].closed and db.connections[0].closed


def test_farmer_row_is_mapped_to_model():
    db = StubDatabase(StubCursor(rows=[FARMER_ROW]), StubCursor(rows=[]))
    repo = PgFarmerRepository(db)

    assert repo.get_by_id(3) == Farmer(id=3, name="Farmer A", code="F001", contact="7777777777", branch_id=1)
    assert repo.get_by_code("F404") is None
    assert db.executed == [
        ("SELECT id, name, code, contact, bank_id, branch_id FROM farmer WHERE id=%s", (3,)),
        ("SELECT id, name, code, contact, bank_id, branch_id FROM farmer WHERE code=%s", ("F404",)),
    ]


def test_farmer_list_filters_by_branch():
    db = StubDatabase(StubCursor(rows=[FARMER_ROW]))

    farmers = PgFarmerRepository(db).list_all(branch_id=1)

    assert [f.code for f in farmers] == ["F001"]
    assert db.executed == [
        ("SELECT id, name, code, contact, bank_id, branch_id FROM farmer WHERE branch_id=%s ORDER BY code", (1,))
    ]


@pytest.mark.parametrize("rowcount,expected", [(1, True), (0, False)])
def test_farmer_update_and_delete_report_rowcount(rowcount, expected):
    db = StubDatabase(StubCursor(rowcount=rowcount), StubCursor(rowcount=rowcount))
    repo = PgFarmerRepository(db)

    assert repo.update(Farmer(id=3, name="Farmer A", code="F001", contact="1", branch_id=1)) is expected
    assert repo.delete(3) is expected

    assert db.executed[0][1] == ("Farmer A", "F001", "1", None, 1, 3)
    assert db.executed[1] == ("DELETE FROM farmer WHERE id=%s", (3,))


def test_duplicate_farmer_code_becomes_duplicate_error():
    db = StubDatabase(StubCursor(error=UniqueViolation("duplicate key")))

    with pytest.raises(DuplicateError, match="F001"):
        PgFarmerRepository(db).add(FARMER)

    assert db.commits == 0
    assert db.rollbacks == 1


def test_unknown_branch_becomes_validation_error():
    db = StubDatabase(StubCursor(error=ForeignKeyViolation("fk")))

    with pytest.raises(ValidationError, match="Unknown branch"):
        PgFarmerRepository(db).add(FARMER)


def test_deleting_referenced_farmer_becomes_validation_error():
    db = StubDatabase(StubCursor(error=ForeignKeyViolation("fk")))

    with pytest.raises(ValidationError, match="collections or payments"):
        PgFarmerRepository(db).delete(3)


def test_other_integrity_errors_propagate():
    db = StubDatabase(StubCursor(error=psycopg2.IntegrityError("check violation")))

    with pytest.raises(psycopg2.IntegrityError):
        PgFarmerRepository(db).add(FARMER)


COLLECTION_ROW = {
    "id": 9,
    "farmer_id": 1,
    "shift_id": None,
    "date": date(2026, 3, 1),
    "qty_ltr": "10.50",
    "fat_pct": "4.20",
    "price_per_ltr": "40.00",
    "due_amt": "420.00",
    "notes": None,
    "created_by": None,
}


def test_collection_list_builds_filters_in_order():
    db = StubDatabase(StubCursor(rows=[COLLECTION_ROW]))

    rows = PgCollectionRepository(db).list_all(
        start_date=date(2026, 3, 1), end_date=date(2026, 3, 31), farmer_id=1, limit=50
    )

    sql, params = db.executed[0]
    assert sql.endswith(
        "FROM milk_collection WHERE date >= %s AND date <= %s AND farmer_id = %s ORDER BY date DESC, id DESC LIMIT %s"
    )
    assert params == (date(2026, 3, 1), date(2026, 3, 31), 1, 50)
    assert rows[0].qty_ltr == Decimal("10.50")
    assert rows[0].due_amt == Decimal("420.00")


def test_collection_list_without_filters_only_limits():
    db = StubDatabase(StubCursor())

    assert PgCollectionRepository(db).list_all() == []

    sql, params = db.executed[0]
    assert "WHERE" not in sql
    assert params == (500,)


def test_collection_for_unknown_farmer_becomes_validation_error():
    db = StubDatabase(StubCursor(error=ForeignKeyViolation("fk")))
    collection = CollectionService(PgCollectionRepository(db), AuditService(PgAuditLogRepository(db)))

    with pytest.raises(ValidationError, match="Unknown farmer"):
        collection.create(
            {"farmer_id": 42, "date": "2026-03-01", "qty_ltr": "1", "fat_pct": "4", "price_per_ltr": "40"},
            actor="admin",
        )


def test_sale_report_rows_carry_customer_id():
    row = {
        "id": 1,
        "date": date(2026, 3, 1),
        "customer_id": 4,
        "customer_name": "Customer X",
        "shift_name": None,
        "qty_ltr": "5.00",
        "unit_price": "50.00",
        "discount": "0.00",
        "paid_amt": "0.00",
        "due_amt": "250.00",
    }
    db = StubDatabase(StubCursor(rows=[row]))

    rows = PgSaleRepository(db).get_report_rows(start_date=date(2026, 3, 1), end_date=date(2026, 3, 31))

    assert rows[0].customer_id == 4
    assert "sl.customer_id" in db.executed[0][0]


def _collection_service(db) -> CollectionService:
    audit = AuditService(PgAuditLogRepository(db), transaction=partial(transaction, db))
    return CollectionService(PgCollectionRepository(db), audit)


_PAYLOAD = {"farmer_id": 1, "date": "2026-03-01", "qty_ltr": "10", "fat_pct": "4", "price_per_ltr": "40"}


def test_collection_and_audit_row_share_one_commit():
    db = StubDatabase(StubCursor(rows=[{"id": 9}]), StubCursor(rows=[{"id": 1}]))

    created = _collection_service(db).create(dict(_PAYLOAD), actor="admin")

    assert created.id == 9
    assert len(db.connections) == 1
    assert db.commits == 1
    assert db.executed[1][0].startswith("INSERT INTO audit_log")
    assert db.executed[1][1][:4] == ("milk_collection", 9, "CREATE", "admin")


def test_failed_audit_insert_rolls_back_collection():
    db = StubDatabase(StubCursor(rows=[{"id": 9}]), StubCursor(error=psycopg2.OperationalError("audit_log down")))

    with pytest.raises(psycopg2.OperationalError):
        _collection_service(db).create(dict(_PAYLOAD), actor="admin")

    assert len(db.connections) == 1
    assert db.commits == 0
    assert db.rollbacks == 1
    assert db.connections[0].closed
