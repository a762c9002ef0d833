"""
Shared pytest fixtures.

Uses a SQLite database behind the sql gateway so no spreadsheet or
warehouse is required for tests.

Seeded org chart
----------------
alice   Member   subteam HCM-1   region HCM  concat HCM-A
bob     Member   subteam HCM-1   region HCM  concat HCM-A
carol   Leader   subteam HCM-1   region HCM  concat HCM-A
dave    Member   subteam HN-1    region HN   concat HN-B
erin    Manager  region ALL
frank   Manager  region HCM      concat HCM-A
gina    Manager  region HN  team ALL
henry   Manager  region HN  team HN      concat HN-B
ivan    (no decentralization row)
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker

from app.core.cache import InMemoryResponseCache
from app.db.base import Base
from app.dependencies import get_cache, get_repository
from app.gateway.repository import OutreachRepository
from app.gateway.sql import SqlGateway
from app.main import app
from app.models.account import Authentication, Decentralization
from app.models.action import ActiveAction, ChurnAction
from app.models.dropdown import DropdownActiveAction, DropdownChurnAction, DropdownWhy
from app.models.store import ActiveHistory, ChurnHistory, StoreInfo

SQLITE_URL = "sqlite:///./test_outreach.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_ACCOUNTS = [
    # full_name, email, display_name, team, status, password
    ("Alice Nguyen", "alice@myco.vn", "Alice", "HCM", "Active", "1234"),
    ("Bob Tran", "bob@myco.vn", "Bob", "HCM", "Active", "5678"),
    ("Carol Le", "carol@myco.vn", "Carol", "HCM", "Active", "0000"),
    ("Dave Pham", "dave@myco.vn", "Dave", "HN", "Inactive", "1111"),
    ("Erin Vo", "erin@myco.vn", "Erin", "ALL", "Active", "2222"),
    ("Frank Do", "frank@myco.vn", "Frank", "HCM", "Active", "3333"),
    ("Gina Ho", "gina@myco.vn", "Gina", "HN", "Active", "4444"),
    ("Henry Bui", "henry@myco.vn", "Henry", "HN", "Active", "5555"),
    ("Ivan Ly", "ivan@myco.vn", "Ivan", "HCM", "Active", "6666"),
]

_DECENTRALIZATION = [
    # pic_code, subteam, role, region, team, concat_key
    ("alice", "HCM-1", "Member", "HCM", "HCM", "HCM-A"),
    ("bob", "HCM-1", "Member", "HCM", "HCM", "HCM-A"),
    ("carol", "HCM-1", "Leader", "HCM", "HCM", "HCM-A"),
    ("dave", "HN-1", "Member", "HN", "HN", "HN-B"),
    ("erin", "BOARD", "Manager", "ALL", "ALL", "ALL"),
    ("frank", "HCM-1", "Manager", "HCM", "HCM", "HCM-A"),
    ("gina", "HN-1", "Manager", "HN", "ALL", "HN-ALL"),
    ("henry", "HN-1", "Manager", "HN", "HN", "HN-B"),
]

_STORES = [
    # store_id, store_name, buyer_id, current_pic, full_address, last_order_date, churn_status
    ("S1", "Tap Hoa Mai", "B1", "alice", "1 Le Loi, Q1", "01/05/2024", "Churn"),
    ("S2", "Bach Hoa An", "B2", "bob", "2 Hai Ba Trung, Q3", "2024-06-01", "Active"),
    ("S3", "Minimart Lan", "B3", "alice", "3 Tran Hung Dao, Q5", "15/06/2024", "Active"),
    ("S4", "Cua Hang Ha Noi", "B4", "dave", "4 Hang Bac, Hoan Kiem", "2024-03-10", "Churn"),
    ("S5", "Kho Trong", "B5", "", "5 Nowhere", "not a date", ""),
]

_CHURN_HISTORY = [
    # store_id, churn_month, type_of_churn, reason
    ("S1", "03/2024", "Soft churn", "Price"),
    ("S1", "05/2024", "Hard churn", "Competitor"),
    ("S4", "02/2024", "Soft churn", "Moved"),
]

_ACTIVE_HISTORY = [
    ("S1", "01/2024"),
    ("S2", "06/2024"),
    ("S2", "07/2024"),
    ("S3", "06/2024"),
]

_CHURN_ACTIONS = [
    # store_id, contact_date, pic, type_of_contact, action, why_not_reawaken, churn_month
    ("S1", "10/03/2024", "alice", "Call", "Offer discount", "Too expensive", "03/2024"),
    ("S1", "2024-03-20", "alice", "Visit", "Follow up", "", "03/2024"),
]

_ACTIVE_ACTIONS = [
    # store_id, contact_date, pic, type_of_contact, action, active_month
    ("S2", "05/06/2024", "bob", "Call", "Upsell", "06/2024"),
    ("S4", "01/06/2024", "dave", "Call", "Check in", "06/2024"),
]


def seed(db) -> None:
    for model in (
        Authentication, Decentralization, StoreInfo, ChurnHistory, ActiveHistory,
        ChurnAction, ActiveAction, DropdownChurnAction, DropdownActiveAction, DropdownWhy,
    ):
        db.execute(delete(model))

    for full_name, email, display_name, team, status, password in _ACCOUNTS:
        db.add(Authentication(
            full_name=full_name, email=email, display_name=display_name,
            team=team, status=status, password=password,
        ))
    for pic_code, subteam, role, region, team, concat_key in _DECENTRALIZATION:
        db.add(Decentralization(
            pic_code=pic_code, subteam=subteam, role=role,
            region=region, team=team, concat_key=concat_key,
        ))
    for store_id, name, buyer_id, pic, address, last_order, status in _STORES:
        db.add(StoreInfo(
            store_id=store_id, store_name=name, buyer_id=buyer_id, current_pic=pic,
            full_address=address, last_order_date=last_order, churn_status_this_month=status,
        ))
    for store_id, month, type_of_churn, reason in _CHURN_HISTORY:
        db.add(ChurnHistory(store_id=store_id, churn_month=month, type_of_churn=type_of_churn, reason=reason))
    for store_id, month in _ACTIVE_HISTORY:
        db.add(ActiveHistory(store_id=store_id, active_month=month))
    for store_id, contact_date, pic, contact, action, why, month in _CHURN_ACTIONS:
        db.add(ChurnAction(
            store_id=store_id, contact_date=contact_date, pic=pic, subteam="HCM-1",
            type_of_contact=contact, action=action, why_not_reawaken=why, churn_month=month,
        ))
    for store_id, contact_date, pic, contact, action, month in _ACTIVE_ACTIONS:
        db.add(ActiveAction(
            store_id=store_id, contact_date=contact_date, pic=pic, subteam="HCM-1",
            type_of_contact=contact, action=action, active_month=month,
        ))

    db.add(DropdownChurnAction(type_of_churn="Soft churn", churn_action="Offer discount"))
    db.add(DropdownChurnAction(type_of_churn="Hard churn", churn_action="Escalate to leader"))
    db.add(DropdownActiveAction(action="Upsell"))
    db.add(DropdownActiveAction(action="Check in"))
    db.add(DropdownWhy(type_of_churn="Soft churn", why_not_reawaken="Too expensive"))
    db.commit()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        seed(db)
        yield db
    finally:
        db.close()


@pytest.fixture()
def repo(db):
    repository = OutreachRepository(SqlGateway(TestingSessionLocal), timeout=10)
    yield repository
    repository.close()


@pytest.fixture()
def cache():
    return InMemoryResponseCache(default_ttl=3600)


@pytest.fixture()
def client(repo, cache):
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_cache] = lambda: cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class InMemoryGateway:
    """Gateway double: tables are lists of sheet-ordered rows keyed by tab name."""
    backend = "memory"

    def __init__(self, rows=None, appended_count=1):
        self.rows = rows or {}
        self.appended = []
        self.appended_count = appended_count
        self.failures = {}

    def read_range(self, table):
        if table.name in self.failures:
            raise self.failures[table.name]
        return [list(r) for r in self.rows.get(table.name, [])]

    def append_row(self, table, row):
        if table.name in self.failures:
            raise self.failures[table.name]
        self.appended.append((table.name, row))
        return self.appended_count


@pytest.fixture()
def memory_gateway():
    from app.gateway import tables

    def rows(spec, records):
        return [spec.to_row(r) for r in records]

    return InMemoryGateway(rows={
        tables.DECENTRALIZATION.name: rows(tables.DECENTRALIZATION, [
            {"pic_code": p, "subteam": s, "role": r, "region": g, "team": t, "concat_key": c}
            for p, s, r, g, t, c in _DECENTRALIZATION
        ]),
        tables.STORE_INFO.name: rows(tables.STORE_INFO, [
            {"store_id": sid, "store_name": name, "current_pic": pic, "last_order_date": last}
            for sid, name, _, pic, _, last, _ in _STORES
        ]),
    })


@pytest.fixture()
def memory_repo(memory_gateway):
    repository = OutreachRepository(memory_gateway, timeout=5)
    yield repository
    repository.close()


@pytest.fixture()
def session_factory(db):
    return TestingSessionLocal


@pytest.fixture()
def make_gateway():
    return InMemoryGateway
