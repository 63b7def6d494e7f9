import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TZ"] = "UTC"
os.environ["DAILY_RESET_HOUR"] = "0"
os.environ["DAILY_REQUIRED_MISSIONS"] = "3"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"
os.environ["AUTO_APPROVE_SUBMISSIONS"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import campboard.models  # noqa: F401
from campboard.db import Base, get_db
from campboard.camp_settings import get_settings
from campboard.main import build_app
from campboard.models import Bunk, Camper, Mission, RankThreshold, Staff


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    app = build_app()

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def seeded(db):
    """Two bunks, three campers, one staff member, five missions, three ranks."""
    get_settings(db)
    db.add_all([
        Bunk(id="bunk-a", name="A", display_name="Aspen"),
        Bunk(id="bunk-b", name="B", display_name="Birch"),
    ])
    db.flush()
    db.add_all([
        Camper(id="c1", name="Ada Lovelace", access_code="ADA101", bunk_id="bunk-a"),
        Camper(id="c2", name="Grace Hopper", access_code="GRA202", bunk_id="bunk-a"),
        Camper(id="c3", name="Alan Turing", access_code="ALA303", bunk_id="bunk-b"),
        Staff(id="s1", name="Counselor Kim", access_code="KIM900", bunk_id="bunk-a"),
    ])
    db.add_all([
        Mission(id=f"m{i}", title=f"Mission {i}", type="chore", sort_order=i)
        for i in range(1, 6)
    ])
    db.add_all([
        RankThreshold(rank_name="Bronze", missions_required=3, qualified_days_required=1, rank_order=1),
        RankThreshold(rank_name="Silver", missions_required=10, qualified_days_required=3, rank_order=2),
    ])
    db.commit()
    return db


@pytest.fixture()
def manual_review(db, seeded):
    settings = get_settings(db)
    settings.auto_approve_submissions = False
    db.commit()
    return settings
