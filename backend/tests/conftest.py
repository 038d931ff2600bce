import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.database import Base, get_db
from app.main import app
from app.models.profile import Profile
from app.models.user import User
from app.services.notification_service import get_notifier

TEST_DB_URL = "sqlite:///./test_member_directory.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


class RecordingNotifier:
    """Stand-in for the email collaborator that keeps every call."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    def send(self, **kwargs):
        self.sent.append(kwargs)
        if self.fail:
            raise RuntimeError("mail relay unavailable")
        return True


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def notifier():
    fake = RecordingNotifier()
    app.dependency_overrides[get_notifier] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_notifier, None)


@pytest.fixture
def client(notifier):
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(email="admin@example.com", name="Asha Admin", role="admin"),
        "admin2": User(email="ops@example.com", name="Omar Ops", role="admin"),
        "member": User(email="rajesh.kumar@example.com", name="Rajesh Kumar", role="member"),
        "member2": User(email="priya.sharma@example.com", name="Priya Sharma", role="member"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


_BASE_TIME = datetime(2025, 1, 1, 9, 0, 0)


@pytest.fixture
def make_profile(db):
    counter = {"n": 0}

    def _make(user_id=None, **fields) -> Profile:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "user_id": user_id if user_id is not None else 1000 + n,
            "first_name": f"Member{n}",
            "last_name": "Test",
            "email": f"member{n}@example.com",
            "approval_status": "pending",
            "is_public": False,
            "organizations": [],
            "skills": [],
            "interests": [],
            "preferred_mode_of_communication": [],
            "created_at": _BASE_TIME + timedelta(minutes=n),
        }
        values.update(fields)
        profile = Profile(**values)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def rajesh_profile(make_profile, seed_users):
    return make_profile(
        user_id=seed_users["member"].user_id,
        first_name="Rajesh",
        last_name="Kumar",
        email="rajesh.kumar@example.com",
        phone="+91-98765-43210",
        organization="Apollo Hospitals",
        organization_type="Hospital/Clinic",
        position="Vice President - Operations",
        experience_level="Senior",
        program="MBA-PGDBM",
        graduation_year=2018,
        city="Mumbai",
        country="India",
        bio="Old bio",
        skills=["Operations", "Strategy"],
        interests=["Digital Health"],
    )


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
