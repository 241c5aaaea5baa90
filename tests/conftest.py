import asyncio
import os
import tempfile
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE TESTING CONFIG
# This must be done BEFORE importing app.main so that config.py and
# database.py build the engine against the throwaway SQLite file.
# ------------------------------------------------------------------
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.gettempdir(), "student_scope_test.db"
)
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENV"] = "test"

from app.main import app  # noqa: E402
from app.core.database import AsyncSessionLocal, drop_db, init_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.models.course import Course  # noqa: E402
from app.models.department import Department  # noqa: E402
from app.models.enums import UserRole  # noqa: E402
from app.models.faculty import Faculty  # noqa: E402
from app.permissions.directory import Directory  # noqa: E402
from app.services.auth_service import create_user  # noqa: E402


@pytest_asyncio.fixture
async def db():
    """Fresh tables for every test."""
    await drop_db()
    await init_db()
    yield
    await drop_db()


@pytest_asyncio.fixture
async def db_session(db):
    async with AsyncSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


# ------------------------------------------------------------------
# ORGANISATION
#
#   FST  Faculty of Science and Technology
#     CS   Computer Science          CS101 (active), CS199 (inactive)
#     IT   Information Technology    IT101
#   FBA  Faculty of Business Administration
#     BA   Business Administration   BA101
#     OLD  Old Programme (inactive)
# ------------------------------------------------------------------
@pytest_asyncio.fixture
async def org(db_session):
    fst = Faculty(name="Faculty of Science and Technology", code="FST")
    fba = Faculty(name="Faculty of Business Administration", code="FBA")
    db_session.add_all([fst, fba])
    await db_session.flush()

    cs = Department(name="Computer Science", code="CS", faculty_id=fst.id)
    it = Department(name="Information Technology", code="IT", faculty_id=fst.id)
    ba = Department(name="Business Administration", code="BA", faculty_id=fba.id)
    old = Department(name="Old Programme", code="OLD", faculty_id=fba.id, is_active=False)
    db_session.add_all([cs, it, ba, old])
    await db_session.flush()

    cs101 = Course(name="Introduction to Computer Science", code="CS101", department_id=cs.id, credits=3)
    cs199 = Course(name="Retired Topics", code="CS199", department_id=cs.id, is_active=False)
    it101 = Course(name="Web Development", code="IT101", department_id=it.id, credits=4)
    ba101 = Course(name="Introduction to Business", code="BA101", department_id=ba.id, credits=3)
    db_session.add_all([cs101, cs199, it101, ba101])
    await db_session.commit()

    return SimpleNamespace(
        fst=fst, fba=fba,
        cs=cs, it=it, ba=ba, old=old,
        cs101=cs101, cs199=cs199, it101=it101, ba101=ba101,
    )


# ------------------------------------------------------------------
# USERS + TOKENS
# ------------------------------------------------------------------
@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    async def _make(role: UserRole, **kwargs):
        counter["n"] += 1
        return await create_user(
            db_session,
            full_name=f"{role.value.title()} {counter['n']}",
            email=f"{role.value.lower()}{counter['n']}@example.com",
            password="Secret123!",
            role=role,
            **kwargs,
        )

    return _make


def auth_headers(user) -> dict:
    token = create_access_token(subject=user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


# ------------------------------------------------------------------
# IN-MEMORY DIRECTORY (pure engine tests)
# ------------------------------------------------------------------
class FakeDirectory(Directory):
    """
    departments: {faculty_id: [unit, ...]} (active only)
    courses:     {department_id: [unit, ...]} (active only)
    """

    def __init__(self, departments=None, courses=None, active_course_ids=(),
                 error=None, delay=None):
        self.departments = departments or {}
        self.courses = courses or {}
        self.active_course_ids = set(active_course_ids)
        self.error = error
        self.delay = delay
        self.calls = []

    async def _maybe_fail(self, name):
        self.calls.append(name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error

    async def list_active_departments(self, faculty_id):
        await self._maybe_fail("list_active_departments")
        return list(self.departments.get(faculty_id, []))

    async def list_active_courses(self, department_ids):
        await self._maybe_fail("list_active_courses")
        return [c for d in department_ids for c in self.courses.get(d, [])]

    async def validate_course_ids(self, candidate_ids):
        await self._maybe_fail("validate_course_ids")
        return set(candidate_ids) & self.active_course_ids


@pytest.fixture
def fake_directory():
    return FakeDirectory
