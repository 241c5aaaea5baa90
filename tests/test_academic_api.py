import pytest
from sqlmodel import select

from app.core.seeding_logic import COURSES_DATA, DEPARTMENTS_DATA, FACULTIES_DATA, seed_organization
from app.models.course import Course
from app.models.department import Department
from app.models.enums import UserRole
from app.models.faculty import Faculty


@pytest.mark.asyncio
async def test_listings_require_auth(client):
    assert (await client.get("/api/academic/faculties")).status_code == 401


@pytest.mark.asyncio
async def test_departments_and_courses(client, org, make_user, headers_for):
    user = await make_user(UserRole.ADVISOR)
    headers = headers_for(user)

    res = await client.get(f"/api/academic/departments?faculty_id={org.fst.id}", headers=headers)
    assert res.status_code == 200
    assert {d["code"]: d["faculty_name"] for d in res.json()} == {
        "CS": "Faculty of Science and Technology",
        "IT": "Faculty of Science and Technology",
    }

    res = await client.get(f"/api/academic/courses?department_id={org.cs.id}&active_only=true",
                           headers=headers)
    assert [c["code"] for c in res.json()] == ["CS101"]
    assert res.json()[0]["department_name"] == "Computer Science"


@pytest.mark.asyncio
async def test_seeding_is_idempotent(db_session):
    await seed_organization(db_session)
    await seed_organization(db_session)

    faculties = (await db_session.execute(select(Faculty))).scalars().all()
    departments = (await db_session.execute(select(Department))).scalars().all()
    courses = (await db_session.execute(select(Course))).scalars().all()

    assert len(faculties) == len(FACULTIES_DATA)
    assert len(departments) == sum(len(v) for v in DEPARTMENTS_DATA.values())
    assert len(courses) == sum(len(v) for v in COURSES_DATA.values())
