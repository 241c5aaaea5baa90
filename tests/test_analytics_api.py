import pytest
import pytest_asyncio

from app.models.enums import UserRole
from app.models.student import Student


@pytest_asyncio.fixture
async def cohort(db_session, org):
    db_session.add_all([
        Student(student_number="1", program_name="BSc Computing", faculty_id=org.fst.id,
                department_id=org.cs.id, gpa=3.0, attendance=80, balance=100),
        Student(student_number="2", program_name="Computer Science", gpa=2.0, attendance=60, balance=50),
        Student(student_number="3", program_name="Business", faculty_id=org.fba.id,
                department_id=org.ba.id, gpa=4.0, attendance=100, balance=0),
    ])
    await db_session.commit()


@pytest.mark.asyncio
async def test_vc_gets_university_aggregates(client, cohort, make_user, headers_for):
    vc = await make_user(UserRole.VC)

    res = await client.get("/api/analytics", headers=headers_for(vc))
    assert res.status_code == 200

    body = res.json()
    assert body["scope"] == "university"
    assert body["metrics"]["total_students"] == 3
    assert body["metrics"]["average_gpa"] == 3.0
    assert body["metrics"]["total_balance"] == 150.0
    assert "student_number" not in str(body)


@pytest.mark.asyncio
async def test_dean_gets_faculty_aggregates(client, org, cohort, make_user, headers_for):
    dean = await make_user(UserRole.DEAN, faculty_id=org.fst.id)

    body = (await client.get("/api/analytics", headers=headers_for(dean))).json()
    assert body["scope"] == "faculty"
    assert body["faculty_id"] == org.fst.id
    assert body["metrics"]["total_students"] == 2
    assert body["metrics"]["average_attendance"] == 70.0
    assert "total_balance" not in body["metrics"]
    assert body["metrics"]["program_breakdown"] == [
        {"program": "BSc Computing", "total": 1},
        {"program": "Computer Science", "total": 1},
    ]


@pytest.mark.asyncio
async def test_hod_gets_department_aggregates(client, org, cohort, make_user, headers_for):
    hod = await make_user(UserRole.HOD, faculty_id=org.fba.id, department_id=org.ba.id)

    body = (await client.get("/api/analytics", headers=headers_for(hod))).json()
    assert body["scope"] == "department"
    assert body["metrics"]["total_students"] == 1


@pytest.mark.asyncio
async def test_registry_gets_registry_aggregates(client, cohort, make_user, headers_for):
    registry = await make_user(UserRole.REGISTRY)

    body = (await client.get("/api/analytics", headers=headers_for(registry))).json()
    assert body["scope"] == "registry"
    assert body["metrics"]["total_students"] == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.IT_ADMIN, UserRole.ADVISOR, UserRole.LECTURER])
async def test_roles_without_aggregate_access(client, org, cohort, make_user, headers_for, role):
    kwargs = {}
    if role is UserRole.LECTURER:
        kwargs = {"faculty_id": org.fst.id, "department_id": org.cs.id}
    user = await make_user(role, **kwargs)

    res = await client.get("/api/analytics", headers=headers_for(user))
    assert res.status_code == 403
