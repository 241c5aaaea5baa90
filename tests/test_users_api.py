import pytest

from app.models.enums import UserRole


@pytest.mark.asyncio
async def test_it_admin_provisions_lecturer(client, org, make_user, headers_for):
    admin = await make_user(UserRole.IT_ADMIN)

    payload = {
        "full_name": "Ada Lecturer",
        "email": "ada@example.com",
        "password": "LongEnough1",
        "role": "LECTURER",
        "faculty_id": org.fst.id,
        "department_id": org.cs.id,
        "assigned_course_ids": [org.cs101.id],
    }
    res = await client.post("/api/users", json=payload, headers=headers_for(admin))
    assert res.status_code == 201
    assert res.json()["assigned_course_ids"] == [org.cs101.id]

    dup = await client.post("/api/users", json=payload, headers=headers_for(admin))
    assert dup.status_code == 400

    listed = await client.get("/api/users", headers=headers_for(admin))
    assert "ada@example.com" in [u["email"] for u in listed.json()]


@pytest.mark.asyncio
async def test_role_attribute_rules_are_enforced(client, org, make_user, headers_for):
    admin = await make_user(UserRole.IT_ADMIN)

    res = await client.post(
        "/api/users",
        json={"full_name": "No Dept", "email": "hod@example.com", "password": "LongEnough1",
              "role": "HOD", "faculty_id": org.fst.id},
        headers=headers_for(admin),
    )
    assert res.status_code == 400
    assert "department" in res.json()["detail"]


@pytest.mark.asyncio
async def test_registry_cannot_provision(client, make_user, headers_for):
    registry = await make_user(UserRole.REGISTRY)
    res = await client.get("/api/users", headers=headers_for(registry))
    assert res.status_code == 403
