from sqlmodel import select
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.faculty import Faculty
from app.models.department import Department
from app.models.course import Course

# ----------------------------------------------------------------
# 1. DEFINE STATIC DATA
# ----------------------------------------------------------------

FACULTIES_DATA = [
    {"name": "Faculty of Science and Technology", "code": "FST"},
    {"name": "Faculty of Business Administration", "code": "FBA"},
    {"name": "Faculty of Education", "code": "FED"},
    {"name": "Faculty of Law", "code": "FLAW"},
    {"name": "Faculty of Health Sciences", "code": "FHS"},
    {"name": "Faculty of Social Sciences", "code": "FSS"},
]

# Departments grouped by their parent faculty code
DEPARTMENTS_DATA = {
    "FST": [
        {"name": "Computer Science", "code": "CS"},
        {"name": "Information Technology", "code": "IT"},
        {"name": "Software Engineering", "code": "SE"},
        {"name": "Networking and Systems", "code": "NET"},
    ],
    "FBA": [
        {"name": "Business Administration", "code": "BA"},
        {"name": "Accounting", "code": "ACC"},
        {"name": "Finance", "code": "FIN"},
        {"name": "Management", "code": "MGT"},
        {"name": "Marketing", "code": "MKT"},
    ],
    "FED": [
        {"name": "Education", "code": "EDU"},
        {"name": "Physical Education", "code": "PED"},
    ],
    "FLAW": [
        {"name": "Law", "code": "LAW"},
    ],
    "FHS": [
        {"name": "Nursing", "code": "NUR"},
        {"name": "Public Health", "code": "PH"},
    ],
    "FSS": [
        {"name": "Social Work", "code": "SW"},
        {"name": "Psychology", "code": "PSY"},
    ],
}

# Courses grouped by their parent department code
COURSES_DATA = {
    "CS": [
        {"name": "Introduction to Computer Science", "code": "CS101", "credits": 3},
        {"name": "Programming Fundamentals", "code": "CS102", "credits": 4},
        {"name": "Data Structures and Algorithms", "code": "CS201", "credits": 4},
        {"name": "Database Systems", "code": "CS202", "credits": 3},
        {"name": "Software Engineering", "code": "CS301", "credits": 4},
        {"name": "Computer Networks", "code": "CS302", "credits": 3},
    ],
    "IT": [
        {"name": "Introduction to Information Technology", "code": "IT101", "credits": 3},
        {"name": "Web Development", "code": "IT102", "credits": 4},
        {"name": "System Analysis and Design", "code": "IT201", "credits": 3},
        {"name": "Network Administration", "code": "IT202", "credits": 4},
    ],
    "BA": [
        {"name": "Introduction to Business", "code": "BA101", "credits": 3},
        {"name": "Business Communication", "code": "BA102", "credits": 2},
        {"name": "Organizational Behavior", "code": "BA201", "credits": 3},
        {"name": "Business Ethics", "code": "BA202", "credits": 2},
    ],
    "ACC": [
        {"name": "Principles of Accounting", "code": "ACC101", "credits": 4},
        {"name": "Financial Accounting", "code": "ACC102", "credits": 4},
        {"name": "Managerial Accounting", "code": "ACC201", "credits": 3},
        {"name": "Auditing", "code": "ACC202", "credits": 3},
    ],
    "EDU": [
        {"name": "Introduction to Education", "code": "EDU101", "credits": 3},
        {"name": "Educational Psychology", "code": "EDU102", "credits": 3},
        {"name": "Curriculum Development", "code": "EDU201", "credits": 3},
    ],
    "LAW": [
        {"name": "Introduction to Law", "code": "LAW101", "credits": 4},
        {"name": "Constitutional Law", "code": "LAW102", "credits": 4},
        {"name": "Contract Law", "code": "LAW201", "credits": 3},
    ],
    "NUR": [
        {"name": "Introduction to Nursing", "code": "NUR101", "credits": 4},
        {"name": "Anatomy and Physiology", "code": "NUR102", "credits": 4},
        {"name": "Medical-Surgical Nursing", "code": "NUR201", "credits": 5},
    ],
}


# ----------------------------------------------------------------
# 2. SEEDING FUNCTIONS
# ----------------------------------------------------------------

async def seed_organization(session: AsyncSession):
    """Seed faculties, departments and courses. Safe to run on every startup."""
    try:
        await seed_faculties(session)
        await seed_departments(session)
        await seed_courses(session)

        await session.commit()
        logger.success("Organization seeding complete.")
    except Exception:
        logger.exception("Organization seeding failed")
        await session.rollback()
        raise


async def seed_faculties(session: AsyncSession):
    for f in FACULTIES_DATA:
        result = await session.execute(select(Faculty).where(Faculty.code == f["code"]))
        faculty = result.scalar_one_or_none()

        if not faculty:
            logger.info(f"Creating Faculty: {f['name']}")
            session.add(Faculty(name=f["name"], code=f["code"]))
        elif faculty.name != f["name"]:
            faculty.name = f["name"]
            session.add(faculty)
    await session.flush()


async def seed_departments(session: AsyncSession):
    for faculty_code, departments in DEPARTMENTS_DATA.items():
        faculty = (
            await session.execute(select(Faculty).where(Faculty.code == faculty_code))
        ).scalar_one_or_none()

        if not faculty:
            logger.warning(f"Faculty {faculty_code} not found. Skipping its departments.")
            continue

        for d in departments:
            result = await session.execute(select(Department).where(Department.code == d["code"]))
            dept = result.scalar_one_or_none()

            if not dept:
                logger.info(f"Creating Department: {d['name']} ({faculty_code})")
                session.add(Department(name=d["name"], code=d["code"], faculty_id=faculty.id))
            elif dept.faculty_id != faculty.id or dept.name != d["name"]:
                logger.info(f"Relinking Department {d['code']} -> {faculty_code}")
                dept.name = d["name"]
                dept.faculty_id = faculty.id
                session.add(dept)
    await session.flush()


async def seed_courses(session: AsyncSession):
    for dept_code, courses in COURSES_DATA.items():
        dept = (
            await session.execute(select(Department).where(Department.code == dept_code))
        ).scalar_one_or_none()

        if not dept:
            logger.warning(f"Department {dept_code} not found. Skipping its courses.")
            continue

        for c in courses:
            result = await session.execute(select(Course).where(Course.code == c["code"]))
            course = result.scalar_one_or_none()

            if not course:
                session.add(
                    Course(
                        name=c["name"],
                        code=c["code"],
                        credits=c["credits"],
                        department_id=dept.id,
                    )
                )
            elif course.department_id != dept.id:
                course.department_id = dept.id
                session.add(course)
    await session.flush()
