from pydantic import BaseModel, ConfigDict
from typing import Optional


# --- FACULTY ---
class FacultyRead(BaseModel):
    id: int
    name: str
    code: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


# --- DEPARTMENT ---
class DepartmentRead(BaseModel):
    id: int
    name: str
    code: str
    faculty_id: int
    is_active: bool
    faculty_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# --- COURSE ---
class CourseRead(BaseModel):
    id: int
    name: str
    code: str
    department_id: int
    credits: Optional[int] = None
    is_active: bool
    department_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
