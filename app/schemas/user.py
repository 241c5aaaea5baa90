from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.enums import UserRole


# ---------------------------------------------------------
# READ USER (response)
# ---------------------------------------------------------
class UserRead(BaseModel):
    id: UUID
    full_name: str
    email: EmailStr
    role: str
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    assigned_course_ids: List[int] = []
    assigned_student_ids: List[str] = []

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------
# CREATE USER (IT Admin)
# ---------------------------------------------------------
class UserCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)
    role: UserRole
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    assigned_course_ids: List[int] = []
    assigned_student_ids: List[UUID] = []
