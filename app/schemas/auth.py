from pydantic import BaseModel, EmailStr
from typing import List, Optional

from app.schemas.user import UserRead


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -------------------------------------------------------------------
# TOKEN + USER DETAILS (Used for login response)
# -------------------------------------------------------------------
class TokenWithUser(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: UserRead


# -------------------------------------------------------------------
# CURRENT PRINCIPAL + WHAT IT MAY SEE
# -------------------------------------------------------------------
class VisibilityRead(BaseModel):
    aggregated_data: bool
    individual_students: bool
    risk_scores: bool


class PrincipalRead(BaseModel):
    user_id: str
    role: str
    recognized_role: bool
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    assigned_course_ids: List[int] = []
    assigned_student_ids: List[str] = []
    visibility: VisibilityRead
