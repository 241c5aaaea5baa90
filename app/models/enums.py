from enum import Enum


class UserRole(str, Enum):
    VC = "VC"
    DVC_ACADEMIC = "DVC_ACADEMIC"
    DEAN = "DEAN"
    HOD = "HOD"
    ADVISOR = "ADVISOR"
    LECTURER = "LECTURER"
    REGISTRY = "REGISTRY"
    IT_ADMIN = "IT_ADMIN"


class EnrollmentStatus(str, Enum):
    ENROLLED = "ENROLLED"
    COMPLETED = "COMPLETED"
    DROPPED = "DROPPED"
    FAILED = "FAILED"
