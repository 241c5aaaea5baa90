# app/core/constants.py

from app.models.enums import EnrollmentStatus, UserRole

# ==========================================================
# ROLE GROUPS
# ==========================================================
AGGREGATE_ROLES = frozenset({
    UserRole.VC,
    UserRole.DVC_ACADEMIC,
    UserRole.DEAN,
    UserRole.HOD,
    UserRole.REGISTRY,
})

# Roles that never see an individual student
NO_INDIVIDUAL_ROLES = frozenset({
    UserRole.VC,
    UserRole.DVC_ACADEMIC,
    UserRole.IT_ADMIN,
})

# ==========================================================
# ENROLLMENT
# ==========================================================
# Only these statuses put a student "in" a course for lecturer scoping
ACTIVE_ENROLLMENT_STATUSES = frozenset({
    EnrollmentStatus.ENROLLED.value,
    EnrollmentStatus.COMPLETED.value,
})

# ==========================================================
# RESPONSE FIELDS
# ==========================================================
IDENTITY_FIELDS = ("id", "student_number")
RISK_FIELDS = ("risk_score", "risk_level")

DEFAULT_PROGRAM_NAME = "General Studies"
MAX_PAGE_SIZE = 1000
DEFAULT_PAGE_SIZE = 50

# ==========================================================
# DATA INTEGRITY ALERTS
# ==========================================================
DEFAULT_CRITICAL_GPA = 2.0
DEFAULT_WARNING_ATTENDANCE = 75.0
DEFAULT_FINANCIAL_LIMIT = 1_000_000.0

FINANCIAL_RISK = "Financial Risk"
ATTENDANCE_RISK = "Attendance Risk"
ACADEMIC_RISK = "Academic Risk"
INCOMPLETE_RECORD = "Incomplete Record"
