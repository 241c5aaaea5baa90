# app/permissions/errors.py


class ScopeResolutionError(Exception):
    """
    Raised when the access scope of a principal cannot be determined,
    e.g. the directory lookup failed or timed out.

    Callers must treat this as a failed request, never as "no restriction".
    """

    def __init__(self, message: str, role: str | None = None):
        super().__init__(message)
        self.role = role
