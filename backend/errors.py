# errors.py
"""Domain errors raised by the application lifecycle core.

Each kind maps to one HTTP status in main.py; the message is what the client sees.
"""


class JobBoardError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(JobBoardError):
    """Referenced profile, job or application does not exist."""
    status_code = 404


class ForbiddenError(JobBoardError):
    """Principal lacks the ownership or role the action needs."""
    status_code = 403


class InvalidStateError(JobBoardError):
    """Entity exists but its current state disallows the operation."""
    status_code = 400


class ConflictError(JobBoardError):
    """Operation would break a uniqueness rule (duplicate application)."""
    status_code = 409
