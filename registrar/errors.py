"""Exceptions raised by the registration ledger."""

from typing import Optional


class RegistrationError(Exception):
    """Base exception for recoverable registration errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidArgument(RegistrationError):
    """Raised when an entity is created with unusable values."""


class DuplicateEntity(RegistrationError):
    """Raised when a student or course id is already in use."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} already exists: {entity_id}")


class NotFound(RegistrationError):
    """Raised when a student or course id is unknown."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} not found: {entity_id}")


class NotLoggedIn(RegistrationError):
    """Raised when a student without an active session attempts an operation."""

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student must be logged in: {student_id}")


class AlreadyRegistered(RegistrationError):
    def __init__(self, student_id: str, course_id: str):
        self.student_id = student_id
        self.course_id = course_id
        super().__init__(f"{student_id} is already registered to {course_id}")


class CourseFull(RegistrationError):
    def __init__(self, course_id: str, capacity: int):
        self.course_id = course_id
        self.capacity = capacity
        super().__init__(f"Course {course_id} is full ({capacity}/{capacity})")


class TimeConflict(RegistrationError):
    """Raised when a course meets at the same time as one already taken."""

    def __init__(self, course_id: str, conflicting_course_id: str, time: Optional[str] = None):
        self.course_id = course_id
        self.conflicting_course_id = conflicting_course_id
        self.time = time
        message = f"Time clash between {course_id} and {conflicting_course_id}"
        if time:
            message += f" ({time})"
        super().__init__(message)


class NotEnrolled(RegistrationError):
    def __init__(self, student_id: str, course_id: str):
        self.student_id = student_id
        self.course_id = course_id
        super().__init__(f"{student_id} is not enrolled in {course_id}")


class InvariantViolation(RuntimeError):
    """Ledger bookkeeping is inconsistent. Indicates a bug, not a user error."""
