"""In-memory course registration ledger."""

from .errors import (
    AlreadyRegistered,
    CourseFull,
    DuplicateEntity,
    InvalidArgument,
    InvariantViolation,
    NotEnrolled,
    NotFound,
    NotLoggedIn,
    RegistrationError,
    TimeConflict,
)
from .ledger import RegistrationLedger
from .models import Course, EnrollmentEvent, Student

__all__ = [
    'RegistrationLedger',
    'Student',
    'Course',
    'EnrollmentEvent',
    'RegistrationError',
    'InvalidArgument',
    'DuplicateEntity',
    'NotFound',
    'NotLoggedIn',
    'AlreadyRegistered',
    'CourseFull',
    'TimeConflict',
    'NotEnrolled',
    'InvariantViolation',
]
