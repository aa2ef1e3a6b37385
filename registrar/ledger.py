"""In-memory registration ledger enforcing capacity and time-conflict rules."""

import logging
from collections import Counter
from typing import Callable, Dict, List

from .errors import (
    AlreadyRegistered,
    CourseFull,
    DuplicateEntity,
    InvalidArgument,
    InvariantViolation,
    NotEnrolled,
    NotFound,
    NotLoggedIn,
    TimeConflict,
)
from .models import Course, EnrollmentEvent, Student
from .sessions import SessionRegistry


logger = logging.getLogger(__name__)

EventListener = Callable[[EnrollmentEvent], None]


class RegistrationLedger:
    """Owns all student and course records and the enrollment links between them.

    Every public operation validates its preconditions before touching any
    state, so a raised ``RegistrationError`` always leaves the ledger as it
    was. After each operation the ledger re-checks its invariants and raises
    ``InvariantViolation`` if bookkeeping has gone wrong.
    """

    def __init__(self):
        self.students: Dict[str, Student] = {}
        self.courses: Dict[str, Course] = {}
        self.sessions = SessionRegistry()
        self._history: List[EnrollmentEvent] = []
        self._listeners: List[EventListener] = []

    # Setup

    def add_student(self, student_id: str, name: str) -> Student:
        """Create a student and log them in.

        Args:
            student_id: Unique student identifier
            name: Display name

        Returns:
            The new Student record
        """
        if not student_id:
            raise InvalidArgument("Student id must not be empty")
        if student_id in self.students:
            raise DuplicateEntity('student', student_id)

        student = Student(student_id, name)
        self.students[student_id] = student
        self.sessions.open(student_id)  # Simulate login

        logger.info(f"Added student {student_id} ({name})")
        return student

    def add_course(self, course_id: str, title: str, time: str, capacity: int) -> Course:
        """Create a course with no enrollments.

        Args:
            course_id: Unique course code
            title: Course title
            time: Meeting time label, compared by equality for clashes
            capacity: Maximum enrollment, must be a positive integer

        Returns:
            The new Course record
        """
        if not course_id:
            raise InvalidArgument("Course id must not be empty")
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidArgument(f"Capacity must be a positive integer, got {capacity!r}")
        if course_id in self.courses:
            raise DuplicateEntity('course', course_id)

        course = Course(course_id, title, time, capacity)
        self.courses[course_id] = course

        logger.info(f"Added course {course_id} - {title} ({time}, capacity {capacity})")
        return course

    # Sessions

    def login(self, student_id: str):
        if student_id not in self.students:
            raise NotFound('student', student_id)
        self.sessions.open(student_id)
        logger.info(f"{student_id} logged in")

    def logout(self, student_id: str):
        if not self.sessions.is_active(student_id):
            raise NotLoggedIn(student_id)
        self.sessions.close(student_id)
        logger.info(f"{student_id} logged out")

    def is_logged_in(self, student_id: str) -> bool:
        return self.sessions.is_active(student_id)

    # Enrollment

    def register_course(self, student_id: str, course_id: str) -> EnrollmentEvent:
        """Enroll a student in a course.

        Raises:
            NotLoggedIn: Student has no active session (or does not exist)
            NotFound: Course does not exist
            AlreadyRegistered: Student already holds the course
            CourseFull: Course is at capacity
            TimeConflict: Student holds a course at the same time label
        """
        student = self._active_student(student_id)
        course = self._course(course_id)

        if student.is_enrolled(course_id):
            raise AlreadyRegistered(student_id, course_id)
        if course.is_full:
            raise CourseFull(course_id, course.capacity)

        # First clash in enrollment order wins
        for held_id in student.course_ids:
            if self.courses[held_id].time == course.time:
                raise TimeConflict(course_id, held_id, course.time)

        course.enrolled += 1
        student.enroll(course_id)

        self.check_invariants()
        return self._emit('registered', student, course)

    def drop_course(self, student_id: str, course_id: str) -> EnrollmentEvent:
        """Remove a student from a course.

        Raises:
            NotLoggedIn: Student has no active session (or does not exist)
            NotFound: Course does not exist
            NotEnrolled: Student does not hold the course
        """
        student = self._active_student(student_id)
        course = self._course(course_id)

        if not student.is_enrolled(course_id):
            raise NotEnrolled(student_id, course_id)

        course.enrolled -= 1
        student.withdraw(course_id)

        self.check_invariants()
        return self._emit('dropped', student, course)

    def view_course_details(self, student_id: str, course_id: str) -> Dict[str, str]:
        """Return name, details and seat status of a course.

        Raises:
            NotLoggedIn: Student has no active session (or does not exist)
            NotFound: Course does not exist
        """
        self._active_student(student_id)
        course = self._course(course_id)

        details = {
            'name': course.title,
            'details': course.details,
            'status': course.status
        }

        self.check_invariants()
        return details

    # Queries

    def get_student(self, student_id: str) -> Student:
        try:
            return self.students[student_id]
        except KeyError:
            raise NotFound('student', student_id) from None

    def get_course(self, course_id: str) -> Course:
        return self._course(course_id)

    def list_courses(self) -> List[Course]:
        return list(self.courses.values())

    def student_schedule(self, student_id: str) -> List[Course]:
        """Courses held by a student, in enrollment order."""
        student = self.get_student(student_id)
        return [self.courses[cid] for cid in student.course_ids]

    @property
    def history(self) -> List[EnrollmentEvent]:
        return list(self._history)

    def subscribe(self, listener: EventListener):
        """Register a callable invoked with every successful enrollment event."""
        self._listeners.append(listener)

    # Invariants

    def check_invariants(self):
        """Verify ledger bookkeeping.

        Raises:
            InvariantViolation: If any course is over capacity or the
                enrollment counts and student lists disagree
        """
        holders: Counter = Counter()

        for student in self.students.values():
            if len(set(student.course_ids)) != len(student.course_ids):
                raise InvariantViolation(f"Duplicate enrollment for {student.student_id}")
            for cid in student.course_ids:
                if cid not in self.courses:
                    raise InvariantViolation(
                        f"{student.student_id} references unknown course {cid}"
                    )
                holders[cid] += 1

        for course in self.courses.values():
            if not 0 <= course.enrolled <= course.capacity:
                raise InvariantViolation(
                    f"Enrolled > Capacity for {course.course_id} ({course.status})"
                )
            if course.enrolled != holders[course.course_id]:
                raise InvariantViolation(
                    f"Enrollment count for {course.course_id} is {course.enrolled}, "
                    f"but {holders[course.course_id]} student(s) hold it"
                )

        for student_id in self.sessions:
            if student_id not in self.students:
                raise InvariantViolation(f"Active session for unknown student {student_id}")

    # Helpers

    def _active_student(self, student_id: str) -> Student:
        if not self.sessions.is_active(student_id):
            raise NotLoggedIn(student_id)
        return self.students[student_id]

    def _course(self, course_id: str) -> Course:
        try:
            return self.courses[course_id]
        except KeyError:
            raise NotFound('course', course_id) from None

    def _emit(self, action: str, student: Student, course: Course) -> EnrollmentEvent:
        event = EnrollmentEvent(
            action=action,
            student_id=student.student_id,
            course_id=course.course_id,
            enrolled=course.enrolled,
            capacity=course.capacity
        )
        self._history.append(event)
        logger.info(event.describe())

        # Enrollment is already committed at this point
        for listener in self._listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Listener failed for {event.describe()}: {e}", exc_info=True)

        return event
