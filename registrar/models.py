"""Data models for students, courses and enrollment events."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class Student:
    """Student record with its ordered course enrollments."""

    student_id: str  # Unique student identifier (e.g., "A22EC4000")
    name: str  # Display name
    course_ids: List[str] = field(default_factory=list)  # Enrollment order

    def is_enrolled(self, course_id: str) -> bool:
        """Check whether the student is enrolled in a course."""
        return course_id in self.course_ids

    def enroll(self, course_id: str):
        """Append a course to the enrollment list."""
        self.course_ids.append(course_id)

    def withdraw(self, course_id: str):
        """Remove the first occurrence of a course from the enrollment list."""
        self.course_ids.remove(course_id)

    def to_dict(self) -> dict:
        return {
            'student_id': self.student_id,
            'name': self.name,
            'course_ids': list(self.course_ids)
        }


@dataclass
class Course:
    """Course offering with its seat bookkeeping."""

    course_id: str  # Course code (e.g., "SECJ2203")
    title: str  # Full course title
    time: str  # Meeting time label (e.g., "Mon 9AM")
    capacity: int  # Maximum simultaneous enrollment
    enrolled: int = 0  # Current enrollment count

    @property
    def details(self) -> str:
        """Description shown when viewing the course."""
        return f"Details for {self.title}"

    @property
    def is_full(self) -> bool:
        return self.enrolled >= self.capacity

    @property
    def available_seats(self) -> int:
        return self.capacity - self.enrolled

    @property
    def status(self) -> str:
        """Seat status formatted as "<enrolled>/<capacity>"."""
        return f"{self.enrolled}/{self.capacity}"

    def to_dict(self) -> dict:
        """Convert Course to dictionary for listings and summaries."""
        return {
            'course_id': self.course_id,
            'title': self.title,
            'details': self.details,
            'time': self.time,
            'capacity': self.capacity,
            'enrolled': self.enrolled,
            'available_seats': self.available_seats,
            'status': self.status
        }


@dataclass
class EnrollmentEvent:
    """A successful registration or drop."""

    action: str  # "registered" or "dropped"
    student_id: str
    course_id: str
    enrolled: int  # Course enrollment after the change
    capacity: int
    timestamp: datetime = field(default_factory=datetime.now)

    def describe(self) -> str:
        """Render the console notification line."""
        if self.action == 'registered':
            return f"[SUCCESS] {self.student_id} registered to {self.course_id}"
        return f"[SUCCESS] {self.student_id} {self.action} {self.course_id}"

    def to_dict(self) -> dict:
        return {
            'action': self.action,
            'student_id': self.student_id,
            'course_id': self.course_id,
            'enrolled': self.enrolled,
            'capacity': self.capacity,
            'status': f"{self.enrolled}/{self.capacity}",
            'timestamp': self.timestamp.strftime('%Y-%m-%d %H:%M:%S')
        }
