"""Session tracking for students allowed to perform enrollment operations."""

import logging
from typing import Iterator, Set


logger = logging.getLogger(__name__)


class SessionRegistry:
    """Set of active (logged-in) student ids."""

    def __init__(self):
        self._active: Set[str] = set()

    def open(self, student_id: str):
        self._active.add(student_id)
        logger.debug(f"Session opened for {student_id}")

    def close(self, student_id: str):
        self._active.discard(student_id)
        logger.debug(f"Session closed for {student_id}")

    def is_active(self, student_id: str) -> bool:
        return student_id in self._active

    def __contains__(self, student_id: str) -> bool:
        return self.is_active(student_id)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._active))

    def __len__(self) -> int:
        return len(self._active)
