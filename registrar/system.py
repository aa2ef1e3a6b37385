"""Registration system wiring configuration, ledger and notifications together."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from .config import Config
from .errors import RegistrationError
from .ledger import RegistrationLedger
from .notifier import ConsoleNotifier, TelegramNotifier, build_summary, send_notification_sync


logger = logging.getLogger(__name__)


class RegistrationSystem:
    """Course registration front desk backed by a single in-memory ledger."""

    def __init__(self, config: Union[Config, str] = "config.yaml"):
        """Initialize the system.

        Args:
            config: Loaded Config, or path to configuration file
        """
        self.config = config if isinstance(config, Config) else Config(config)
        self.ledger = RegistrationLedger()

        # Initialize notifiers
        self.notifier = TelegramNotifier(
            self.config.telegram_bot_token,
            self.config.telegram_chat_ids
        )
        self.ledger.subscribe(ConsoleNotifier())
        self.ledger.subscribe(self.notifier)

        # Add configured students and courses
        self._seed_catalog()

        logger.info("RegistrationSystem initialized successfully")

    def _seed_catalog(self):
        """Add students and courses from configuration to the ledger."""
        for course in self.config.courses:
            self.ledger.add_course(course['id'], course['title'], course['time'], course['capacity'])

        for student in self.config.students:
            self.ledger.add_student(student['id'], student['name'])

        logger.info(
            f"Seeded {len(self.ledger.students)} student(s) and "
            f"{len(self.ledger.courses)} course(s)"
        )

    def execute(self, step: Dict[str, Any]) -> Any:
        """Execute a single scripted operation.

        Args:
            step: Mapping with an ``op`` key plus the operation's arguments

        Returns:
            The ledger operation's result

        Raises:
            ValueError: If the step is not a mapping or names an unknown operation
        """
        if not isinstance(step, dict):
            raise ValueError(f"Step must be a mapping, got {type(step).__name__}: {step!r}")

        op = step.get('op')

        if op == 'add_student':
            return self.ledger.add_student(str(step['student']), step.get('name', ''))
        if op == 'add_course':
            return self.ledger.add_course(
                str(step['course']), step.get('title', ''), step.get('time', ''), step.get('capacity')
            )
        if op == 'register':
            return self.ledger.register_course(str(step['student']), str(step['course']))
        if op == 'drop':
            return self.ledger.drop_course(str(step['student']), str(step['course']))
        if op == 'view':
            details = self.ledger.view_course_details(str(step['student']), str(step['course']))
            print(f"Course Details: {details}")
            return details
        if op == 'login':
            return self.ledger.login(str(step['student']))
        if op == 'logout':
            return self.ledger.logout(str(step['student']))

        raise ValueError(f"Unknown operation: {op!r}")

    def run_steps(self, steps: List[Dict[str, Any]]) -> Tuple[int, int]:
        """Run operations in order, reporting failures and continuing.

        Returns:
            Tuple of (succeeded, failed) step counts
        """
        succeeded = 0
        failed = 0

        for index, step in enumerate(steps, start=1):
            op = step.get('op') if isinstance(step, dict) else None
            try:
                self.execute(step)
                succeeded += 1
            except RegistrationError as e:
                failed += 1
                logger.warning(f"Step {index} ({op}) failed: {e}")
                print(f"❌ [{type(e).__name__}] {e}")
            except (KeyError, ValueError) as e:
                failed += 1
                logger.error(f"Step {index} is malformed: {e}")
                print(f"❌ Invalid step {index}: {e}")

        logger.info(f"Run complete. Succeeded: {succeeded}, failed: {failed}")
        return succeeded, failed

    def run_script(self, script_path: str) -> Tuple[int, int]:
        """Run operations listed in a YAML script file.

        Args:
            script_path: Path to a YAML file holding a list of steps
                (or a mapping with a ``steps`` list)

        Raises:
            FileNotFoundError: If the script does not exist
            ValueError: If the file does not hold a list of steps
        """
        path = Path(script_path)
        if not path.exists():
            raise FileNotFoundError(f"Script file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or []

        steps = (data.get('steps') or []) if isinstance(data, dict) else data
        if not isinstance(steps, list):
            raise ValueError(f"Script {path} must hold a list of steps, got {type(steps).__name__}")

        logger.info(f"Running {len(steps)} step(s) from {path}")
        return self.run_steps(steps)

    def run_demo(self) -> Tuple[int, int]:
        """Register, view and drop the first configured course for the first student."""
        if not self.ledger.students or not self.ledger.courses:
            logger.warning("Demo needs at least one student and one course")
            return 0, 0

        student_id = next(iter(self.ledger.students))
        course_id = next(iter(self.ledger.courses))

        return self.run_steps([
            {'op': 'register', 'student': student_id, 'course': course_id},
            {'op': 'view', 'student': student_id, 'course': course_id},
            {'op': 'drop', 'student': student_id, 'course': course_id}
        ])

    def view(self, student_id: str, course_id: str) -> bool:
        succeeded, _ = self.run_steps([{'op': 'view', 'student': student_id, 'course': course_id}])
        return succeeded == 1

    def list_courses(self):
        """List all courses with their seat status."""
        courses = self.ledger.list_courses()

        if not courses:
            print("No courses are currently offered")
            return

        print(f"\n📋 Courses ({len(courses)}):")
        print("-" * 60)

        for course in courses:
            print(f"  • {course.course_id} - {course.title}")
            print(f"    Time: {course.time}")
            print(f"    Enrolled: {course.status} ({course.available_seats} seat(s) left)")
            print()

    def summary(self) -> Dict[str, Any]:
        return build_summary(
            [course.to_dict() for course in self.ledger.list_courses()],
            students=len(self.ledger.students),
            changes=len(self.ledger.history)
        )

    def send_summary(self) -> bool:
        """Send a summary of current registration status."""
        success = send_notification_sync(self.notifier, 'send_summary', self.summary())

        if success:
            logger.info("Summary sent successfully")
        else:
            logger.warning("Summary was not sent")
        return success

    def test_telegram(self) -> bool:
        """Test Telegram notifications."""
        print("📱 Testing Telegram connection...")
        success = send_notification_sync(self.notifier, 'test_connection')

        if success:
            print("✅ Telegram test passed!")
        else:
            print("❌ Telegram test failed")
        return success
