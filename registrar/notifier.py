"""Notification handlers for enrollment events."""

import logging
import asyncio
from typing import List, Dict, Any
from datetime import datetime
from telegram import Bot
from telegram.error import TelegramError

from .models import EnrollmentEvent


logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Print enrollment events to the console."""

    def __call__(self, event: EnrollmentEvent):
        print(event.describe())


class TelegramNotifier:
    """Handle Telegram bot notifications for enrollment changes."""

    def __init__(self, bot_token: str, chat_ids: List[int]):
        """Initialize the Telegram notifier.

        Args:
            bot_token: Telegram bot token from BotFather
            chat_ids: List of chat IDs to send notifications to
        """
        self.bot_token = bot_token
        self.chat_ids = chat_ids
        self.bot = None

        if not self.bot_token or self.bot_token.startswith('${'):
            logger.warning("Invalid Telegram bot token - notifications disabled")
            self.enabled = False
        else:
            self.bot = Bot(token=self.bot_token)
            self.enabled = True
            logger.info(f"Telegram notifier initialized for {len(chat_ids)} chat(s)")

    async def _broadcast(self, message: str, label: str) -> bool:
        success = True
        for chat_id in self.chat_ids:
            try:
                await self.bot.send_message(
                    chat_id=chat_id,
                    text=message,
                    parse_mode='HTML'
                )
                logger.info(f"{label} sent to chat {chat_id}")
            except TelegramError as e:
                logger.error(f"Failed to send {label.lower()} to chat {chat_id}: {e}")
                success = False
        return success

    async def send_enrollment_alert(self, event: EnrollmentEvent) -> bool:
        """Send alert when a student registers for or drops a course.

        Args:
            event: The enrollment event to report

        Returns:
            True if notification sent successfully
        """
        if not self.enabled:
            logger.debug("Notifications disabled - skipping alert")
            return False

        try:
            return await self._broadcast(self._format_enrollment_alert(event), "Enrollment alert")
        except Exception as e:
            logger.error(f"Error sending enrollment alert: {e}")
            return False

    def _format_enrollment_alert(self, event: EnrollmentEvent) -> str:
        """Format enrollment alert message.

        Args:
            event: Enrollment event

        Returns:
            Formatted message string
        """
        heading = "Registered" if event.action == 'registered' else "Dropped"

        message = f"🎓 <b>Course {heading}</b>\n\n"
        message += f"<b>Student:</b> <code>{event.student_id}</code>\n"
        message += f"<b>Course:</b> <code>{event.course_id}</code>\n"
        message += f"📊 <b>Seats:</b> {event.enrolled}/{event.capacity}\n"
        message += f"\n⏰ <i>{event.timestamp.strftime('%Y-%m-%d %H:%M:%S')}</i>"

        return message

    async def send_summary(self, summary_data: Dict[str, Any]) -> bool:
        """Send summary of the current registration state.

        Args:
            summary_data: Dictionary with summary information

        Returns:
            True if notification sent successfully
        """
        if not self.enabled:
            return False

        try:
            return await self._broadcast(self._format_summary(summary_data), "Summary")
        except Exception as e:
            logger.error(f"Error sending summary: {e}")
            return False

    def _format_summary(self, summary_data: Dict[str, Any]) -> str:
        """Format summary message.

        Args:
            summary_data: Summary information

        Returns:
            Formatted message string
        """
        message = "📋 <b>Registration Summary</b>\n\n"

        message += f"👥 <b>Students:</b> {summary_data.get('students', 0)}\n"
        message += f"📚 <b>Courses:</b> {summary_data.get('total_courses', 0)}\n"
        message += f"🔔 <b>Enrollment Changes:</b> {summary_data.get('changes', 0)}\n"
        message += f"⏰ <b>Generated:</b> {summary_data.get('generated_at', 'N/A')}\n"

        if summary_data.get('courses'):
            message += "\n<b>Course Status:</b>\n"
            for course in summary_data.get('courses', [])[:10]:
                message += f"  • {course.get('course_id', 'N/A')}: {course.get('status', 'N/A')}\n"

        return message

    async def test_connection(self) -> bool:
        """Test Telegram bot connection.

        Returns:
            True if connection successful
        """
        if not self.enabled:
            logger.warning("Telegram notifications disabled")
            return False

        try:
            bot_info = await self.bot.get_me()
            logger.info(f"Connected to Telegram bot: @{bot_info.username}")

            test_message = "✅ <b>Test Message</b>\n\nRegistration notifications are working!"
            return await self._broadcast(test_message, "Test message")

        except Exception as e:
            logger.error(f"Telegram connection test failed: {e}")
            return False

    def __call__(self, event: EnrollmentEvent):
        if self.enabled:
            send_notification_sync(self, 'send_enrollment_alert', event)


def send_notification_sync(notifier: TelegramNotifier, method: str, *args, **kwargs) -> bool:
    """Synchronous wrapper for async notification methods.

    Args:
        notifier: TelegramNotifier instance
        method: Method name to call
        *args: Positional arguments for the method
        **kwargs: Keyword arguments for the method

    Returns:
        Result from the async method
    """
    try:
        loop = asyncio.get_event_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

    method_func = getattr(notifier, method)
    return loop.run_until_complete(method_func(*args, **kwargs))


def build_summary(courses: List[Dict[str, Any]], students: int, changes: int) -> Dict[str, Any]:
    """Assemble the summary payload sent by ``send_summary``."""
    return {
        'students': students,
        'total_courses': len(courses),
        'changes': changes,
        'generated_at': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        'courses': courses
    }
