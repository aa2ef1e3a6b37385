"""Command-line interface for the Course Registration System."""

import sys
import logging
from pathlib import Path
import argparse

from .config import DEFAULT_LOG_FILE, Config
from .system import RegistrationSystem


def setup_logging(log_file: str = DEFAULT_LOG_FILE, log_level: str = "INFO"):
    """Set up logging configuration.

    Args:
        log_file: Path to log file
        log_level: Logging level
    """
    # Create logs directory if it doesn't exist
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


def build_system(args) -> RegistrationSystem:
    """Create the system from the config already loaded by ``main``, if any."""
    return RegistrationSystem(getattr(args, 'settings', None) or args.config)


def cmd_demo(args) -> int:
    """Run the register / view / drop walkthrough."""
    print("🚀 Starting Course Registration demo...")
    print(f"Configuration: {args.config}")
    print()

    system = build_system(args)
    _, failed = system.run_demo()
    return 1 if failed else 0


def cmd_list(args) -> int:
    """List all courses and their seat status."""
    system = build_system(args)
    system.list_courses()
    return 0


def cmd_view(args) -> int:
    """Show details of one course as seen by a student."""
    system = build_system(args)
    return 0 if system.view(args.student_id, args.course_id) else 1


def cmd_run(args) -> int:
    """Run a YAML script of registration operations."""
    system = build_system(args)
    _, failed = system.run_script(args.script)
    if args.show_courses:
        system.list_courses()
    return 1 if failed else 0


def cmd_summary(args) -> int:
    """Send a registration summary over Telegram."""
    system = build_system(args)
    return 0 if system.send_summary() else 1


def cmd_test_telegram(args) -> int:
    """Test Telegram notifications."""
    system = build_system(args)
    return 0 if system.test_telegram() else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Course Registration System - enroll students subject to capacity and time rules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  registrar demo                            # Register, view and drop a course
  registrar list                            # List courses and seat status
  registrar view A22EC4000 SECJ2203         # Show course details
  registrar run scripts/demo_steps.yaml     # Run scripted operations
  registrar summary                         # Send summary to Telegram
  registrar test-telegram                   # Test Telegram bot
        """
    )

    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )

    parser.add_argument(
        '-l', '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Set logging level (default: from config, else INFO)'
    )

    parser.add_argument(
        '--log-file',
        help='Path to log file (default: from config, else logs/registrar.log)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Demo command
    parser_demo = subparsers.add_parser('demo', help='Run the registration walkthrough')
    parser_demo.set_defaults(func=cmd_demo)

    # List command
    parser_list = subparsers.add_parser('list', help='List courses')
    parser_list.set_defaults(func=cmd_list)

    # View command
    parser_view = subparsers.add_parser('view', help='View course details')
    parser_view.add_argument('student_id', help='Student id (e.g., "A22EC4000")')
    parser_view.add_argument('course_id', help='Course id (e.g., "SECJ2203")')
    parser_view.set_defaults(func=cmd_view)

    # Run command
    parser_run = subparsers.add_parser('run', help='Run a YAML script of operations')
    parser_run.add_argument('script', help='Path to the YAML script')
    parser_run.add_argument(
        '--show-courses',
        action='store_true',
        help='List courses after the script finishes'
    )
    parser_run.set_defaults(func=cmd_run)

    # Summary command
    parser_summary = subparsers.add_parser('summary', help='Send registration summary')
    parser_summary.set_defaults(func=cmd_summary)

    # Test Telegram command
    parser_test_telegram = subparsers.add_parser('test-telegram', help='Test Telegram bot')
    parser_test_telegram.set_defaults(func=cmd_test_telegram)

    return parser


def main(argv=None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load configuration once; commands reuse it through args.settings
    try:
        args.settings = Config(args.config)
    except FileNotFoundError:
        args.settings = None

    # Setup logging, falling back to the config file's logging section
    log_level = args.log_level or (args.settings.log_level if args.settings else 'INFO')
    log_file = args.log_file or (args.settings.log_file if args.settings else DEFAULT_LOG_FILE)
    setup_logging(log_file=log_file, log_level=log_level)

    # Execute command
    if hasattr(args, 'func'):
        return args.func(args)

    parser.print_help()
    return 1
