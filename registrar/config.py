"""Configuration for the registration system: seed catalog, logging and Telegram settings."""

import os
import yaml
from pathlib import Path
from typing import Dict, List, Any
from dotenv import load_dotenv


DEFAULT_LOG_FILE = 'logs/registrar.log'

# Seed entry fields and their defaults; None marks a required field
COURSE_FIELDS = {'id': None, 'title': '', 'time': '', 'capacity': None}
STUDENT_FIELDS = {'id': None, 'name': ''}


class ConfigError(ValueError):
    """Raised when the configuration file has the wrong shape."""


class Config:
    """Registration system settings loaded from YAML, ``.env`` and the environment.

    Expected layout::

        telegram: {bot_token: ..., chat_ids: [...]}
        logging: {level: INFO, file: logs/registrar.log}
        students: [{id: A22EC4000, name: Ali}, ...]
        courses: [{id: SECJ2203, title: ..., time: Mon 9AM, capacity: 2}, ...]

    Seed entries are validated on load, so a malformed catalog fails with
    ``ConfigError`` before anything is added to the ledger.
    """

    def __init__(self, config_path: str = "config.yaml"):
        # Load environment variables from .env file
        load_dotenv()

        self.config_path = Path(config_path)
        self.config_data = self._load_config()
        self._apply_env_overrides()

        self.courses = self._seed_entries('courses', COURSE_FIELDS)
        self.students = self._seed_entries('students', STUDENT_FIELDS)

    def _load_config(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping at the top level")
        return data

    def _apply_env_overrides(self):
        """Apply environment variable overrides to configuration."""
        overrides = {
            ('telegram', 'bot_token'): os.getenv('TELEGRAM_BOT_TOKEN'),
            ('logging', 'level'): os.getenv('LOG_LEVEL'),
            ('logging', 'file'): os.getenv('LOG_FILE'),
        }

        chat_ids = os.getenv('TELEGRAM_CHAT_IDS')
        if chat_ids:
            overrides[('telegram', 'chat_ids')] = [
                int(chat_id.strip()) for chat_id in chat_ids.split(',') if chat_id.strip()
            ]

        for (section, key), value in overrides.items():
            if value:
                self.config_data.setdefault(section, {})[key] = value

    def _seed_entries(self, section: str, fields: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Validate and normalize the ``students`` or ``courses`` list.

        Args:
            section: Top-level key holding the entries
            fields: Field names mapped to defaults (None for required fields)

        Returns:
            Entries with every field present and ids converted to strings
        """
        entries = self.config_data.get(section) or []
        if not isinstance(entries, list):
            raise ConfigError(f"'{section}' must be a list, got {type(entries).__name__}")

        normalized = []
        for position, entry in enumerate(entries, start=1):
            if not isinstance(entry, dict):
                raise ConfigError(f"{section}[{position}] must be a mapping, got {entry!r}")

            missing = [name for name, default in fields.items()
                       if default is None and entry.get(name) in (None, '')]
            if missing:
                raise ConfigError(f"{section}[{position}] is missing {', '.join(missing)}")

            item = {name: entry.get(name, default) for name, default in fields.items()}
            item['id'] = str(item['id'])
            normalized.append(item)

        return normalized

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``telegram.chat_ids``."""
        value = self.config_data
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    @property
    def telegram_bot_token(self) -> str:
        """Bot token, expanding a ``${VAR}`` placeholder from the environment."""
        token = str(self.get('telegram.bot_token') or '')
        if token.startswith('${') and token.endswith('}'):
            return os.getenv(token[2:-1], '')
        return token

    @property
    def telegram_chat_ids(self) -> List[int]:
        return self.get('telegram.chat_ids') or []

    @property
    def log_level(self) -> str:
        return self.get('logging.level') or 'INFO'

    @property
    def log_file(self) -> str:
        return self.get('logging.file') or DEFAULT_LOG_FILE
