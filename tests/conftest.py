import pytest
import yaml

from registrar.ledger import RegistrationLedger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('TELEGRAM_BOT_TOKEN', 'TELEGRAM_CHAT_IDS', 'LOG_LEVEL', 'LOG_FILE'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ledger():
    return RegistrationLedger()


@pytest.fixture
def seeded(ledger):
    """Ledger with one student and three courses, two of them at the same time."""
    ledger.add_student("A1", "Ali")
    ledger.add_course("C1", "SE", "Mon 9AM", 1)
    ledger.add_course("C2", "OS", "Mon 9AM", 1)
    ledger.add_course("C3", "DB", "Tue 10AM", 1)
    return ledger


@pytest.fixture
def write_config(tmp_path):
    def _write(data, name="config.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def catalog():
    return {
        'telegram': {'bot_token': '${TELEGRAM_BOT_TOKEN}', 'chat_ids': []},
        'logging': {'level': 'DEBUG', 'file': 'logs/test.log'},
        'students': [{'id': 'A22EC4000', 'name': 'Ali'}],
        'courses': [
            {'id': 'SECJ2203', 'title': 'Software Engineering', 'time': 'Mon 9AM', 'capacity': 2},
            {'id': 'SECR2043', 'title': 'Operating Systems', 'time': 'Mon 10AM', 'capacity': 2},
            {'id': 'SECD2523', 'title': 'Database Systems', 'time': 'Tue 10AM', 'capacity': 2},
        ],
    }
