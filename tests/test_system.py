import pytest
import yaml

from registrar import cli
from registrar import system as system_module
from registrar.config import Config, ConfigError
from registrar.errors import InvalidArgument
from registrar.system import RegistrationSystem


@pytest.fixture
def system(write_config, catalog):
    return RegistrationSystem(write_config(catalog))


def test_seeds_catalog(system):
    assert list(system.ledger.students) == ['A22EC4000']
    assert list(system.ledger.courses) == ['SECJ2203', 'SECR2043', 'SECD2523']
    assert system.ledger.is_logged_in('A22EC4000')
    assert system.notifier.enabled is False


def test_bad_capacity_in_config_is_rejected(write_config, catalog):
    catalog['courses'][0]['capacity'] = 0
    with pytest.raises(InvalidArgument):
        RegistrationSystem(write_config(catalog))


def test_run_demo(system, capsys):
    assert system.run_demo() == (3, 0)
    out = capsys.readouterr().out
    assert "[SUCCESS] A22EC4000 registered to SECJ2203" in out
    assert "'status': '1/2'" in out
    assert "[SUCCESS] A22EC4000 dropped SECJ2203" in out
    assert system.ledger.courses['SECJ2203'].enrolled == 0


def test_run_steps_reports_failures_and_continues(system, capsys):
    steps = [
        {'op': 'add_course', 'course': 'SECJ2204', 'title': 'Design', 'time': 'Mon 9AM', 'capacity': 1},
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECJ2203'},
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECJ2204'},
        {'op': 'register', 'student': 'B1', 'course': 'SECD2523'},
        {'op': 'drop', 'student': 'A22EC4000', 'course': 'SECD2523'},
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECD2523'},
    ]
    assert system.run_steps(steps) == (3, 3)

    out = capsys.readouterr().out
    assert "[TimeConflict]" in out
    assert "[NotLoggedIn]" in out
    assert "[NotEnrolled]" in out
    assert system.ledger.students['A22EC4000'].course_ids == ['SECJ2203', 'SECD2523']


def test_malformed_steps_count_as_failures(system, capsys):
    steps = [{'op': 'teleport'}, {'op': 'register', 'student': 'A22EC4000'}]
    assert system.run_steps(steps) == (0, 2)
    assert "Invalid step 1" in capsys.readouterr().out


def test_login_logout_steps(system):
    steps = [
        {'op': 'logout', 'student': 'A22EC4000'},
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECJ2203'},
        {'op': 'login', 'student': 'A22EC4000'},
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECJ2203'},
    ]
    assert system.run_steps(steps) == (3, 1)


def test_run_script(system, tmp_path):
    script = tmp_path / "steps.yaml"
    script.write_text(yaml.safe_dump({'steps': [
        {'op': 'add_student', 'student': 'B1', 'name': 'Bea'},
        {'op': 'register', 'student': 'B1', 'course': 'SECR2043'},
    ]}), encoding='utf-8')

    assert system.run_script(str(script)) == (2, 0)
    assert system.ledger.courses['SECR2043'].enrolled == 1


def test_run_script_accepts_plain_list(system, tmp_path):
    script = tmp_path / "steps.yaml"
    script.write_text(yaml.safe_dump([
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECR2043'},
    ]), encoding='utf-8')
    assert system.run_script(str(script)) == (1, 0)


def test_run_script_missing_file(system, tmp_path):
    with pytest.raises(FileNotFoundError):
        system.run_script(str(tmp_path / "nope.yaml"))


def test_list_courses(system, capsys):
    system.ledger.register_course('A22EC4000', 'SECD2523')
    system.list_courses()
    out = capsys.readouterr().out
    assert "Courses (3)" in out
    assert "SECD2523 - Database Systems" in out
    assert "Enrolled: 1/2 (1 seat(s) left)" in out


def test_summary_and_disabled_send(system):
    system.ledger.register_course('A22EC4000', 'SECJ2203')
    summary = system.summary()
    assert summary['students'] == 1
    assert summary['total_courses'] == 3
    assert summary['changes'] == 1
    assert summary['courses'][0]['status'] == '1/2'
    assert system.send_summary() is False


def test_cli_demo(write_config, catalog, tmp_path):
    config_path = write_config(catalog)
    log_file = str(tmp_path / "logs" / "cli.log")
    assert cli.main(['-c', config_path, '--log-file', log_file, 'demo']) == 0


def test_cli_view_unknown_course_fails(write_config, catalog, tmp_path):
    config_path = write_config(catalog)
    log_file = str(tmp_path / "logs" / "cli.log")
    assert cli.main(['-c', config_path, '--log-file', log_file, 'view', 'A22EC4000', 'NOPE']) == 1


def test_cli_without_command_prints_help(tmp_path, capsys):
    log_file = str(tmp_path / "logs" / "cli.log")
    assert cli.main(['--log-file', log_file]) == 1
    assert "usage:" in capsys.readouterr().out


def test_seed_entry_without_id_is_rejected(write_config, catalog):
    del catalog['students'][0]['id']
    with pytest.raises(ConfigError):
        RegistrationSystem(write_config(catalog))


def test_system_accepts_loaded_config(write_config, catalog):
    config = Config(write_config(catalog))
    system = RegistrationSystem(config)
    assert system.config is config
    assert list(system.ledger.courses) == ['SECJ2203', 'SECR2043', 'SECD2523']


def test_non_mapping_steps_are_reported_and_run_continues(system, capsys):
    steps = [
        'register',
        ['register', 'A22EC4000', 'SECJ2203'],
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECJ2203'},
    ]
    assert system.run_steps(steps) == (1, 2)
    out = capsys.readouterr().out
    assert "Invalid step 1" in out
    assert "Invalid step 2" in out
    assert system.ledger.courses['SECJ2203'].enrolled == 1


def test_failing_listener_does_not_abort_run(system):
    def broken(event):
        raise RuntimeError("notification backend down")

    system.ledger.subscribe(broken)
    steps = [
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECJ2203'},
        {'op': 'register', 'student': 'A22EC4000', 'course': 'SECD2523'},
    ]
    assert system.run_steps(steps) == (2, 0)
    assert system.ledger.students['A22EC4000'].course_ids == ['SECJ2203', 'SECD2523']


@pytest.mark.parametrize("content", ["register\n", "42\n", "steps: register\n", "steps: {op: register}\n"])
def test_run_script_rejects_non_list_steps(system, tmp_path, content):
    script = tmp_path / "steps.yaml"
    script.write_text(content, encoding='utf-8')
    with pytest.raises(ValueError):
        system.run_script(str(script))


def test_cli_loads_config_once(monkeypatch, write_config, catalog, tmp_path):
    loads = []

    class CountingConfig(Config):
        def __init__(self, *args, **kwargs):
            loads.append(args)
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(cli, 'Config', CountingConfig)
    monkeypatch.setattr(system_module, 'Config', CountingConfig)

    config_path = write_config(catalog)
    log_file = str(tmp_path / "logs" / "cli.log")
    assert cli.main(['-c', config_path, '--log-file', log_file, 'list']) == 0
    assert len(loads) == 1
