import logging

import pytest

import serial_tester

from serial_tester import cli


def test_loop_run(capsys):
    assert cli.main(['-p', 'loop://', '-b', '115200', '-r', '2', '-s', '1', '16', '--no-color']) == 0
    out = capsys.readouterr().out
    assert 'Size=1, Reps=2' in out
    assert 'Size=16, Reps=2' in out
    assert '2 (16 bytes): Passed' in out
    assert 'Failed' not in out


def test_fail_only_run(capsys):
    assert cli.main(['-p', 'loop://', '-r', '3', '-s', '8', '-s', '0', '-f', '--no-color']) == 0
    out = capsys.readouterr().out
    assert out.count('All passed') == 2
    assert 'Passed' not in out


def test_bad_baud_exits_1(capsys):
    assert cli.main(['-p', 'loop://', '-b', 'fast', '-s', '1']) == 1
    assert 'Bad baud value: fast' in capsys.readouterr().out


def test_bad_size_exits_1(capsys):
    assert cli.main(['-p', 'loop://', '-s', '1', 'x']) == 1
    assert 'Bad size value: x' in capsys.readouterr().out


def test_unopenable_port_exits_1(capsys):
    assert cli.main(['-p', '/dev/serial-tester-missing-port', '-s', '1']) == 1
    assert 'Could not open port: /dev/serial-tester-missing-port' in capsys.readouterr().out


def test_unknown_flag_exits_1():
    with pytest.raises(SystemExit) as exc:
        cli.main(['--bogus'])
    assert exc.value.code == 1


def test_list_ports(monkeypatch, capsys):
    monkeypatch.setattr(cli, 'list_ports', lambda: [('/dev/ttyUSB0', 'FT232R USB UART')])
    assert cli.main(['--list-ports']) == 0
    assert '/dev/ttyUSB0\tFT232R USB UART' in capsys.readouterr().out


@pytest.fixture
def restore_log_level():
    yield
    serial_tester.set_log_level('INFO')


def test_config_file_supplies_port_and_sizes(tmp_path, capsys):
    path = tmp_path / 'bench.yaml'
    path.write_text("port:\n  name: loop://\ntest:\n  repetitions: 1\n  sizes: [3, 5]\n")
    assert cli.main(['--config', str(path), '--no-color']) == 0
    out = capsys.readouterr().out
    assert 'Size=3, Reps=1' in out
    assert '1 (5 bytes): Passed' in out


def test_missing_config_file_exits_1(tmp_path):
    assert cli.main(['--config', str(tmp_path / 'absent.yaml'), '-p', 'loop://']) == 1


def test_log_level_debug_shows_wait(caplog, restore_log_level):
    caplog.set_level(logging.DEBUG)
    assert cli.main(['-p', 'loop://', '-r', '1', '-s', '4', '--log-level', 'DEBUG', '--no-color']) == 0
    assert logging.getLogger('serial_tester').level == logging.DEBUG
    assert any('waiting' in r.getMessage() and r.levelno == logging.DEBUG for r in caplog.records)
