"""
Entry point tests: fail-fast exit and port binding
"""

import os
import sys
import socket
import logging
import subprocess
from unittest.mock import patch

import run

HERE = os.path.dirname(os.path.abspath(__file__))


def test_missing_config_returns_1_without_binding(capsys):
    with patch('run.ServiceHandle') as handle_cls:
        assert run.main({}) == 1
    handle_cls.assert_not_called()
    err = capsys.readouterr().err
    assert 'FATAL ERROR: REQUIRED_CONFIG environment variable is not set!' in err
    assert 'Azure Container Apps' in err


def test_empty_config_returns_1():
    with patch('run.ServiceHandle') as handle_cls:
        assert run.main({'REQUIRED_CONFIG': ''}) == 1
    handle_cls.assert_not_called()


def test_invalid_port_returns_1(capsys):
    with patch('run.ServiceHandle') as handle_cls:
        assert run.main({'REQUIRED_CONFIG': 'v', 'PORT': 'eighty'}) == 1
    handle_cls.assert_not_called()
    assert 'PORT must be an integer' in capsys.readouterr().err


def test_binds_default_port_on_all_interfaces(capsys):
    with patch('run.ServiceHandle') as handle_cls:
        assert run.main({'REQUIRED_CONFIG': 'test-config-value'}) == 0
    args = handle_cls.call_args[0]
    assert args[1:] == ('0.0.0.0', 3000)
    handle_cls.return_value.serve_forever.assert_called_once_with()
    handle_cls.return_value.shutdown.assert_called_once_with()
    out = capsys.readouterr().out
    assert 'Server running on port 3000' in out
    assert 'expects port 8080, but app runs on 3000' in out
    assert 'REQUIRED_CONFIG=test-config-value' in out


def test_binds_requested_port():
    with patch('run.ServiceHandle') as handle_cls:
        run.main({'REQUIRED_CONFIG': 'v', 'PORT': '9090'})
    assert handle_cls.call_args[0][2] == 9090


def test_interrupt_stops_cleanly(capsys):
    with patch('run.ServiceHandle') as handle_cls:
        handle_cls.return_value.serve_forever.side_effect = KeyboardInterrupt
        assert run.main({'REQUIRED_CONFIG': 'v'}) == 0
    handle_cls.return_value.shutdown.assert_called_once_with()
    assert 'Server stopped' in capsys.readouterr().out


def _port_is_listening(port):
    with socket.socket() as sock:
        sock.settimeout(0.5)
        return sock.connect_ex(('127.0.0.1', port)) == 0


def test_process_exits_1_without_config():
    with socket.socket() as sock:
        sock.bind(('127.0.0.1', 0))
        port = sock.getsockname()[1]

    env = {k: v for k, v in os.environ.items() if k != 'REQUIRED_CONFIG'}
    env['PORT'] = str(port)
    result = subprocess.run(
        [sys.executable, os.path.join(HERE, 'run.py')],
        cwd=HERE, env=env, capture_output=True, text=True, timeout=30,
    )
    assert result.returncode == 1
    assert 'FATAL ERROR' in result.stderr
    assert not _port_is_listening(port)


def test_main_quiets_werkzeug_request_log():
    logger = logging.getLogger('werkzeug')
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    try:
        with patch('run.ServiceHandle'):
            run.main({'REQUIRED_CONFIG': 'v'})
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(previous)
