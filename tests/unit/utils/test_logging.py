import sys
import json
import logging
from datetime import datetime, UTC

import pytest

from slugshortener.utils.logging import JsonFormatter, initialize_logging


@pytest.fixture
def formatter():
    return JsonFormatter()


@pytest.fixture
def root_logger():
    """Restore the root logger after logging has been reconfigured."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(message, *args, exc_info=None, **extra):
    record = logging.LogRecord('slugshortener.test', logging.INFO, __file__, 1, message, args, exc_info)
    record.created = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC).timestamp()
    record.__dict__.update(extra)
    return record


def test_json_formatter(formatter):
    record = make_record('Created short URL %s.', 'abcd2345', slug='abcd2345')

    log = json.loads(formatter.format(record))

    assert log == {
        'timestamp': '2026-10-18T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'slugshortener.test',
        'message': 'Created short URL abcd2345.',
        'slug': 'abcd2345',
    }


def test_json_formatter_serializes_arbitrary_extras(formatter):
    record = make_record('Skipping key.', key=b'url:abc')

    log = json.loads(formatter.format(record))

    assert log['key'] == "b'url:abc'"


def test_json_formatter_includes_exception(formatter):
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record('failed', exc_info=sys.exc_info())

    log = json.loads(formatter.format(record))

    assert 'RuntimeError: boom' in log['exception']


def test_initialize_logging(monkeypatch, root_logger):
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    initialize_logging()

    assert root_logger.level == logging.DEBUG
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root_logger.handlers)


def test_json_formatter_includes_stack(formatter):
    record = make_record('Inspecting.')
    record.stack_info = 'Stack (most recent call last):\n  File "app.py", line 1'

    log = json.loads(formatter.format(record))

    assert log['stack'].startswith('Stack (most recent call last)')
    assert 'stack_info' not in log


def test_json_formatter_omits_record_internals(formatter):
    log = json.loads(formatter.format(make_record('Recorded hit.', clicks=3)))

    assert set(log) == {'timestamp', 'level', 'logger', 'message', 'clicks'}


def test_initialize_logging_with_explicit_level(monkeypatch, root_logger):
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    initialize_logging('warning')

    assert root_logger.level == logging.WARNING


def test_initialize_logging_quiets_aws_sdk(root_logger):
    initialize_logging()

    assert root_logger.level == logging.INFO
    assert logging.getLogger('botocore').level == logging.WARNING
