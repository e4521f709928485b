# tests/test_clock.py
import io
import logging
import re

from core import clock
from core.logging_config import ClockFormatter, LOG_FORMAT, configure_logging

MICRO_RE = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}$')
SECONDS_RE = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$')


def test_now_uses_adjtimex_microseconds():
    stamp = clock.now(reader=lambda: (1_700_000_000, 42))
    assert MICRO_RE.match(stamp)
    assert stamp.endswith('.000042')


def test_now_degrades_to_seconds_without_adjtimex():
    stamp = clock.now(reader=lambda: None)
    assert SECONDS_RE.match(stamp)


def test_format_timestamp_pads_microseconds():
    assert clock.format_timestamp(0, 7).endswith('.000007')
    assert '.' not in clock.format_timestamp(0)


def test_default_now_has_a_valid_shape():
    stamp = clock.now()
    assert MICRO_RE.match(stamp) or SECONDS_RE.match(stamp)


def test_clock_formatter_prefixes_every_line(monkeypatch):
    monkeypatch.setattr('core.logging_config.now', lambda: '2024-01-02T03:04:05.000006')
    formatter = ClockFormatter(LOG_FORMAT)
    record = logging.LogRecord('bootstrap', logging.INFO, __file__, 1, 'start VM config', None, None)
    assert formatter.format(record) == '2024-01-02T03:04:05.000006 - bootstrap - INFO - start VM config'


def test_configure_logging_replaces_root_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    stream = io.StringIO()
    try:
        handler = configure_logging('debug', stream)
        assert root.handlers == [handler]
        assert root.level == logging.DEBUG
        logging.getLogger('bootstrap.test').debug('hello')
        assert stream.getvalue().rstrip().endswith('bootstrap.test - DEBUG - hello')
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_timex_reading_in_microseconds():
    tx = clock._Timex()
    tx.time.tv_sec, tx.time.tv_usec = 1_700_000_000, 123456
    assert clock.reading_from_timex(tx) == (1_700_000_000, 123456)


def test_timex_reading_in_nanoseconds_is_scaled():
    tx = clock._Timex()
    tx.status = clock.STA_NANO
    tx.time.tv_sec, tx.time.tv_usec = 1_700_000_000, 123456789
    seconds, usec = clock.reading_from_timex(tx)
    assert usec == 123456
    assert clock.format_timestamp(seconds, usec).endswith('.123456')
