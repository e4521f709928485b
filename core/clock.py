# guest_config_agent/core/clock.py
"""
Clock - timestamps for log lines.

Calendar time and microseconds are both read from the kernel's adjtimex(2)
counter in a single read-only call. When the call is unavailable (non-Linux
host, missing libc, seccomp) the timestamp degrades to second precision
instead of failing the boot.
"""
from __future__ import annotations

import ctypes
import ctypes.util
import logging
import time
from datetime import datetime
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

_SECONDS_FORMAT = '%Y-%m-%dT%H:%M:%S'

# timex.status bit: the time.tv_usec field holds nanoseconds.
STA_NANO = 0x2000


class _Timeval(ctypes.Structure):
    _fields_ = [('tv_sec', ctypes.c_long), ('tv_usec', ctypes.c_long)]


class _Timex(ctypes.Structure):
    """ctypes mapping for Linux struct timex."""

    _fields_ = [
        ('modes', ctypes.c_uint),
        ('offset', ctypes.c_long),
        ('freq', ctypes.c_long),
        ('maxerror', ctypes.c_long),
        ('esterror', ctypes.c_long),
        ('status', ctypes.c_int),
        ('constant', ctypes.c_long),
        ('precision', ctypes.c_long),
        ('tolerance', ctypes.c_long),
        ('time', _Timeval),
        ('tick', ctypes.c_long),
        ('ppsfreq', ctypes.c_long),
        ('jitter', ctypes.c_long),
        ('shift', ctypes.c_int),
        ('stabil', ctypes.c_long),
        ('jitcnt', ctypes.c_long),
        ('calcnt', ctypes.c_long),
        ('errcnt', ctypes.c_long),
        ('stbcnt', ctypes.c_long),
        ('tai', ctypes.c_int),
        ('_reserved', ctypes.c_int * 11),
    ]


_libc: Optional[ctypes.CDLL] = None
_libc_loaded = False


def _load_libc() -> Optional[ctypes.CDLL]:
    global _libc, _libc_loaded
    if not _libc_loaded:
        _libc_loaded = True
        name = ctypes.util.find_library('c')
        if name:
            try:
                _libc = ctypes.CDLL(name, use_errno=True)
            except OSError as exc:
                logger.debug('libc not loadable for adjtimex: %s', exc)
                _libc = None
    return _libc


def read_adjtimex() -> Optional[Tuple[int, int]]:
    """Return ``(seconds, microseconds)`` from adjtimex(2), or None if unavailable."""
    libc = _load_libc()
    if libc is None or not hasattr(libc, 'adjtimex'):
        return None
    tx = _Timex()
    tx.modes = 0
    if libc.adjtimex(ctypes.byref(tx)) == -1:
        return None
    return reading_from_timex(tx)


def reading_from_timex(tx: _Timex) -> Tuple[int, int]:
    sub_second = int(tx.time.tv_usec)
    if tx.status & STA_NANO:
        sub_second //= 1000
    return int(tx.time.tv_sec), sub_second


def format_timestamp(seconds: float, microseconds: Optional[int] = None) -> str:
    stamp = datetime.fromtimestamp(seconds).strftime(_SECONDS_FORMAT)
    if microseconds is None:
        return stamp
    return f'{stamp}.{microseconds:06d}'


def now(reader: Callable[[], Optional[Tuple[int, int]]] = read_adjtimex) -> str:
    """Current local time as ``YYYY-MM-DDTHH:MM:SS.uuuuuu``."""
    reading = reader()
    if reading is None:
        return format_timestamp(time.time())
    seconds, usec = reading
    return format_timestamp(seconds, usec)
