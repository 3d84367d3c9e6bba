"""
Core — Tracked Database Scopes

Scoped acquisition of a database connection with guaranteed release,
per-query timing logs and an optional leak-detection timer. Nothing
here knows about transactions; callers compose it with
transaction.atomic().

Usage::

    with tracked_connection(label='apply_movement'), transaction.atomic():
        ...

@file core/db.py
"""

import logging
import threading
import time
from contextlib import contextmanager

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, connections

logger = logging.getLogger('stockledger')


class _QueryTracker:
    """execute_wrapper hook: remembers the last statement and logs timings."""

    def __init__(self, label: str):
        self.label = label
        self.last_sql = None
        self.query_count = 0

    def __call__(self, execute, sql, params, many, context):
        self.last_sql = sql
        self.query_count += 1
        start = time.monotonic()
        try:
            return execute(sql, params, many, context)
        finally:
            logger.debug(
                'Query [%s] %.1fms: %s',
                self.label, (time.monotonic() - start) * 1000, sql,
            )


@contextmanager
def tracked_connection(alias: str = DEFAULT_DB_ALIAS, *, label: str = '', leak_timeout: float | None = None):
    """
    Yield the connection for ``alias``. If the scope is still open after
    ``leak_timeout`` seconds (DB_LEAK_DETECTION_SECONDS by default, 0 to
    disable) a warning with the last executed statement is logged.
    """
    if leak_timeout is None:
        leak_timeout = settings.DB_LEAK_DETECTION_SECONDS

    connection = connections[alias]
    tracker = _QueryTracker(label or alias)
    started = time.monotonic()

    def _report_leak():
        logger.warning(
            'Connection scope [%s] not released after %.1fs. Last query: %s',
            tracker.label, time.monotonic() - started, tracker.last_sql,
        )

    timer = None
    if leak_timeout and leak_timeout > 0:
        timer = threading.Timer(leak_timeout, _report_leak)
        timer.daemon = True
        timer.start()

    try:
        with connection.execute_wrapper(tracker):
            yield connection
    finally:
        if timer is not None:
            timer.cancel()
        logger.debug(
            'Connection scope [%s] released after %d queries in %.1fms',
            tracker.label, tracker.query_count, (time.monotonic() - started) * 1000,
        )
