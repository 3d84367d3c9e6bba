"""
StockLedger — Test Settings

Used by pytest (see pyproject.toml). A file-backed SQLite test database
lets the threaded concurrency tests open one connection per thread;
IMMEDIATE transactions make concurrent writers queue on the database
lock instead of failing on upgrade.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test.sqlite3',  # noqa: F405
        'OPTIONS': {
            'transaction_mode': 'IMMEDIATE',
            'timeout': 20,
        },
        'TEST': {
            'NAME': BASE_DIR / 'test_stockledger.sqlite3',  # noqa: F405
        },
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

STOCK_DEFAULT_MINIMUM = 5
STOCK_MAX_CONCURRENCY_RETRIES = 3
DB_LEAK_DETECTION_SECONDS = 0
DASHBOARD_TOP_MOVED_LIMIT = 5
DASHBOARD_TOP_MOVED_WINDOW_DAYS = 30

# Propagate to the root logger so pytest's caplog sees application records.
LOGGING['loggers']['stockledger'].update({  # noqa: F405
    'handlers': [],
    'level': 'DEBUG',
    'propagate': True,
})
