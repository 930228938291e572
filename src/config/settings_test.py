"""Settings for the test suite.

Supplies the values ``config.settings`` refuses to default, then swaps the
database for in-memory SQLite.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from config.settings import *  # noqa: E402,F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

ACCOUNTS_SERVICE_URL = "http://accounts.test"
ACCOUNTS_SERVICE_TIMEOUT = 1.0
