# inventory/tests/test_settings.py

import importlib
import os
import sys
from unittest import mock

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase

PROD_ENV = {
    "SECRET_KEY": "a-long-production-secret-for-tests",
    "ALLOWED_HOSTS": "inventory.example.com",
    "CORS_ALLOWED_ORIGINS": "https://app.example.com",
    "CSRF_TRUSTED_ORIGINS": "https://app.example.com",
}


class ProductionDatabaseTests(SimpleTestCase):
    """
    Production settings refuse databases that cannot lock balance rows.

    GUARANTEES:
    - SQLite is rejected before any other setting is applied
    - A missing DATABASE_URL is rejected
    """

    def _load_prod(self, **env):
        sys.modules.pop("backend.settings.prod", None)
        with mock.patch.dict(os.environ, {**PROD_ENV, **env}):
            importlib.import_module("backend.settings.prod")

    def tearDown(self):
        sys.modules.pop("backend.settings.prod", None)

    def test_sqlite_is_refused(self):
        with self.assertRaises(ImproperlyConfigured) as ctx:
            self._load_prod(DATABASE_URL="sqlite:////tmp/inventory.sqlite3")

        self.assertIn("Postgres", str(ctx.exception))

    def test_database_url_is_required(self):
        with self.assertRaises(ImproperlyConfigured) as ctx:
            self._load_prod(DATABASE_URL="")

        self.assertIn("DATABASE_URL", str(ctx.exception))
