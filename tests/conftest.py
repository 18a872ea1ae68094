"""Root test configuration: isolate tests from the caller's SITEMANIFEST_* environment"""

import os

import pytest

from sitemanifest.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop SITEMANIFEST_* env vars so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
