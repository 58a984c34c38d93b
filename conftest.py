# conftest.py
"""
Pytest conftest for sphere_authority tests.

Load-failure tests make the package log errors on purpose; keep them out
of the test output.
"""

import logging

import pytest


@pytest.fixture(autouse=True, scope="session")
def _suppress_test_log_noise():
    logging.getLogger("sphere_authority").setLevel(logging.CRITICAL)
    yield
    logging.getLogger("sphere_authority").setLevel(logging.NOTSET)
