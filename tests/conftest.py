import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the configuration environment so that settings and logging
    defaults resolve the same way for every test.
    """
    os.environ["ORDERING_ENVIRONMENT"] = session.config.option.env

    from ordering.config import reset_settings

    reset_settings()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Reset cached settings and log context after every test"""
    yield

    from ordering.config import reset_settings
    from ordering.utils.logging import clear_context

    reset_settings()
    clear_context()
