import logging
import pytest  # noqa: F401


def pytest_configure(config):
    """
    Enable debug logging for the geoclip package so that every log
    statement of the clipping code is formatted during the test run.
    """
    logging.getLogger("geoclip").setLevel(logging.DEBUG)
