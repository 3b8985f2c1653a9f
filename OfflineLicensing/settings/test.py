"""
Test settings for OfflineLicensing.
"""

from .base import *  # noqa: F403, F401

ENVIRONMENT = "test"

LOG_LEVEL = "WARNING"

# Never write log files from the test suite
LOG_FILE = None
