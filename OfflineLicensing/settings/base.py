"""
Base settings for OfflineLicensing.

These settings are shared across all environments.
Environment-specific overrides are in test.py.
The core signing and validation functions take every input explicitly;
these values only provide defaults for the file adapters and logging.
"""
import os

ENVIRONMENT = os.environ.get("LICENSING_ENVIRONMENT", "development")

# Logging
LOG_LEVEL = os.environ.get(
    "LICENSING_LOG_LEVEL", "DEBUG" if ENVIRONMENT == "development" else "INFO"
)
LOG_FILE = os.environ.get("LICENSING_LOG_FILE")

# Key resources
PRIVATE_KEY_FILENAME = os.environ.get("LICENSING_PRIVATE_KEY_FILENAME", "privateKey.json")
PUBLIC_KEY_FILENAME = os.environ.get("LICENSING_PUBLIC_KEY_FILENAME", "publicKey.json")

# License files
LICENSE_SUFFIX = os.environ.get("LICENSING_LICENSE_SUFFIX", ".lic")
LICENSE_ENCODING = "utf-8"
