"""
Settings module.

This package contains environment-specific settings:
- base.py: Base settings shared across all environments
- logging.py: Structured logging configuration
- test.py: Test environment settings
"""
