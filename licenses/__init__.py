"""
Licenses module - signed license issuance and validation.

This module handles:
- LicenseTerms and License entities
- Canonical terms encoding
- Signing key pairs
- License signing and validation
- License and key file storage
"""
