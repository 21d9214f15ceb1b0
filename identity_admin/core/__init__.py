"""Core account-management logic.

Module Structure:
    - toolkit/      : Identity Toolkit client, account operations and records
    - validators.py : Field validation and normalization for request payloads

Usage Pattern:
        from identity_admin.core.toolkit import UserManager, UserQuery
        from identity_admin.core import validators
"""
