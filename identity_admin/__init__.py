"""Server-side admin client for Identity Toolkit accounts.

To manage accounts:
    from identity_admin.core.toolkit import create_user_manager

To load configuration:
    from identity_admin.config import load_settings
"""
