"""Configuration module for the Identity Toolkit admin client."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
