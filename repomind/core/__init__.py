"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Application exception hierarchy
- validators.py     : Request input validation
- audit.py          : Audit and security-header middleware
"""
from repomind.core.config import get_settings, Settings
from repomind.core.logging_config import setup_logging, get_logger, LoggerMixin

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
