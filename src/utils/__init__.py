"""
Utilities Module

Common utilities for logging and configuration.
"""

from .config_loader import ConfigLoader
from .logger import setupLogging, SeqLoggingFormatter

__all__ = [
    'ConfigLoader',
    'setupLogging',
    'SeqLoggingFormatter',
]
