"""
Utils module for HAML Localizer
===============================
"""

from .config import ConfigManager, ExtractorSettings, DEFAULT_TRANSLATABLE_ATTRIBUTES
from .logger import setup_logging

__all__ = [
    'ConfigManager', 'ExtractorSettings', 'DEFAULT_TRANSLATABLE_ATTRIBUTES', 'setup_logging'
]
