"""
Utility module for common functions and constants.

This module contains:
- Default values and constants
- YAML configuration loading (``utils.config``)
"""

from .defaults import *

__all__ = []  # configuration helpers live in utils.config
