"""
Managers for pipeline side concerns.
"""

from .log_manager import LogManager

__all__ = ['LogManager']
