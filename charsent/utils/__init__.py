"""
Utility functions for the forward pipeline.

This module provides configuration management, device handling, seeding,
stage timing and logging setup.
"""

from .config import load_config, build_argparser, validate_config, DEFAULT_CONFIG
from .seed import resolve_seed, make_generators
from .device import get_device
from .timing import StageTimer
from .logging_utils import configure_logging

__all__ = [
    'load_config', 'build_argparser', 'validate_config', 'DEFAULT_CONFIG',
    'resolve_seed', 'make_generators',
    'get_device', 'StageTimer', 'configure_logging'
]
