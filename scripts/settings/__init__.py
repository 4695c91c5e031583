"""
Configuration for the museum tracker.

Exposes the process-wide TrackerConfig singleton.
"""

from .config import TrackerConfig, config

__all__ = [
    'TrackerConfig',
    'config',
]

__version__ = '1.0.0'
