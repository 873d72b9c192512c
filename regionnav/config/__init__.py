"""Configuration management package.

This package provides functionality for loading and managing planner configuration:
movement profile defaults, search limits, platform rendezvous calibration and
logging switches.
"""

from regionnav.config.config_loader import Config

__all__ = ['Config']
