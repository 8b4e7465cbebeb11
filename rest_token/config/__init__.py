"""Configuration package exports."""

from .loader import load_settings
from .model import TokenSettings

__all__ = ["TokenSettings", "load_settings"]
