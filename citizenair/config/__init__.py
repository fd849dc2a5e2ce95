"""
Configuration package for the CitizenAIR service.
"""

from .settings import settings, Settings

__all__ = ["settings", "Settings"]
