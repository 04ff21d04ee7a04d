#
# config/__init__.py
#
"""
Configuration handling sub-package for mvnverify.

Exports the loading function and the settings model.
"""

from .loader import load_settings
from .models import VerifierSettings

__all__ = [
    "VerifierSettings",
    "load_settings",
]

# 🔼⚙️
