# src/mvnverify/telemetry/__init__.py

"""
Logging setup for mvnverify.
"""

from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
