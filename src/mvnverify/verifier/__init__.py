#
# src/mvnverify/verifier/__init__.py
#
"""
Build verifier sub-package for mvnverify.
"""
from .factory import get_verifier_class
from .maven import MavenVerifier, MavenWrapperVerifier
from .protocols import BuildVerifier, GoalResult

__all__ = [
    "BuildVerifier",
    "GoalResult",
    "MavenVerifier",
    "MavenWrapperVerifier",
    "get_verifier_class",
]

# 🔼⚙️
