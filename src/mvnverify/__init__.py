#
# src/mvnverify/__init__.py
#
"""
mvnverify: run Maven goals against bundled sample projects before a test body runs.
"""
from .exceptions import (
    BuildError,
    ConfigurationError,
    InjectionError,
    MvnVerifyError,
    ResourceError,
    VerificationError,
)
from .interceptor import MavenVerifierTest, VerifierInterceptor
from .markers import debug_build, execute_goals, meta_marker, settings_file, verify_using_project
from .verifier import BuildVerifier, GoalResult, MavenVerifier, MavenWrapperVerifier

__all__ = [
    "BuildError",
    "BuildVerifier",
    "ConfigurationError",
    "GoalResult",
    "InjectionError",
    "MavenVerifier",
    "MavenVerifierTest",
    "MavenWrapperVerifier",
    "MvnVerifyError",
    "ResourceError",
    "VerificationError",
    "VerifierInterceptor",
    "debug_build",
    "execute_goals",
    "meta_marker",
    "settings_file",
    "verify_using_project",
]

# 🔼⚙️
