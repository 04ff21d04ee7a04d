# src/mvnverify/exceptions.py

"""
Exception hierarchy for mvnverify.

Every failure raised while provisioning a verifier derives from
MvnVerifyError, so test reports can tell library failures apart from
assertion failures in the test body.
"""

from pathlib import Path


class MvnVerifyError(Exception):
    """Base class for all mvnverify errors."""

    def __init__(self, message: str, details: Exception | None = None):
        self.details = details
        super().__init__(message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ConfigurationError(MvnVerifyError):
    """Missing or inconsistent verifier metadata or settings."""

    pass


class ResourceError(MvnVerifyError):
    """A bundled project or settings file could not be extracted."""

    def __init__(
        self,
        message: str,
        resource_path: str | None = None,
        details: Exception | None = None,
    ):
        self.resource_path = resource_path
        full_message = message
        if resource_path:
            full_message += f" (Resource: '{resource_path}')"
        super().__init__(full_message, details=details)


class VerificationError(MvnVerifyError):
    """Raised by a verifier when it cannot be built or a goal fails."""

    def __init__(
        self,
        message: str,
        basedir: Path | str | None = None,
        goal: str | None = None,
        exit_code: int | None = None,
        command: list[str] | None = None,
        log_file: Path | None = None,
        details: Exception | None = None,
    ):
        self.basedir = basedir
        self.goal = goal
        self.exit_code = exit_code
        self.command = command
        self.log_file = log_file
        full_message = f"[Verifier] {message}"
        if goal:
            full_message += f" (Goal: '{goal}')"
        if basedir:
            full_message += f" (Project: '{basedir}')"
        super().__init__(full_message, details=details)
        if command and hasattr(self, "add_note"):
            self.add_note(f"Command line: {' '.join(command)}")
        if log_file and hasattr(self, "add_note"):
            self.add_note(f"Build log: {log_file}")


class BuildError(MvnVerifyError):
    """Provisioning could not construct a verifier or run its goals."""

    def __init__(
        self,
        message: str,
        work_dir: Path | str | None = None,
        details: Exception | None = None,
    ):
        self.work_dir = work_dir
        full_message = message
        if work_dir:
            full_message += f" (Directory: '{work_dir}')"
        super().__init__(full_message, details=details)


class InjectionError(MvnVerifyError):
    """Writing the verifier into a test instance attribute was refused."""

    def __init__(self, message: str, field_name: str, instance: object, details: Exception | None = None):
        self.field_name = field_name
        self.instance = instance
        super().__init__(message, details=details)


# 🔼⚙️
