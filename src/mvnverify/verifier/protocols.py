#
# src/mvnverify/verifier/protocols.py
#
"""
Defines protocols and data structures for build verifiers.
"""
from pathlib import Path
from typing import Protocol, runtime_checkable

from attrs import define


@define(frozen=True, slots=True)
class GoalResult:
    """
    Structured result of one successful goal execution.
    """
    goal: str
    exit_code: int
    command: tuple[str, ...]
    log_file: Path


@runtime_checkable
class BuildVerifier(Protocol):
    """
    Protocol for a verifier bound to one extracted project directory.
    """
    basedir: Path
    settings_file: Path | None
    local_repository: Path | None
    cli_options: list[str]
    debug: bool

    def execute_goal(self, goal: str, env: dict[str, str] | None = None) -> GoalResult:
        """
        Runs one build goal in the project directory.

        Args:
            goal: The goal (or phase) to execute.
            env: Extra environment variables for the build process.

        Returns:
            A GoalResult for the successful execution.

        Raises:
            VerificationError: if the build cannot be started or exits non-zero.
        """
        ...

# 🔼⚙️
