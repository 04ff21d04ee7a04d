#
# src/mvnverify/verifier/maven.py
#
"""
Maven verifier: runs goals of an extracted sample project through `mvn`.
"""
import os
import subprocess
from pathlib import Path

import structlog

from mvnverify.exceptions import VerificationError
from mvnverify.verifier.protocols import BuildVerifier, GoalResult

log = structlog.get_logger("mvnverify.verifier.maven")

ERROR_LINE_PREFIX = "[ERROR]"


class MavenVerifier(BuildVerifier):
    """
    Drives one Maven project directory, one goal invocation at a time.

    The output of the latest invocation is written to `log.txt` inside the
    project directory and is available through the log helpers.
    """

    log_file_name = "log.txt"

    def __init__(
        self,
        basedir: Path | str,
        settings_file: Path | str | None = None,
        executable: str = "mvn",
    ) -> None:
        self.basedir = Path(basedir).resolve()
        if not self.basedir.is_dir():
            raise VerificationError("Project directory does not exist", basedir=self.basedir)

        self.settings_file = Path(settings_file).resolve() if settings_file else None
        if self.settings_file is not None and not self.settings_file.is_file():
            raise VerificationError(
                f"Settings file '{self.settings_file}' does not exist", basedir=self.basedir
            )

        self.executable = executable
        self.local_repository: Path | None = None
        self.cli_options: list[str] = []
        self.debug = False
        self.env: dict[str, str] = {}
        self.executed_goals: list[str] = []
        self._log = log.bind(basedir=str(self.basedir))
        self._log.debug("Verifier initialized", executable=executable)

    @property
    def log_file(self) -> Path:
        return self.basedir / self.log_file_name

    def _executable_command(self) -> list[str]:
        return [self.executable]

    def build_command(self, goal: str) -> list[str]:
        """Assembles the full command line for `goal`."""
        command = [*self._executable_command(), "-e", "--batch-mode"]
        if self.local_repository is not None:
            command.append(f"-Dmaven.repo.local={self.local_repository}")
        if self.settings_file is not None:
            command.extend(["-s", str(self.settings_file)])
        if self.debug:
            command.append("-X")
        command.extend(self.cli_options)
        command.append(goal)
        return command

    def execute_goal(self, goal: str, env: dict[str, str] | None = None) -> GoalResult:
        command = self.build_command(goal)
        goal_log = self._log.bind(goal=goal)
        goal_log.info("Executing goal", emoji_key="goal", command=" ".join(command))

        process_env = {**os.environ, **self.env, **(env or {})}
        try:
            with self.log_file.open("w", encoding="utf-8") as log_stream:
                completed = subprocess.run(
                    command,
                    cwd=self.basedir,
                    env=process_env,
                    stdin=subprocess.DEVNULL,
                    stdout=log_stream,
                    stderr=subprocess.STDOUT,
                    check=False,
                )
        except FileNotFoundError as e:
            goal_log.error("Build executable not found", command_executable=command[0])
            raise VerificationError(
                f"Build executable not found: '{command[0]}'. Is it installed and in the system's PATH?",
                basedir=self.basedir,
                goal=goal,
                command=command,
                details=e,
            ) from e
        except OSError as e:
            goal_log.exception("Unable to start build process")
            raise VerificationError(
                f"Unable to start build process: {e}",
                basedir=self.basedir,
                goal=goal,
                command=command,
                details=e,
            ) from e

        self.executed_goals.append(goal)
        if completed.returncode != 0:
            goal_log.error("Goal failed", emoji_key="fail", exit_code=completed.returncode)
            raise VerificationError(
                f"Exit code was non-zero: {completed.returncode}",
                basedir=self.basedir,
                goal=goal,
                exit_code=completed.returncode,
                command=command,
                log_file=self.log_file,
            )

        goal_log.info("Goal finished", emoji_key="success")
        return GoalResult(goal=goal, exit_code=completed.returncode, command=tuple(command), log_file=self.log_file)

    def execute_goals(self, goals: list[str], env: dict[str, str] | None = None) -> list[GoalResult]:
        """Runs `goals` in order, stopping at the first failure."""
        return [self.execute_goal(goal, env=env) for goal in goals]

    # --- Log inspection ---
    def load_log_lines(self) -> list[str]:
        try:
            return self.log_file.read_text(encoding="utf-8", errors="replace").splitlines()
        except FileNotFoundError as e:
            raise VerificationError("No build log available yet", basedir=self.basedir, details=e) from e

    def verify_error_free_log(self) -> None:
        errors = [line for line in self.load_log_lines() if line.startswith(ERROR_LINE_PREFIX)]
        if errors:
            raise VerificationError(
                f"Build log contains {len(errors)} error line(s), first: {errors[0]}",
                basedir=self.basedir,
                log_file=self.log_file,
            )

    def verify_text_in_log(self, text: str) -> None:
        if not any(text in line for line in self.load_log_lines()):
            raise VerificationError(
                f"Text not found in build log: '{text}'", basedir=self.basedir, log_file=self.log_file
            )

    # --- File assertions ---
    def assert_file_present(self, path: str) -> Path:
        candidate = self.basedir / path
        if not candidate.exists():
            raise VerificationError(f"Expected file was not found: {path}", basedir=self.basedir)
        return candidate

    def assert_file_not_present(self, path: str) -> None:
        if (self.basedir / path).exists():
            raise VerificationError(f"Unexpected file was found: {path}", basedir=self.basedir)


class MavenWrapperVerifier(MavenVerifier):
    """Runs the project's own Maven wrapper script instead of a global `mvn`."""

    wrapper_name = "mvnw"

    def _executable_command(self) -> list[str]:
        return [str(self.basedir / self.wrapper_name)]

# 🔼⚙️
