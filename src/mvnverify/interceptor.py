# src/mvnverify/interceptor.py
"""
Provisions a verifier for one test invocation before the test body runs.
"""
import inspect
from importlib.resources.abc import Traversable
from pathlib import Path

import structlog

from mvnverify.config import VerifierSettings
from mvnverify.exceptions import BuildError, ConfigurationError, ResourceError, VerificationError
from mvnverify.injection import inject_verifier
from mvnverify.resolution import (
    InvocationTarget,
    resolve_debug,
    resolve_goals,
    resolve_project_directory,
    resolve_settings_file,
)
from mvnverify.resources import extract_resources, make_work_dir
from mvnverify.telemetry import StructLogger
from mvnverify.verifier import MavenVerifier, get_verifier_class

log: StructLogger = structlog.get_logger("mvnverify.interceptor")

SETTINGS_DIR_NAME = ".settings"


class MavenVerifierTest:
    """
    Base class for verifier-driven test classes.

    Before every test method the sample project named by `verify_using_project`
    is extracted, the goals named by `execute_goals` are run against it, and
    the verifier is written into each attribute annotated with a compatible
    type::

        @verify_using_project("projects/simple")
        class TestSimple(MavenVerifierTest):
            verifier: MavenVerifier
    """

    @classmethod
    def resource_root(cls) -> Path | Traversable:
        """Base that resource paths are resolved against: the defining module's directory."""
        return Path(inspect.getfile(cls)).resolve().parent


class VerifierInterceptor:
    """Runs the provisioning phase for intercepted test invocations."""

    def __init__(self, settings: VerifierSettings, verifier_class: type[MavenVerifier] | None = None):
        self.settings = settings
        self._verifier_class = verifier_class

    @property
    def verifier_class(self) -> type[MavenVerifier]:
        if self._verifier_class is None:
            self._verifier_class = get_verifier_class(self.settings.verifier)
        return self._verifier_class

    def _resource_base(
        self,
        target: InvocationTarget,
        instance: object | None,
        resource_base: Path | Traversable | None,
    ) -> Path | Traversable:
        if resource_base is not None:
            return resource_base
        if self.settings.resources_root is not None:
            return self.settings.resources_root
        if isinstance(instance, MavenVerifierTest):
            return instance.resource_root()
        return target.default_resource_root()

    def provision(
        self,
        target: InvocationTarget,
        instance: object | None = None,
        resource_base: Path | Traversable | None = None,
    ) -> MavenVerifier:
        """
        Extracts the project, runs its goals and injects the verifier into `instance`.

        Raises:
            ConfigurationError: no project location, or no goals to execute.
            ResourceError: the project or settings file could not be extracted.
            BuildError: the verifier could not be built or a goal failed.
            InjectionError: writing the verifier into `instance` was refused.
        """
        invocation_log = log.bind(test=target.name)

        project_path = resolve_project_directory(target)
        base = self._resource_base(target, instance, resource_base)
        work_dir = make_work_dir(getattr(target.test_function, "__name__", "test"), self.settings.work_dir)
        project_dir = extract_resources(base, project_path, work_dir)
        invocation_log.debug("Project extracted", emoji_key="path", project=project_path, basedir=str(project_dir))

        settings_copy: Path | None = None
        settings_path = resolve_settings_file(target)
        if settings_path is not None:
            settings_dir = work_dir / SETTINGS_DIR_NAME
            try:
                settings_dir.mkdir()
            except OSError as e:
                raise ResourceError(
                    f"Unable to create settings directory '{settings_dir}'", resource_path=settings_path, details=e
                ) from e
            settings_copy = extract_resources(base, settings_path, settings_dir)

        try:
            verifier = self.verifier_class(project_dir, settings_file=settings_copy, executable=self.settings.executable)
        except VerificationError as e:
            invocation_log.error("Unable to construct verifier", error=str(e))
            raise BuildError(
                f"Unable to construct Maven verifier from project '{project_path}'",
                work_dir=project_dir,
                details=e,
            ) from e
        verifier.local_repository = self.settings.local_repository
        verifier.cli_options = list(self.settings.cli_options)
        verifier.debug = self.settings.debug or resolve_debug(target)

        goals = resolve_goals(target)
        if not goals:
            raise ConfigurationError(
                f"Number of goals to execute for '{target.name}' must be greater than 0. "
                "Declare them with execute_goals on the test method or class."
            )

        invocation_log.info("Running goals", emoji_key="build", goals=goals, debug=verifier.debug)
        for goal in goals:
            try:
                verifier.execute_goal(goal)
            except VerificationError as e:
                invocation_log.error("Goal failed, aborting test", goal=goal)
                raise BuildError(
                    f"Unable to execute goal '{goal}' against project '{project_path}'",
                    work_dir=project_dir,
                    details=e,
                ) from e

        if instance is not None:
            inject_verifier(verifier, instance)
        return verifier


# 🔼⚙️
