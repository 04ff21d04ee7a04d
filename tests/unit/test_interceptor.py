#
# tests/unit/test_interceptor.py
#
"""
Tests for the provisioning phase run before each verifier-driven test.
"""

from pathlib import Path
from unittest.mock import MagicMock

import attrs
import pytest

from mvnverify.config import VerifierSettings
from mvnverify.exceptions import (
    BuildError,
    ConfigurationError,
    InjectionError,
    ResourceError,
    VerificationError,
)
from mvnverify.interceptor import MavenVerifierTest, VerifierInterceptor
from mvnverify.markers import debug_build, execute_goals, meta_marker, settings_file, verify_using_project
from mvnverify.resolution import InvocationTarget
from mvnverify.verifier import MavenVerifier

mirror_settings = meta_marker("mirror", settings_file("settings/mirror.xml"))


@verify_using_project("projects/simple")
@execute_goals("clean")
class SimpleProjectCase(MavenVerifierTest):
    verifier: MavenVerifier
    same_verifier: MavenVerifier | None = None

    def test_class_goals(self):
        pass

    @execute_goals("install")
    def test_appended_goals(self):
        pass

    @verify_using_project("projects/missing")
    def test_missing_project(self):
        pass


@verify_using_project("projects/simple")
class NoGoalsCase(MavenVerifierTest):
    def test_nothing_to_run(self):
        pass


class NoLocationCase(MavenVerifierTest):
    @execute_goals("clean")
    def test_without_project(self):
        pass


@debug_build
@mirror_settings
@verify_using_project("projects/simple")
@execute_goals("verify")
class DebugSettingsCase(MavenVerifierTest):
    verifier: MavenVerifier

    def test_with_settings(self):
        pass


@verify_using_project("projects/simple")
@execute_goals("clean")
class ReadOnlyCase(MavenVerifierTest):
    verifier: MavenVerifier

    @property
    def verifier(self) -> MavenVerifier:
        raise AssertionError("never read")

    def test_read_only(self):
        pass


def target_for(cls: type, name: str) -> InvocationTarget:
    return InvocationTarget(test_class=cls, test_function=getattr(cls, name))


@pytest.fixture
def interceptor(settings: VerifierSettings) -> VerifierInterceptor:
    return VerifierInterceptor(settings)


class TestProvision:
    def test_class_goals_run_and_verifier_is_injected(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        instance = SimpleProjectCase()

        verifier = interceptor.provision(target_for(SimpleProjectCase, "test_class_goals"), instance=instance)

        assert fake_mvn.goals() == ["clean"]
        assert instance.verifier is verifier
        assert instance.same_verifier is verifier
        assert (verifier.basedir / "pom.xml").is_file()
        assert verifier.basedir.name == "simple"

    def test_class_goals_precede_method_goals(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        interceptor.provision(target_for(SimpleProjectCase, "test_appended_goals"), instance=SimpleProjectCase())

        assert fake_mvn.goals() == ["clean", "install"]

    def test_failed_goal_aborts_remaining_goals(
        self, interceptor: VerifierInterceptor, fake_mvn, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAKE_MVN_FAIL", "clean")
        instance = SimpleProjectCase()

        with pytest.raises(BuildError) as exc_info:
            interceptor.provision(target_for(SimpleProjectCase, "test_appended_goals"), instance=instance)

        assert fake_mvn.goals() == ["clean"]
        assert isinstance(exc_info.value.__cause__, VerificationError)
        assert not hasattr(instance, "verifier")

    def test_error_originates_from_failing_goal(
        self, interceptor: VerifierInterceptor, fake_mvn, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAKE_MVN_FAIL", "install")

        with pytest.raises(BuildError, match="goal 'install'") as exc_info:
            interceptor.provision(target_for(SimpleProjectCase, "test_appended_goals"), instance=SimpleProjectCase())

        assert fake_mvn.goals() == ["clean", "install"]
        assert exc_info.value.__cause__.goal == "install"
        assert Path(exc_info.value.work_dir).name == "simple"

    def test_missing_location_fails_before_any_build(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        with pytest.raises(ConfigurationError, match="NoLocationCase"):
            interceptor.provision(target_for(NoLocationCase, "test_without_project"), instance=NoLocationCase())

        assert fake_mvn.calls() == []

    def test_empty_goal_list_fails_before_any_build(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        with pytest.raises(ConfigurationError, match="greater than 0"):
            interceptor.provision(target_for(NoGoalsCase, "test_nothing_to_run"), instance=NoGoalsCase())

        assert fake_mvn.calls() == []

    def test_missing_project_resource(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        with pytest.raises(ResourceError, match="projects/missing"):
            interceptor.provision(target_for(SimpleProjectCase, "test_missing_project"), instance=SimpleProjectCase())

        assert fake_mvn.calls() == []

    def test_settings_debug_and_local_repository(
        self, settings: VerifierSettings, fake_mvn, tmp_path: Path
    ) -> None:
        repo = tmp_path / "m2"
        interceptor = VerifierInterceptor(attrs.evolve(settings, local_repository=repo, cli_options=["-Pci"]))

        verifier = interceptor.provision(target_for(DebugSettingsCase, "test_with_settings"), instance=DebugSettingsCase())

        [(_, args)] = fake_mvn.calls()
        assert f"-Dmaven.repo.local={repo}" in args
        assert "-X" in args
        assert "-Pci" in args
        settings_arg = Path(args[args.index("-s") + 1])
        assert settings_arg.name == "mirror.xml"
        assert settings_arg == verifier.settings_file
        assert settings_arg.read_text() == "<settings/>\n"
        assert verifier.debug is True

    def test_session_debug_default_applies_without_markers(self, settings: VerifierSettings, fake_mvn) -> None:
        interceptor = VerifierInterceptor(attrs.evolve(settings, debug=True))

        verifier = interceptor.provision(target_for(SimpleProjectCase, "test_class_goals"), instance=SimpleProjectCase())

        assert verifier.debug is True
        assert "-X" in fake_mvn.calls()[0][1]

    def test_every_invocation_gets_its_own_verifier(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        target = target_for(SimpleProjectCase, "test_class_goals")

        first = interceptor.provision(target, instance=SimpleProjectCase())
        second = interceptor.provision(target, instance=SimpleProjectCase())

        assert first is not second
        assert first.basedir != second.basedir
        assert [cwd for cwd, _ in fake_mvn.calls()] == [str(first.basedir), str(second.basedir)]

    def test_provision_without_instance_returns_verifier(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        verifier = interceptor.provision(target_for(SimpleProjectCase, "test_class_goals"))

        assert isinstance(verifier, MavenVerifier)
        assert verifier.executed_goals == ["clean"]

    def test_construction_failure_is_wrapped(self, settings: VerifierSettings) -> None:
        verifier_class = MagicMock(side_effect=VerificationError("cannot read project"))
        interceptor = VerifierInterceptor(settings, verifier_class=verifier_class)

        with pytest.raises(BuildError, match="Unable to construct Maven verifier") as exc_info:
            interceptor.provision(target_for(SimpleProjectCase, "test_class_goals"), instance=SimpleProjectCase())

        assert isinstance(exc_info.value.__cause__, VerificationError)

    def test_injection_error_is_not_wrapped(self, interceptor: VerifierInterceptor, fake_mvn) -> None:
        with pytest.raises(InjectionError, match="field verifier"):
            interceptor.provision(target_for(ReadOnlyCase, "test_read_only"), instance=ReadOnlyCase())

        assert fake_mvn.goals() == ["clean"]


class TestResourceBase:
    def test_explicit_base_wins(self, settings: VerifierSettings, fake_mvn, tmp_path: Path) -> None:
        other = tmp_path / "other-resources" / "projects" / "simple"
        other.mkdir(parents=True)
        (other / "pom.xml").write_text("<project>other</project>")
        interceptor = VerifierInterceptor(settings)

        verifier = interceptor.provision(
            target_for(SimpleProjectCase, "test_class_goals"),
            instance=SimpleProjectCase(),
            resource_base=tmp_path / "other-resources",
        )

        assert (verifier.basedir / "pom.xml").read_text() == "<project>other</project>"

    def test_instance_resource_root_without_configured_root(
        self, settings: VerifierSettings, resources_dir: Path, fake_mvn
    ) -> None:
        class LocalCase(SimpleProjectCase):
            @classmethod
            def resource_root(cls) -> Path:
                return resources_dir

        interceptor = VerifierInterceptor(attrs.evolve(settings, resources_root=None))

        verifier = interceptor.provision(target_for(LocalCase, "test_class_goals"), instance=LocalCase())

        assert (verifier.basedir / "pom.xml").is_file()

    def test_default_resource_root_is_module_directory(self) -> None:
        assert SimpleProjectCase.resource_root() == Path(__file__).resolve().parent

# 🔼⚙️
