# src/mvnverify/plugin.py

"""
pytest integration: options, session settings and the interception hook.

Provisioning runs inside `pytest_pyfunc_call`, so a failed build is reported
as a failure of the test itself, before its body executes.
"""

import logging

import pytest
import structlog

from mvnverify.config import VerifierSettings, load_settings
from mvnverify.exceptions import ConfigurationError
from mvnverify.interceptor import MavenVerifierTest, VerifierInterceptor
from mvnverify.resolution import InvocationTarget
from mvnverify.telemetry import StructLogger, setup_logging
from mvnverify.telemetry.logger import BASE_LOGGER_NAME
from mvnverify.verifier import MavenVerifier

log: StructLogger = structlog.get_logger("mvnverify.plugin")

VERIFIER_FIXTURE = "maven_verifier"

settings_key = pytest.StashKey[VerifierSettings]()
interceptor_key = pytest.StashKey[VerifierInterceptor]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mvnverify", "Maven verifier-driven tests")
    group.addoption(
        "--maven-local-repo",
        dest="maven_local_repo",
        default=None,
        metavar="PATH",
        help="Local Maven repository passed to every build (env MVNVERIFY_LOCAL_REPO).",
    )
    group.addoption(
        "--maven-debug",
        dest="maven_debug",
        action="store_true",
        default=None,
        help="Run every build with Maven debug output (-X).",
    )
    group.addoption(
        "--maven-executable",
        dest="maven_executable",
        default=None,
        help="Maven executable to run (default: mvn).",
    )
    group.addoption(
        "--maven-verifier",
        dest="maven_verifier",
        default=None,
        help="Verifier implementation: maven, maven-wrapper (default: maven).",
    )
    group.addoption(
        "--maven-opt",
        dest="maven_cli_options",
        action="append",
        default=None,
        metavar="OPTION",
        help="Extra Maven command line option, repeatable. Use the --maven-opt=-Pprofile form.",
    )
    group.addoption(
        "--maven-work-dir",
        dest="maven_work_dir",
        default=None,
        metavar="PATH",
        help="Directory receiving the extracted projects (default: system temp dir).",
    )
    group.addoption(
        "--maven-log-level",
        dest="maven_log_level",
        default=None,
        choices=[name for name in logging._nameToLevel if name != "NOTSET"],
        type=str.upper,
        help="Log level of mvnverify itself (default: WARNING).",
    )
    group.addoption(
        "--maven-json-logs",
        dest="maven_json_logs",
        action="store_true",
        default=None,
        help="Render mvnverify logs as JSON.",
    )

    parser.addini("maven_local_repo", "Local Maven repository passed to every build.")
    parser.addini("maven_debug", "Run every build with Maven debug output.", type="bool")
    parser.addini("maven_executable", "Maven executable to run.")
    parser.addini("maven_verifier", "Verifier implementation: maven, maven-wrapper.")
    parser.addini("maven_cli_options", "Extra Maven command line options, one per line.", type="linelist")
    parser.addini("maven_resources_root", "Directory bundled projects are resolved against.")
    parser.addini("maven_work_dir", "Directory receiving the extracted projects.")


def pytest_configure(config: pytest.Config) -> None:
    owns_logging = not structlog.is_configured()
    if owns_logging:
        # Only warnings and errors get through until the settings are known.
        setup_logging()

    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e

    if owns_logging:
        setup_logging(level=settings.numeric_log_level, json_logs=settings.json_logs)
    else:
        logging.getLogger(BASE_LOGGER_NAME).setLevel(settings.numeric_log_level)
    log.debug(
        "Verifier settings loaded",
        local_repository=str(settings.local_repository) if settings.local_repository else None,
        executable=settings.executable,
        verifier=settings.verifier,
        debug=settings.debug,
    )

    config.stash[settings_key] = settings
    config.stash[interceptor_key] = VerifierInterceptor(settings)


def pytest_report_header(config: pytest.Config) -> list[str]:
    settings = config.stash.get(settings_key, None)
    if settings is None:
        return []
    return [
        f"mvnverify: verifier={settings.verifier} executable={settings.executable} "
        f"local-repo={settings.local_repository or '-'} debug={settings.debug}"
    ]


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> None:
    """Provisions the verifier, then lets the default implementation call the test."""
    wants_fixture = VERIFIER_FIXTURE in pyfuncitem.funcargs
    instance = pyfuncitem.instance
    if not wants_fixture and not isinstance(instance, MavenVerifierTest):
        return None

    interceptor = pyfuncitem.config.stash[interceptor_key]
    target = InvocationTarget(test_class=pyfuncitem.cls, test_function=pyfuncitem.function)
    log.debug("Intercepted test invocation", test=pyfuncitem.nodeid)
    verifier = interceptor.provision(target, instance=instance)
    if wants_fixture:
        pyfuncitem.funcargs[VERIFIER_FIXTURE] = verifier
    return None


@pytest.fixture(scope="session")
def maven_settings(pytestconfig: pytest.Config) -> VerifierSettings:
    """Verifier settings of the running session."""
    return pytestconfig.stash[settings_key]


@pytest.fixture
def maven_verifier() -> MavenVerifier | None:
    """
    The verifier provisioned for the requesting test.

    The value is only filled in when the test function itself is called, after
    the goals have run; fixtures depending on it see None.
    """
    return None


# 🔼⚙️
