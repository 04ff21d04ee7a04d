#
# config/loader.py
#
"""
Builds VerifierSettings from a pytest configuration.

Precedence for every value: command line option > MVNVERIFY_* environment
variable > ini file key > model default.
"""

import os
import shlex
from pathlib import Path
from typing import Any

import pytest
import structlog

from mvnverify.config.models import VerifierSettings
from mvnverify.exceptions import ConfigurationError

log = structlog.get_logger("mvnverify.config.loader")

ENV_PREFIX = "MVNVERIFY_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _env(name: str) -> str | None:
    return os.environ.get(f"{ENV_PREFIX}{name}")


def _env_bool(name: str) -> bool | None:
    raw = _env(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable {ENV_PREFIX}{name} must be a boolean, got '{raw}'.")


def _first(*candidates: Any) -> Any:
    """Returns the first candidate that is neither None nor an empty string."""
    for candidate in candidates:
        if candidate is not None and candidate != "":
            return candidate
    return None


def _rooted(value: str | None, rootpath: Path) -> Path | None:
    if not value:
        return None
    path = Path(value).expanduser()
    return path if path.is_absolute() else rootpath / path


def load_settings(config: pytest.Config) -> VerifierSettings:
    """Resolves the session-wide verifier settings."""
    rootpath = config.rootpath

    cli_options: list[str] = []
    option_values = config.getoption("maven_cli_options")
    if option_values:
        cli_options = list(option_values)
    elif _env("CLI_OPTIONS"):
        cli_options = shlex.split(_env("CLI_OPTIONS") or "")
    else:
        cli_options = list(config.getini("maven_cli_options"))

    debug = _first(config.getoption("maven_debug"), _env_bool("DEBUG"), config.getini("maven_debug"))

    values: dict[str, Any] = {
        "local_repository": _rooted(
            _first(config.getoption("maven_local_repo"), _env("LOCAL_REPO"), config.getini("maven_local_repo")),
            rootpath,
        ),
        "debug": bool(debug),
        "cli_options": cli_options,
        "resources_root": _rooted(
            _first(_env("RESOURCES_ROOT"), config.getini("maven_resources_root")), rootpath
        ),
        "work_dir": _rooted(
            _first(config.getoption("maven_work_dir"), _env("WORK_DIR"), config.getini("maven_work_dir")),
            rootpath,
        ),
        "json_logs": bool(_first(config.getoption("maven_json_logs"), _env_bool("JSON_LOGS"))),
    }
    for key, option, env_name, ini_name in (
        ("executable", "maven_executable", "EXECUTABLE", "maven_executable"),
        ("verifier", "maven_verifier", "VERIFIER", "maven_verifier"),
        ("log_level", "maven_log_level", "LOG_LEVEL", None),
    ):
        value = _first(
            config.getoption(option),
            _env(env_name),
            config.getini(ini_name) if ini_name else None,
        )
        if value is not None:
            values[key] = value

    try:
        return VerifierSettings(**values)
    except (TypeError, ValueError) as e:
        log.error("Invalid verifier settings", error=str(e))
        raise ConfigurationError(f"Invalid mvnverify settings: {e}", details=e) from e


# 🔼⚙️
