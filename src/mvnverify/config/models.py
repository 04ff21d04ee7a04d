#
# config/models.py
#
"""
Attrs-based settings model shared by every verifier-driven test in a session.
"""

import logging
from pathlib import Path
from typing import Any

from attrs import define, field


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_non_empty(inst: Any, attr: Any, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Field '{attr.name}' must be a non-empty string, got {value!r}")


def _to_optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(value).expanduser()


@define(frozen=True, slots=True)
class VerifierSettings:
    """
    Process-wide verifier configuration, loaded once per test session.

    `debug` is the session default; it is OR-ed with the debug markers of each
    test. `resources_root` replaces the test module's directory as the base for
    bundled project lookups when set.
    """
    local_repository: Path | None = field(default=None, converter=_to_optional_path)
    debug: bool = field(default=False)
    executable: str = field(default="mvn", validator=_validate_non_empty)
    verifier: str = field(default="maven", validator=_validate_non_empty)
    cli_options: tuple[str, ...] = field(default=(), converter=tuple)
    resources_root: Path | None = field(default=None, converter=_to_optional_path)
    work_dir: Path | None = field(default=None, converter=_to_optional_path)
    log_level: str = field(default="WARNING", validator=_validate_log_level)
    json_logs: bool = field(default=False)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


# 🔼⚙️
