# src/mvnverify/resources.py

"""
Extraction of bundled sample projects and settings files into working directories.
"""

import re
import shutil
import tempfile
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath

import structlog

from mvnverify.exceptions import ResourceError

log = structlog.get_logger("mvnverify.resources")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def _locate(base: Path | Traversable, resource_path: str) -> Path | Traversable:
    parts = [part for part in PurePosixPath(resource_path.replace("\\", "/")).parts if part not in ("/", ".")]
    if not parts or ".." in parts:
        raise ResourceError("Invalid resource path", resource_path=resource_path)
    return base.joinpath(*parts)


def _copy_traversable(source: Traversable, target: Path) -> None:
    """Copies a traversable that is not on the filesystem, such as a `zipfile.Path`."""
    if source.is_dir():
        target.mkdir()
        for child in source.iterdir():
            _copy_traversable(child, target / child.name)
    else:
        if target.exists():
            raise FileExistsError(str(target))
        target.write_bytes(source.read_bytes())


def extract_resources(base: Path | Traversable, resource_path: str, destination: Path) -> Path:
    """
    Copies a bundled file or directory below `base` into `destination`.

    Args:
        base: Directory (or importlib.resources traversable) the resource path is relative to.
        resource_path: Slash-separated path of the resource; a leading slash is ignored.
        destination: Existing directory receiving the copy.

    Returns:
        Path of the extracted copy, `destination / <resource name>`.
    """
    extract_log = log.bind(resource=resource_path, destination=str(destination))
    source = _locate(base, resource_path)

    if not source.is_file() and not source.is_dir():
        extract_log.error("Bundled resource not found", base=str(base))
        raise ResourceError(
            f"Unable to extract resources: '{resource_path}' not found below '{base}'",
            resource_path=resource_path,
            details=FileNotFoundError(str(source)),
        )

    target = destination / source.name
    try:
        if not isinstance(source, Path):
            _copy_traversable(source, target)
        elif source.is_dir():
            shutil.copytree(source, target)
        else:
            shutil.copy2(source, target)
    except OSError as e:
        extract_log.error("Failed to extract resource", error=str(e))
        raise ResourceError(
            f"Unable to extract resources into '{destination}'",
            resource_path=resource_path,
            details=e,
        ) from e

    extract_log.debug("Resource extracted", emoji_key="extract", extracted=str(target))
    return target


def make_work_dir(prefix: str, root: Path | None = None) -> Path:
    """Creates a fresh, uniquely named working directory for one test invocation."""
    safe_prefix = _UNSAFE_CHARS.sub("_", prefix).strip("_")[:60] or "mvnverify"
    try:
        if root is not None:
            root.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix=f"{safe_prefix}-", dir=root))
    except OSError as e:
        raise ResourceError(f"Unable to create working directory below '{root or tempfile.gettempdir()}'", details=e) from e


# 🔼⚙️
