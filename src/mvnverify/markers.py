# src/mvnverify/markers.py

"""
Declarative metadata for verifier-driven tests.

Markers are plain decorators usable on test classes and test functions::

    @verify_using_project("projects/simple")
    @execute_goals("clean")
    class TestSimpleProject(MavenVerifierTest):
        verifier: MavenVerifier

        @execute_goals("install")
        def test_artifact_installed(self):
            self.verifier.verify_error_free_log()

Settings-file and debug markers may also be bundled into a reusable
composite with `meta_marker`; values reached that way rank below directly
applied markers during resolution.
"""

from typing import Any, TypeVar

from attrs import define, field

T = TypeVar("T")

METADATA_ATTR = "__mvnverify_metadata__"


# --- Metadata values ---
@define(frozen=True, slots=True)
class ExecuteGoals:
    """Ordered Maven goals to run before the test body."""
    goals: tuple[str, ...] = field(converter=tuple)


@define(frozen=True, slots=True)
class VerifyUsingProject:
    """Resource path of the sample project the test is verified against."""
    path: str


@define(frozen=True, slots=True)
class SettingsFile:
    """Resource path of an alternate Maven settings.xml."""
    path: str


@define(frozen=True, slots=True)
class DebugBuild:
    """Presence turns on Maven debug output."""


Metadata = ExecuteGoals | VerifyUsingProject | SettingsFile | DebugBuild

META_COMPOSABLE = (SettingsFile, DebugBuild)


@define(slots=True)
class Annotations:
    """Metadata attached directly to one class or function."""
    direct: dict[type, Metadata] = field(factory=dict)
    meta: list["MetaMarker"] = field(factory=list)

    def get(self, kind: type[T]) -> T | None:
        return self.direct.get(kind)  # type: ignore[return-value]

    def meta_values(self, kind: type[T]) -> list[T]:
        """Values of `kind` carried by attached meta markers, in attachment order."""
        return [value for marker in self.meta for value in marker.values(kind)]


_EMPTY = Annotations()


def annotations_of(target: Any) -> Annotations:
    """Returns the metadata declared on `target` itself, ignoring inheritance."""
    if target is None:
        return _EMPTY
    found = vars(target).get(METADATA_ATTR) if hasattr(target, "__dict__") else None
    return found if isinstance(found, Annotations) else _EMPTY


def _own_annotations(target: Any) -> Annotations:
    existing = vars(target).get(METADATA_ATTR)
    if isinstance(existing, Annotations):
        return existing
    created = Annotations()
    setattr(target, METADATA_ATTR, created)
    return created


# --- Markers ---
@define(frozen=True, slots=True)
class Marker:
    """Decorator attaching one metadata value to a class or function."""
    value: Metadata

    def __call__(self, target: T) -> T:
        _own_annotations(target).direct[type(self.value)] = self.value
        return target


@define(frozen=True, slots=True)
class MetaMarker:
    """A named, reusable bundle of settings-file and debug markers."""
    name: str
    markers: tuple[Marker, ...] = field(converter=tuple)

    def values(self, kind: type[T]) -> list[T]:
        return [marker.value for marker in self.markers if isinstance(marker.value, kind)]

    def __call__(self, target: T) -> T:
        _own_annotations(target).meta.append(self)
        return target


def execute_goals(*goals: str) -> Marker:
    return Marker(ExecuteGoals(goals))


def verify_using_project(path: str) -> Marker:
    return Marker(VerifyUsingProject(path))


def settings_file(path: str) -> Marker:
    return Marker(SettingsFile(path))


debug_build = Marker(DebugBuild())


def meta_marker(name: str, *markers: Marker) -> MetaMarker:
    """
    Bundles settings-file and/or debug markers under a reusable name.

    Raises:
        TypeError: if a bundled marker is not a settings-file or debug marker.
    """
    for marker in markers:
        if not isinstance(marker, Marker) or not isinstance(marker.value, META_COMPOSABLE):
            raise TypeError(
                f"meta_marker '{name}' can only bundle settings_file and debug_build markers, got {marker!r}"
            )
    return MetaMarker(name, markers)


# 🔼⚙️
