# src/mvnverify/resolution.py

"""
Resolution of verifier metadata for a single test invocation.

Each option combines its class-level and method-level declarations under its
own rule:

    project directory   method overrides class, required
    goals               class goals, then method goals
    settings file       class direct > method direct > class meta > method meta
    debug               OR of every declaration
"""

import inspect
from collections.abc import Callable
from pathlib import Path
from typing import Any

from attrs import define

from mvnverify.exceptions import ConfigurationError
from mvnverify.markers import (
    Annotations,
    DebugBuild,
    ExecuteGoals,
    SettingsFile,
    VerifyUsingProject,
    annotations_of,
)


@define(frozen=True, slots=True)
class InvocationTarget:
    """The test function being invoked and the class it was collected from, if any."""
    test_class: type | None
    test_function: Callable[..., Any]

    @property
    def name(self) -> str:
        return getattr(self.test_function, "__qualname__", repr(self.test_function))

    @property
    def declaring_class(self) -> type | None:
        """The first class in the MRO whose body defines the test function."""
        if self.test_class is None:
            return None
        func_name = getattr(self.test_function, "__name__", None)
        for klass in inspect.getmro(self.test_class):
            candidate = vars(klass).get(func_name)
            if candidate is None:
                continue
            if inspect.unwrap(getattr(candidate, "__func__", candidate)) is inspect.unwrap(self.test_function):
                return klass
        return self.test_class

    @property
    def class_annotations(self) -> Annotations:
        return annotations_of(self.declaring_class)

    @property
    def method_annotations(self) -> Annotations:
        return annotations_of(self.test_function)

    def default_resource_root(self) -> Path:
        """Directory of the module that defines the test."""
        owner = self.declaring_class or self.test_function
        return Path(inspect.getfile(owner)).resolve().parent


def resolve_project_directory(target: InvocationTarget) -> str:
    on_method = target.method_annotations.get(VerifyUsingProject)
    if on_method is not None:
        return on_method.path

    on_class = target.class_annotations.get(VerifyUsingProject)
    if on_class is None:
        declaring = target.declaring_class
        raise ConfigurationError(
            f"No verify_using_project marker found on test method '{target.name}' or test class "
            f"'{declaring.__qualname__ if declaring else None}'. "
            "Don't know where to take the project definition from."
        )
    return on_class.path


def resolve_goals(target: InvocationTarget) -> list[str]:
    goals: list[str] = []
    on_class = target.class_annotations.get(ExecuteGoals)
    if on_class is not None:
        goals.extend(on_class.goals)
    on_method = target.method_annotations.get(ExecuteGoals)
    if on_method is not None:
        goals.extend(on_method.goals)
    return goals


def resolve_settings_file(target: InvocationTarget) -> str | None:
    class_annotations = target.class_annotations
    method_annotations = target.method_annotations

    for direct in (class_annotations.get(SettingsFile), method_annotations.get(SettingsFile)):
        if direct is not None:
            return direct.path

    for meta in (class_annotations.meta_values(SettingsFile), method_annotations.meta_values(SettingsFile)):
        if meta:
            return meta[0].path
    return None


def resolve_debug(target: InvocationTarget) -> bool:
    return any(
        annotations.get(DebugBuild) is not None or bool(annotations.meta_values(DebugBuild))
        for annotations in (target.class_annotations, target.method_annotations)
    )


# 🔼⚙️
