# src/mvnverify/injection.py

"""
Injection of a provisioned verifier into annotated attributes of a test instance.
"""

import builtins
import inspect
import sys
import types
import typing
from typing import Annotated, Any, ClassVar, Union

import structlog

from mvnverify.exceptions import InjectionError

log = structlog.get_logger("mvnverify.injection")


def _lookup_name(annotation: Any, namespace: dict[str, Any]) -> Any:
    """Resolves a plain (optionally dotted) name annotation; anything else yields None."""
    if not isinstance(annotation, str):
        return annotation
    head, *rest = annotation.strip().split(".")
    value = namespace.get(head, getattr(builtins, head, None))
    for part in rest:
        value = getattr(value, part, None)
    return value


def _class_annotations(klass: type) -> dict[str, Any]:
    """Annotations declared on `klass` itself, with string annotations evaluated where possible."""
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        log.debug("Unresolvable annotations, resolving names one by one", cls=klass.__qualname__, error=str(e))
    module = sys.modules.get(klass.__module__)
    namespace = {**(vars(module) if module is not None else {}), **vars(klass)}
    return {name: _lookup_name(annotation, namespace) for name, annotation in inspect.get_annotations(klass).items()}


def _accepts(declared: Any, verifier_type: type) -> bool:
    """True if an attribute declared as `declared` may hold a `verifier_type` instance."""
    origin = typing.get_origin(declared)
    if origin is ClassVar:
        return False
    if origin is Annotated:
        return _accepts(typing.get_args(declared)[0], verifier_type)
    if origin is Union or origin is types.UnionType:
        return any(_accepts(arg, verifier_type) for arg in typing.get_args(declared))
    if isinstance(declared, type):
        # Nominal check: the declared type must be the verifier type or one of its bases.
        return declared in inspect.getmro(verifier_type)
    return False


def find_injectable_fields(verifier_type: type, instance: object) -> list[str]:
    """
    Names of annotated attributes, across the instance's MRO, able to hold `verifier_type`.

    Only the most derived declaration of a name counts, so a subclass
    redeclaring an inherited field with another type shadows the base.
    """
    found: list[str] = []
    seen: set[str] = set()
    for klass in inspect.getmro(type(instance)):
        if klass is object:
            continue
        for name, annotation in _class_annotations(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if _accepts(annotation, verifier_type):
                found.append(name)
    return found


def inject_verifier(verifier: object, instance: object) -> list[str]:
    """
    Writes `verifier` into every compatible attribute of `instance`.

    Custom `__setattr__` implementations (frozen classes included) are bypassed.
    A refused write is fatal and raised as InjectionError.

    Returns:
        The names of the attributes that received the verifier.
    """
    fields = find_injectable_fields(type(verifier), instance)
    for field_name in fields:
        try:
            object.__setattr__(instance, field_name, verifier)
        except (AttributeError, TypeError) as e:
            raise InjectionError(
                f"Unable to inject verifier instance into field {field_name} of {instance!r}",
                field_name=field_name,
                instance=instance,
                details=e,
            ) from e
    if fields:
        log.debug("Verifier injected", emoji_key="inject", fields=fields, instance=type(instance).__qualname__)
    return fields


# 🔼⚙️
