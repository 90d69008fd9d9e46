from __future__ import annotations

import datetime
import inspect
import numbers
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional


class Kind(str, Enum):
    """Closed set of value kinds understood by the validator and the matcher."""

    INTERFACE_CANDIDATE = "interfaceCandidate"
    SEQUENCE = "sequence"
    CALLABLE = "callable"
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    PATTERN = "pattern"
    BOOLEAN = "boolean"
    UNDEFINED = "undefined"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value


# Kinds that are valid exemplars inside an Interface body
EXEMPLAR_KINDS = frozenset({
    Kind.CALLABLE,
    Kind.NUMBER,
    Kind.TEXT,
    Kind.DATE,
    Kind.PATTERN,
    Kind.BOOLEAN,
})

# Kinds that may appear inside a constant (besides nested sequences/mappings)
CONSTANT_LEAF_KINDS = frozenset({
    Kind.NUMBER,
    Kind.TEXT,
    Kind.DATE,
    Kind.PATTERN,
    Kind.BOOLEAN,
    Kind.UNDEFINED,
})

_BUILTIN_MODULE = "builtins"

# Annotation names that pin down the kind of a declared member
_ANNOTATION_KINDS = {
    Kind.BOOLEAN: {"bool"},
    Kind.NUMBER: {"int", "float", "complex", "Decimal", "Fraction", "Number", "Real", "Integral"},
    Kind.TEXT: {"str"},
    Kind.DATE: {"date", "datetime"},
    Kind.PATTERN: {"Pattern"},
    Kind.SEQUENCE: {"list", "tuple", "List", "Tuple", "Sequence", "MutableSequence"},
    Kind.INTERFACE_CANDIDATE: {"dict", "Dict", "Mapping", "MutableMapping", "OrderedDict", "SimpleNamespace"},
    Kind.CALLABLE: {"Callable", "type", "Type"},
    Kind.UNDEFINED: {"None", "NoneType"},
    Kind.UNSUPPORTED: {"bytes", "bytearray", "set", "frozenset", "FrozenSet", "Set"},
}


def _has_instance_dict(value: Any) -> bool:
    return inspect.getattr_static(value, "__dict__", None) is not None


def _declares_slots(cls: type) -> bool:
    return any(
        "__slots__" in klass.__dict__
        for klass in cls.__mro__
        if klass.__module__ != _BUILTIN_MODULE
    )


def _is_plain_instance(value: Any) -> bool:
    """True for instances of user-defined classes, with a __dict__ or with __slots__."""
    cls = type(value)
    if cls.__module__ == _BUILTIN_MODULE:
        return False
    return _has_instance_dict(value) or _declares_slots(cls)


def classify(value: Any) -> Kind:
    """Map any value to exactly one Kind.

    The order of the checks matters: bool before numbers (bool subclasses
    int), mappings before callables (a callable mapping is still a mapping),
    and callables before plain instances.
    """
    if value is None:
        return Kind.UNDEFINED
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, numbers.Number):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, datetime.date):
        return Kind.DATE
    if isinstance(value, re.Pattern):
        return Kind.PATTERN
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    if isinstance(value, Mapping):
        return Kind.INTERFACE_CANDIDATE
    if callable(value):
        return Kind.CALLABLE
    if _is_plain_instance(value):
        return Kind.INTERFACE_CANDIDATE
    return Kind.UNSUPPORTED


def is_interface_shaped(value: Any) -> bool:
    return classify(value) is Kind.INTERFACE_CANDIDATE


def _annotation_name(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    text = annotation if isinstance(annotation, str) else str(annotation)
    # "typing.List[int]" -> "List", "Optional[str]" -> "Optional"
    return text.split("[", 1)[0].strip().rsplit(".", 1)[-1]


def kind_of_annotation(annotation: Any) -> Optional[Kind]:
    """Map a type annotation (object or string form) to the Kind it declares.

    Returns None when the annotation does not determine a single kind, e.g.
    Optional[...], Any or a user-defined class.
    """
    if annotation is None:
        return Kind.UNDEFINED
    name = _annotation_name(annotation)
    for kind, names in _ANNOTATION_KINDS.items():
        if name in names:
            return kind
    return None
