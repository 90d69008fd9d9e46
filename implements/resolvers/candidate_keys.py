# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Member discovery for candidates: plain mappings, classes, instances and functions.

A candidate is described by an ordered sequence of member names plus a
name -> value lookup. Names starting with an underscore are private and never
part of a candidate's capability.

Lookups are static: properties, __getattr__ and other descriptors of the
candidate are never executed. A member that only exists as such a descriptor
is returned as a DeclaredMember whose kind comes from its declaration.
"""

import inspect
import types
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..models.kinds import Kind, classify, kind_of_annotation

_BUILTIN_MODULE = "builtins"
_MISSING = object()


class DeclaredMember:
    """A member that is declared by a descriptor but whose value is not read.

    kind is the Kind its declaration pins down, or None when it cannot be
    determined without running the candidate's code.
    """

    __slots__ = ("name", "kind")

    def __init__(self, name: str, kind: Optional[Kind]):
        self.name = name
        self.kind = kind

    def __repr__(self) -> str:
        return f"DeclaredMember({self.name!r}, {self.kind})"


def _is_public(name: Any) -> bool:
    return not (isinstance(name, str) and name.startswith("_"))


def _append_unique(names: List[Any], new_names) -> List[Any]:
    for name in new_names:
        if name not in names:
            names.append(name)
    return names


def _is_user_instance(value: Any) -> bool:
    return not isinstance(value, type) and type(value).__module__ != _BUILTIN_MODULE


def _slot_values(value: Any) -> Dict[str, Any]:
    """Values of the assigned slots of an instance; unset slots are skipped."""
    values: Dict[str, Any] = {}
    for klass in type(value).__mro__:
        if klass.__module__ == _BUILTIN_MODULE:
            continue
        for name, attribute in klass.__dict__.items():
            if name in values or not _is_public(name):
                continue
            if not isinstance(attribute, types.MemberDescriptorType):
                continue
            try:
                values[name] = attribute.__get__(value, type(value))
            except AttributeError:
                continue
    return values


def _instance_attributes(value: Any) -> Dict[str, Any]:
    try:
        attributes = object.__getattribute__(value, "__dict__")
    except AttributeError:
        attributes = {}
    if not isinstance(attributes, Mapping):
        attributes = {}
    members = {name: attr for name, attr in attributes.items() if _is_public(name)}
    if not isinstance(value, type):
        for name, attr in _slot_values(value).items():
            members.setdefault(name, attr)
    return members


def _is_descriptor(attribute: Any) -> bool:
    return any("__get__" in klass.__dict__ for klass in type(attribute).__mro__)


def _property_kind(prop: property) -> Optional[Kind]:
    try:
        annotations = getattr(prop.fget, "__annotations__", None) or {}
    except NameError:
        # deferred annotation referring to an undefined name
        return None
    if "return" not in annotations:
        return None
    return kind_of_annotation(annotations["return"])


def _resolve_static(value: Any, name: str, attribute: Any) -> Any:
    """Turn a raw class-level attribute into the member a candidate exposes."""
    if isinstance(attribute, (staticmethod, classmethod)):
        return attribute.__func__
    if isinstance(attribute, property):
        return DeclaredMember(name, _property_kind(attribute))
    if isinstance(attribute, types.MemberDescriptorType):
        if isinstance(value, type):
            return DeclaredMember(name, None)
        try:
            return attribute.__get__(value, type(value))
        except AttributeError:
            # unset slot
            return None
    if not callable(attribute) and _is_descriptor(attribute):
        return DeclaredMember(name, None)
    return attribute


def template_names(cls: type) -> List[str]:
    """Get the member template of a class.

    The template is every public name defined in a class body along the MRO,
    most derived first, including slot names. Builtin bases (object, dict, ...)
    do not contribute. Attributes that __init__ assigns on instances are not
    part of it.

    Args:
        cls: The class to inspect

    Returns:
        Ordered, duplicate-free list of member names
    """
    names: List[str] = []
    for klass in cls.__mro__:
        if klass.__module__ == _BUILTIN_MODULE:
            continue
        _append_unique(names, (name for name in vars(klass) if _is_public(name)))
    return names


def own_members(value: Any) -> Dict[Any, Any]:
    """Get the own name/value pairs of an interface-shaped value."""
    if isinstance(value, Mapping):
        return dict(value.items())
    return _instance_attributes(value)


def candidate_keys(value: Any) -> Optional[List[Any]]:
    """Retrieve the member names a candidate exposes.

    - mapping: its own keys
    - class: its member template (see template_names)
    - instance of a user-defined class: its own attributes plus the template
      of its class
    - function or other callable: its own assigned attributes

    Args:
        value: The candidate

    Returns:
        List of member names, or None for values without a member concept
    """
    if isinstance(value, Mapping):
        return list(value.keys())
    if isinstance(value, type):
        return template_names(value)
    if _is_user_instance(value):
        names = list(_instance_attributes(value).keys())
        return _append_unique(names, template_names(type(value)))
    if callable(value):
        return list(_instance_attributes(value).keys())
    return None


def candidate_member(value: Any, name: Any) -> Any:
    """Look up a member of a candidate without running its code.

    Classes are looked up through their MRO, so a method defined in the class
    body is visible without instantiation. Properties and other descriptors
    come back as DeclaredMember. Missing members yield None.
    """
    if isinstance(value, Mapping):
        return value.get(name)
    if not isinstance(name, str):
        return None
    attribute = inspect.getattr_static(value, name, _MISSING)
    if attribute is _MISSING:
        return None
    return _resolve_static(value, name, attribute)


def member_kind(member: Any) -> Optional[Kind]:
    """Kind of a value returned by candidate_member; None if undeterminable."""
    if isinstance(member, DeclaredMember):
        return member.kind
    return classify(member)
