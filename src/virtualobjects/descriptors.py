"""Property descriptors and their normalization.

A property descriptor describes one property of an object. It comes in three shapes:

* a *data* descriptor carries ``value`` and ``writable``,
* an *accessor* descriptor carries ``get`` and ``set`` functions,
* a *generic* descriptor carries neither.

All three may carry ``enumerable`` and ``configurable``.

Primitive operations and callers supply *partial* descriptors: any mapping that may
omit attributes. :py:func:`normalize` validates a partial descriptor and completes it
with the default attribute values, producing an immutable :py:class:`PropertyDescriptor`.
Attributes that are not part of the standard set are carried over to the completed
descriptor as-is, so that handlers may annotate properties with their own metadata.

Absence is represented with ``None``: a missing own property, a missing getter or
setter, an absent value. Whether an attribute was *supplied* is a matter of key
presence in the partial descriptor, so ``{"get": None}`` is an accessor descriptor
without a getter while ``{}`` is a generic descriptor.
"""
from __future__ import annotations

__all__ = (
    "complete_property_descriptor",
    "DescriptorKind",
    "is_accessor_descriptor",
    "is_data_descriptor",
    "is_generic_descriptor",
    "normalize",
    "PropertyDescriptor",
    "to_property_descriptor",
)

import collections.abc
import enum
import logging
import typing

import typing_extensions

from virtualobjects._types import accessor_attribute_names
from virtualobjects._types import Attributes
from virtualobjects._types import data_attribute_names
from virtualobjects._types import standard_attribute_names
from virtualobjects.exceptions import ValidationError

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class DescriptorKind(enum.Enum):
    DATA = "data"
    ACCESSOR = "accessor"
    GENERIC = "generic"


class DescriptorDict(typing.TypedDict, total=False):
    """Standard attributes of a validated partial descriptor.

    This class definition is only for illustration and static type checking. It is a
    plain ``dict`` at run time.
    """

    value: typing.Any
    writable: bool
    get: typing.Optional[typing.Callable]
    set: typing.Optional[typing.Callable]
    enumerable: bool
    configurable: bool


def is_standard_attribute(name) -> bool:
    return name in standard_attribute_names


def is_accessor_descriptor(desc: typing.Optional[Attributes]) -> bool:
    if desc is None:
        return False
    return any(name in desc for name in accessor_attribute_names)


def is_data_descriptor(desc: typing.Optional[Attributes]) -> bool:
    if desc is None:
        return False
    return any(name in desc for name in data_attribute_names)


def is_generic_descriptor(desc: typing.Optional[Attributes]) -> bool:
    if desc is None:
        return False
    return not is_accessor_descriptor(desc) and not is_data_descriptor(desc)


def _check_function(attributes: Attributes, name: str):
    function = attributes[name]
    if function is not None and not callable(function):
        raise ValidationError(
            f"property descriptor '{name}' attribute must be callable or None, given: {repr(function)}"
        )
    return function


def to_property_descriptor(attributes: Attributes) -> DescriptorDict:
    """Validate a partial descriptor.

    Returns a new ``dict`` holding only the standard attributes that *attributes*
    supplies, with ``enumerable``, ``configurable`` and ``writable`` coerced to `bool`.

    Raises:
        ValidationError: if *attributes* is not a mapping, if *get* or *set* is neither
            None nor callable, or if data and accessor attributes are mixed.
    """
    if not isinstance(attributes, collections.abc.Mapping):
        raise ValidationError(f"property descriptor should be a mapping, given: {repr(attributes)}")
    desc: DescriptorDict = {}
    if "enumerable" in attributes:
        desc["enumerable"] = bool(attributes["enumerable"])
    if "configurable" in attributes:
        desc["configurable"] = bool(attributes["configurable"])
    if "value" in attributes:
        desc["value"] = attributes["value"]
    if "writable" in attributes:
        desc["writable"] = bool(attributes["writable"])
    if "get" in attributes:
        desc["get"] = _check_function(attributes, "get")
    if "set" in attributes:
        desc["set"] = _check_function(attributes, "set")
    if is_accessor_descriptor(desc) and is_data_descriptor(desc):
        raise ValidationError(
            f"property descriptor cannot be both a data and an accessor descriptor: {repr(attributes)}"
        )
    return desc


class PropertyDescriptor(collections.abc.Mapping):
    """A completed property descriptor.

    Holds every standard attribute of its kind. Instances are immutable mappings from
    attribute name to value, and compare equal to any mapping with the same items,
    so a completed descriptor can be handed back to any operation that accepts a
    partial one.

    The accessor functions are exposed as :py:attr:`getter` and :py:attr:`setter`,
    since `get` is already part of the mapping interface.
    """

    __slots__ = ("_attributes",)

    def __init__(self, attributes: Attributes):
        self._attributes = dict(attributes)

    def __getitem__(self, name):
        return self._attributes[name]

    def __iter__(self):
        return iter(self._attributes)

    def __len__(self):
        return len(self._attributes)

    def __repr__(self):
        return f"{self.__class__.__name__}({repr(self._attributes)})"

    @property
    def kind(self) -> DescriptorKind:
        if is_accessor_descriptor(self):
            return DescriptorKind.ACCESSOR
        if is_data_descriptor(self):
            return DescriptorKind.DATA
        return DescriptorKind.GENERIC

    def is_accessor(self) -> bool:
        return self.kind is DescriptorKind.ACCESSOR

    def is_data(self) -> bool:
        return self.kind is DescriptorKind.DATA

    def is_generic(self) -> bool:
        return self.kind is DescriptorKind.GENERIC

    @property
    def value(self):
        return self._attributes.get("value")

    @property
    def writable(self) -> typing.Optional[bool]:
        """None for accessor and generic descriptors."""
        return self._attributes.get("writable")

    @property
    def getter(self) -> typing.Optional[typing.Callable]:
        return self._attributes.get("get")

    @property
    def setter(self) -> typing.Optional[typing.Callable]:
        return self._attributes.get("set")

    @property
    def enumerable(self) -> bool:
        return self._attributes["enumerable"]

    @property
    def configurable(self) -> bool:
        return self._attributes["configurable"]

    @property
    def extras(self) -> typing.Dict[typing.Any, typing.Any]:
        """Non-standard attributes carried by this descriptor."""
        return {name: value for name, value in self._attributes.items() if not is_standard_attribute(name)}

    def replace(self, **changes) -> typing_extensions.Self:
        """Get a completed descriptor with *changes* applied on top of this one."""
        return normalize({**self._attributes, **changes})


def complete_property_descriptor(attributes: Attributes) -> PropertyDescriptor:
    """Validate *attributes* and fill in the defaults for its kind.

    Non-standard attributes are not copied. See :py:func:`normalize`.
    """
    desc = to_property_descriptor(attributes)
    if is_data_descriptor(desc):
        desc.setdefault("value", None)
        desc.setdefault("writable", False)
    elif is_accessor_descriptor(desc):
        desc.setdefault("get", None)
        desc.setdefault("set", None)
    desc.setdefault("enumerable", False)
    desc.setdefault("configurable", False)
    return PropertyDescriptor(desc)


@typing.overload
def normalize(attributes: None) -> None:
    ...


@typing.overload
def normalize(attributes: Attributes) -> PropertyDescriptor:
    ...


def normalize(attributes):
    """Get a fresh, complete property descriptor for *attributes*.

    Missing standard attributes are filled in with the defaults for the descriptor kind:
    ``value=None, writable=False`` for data descriptors, ``get=None, set=None`` for
    accessor descriptors, and ``enumerable=False, configurable=False`` for every kind.
    Any non-standard attributes of *attributes* are copied over unchanged.

    If *attributes* is None (no such property), returns None.

    Raises:
        ValidationError: see :py:func:`to_property_descriptor`.
    """
    if attributes is None:
        return None
    desc = dict(complete_property_descriptor(attributes))
    for name, value in attributes.items():
        if not is_standard_attribute(name):
            desc[name] = value
    return PropertyDescriptor(desc)
