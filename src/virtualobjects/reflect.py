"""Perform the fundamental object operations on any object.

Each function takes the object as its first argument and works for both ordinary
objects and virtual entities:

* on a :py:class:`~virtualobjects.objects.VirtualEntity`, the operation is dispatched
  to the entity's handler;
* on an ordinary object, primitive operations use the object's internal methods, and
  derived operations run the same algorithms that
  :py:class:`~virtualobjects.handlers.DelegatingHandler` provides, applied to the
  object itself.

Function names match the handler operations, so a handler can fall back to this module
for any operation it does not want to customize.

Operations that may be declined by policy return a `bool`. Passing a value that is not
an object where an object is required raises `TypeError`.
"""
from __future__ import annotations

__all__ = (
    "apply",
    "construct",
    "define_property",
    "delete_property",
    "enumerate",
    "freeze",
    "get",
    "get_own_property_descriptor",
    "get_own_property_keys",
    "get_own_property_names",
    "get_prototype_of",
    "has",
    "has_own",
    "invoke",
    "is_extensible",
    "is_frozen",
    "is_object",
    "is_sealed",
    "keys",
    "prevent_extensions",
    "seal",
    "set",
    "set_prototype_of",
)

import functools
import logging
import typing

from virtualobjects import descriptors
from virtualobjects import handlers
from virtualobjects import objects
from virtualobjects._types import Arguments
from virtualobjects._types import Attributes
from virtualobjects._types import PropertyKey
from virtualobjects.descriptors import PropertyDescriptor

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))

# TODO(Python 3.9): Use functools.cache instead of lru_cache when Py 3.9 is required.
cache = getattr(functools, "cache", functools.lru_cache(maxsize=None))


@cache
def _ordinary() -> handlers.DelegatingHandler:
    """Behavior of ordinary objects: delegation to the object itself."""
    return handlers.DelegatingHandler()


def is_object(value) -> bool:
    return isinstance(value, (objects.AbstractObject, objects.VirtualEntity))


def _require_object(value, operation: str):
    if not is_object(value):
        raise TypeError(f"{operation} called on non-object {repr(value)}")


def _entity(value) -> typing.Optional[objects.VirtualEntity]:
    if isinstance(value, objects.VirtualEntity):
        return value
    _require_object(value, "reflect operation")
    return None


# Primitive operations


def get_own_property_descriptor(obj, key: PropertyKey) -> typing.Optional[PropertyDescriptor]:
    """Get the completed descriptor of the own property *key*, or None."""
    entity = _entity(obj)
    if entity is not None:
        return descriptors.normalize(entity.dispatch("get_own_property_descriptor", key))
    return obj.get_own_property(key)


def get_own_property_names(obj) -> typing.List[PropertyKey]:
    entity = _entity(obj)
    if entity is not None:
        return list(entity.dispatch("get_own_property_names"))
    return obj.own_property_names()


def get_own_property_keys(obj) -> typing.List[PropertyKey]:
    entity = _entity(obj)
    if entity is not None:
        return list(entity.dispatch("get_own_property_keys"))
    return obj.own_property_keys()


def get_prototype_of(obj):
    entity = _entity(obj)
    if entity is not None:
        return entity.dispatch("get_prototype_of")
    return obj.get_prototype()


def set_prototype_of(obj, proto) -> bool:
    if proto is not None and not is_object(proto):
        raise TypeError(f"Object prototype may only be an object or None: {repr(proto)}")
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("set_prototype_of", proto))
    return obj.set_prototype(proto)


def define_property(obj, key: PropertyKey, attributes: Attributes) -> bool:
    """Create or update the own property *key* from a partial descriptor.

    *attributes* is validated before the operation reaches the object. Non-standard
    attributes are passed through.

    Raises:
        ValidationError: if *attributes* is malformed.
    """
    entity = _entity(obj)
    desc = descriptors.to_property_descriptor(attributes)
    desc.update((name, value) for name, value in attributes.items() if not descriptors.is_standard_attribute(name))
    if entity is not None:
        return bool(entity.dispatch("define_property", key, desc))
    return obj.define_own_property(key, desc)


def delete_property(obj, key: PropertyKey) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("delete_property", key))
    return obj.delete(key)


def prevent_extensions(obj) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("prevent_extensions"))
    return obj.prevent_extensions()


def is_extensible(obj) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("is_extensible"))
    return obj.is_extensible()


def apply(function, this_arg, args: Arguments = ()):
    """Call *function* with *this_arg* bound as *this*.

    *function* may be a virtual entity, a `FunctionObject`, or a plain Python callable
    taking *this* as its first argument.
    """
    if isinstance(function, objects.VirtualEntity):
        return function.dispatch("apply", this_arg, tuple(args))
    if isinstance(function, objects.FunctionObject):
        return function.call(this_arg, tuple(args))
    if isinstance(function, objects.AbstractObject) or not callable(function):
        raise TypeError(f"{repr(function)} is not a function")
    return function(this_arg, *args)


# Derived operations


def has(obj, key: PropertyKey) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("has", key))
    return _ordinary().has(obj, key)


def has_own(obj, key: PropertyKey) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("has_own", key))
    return _ordinary().has_own(obj, key)


def get(obj, key: PropertyKey, receiver=None):
    """Read property *key*, looking through the delegation chain.

    *receiver* is the object the access originated from, and the *this* binding for
    getters found along the chain. Defaults to *obj*.
    """
    if receiver is None:
        receiver = obj
    entity = _entity(obj)
    if entity is not None:
        return entity.dispatch("get", key, receiver)
    return _ordinary().get(obj, key, receiver)


def set(obj, key: PropertyKey, value, receiver=None) -> bool:
    """Assign property *key*. Returns False if the assignment is declined.

    *receiver* is the object the assignment originated from. New properties are
    created on the receiver. Defaults to *obj*.
    """
    if receiver is None:
        receiver = obj
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("set", key, value, receiver))
    return _ordinary().set(obj, key, value, receiver)


def invoke(obj, key: PropertyKey, args: Arguments = (), receiver=None):
    """Call the method *key* of *obj*.

    Equivalent to reading the method with `get` and calling it with the receiver
    bound as *this*, except that a handler may choose a different binding.
    """
    if receiver is None:
        receiver = obj
    entity = _entity(obj)
    if entity is not None:
        return entity.dispatch("invoke", key, tuple(args), receiver)
    return _ordinary().invoke(obj, key, tuple(args), receiver)


def enumerate(obj) -> typing.List[PropertyKey]:
    """List the enumerable keys of *obj* and of its delegation chain."""
    entity = _entity(obj)
    if entity is not None:
        return list(entity.dispatch("enumerate"))
    return _ordinary().enumerate(obj)


def keys(obj) -> typing.List[PropertyKey]:
    """List the own enumerable property names of *obj*."""
    entity = _entity(obj)
    if entity is not None:
        return list(entity.dispatch("keys"))
    return _ordinary().keys(obj)


def construct(function, args: Arguments = ()):
    """Create a new instance with *function* as the constructor."""
    entity = _entity(function)
    if entity is not None:
        return entity.dispatch("construct", tuple(args))
    return _ordinary().construct(function, tuple(args))


def seal(obj) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("seal"))
    return _ordinary().seal(obj)


def freeze(obj) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("freeze"))
    return _ordinary().freeze(obj)


def is_sealed(obj) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("is_sealed"))
    return _ordinary().is_sealed(obj)


def is_frozen(obj) -> bool:
    entity = _entity(obj)
    if entity is not None:
        return bool(entity.dispatch("is_frozen"))
    return _ordinary().is_frozen(obj)
