"""Host object model.

Objects in this model are property tables with an explicit prototype link and an
extensibility flag. There are two kinds:

* *ordinary* objects (:py:class:`OrdinaryObject` and :py:class:`FunctionObject`)
  implement the primitive internal methods directly, and
* *virtual entities* (:py:class:`VirtualEntity`) route every operation to a handler.

Use :py:mod:`virtualobjects.reflect` to perform operations on either kind. Both kinds
also support Python item syntax::

    obj = OrdinaryObject({"foo": 42})
    obj["foo"]          # reflect.get(obj, "foo")
    obj["bar"] = 1      # reflect.set(obj, "bar", 1), TypeError if declined
    del obj["bar"]      # reflect.delete_property(obj, "bar"), TypeError if declined
    "foo" in obj        # reflect.has(obj, "foo")
    list(obj)           # reflect.enumerate(obj)

Reading an absent property yields None rather than raising `KeyError`.

Functions are Python callables that take the *this* binding as their first
positional argument, e.g. ``lambda this, value: ...``. :py:class:`FunctionObject`
wraps such a callable in an object that can carry properties and be constructed.
"""
from __future__ import annotations

__all__ = (
    "AbstractObject",
    "FunctionObject",
    "OrdinaryObject",
    "VirtualEntity",
)

import abc
import logging
import math
import typing

from virtualobjects import descriptors
from virtualobjects import reflect
from virtualobjects._types import Arguments
from virtualobjects._types import Attributes
from virtualobjects._types import PropertyKey
from virtualobjects.descriptors import PropertyDescriptor
from virtualobjects.exceptions import RevokedError

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


def same_value(a, b) -> bool:
    """Whether *a* and *b* count as the same value of a non-writable property.

    Values of different types always differ, so ``1``, ``1.0`` and ``True`` are three
    distinct values. NaN is the same value as NaN, and ``0.0`` differs from ``-0.0``.
    """
    if type(a) is not type(b):
        return False
    if a is b:
        return True
    if isinstance(a, float):
        if math.isnan(a) and math.isnan(b):
            return True
        if a == 0.0 and b == 0.0:
            return math.copysign(1.0, a) == math.copysign(1.0, b)
    return bool(a == b)


class ItemAccess:
    """Python item syntax for the fundamental object operations."""

    def __getitem__(self, key):
        return reflect.get(self, key, self)

    def __setitem__(self, key, value):
        if not reflect.set(self, key, value, self):
            raise TypeError(f"Cannot assign to property {repr(key)} of {repr(self)}.")

    def __delitem__(self, key):
        if not reflect.delete_property(self, key):
            raise TypeError(f"Cannot delete property {repr(key)} of {repr(self)}.")

    def __contains__(self, key):
        return reflect.has(self, key)

    def __iter__(self):
        return iter(reflect.enumerate(self))


class AbstractObject(abc.ABC):
    """Internal methods of an object that holds its own properties.

    Derived behavior (property lookup through the prototype chain, assignment,
    enumeration, ...) is not implemented here. :py:mod:`virtualobjects.reflect`
    provides it in terms of these methods.
    """

    @abc.abstractmethod
    def get_own_property(self, key: PropertyKey) -> typing.Optional[PropertyDescriptor]:
        ...

    @abc.abstractmethod
    def own_property_keys(self) -> typing.List[PropertyKey]:
        ...

    def own_property_names(self) -> typing.List[str]:
        return [key for key in self.own_property_keys() if isinstance(key, str)]

    @abc.abstractmethod
    def get_prototype(self) -> typing.Optional[typing.Any]:
        ...

    @abc.abstractmethod
    def set_prototype(self, proto) -> bool:
        ...

    @abc.abstractmethod
    def define_own_property(self, key: PropertyKey, attributes: Attributes) -> bool:
        ...

    @abc.abstractmethod
    def delete(self, key: PropertyKey) -> bool:
        ...

    @abc.abstractmethod
    def prevent_extensions(self) -> bool:
        ...

    @abc.abstractmethod
    def is_extensible(self) -> bool:
        ...


class OrdinaryObject(ItemAccess, AbstractObject):
    """An object with a property table, a prototype link and an extensibility flag.

    Args:
        values: Initial properties. Each becomes a writable, enumerable, configurable
            data property, in iteration order.
        prototype: The next object in the delegation chain, or None.
    """

    def __init__(self, values: typing.Optional[typing.Mapping[PropertyKey, typing.Any]] = None, *, prototype=None):
        self._properties: typing.Dict[PropertyKey, PropertyDescriptor] = {}
        self._prototype = None
        self._extensible = True
        if prototype is not None and not self.set_prototype(prototype):
            raise TypeError(f"Cannot use {repr(prototype)} as a prototype.")
        if values is not None:
            for key, value in values.items():
                self._properties[key] = descriptors.normalize(
                    {"value": value, "writable": True, "enumerable": True, "configurable": True}
                )

    def __repr__(self):
        return f"<{self.__class__.__name__} keys={repr(list(self._properties))}>"

    def get_own_property(self, key):
        return self._properties.get(key)

    def own_property_keys(self):
        return list(self._properties)

    def get_prototype(self):
        return self._prototype

    def set_prototype(self, proto) -> bool:
        if proto is not None and not reflect.is_object(proto):
            raise TypeError(f"Object prototype may only be an object or None: {repr(proto)}")
        if proto is self._prototype:
            return True
        if not self._extensible:
            return False
        # Reject cycles among ordinary objects. A virtual entity ends the check:
        # its handler decides what its prototype is.
        p = proto
        while isinstance(p, AbstractObject):
            if p is self:
                return False
            p = p.get_prototype()
        self._prototype = proto
        return True

    def prevent_extensions(self) -> bool:
        self._extensible = False
        return True

    def is_extensible(self) -> bool:
        return self._extensible

    def delete(self, key) -> bool:
        current = self._properties.get(key)
        if current is None:
            return True
        if current.configurable:
            del self._properties[key]
            return True
        return False

    def define_own_property(self, key, attributes) -> bool:
        """Validate *attributes* against the current property and apply them.

        Follows the rules for non-configurable properties: they may not become
        configurable, change enumerability or kind, become writable again once
        non-writable, or change value or accessor functions while non-writable.
        """
        desc = descriptors.to_property_descriptor(attributes)
        extras = {name: value for name, value in attributes.items() if not descriptors.is_standard_attribute(name)}
        current = self._properties.get(key)
        if current is None:
            if not self._extensible:
                return False
            if descriptors.is_generic_descriptor(desc):
                desc.update(value=None, writable=False)
            self._properties[key] = descriptors.normalize({**desc, **extras})
            return True

        kind_change = not descriptors.is_generic_descriptor(desc) and (
            descriptors.is_accessor_descriptor(desc) != current.is_accessor()
        )
        if not current.configurable:
            if desc.get("configurable"):
                return False
            if "enumerable" in desc and desc["enumerable"] != current.enumerable:
                return False
            if kind_change:
                return False
            if current.is_accessor():
                if "get" in desc and desc["get"] is not current.getter:
                    return False
                if "set" in desc and desc["set"] is not current.setter:
                    return False
            elif not current.writable:
                if desc.get("writable"):
                    return False
                if "value" in desc and not same_value(desc["value"], current.value):
                    return False

        if kind_change:
            merged = {"enumerable": current.enumerable, "configurable": current.configurable, **desc}
        else:
            merged = {**current, **desc}
        self._properties[key] = descriptors.normalize({**merged, **extras})
        return True


class FunctionObject(OrdinaryObject):
    """A callable ordinary object.

    Wraps a Python callable whose first parameter is the *this* binding. The object
    owns a ``prototype`` property (writable, not enumerable, not configurable) holding
    the object that instances created by ``construct`` will delegate to.

    Args:
        function: ``function(this, *args)``
        instance_prototype: Value of the ``prototype`` property. A fresh
            `OrdinaryObject` by default.
        prototype: The function object's own prototype link.
    """

    def __init__(self, function: typing.Callable, *, instance_prototype=None, prototype=None):
        if not callable(function):
            raise TypeError(f"FunctionObject needs a callable. Got {repr(function)}.")
        super().__init__(prototype=prototype)
        self._function = function
        if instance_prototype is None:
            instance_prototype = OrdinaryObject()
        self.define_own_property(
            "prototype",
            {"value": instance_prototype, "writable": True, "enumerable": False, "configurable": False},
        )

    def __repr__(self):
        name = getattr(self._function, "__qualname__", repr(self._function))
        return f"<{self.__class__.__name__} {name}>"

    def __call__(self, *args):
        return reflect.apply(self, None, args)

    def call(self, this_arg, args: Arguments):
        return self._function(this_arg, *args)


class VirtualEntity(ItemAccess):
    """An object whose behavior is decided by a handler.

    Every operation performed on the entity (through :py:mod:`virtualobjects.reflect`
    or Python item syntax) is dispatched to the handler method of the same name, with
    the backing value (*target*) as the first argument. If the handler does not define
    the operation, it is performed on the target instead.

    Prefer :py:func:`virtualobjects.factory.create_entity` to instantiating directly.
    """

    def __init__(self, target, handler):
        if handler is None:
            raise TypeError("VirtualEntity needs a handler.")
        self._target = target
        self._handler = handler

    def __repr__(self):
        if self._handler is None:
            return f"<{self.__class__.__name__} (revoked)>"
        return f"<{self.__class__.__name__} handler={self._handler.__class__.__name__}>"

    def __call__(self, *args):
        return reflect.apply(self, None, args)

    @property
    def revoked(self) -> bool:
        return self._handler is None

    def revoke(self):
        """Permanently disable the entity. Idempotent."""
        if self._handler is not None:
            logger.debug(f"Revoking {repr(self)}.")
        self._target = None
        self._handler = None

    def dispatch(self, operation: str, *args):
        """Perform *operation* through the handler.

        Raises:
            RevokedError: if the entity has been revoked.
        """
        handler = self._handler
        if handler is None:
            raise RevokedError(f"Cannot perform '{operation}' on a revoked entity.")
        trap = getattr(handler, operation, None)
        if trap is None:
            return getattr(reflect, operation)(self._target, *args)
        return trap(self._target, *args)
