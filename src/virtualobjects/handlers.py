"""Handler base classes for virtual entities.

A handler decides how a :py:class:`~virtualobjects.objects.VirtualEntity` responds to
the fundamental object operations. Subclass one of the strategies below and override
the primitive operations (see :py:mod:`virtualobjects.primitives`); the derived
operations (`has`, `get`, `set`, `enumerate`, `construct`, `seal`, ...) are computed
from the primitives and stay consistent with them.

The strategies differ in where primitives route by default and in which identity is
bound as *this* when derived operations run accessor functions or methods:

=====================  ==========================  =========================
strategy               default primitives          *this* for accessors
=====================  ==========================  =========================
`DelegatingHandler`    forward to the target       the receiver
`ForwardingHandler`    forward to the target       the target
`VirtualHandler`       raise MissingPrimitiveError the receiver
=====================  ==========================  =========================

Binding to the receiver (the entity the access originated from) lets a handler observe
updates that methods make through *this*, and lets the entity serve as the prototype of
other objects. Binding to the target is needed for backing values whose methods only
work when they run with their own identity, such as objects with private state. Such
entities should not serve as prototypes: methods found through them would operate on
the wrong object.

Example::

    class Logger(DelegatingHandler):
        def define_property(self, target, key, attributes):
            logger.info(f"updated {key}")
            return super().define_property(target, key, attributes)

    entity = Logger.proxy_for(OrdinaryObject({"foo": 42}))
    entity["foo"] = 43  # logs "updated foo"

"""
from __future__ import annotations

__all__ = (
    "DelegatingHandler",
    "ForwardingHandler",
    "InvocationContext",
    "VirtualHandler",
)

import enum
import logging
import typing

from virtualobjects import chain
from virtualobjects import objects
from virtualobjects import reflect
from virtualobjects._types import Arguments
from virtualobjects._types import Attributes
from virtualobjects._types import PropertyKey
from virtualobjects.configuration import configuration
from virtualobjects.descriptors import normalize
from virtualobjects.exceptions import MissingPrimitiveError
from virtualobjects.primitives import PrimitiveOperations

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class InvocationContext(enum.Enum):
    """Identity bound as *this* when a derived operation runs user code."""

    RECEIVER = "receiver"
    TARGET = "target"


class DelegatingHandler(PrimitiveOperations):
    """Forward primitive operations to the target; bind *this* to the receiver."""

    invocation_context: typing.ClassVar[InvocationContext] = InvocationContext.RECEIVER

    @classmethod
    def proxy_for(cls, target, *args, **kwargs) -> objects.VirtualEntity:
        """Create an entity for *target* governed by ``cls(*args, **kwargs)``."""
        from virtualobjects.factory import create_entity

        return create_entity(cls, target, *args, **kwargs)

    @classmethod
    def revocable_proxy_for(cls, target, *args, **kwargs):
        """Like `proxy_for`, but also get a function that revokes the entity."""
        from virtualobjects.factory import create_revocable_entity

        return create_revocable_entity(cls, target, *args, **kwargs)

    # Primitive operations

    def get_own_property_descriptor(self, target, key):
        return reflect.get_own_property_descriptor(target, key)

    def get_own_property_names(self, target):
        return reflect.get_own_property_names(target)

    def get_own_property_keys(self, target):
        return reflect.get_own_property_keys(target)

    def get_prototype_of(self, target):
        return reflect.get_prototype_of(target)

    def set_prototype_of(self, target, proto):
        return reflect.set_prototype_of(target, proto)

    def define_property(self, target, key, attributes):
        return reflect.define_property(target, key, attributes)

    def delete_property(self, target, key):
        return reflect.delete_property(target, key)

    def prevent_extensions(self, target):
        return reflect.prevent_extensions(target)

    def is_extensible(self, target):
        return reflect.is_extensible(target)

    def apply(self, target, this_arg, args):
        return reflect.apply(target, this_arg, args)

    # Derived operations

    def _context(self, target, receiver):
        if self.invocation_context is InvocationContext.TARGET:
            return target
        return receiver

    def _call(self, function, this_arg, args: Arguments):
        with chain.detached():
            return reflect.apply(function, this_arg, args)

    def has_own(self, target, key: PropertyKey) -> bool:
        desc = normalize(self.get_own_property_descriptor(target, key))
        return desc is not None

    def has(self, target, key: PropertyKey) -> bool:
        if self.has_own(target, key):
            return True
        proto = self.get_prototype_of(target)
        if proto is None:
            return False
        with chain.step(proto, "has", key):
            return reflect.has(proto, key)

    def get(self, target, key: PropertyKey, receiver):
        desc = normalize(self.get_own_property_descriptor(target, key))
        if desc is None:
            proto = self.get_prototype_of(target)
            if proto is None:
                return None
            with chain.step(proto, "get", key):
                return reflect.get(proto, key, receiver)
        if not desc.is_accessor():
            return desc.value
        if desc.getter is None:
            return None
        return self._call(desc.getter, self._context(target, receiver), ())

    def set(self, target, key: PropertyKey, value, receiver) -> bool:
        desc = normalize(self.get_own_property_descriptor(target, key))
        if desc is None:
            proto = self.get_prototype_of(target)
            if proto is not None:
                with chain.step(proto, "set", key):
                    return reflect.set(proto, key, value, receiver)
        elif desc.is_accessor():
            if desc.setter is None:
                return False
            self._call(desc.setter, self._context(target, receiver), (value,))
            return True
        elif not desc.writable:
            return False
        return self._set_on_receiver(target, key, value, receiver)

    def _set_on_receiver(self, target, key, value, receiver) -> bool:
        """Update or create property *key* on the receiver itself."""
        if not reflect.is_object(receiver):
            return False
        existing = reflect.get_own_property_descriptor(receiver, key)
        if existing is not None:
            if existing.is_accessor():
                if existing.setter is None:
                    return False
                self._call(existing.setter, self._context(target, receiver), (value,))
                return True
            if not existing.writable:
                return False
            return reflect.define_property(receiver, key, {"value": value})
        if not reflect.is_extensible(receiver):
            return False
        return reflect.define_property(
            receiver, key, {"value": value, "writable": True, "enumerable": True, "configurable": True}
        )

    def invoke(self, target, key: PropertyKey, args: Arguments, receiver):
        method = self.get(target, key, receiver)
        if method is None:
            raise TypeError(f"Property {repr(key)} is not a function.")
        return self._call(method, self._context(target, receiver), args)

    def keys(self, target) -> typing.List[PropertyKey]:
        return self._enumerable_names(target, self.get_own_property_names(target))

    def _enumerable_names(self, target, names) -> typing.List[PropertyKey]:
        result = []
        for name in names:
            desc = normalize(self.get_own_property_descriptor(target, name))
            if desc is not None and desc.enumerable:
                result.append(name)
        return result

    def enumerate(self, target) -> typing.List[PropertyKey]:
        names = self.get_own_property_names(target)
        result = self._enumerable_names(target, names)
        proto = self.get_prototype_of(target)
        if proto is None:
            return result
        with chain.step(proto, "enumerate"):
            inherited = reflect.enumerate(proto)
        if configuration().deduplicate_enumeration:
            shadowed = set(names)
            inherited = [name for name in inherited if name not in shadowed]
        return result + inherited

    def construct(self, target, args: Arguments):
        proto = self.get(target, "prototype", target)
        if reflect.is_object(proto):
            instance = objects.OrdinaryObject(prototype=proto)
        else:
            instance = objects.OrdinaryObject()
        result = self.apply(target, instance, args)
        if reflect.is_object(result):
            return result
        return instance

    def seal(self, target) -> bool:
        success = bool(self.prevent_extensions(target))
        if success:
            for key in self.get_own_property_keys(target):
                success = success and bool(self.define_property(target, key, {"configurable": False}))
        return success

    def freeze(self, target) -> bool:
        success = bool(self.prevent_extensions(target))
        if success:
            for key in self.get_own_property_keys(target):
                desc = normalize(self.get_own_property_descriptor(target, key))
                if desc is None:
                    continue
                # Writability does not apply to accessor properties.
                if desc.is_data():
                    attributes: Attributes = {"writable": False, "configurable": False}
                else:
                    attributes = {"configurable": False}
                success = success and bool(self.define_property(target, key, attributes))
        return success

    def is_sealed(self, target) -> bool:
        if self.is_extensible(target):
            return False
        for key in self.get_own_property_keys(target):
            desc = normalize(self.get_own_property_descriptor(target, key))
            if desc is not None and desc.configurable:
                return False
        return True

    def is_frozen(self, target) -> bool:
        if self.is_extensible(target):
            return False
        for key in self.get_own_property_keys(target):
            desc = normalize(self.get_own_property_descriptor(target, key))
            if desc is None:
                continue
            if desc.configurable or (desc.is_data() and desc.writable):
                return False
        return True


class ForwardingHandler(DelegatingHandler):
    """Forward primitive operations to the target; bind *this* to the target."""

    invocation_context = InvocationContext.TARGET


def _missing(operation: str):
    def primitive(self, target, *args):
        raise MissingPrimitiveError(operation)

    primitive.__name__ = operation
    primitive.__qualname__ = f"VirtualHandler.{operation}"
    primitive.__doc__ = f"Raise MissingPrimitiveError. Subclasses that reach {operation} must override it."
    return primitive


class VirtualHandler(DelegatingHandler):
    """A handler with no meaningful target.

    Every primitive operation raises
    :py:class:`~virtualobjects.exceptions.MissingPrimitiveError` until a subclass
    overrides it to route to whatever state the subclass maintains. Nothing is ever
    forwarded to the (placeholder) target by accident.
    """

    get_own_property_descriptor = _missing("get_own_property_descriptor")
    get_own_property_names = _missing("get_own_property_names")
    get_own_property_keys = _missing("get_own_property_keys")
    get_prototype_of = _missing("get_prototype_of")
    set_prototype_of = _missing("set_prototype_of")
    define_property = _missing("define_property")
    delete_property = _missing("delete_property")
    prevent_extensions = _missing("prevent_extensions")
    is_extensible = _missing("is_extensible")
    apply = _missing("apply")
