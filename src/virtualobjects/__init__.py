"""virtualobjects - a meta-object protocol for virtual entities.

A *virtual entity* is an object whose behavior is decided by a *handler*. Handler
authors override a small set of primitive operations (describe an own property, list
own keys, read or change the prototype, define or delete a property, prevent
extensions, call) and inherit consistent derived operations (membership, property
read and write, enumeration, construction, sealing and freezing).

Three handler strategies are provided:

* :py:class:`DelegatingHandler` forwards primitives to the backing value and binds
  *this* to the entity the access started from.
* :py:class:`ForwardingHandler` forwards primitives and binds *this* to the backing
  value.
* :py:class:`VirtualHandler` forwards nothing. Subclasses implement the primitives
  they need over state of their own.

Entities, ordinary objects (:py:class:`OrdinaryObject`, :py:class:`FunctionObject`)
and the :py:mod:`virtualobjects.reflect` module form a small host object model in
which the protocol runs.

Example::

    import virtualobjects
    from virtualobjects import reflect

    class Logger(virtualobjects.DelegatingHandler):
        def define_property(self, target, key, attributes):
            print("updated", key)
            return super().define_property(target, key, attributes)

    entity = Logger.proxy_for(virtualobjects.OrdinaryObject({"foo": 42}))
    entity["foo"] = 43
    assert reflect.get(entity, "foo") == 43

"""
from __future__ import annotations

__all__ = (
    # handler strategies
    "DelegatingHandler",
    "ForwardingHandler",
    "VirtualHandler",
    "InvocationContext",
    # entity factory
    "create_entity",
    "create_revocable_entity",
    # host object model
    "FunctionObject",
    "OrdinaryObject",
    "VirtualEntity",
    # descriptors
    "normalize",
    "PropertyDescriptor",
    # errors
    "CyclicChainError",
    "MissingPrimitiveError",
    "RevokedError",
    "ValidationError",
    "VirtualObjectsError",
    "__version__",
)

from ._version import __version__
from .logger import logger
from .descriptors import normalize
from .descriptors import PropertyDescriptor
from .exceptions import CyclicChainError
from .exceptions import MissingPrimitiveError
from .exceptions import RevokedError
from .exceptions import ValidationError
from .exceptions import VirtualObjectsError
from .objects import FunctionObject
from .objects import OrdinaryObject
from .objects import VirtualEntity
from .handlers import DelegatingHandler
from .handlers import ForwardingHandler
from .handlers import InvocationContext
from .handlers import VirtualHandler
from .factory import create_entity
from .factory import create_revocable_entity

logger.debug("Imported {}".format(__name__))
