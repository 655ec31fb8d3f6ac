"""The primitive operations that every handler performs.

Derived operations (see :py:mod:`virtualobjects.handlers`) are expressed entirely in
terms of these. A handler customizes a virtual entity by overriding primitives; the
derived operations then stay consistent with the overrides for free.

Every primitive receives the backing value (the *target*) as its first argument.
Primitives never call derived operations.
"""

__all__ = ("PRIMITIVE_OPERATIONS", "PrimitiveOperations")

import abc
import logging
import typing

from virtualobjects._types import Arguments
from virtualobjects._types import Attributes
from virtualobjects._types import PropertyKey

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))

PRIMITIVE_OPERATIONS: typing.Tuple[str, ...] = (
    "get_own_property_descriptor",
    "get_own_property_names",
    "get_own_property_keys",
    "get_prototype_of",
    "set_prototype_of",
    "define_property",
    "delete_property",
    "prevent_extensions",
    "is_extensible",
    "apply",
)


class PrimitiveOperations(abc.ABC):
    """Interface for the primitive operations of a handler.

    Operations that can be declined by policy return a `bool` instead of raising.
    """

    @abc.abstractmethod
    def get_own_property_descriptor(self, target, key: PropertyKey) -> typing.Optional[Attributes]:
        """Describe the own property *key* of *target*.

        Returns:
            A (possibly partial) property descriptor, or None if there is no such
            own property. Callers normalize the result.
        """
        ...

    @abc.abstractmethod
    def get_own_property_names(self, target) -> typing.Sequence[PropertyKey]:
        """List the own property names (`str` keys) of *target*, in order."""
        ...

    @abc.abstractmethod
    def get_own_property_keys(self, target) -> typing.Sequence[PropertyKey]:
        """List all own property keys of *target*, in order."""
        ...

    @abc.abstractmethod
    def get_prototype_of(self, target):
        """Get the next object in the delegation chain of *target*, or None."""
        ...

    @abc.abstractmethod
    def set_prototype_of(self, target, proto) -> bool:
        ...

    @abc.abstractmethod
    def define_property(self, target, key: PropertyKey, attributes: Attributes) -> bool:
        """Create or update the own property *key* of *target* from a partial descriptor."""
        ...

    @abc.abstractmethod
    def delete_property(self, target, key: PropertyKey) -> bool:
        ...

    @abc.abstractmethod
    def prevent_extensions(self, target) -> bool:
        ...

    @abc.abstractmethod
    def is_extensible(self, target) -> bool:
        ...

    @abc.abstractmethod
    def apply(self, target, this_arg, args: Arguments):
        """Call *target* as a function with *this_arg* bound as *this*."""
        ...
