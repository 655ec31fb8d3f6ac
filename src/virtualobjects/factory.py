"""Create virtual entities from a handler class and a backing value.

Example::

    from virtualobjects import DelegatingHandler, OrdinaryObject
    from virtualobjects.factory import create_revocable_entity

    entity, revoke = create_revocable_entity(DelegatingHandler, OrdinaryObject({"x": 1}))
    assert entity["x"] == 1
    revoke()
    entity["x"]  # raises RevokedError

"""

__all__ = ("create_entity", "create_revocable_entity", "RevocableEntity")

import logging
import typing

from virtualobjects.objects import VirtualEntity

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class RevocableEntity(typing.NamedTuple):
    entity: VirtualEntity
    revoke: typing.Callable[[], None]


def create_entity(handler_class: type, backing_value, *args, **kwargs) -> VirtualEntity:
    """Get a virtual entity governed by a new ``handler_class(*args, **kwargs)``.

    Every operation on the entity is dispatched to the handler with *backing_value* as
    the target. Handlers derived from
    :py:class:`~virtualobjects.handlers.VirtualHandler` ignore the backing value, but
    one must still be supplied (``None`` is fine).

    Raises:
        TypeError: if *handler_class* is not a class.
    """
    if not isinstance(handler_class, type):
        raise TypeError(f"Expected a handler class. Got {repr(handler_class)}.")
    handler = handler_class(*args, **kwargs)
    entity = VirtualEntity(backing_value, handler)
    logger.debug(f"Created {repr(entity)} for {type(backing_value).__qualname__} target.")
    return entity


def create_revocable_entity(handler_class: type, backing_value, *args, **kwargs) -> RevocableEntity:
    """Like :py:func:`create_entity`, but also get a function that disables the entity.

    After ``revoke()``, every operation on the entity raises
    :py:class:`~virtualobjects.exceptions.RevokedError`. Calling ``revoke()`` again has
    no effect.
    """
    entity = create_entity(handler_class, backing_value, *args, **kwargs)
    return RevocableEntity(entity=entity, revoke=entity.revoke)
