"""Runtime configuration for the virtual object protocol.

The configuration is held in a :py:class:`contextvars.ContextVar`, so threads and
asyncio tasks that copy the current context see the configuration that was active
when they were created.

Example::

    import virtualobjects.configuration

    # Report the raw, un-deduplicated enumeration of the delegation chain.
    with virtualobjects.configuration.scoped_configuration(deduplicate_enumeration=False):
        ...

"""
from __future__ import annotations

__all__ = (
    "configuration",
    "Configuration",
    "scoped_configuration",
)

import collections.abc
import contextlib
import contextvars
import dataclasses
import functools
import logging
import typing

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))

_configuration: contextvars.ContextVar[Configuration] = contextvars.ContextVar("_configuration")


@dataclasses.dataclass(frozen=True)
class Configuration:
    """Module configuration information.

    See also:
        * :py:func:`virtualobjects.configuration.configuration()`
        * :py:func:`virtualobjects.configuration.scoped_configuration()`
        * :py:func:`virtualobjects.chain.step()`
    """

    max_chain_depth: int = 100
    """Maximum number of prototype hops in a single delegation chain walk.

    Walks that take more hops raise :py:class:`~virtualobjects.exceptions.CyclicChainError`.
    """

    deduplicate_enumeration: bool = True
    """Drop inherited keys that are shadowed by own properties when enumerating.

    With ``False``, ``enumerate`` reports the raw concatenation of the own enumerable
    keys of every object in the delegation chain.
    """

    def __post_init__(self):
        if not isinstance(self.max_chain_depth, int) or isinstance(self.max_chain_depth, bool):
            raise TypeError(f"max_chain_depth must be an integer. Got {repr(self.max_chain_depth)}.")
        if self.max_chain_depth < 1:
            raise ValueError(f"max_chain_depth must be positive. Got {self.max_chain_depth}.")


@functools.singledispatch
def _set_configuration(*args, **kwargs) -> Configuration:
    """Replace the active configuration.

    Note this is a dispatch function. "Overloads" are defined in separate decorated
    functions for calls that provide a `Configuration` or a mapping of field values
    as the first (and only) positional argument.
    """
    assert len(args) != 0 or len(kwargs) != 0
    return _set_configuration(Configuration(*args, **kwargs))


@_set_configuration.register
def _(config: Configuration) -> Configuration:
    _configuration.set(config)
    logger.debug(f"Configured {repr(config)}.")
    return _configuration.get()


@_set_configuration.register
def _(fields: collections.abc.Mapping) -> Configuration:
    return _set_configuration(Configuration(**fields))


def configuration(*args, **kwargs) -> Configuration:
    """Get (and optionally set) the active configuration.

    With no arguments, returns the current configuration. If a configuration has
    not yet been set, a default `Configuration` is installed and returned.

    If arguments are provided, they are used to construct a new
    `Configuration` (or a `Configuration` instance may be provided directly),
    which replaces the active configuration.
    """
    if len(args) > 0:
        _set_configuration(*args, **kwargs)
    elif len(kwargs) > 0:
        _set_configuration(Configuration(**kwargs))
    elif _configuration.get(None) is None:
        _set_configuration(Configuration())
    return _configuration.get()


@contextlib.contextmanager
def scoped_configuration(**kwargs) -> typing.Iterator[Configuration]:
    """Temporarily override fields of the active configuration.

    Fields that are not named keep their current values. The previous configuration
    is restored when the context exits, even if an exception is raised.
    """
    config = dataclasses.replace(configuration(), **kwargs)
    token = _configuration.set(config)
    try:
        yield config
    finally:
        _configuration.reset(token)
