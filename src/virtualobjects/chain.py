"""Guard the walk along a delegation chain.

Derived operations recurse from an object to its prototype, and from there to the
prototype's prototype, until they find an own property or reach the end of the chain.
Nothing prevents a handler from reporting a prototype that leads back to an object
already visited, so every hop is taken through :py:func:`step`, which raises
:py:class:`~virtualobjects.exceptions.CyclicChainError` instead of letting the walk
exhaust the interpreter stack.

A walk is identified by the operation and the property key being resolved. Walk state
is kept in a :py:class:`contextvars.ContextVar`. User code invoked during a walk
(accessor functions and methods) runs :py:func:`detached` from the walk, so it may walk
the same chain again for its own purposes.
"""

__all__ = ("detached", "step")

import contextlib
import contextvars
import logging
import typing

from virtualobjects.configuration import configuration
from virtualobjects.exceptions import CyclicChainError

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class _Hop(typing.NamedTuple):
    operation: str
    key: typing.Any
    entity: typing.Any


_trail: contextvars.ContextVar = contextvars.ContextVar("_trail", default=())


@contextlib.contextmanager
def step(entity, operation: str, key=None):
    """Record a hop to *entity* for the walk resolving *key* with *operation*.

    Raises:
        CyclicChainError: if *entity* was already visited by the same walk, or if the
            walk exceeds the configured ``max_chain_depth``.
    """
    trail: typing.Tuple[_Hop, ...] = _trail.get()
    path = [hop.entity for hop in trail if hop.operation == operation and hop.key == key]
    if any(visited is entity for visited in path):
        logger.debug(f"Cycle detected while resolving {operation}({repr(key)}) after {len(path)} hops.")
        raise CyclicChainError(f"Delegation chain revisits {repr(entity)} while resolving {operation}({repr(key)}).")
    limit = configuration().max_chain_depth
    if len(path) >= limit:
        logger.debug(f"Walk for {operation}({repr(key)}) exceeded {limit} hops.")
        raise CyclicChainError(f"Delegation chain exceeds {limit} hops while resolving {operation}({repr(key)}).")
    token = _trail.set(trail + (_Hop(operation, key, entity),))
    try:
        yield
    finally:
        _trail.reset(token)


@contextlib.contextmanager
def detached():
    """Run the enclosed code with no walk in progress."""
    token = _trail.set(())
    try:
        yield
    finally:
        _trail.reset(token)
