"""Exceptions thrown by virtualobjects are catchable as virtualobjects.VirtualObjectsError.

Additional common exceptions are defined in this module.
virtualobjects submodules may define additional exceptions, but all will be derived
from exceptions specified in virtualobjects.exceptions.

Operations that are *declined* by policy (writing a non-writable property, deleting a
non-configurable property, sealing a non-extensible target, ...) do not raise. They
return ``False`` and the caller is responsible for checking the result. Exceptions are
reserved for operations that cannot be performed at all.
"""

import logging as _logging

logger = _logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class VirtualObjectsError(Exception):
    """Base exception for virtualobjects package errors.

    Users should be able to use this base class to catch errors
    emitted by virtualobjects.
    """


class ValidationError(VirtualObjectsError, TypeError):
    """A property descriptor record is malformed.

    Raised when the record is not a mapping, when it mixes data and accessor
    attributes, or when *get* or *set* is neither None nor callable.
    """


class MissingPrimitiveError(VirtualObjectsError, NotImplementedError):
    """A primitive operation was reached that the handler does not implement.

    Handlers derived from :py:class:`~virtualobjects.handlers.VirtualHandler` must
    override every primitive operation that their derived operations will reach.
    """

    def __init__(self, operation: str):
        super().__init__(f"{operation} not implemented")
        self.operation = operation


class RevokedError(VirtualObjectsError, TypeError):
    """An operation was attempted on a revoked virtual entity."""


class CyclicChainError(VirtualObjectsError):
    """The delegation chain loops back on itself or exceeds the configured depth."""
