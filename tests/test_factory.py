"""Test entity creation and revocation."""
import logging

import pytest

from virtualobjects import create_entity
from virtualobjects import create_revocable_entity
from virtualobjects import DelegatingHandler
from virtualobjects import OrdinaryObject
from virtualobjects import reflect
from virtualobjects import RevokedError
from virtualobjects import VirtualEntity
from virtualobjects import VirtualObjectsError
from virtualobjects.factory import RevocableEntity

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


class Tagged(DelegatingHandler):
    def __init__(self, tag, *, suffix=""):
        self.tag = tag + suffix

    def get_own_property_descriptor(self, target, key):
        if key == "tag":
            return {"value": self.tag}
        return super().get_own_property_descriptor(target, key)


def test_create_entity(caplog):
    target = OrdinaryObject({"x": 1})
    with caplog.at_level(logging.DEBUG, logger="virtualobjects"):
        entity = create_entity(Tagged, target, "a", suffix="b")
    assert isinstance(entity, VirtualEntity)
    assert entity["tag"] == "ab"
    assert entity["x"] == 1
    assert "Tagged" in repr(entity)
    assert any("Created" in record.getMessage() for record in caplog.records)


def test_handler_class_required():
    with pytest.raises(TypeError):
        create_entity(Tagged("a"), OrdinaryObject())
    with pytest.raises(TypeError):
        create_revocable_entity("Tagged", OrdinaryObject())
    with pytest.raises(TypeError):
        VirtualEntity(OrdinaryObject(), None)


def test_revocable_entity():
    target = OrdinaryObject({"x": 1})
    result = create_revocable_entity(DelegatingHandler, target)
    assert isinstance(result, RevocableEntity)
    entity, revoke = result
    assert entity["x"] == 1
    assert not entity.revoked

    revoke()
    assert entity.revoked
    with pytest.raises(RevokedError):
        entity["x"]
    with pytest.raises(RevokedError):
        reflect.get_own_property_descriptor(entity, "x")
    with pytest.raises(RevokedError):
        entity()
    # Revoked entities fail like type errors, and like package errors.
    with pytest.raises(TypeError):
        reflect.keys(entity)
    with pytest.raises(VirtualObjectsError):
        reflect.freeze(entity)
    # The target is untouched.
    assert target["x"] == 1


def test_revoke_is_idempotent(caplog):
    entity, revoke = DelegatingHandler.revocable_proxy_for(OrdinaryObject())
    with caplog.at_level(logging.DEBUG, logger="virtualobjects"):
        revoke()
        revoke()
    assert len([record for record in caplog.records if "Revoking" in record.getMessage()]) == 1
    assert "revoked" in repr(entity)
    with pytest.raises(RevokedError):
        reflect.is_extensible(entity)


def test_revoked_prototype():
    proto, revoke = create_revocable_entity(DelegatingHandler, OrdinaryObject({"inherited": 1}))
    child = OrdinaryObject({"own": 2}, prototype=proto)
    assert child["inherited"] == 1
    revoke()
    assert child["own"] == 2
    with pytest.raises(RevokedError):
        child["inherited"]


def test_package_logger():
    package_logger = logging.getLogger("virtualobjects")
    assert any(isinstance(handler, logging.NullHandler) for handler in package_logger.handlers)
    assert logging.getLogger("virtualobjects.factory").parent is package_logger
