"""Test property descriptor validation and normalization."""
import logging

import pytest

from virtualobjects.descriptors import complete_property_descriptor
from virtualobjects.descriptors import DescriptorKind
from virtualobjects.descriptors import is_accessor_descriptor
from virtualobjects.descriptors import is_data_descriptor
from virtualobjects.descriptors import is_generic_descriptor
from virtualobjects.descriptors import normalize
from virtualobjects.descriptors import PropertyDescriptor
from virtualobjects.descriptors import to_property_descriptor
from virtualobjects.exceptions import ValidationError
from virtualobjects.exceptions import VirtualObjectsError

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


def getter(this):
    return 42


def setter(this, value):
    ...


def test_absent():
    assert normalize(None) is None
    assert not is_data_descriptor(None)
    assert not is_accessor_descriptor(None)
    assert not is_generic_descriptor(None)


def test_data_defaults():
    desc = normalize({"value": 1})
    assert desc.kind is DescriptorKind.DATA
    assert desc == {"value": 1, "writable": False, "enumerable": False, "configurable": False}
    assert desc.is_data()
    assert not desc.is_accessor()

    desc = normalize({"writable": True})
    assert desc.value is None
    assert desc.writable is True


def test_accessor_defaults():
    desc = normalize({"get": getter})
    assert desc.kind is DescriptorKind.ACCESSOR
    assert desc == {"get": getter, "set": None, "enumerable": False, "configurable": False}
    assert desc.getter is getter
    assert desc.setter is None
    assert desc.writable is None

    # Supplying an absent accessor function still makes an accessor descriptor.
    assert normalize({"set": None}).is_accessor()


def test_generic_stays_generic():
    desc = normalize({"enumerable": True})
    assert desc.is_generic()
    assert desc == {"enumerable": True, "configurable": False}
    assert desc.value is None
    assert normalize({}).is_generic()


def test_booleans_are_coerced():
    desc = normalize({"value": 0, "writable": 1, "enumerable": "yes", "configurable": []})
    assert desc.writable is True
    assert desc.enumerable is True
    assert desc.configurable is False
    # The value itself is never coerced.
    assert desc.value == 0


def test_extras_are_carried_over():
    desc = normalize({"value": 1, "owner": "alice", ("tag",): [1, 2]})
    assert desc["owner"] == "alice"
    assert desc.extras == {"owner": "alice", ("tag",): [1, 2]}
    # complete_property_descriptor keeps only the standard attributes.
    assert "owner" not in complete_property_descriptor({"value": 1, "owner": "alice"})
    # to_property_descriptor keeps only the standard attributes that were supplied.
    assert to_property_descriptor({"value": 1, "owner": "alice"}) == {"value": 1}


def test_normalize_is_idempotent():
    for attributes in (
        {"value": 1, "writable": True},
        {"get": getter, "set": setter, "enumerable": True},
        {"configurable": True},
        {"value": None, "note": "extra"},
    ):
        desc = normalize(attributes)
        again = normalize(desc)
        assert again == desc
        assert again is not desc


def test_normalize_does_not_modify_input():
    attributes = {"value": 1}
    normalize(attributes)
    assert attributes == {"value": 1}


def test_mixed_kinds():
    with pytest.raises(ValidationError):
        normalize({"value": 1, "get": getter})
    with pytest.raises(ValidationError):
        to_property_descriptor({"writable": True, "set": None})
    # Validation errors are package errors and type errors.
    with pytest.raises(TypeError):
        normalize({"value": 1, "get": getter})
    with pytest.raises(VirtualObjectsError):
        normalize({"value": 1, "get": getter})


def test_invalid_accessor_function():
    with pytest.raises(ValidationError, match="'get' attribute must be callable"):
        normalize({"get": 42})
    with pytest.raises(ValidationError, match="'set' attribute must be callable"):
        normalize({"set": "setter"})


def test_not_a_mapping():
    with pytest.raises(ValidationError):
        normalize([("value", 1)])
    with pytest.raises(ValidationError):
        to_property_descriptor(42)


def test_property_descriptor_mapping():
    desc = normalize({"value": 1, "writable": True})
    assert isinstance(desc, PropertyDescriptor)
    assert set(desc) == {"value", "writable", "enumerable", "configurable"}
    assert len(desc) == 4
    assert dict(desc) == {"value": 1, "writable": True, "enumerable": False, "configurable": False}
    with pytest.raises(TypeError):
        desc["value"] = 2
    assert "PropertyDescriptor" in repr(desc)


def test_replace():
    desc = normalize({"value": 1, "writable": True, "enumerable": True})
    frozen = desc.replace(writable=False, configurable=False)
    assert frozen.writable is False
    assert frozen.value == 1
    assert frozen.enumerable is True
    assert desc.writable is True
    with pytest.raises(ValidationError):
        desc.replace(get=getter)
