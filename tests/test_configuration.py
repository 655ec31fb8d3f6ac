"""Test the runtime configuration."""
import contextvars
import logging

import pytest

from virtualobjects.configuration import Configuration
from virtualobjects.configuration import configuration
from virtualobjects.configuration import scoped_configuration

logger = logging.getLogger(__name__)
logger.debug("Importing {}".format(__name__))


def test_defaults():
    config = configuration()
    assert config == Configuration()
    assert config.max_chain_depth == 100
    assert config.deduplicate_enumeration is True
    assert configuration() is config


def test_set_configuration():
    config = configuration(max_chain_depth=5)
    assert config.max_chain_depth == 5
    assert configuration().max_chain_depth == 5
    # Fields that are not named return to their defaults.
    assert configuration(Configuration(deduplicate_enumeration=False)).max_chain_depth == 100
    assert configuration({"max_chain_depth": 7}).max_chain_depth == 7
    assert configuration().deduplicate_enumeration is True


def test_scoped_configuration():
    configuration(max_chain_depth=10)
    with scoped_configuration(deduplicate_enumeration=False) as config:
        assert config is configuration()
        assert config.max_chain_depth == 10
        assert config.deduplicate_enumeration is False
    assert configuration().deduplicate_enumeration is True
    assert configuration().max_chain_depth == 10


def test_scoped_configuration_restored_on_error():
    with pytest.raises(RuntimeError):
        with scoped_configuration(max_chain_depth=2):
            raise RuntimeError("abort")
    assert configuration().max_chain_depth == 100


def test_configuration_is_context_local():
    configuration(max_chain_depth=3)
    context = contextvars.Context()
    assert context.run(lambda: configuration().max_chain_depth) == 100
    assert configuration().max_chain_depth == 3


def test_invalid_configuration():
    with pytest.raises(ValueError):
        Configuration(max_chain_depth=0)
    with pytest.raises(TypeError):
        Configuration(max_chain_depth="10")
    with pytest.raises(TypeError):
        Configuration(max_chain_depth=True)
    with pytest.raises(TypeError):
        Configuration(unknown=1)
    with pytest.raises(ValueError):
        with scoped_configuration(max_chain_depth=-1):
            ...
    # A failed update leaves the active configuration alone.
    assert configuration() == Configuration()
