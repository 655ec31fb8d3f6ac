"""Configuration for pytest tests.

Custom command line options are added to the pytest configuration, but they must be
provided *after* all standard pytest options.

Enable more virtualobjects debugging output with ``--log-level=DEBUG`` (the default
in setup.cfg) and ``-o log_cli=true``.
"""
import logging

import pytest

import virtualobjects.configuration
from virtualobjects import OrdinaryObject

logger = logging.getLogger("pytest_config")
logger.setLevel(logging.DEBUG)


def pytest_addoption(parser):
    """Add command-line user options for the pytest invocation."""
    parser.addoption(
        "--exhaustive", action="store_true", default=False, help="run exhaustive coverage with extra tests"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "exhaustive: mark test to run only for exhaustive testing")


def pytest_collection_modifyitems(config, items):
    # Ref https://docs.pytest.org/en/latest/example/simple.html#control-skipping-of-tests-according-to-command-line-option  # noqa: E501
    skip_exhaustive = pytest.mark.skip(reason="use --exhaustive for more exhaustive testing")
    if not config.getoption("--exhaustive"):
        for item in items:
            if "exhaustive" in item.keywords:
                item.add_marker(skip_exhaustive)


@pytest.fixture(autouse=True)
def default_configuration():
    """Run every test with a fresh default configuration.

    Tests that change the configuration do not leak the change to later tests.
    """
    token = virtualobjects.configuration._configuration.set(virtualobjects.configuration.Configuration())
    try:
        yield virtualobjects.configuration.configuration()
    finally:
        virtualobjects.configuration._configuration.reset(token)


@pytest.fixture
def chain3():
    """Three ordinary objects, each delegating to the next.

    ``chain3[0]`` has own property "a", delegating to ``chain3[1]`` with "b", which
    delegates to ``chain3[2]`` with "c".
    """
    top = OrdinaryObject({"c": 3})
    middle = OrdinaryObject({"b": 2}, prototype=top)
    bottom = OrdinaryObject({"a": 1}, prototype=middle)
    logger.debug(f"chain3 fixture: {bottom} -> {middle} -> {top}")
    return bottom, middle, top
