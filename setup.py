import sys

from setuptools import setup

# If the Python version is too low, developers will get a strange error when
# virtualobjects/__init__.py imports submodules that rely on recently-introduced
# standard library features (contextvars, dataclasses, typing.TypedDict).
_supported = True
if sys.version_info.major < 3:
    _supported = False
if sys.version_info.major == 3 and sys.version_info.minor < 8:
    _supported = False
if not _supported:
    raise RuntimeError('virtualobjects requires Python 3.8 or higher.')

# PEP-517 package details are in setup.cfg, but we keep this file for non-PEP-517 capable
# installations, including "editable" installations with `pip install -e` or `setup.py develop`
setup()
