"""Package logger.

On import, a `logging.NullHandler` is attached to the 'virtualobjects' logger, so
records stay out of the handler of last resort unless the application configures
logging. To see the DEBUG records for entity creation and revocation, configuration
changes and detected delegation cycles::

    logging.getLogger('virtualobjects').setLevel(logging.DEBUG)
    logging.getLogger('virtualobjects').addHandler(logging.StreamHandler())

Submodules log to child loggers named after the module, such as
'virtualobjects.chain'.
"""

__all__ = ["logger"]

import logging

logger = logging.getLogger("virtualobjects")
logger.addHandler(logging.NullHandler(level=logging.DEBUG))
