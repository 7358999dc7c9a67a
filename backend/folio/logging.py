"""
Logging configuration for the Folio store.

Every module logs under the ``folio`` namespace (``folio.storage.repository``,
``folio.services.trash`` ...). Only that subtree is configured, so embedding
the store in another application leaves the host's root logger alone.
"""

import logging
import sys

ROOT_LOGGER = 'folio'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: bool = False) -> logging.Logger:
    """
    Attach a stdout handler to the ``folio`` logger and set its level.

    Safe to call more than once; the handler is only added the first time.

    :param debug: Log at DEBUG level instead of INFO
    :type debug: bool
    :return: The ``folio`` logger
    :rtype: logging.Logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not any(getattr(h, '_folio_handler', False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._folio_handler = True
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    :param name: Dotted module path below ``folio``
    :type name: str
    :return: Logger instance for the specified module
    :rtype: logging.Logger
    """
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
