import logging

__version__ = "0.1.0"

LOGGER = logging.getLogger(__name__)
