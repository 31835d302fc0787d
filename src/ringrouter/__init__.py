"""Consistent-hashing request routing with simulated server failures.

.. include:: ../../README.md
"""
from loguru import logger

from .config import RingConfig
from .errors import ConfigurationError, NoServerAvailable, RingRouterError
from .ringrouter import RingRouter
from .server import Server

logger.disable("ringrouter")

__all__=[
    'ConfigurationError',
    'NoServerAvailable',
    'RingConfig',
    'RingRouter',
    'RingRouterError',
    'Server',
]
