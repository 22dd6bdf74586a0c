"""Minimal service container: named factories with share, protect and extend combinators."""
from __future__ import annotations

from .config import ConfigLoader, ContainerConfig, load_config
from .container import Container, ExtendFactory, Factory
from .exceptions import ConfigurationError, GimpleException, ServiceNotFoundError
from .result import Failure, Result, Success

__version__ = "0.1.0"

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "Container",
    "ContainerConfig",
    "ExtendFactory",
    "Factory",
    "Failure",
    "GimpleException",
    "Result",
    "ServiceNotFoundError",
    "Success",
    "load_config",
    "__version__",
]
